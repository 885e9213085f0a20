"""Pipeline orchestrator wiring the dispatcher, worker pool and result sink.

Start order is sink, pool, dispatcher: the consumer is ready before any
result can be produced. The caller blocks until the sink has consumed the
closed results channel. There is no cancellation path; every dispatched job
runs to completion.
"""

import logging
from typing import Iterable
from mediaswap.domain.events import ProcessingFinished
from mediaswap.domain.models import SwapJob, SwapSummary
from mediaswap.infrastructure.event_bus import EventBus
from mediaswap.pipeline.channel import Channel
from mediaswap.pipeline.dispatcher import Dispatcher
from mediaswap.pipeline.result_sink import ResultSink
from mediaswap.pipeline.worker_pool import JobRunner, WorkerPool

DEFAULT_FALLBACK_WORKERS = 5


def compute_worker_count(file_count: int, fallback: int = DEFAULT_FALLBACK_WORKERS) -> int:
    """Half the file count, or `fallback` when that rounds down to zero."""
    workers = file_count // 2
    if workers == 0:
        workers = fallback
    return workers


class SwapOrchestrator:
    """Runs a sequence of swap jobs through the concurrent pipeline.

    Args:
        runner: Executes one job (FFmpegAdapter.run in production).
        event_bus: Receives JobSwapped/JobFailed and ProcessingFinished events.
        queue_size: Work channel capacity, 0 for unbounded.
    """

    def __init__(self, runner: JobRunner, event_bus: EventBus, queue_size: int = 0):
        self.runner = runner
        self.event_bus = event_bus
        self.queue_size = queue_size
        self.logger = logging.getLogger(__name__)

    def run(self, jobs: Iterable[SwapJob], workers: int) -> SwapSummary:
        work: Channel[SwapJob] = Channel(maxsize=self.queue_size)
        results: Channel = Channel()

        sink = ResultSink(results, self.event_bus)
        pool = WorkerPool(workers, self.runner, work, results)
        dispatcher = Dispatcher(jobs, work)

        sink.start()
        pool.start()
        dispatcher.start()

        sink.wait()

        summary = sink.summary
        self.logger.info(
            f"All files processed: total={summary.total}, swapped={summary.swapped}, failed={summary.failed}"
        )
        self.event_bus.publish(ProcessingFinished(summary=summary))
        return summary
