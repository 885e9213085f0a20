import logging
import threading
from typing import Optional
from mediaswap.domain.events import JobFailed, JobSwapped
from mediaswap.domain.models import SwapSummary
from mediaswap.infrastructure.event_bus import EventBus
from mediaswap.pipeline.channel import Channel

class ResultSink:
    """Single consumer of the results channel.

    Publishes one event per result in completion order and sets `done` once
    the channel has been closed and drained.
    """

    def __init__(self, results: Channel, event_bus: EventBus):
        self.results = results
        self.event_bus = event_bus
        self.summary = SwapSummary()
        self.done = threading.Event()
        self.logger = logging.getLogger(__name__)
        self._thread: Optional[threading.Thread] = None

    def start(self):
        self._thread = threading.Thread(target=self.consume, name="swap-results", daemon=True)
        self._thread.start()

    def consume(self):
        for result in self.results:
            self.summary.total += 1
            if result.succeeded:
                self.summary.swapped += 1
                event = JobSwapped(result=result)
            else:
                self.summary.failed += 1
                event = JobFailed(result=result, error_message=result.failure.message)
            try:
                self.event_bus.publish(event)
            except Exception:
                self.logger.exception(f"Subscriber failed for {result.job.input_path}")
        self.done.set()

    def wait(self, timeout: Optional[float] = None) -> bool:
        return self.done.wait(timeout)
