"""Fixed-size pool of worker threads executing swap jobs.

Each worker loop pulls jobs from the work channel until it is closed and
drained, runs the job synchronously and publishes exactly one result per job.
The loops run on a ThreadPoolExecutor; a pool thread waits for every loop to
finish, shuts the executor down and only then closes the results channel, so
consumers see closure strictly after the last result.
"""

import concurrent.futures
import logging
import threading
import time
from typing import Callable, List, Optional
from mediaswap.domain.models import FailureKind, JobStatus, SwapFailure, SwapJob, SwapResult
from mediaswap.pipeline.channel import Channel

JobRunner = Callable[[SwapJob], SwapResult]


class WorkerPool:
    """Runs `workers` loops over the work channel.

    Args:
        workers: Number of worker threads (positive).
        runner: Executes one job and returns its result (e.g. FFmpegAdapter.run).
        work: Channel of SwapJob, closed by the dispatcher.
        results: Channel of SwapResult, closed by this pool.
    """

    def __init__(self, workers: int, runner: JobRunner, work: Channel, results: Channel):
        if workers < 1:
            raise ValueError(f"workers must be positive, got {workers}")
        self.workers = workers
        self.runner = runner
        self.work = work
        self.results = results
        self.logger = logging.getLogger(__name__)
        self.futures: List[concurrent.futures.Future] = []
        self._executor: Optional[concurrent.futures.ThreadPoolExecutor] = None
        self._pool_thread: Optional[threading.Thread] = None

    def start(self):
        self._executor = concurrent.futures.ThreadPoolExecutor(
            max_workers=self.workers, thread_name_prefix="swap-worker"
        )
        self.futures = [self._executor.submit(self._worker) for _ in range(self.workers)]
        self._pool_thread = threading.Thread(target=self._close_when_done, name="swap-pool", daemon=True)
        self._pool_thread.start()
        self.logger.info(f"Worker pool started: workers={self.workers}")

    def join(self, timeout: Optional[float] = None):
        if self._pool_thread:
            self._pool_thread.join(timeout)

    def _worker(self) -> int:
        processed = 0
        for job in self.work:
            self.results.put(self._run_job(job))
            processed += 1
        self.logger.debug(f"{threading.current_thread().name} exiting: processed={processed}")
        return processed

    def _run_job(self, job: SwapJob) -> SwapResult:
        start_time = time.monotonic()
        try:
            return self.runner(job)
        except Exception as e:
            # A broken runner still owes the sink one result for this job
            self.logger.exception(f"Runner failed for {job.input_path}")
            return SwapResult(
                job=job,
                status=JobStatus.FAILED,
                failure=SwapFailure(kind=FailureKind.EXECUTION_ERROR, message=str(e) or type(e).__name__),
                duration_seconds=time.monotonic() - start_time,
            )

    def _close_when_done(self):
        for future in concurrent.futures.as_completed(self.futures):
            try:
                future.result()
            except Exception as e:
                self.logger.error(f"Worker failed with exception: {e}")
        self._executor.shutdown(wait=True)
        self.results.close()
        self.logger.info("All workers exited, results channel closed")
