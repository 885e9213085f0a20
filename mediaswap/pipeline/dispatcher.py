import logging
import threading
from typing import Iterable, Optional
from mediaswap.domain.models import SwapJob
from mediaswap.pipeline.channel import Channel

class Dispatcher:
    """Publishes jobs onto the work channel in discovery order, then closes it."""

    def __init__(self, jobs: Iterable[SwapJob], work: Channel):
        self.jobs = jobs
        self.work = work
        self.dispatched = 0
        self.logger = logging.getLogger(__name__)
        self._thread: Optional[threading.Thread] = None

    def run(self):
        try:
            for job in self.jobs:
                # Blocks when the channel is bounded and full
                self.work.put(job)
                self.dispatched += 1
        finally:
            self.work.close()
            self.logger.debug(f"Dispatcher finished: dispatched={self.dispatched}")

    def start(self):
        self._thread = threading.Thread(target=self.run, name="swap-dispatcher", daemon=True)
        self._thread.start()

    def join(self, timeout: Optional[float] = None):
        if self._thread:
            self._thread.join(timeout)
