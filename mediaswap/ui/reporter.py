import threading
from typing import Optional
from rich.console import Console
from mediaswap.infrastructure.event_bus import EventBus
from mediaswap.domain.events import DiscoveryFinished, JobSwapped, JobFailed

class ConsoleReporter:
    """Subscribes to EventBus and prints one status line per finished job.

    Markup, emoji codes and highlighting are off so paths and tool messages print verbatim.
    """

    def __init__(self, bus: EventBus, console: Optional[Console] = None):
        self.bus = bus
        self.console = console or Console(markup=False, highlight=False, emoji=False, soft_wrap=True)
        self._lock = threading.Lock()
        self._setup_subscriptions()

    def _setup_subscriptions(self):
        self.bus.subscribe(DiscoveryFinished, self.on_discovery_finished)
        self.bus.subscribe(JobSwapped, self.on_job_swapped)
        self.bus.subscribe(JobFailed, self.on_job_failed)

    def _print(self, line: str):
        with self._lock:
            self.console.print(line, markup=False, highlight=False, emoji=False, soft_wrap=True)

    def on_discovery_finished(self, event: DiscoveryFinished):
        self._print(f"Swapping {event.files_to_process} videos:")

    def on_job_swapped(self, event: JobSwapped):
        self._print(f" - Swapped: {event.result.job.input_path}")

    def on_job_failed(self, event: JobFailed):
        self._print(f" - Failed: {event.result.job.input_path}: {event.error_message}")
