"""Domain events for the media swap pipeline.

Events flow through the EventBus and decouple the pipeline (dispatcher,
worker pool, result sink) from the console reporter.

See `infrastructure/event_bus.py` for the pub/sub mechanism.
"""

from pathlib import Path
from pydantic import BaseModel
from .models import SwapResult, SwapSummary


class Event(BaseModel):
    """Base class for all domain events.

    Events are validated Pydantic models. They are not frozen by default.
    """

    pass


class DiscoveryFinished(Event):
    """Emitted once the source path has been scanned.

    `files_to_process` counts only eligible (video or audio) files.
    """

    source: Path
    files_to_process: int
    videos: int = 0
    audios: int = 0


class ResultEvent(Event):
    """Base class for events carrying a finished job's result."""

    result: SwapResult


class JobSwapped(ResultEvent):
    """Emitted when the external tool exited successfully."""

    pass


class JobFailed(ResultEvent):
    """Emitted when a job failed; the pipeline keeps going."""

    error_message: str


class ProcessingFinished(Event):
    """Emitted after the results channel closed and every result was consumed."""

    summary: SwapSummary
