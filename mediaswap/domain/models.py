from enum import Enum
from pathlib import Path
from typing import Optional, Tuple
from pydantic import BaseModel, ConfigDict

class MediaKind(str, Enum):
    VIDEO = "VIDEO"  # mkv -> mp4 container remux
    AUDIO = "AUDIO"  # m4a -> mp3 transcode

class JobStatus(str, Enum):
    COMPLETED = "COMPLETED"
    FAILED = "FAILED"

class FailureKind(str, Enum):
    DESTINATION_EXISTS = "DESTINATION_EXISTS"
    EXECUTION_ERROR = "EXECUTION_ERROR"

class MediaFile(BaseModel):
    model_config = ConfigDict(frozen=True)

    path: Path
    kind: MediaKind

class SwapPaths(BaseModel):
    """Validated binary and source locations, built once at start-up."""
    model_config = ConfigDict(frozen=True)

    bin_path: Path
    src_path: Path

class SwapJob(BaseModel):
    model_config = ConfigDict(frozen=True)

    source_file: MediaFile
    output_path: Path
    command: Tuple[str, ...]

    @property
    def input_path(self) -> Path:
        return self.source_file.path

class SwapFailure(BaseModel):
    model_config = ConfigDict(frozen=True)

    kind: FailureKind
    message: str

class SwapResult(BaseModel):
    model_config = ConfigDict(frozen=True)

    job: SwapJob
    status: JobStatus
    failure: Optional[SwapFailure] = None
    returncode: Optional[int] = None
    stdout: str = ""
    stderr: str = ""
    duration_seconds: Optional[float] = None

    @property
    def succeeded(self) -> bool:
        return self.status == JobStatus.COMPLETED

class SwapSummary(BaseModel):
    total: int = 0
    swapped: int = 0
    failed: int = 0
