from typing import List, Optional
from pydantic import BaseModel, Field, field_validator, model_validator

DEFAULT_LOG_PATH = "/tmp/mediaswap/swap.log"

def _normalize_extensions(values: List[str]) -> List[str]:
    normalized = []
    for ext in values:
        ext = ext.strip().lower()
        if not ext:
            continue
        normalized.append(ext if ext.startswith(".") else f".{ext}")
    return normalized

class GeneralConfig(BaseModel):
    fallback_workers: int = Field(default=5, gt=0)
    workers: Optional[int] = Field(default=None, gt=0)  # Overrides the derived count
    recursive: bool = False
    queue_size: int = Field(default=0, ge=0)  # 0 = unbounded work channel
    video_extensions: List[str] = Field(default_factory=lambda: [".mkv"])
    audio_extensions: List[str] = Field(default_factory=lambda: [".m4a"])
    audio_bitrate: str = "256k"
    log_path: Optional[str] = DEFAULT_LOG_PATH
    debug: bool = False

    @field_validator("video_extensions", "audio_extensions")
    @classmethod
    def validate_extensions(cls, v: List[str]) -> List[str]:
        normalized = _normalize_extensions(v)
        if not normalized:
            raise ValueError("At least one extension is required")
        return normalized

    @model_validator(mode="after")
    def validate_disjoint(self):
        overlap = set(self.video_extensions) & set(self.audio_extensions)
        if overlap:
            raise ValueError(
                f"Extensions cannot be both video and audio: {', '.join(sorted(overlap))}"
            )
        return self

class AppConfig(BaseModel):
    general: GeneralConfig = Field(default_factory=GeneralConfig)
