import logging
from typing import Generator, List
from mediaswap.domain.models import MediaFile, SwapJob, SwapPaths
from mediaswap.infrastructure.file_scanner import FileScanner
from mediaswap.infrastructure.ffmpeg import build_job, DEFAULT_AUDIO_BITRATE

class JobSource:
    """Discovers swappable files and turns them into ready-to-run jobs."""

    def __init__(self, paths: SwapPaths, scanner: FileScanner, audio_bitrate: str = DEFAULT_AUDIO_BITRATE):
        self.paths = paths
        self.scanner = scanner
        self.audio_bitrate = audio_bitrate
        self.logger = logging.getLogger(__name__)

    def discover(self) -> List[MediaFile]:
        files = self.scanner.scan(self.paths.src_path)
        self.logger.info(f"Discovery finished: src={self.paths.src_path}, eligible={len(files)}")
        return files

    def jobs(self, files: List[MediaFile]) -> Generator[SwapJob, None, None]:
        """Yields one job per file, in discovery order."""
        for media_file in files:
            yield build_job(self.paths.bin_path, media_file, self.audio_bitrate)
