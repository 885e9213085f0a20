import os
from pathlib import Path
from typing import List, Generator, Optional
from mediaswap.domain.models import MediaFile, MediaKind

class FileScanner:
    """Finds swappable video and audio files at a source path."""

    def __init__(self, video_extensions: List[str], audio_extensions: List[str], recursive: bool = False):
        self.video_extensions = [(ext if ext.startswith(".") else f".{ext}").lower() for ext in video_extensions]
        self.audio_extensions = [(ext if ext.startswith(".") else f".{ext}").lower() for ext in audio_extensions]
        self.recursive = recursive

    def classify(self, path: Path) -> Optional[MediaKind]:
        """Returns VIDEO or AUDIO for a swappable file, None otherwise."""
        suffix = Path(path).suffix.lower()
        if suffix in self.video_extensions:
            return MediaKind.VIDEO
        if suffix in self.audio_extensions:
            return MediaKind.AUDIO
        return None

    def is_swappable_video(self, path: Path) -> bool:
        return self.classify(path) == MediaKind.VIDEO

    def is_swappable_audio(self, path: Path) -> bool:
        return self.classify(path) == MediaKind.AUDIO

    def scan(self, src: Path) -> List[MediaFile]:
        """Returns the swappable files at src, which may be a directory or a single file.

        Raises FileNotFoundError if src does not exist. OSErrors from listing
        the top-level directory propagate.
        """
        src = Path(src)
        if not src.exists():
            raise FileNotFoundError(f"Source path does not exist: {src}")

        if src.is_file():
            kind = self.classify(src)
            return [MediaFile(path=src, kind=kind)] if kind else []

        return list(self._scan_dir(src))

    def _scan_dir(self, root_dir: Path) -> Generator[MediaFile, None, None]:
        if not self.recursive:
            with os.scandir(root_dir) as it:
                # Ensure deterministic order
                entries = sorted(it, key=lambda e: e.name)
            for entry in entries:
                if not entry.is_file():
                    continue
                kind = self.classify(Path(entry.name))
                if kind:
                    yield MediaFile(path=root_dir / entry.name, kind=kind)
            return

        def _raise(err: OSError):
            # Unreadable subdirectories are skipped, an unreadable root is fatal
            if err.filename is None or Path(err.filename) == root_dir:
                raise err

        for root, dirs, files in os.walk(str(root_dir), onerror=_raise):
            root_path = Path(root)
            dirs.sort()
            files.sort()

            for file_name in files:
                kind = self.classify(Path(file_name))
                if kind:
                    yield MediaFile(path=root_path / file_name, kind=kind)
