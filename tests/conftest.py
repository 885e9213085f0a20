import stat
import sys
import pytest
import yaml
from pathlib import Path
from mediaswap.config.models import AppConfig
from mediaswap.domain.models import MediaFile, MediaKind, SwapJob, SwapPaths
from mediaswap.infrastructure.event_bus import EventBus
from mediaswap.infrastructure.ffmpeg import build_job

# ============================================================================
# Configuration Fixtures
# ============================================================================

@pytest.fixture
def sample_config():
    """Returns a sample AppConfig object for testing."""
    return AppConfig(
        general={
            "fallback_workers": 5,
            "workers": None,
            "recursive": False,
            "queue_size": 0,
            "video_extensions": [".mkv"],
            "audio_extensions": [".m4a"],
            "audio_bitrate": "256k",
            "debug": False,
        }
    )

@pytest.fixture
def config_yaml_path(tmp_path):
    """Creates a temporary YAML config file."""
    conf_dir = tmp_path / "conf"
    conf_dir.mkdir()
    conf_file = conf_dir / "mediaswap.yaml"

    content = {
        'general': {
            'fallback_workers': 3,
            'recursive': True,
            'queue_size': 2,
            'video_extensions': ['mkv', 'WEBM'],
            'audio_extensions': ['m4a'],
            'audio_bitrate': '192k',
            'debug': False,
        }
    }

    with open(conf_file, 'w') as f:
        yaml.dump(content, f)

    return conf_file

# ============================================================================
# EventBus Fixtures
# ============================================================================

@pytest.fixture
def event_bus():
    """Returns a fresh EventBus instance."""
    return EventBus()

# ============================================================================
# Job Fixtures
# ============================================================================

@pytest.fixture
def make_job():
    """Factory building a SwapJob for a path, without touching the filesystem."""
    def _make(name: str, kind: MediaKind = MediaKind.VIDEO, bin_path: Path = Path("/usr/bin/ffmpeg")) -> SwapJob:
        return build_job(bin_path, MediaFile(path=Path("/media") / name, kind=kind))
    return _make

# ============================================================================
# File System Fixtures
# ============================================================================

@pytest.fixture
def media_dir(tmp_path):
    """Source directory with 2 videos, 2 audios and 1 non-eligible file."""
    src = tmp_path / "media"
    src.mkdir()
    for name in ["film.mkv", "show.mkv", "song.m4a", "podcast.m4a", "notes.txt"]:
        (src / name).write_bytes(b"dummy media content")
    return src

FAKE_TRANSCODER = """#!/bin/sh
# Mimics ffmpeg: the output path is the last argument.
for last; do :; done
case "$(basename "$last")" in
  *broken*)
    echo "Invalid data found when processing input" >&2
    exit 1
    ;;
esac
if [ -e "$last" ]; then
  echo "File '$last' already exists. Overwrite ? [y/N] Not overwriting - exiting" >&2
  exit 1
fi
: > "$last"
exit 0
"""

@pytest.fixture
def fake_transcoder(tmp_path):
    """Executable shell script standing in for ffmpeg (POSIX only)."""
    if sys.platform.startswith("win"):
        pytest.skip("Fake transcoder requires a POSIX shell")
    script = tmp_path / "bin" / "fake-ffmpeg"
    script.parent.mkdir()
    script.write_text(FAKE_TRANSCODER)
    script.chmod(script.stat().st_mode | stat.S_IXUSR | stat.S_IXGRP | stat.S_IXOTH)
    return script

@pytest.fixture
def swap_paths(fake_transcoder, media_dir):
    return SwapPaths(bin_path=fake_transcoder, src_path=media_dir)


def pytest_configure(config):
    """Register custom markers."""
    config.addinivalue_line(
        "markers", "integration: marks tests as integration tests"
    )
    config.addinivalue_line(
        "markers", "unit: marks tests as unit tests"
    )
