import subprocess
import logging
import time
from pathlib import Path
from typing import List, Optional, Tuple
from mediaswap.domain.models import (
    FailureKind, JobStatus, MediaFile, MediaKind, SwapFailure, SwapJob, SwapResult
)

# Printed by ffmpeg/avconv when the output exists and no -y/-n flag was given
OVERWRITE_PROMPT = "already exists. Overwrite ? [y/N]"
DESTINATION_EXISTS_MESSAGE = "mp4 file already exists"

DEFAULT_AUDIO_BITRATE = "256k"


def mp4_command(bin_path: Path, input_path: Path) -> Tuple[List[str], Path]:
    """Builds the container remux command (streams copied untouched)."""
    output_path = input_path.with_suffix(".mp4")
    cmd = [
        str(bin_path),
        "-i", str(input_path),
        "-codec", "copy",
        str(output_path),
    ]
    return cmd, output_path


def mp3_command(bin_path: Path, input_path: Path, audio_bitrate: str = DEFAULT_AUDIO_BITRATE) -> Tuple[List[str], Path]:
    """Builds the audio transcode command."""
    output_path = input_path.with_suffix(".mp3")
    cmd = [
        str(bin_path),
        "-i", str(input_path),
        "-codec:a", "libmp3lame",
        "-b:a", audio_bitrate,
        str(output_path),
    ]
    return cmd, output_path


def build_job(bin_path: Path, media_file: MediaFile, audio_bitrate: str = DEFAULT_AUDIO_BITRATE) -> SwapJob:
    if media_file.kind == MediaKind.VIDEO:
        cmd, output_path = mp4_command(bin_path, media_file.path)
    else:
        cmd, output_path = mp3_command(bin_path, media_file.path, audio_bitrate)
    return SwapJob(source_file=media_file, output_path=output_path, command=tuple(cmd))


def classify_outcome(returncode: Optional[int], stderr: str, error_text: str) -> Optional[SwapFailure]:
    """Maps a finished process to a failure, or None on success.

    The overwrite prompt is only visible in stderr, so a non-zero exit whose
    stderr contains it is reported with a fixed message instead of the raw error.
    """
    if returncode == 0:
        return None
    if OVERWRITE_PROMPT in stderr:
        return SwapFailure(kind=FailureKind.DESTINATION_EXISTS, message=DESTINATION_EXISTS_MESSAGE)
    return SwapFailure(kind=FailureKind.EXECUTION_ERROR, message=error_text)


class FFmpegAdapter:
    """Runs ffmpeg/avconv swap commands and classifies their outcome."""

    def __init__(self, debug: bool = False):
        self.debug = debug
        self.logger = logging.getLogger(__name__)

    def run(self, job: SwapJob) -> SwapResult:
        """Executes the job's command synchronously, capturing stdout and stderr."""
        filename = job.input_path.name
        start_time = time.monotonic()
        self.logger.info(f"SWAP_START: {filename} ({job.source_file.kind.value.lower()})")
        if self.debug:
            self.logger.debug(f"SWAP_CMD: {' '.join(job.command)}")

        try:
            # stdin closed: the overwrite prompt reads EOF and ffmpeg exits non-zero
            process = subprocess.run(
                list(job.command),
                stdin=subprocess.DEVNULL,
                capture_output=True,
                text=True,
                errors="replace",
            )
        except OSError as e:
            elapsed = time.monotonic() - start_time
            self.logger.error(f"SWAP_END: {filename} status=failed launch_error={e}")
            return SwapResult(
                job=job,
                status=JobStatus.FAILED,
                failure=SwapFailure(kind=FailureKind.EXECUTION_ERROR, message=str(e)),
                duration_seconds=elapsed,
            )

        elapsed = time.monotonic() - start_time
        failure = classify_outcome(process.returncode, process.stderr or "", f"exit status {process.returncode}")
        status = JobStatus.COMPLETED if failure is None else JobStatus.FAILED

        if failure is None:
            self.logger.info(f"SWAP_END: {filename} status=completed elapsed={elapsed:.2f}s")
        else:
            self.logger.info(
                f"SWAP_END: {filename} status=failed reason={failure.kind.value} "
                f"code={process.returncode} elapsed={elapsed:.2f}s"
            )
            if self.debug and process.stderr:
                self.logger.debug(f"SWAP_STDERR: {filename}\n{process.stderr.rstrip()}")

        return SwapResult(
            job=job,
            status=status,
            failure=failure,
            returncode=process.returncode,
            stdout=process.stdout or "",
            stderr=process.stderr or "",
            duration_seconds=elapsed,
        )
