import shutil
import yaml
import typer
from pathlib import Path
from typing import List, Optional

from mediaswap.config.loader import load_config
from mediaswap.infrastructure.logging import setup_logging
from mediaswap.infrastructure.event_bus import EventBus
from mediaswap.infrastructure.file_scanner import FileScanner
from mediaswap.infrastructure.ffmpeg import FFmpegAdapter
from mediaswap.pipeline.job_source import JobSource
from mediaswap.pipeline.orchestrator import SwapOrchestrator, compute_worker_count
from mediaswap.ui.reporter import ConsoleReporter
from mediaswap.domain.events import DiscoveryFinished
from mediaswap.domain.models import MediaKind, SwapPaths

app = typer.Typer(help="Media Swapper - swap MKV/M4A containers to MP4/MP3 with ffmpeg or avconv")


def resolve_binary(value: str) -> Path:
    """Accepts a path to an executable or a bare name found on PATH."""
    path = Path(value).expanduser()
    if path.is_file():
        return path
    found = shutil.which(value)
    if found:
        return Path(found)
    raise FileNotFoundError(f"Binary not found: {value}")


def _describe_extensions(extensions: List[str]) -> str:
    return "/".join(ext.lstrip(".") for ext in extensions)


def _fail(message: str):
    typer.secho(message, fg=typer.colors.RED, err=True)
    raise typer.Exit(code=1)


@app.command()
def swap(
    bin_path: Optional[str] = typer.Option(None, "--bin", help="The location of the ffmpeg or avconv binary"),
    src_path: Optional[str] = typer.Option(
        None,
        "--src",
        help="The source directory of mkv/m4a files or an individual mkv/m4a file to swap to mp4/mp3"
    ),
    recursive: Optional[bool] = typer.Option(None, "--recursive/--no-recursive", help="Scan subdirectories of --src"),
    workers: Optional[int] = typer.Option(None, "--workers", "-w", help="Override number of workers"),
    config_path: Optional[Path] = typer.Option(None, "--config", "-c", help="Path to YAML config"),
    log_path: Optional[Path] = typer.Option(None, "--log-path", help="Path to log file (overrides config)"),
    debug: bool = typer.Option(False, "--debug/--no-debug", help="Enable verbose debug logging")
):
    """Swap every mkv/m4a file at --src to mp4/mp3, several files at a time."""
    if not bin_path:
        _fail("Error: The --bin flag must be specified")
    if not src_path:
        _fail("Error: The --src flag must be specified")

    try:
        config = load_config(config_path)
    except (FileNotFoundError, ValueError) as exc:
        _fail(f"Error: {exc}")
    except yaml.YAMLError as exc:
        _fail(f"Error: Invalid YAML in {config_path}: {exc}")

    # Apply CLI overrides
    if recursive is not None: config.general.recursive = recursive
    if log_path is not None: config.general.log_path = str(log_path)
    if debug: config.general.debug = True
    if workers is not None:
        if workers < 1:
            _fail("Error: --workers must be a positive integer")
        config.general.workers = workers

    try:
        paths = SwapPaths(bin_path=resolve_binary(bin_path), src_path=Path(src_path).expanduser())
    except FileNotFoundError as exc:
        _fail(f"Error: {exc}")

    try:
        logger = setup_logging(
            Path(config.general.log_path) if config.general.log_path else None,
            debug=config.general.debug,
        )
    except OSError as exc:
        _fail(f"Error: Cannot open log file: {exc}")
    logger.info(f"Media swapper started: bin={paths.bin_path}, src={paths.src_path}")
    logger.info(
        f"Config: recursive={config.general.recursive}, workers={config.general.workers}, "
        f"fallback_workers={config.general.fallback_workers}, queue_size={config.general.queue_size}, "
        f"debug={config.general.debug}"
    )

    try:
        scanner = FileScanner(
            video_extensions=config.general.video_extensions,
            audio_extensions=config.general.audio_extensions,
            recursive=config.general.recursive,
        )
        source = JobSource(paths, scanner, audio_bitrate=config.general.audio_bitrate)
        file_types = _describe_extensions(config.general.video_extensions + config.general.audio_extensions)

        try:
            files = source.discover()
        except OSError as exc:
            logger.error(f"Discovery failed: {exc}")
            _fail(f"Could not find {file_types} files: {exc}")
        if not files:
            logger.error(f"Discovery failed: no eligible files in {paths.src_path}")
            _fail(f"Could not find {file_types} files in {paths.src_path}")

        worker_count = config.general.workers or compute_worker_count(
            len(files), config.general.fallback_workers
        )
        logger.info(f"Workers: {worker_count} (files={len(files)})")

        bus = EventBus()
        ConsoleReporter(bus)
        bus.publish(DiscoveryFinished(
            source=paths.src_path,
            files_to_process=len(files),
            videos=sum(1 for f in files if f.kind == MediaKind.VIDEO),
            audios=sum(1 for f in files if f.kind == MediaKind.AUDIO),
        ))

        orchestrator = SwapOrchestrator(
            runner=FFmpegAdapter(debug=config.general.debug).run,
            event_bus=bus,
            queue_size=config.general.queue_size,
        )
        orchestrator.run(source.jobs(files), worker_count)

    except KeyboardInterrupt:
        typer.secho("\nSwap stopped by user (Ctrl+C)", fg=typer.colors.YELLOW, err=True)
        raise typer.Exit(code=130)

    except typer.Exit:
        raise

    except Exception as e:
        logger.exception("Fatal error")
        typer.secho(f"Fatal Error: {e}", fg=typer.colors.RED, err=True)
        raise typer.Exit(code=1)

if __name__ == "__main__":
    app()
