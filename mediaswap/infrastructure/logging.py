import logging
from pathlib import Path
from typing import Optional

from mediaswap.config.models import DEFAULT_LOG_PATH

def setup_logging(log_path: Optional[Path] = None, debug: bool = False) -> logging.Logger:
    """
    Setup logging configuration for media-swapper.

    Creates the log file's parent directory and routes all records to the file,
    keeping stdout free for the per-file report.
    Returns configured logger instance.

    Args:
        log_path: Path to log file (defaults to /tmp/mediaswap/swap.log)
        debug: If True, enable DEBUG level logging with command lines and tool output
    """
    log_file = Path(log_path) if log_path else Path(DEFAULT_LOG_PATH)
    log_file.parent.mkdir(parents=True, exist_ok=True)

    # Configure logging level
    level = logging.DEBUG if debug else logging.INFO

    logging.basicConfig(
        level=level,
        format='%(asctime)s - %(levelname)s - %(message)s',
        handlers=[logging.FileHandler(log_file, encoding='utf-8', errors='backslashreplace')],
        force=True  # Override any existing configuration
    )

    logger = logging.getLogger(__name__)
    logger.info(f"Logging initialized: {log_file} (debug={'ON' if debug else 'OFF'})")

    return logger
