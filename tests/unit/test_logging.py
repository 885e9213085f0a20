"""Unit tests for logging infrastructure."""
import pytest
import logging
from mediaswap.infrastructure.logging import setup_logging


def _flush():
    for handler in logging.getLogger().handlers:
        handler.flush()


def test_setup_logging_creates_log_file(tmp_path):
    """Test that setup_logging creates log file."""
    log_file = tmp_path / "logs" / "swap.log"

    logger = setup_logging(log_file, debug=False)

    assert logger is not None
    assert isinstance(logger, logging.Logger)
    assert log_file.exists()


def test_setup_logging_creates_parent_dirs(tmp_path):
    """Test that missing parent directories are created."""
    log_file = tmp_path / "a" / "b" / "swap.log"

    setup_logging(log_file)

    assert log_file.parent.is_dir()


def test_setup_logging_debug_mode(tmp_path):
    """Test setup_logging in debug mode."""
    logger = setup_logging(tmp_path / "swap.log", debug=True)

    assert logger.getEffectiveLevel() == logging.DEBUG


def test_setup_logging_normal_mode(tmp_path):
    """Test setup_logging in normal mode."""
    logger = setup_logging(tmp_path / "swap.log", debug=False)

    assert logger.getEffectiveLevel() == logging.INFO


def test_setup_logging_format_includes_level(tmp_path):
    """Test that log format includes timestamp separator and level name."""
    log_file = tmp_path / "swap.log"
    logger = setup_logging(log_file, debug=False)

    logger.info("Info message")
    logger.warning("Warning message")
    logger.error("Error message")
    _flush()

    content = log_file.read_text()
    assert " - " in content
    assert "INFO" in content
    assert "WARNING" in content
    assert "ERROR" in content


def test_setup_logging_debug_messages(tmp_path):
    """Test that debug messages only appear in debug mode."""
    log_file = tmp_path / "swap.log"

    logger_normal = setup_logging(log_file, debug=False)
    logger_normal.debug("Debug message in normal mode")
    _flush()
    assert "Debug message in normal mode" not in log_file.read_text()

    logger_debug = setup_logging(log_file, debug=True)
    logger_debug.debug("Debug message in debug mode")
    _flush()
    assert "Debug message in debug mode" in log_file.read_text()


def test_module_loggers_write_to_file(tmp_path):
    """Test that records from pipeline modules reach the configured file."""
    log_file = tmp_path / "swap.log"
    setup_logging(log_file)

    logging.getLogger("mediaswap.pipeline.worker_pool").info("Worker pool started: workers=3")
    _flush()

    assert "Worker pool started: workers=3" in log_file.read_text()


def test_undecodable_filename_is_escaped_in_log(tmp_path, capsys):
    """Test that names carrying surrogate escapes are written without logging errors."""
    log_file = tmp_path / "swap.log"
    logger = setup_logging(log_file)

    logger.info("SWAP_START: caf\udce9.mkv (video)")
    _flush()

    assert "Logging error" not in capsys.readouterr().err
    assert b"SWAP_START: caf\\udce9.mkv" in log_file.read_bytes()
