"""Centralized logging for the setup scripts.

Console output of the setup scripts stays plain ``print`` progress; this module
keeps a persistent record of every step and command in a rotating log file so
that a failed provisioning run can be inspected afterwards.

Key Features:
- Rotating file handlers with configurable size and backup count
- Structured logging format with timestamps and severity levels
- Centralized log directory (/var/log/ubuntu_setup/)
- Automatic fallback to stderr if file logging fails
"""

from __future__ import annotations

from logging import (
    Logger, Formatter, StreamHandler, getLogger, INFO, WARNING
)
from logging.handlers import RotatingFileHandler
from pathlib import Path
import sys
import subprocess

BYTES_PER_MB = 1024 * 1024

# Default log configuration
DEFAULT_LOG_MAX_BYTES = 5 * BYTES_PER_MB  # 5 MB
DEFAULT_LOG_BACKUP_COUNT = 5
DEFAULT_LOG_LEVEL = INFO
DEFAULT_LOG_DIR = "/var/log/ubuntu_setup"

# Parent logger; modules log through children such as "ubuntu_setup.commands"
SETUP_LOGGER_NAME = "ubuntu_setup"

# Format: timestamp - severity - logger - message
STANDARD_LOG_FORMAT = "%(asctime)s - %(levelname)-8s - %(name)s - %(message)s"
STANDARD_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


def _ensure_fallback_handler(logger: Logger, level: int = INFO) -> None:
    """Add a stderr handler as fallback if no handlers are configured.

    Args:
        logger: Logger instance to add fallback handler to
        level: Log level for the handler
    """
    if logger.handlers:
        return

    handler = StreamHandler(sys.stderr)
    handler.setLevel(level)
    handler.setFormatter(Formatter(STANDARD_LOG_FORMAT, STANDARD_DATE_FORMAT))
    logger.addHandler(handler)


def get_standard_formatter() -> Formatter:
    """Get the standard formatter for all setup logs."""
    return Formatter(STANDARD_LOG_FORMAT, STANDARD_DATE_FORMAT)


def get_rotating_logger(
    name: str,
    log_file: str,
    max_bytes: int = DEFAULT_LOG_MAX_BYTES,
    backup_count: int = DEFAULT_LOG_BACKUP_COUNT,
    level: int = DEFAULT_LOG_LEVEL
) -> Logger:
    """Return a logger configured with a rotating file handler.

    Args:
        name: Logger name
        log_file: Path to log file
        max_bytes: Maximum size of log file before rotation
        backup_count: Number of backup files to keep
        level: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)

    Returns:
        Configured Logger instance with rotating file handler
    """
    logger = getLogger(name)
    if not logger.handlers:
        logger.setLevel(level)
        logger.propagate = False

    log_path = Path(log_file)
    try:
        log_path.parent.mkdir(parents=True, exist_ok=True)
    except (OSError, IOError) as e:
        print(f"Error creating log directory {log_path.parent}: {e}", file=sys.stderr)
        _ensure_fallback_handler(logger, level)
        return logger

    log_file_path = str(log_path.resolve())
    for handler in logger.handlers:
        if isinstance(handler, RotatingFileHandler) and handler.baseFilename == log_file_path:
            return logger

    try:
        handler = RotatingFileHandler(log_file_path, maxBytes=max_bytes, backupCount=backup_count)
        handler.setLevel(level)
        handler.setFormatter(get_standard_formatter())
        logger.addHandler(handler)
    except (OSError, IOError) as e:
        print(f"Error opening log file {log_file_path}: {e}", file=sys.stderr)
        _ensure_fallback_handler(logger, level)
        return logger

    return logger


def get_setup_logger(script_name: str, log_dir: str = DEFAULT_LOG_DIR) -> Logger:
    """Configure the shared setup logger to write to <log_dir>/<script_name>.log.

    Child loggers (``ubuntu_setup.commands``, ``ubuntu_setup.steps``) propagate
    into it, so every module's records land in the same file.

    Example:
        logger = get_setup_logger('add_user')
        logger.info('Provisioning alice')
    """
    log_file = Path(log_dir) / f"{script_name}.log"
    return get_rotating_logger(SETUP_LOGGER_NAME, str(log_file))


def log_subprocess_result(
    logger: Logger,
    action: str,
    result: subprocess.CompletedProcess[str],
    success_level: int = INFO,
    failure_level: int = WARNING
) -> bool:
    """Log concise command result details and return success state."""
    if result.returncode == 0:
        logger.log(success_level, f"✓ {action}")
        return True

    stderr_raw = result.stderr or ""
    if isinstance(stderr_raw, bytes):
        stderr_raw = stderr_raw.decode(errors="replace")
    stderr = stderr_raw.strip().splitlines()
    if stderr:
        detail_lines = stderr[:3]
        details = " | ".join(detail_lines)
        if len(stderr) > 3:
            details += " | ..."
    else:
        details = f"exit code {result.returncode}"
    logger.log(failure_level, f"⚠ {action} failed: {details}")
    return False
