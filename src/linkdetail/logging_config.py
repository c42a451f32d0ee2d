"""
Logging configuration for LinkDetail.

Console logging for the CLI, optional rotating file logging, and a small
error counter used by the link-state watcher.
"""

import logging
import sys
from pathlib import Path
from logging.handlers import RotatingFileHandler
from typing import Any

from linkdetail.config import LOG_LEVELS, LinkDetailConfig, get_config
from linkdetail.exceptions import ConfigError

LOGGER_NAME = "linkdetail"
DEFAULT_LOG_PATH = Path.home() / ".linkdetail" / "logs" / "linkdetail.log"


class StructuredFormatter(logging.Formatter):
    """Pipe-separated formatter for file logs."""

    def format(self, record: logging.LogRecord) -> str:
        if not hasattr(record, 'module_name'):
            record.module_name = record.module
        if not hasattr(record, 'function_name'):
            record.function_name = record.funcName
        return super().format(record)


def setup_logging(
    level: str = "INFO",
    log_file: str | None = None,
    max_bytes: int = 5242880,  # 5MB
    backup_count: int = 3,
    enable_console: bool = True,
    enable_file: bool = False,
) -> logging.Logger:
    """
    Set up the ``linkdetail`` logger.

    Args:
        level: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        log_file: Log file path (defaults to ~/.linkdetail/logs/linkdetail.log)
        max_bytes: Maximum log file size before rotation
        backup_count: Number of rotated files to keep
        enable_console: Log to stderr
        enable_file: Log to a rotating file

    Returns:
        Configured package logger
    """
    level = level.upper()
    if level not in LOG_LEVELS:
        raise ConfigError(f"Unknown log level {level!r}")

    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(getattr(logging, level))
    logger.handlers.clear()

    if enable_console:
        # stderr keeps --json output on stdout clean
        console_handler = logging.StreamHandler(sys.stderr)
        console_handler.setLevel(getattr(logging, level))
        console_handler.setFormatter(logging.Formatter(
            fmt='%(asctime)s [%(levelname)s] %(name)s: %(message)s',
            datefmt='%Y-%m-%d %H:%M:%S'
        ))
        logger.addHandler(console_handler)

    if enable_file:
        log_path = Path(log_file) if log_file else DEFAULT_LOG_PATH
        log_path.parent.mkdir(parents=True, exist_ok=True)

        file_handler = RotatingFileHandler(
            log_path,
            maxBytes=max_bytes,
            backupCount=backup_count,
            encoding='utf-8'
        )
        file_handler.setLevel(logging.DEBUG)
        file_handler.setFormatter(StructuredFormatter(
            fmt='%(asctime)s | %(levelname)-8s | %(name)-24s | %(module_name)-12s | '
                '%(function_name)-28s | %(lineno)-4d | %(message)s',
            datefmt='%Y-%m-%d %H:%M:%S'
        ))
        logger.addHandler(file_handler)

    logger.propagate = False
    return logger


def configure_logging(
    debug: bool = False,
    log_to_file: bool | None = None,
    config: LinkDetailConfig | None = None,
) -> logging.Logger:
    """
    Configure logging from the CLI flags, falling back to the loaded config.

    Args:
        debug: Force DEBUG level
        log_to_file: Force file logging on or off
        config: Configuration to read defaults from
    """
    config = config or get_config()
    level = "DEBUG" if debug else config.log_level
    enable_file = config.log_to_file if log_to_file is None else log_to_file
    return setup_logging(level=level, enable_console=True, enable_file=enable_file)


class ErrorTracker:
    """Count errors by type so repeated failures stay visible."""

    def __init__(self):
        self.errors: dict[str, int] = {}
        self.logger = logging.getLogger(__name__)

    def log_error(
        self,
        error_type: str,
        message: str,
        exception: Exception | None = None,
        context: dict[str, Any] | None = None,
    ) -> None:
        """
        Log an error and bump its counter.

        Args:
            error_type: Type of error (e.g., 'invalid_address_format')
            message: Error message
            exception: Exception object if available
            context: Additional context data
        """
        self.errors[error_type] = self.errors.get(error_type, 0) + 1

        log_msg = f"{error_type}: {message}"
        if context:
            log_msg += f" | Context: {context}"

        if exception:
            self.logger.error(log_msg, exc_info=exception)
        else:
            self.logger.error(log_msg)

    def get_error_counts(self) -> dict[str, int]:
        """Get error counts by type."""
        return self.errors.copy()

    def reset_counts(self) -> None:
        self.errors.clear()


_error_tracker = ErrorTracker()


def track_error(
    error_type: str,
    message: str,
    exception: Exception | None = None,
    context: dict[str, Any] | None = None,
) -> None:
    """Track an error globally."""
    _error_tracker.log_error(error_type, message, exception, context)


def get_error_stats() -> dict[str, int]:
    """Get global error statistics."""
    return _error_tracker.get_error_counts()


def reset_error_stats() -> None:
    _error_tracker.reset_counts()
