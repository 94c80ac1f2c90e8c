"""
Structured logging utilities for the tartil library.

Provides a configured logger and helper functions for consistent logging.
"""

import logging
import sys
from typing import Optional


# Default format for tartil logs
DEFAULT_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
DEFAULT_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


def get_logger(name: str = "tartil") -> logging.Logger:
    """
    Get a logger instance for the given name.

    Args:
        name: Logger name (default: "tartil")

    Returns:
        Configured logger instance
    """
    return logging.getLogger(name)


def configure_logging(
    level: int = logging.INFO,
    format_string: Optional[str] = None,
    date_format: Optional[str] = None,
    stream: Optional[object] = None,
) -> logging.Logger:
    """
    Configure logging for the tartil library.

    Args:
        level: Logging level (default: INFO)
        format_string: Log format string (default: DEFAULT_FORMAT)
        date_format: Date format string (default: DEFAULT_DATE_FORMAT)
        stream: Output stream (default: sys.stderr)

    Returns:
        Configured root logger for tartil
    """
    logger = logging.getLogger("tartil")
    logger.setLevel(level)

    # Remove existing handlers
    logger.handlers.clear()

    handler = logging.StreamHandler(stream or sys.stderr)
    handler.setLevel(level)

    formatter = logging.Formatter(
        format_string or DEFAULT_FORMAT,
        datefmt=date_format or DEFAULT_DATE_FORMAT,
    )
    handler.setFormatter(formatter)

    logger.addHandler(handler)

    return logger


def enable_debug_logging() -> None:
    """Enable debug-level logging for the tartil library."""
    configure_logging(level=logging.DEBUG)


def disable_logging() -> None:
    """Disable all tartil logging."""
    logger = logging.getLogger("tartil")
    logger.handlers.clear()
    logger.addHandler(logging.NullHandler())


# Create default logger
_logger = get_logger()


def log_download_start(url: str, destination: str) -> None:
    """Log download start event."""
    _logger.info(f"Starting download: {url} -> {destination}")


def log_download_complete(destination: str, size: int, duration: float) -> None:
    """Log download complete event."""
    _logger.info(f"Download complete: {destination} ({size} bytes in {duration:.1f}s)")


def log_download_failed(url: str, reason: str) -> None:
    """Log download failure event."""
    _logger.warning(f"Download failed: {url} ({reason})")


def log_playback_handoff(path: str, title: str, tag: str) -> None:
    """Log a track being handed to the audio engine."""
    _logger.info(f"Handing off track: {title} ({path})")
    _logger.debug(f"Track tag: {tag}")


def log_state_transition(old: object, new: object) -> None:
    """Log a player state transition."""
    _logger.debug(f"Audio player state: {old} -> {new}")


def log_warning(message: str, **context) -> None:
    """Log a warning with optional context."""
    if context:
        ctx_str = ", ".join(f"{k}={v}" for k, v in context.items())
        _logger.warning(f"{message} ({ctx_str})")
    else:
        _logger.warning(message)


def log_error(message: str, exc_info: bool = False, **context) -> None:
    """Log an error with optional context and exception info."""
    if context:
        ctx_str = ", ".join(f"{k}={v}" for k, v in context.items())
        _logger.error(f"{message} ({ctx_str})", exc_info=exc_info)
    else:
        _logger.error(message, exc_info=exc_info)
