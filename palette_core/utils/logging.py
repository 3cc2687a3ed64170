"""
Palette Core Structured Logging
Centralized logging configuration using loguru.
"""
import sys
from typing import Dict, Any, Optional

from loguru import logger

from palette_core.config import config


class StructuredLogger:
    """Structured logger for conversion and extraction services."""

    def __init__(self, level: Optional[str] = None, sink=None):
        """Initialize structured logger."""
        self.level = level or config.LOG_LEVEL
        self._sink = sink if sink is not None else sys.stdout
        self._handler_id: Optional[int] = None
        self._configure_logger()

    def _configure_logger(self):
        """Replace the default loguru handler with a single structured sink."""
        logger.remove()
        self._handler_id = logger.add(
            self._sink,
            format="{time:YYYY-MM-DD HH:mm:ss} | {level} | {message} | {extra}",
            level=self.level,
            backtrace=False,
            diagnose=False,
            serialize=False  # Set to True for JSON output
        )

    def _emit(self, level: str, message: str, extra: Optional[Dict[str, Any]] = None,
              exc: Optional[BaseException] = None):
        bound = logger.bind(**extra) if extra else logger
        if exc is not None:
            bound = bound.opt(exception=exc)
        bound.log(level, message)

    def info(self, message: str, extra: Optional[Dict[str, Any]] = None):
        """Log info message with optional extra data."""
        self._emit("INFO", message, extra)

    def warning(self, message: str, extra: Optional[Dict[str, Any]] = None):
        """Log warning message with optional extra data."""
        self._emit("WARNING", message, extra)

    def error(self, message: str, extra: Optional[Dict[str, Any]] = None,
              exc: Optional[BaseException] = None):
        """Log error message, attaching the traceback of `exc` when given."""
        self._emit("ERROR", message, extra, exc)

    def debug(self, message: str, extra: Optional[Dict[str, Any]] = None):
        """Log debug message with optional extra data."""
        self._emit("DEBUG", message, extra)


# Global logger instance
_logger: Optional[StructuredLogger] = None


def get_logger() -> StructuredLogger:
    """Get or create global logger instance."""
    global _logger
    if _logger is None:
        _logger = StructuredLogger()
    return _logger
