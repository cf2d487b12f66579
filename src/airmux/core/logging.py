"""Structured logging for airmux."""

import logging
import sys
from enum import Enum
from pathlib import Path
from typing import Any, Optional

from pythonjsonlogger import jsonlogger


class LogLevel(str, Enum):
    """Log level enumeration."""

    DEBUG = "DEBUG"
    INFO = "INFO"
    WARNING = "WARNING"
    ERROR = "ERROR"
    CRITICAL = "CRITICAL"


def _make_formatter(json_output: bool) -> logging.Formatter:
    if json_output:
        return jsonlogger.JsonFormatter(
            "%(asctime)s %(levelname)s %(name)s %(message)s",
        )
    return logging.Formatter(
        "%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )


class StructuredLogger:
    """
    Structured logger with JSON output support and context tracking.

    Wraps a stdlib logger writing to stderr (and optionally a file). Extra
    keyword arguments become fields of the log record, which the JSON
    formatter emits as keys.
    """

    def __init__(
        self,
        name: str = "airmux",
        level: LogLevel = LogLevel.WARNING,
        json_output: bool = False,
        log_file: Optional[Path] = None,
    ):
        """
        Initialize structured logger.

        Args:
            name: Logger name
            level: Log level
            json_output: If True, output JSON-formatted logs
            log_file: Optional file path to write logs to
        """
        self.name = name
        self.level = level
        self.json_output = json_output
        self.log_file = log_file

        self.logger = logging.getLogger(name)
        self.logger.setLevel(getattr(logging, level.value))
        self.logger.propagate = False
        for handler in self.logger.handlers:
            handler.close()
        self.logger.handlers.clear()

        formatter = _make_formatter(json_output)

        console_handler = logging.StreamHandler(sys.stderr)
        console_handler.setFormatter(formatter)
        self.logger.addHandler(console_handler)

        if log_file:
            self.add_file_handler(log_file)

    def add_file_handler(self, log_file: Path) -> None:
        """Also write records to ``log_file``, creating its directory if needed."""
        log_file.parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(log_file)
        file_handler.setFormatter(_make_formatter(self.json_output))
        self.logger.addHandler(file_handler)
        self.log_file = log_file

    def _log_with_context(
        self,
        level: int,
        message: str,
        context: Optional[dict[str, Any]] = None,
        **kwargs: Any,
    ) -> None:
        if context:
            kwargs.update(context)
        self.logger.log(level, message, extra=kwargs or None)

    def debug(self, message: str, context: Optional[dict[str, Any]] = None, **kwargs: Any) -> None:
        """Log debug message."""
        self._log_with_context(logging.DEBUG, message, context, **kwargs)

    def info(self, message: str, context: Optional[dict[str, Any]] = None, **kwargs: Any) -> None:
        """Log info message."""
        self._log_with_context(logging.INFO, message, context, **kwargs)

    def warning(self, message: str, context: Optional[dict[str, Any]] = None, **kwargs: Any) -> None:
        """Log warning message."""
        self._log_with_context(logging.WARNING, message, context, **kwargs)

    def error(self, message: str, context: Optional[dict[str, Any]] = None, **kwargs: Any) -> None:
        """Log error message."""
        self._log_with_context(logging.ERROR, message, context, **kwargs)

    def log_stage(
        self,
        stage: str,
        status: str,
        duration_ms: Optional[float] = None,
        **kwargs: Any,
    ) -> None:
        """
        Log a processing stage (decode, prepare, check).

        Args:
            stage: Stage name
            status: Status ("started", "completed", "failed")
            duration_ms: Stage duration in milliseconds
            **kwargs: Additional metadata
        """
        context = {
            "event_type": "stage",
            "stage": stage,
            "status": status,
        }
        if duration_ms is not None:
            context["duration_ms"] = duration_ms
        context.update(kwargs)

        if status == "failed":
            self.warning(f"Stage {stage} failed", context=context)
        elif status == "completed":
            self.info(f"Stage {stage} completed", context=context)
        else:
            self.debug(f"Stage {stage} started", context=context)


# Global logger instance
_default_logger: Optional[StructuredLogger] = None


def get_logger(name: str = "airmux") -> StructuredLogger:
    """
    Get the process-wide structured logger, creating it with defaults if needed.

    Args:
        name: Logger name

    Returns:
        StructuredLogger instance
    """
    global _default_logger

    if _default_logger is None:
        _default_logger = StructuredLogger(name=name)
    return _default_logger


def configure_logging(
    level: str = "WARNING",
    json_output: bool = False,
    log_file: Optional[str] = None,
) -> StructuredLogger:
    """
    Configure global logging settings, replacing the current handlers.

    Args:
        level: Log level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        json_output: If True, output JSON-formatted logs
        log_file: Optional file path to write logs to

    Returns:
        Configured StructuredLogger instance
    """
    global _default_logger

    _default_logger = StructuredLogger(
        level=LogLevel[level.upper()],
        json_output=json_output,
        log_file=Path(log_file) if log_file else None,
    )
    return _default_logger
