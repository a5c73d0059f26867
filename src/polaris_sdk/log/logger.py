"""Polaris SDK logging - Structured logging with OTEL trace context.

Every SDK component logs through a named PolarisLogger. Records are
rendered as JSON with the current trace context injected, so SDK logs can be
correlated with the caller's spans.

Usage:
    from polaris_sdk.log import get_logger

    logger = get_logger("graphql")
    logger.trace("polaris/graphql.Request", operation="SdkCreateAwsAccount")
"""

import json
import logging
import sys
from datetime import datetime, timezone
from enum import IntEnum
from typing import Any

from opentelemetry import trace

from polaris_sdk.errors import create_error


class LogLevel(IntEnum):
    """Severity of a log entry, mapped onto stdlib logging levels."""

    TRACE = 5
    DEBUG = logging.DEBUG
    INFO = logging.INFO
    WARN = logging.WARNING
    ERROR = logging.ERROR
    FATAL = logging.CRITICAL


logging.addLevelName(LogLevel.TRACE, "TRACE")

_LEVEL_NAMES: dict[str, LogLevel] = {
    "trace": LogLevel.TRACE,
    "debug": LogLevel.DEBUG,
    "info": LogLevel.INFO,
    "warn": LogLevel.WARN,
    "warning": LogLevel.WARN,
    "error": LogLevel.ERROR,
    "fatal": LogLevel.FATAL,
}


def parse_log_level(level: str) -> LogLevel:
    """Parse a log level name, case-insensitively.

    Args:
        level: Level name, e.g. "debug" or "WARN"

    Returns:
        Matching LogLevel

    Raises:
        PolarisError: LOG_LEVEL_INVALID if the name is unknown
    """
    try:
        return _LEVEL_NAMES[level.strip().lower()]
    except (AttributeError, KeyError):
        raise create_error("LOG_LEVEL_INVALID", level=level) from None


# Attributes every LogRecord carries; anything else came in through extra.
_RECORD_ATTRIBUTES = frozenset(
    (
        "name", "msg", "args", "created", "filename", "funcName",
        "levelname", "levelno", "lineno", "module", "msecs",
        "pathname", "process", "processName", "relativeCreated",
        "stack_info", "exc_info", "exc_text", "thread", "threadName",
        "message", "taskName",
    )
)


class StructuredLogFormatter(logging.Formatter):
    """JSON formatter with trace context injection.

    Formats log records as JSON with:
    - timestamp (ISO 8601)
    - level
    - component (logger name)
    - message
    - trace_id (if available)
    - span_id (if available)
    - Additional fields from extra
    """

    def format(self, record: logging.LogRecord) -> str:
        """Format log record as JSON.

        Args:
            record: Log record to format

        Returns:
            JSON-formatted log string
        """
        log_data: dict[str, Any] = {
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "level": record.levelname,
            "component": record.name,
            "message": record.getMessage(),
        }

        span = trace.get_current_span()
        if span and span.is_recording():
            ctx = span.get_span_context()
            if ctx.is_valid:
                log_data["trace_id"] = format(ctx.trace_id, "032x")
                log_data["span_id"] = format(ctx.span_id, "016x")

        for key, value in record.__dict__.items():
            if key not in _RECORD_ATTRIBUTES:
                log_data[key] = value

        if record.exc_info:
            log_data["exception"] = self.formatException(record.exc_info)

        return json.dumps(log_data, default=str)


class PolarisLogger:
    """Structured logger with trace context support.

    Wraps Python logging with:
    - The TRACE level used for request/response dumps
    - Structured JSON output
    - Keyword fields instead of format arguments
    """

    def __init__(self, name: str, level: int = logging.INFO):
        """Initialize logger.

        Args:
            name: Logger name (component name)
            level: Logging level
        """
        self._logger = logging.getLogger(f"polaris.{name}")
        self._logger.setLevel(level)

        # Add JSON handler if not already configured
        if not self._logger.handlers:
            handler = logging.StreamHandler(sys.stderr)
            handler.setFormatter(StructuredLogFormatter())
            self._logger.addHandler(handler)

    @property
    def name(self) -> str:
        """Full name of the underlying logger."""
        return self._logger.name

    def set_level(self, level: int) -> None:
        """Set the minimum level written by this logger."""
        self._logger.setLevel(level)

    def is_enabled_for(self, level: int) -> bool:
        """Check whether a record at level would be written."""
        return self._logger.isEnabledFor(level)

    def _log(self, level: int, message: str, **kwargs: Any) -> None:
        """Log message with extra fields.

        Args:
            level: Log level
            message: Log message
            **kwargs: Additional fields to include
        """
        self._logger.log(level, message, extra=kwargs)

    def emit(self, level: int, message: str, **kwargs: Any) -> None:
        """Write a record whatever the logger level. Handler levels still apply.

        Args:
            level: Log level recorded on the entry
            message: Log message
            **kwargs: Additional fields to include
        """
        if self._logger.disabled:
            return
        record = self._logger.makeRecord(
            self._logger.name, level, "(unknown file)", 0, message, (), None, extra=kwargs
        )
        self._logger.handle(record)

    def trace(self, message: str, **kwargs: Any) -> None:
        """Log trace message."""
        self._log(LogLevel.TRACE, message, **kwargs)

    def debug(self, message: str, **kwargs: Any) -> None:
        """Log debug message."""
        self._log(logging.DEBUG, message, **kwargs)

    def info(self, message: str, **kwargs: Any) -> None:
        """Log info message."""
        self._log(logging.INFO, message, **kwargs)

    def warning(self, message: str, **kwargs: Any) -> None:
        """Log warning message."""
        self._log(logging.WARNING, message, **kwargs)

    def error(self, message: str, **kwargs: Any) -> None:
        """Log error message."""
        self._log(logging.ERROR, message, **kwargs)

    def fatal(self, message: str, **kwargs: Any) -> None:
        """Log fatal message. Does not exit the process."""
        self._log(logging.CRITICAL, message, **kwargs)

    def exception(self, message: str, **kwargs: Any) -> None:
        """Log exception with traceback."""
        self._logger.exception(message, extra=kwargs)


class DiscardLogger:
    """Logger that drops everything written to it."""

    name = "discard"

    def set_level(self, level: int) -> None:
        pass

    def is_enabled_for(self, level: int) -> bool:
        return False

    def emit(self, level: int, message: str, **kwargs: Any) -> None:
        pass

    def trace(self, message: str, **kwargs: Any) -> None:
        pass

    def debug(self, message: str, **kwargs: Any) -> None:
        pass

    def info(self, message: str, **kwargs: Any) -> None:
        pass

    def warning(self, message: str, **kwargs: Any) -> None:
        pass

    def error(self, message: str, **kwargs: Any) -> None:
        pass

    def fatal(self, message: str, **kwargs: Any) -> None:
        pass

    def exception(self, message: str, **kwargs: Any) -> None:
        pass


# Logger cache
_loggers: dict[str, PolarisLogger] = {}


def get_logger(name: str, level: int = logging.INFO) -> PolarisLogger:
    """Get or create a structured logger.

    Args:
        name: Logger name (component name)
        level: Logging level, only applied when the logger is created

    Returns:
        PolarisLogger instance
    """
    if name not in _loggers:
        _loggers[name] = PolarisLogger(name, level)
    return _loggers[name]


def set_log_level(level: int | str) -> None:
    """Set the level of every logger under the polaris namespace.

    Args:
        level: LogLevel, stdlib level number or level name
    """
    if isinstance(level, str):
        level = parse_log_level(level)
    logging.getLogger("polaris").setLevel(level)
    for logger in _loggers.values():
        logger.set_level(level)


def reset_loggers() -> None:
    """Reset logger cache (for testing)."""
    global _loggers
    _loggers = {}
