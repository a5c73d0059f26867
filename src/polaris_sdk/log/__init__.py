"""Polaris SDK logging."""

from .logger import (
    DiscardLogger,
    LogLevel,
    PolarisLogger,
    StructuredLogFormatter,
    get_logger,
    parse_log_level,
    reset_loggers,
    set_log_level,
)

__all__ = [
    "DiscardLogger",
    "LogLevel",
    "PolarisLogger",
    "StructuredLogFormatter",
    "get_logger",
    "parse_log_level",
    "reset_loggers",
    "set_log_level",
]
