"""
Human-readable log line formatting with correlation IDs.

Renders structured log events as single text lines with optional ANSI
colors, caller annotation and a per-task correlation ID for stitching
together the lines of one request.

Usage:
    from logline import get_logger, correlation_context

    log = get_logger("api")

    with correlation_context("req-42"):
        log.info("request handled", status=200, path="/items")

    # <req-42> 2024-05-01T12:00:00+02:00 [INFO] </items> <200> request handled
"""

from .config import FormatterConfig, load_config
from .context import (
    CorrelationRegistry,
    clear_correlation_id,
    correlation_context,
    current_unit_id,
    get_correlation_id,
    set_correlation_id,
)
from .exceptions import ConfigError
from .formatters import (
    JsonLinesFormatter,
    LineFormatter,
    TextFormatter,
    new_formatter,
)
from .levels import TRACE, Level
from .logger import LoglineLogger, get_logger
from .models import CallerInfo, LogEvent

__all__ = [
    "CallerInfo",
    "ConfigError",
    "CorrelationRegistry",
    "FormatterConfig",
    "JsonLinesFormatter",
    "Level",
    "LineFormatter",
    "LogEvent",
    "LoglineLogger",
    "TRACE",
    "TextFormatter",
    "clear_correlation_id",
    "correlation_context",
    "current_unit_id",
    "get_correlation_id",
    "get_logger",
    "load_config",
    "new_formatter",
    "set_correlation_id",
]
