"""
LoglineLogger - stdlib logger wired to the line formatter.
"""

import logging
import sys
from typing import Any, Optional, TextIO

from .config import FormatterConfig
from .formatters import LineFormatter, TextFormatter
from .levels import Level

# Cache of loggers by name
_loggers: dict[str, "LoglineLogger"] = {}


def get_logger(
    name: str,
    config: Optional[FormatterConfig] = None,
    formatter: Optional[LineFormatter] = None,
    stream: Optional[TextIO] = None,
    report_caller: bool = False,
) -> "LoglineLogger":
    """
    Get or create a LoglineLogger.

    Args:
        name: Logger name
        config: Formatter options (ignored when formatter is given)
        formatter: LineFormatter to share, e.g. for one correlation registry
        stream: Output stream (default: stderr)
        report_caller: Render the caller block

    Returns:
        LoglineLogger instance; the first call for a name wins.
    """
    if name not in _loggers:
        _loggers[name] = LoglineLogger(
            name,
            formatter=formatter or LineFormatter(config),
            stream=stream,
            report_caller=report_caller,
        )
    return _loggers[name]


class LoglineLogger:
    """
    Thin wrapper over logging.Logger that passes keyword arguments
    through as structured fields.
    """

    def __init__(
        self,
        name: str,
        formatter: Optional[LineFormatter] = None,
        stream: Optional[TextIO] = None,
        report_caller: bool = False,
    ):
        self.name = name
        self.formatter = formatter or LineFormatter()
        self._logger = logging.getLogger(f"logline.{name}")
        self._logger.setLevel(Level.TRACE.to_stdlib())
        self._logger.propagate = False  # Don't propagate to root logger

        # Clear existing handlers
        self._logger.handlers.clear()

        handler = logging.StreamHandler(stream or sys.stderr)
        handler.setFormatter(TextFormatter(
            line_formatter=self.formatter,
            report_caller=report_caller,
        ))
        self._logger.addHandler(handler)

    @property
    def stdlib_logger(self) -> logging.Logger:
        return self._logger

    def set_level(self, level: Level) -> None:
        self._logger.setLevel(level.to_stdlib())

    def log(self, level: Level, message: str, **fields: Any) -> None:
        """
        Log a message with structured fields.

        Args:
            level: Severity
            message: Message text (not %-interpolated)
            **fields: Event-specific data fields
        """
        self._log(level, message, fields)

    def _log(
        self,
        level: Level,
        message: str,
        fields: dict[str, Any],
        exc_info: Any = None,
    ) -> None:
        # stacklevel 3: _log <- public method <- call site
        self._logger.log(
            level.to_stdlib(),
            "%s",
            message,
            exc_info=exc_info,
            extra={"fields": fields, "logline_level": level},
            stacklevel=3,
        )

    def trace(self, message: str, **fields: Any) -> None:
        self._log(Level.TRACE, message, fields)

    def debug(self, message: str, **fields: Any) -> None:
        self._log(Level.DEBUG, message, fields)

    def info(self, message: str, **fields: Any) -> None:
        self._log(Level.INFO, message, fields)

    def warning(self, message: str, **fields: Any) -> None:
        self._log(Level.WARN, message, fields)

    def error(self, message: str, **fields: Any) -> None:
        self._log(Level.ERROR, message, fields)

    def fatal(self, message: str, **fields: Any) -> None:
        self._log(Level.FATAL, message, fields)

    def panic(self, message: str, **fields: Any) -> None:
        """Log at PANIC. Only logs; raising is up to the caller."""
        self._log(Level.PANIC, message, fields)

    def exception(self, error: Exception, message: str = "error", **fields: Any) -> None:
        """
        Log an exception at ERROR with its stack trace.

        Args:
            error: The exception to log
            message: What was happening
            **fields: Additional context
        """
        self._log(
            Level.ERROR,
            message,
            {
                "error_class": type(error).__name__,
                "error_message": str(error),
                **fields,
            },
            exc_info=(type(error), error, error.__traceback__),
        )

    # Correlation shortcuts

    def set_correlation_id(self, value: str) -> None:
        self.formatter.set_correlation_id(value)

    def clear_correlation_id(self) -> None:
        self.formatter.clear_correlation_id()
