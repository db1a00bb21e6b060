"""
Line formatting for log events.

LineFormatter renders a LogEvent to one text line:

    [caller] <cid> 2024-05-01T12:00:00Z [WARN] (file:line func) <f1> <f2> message

TextFormatter and JsonLinesFormatter plug it into stdlib logging handlers.
"""

import json
import logging
from datetime import datetime
from typing import Any, Mapping, Optional

from .config import FormatterConfig
from .context import CorrelationRegistry, current_unit_id
from .levels import COLOR_PINK, RESET, Level, color_escape, level_color
from .models import CallerInfo, LogEvent


def format_timestamp(timestamp: datetime, timestamp_format: Optional[str] = None) -> str:
    """
    Render a timestamp.

    Without a format the result is RFC 3339 at second precision, with
    "Z" for UTC and no offset for naive datetimes.
    """
    if timestamp_format:
        return timestamp.strftime(timestamp_format)
    text = timestamp.isoformat(timespec="seconds")
    if text.endswith("+00:00"):
        text = text[:-6] + "Z"
    return text


class LineFormatter:
    """
    Renders LogEvents as single colored text lines.

    Owns the CorrelationRegistry used for the correlation ID segment;
    pass a registry in to share one between formatters.
    """

    def __init__(
        self,
        config: Optional[FormatterConfig] = None,
        registry: Optional[CorrelationRegistry] = None,
    ):
        self.config = config or FormatterConfig()
        self.registry = registry if registry is not None else CorrelationRegistry()

    # Correlation ID management

    def set_correlation_id(self, value: str, identity: Optional[int] = None) -> None:
        """Tag lines of the calling execution unit (or identity) with value."""
        if identity is None:
            identity = current_unit_id()
        self.registry.set(identity, value)

    def clear_correlation_id(self, identity: Optional[int] = None) -> None:
        """Remove the tag of the calling execution unit (or identity)."""
        if identity is None:
            identity = current_unit_id()
        self.registry.clear(identity)

    def set_disable_correlation_id(self, disabled: bool) -> None:
        self.config = self.config.with_options(disable_correlation_id=disabled)

    # Formatting

    def format(self, event: LogEvent) -> bytes:
        """Format one event. Always ends with a newline."""
        return self.format_text(event).encode("utf-8")

    def format_text(self, event: LogEvent) -> str:
        cfg = self.config
        colors = not cfg.no_colors
        out: list[str] = []

        if cfg.caller_first:
            self._write_caller(out, event)

        if colors:
            out.append(color_escape(level_color(event.level)))

        if not cfg.disable_correlation_id:
            out.append(f"<{self.registry.lookup()}> ")

        out.append(format_timestamp(event.timestamp, cfg.timestamp_format))

        out.append(" [")
        out.append(self._level_text(event.level))
        out.append("]")

        if not cfg.caller_first:
            self._write_caller(out, event)

        if colors and cfg.no_fields_colors:
            out.append(RESET)

        fields = event.fields or {}
        if cfg.field_order is None:
            self._write_fields(out, fields)
        else:
            self._write_ordered_fields(out, fields)

        # Keeps a gap before the message when field separators are off
        if cfg.no_fields_space:
            out.append(" ")

        if colors and not cfg.no_fields_colors:
            out.append(RESET)

        if cfg.trim_messages:
            out.append(event.message.strip())
        else:
            out.append(event.message)

        out.append("\n")
        return "".join(out)

    def _level_text(self, level: Any) -> str:
        name = str(level)
        if not self.config.no_uppercase_level:
            name = name.upper()
        if not self.config.show_full_level:
            name = name[:4]
        return name

    def _write_caller(self, out: list[str], event: LogEvent) -> None:
        caller = event.caller
        if caller is None:
            return
        if not self.config.no_colors:
            out.append(color_escape(COLOR_PINK))
        if self.config.caller_formatter is not None:
            out.append(str(self.config.caller_formatter(caller)))
        else:
            out.append(f" ({caller.file}:{caller.line} {caller.function}) ")

    def _write_fields(self, out: list[str], fields: Mapping[str, Any]) -> None:
        for name in sorted(fields):
            self._write_field(out, name, fields[name])

    def _write_ordered_fields(self, out: list[str], fields: Mapping[str, Any]) -> None:
        written = set()
        for name in self.config.field_order:
            if name in fields and name not in written:
                written.add(name)
                self._write_field(out, name, fields[name])

        for name in sorted(n for n in fields if n not in written):
            self._write_field(out, name, fields[name])

    def _write_field(self, out: list[str], name: str, value: Any) -> None:
        if self.config.hide_keys:
            out.append(f"<{value}>")
        else:
            out.append(f"<{name}:{value}>")
        if not self.config.no_fields_space:
            out.append(" ")


def new_formatter(disable_correlation_id: bool = False) -> LineFormatter:
    """Formatter with default options and its own correlation registry."""
    return LineFormatter(FormatterConfig(disable_correlation_id=disable_correlation_id))


def record_to_event(record: logging.LogRecord, report_caller: bool = False) -> LogEvent:
    """
    Convert a stdlib LogRecord into a LogEvent.

    Fields come from the record's `fields` attribute (pass
    `extra={"fields": {...}}`). A `logline_level` attribute overrides
    the level derived from levelno (used for PANIC).
    """
    level = getattr(record, "logline_level", None)
    if level is None:
        level = Level.from_stdlib(record.levelno)

    caller = None
    if report_caller:
        caller = CallerInfo(record.pathname, record.lineno, record.funcName)

    return LogEvent(
        timestamp=datetime.fromtimestamp(record.created).astimezone(),
        level=level,
        message=record.getMessage(),
        fields=getattr(record, "fields", None),
        caller=caller,
    )


class TextFormatter(logging.Formatter):
    """
    stdlib logging adapter for LineFormatter.

    Returns the line without its trailing newline; the handler appends
    its own terminator. Exception and stack info follow on new lines.
    """

    def __init__(
        self,
        config: Optional[FormatterConfig] = None,
        registry: Optional[CorrelationRegistry] = None,
        report_caller: bool = False,
        line_formatter: Optional[LineFormatter] = None,
    ):
        super().__init__()
        self.line_formatter = line_formatter or LineFormatter(config, registry)
        self.report_caller = report_caller

    def format(self, record: logging.LogRecord) -> str:
        """Format log record as a text line."""
        event = record_to_event(record, self.report_caller)
        text = self.line_formatter.format_text(event)
        if text.endswith("\n"):
            text = text[:-1]

        if record.exc_info and not record.exc_text:
            record.exc_text = self.formatException(record.exc_info)
        if record.exc_text:
            text = f"{text}\n{record.exc_text}"
        if record.stack_info:
            text = f"{text}\n{self.formatStack(record.stack_info)}"
        return text


class JsonLinesFormatter(logging.Formatter):
    """
    Formats log records as JSON Lines (one JSON object per line).

    Each entry has timestamp, level, message and, unless disabled,
    correlation_id, followed by the record's fields. The caller is
    included when report_caller is set.
    """

    def __init__(
        self,
        registry: Optional[CorrelationRegistry] = None,
        report_caller: bool = False,
        disable_correlation_id: bool = False,
        timestamp_format: Optional[str] = None,
    ):
        super().__init__()
        self.registry = registry if registry is not None else CorrelationRegistry()
        self.report_caller = report_caller
        self.disable_correlation_id = disable_correlation_id
        self.timestamp_format = timestamp_format

    def format(self, record: logging.LogRecord) -> str:
        """Format log record as JSON."""
        event = record_to_event(record, self.report_caller)

        log_entry: dict[str, Any] = {
            "timestamp": format_timestamp(event.timestamp, self.timestamp_format),
            "level": event.level_name,
            "message": event.message,
        }
        if not self.disable_correlation_id:
            log_entry["correlation_id"] = self.registry.lookup()
        if event.caller is not None:
            log_entry["caller"] = event.caller.to_dict()

        # Fields never overwrite the base keys
        for key, value in (event.fields or {}).items():
            if key not in log_entry:
                log_entry[key] = value

        if record.exc_info:
            log_entry["exception"] = self.formatException(record.exc_info)

        return json.dumps(log_entry, default=self._json_serializer)

    def _json_serializer(self, obj: Any) -> Any:
        """Handle non-serializable objects."""
        if isinstance(obj, datetime):
            return obj.isoformat()
        if hasattr(obj, '__dict__'):
            return str(obj)
        return repr(obj)
