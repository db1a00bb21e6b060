"""
Data models for log events handed to the formatters.
"""

from dataclasses import dataclass
from datetime import datetime
from typing import Any, Mapping, Optional


@dataclass(frozen=True)
class CallerInfo:
    """Source location captured by the host at log time."""
    file: str
    line: int
    function: str

    def to_dict(self) -> dict:
        return {
            "file": self.file,
            "line": self.line,
            "function": self.function,
        }


@dataclass(frozen=True)
class LogEvent:
    """
    One fully assembled log event.

    The formatter never mutates an event; `fields` may be None, which
    renders the same as an empty mapping.
    """
    # When the event happened
    timestamp: datetime

    # Severity (a Level, or any object with a usable str() for custom levels)
    level: Any

    # Free-form message text
    message: str

    # Auxiliary key/value data
    fields: Optional[Mapping[str, Any]] = None

    # Call site, only present when the host captures it
    caller: Optional[CallerInfo] = None

    @property
    def level_name(self) -> str:
        return str(self.level)
