"""
Severity levels and their console colors.
"""

import logging
from enum import IntEnum
from typing import Any

# Extra stdlib level below DEBUG
TRACE = 5
logging.addLevelName(TRACE, "TRACE")

# ANSI color codes
COLOR_RED = 31
COLOR_YELLOW = 33
COLOR_PINK = 35
COLOR_BLUE = 36
COLOR_GRAY = 37

RESET = "\x1b[0m"


def color_escape(code: int) -> str:
    return f"\x1b[{code}m"


class Level(IntEnum):
    """Ordered severity levels, lowest first."""
    TRACE = 0
    DEBUG = 1
    INFO = 2
    WARN = 3
    ERROR = 4
    FATAL = 5
    PANIC = 6

    def __str__(self) -> str:
        return _LEVEL_NAMES[self]

    @classmethod
    def from_stdlib(cls, levelno: int) -> "Level":
        """Map a stdlib logging level number onto a Level."""
        if levelno <= TRACE:
            return cls.TRACE
        if levelno <= logging.DEBUG:
            return cls.DEBUG
        if levelno <= logging.INFO:
            return cls.INFO
        if levelno <= logging.WARNING:
            return cls.WARN
        if levelno <= logging.ERROR:
            return cls.ERROR
        return cls.FATAL

    def to_stdlib(self) -> int:
        return _STDLIB_LEVELS[self]


_LEVEL_NAMES = {
    Level.TRACE: "trace",
    Level.DEBUG: "debug",
    Level.INFO: "info",
    Level.WARN: "warning",
    Level.ERROR: "error",
    Level.FATAL: "fatal",
    Level.PANIC: "panic",
}

_STDLIB_LEVELS = {
    Level.TRACE: TRACE,
    Level.DEBUG: logging.DEBUG,
    Level.INFO: logging.INFO,
    Level.WARN: logging.WARNING,
    Level.ERROR: logging.ERROR,
    Level.FATAL: logging.CRITICAL,
    Level.PANIC: logging.CRITICAL,
}


def level_color(level: Any) -> int:
    """
    Color code for a level.

    Anything that is not a known Level (custom levels, plain strings)
    falls into the blue bucket together with INFO.
    """
    if not isinstance(level, Level):
        return COLOR_BLUE
    if level in (Level.TRACE, Level.DEBUG):
        return COLOR_GRAY
    if level == Level.WARN:
        return COLOR_YELLOW
    if level in (Level.ERROR, Level.FATAL, Level.PANIC):
        return COLOR_RED
    return COLOR_BLUE
