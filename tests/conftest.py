"""
Root-level shared fixtures for all logline tests.

Module-specific fixtures should be defined in their respective test files.
"""

import shutil
import tempfile
from datetime import datetime, timezone
from pathlib import Path
from typing import Generator

import pytest

from logline import FormatterConfig, LogEvent, Level
from logline import logger as logger_module
from logline.context import _correlation_id


@pytest.fixture
def temp_dir() -> Generator[Path, None, None]:
    """
    Create a temporary directory for test data.

    Automatically cleaned up after test completion.
    """
    temp_path = Path(tempfile.mkdtemp(prefix="logline_test_"))
    yield temp_path
    shutil.rmtree(temp_path, ignore_errors=True)


@pytest.fixture
def sample_time() -> datetime:
    """Fixed UTC timestamp, renders as 2024-05-01T12:30:45Z."""
    return datetime(2024, 5, 1, 12, 30, 45, tzinfo=timezone.utc)


@pytest.fixture
def plain_config() -> FormatterConfig:
    """Defaults minus colors and correlation segment, for exact comparisons."""
    return FormatterConfig(no_colors=True, disable_correlation_id=True)


@pytest.fixture
def make_event(sample_time):
    """
    Factory for LogEvents at the fixed sample time.

    Usage:
        event = make_event(Level.WARN, "hi", fields={"a": 1})
    """
    def _create(level=Level.INFO, message="msg", fields=None, caller=None) -> LogEvent:
        return LogEvent(
            timestamp=sample_time,
            level=level,
            message=message,
            fields=fields,
            caller=caller,
        )
    return _create


@pytest.fixture(autouse=True)
def reset_logging_state():
    """Clear the logger cache and context correlation ID around each test."""
    logger_module._loggers.clear()
    token = _correlation_id.set("")
    yield
    _correlation_id.reset(token)
    logger_module._loggers.clear()
