"""
Correlation ID management for tracing log lines of one request.

Two mechanisms, consulted in this order by the formatters:

1. A ContextVar, propagated automatically into asyncio tasks and
   `contextvars.copy_context()` runs. Preferred.
2. A CorrelationRegistry keyed by execution-unit identity, for code
   paths where the context does not follow the work (plain thread
   pools, callbacks from foreign event loops).
"""

import asyncio
import threading
from contextvars import ContextVar
from contextlib import contextmanager
from typing import Generator, Optional

# Context variable (async-safe)
_correlation_id: ContextVar[str] = ContextVar('correlation_id', default='')


def current_unit_id() -> int:
    """
    Identity of the running execution unit.

    The id of the current asyncio task when called from inside one,
    otherwise the thread identifier.
    """
    try:
        task = asyncio.current_task()
    except RuntimeError:
        # No running event loop in this thread
        task = None
    if task is not None:
        return id(task)
    return threading.get_ident()


def get_correlation_id() -> Optional[str]:
    """Get correlation ID of the current context, if any."""
    return _correlation_id.get() or None


def set_correlation_id(cid: str) -> None:
    """Set correlation ID for current context."""
    _correlation_id.set(cid)


def clear_correlation_id() -> None:
    """Drop the correlation ID of the current context."""
    _correlation_id.set('')


@contextmanager
def correlation_context(correlation_id: str) -> Generator[str, None, None]:
    """
    Context manager for setting the correlation ID.

    The previous value is restored on exit, so contexts nest.

    Example:
        with correlation_context("req-42"):
            log.info("request started", path=path)
    """
    token = _correlation_id.set(correlation_id)
    try:
        yield correlation_id
    finally:
        _correlation_id.reset(token)


class CorrelationRegistry:
    """
    Thread-safe mapping of execution-unit identity to correlation ID.

    Entries live until cleared; nothing is removed when the unit ends.
    The lock covers only the dict access.
    """

    def __init__(self):
        self._lock = threading.Lock()
        self._ids: dict[int, str] = {}

    def set(self, identity: int, value: str) -> None:
        """Insert or overwrite the entry for identity."""
        with self._lock:
            self._ids[identity] = value

    def get(self, identity: int) -> tuple[str, bool]:
        """Return (value, found) for identity."""
        with self._lock:
            value = self._ids.get(identity)
        if value is None:
            return "", False
        return value, True

    def clear(self, identity: int) -> None:
        """Remove the entry for identity; no-op when absent."""
        with self._lock:
            self._ids.pop(identity, None)

    def snapshot(self) -> dict[int, str]:
        """Copy of all current entries."""
        with self._lock:
            return dict(self._ids)

    def __len__(self) -> int:
        with self._lock:
            return len(self._ids)

    def lookup(self, identity: Optional[int] = None) -> str:
        """
        Correlation text for a log line.

        Resolution order: the context variable, then the registry entry
        for identity (default: the calling unit), then the raw identity.
        Never empty.
        """
        cid = get_correlation_id()
        if cid:
            return cid
        if identity is None:
            identity = current_unit_id()
        value, found = self.get(identity)
        if found:
            return value
        return str(identity)
