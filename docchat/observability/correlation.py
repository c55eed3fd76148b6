"""
Correlation ID tracking.

Each HTTP request and each conversation WebSocket gets one id. It lives in a
ContextVar, so records logged by services, and by tasks a connection spawns
for pending answers, carry the same id.

Dependencies: contextvars
System role: Request and connection tracing
"""

from contextlib import contextmanager
from contextvars import ContextVar
from typing import Iterator
import uuid

HEADER_NAME = "X-Correlation-ID"

_correlation_id: ContextVar[str] = ContextVar("correlation_id", default="")


def new_correlation_id() -> str:
    """Short random id; long enough to be unique within a log window."""
    return uuid.uuid4().hex[:16]


def set_correlation_id(correlation_id: str | None = None) -> str:
    """
    Make an id current, generating one when none was supplied.

    Args:
        correlation_id: Incoming id (e.g. from the request header)

    Returns:
        str: The id now in effect
    """
    value = (correlation_id or "").strip() or new_correlation_id()
    _correlation_id.set(value)
    return value


def get_correlation_id() -> str:
    """Current id, or "" outside any request or connection."""
    return _correlation_id.get()


@contextmanager
def correlation_scope(correlation_id: str | None = None) -> Iterator[str]:
    """
    Bind an id for the duration of a block and restore the previous one after.

    Usage:
        with correlation_scope(request.headers.get(HEADER_NAME)) as cid:
            ...
    """
    token = _correlation_id.set((correlation_id or "").strip() or new_correlation_id())
    try:
        yield _correlation_id.get()
    finally:
        _correlation_id.reset(token)
