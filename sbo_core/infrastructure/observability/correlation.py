"""Correlation ids for one client session.

A session (one user working through the workflow) sets an id once; every
service log line emitted while it is active carries it, across awaits.
"""

from collections.abc import Iterator
from contextlib import contextmanager
from contextvars import ContextVar
from typing import Any
from uuid import uuid4

_correlation_id: ContextVar[str] = ContextVar("sbo_correlation_id", default="")


def generate_correlation_id() -> str:
    return str(uuid4())


def get_correlation_id() -> str:
    """Current correlation id, or "" outside any session."""
    return _correlation_id.get()


def set_correlation_id(correlation_id: str) -> None:
    _correlation_id.set(correlation_id)


@contextmanager
def correlation_scope(correlation_id: str | None = None) -> Iterator[str]:
    """Run a block under a correlation id, restoring the previous one after.

    Args:
        correlation_id: Id to use; a new one is generated when omitted.

    Yields:
        The active correlation id.
    """
    active = correlation_id or generate_correlation_id()
    token = _correlation_id.set(active)
    try:
        yield active
    finally:
        _correlation_id.reset(token)


def correlation_id_processor(
    logger: Any, method_name: str, event_dict: dict[str, Any]
) -> dict[str, Any]:
    """structlog processor stamping the active correlation id.

    An id already bound on the logger wins over the context value.
    """
    correlation_id = get_correlation_id()
    if correlation_id:
        event_dict.setdefault("correlation_id", correlation_id)
    return event_dict
