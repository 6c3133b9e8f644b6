"""Timeout guard for collaborator calls.

Every repository and blob-store call is bounded. Exceeding the bound is
reported as a TransientIOError so callers handle it like any other
unreachable-collaborator failure.
"""

from __future__ import annotations

import asyncio
from collections.abc import Awaitable
from typing import TypeVar

from sbo_core.domain.errors.io import TransientIOError

T = TypeVar("T")


async def with_timeout(
    awaitable: Awaitable[T],
    timeout_seconds: float,
    collaborator: str,
    operation: str,
) -> T:
    """Await a collaborator call, bounded by a timeout.

    Args:
        awaitable: The pending call.
        timeout_seconds: Maximum time to wait.
        collaborator: Collaborator name for the error.
        operation: Operation name for the error.

    Returns:
        The call's result.

    Raises:
        TransientIOError: If the call does not finish in time.
    """
    try:
        return await asyncio.wait_for(awaitable, timeout=timeout_seconds)
    except TimeoutError as e:
        raise TransientIOError(
            collaborator, operation, f"timed out after {timeout_seconds}s"
        ) from e
