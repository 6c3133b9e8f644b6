"""Offline cache port.

Holds a per-identity last-known-good snapshot of visible observations.
The cache is consulted only after a failed live read and never serves
writes.
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import Protocol

from sbo_core.domain.models.observation import Observation


class OfflineCacheProtocol(Protocol):
    """Protocol for the per-identity snapshot cache."""

    def on_successful_fetch(
        self, cache_key: str, observations: Sequence[Observation]
    ) -> None:
        """Replace the snapshot stored for the key (last write wins)."""
        ...

    def on_fetch_failure(self, cache_key: str) -> tuple[Observation, ...]:
        """Return the stored snapshot, or an empty tuple if none exists."""
        ...
