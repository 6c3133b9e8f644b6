"""Offline cache for visible observation snapshots.

Keeps one last-known-good snapshot per cache key (normally an identity
id). A successful fetch replaces the snapshot outright; there is no
merge. The snapshot is served only after a live read fails.
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass
from datetime import datetime, timezone

import structlog

from sbo_core.application.ports.offline_cache import OfflineCacheProtocol
from sbo_core.domain.models.observation import Observation

logger = structlog.get_logger(__name__)


@dataclass(frozen=True)
class CacheEntry:
    """A stored snapshot.

    Attributes:
        observations: The snapshot, as returned by the last good fetch.
        cached_at: When the snapshot was stored.
    """

    observations: tuple[Observation, ...]
    cached_at: datetime


class InMemoryOfflineCache(OfflineCacheProtocol):
    """In-memory per-identity snapshot cache.

    Observations are frozen, so the stored tuple cannot be altered by the
    caller after the fact.
    """

    def __init__(self) -> None:
        """Initialize an empty cache."""
        self._entries: dict[str, CacheEntry] = {}
        self._log = logger.bind(component="offline_cache")

    def on_successful_fetch(
        self, cache_key: str, observations: Sequence[Observation]
    ) -> None:
        """Replace the snapshot stored for the key."""
        self._entries[cache_key] = CacheEntry(
            observations=tuple(observations),
            cached_at=datetime.now(timezone.utc),
        )
        self._log.debug("cache_set", cache_key=cache_key, size=len(observations))

    def on_fetch_failure(self, cache_key: str) -> tuple[Observation, ...]:
        """Return the stored snapshot, or an empty tuple."""
        entry = self._entries.get(cache_key)
        if entry is None:
            self._log.info("cache_miss", cache_key=cache_key)
            return ()
        self._log.info(
            "cache_hit",
            cache_key=cache_key,
            size=len(entry.observations),
            cached_at=entry.cached_at.isoformat(),
        )
        return entry.observations

    def cached_at(self, cache_key: str) -> datetime | None:
        """When the snapshot for the key was stored, if any."""
        entry = self._entries.get(cache_key)
        return entry.cached_at if entry else None

    def clear(self) -> None:
        """Clear all cache entries."""
        count = len(self._entries)
        self._entries.clear()
        self._log.info("cache_cleared", entries_cleared=count)
