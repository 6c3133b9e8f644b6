"""Caching infrastructure."""

from sbo_core.infrastructure.cache.offline_cache import CacheEntry, InMemoryOfflineCache

__all__ = ["CacheEntry", "InMemoryOfflineCache"]
