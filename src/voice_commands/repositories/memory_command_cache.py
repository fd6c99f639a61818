"""In-memory implementation of CommandCache.

Process-local, not shared across sessions and not persisted. Entries are
kept in insertion order; when the cache is full the oldest-inserted entry
is evicted. Reads never reorder entries, so the policy is FIFO rather than
true LRU.
"""

import logging
import time
from typing import Any, Callable

from voice_commands.config import settings
from voice_commands.entities import CacheEntry

logger = logging.getLogger(__name__)


class MemoryCommandCache:
    """Dict-backed command cache with TTL freshness and FIFO capacity.

    This class satisfies the CommandCache protocol through structural
    typing - no explicit inheritance needed.

    Expired entries are treated as absent by ``get`` but stay in the dict
    until they are evicted, overwritten or cleared.
    """

    def __init__(
        self,
        ttl: float | None = None,
        max_size: int | None = None,
        clock: Callable[[], float] | None = None,
    ) -> None:
        """Initialize the cache.

        Args:
            ttl: Freshness window in seconds. Defaults to settings.
            max_size: Maximum number of entries. Defaults to settings.
            clock: Time source in seconds. Defaults to time.monotonic.
        """
        self._ttl = ttl or settings.cache_ttl
        self._max_size = max_size or settings.cache_max_size
        self._clock = clock or time.monotonic
        self._entries: dict[str, CacheEntry] = {}

    @classmethod
    def create(
        cls,
        ttl: float | None = None,
        max_size: int | None = None,
    ) -> "MemoryCommandCache":
        """Factory method to create MemoryCommandCache with defaults.

        Args:
            ttl: Freshness window in seconds. If None, uses settings.
            max_size: Capacity. If None, uses settings.

        Returns:
            Configured MemoryCommandCache
        """
        return cls(ttl=ttl, max_size=max_size)

    def get(self, key: str) -> Any | None:
        """Return the payload stored under ``key`` if it is still fresh.

        Args:
            key: Normalized command text

        Returns:
            The cached payload, or None on a miss or a stale entry
        """
        entry = self._entries.get(key)
        if entry is None or not entry.is_fresh(self._clock(), self._ttl):
            return None
        return entry.data

    def put(self, key: str, data: Any) -> None:
        """Insert ``data`` under ``key``.

        Re-inserting an existing key moves it to the newest position without
        evicting anything. Inserting a new key into a full cache evicts the
        oldest-inserted entry first.

        Args:
            key: Normalized command text
            data: Successful response payload
        """
        if key in self._entries:
            del self._entries[key]
        elif len(self._entries) >= self._max_size:
            oldest = next(iter(self._entries))
            del self._entries[oldest]
            logger.debug("Evicted oldest cache entry: %r", oldest)

        self._entries[key] = CacheEntry(key=key, data=data, timestamp=self._clock())

    def clear(self) -> int:
        """Drop every entry.

        Returns:
            Number of entries removed
        """
        count = len(self._entries)
        self._entries.clear()
        return count

    def keys(self) -> list[str]:
        """Stored keys, oldest first (fresh or not)."""
        return list(self._entries)

    def __len__(self) -> int:
        return len(self._entries)

    def __contains__(self, key: object) -> bool:
        return key in self._entries

    def get_stats(self) -> dict:
        """Get cache statistics.

        Returns:
            Dictionary with cache statistics
        """
        now = self._clock()
        fresh = sum(1 for entry in self._entries.values() if entry.is_fresh(now, self._ttl))
        return {
            "total_entries": len(self._entries),
            "fresh_entries": fresh,
            "max_size": self._max_size,
            "ttl_seconds": self._ttl,
        }

    @property
    def ttl(self) -> float:
        """Get the freshness window in seconds."""
        return self._ttl

    @property
    def max_size(self) -> int:
        """Get the capacity."""
        return self._max_size
