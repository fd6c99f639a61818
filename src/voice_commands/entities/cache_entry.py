"""Command cache entry domain entity."""

from dataclasses import dataclass
from typing import Any


@dataclass(frozen=True)
class CacheEntry:
    """Memoized outcome of a command text.

    Attributes:
        key: Normalized command text (trimmed, lower-cased)
        data: Last successful response payload for that text
        timestamp: Insertion time, in the clock units of the owning cache
    """

    key: str
    data: Any
    timestamp: float

    def is_fresh(self, now: float, ttl: float) -> bool:
        """Return True while the entry is younger than ``ttl``."""
        return now - self.timestamp < ttl
