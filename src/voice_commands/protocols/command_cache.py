"""Command cache protocol.

Defines the interface for storing successful command payloads keyed by
normalized command text.
"""

from typing import Any, Protocol, runtime_checkable


@runtime_checkable
class CommandCache(Protocol):
    """Protocol for command result caches."""

    def get(self, key: str) -> Any | None:
        """Return the cached payload for ``key`` if present and fresh."""
        ...

    def put(self, key: str, data: Any) -> None:
        """Store ``data`` under ``key``, evicting as the policy requires."""
        ...

    def clear(self) -> int:
        """Drop every entry.

        Returns:
            Number of entries removed
        """
        ...

    def get_stats(self) -> dict:
        """Get cache statistics."""
        ...
