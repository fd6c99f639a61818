"""Session store protocol.

Key/value storage for client-local state (auth token, cached user
profile, recently viewed products). Values must be JSON-serializable.

Implementations can include:
- In-memory dict (tests, ephemeral sessions)
- JSON file on disk (default for the console app)
"""

from typing import Any, Protocol, runtime_checkable


@runtime_checkable
class SessionStore(Protocol):
    """Protocol for session persistence backends."""

    def get(self, key: str, default: Any = None) -> Any:
        """Return the stored value for ``key`` or ``default``."""
        ...

    def set(self, key: str, value: Any) -> None:
        """Store ``value`` under ``key``."""
        ...

    def remove(self, key: str) -> None:
        """Remove ``key`` if present."""
        ...

    def clear(self) -> None:
        """Remove every key."""
        ...
