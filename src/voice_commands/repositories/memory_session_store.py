"""In-memory implementation of SessionStore."""

import copy
from typing import Any


class MemorySessionStore:
    """Dict-backed session store.

    This class satisfies the SessionStore protocol through structural
    typing. Values are deep-copied on the way in and out so callers never
    share mutable state with the store.
    """

    def __init__(self, initial: dict[str, Any] | None = None) -> None:
        self._data: dict[str, Any] = copy.deepcopy(initial or {})

    def get(self, key: str, default: Any = None) -> Any:
        if key not in self._data:
            return default
        return copy.deepcopy(self._data[key])

    def set(self, key: str, value: Any) -> None:
        self._data[key] = copy.deepcopy(value)

    def remove(self, key: str) -> None:
        self._data.pop(key, None)

    def clear(self) -> None:
        self._data.clear()
