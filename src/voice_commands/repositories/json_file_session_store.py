"""JSON file implementation of SessionStore.

The whole session is one JSON document; every mutation rewrites it. A
missing file is an empty session. A file that cannot be decoded is an
error rather than silently discarded credentials.
"""

import json
import logging
from pathlib import Path
from typing import Any

from voice_commands.config import settings
from voice_commands.errors import SessionStoreError

logger = logging.getLogger(__name__)


class JsonFileSessionStore:
    """File-backed session store.

    This class satisfies the SessionStore protocol through structural
    typing - no explicit inheritance needed.
    """

    def __init__(self, path: str | Path | None = None) -> None:
        """Initialize the store.

        Args:
            path: JSON file location. Defaults to settings.session_file.
        """
        self._path = Path(path or settings.session_file)
        self._data: dict[str, Any] = self._load()

    @classmethod
    def create(cls, path: str | Path | None = None) -> "JsonFileSessionStore":
        """Factory method to create JsonFileSessionStore with defaults."""
        return cls(path=path)

    def _load(self) -> dict[str, Any]:
        if not self._path.exists():
            return {}
        try:
            data = json.loads(self._path.read_text(encoding="utf-8") or "{}")
        except (OSError, json.JSONDecodeError) as e:
            raise SessionStoreError(f"Cannot read session file {self._path}: {e}") from e
        if not isinstance(data, dict):
            raise SessionStoreError(f"Session file {self._path} does not hold a JSON object")
        return data

    def _flush(self) -> None:
        try:
            self._path.parent.mkdir(parents=True, exist_ok=True)
            self._path.write_text(json.dumps(self._data, ensure_ascii=False, indent=2), encoding="utf-8")
        except (OSError, TypeError) as e:
            raise SessionStoreError(f"Cannot write session file {self._path}: {e}") from e

    def get(self, key: str, default: Any = None) -> Any:
        return self._data.get(key, default)

    def set(self, key: str, value: Any) -> None:
        self._data[key] = value
        self._flush()

    def remove(self, key: str) -> None:
        if key in self._data:
            del self._data[key]
            self._flush()

    def clear(self) -> None:
        self._data = {}
        self._flush()
        logger.debug("Cleared session file %s", self._path)

    @property
    def path(self) -> Path:
        """Get the backing file path."""
        return self._path
