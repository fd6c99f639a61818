"""Blob saver protocol.

The client-side "save file" side effect for downloaded reports.
"""

from typing import Protocol, runtime_checkable


@runtime_checkable
class BlobSaver(Protocol):
    """Protocol for persisting downloaded report files."""

    def save(self, content: bytes, filename: str, media_type: str) -> str:
        """Save ``content`` under ``filename``.

        Args:
            content: File bytes
            filename: Target file name (no directories)
            media_type: MIME type of the content

        Returns:
            Location the file was saved to
        """
        ...
