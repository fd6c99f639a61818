"""Filesystem implementation of BlobSaver."""

import logging
from pathlib import Path

from voice_commands.config import settings

logger = logging.getLogger(__name__)


class FileBlobSaver:
    """Writes downloaded reports into a directory.

    This class satisfies the BlobSaver protocol through structural typing.
    Only the final path component of ``filename`` is used, so a filename
    cannot escape the download directory.
    """

    def __init__(self, directory: str | Path | None = None) -> None:
        self._directory = Path(directory or settings.download_dir)

    @classmethod
    def create(cls, directory: str | Path | None = None) -> "FileBlobSaver":
        """Factory method to create FileBlobSaver with defaults."""
        return cls(directory=directory)

    def save(self, content: bytes, filename: str, media_type: str) -> str:
        """Write ``content`` to ``<directory>/<filename>``.

        Args:
            content: File bytes
            filename: Target file name
            media_type: MIME type (logged only)

        Returns:
            Path of the written file
        """
        self._directory.mkdir(parents=True, exist_ok=True)
        path = self._directory / Path(filename).name
        path.write_bytes(content)
        logger.info("Saved %s (%d bytes, %s)", path, len(content), media_type)
        return str(path)

    @property
    def directory(self) -> Path:
        """Get the download directory."""
        return self._directory
