"""Command gateway protocol.

Defines the interface for the remote system that interprets commands,
keeps their history and renders report files.

Implementations can include:
- REST backend over HTTP (default)
- In-process fakes for tests and demos
"""

from typing import Any, Protocol, runtime_checkable

from voice_commands.dto import HistoryResponse, ProcessCommandResponse


@runtime_checkable
class CommandGateway(Protocol):
    """Protocol for command backends.

    Any type that implements these methods satisfies the protocol, no
    explicit inheritance needed. Implementations raise
    ``CommandServiceError`` for transport and server failures.
    """

    async def process_command(self, text: str) -> ProcessCommandResponse:
        """Submit a command for interpretation and execution.

        Args:
            text: Trimmed command text

        Returns:
            The backend's verdict, with data or suggestions
        """
        ...

    async def get_history(self, **params: Any) -> HistoryResponse:
        """Fetch the user's command history.

        Args:
            **params: Pagination parameters passed as query string

        Returns:
            Normalized history page
        """
        ...

    async def get_capabilities(self) -> dict[str, Any]:
        """Fetch supported report types and example commands."""
        ...

    async def get_command(self, command_id: int) -> dict[str, Any]:
        """Fetch the stored data of one command."""
        ...

    async def download(self, command_id: int, kind: str) -> bytes:
        """Download a rendered report.

        Args:
            command_id: Identifier of an executed command
            kind: "pdf" or "excel"

        Returns:
            The file contents
        """
        ...
