"""REST implementation of CommandGateway.

Talks to the ``/api/voice-commands/`` resource of the sales backend:

- ``POST process/`` interprets and executes a command
- ``GET history/`` lists the user's previous commands
- ``GET capabilities/`` describes the supported reports
- ``GET {id}/`` returns a command's stored data
- ``GET {id}/download/{pdf|excel}/`` renders the report file

Every request carries ``Authorization: Token <token>`` when the session
store holds a token. Failures are raised as ``CommandServiceError`` with a
user-facing message; nothing is retried.
"""

import logging
from typing import Any

import httpx
from pydantic import ValidationError

from voice_commands.config import settings
from voice_commands.dto import HistoryResponse, ProcessCommandResponse
from voice_commands.errors import (
    CONNECTION_ERROR,
    HTTP_STATUS_MESSAGES,
    UNEXPECTED_ERROR,
    CommandServiceError,
    error_message_of,
    message_for_status,
)
from voice_commands.protocols import SessionStore

logger = logging.getLogger(__name__)

DOWNLOAD_KINDS = ("pdf", "excel")


def _json_or_none(response: httpx.Response) -> Any:
    try:
        return response.json()
    except ValueError:
        return None


class HttpCommandGateway:
    """httpx-based implementation of the CommandGateway protocol.

    This class satisfies the CommandGateway protocol through structural
    typing - no explicit inheritance needed.

    Example:
        ```python
        gateway = HttpCommandGateway.create(session_store=store)
        response = await gateway.process_command("ventas de hoy")
        await gateway.close()
        ```
    """

    def __init__(
        self,
        base_url: str | None = None,
        session_store: SessionStore | None = None,
        timeout: float | None = None,
        download_timeout: float | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        """Initialize the gateway.

        Args:
            base_url: Voice-commands resource URL. Defaults to settings.
            session_store: Source of the auth token. No auth header if None.
            timeout: Request timeout in seconds. Defaults to settings.
            download_timeout: Timeout for report downloads. Defaults to settings.
            transport: Custom httpx transport (tests use httpx.MockTransport).
        """
        self._base_url = base_url or settings.commands_url
        if not self._base_url.endswith("/"):
            self._base_url += "/"
        self._session = session_store
        self._timeout = timeout or settings.processing_timeout
        self._download_timeout = download_timeout or settings.download_timeout
        self._transport = transport
        self._client: httpx.AsyncClient | None = None

    @classmethod
    def create(
        cls,
        session_store: SessionStore | None = None,
        base_url: str | None = None,
    ) -> "HttpCommandGateway":
        """Factory method to create HttpCommandGateway with defaults.

        Args:
            session_store: Source of the auth token.
            base_url: Resource URL. If None, uses settings.

        Returns:
            Configured HttpCommandGateway
        """
        return cls(base_url=base_url, session_store=session_store)

    @property
    def client(self) -> httpx.AsyncClient:
        """Lazy-load the async HTTP client.

        Returns:
            The httpx.AsyncClient instance
        """
        if self._client is None:
            self._client = httpx.AsyncClient(
                base_url=self._base_url,
                timeout=self._timeout,
                headers={"Content-Type": "application/json", "Accept": "application/json"},
                event_hooks={"request": [self._authorize]},
                transport=self._transport,
            )
        return self._client

    @property
    def base_url(self) -> str:
        """Get the resource base URL."""
        return self._base_url

    async def _authorize(self, request: httpx.Request) -> None:
        """Attach the session token to an outgoing request."""
        if self._session is None:
            return
        token = self._session.get(settings.auth_token_key)
        if token:
            request.headers["Authorization"] = f"Token {token}"

    async def _request(self, method: str, path: str, **kwargs: Any) -> httpx.Response:
        """Send a request and translate failures into CommandServiceError."""
        try:
            response = await self.client.request(method, path, **kwargs)
            response.raise_for_status()
            return response
        except httpx.HTTPStatusError as e:
            status = e.response.status_code
            payload = _json_or_none(e.response)
            if status == 401:
                logger.error("Session expired while calling %s %s", method, path)
            else:
                logger.warning("Backend returned %s for %s %s", status, method, path)
            raise CommandServiceError(
                message_for_status(status, payload),
                status=status,
                details=payload,
            ) from e
        except httpx.TimeoutException as e:
            logger.warning("Request %s %s timed out: %s", method, path, e)
            raise CommandServiceError(HTTP_STATUS_MESSAGES[408], details=str(e)) from e
        except httpx.RequestError as e:
            logger.warning("Request %s %s failed: %s", method, path, e)
            raise CommandServiceError(CONNECTION_ERROR, details=str(e)) from e

    async def process_command(self, text: str) -> ProcessCommandResponse:
        """Submit a command for interpretation and execution.

        Args:
            text: Trimmed command text

        Returns:
            The parsed backend verdict

        Raises:
            CommandServiceError: On transport, HTTP or payload errors
        """
        response = await self._request("POST", "process/", json={"text": text})
        payload = _json_or_none(response)
        try:
            return ProcessCommandResponse.model_validate(payload)
        except ValidationError as e:
            raise CommandServiceError(UNEXPECTED_ERROR, details=payload) from e

    async def get_history(self, **params: Any) -> HistoryResponse:
        """Fetch the user's command history.

        Args:
            **params: Pagination parameters (page, page_size)

        Returns:
            Normalized history page

        Raises:
            CommandServiceError: On transport, HTTP or payload errors
        """
        query = {key: value for key, value in params.items() if value is not None}
        response = await self._request("GET", "history/", params=query)
        payload = _json_or_none(response)

        if isinstance(payload, list):
            entries, count = payload, len(payload)
        elif isinstance(payload, dict):
            if payload.get("success") is False:
                return HistoryResponse(
                    success=False,
                    error=error_message_of(payload, UNEXPECTED_ERROR),
                )
            entries = payload.get("data") or payload.get("results") or []
            count = payload.get("count", len(entries))
        else:
            raise CommandServiceError(UNEXPECTED_ERROR, details=payload)

        try:
            return HistoryResponse(success=True, data=entries, count=count)
        except ValidationError as e:
            raise CommandServiceError(UNEXPECTED_ERROR, details=payload) from e

    async def get_capabilities(self) -> dict[str, Any]:
        """Fetch supported report types and example commands."""
        response = await self._request("GET", "capabilities/")
        return _json_or_none(response) or {}

    async def get_command(self, command_id: int) -> dict[str, Any]:
        """Fetch the stored data of one command."""
        response = await self._request("GET", f"{command_id}/")
        return _json_or_none(response) or {}

    async def download(self, command_id: int, kind: str) -> bytes:
        """Download a rendered report.

        Args:
            command_id: Identifier of an executed command
            kind: "pdf" or "excel"

        Returns:
            The file contents

        Raises:
            ValueError: If ``kind`` is not a downloadable format
            CommandServiceError: On transport or HTTP errors
        """
        if kind not in DOWNLOAD_KINDS:
            raise ValueError(f"kind must be one of {DOWNLOAD_KINDS}, got {kind!r}")

        response = await self._request(
            "GET",
            f"{command_id}/download/{kind}/",
            timeout=self._download_timeout,
        )
        return response.content

    async def is_available(self) -> bool:
        """Check if the backend answers.

        Returns:
            True if the capabilities endpoint responds, False otherwise
        """
        try:
            await self.get_capabilities()
            return True
        except CommandServiceError:
            return False

    async def close(self) -> None:
        """Close the async HTTP client.

        Should be called when shutting down the application.
        """
        if self._client is not None:
            await self._client.aclose()
            self._client = None
