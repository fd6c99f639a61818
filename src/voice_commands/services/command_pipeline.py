"""Command pipeline service.

Turns free text (typed or dictated) into a validated, cached, remotely
dispatched command and keeps the observable state a presentation layer
renders: ``loading``, ``result``, ``error``, ``suggestions`` and
``history``.
"""

import json
import logging
from datetime import date, datetime, timezone
from typing import Any, Callable

from voice_commands.catalog import FORMATS
from voice_commands.dto import (
    CacheStats,
    CommandHistoryEntry,
    CommandOutcome,
    CommandResult,
    DownloadOutcome,
    HistoryResponse,
    PipelineState,
    Suggestion,
)
from voice_commands.entities import Command
from voice_commands.errors import (
    GENERIC_PROCESS_ERROR,
    TRANSPORT_PROCESS_ERROR,
    UNEXPECTED_ERROR,
    CommandServiceError,
    error_message_of,
)
from voice_commands.protocols import BlobSaver, CommandCache, CommandGateway
from voice_commands.repositories import FileBlobSaver, MemoryCommandCache
from voice_commands.services.validation import ValidationResult, validate_command
from voice_commands.utils import generate_filename

logger = logging.getLogger(__name__)

DEFAULT_REPORT_TYPE = "reporte"

_DOWNLOAD_ERRORS = {
    "pdf": "Error al descargar PDF",
    "excel": "Error al descargar Excel",
    "json": "Error al descargar JSON",
}


def _utc_today() -> date:
    return datetime.now(timezone.utc).date()


class CommandPipeline:
    """Validates, caches, dispatches and records natural-language commands.

    The pipeline depends on PROTOCOLS, not concrete implementations:
    - CommandGateway: the remote command backend
    - CommandCache: where successful payloads are memoized
    - BlobSaver: where downloaded reports are written

    Overlapping ``process`` calls are allowed. Each call takes a sequence
    number and only the latest one may write ``result``, ``error``,
    ``suggestions`` and ``loading``; an earlier call that finishes late
    still caches its successful payload but leaves the state alone.

    Example:
        ```python
        pipeline = CommandPipeline.create(gateway=HttpCommandGateway.create())
        outcome = await pipeline.process("reporte de ventas del último mes")
        if outcome.success:
            await pipeline.download_as("pdf", outcome.data.id)
        ```
    """

    def __init__(
        self,
        gateway: CommandGateway,
        cache: CommandCache | None = None,
        blob_saver: BlobSaver | None = None,
        today: Callable[[], date] | None = None,
    ) -> None:
        """Initialize the pipeline.

        Args:
            gateway: Remote command backend (required).
            cache: Result cache. Defaults to an in-memory TTL/FIFO cache.
            blob_saver: Download sink. Defaults to the download directory.
            today: Date source for default file names. Defaults to UTC today.
        """
        self._gateway = gateway
        self._cache = cache if cache is not None else MemoryCommandCache.create()
        self._saver = blob_saver if blob_saver is not None else FileBlobSaver.create()
        self._today = today or _utc_today

        self._loading = False
        self._result: CommandResult | None = None
        self._error: str | None = None
        self._suggestions: list[Suggestion] = []
        self._history: list[CommandHistoryEntry] = []
        self._sequence = 0

    @classmethod
    def create(
        cls,
        gateway: CommandGateway,
        cache: CommandCache | None = None,
        blob_saver: BlobSaver | None = None,
    ) -> "CommandPipeline":
        """Factory method to create CommandPipeline with default backends.

        Args:
            gateway: Remote command backend (required).
            cache: Result cache. If None, uses MemoryCommandCache.
            blob_saver: Download sink. If None, uses FileBlobSaver.

        Returns:
            Configured CommandPipeline
        """
        return cls(gateway=gateway, cache=cache, blob_saver=blob_saver)

    def validate(self, text: str | None) -> ValidationResult:
        """Check ``text`` against the command length rules (pure)."""
        return validate_command(text)

    async def process(self, text: str) -> CommandOutcome:
        """Validate, look up, dispatch and record one command.

        Business logic:
        1. Validate; invalid text sets ``error`` and stops here
        2. Clear the previous result, error and suggestions
        3. Return a fresh cached payload without calling the backend
        4. Otherwise submit the trimmed text; cache successful payloads,
           expose suggestions for ambiguous commands, and turn transport
           failures into ``error``

        Args:
            text: Raw command text

        Returns:
            CommandOutcome describing what happened
        """
        validation = self.validate(text)
        if not validation.valid:
            self._error = validation.error
            return CommandOutcome(success=False, error=validation.error)

        self._sequence += 1
        sequence = self._sequence

        self._loading = True
        self._result = None
        self._error = None
        self._suggestions = []

        stripped = text.strip()
        key = stripped.lower()

        cached = self._cache.get(key)
        if cached is not None:
            logger.info("Using cached result for %r", key)
            self._result = cached
            self._loading = False
            return CommandOutcome(success=True, data=cached, from_cache=True)

        try:
            outcome = await self._dispatch(stripped, key)
        finally:
            if sequence == self._sequence:
                self._loading = False

        if sequence != self._sequence:
            logger.debug("Discarding superseded response for %r", key)
            return outcome.model_copy(update={"stale": True})

        self._result = outcome.data if outcome.success else None
        self._error = outcome.error
        self._suggestions = list(outcome.suggestions)
        return outcome

    async def _dispatch(self, text: str, key: str) -> CommandOutcome:
        """Call the backend and cache a successful payload."""
        try:
            response = await self._gateway.process_command(text)
        except CommandServiceError as e:
            return CommandOutcome(success=False, error=e.message or TRANSPORT_PROCESS_ERROR)
        except Exception as e:
            logger.exception("Unexpected failure processing %r", text)
            return CommandOutcome(success=False, error=str(e) or TRANSPORT_PROCESS_ERROR)

        if response.success:
            data = response.data or CommandResult()
            self._cache.put(key, data)
            return CommandOutcome(success=True, data=data)

        return CommandOutcome(
            success=False,
            data=response.data,
            error=error_message_of(response, GENERIC_PROCESS_ERROR),
            suggestions=response.suggestions,
        )

    async def reuse(self, text: str) -> CommandOutcome:
        """Re-submit a command from the history verbatim."""
        return await self.process(text)

    async def select_suggestion(self, suggestion: Suggestion | str) -> CommandOutcome:
        """Run the report behind a suggestion ("generar <name>")."""
        name = suggestion if isinstance(suggestion, str) else suggestion.name
        return await self.process(f"generar {name.lower()}")

    async def fetch_history(self, **params: Any) -> HistoryResponse:
        """Fetch the command history and replace ``history`` on success.

        Failures are logged and returned, never raised.

        Args:
            **params: Pagination parameters forwarded to the backend

        Returns:
            The fetched page, or ``HistoryResponse(success=False, ...)``
        """
        try:
            response = await self._gateway.get_history(**params)
        except CommandServiceError as e:
            logger.error("Error fetching command history: %s", e.message)
            return HistoryResponse(success=False, error=e.message)
        except Exception as e:
            logger.exception("Unexpected failure fetching command history")
            return HistoryResponse(success=False, error=str(e) or UNEXPECTED_ERROR)

        if response.success:
            self._history = list(response.data)
        return response

    async def download_as(
        self,
        kind: str,
        command_id: int,
        filename: str | None = None,
        data: Any = None,
    ) -> DownloadOutcome:
        """Save a report for ``command_id`` in the requested format.

        ``pdf`` and ``excel`` are rendered by the backend. ``json`` serializes
        ``data`` (or the current result) locally without a network call. A
        failure sets ``error`` and leaves the result and cache untouched.

        Args:
            kind: "pdf", "excel" or "json"
            command_id: Identifier of the executed command
            filename: Target name. Defaults to
                ``{report_type}_{yyyy-mm-dd}_{id}{ext}``.
            data: Payload for ``json`` downloads

        Returns:
            DownloadOutcome with the saved location or the error

        Raises:
            ValueError: If ``kind`` is not a supported format
        """
        if kind not in FORMATS:
            raise ValueError(f"kind must be one of {sorted(FORMATS)}, got {kind!r}")

        filename = filename or generate_filename(
            self._report_type_for(command_id),
            kind,
            command_id,
            self._today(),
        )

        try:
            if kind == "json":
                content = self._serialize(data if data is not None else self._result)
            else:
                content = await self._gateway.download(command_id, kind)
            path = self._saver.save(content, filename, FORMATS[kind].media_type)
        except CommandServiceError as e:
            return self._download_failed(kind, e.message)
        except (OSError, TypeError, ValueError) as e:
            logger.error("Could not save %s report %s: %s", kind, command_id, e)
            return self._download_failed(kind, None)

        return DownloadOutcome(success=True, kind=kind, filename=filename, path=path)

    def _download_failed(self, kind: str, message: str | None) -> DownloadOutcome:
        self._error = message or _DOWNLOAD_ERRORS[kind]
        return DownloadOutcome(success=False, kind=kind, error=self._error)

    def _report_type_for(self, command_id: int) -> str:
        result = self._result
        if result is None or result.id != command_id:
            return DEFAULT_REPORT_TYPE
        report_info = (result.result_data or {}).get("report_info") or {}
        return report_info.get("type") or DEFAULT_REPORT_TYPE

    @staticmethod
    def _serialize(data: Any) -> bytes:
        if data is None:
            raise ValueError("No data to serialize")
        if hasattr(data, "model_dump"):
            data = data.model_dump(mode="json", exclude_none=True)
        return json.dumps(data, indent=2, ensure_ascii=False).encode("utf-8")

    async def get_command(self, command_id: int) -> Command | None:
        """Fetch one executed command by id; failures are logged and yield None."""
        try:
            payload = await self._gateway.get_command(command_id)
        except CommandServiceError as e:
            logger.warning("Could not fetch command %s: %s", command_id, e.message)
            return None
        try:
            return Command.from_payload(payload)
        except ValueError as e:
            logger.warning("Unreadable command %s: %s", command_id, e)
            return None

    async def get_capabilities(self) -> dict[str, Any] | None:
        """Fetch backend capabilities; failures are logged and yield None."""
        try:
            return await self._gateway.get_capabilities()
        except CommandServiceError as e:
            logger.warning("Could not fetch capabilities: %s", e.message)
            return None

    def clear_result(self) -> None:
        """Reset ``result``, ``error`` and ``suggestions``."""
        self._result = None
        self._error = None
        self._suggestions = []

    def clear_cache(self) -> int:
        """Empty the result cache.

        Returns:
            Number of entries removed
        """
        count = self._cache.clear()
        logger.info("Command cache cleared (%d entries)", count)
        return count

    def snapshot(self) -> PipelineState:
        """Get the observable state as a DTO."""
        return PipelineState(
            loading=self._loading,
            result=self._result,
            error=self._error,
            suggestions=list(self._suggestions),
            history=list(self._history),
            cache=CacheStats(**self._cache.get_stats()),
        )

    @property
    def loading(self) -> bool:
        return self._loading

    @property
    def result(self) -> CommandResult | None:
        return self._result

    @property
    def error(self) -> str | None:
        return self._error

    @property
    def suggestions(self) -> list[Suggestion]:
        return list(self._suggestions)

    @property
    def history(self) -> list[CommandHistoryEntry]:
        return list(self._history)

    @property
    def cache(self) -> CommandCache:
        """Get the underlying cache (for testing)."""
        return self._cache

    @property
    def gateway(self) -> CommandGateway:
        """Get the underlying gateway (for testing)."""
        return self._gateway
