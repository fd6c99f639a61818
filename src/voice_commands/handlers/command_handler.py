"""HTTP handlers for command operations.

Handlers convert between DTOs (API contracts) and service calls.
They handle HTTP concerns like status codes and error responses; the
pipeline itself never raises for remote failures, it records them.
"""

from dataclasses import asdict
from typing import Any

from fastapi import HTTPException, status

from voice_commands.config import settings
from voice_commands.dto import (
    CommandOutcome,
    DownloadKind,
    DownloadOutcome,
    HealthCheckResponse,
    HistoryQuery,
    HistoryResponse,
    PipelineState,
    ProcessCommandRequest,
    SuggestionRequest,
)
from voice_commands.services import CommandInput, CommandPipeline


class CommandHandler:
    """HTTP handlers for command operations.

    This handler delegates business logic to CommandInput/CommandPipeline
    and handles HTTP-specific concerns like:
    - Rejecting submissions while another command is in flight
    - Mapping failed downloads and history fetches to 502 responses
    - Converting entities to JSON-ready dicts

    Example:
        ```python
        handler = CommandHandler(command_input=CommandInput(pipeline, capture))

        @app.post("/commands/process", response_model=CommandOutcome)
        async def process_command(request: ProcessCommandRequest):
            return await handler.process_command(request)
        ```
    """

    def __init__(self, command_input: CommandInput) -> None:
        """Initialize the command handler.

        Args:
            command_input: Input controller wrapping the pipeline (required).
        """
        self._input = command_input
        self._pipeline: CommandPipeline = command_input.pipeline

    def _ensure_idle(self) -> None:
        if self._pipeline.loading:
            raise HTTPException(
                status_code=status.HTTP_409_CONFLICT,
                detail="Ya hay un comando en proceso",
            )

    async def process_command(self, request: ProcessCommandRequest) -> CommandOutcome:
        """Handle POST /commands/process requests.

        Validation failures and soft backend failures come back as an
        unsuccessful CommandOutcome with status 200.

        Raises:
            HTTPException: 409 while another command is being processed
        """
        self._ensure_idle()
        outcome = await self._input.submit(request.text)
        if outcome is None:
            # Blank input: let validation produce the message
            outcome = await self._pipeline.process(request.text)
        return outcome

    async def reuse_command(self, request: ProcessCommandRequest) -> CommandOutcome:
        """Handle POST /commands/reuse requests."""
        self._ensure_idle()
        return await self._input.reuse(request.text)

    async def use_suggestion(self, request: SuggestionRequest) -> CommandOutcome:
        """Handle POST /commands/suggestion requests."""
        self._ensure_idle()
        return await self._input.use_suggestion(request.name)

    async def get_history(self, query: HistoryQuery) -> HistoryResponse:
        """Handle GET /commands/history requests.

        Raises:
            HTTPException: 502 if the backend could not provide the history
        """
        response = await self._pipeline.fetch_history(
            page=query.page,
            page_size=query.page_size or settings.history_page_size,
        )
        if not response.success:
            raise HTTPException(
                status_code=status.HTTP_502_BAD_GATEWAY,
                detail=response.error,
            )
        return response

    async def get_command(self, command_id: int) -> dict[str, Any]:
        """Handle GET /commands/{command_id} requests.

        Raises:
            HTTPException: 404 if the command could not be fetched
        """
        command = await self._pipeline.get_command(command_id)
        if command is None:
            raise HTTPException(
                status_code=status.HTTP_404_NOT_FOUND,
                detail="Comando no encontrado",
            )
        return asdict(command)

    async def get_capabilities(self) -> dict[str, Any]:
        """Handle GET /commands/capabilities requests.

        Raises:
            HTTPException: 502 if the backend did not answer
        """
        capabilities = await self._pipeline.get_capabilities()
        if capabilities is None:
            raise HTTPException(
                status_code=status.HTTP_502_BAD_GATEWAY,
                detail="No se pudieron obtener las capacidades del sistema",
            )
        return capabilities

    async def download(self, command_id: int, kind: DownloadKind) -> DownloadOutcome:
        """Handle POST /commands/{command_id}/download/{kind} requests.

        Raises:
            HTTPException: 502 if the report could not be downloaded or saved
        """
        outcome = await self._pipeline.download_as(kind, command_id)
        if not outcome.success:
            raise HTTPException(
                status_code=status.HTTP_502_BAD_GATEWAY,
                detail=outcome.error,
            )
        return outcome

    async def get_state(self) -> PipelineState:
        """Handle GET /commands/state requests."""
        return self._pipeline.snapshot()

    async def clear_result(self) -> PipelineState:
        """Handle DELETE /commands/result requests."""
        self._pipeline.clear_result()
        return self._pipeline.snapshot()

    async def clear_cache(self) -> dict:
        """Handle DELETE /commands/cache requests."""
        count = self._pipeline.clear_cache()
        return {
            "success": True,
            "deleted_count": count,
            "message": "Cache cleared successfully",
        }

    async def health_check(self, speech_supported: bool | None = None) -> HealthCheckResponse:
        """Handle GET /health requests."""
        backend_healthy = await self._pipeline.get_capabilities() is not None
        return HealthCheckResponse(
            status="healthy" if backend_healthy else "unhealthy",
            backend_healthy=backend_healthy,
            speech_supported=speech_supported,
        )
