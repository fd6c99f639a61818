"""Response DTOs for remote payloads and the console API."""

from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field

DownloadKind = Literal["pdf", "excel", "json"]


class Suggestion(BaseModel):
    """Alternative interpretation offered for an ambiguous command."""

    model_config = ConfigDict(extra="allow")

    name: str = Field(..., description="Readable report name")
    description: str | None = Field(None, description="What the report contains")
    type: str | None = Field(None, description="Report type identifier")
    confidence: float | None = Field(None, ge=0.0, le=1.0)


class CommandResult(BaseModel):
    """Remote view of a processed command (the ``data`` of a response)."""

    model_config = ConfigDict(extra="allow")

    id: int | None = None
    command_text: str | None = None
    status: str | None = None
    confidence_score: float | None = Field(None, ge=0.0, le=1.0)
    processing_time_ms: float | None = None
    command_type: str | None = None
    result_data: dict[str, Any] | None = None
    error_message: str | None = None
    created_at: str | None = None


class ProcessCommandResponse(BaseModel):
    """Body returned by ``POST process/``."""

    model_config = ConfigDict(extra="allow")

    success: bool = Field(..., description="Whether the command was understood and executed")
    data: CommandResult | None = None
    suggestions: list[Suggestion] = Field(default_factory=list)


class CommandHistoryEntry(BaseModel):
    """Read-only projection of a command for history lists."""

    model_config = ConfigDict(extra="allow", frozen=True)

    id: int
    command_text: str
    status: str
    confidence_score: float | None = None
    processing_time_ms: float | None = None
    command_type: str | None = None
    error_message: str | None = None
    created_at: str | None = None


class HistoryResponse(BaseModel):
    """Normalized history fetch result.

    The backend may answer with a bare list, ``{success, data}`` or a
    paginated ``{count, results}`` document; the gateway folds all of them
    into this shape.
    """

    success: bool = True
    data: list[CommandHistoryEntry] = Field(default_factory=list)
    count: int | None = None
    error: str | None = None


class CommandOutcome(BaseModel):
    """What a single ``process`` call produced."""

    success: bool
    data: CommandResult | None = None
    error: str | None = None
    suggestions: list[Suggestion] = Field(default_factory=list)
    from_cache: bool = False
    stale: bool = Field(False, description="A newer submission superseded this one")


class DownloadOutcome(BaseModel):
    """Result of a report download."""

    success: bool
    kind: DownloadKind
    filename: str | None = None
    path: str | None = None
    error: str | None = None


class CacheStats(BaseModel):
    """Command cache statistics."""

    total_entries: int = Field(..., ge=0)
    fresh_entries: int = Field(..., ge=0)
    max_size: int = Field(..., ge=1)
    ttl_seconds: float = Field(..., gt=0)


class PipelineState(BaseModel):
    """Observable state of a command pipeline."""

    loading: bool
    result: CommandResult | None = None
    error: str | None = None
    suggestions: list[Suggestion] = Field(default_factory=list)
    history: list[CommandHistoryEntry] = Field(default_factory=list)
    cache: CacheStats


class SpeechStateResponse(BaseModel):
    """Observable state of a speech capture."""

    state: str
    is_listening: bool
    is_supported: bool
    transcript: str
    error: str | None = None
    error_kind: str | None = None


class HealthCheckResponse(BaseModel):
    """Response DTO for health check."""

    status: str = Field(..., description="Health status: 'healthy' or 'unhealthy'")
    backend_healthy: bool = Field(..., description="Whether the command backend is reachable")
    speech_supported: bool | None = Field(
        None,
        description="Whether a speech recognizer is available",
    )


class SessionResponse(BaseModel):
    """Who the console is talking to the backend as."""

    authenticated: bool
    is_admin: bool = False
    user: dict[str, Any] | None = None
    recently_viewed: list[dict[str, Any]] = Field(default_factory=list)
