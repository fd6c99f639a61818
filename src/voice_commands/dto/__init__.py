"""Data Transfer Objects for wire contracts.

These Pydantic models describe the remote backend's payloads and the
console API's request/response bodies.

Internal domain logic should use entities from the entities package.
"""

from .requests import (
    HistoryQuery,
    LoginRequest,
    ProcessCommandRequest,
    SuggestionRequest,
    ViewedProductRequest,
)
from .responses import (
    CacheStats,
    CommandHistoryEntry,
    CommandOutcome,
    CommandResult,
    DownloadKind,
    DownloadOutcome,
    HealthCheckResponse,
    HistoryResponse,
    PipelineState,
    ProcessCommandResponse,
    SessionResponse,
    SpeechStateResponse,
    Suggestion,
)

__all__ = [
    "ProcessCommandRequest",
    "HistoryQuery",
    "SuggestionRequest",
    "LoginRequest",
    "ViewedProductRequest",
    "Suggestion",
    "CommandResult",
    "ProcessCommandResponse",
    "CommandHistoryEntry",
    "HistoryResponse",
    "CommandOutcome",
    "DownloadKind",
    "DownloadOutcome",
    "CacheStats",
    "PipelineState",
    "SessionResponse",
    "SpeechStateResponse",
    "HealthCheckResponse",
]
