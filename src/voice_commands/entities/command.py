"""Command domain entity."""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any


class CommandStatus(str, Enum):
    """Lifecycle status reported by the backend."""

    EXECUTED = "EXECUTED"
    FAILED = "FAILED"
    PROCESSING = "PROCESSING"


@dataclass(frozen=True)
class Command:
    """A natural-language report request.

    Built client-side when submitted (``PROCESSING``, no ``id``) and replaced
    by the backend's view once a response arrives. Never mutated afterwards.

    Attributes:
        text: Trimmed command text
        id: Identifier assigned by the backend, None while pending
        status: EXECUTED, FAILED or PROCESSING
        confidence: Interpretation certainty in [0, 1]
        processing_time_ms: Backend processing time
        result_data: Opaque report payload (report_info, parameters, data...)
        error_message: Failure description for FAILED commands
        command_type: Report type detected by the backend
        created_at: ISO timestamp assigned by the backend
    """

    text: str
    id: int | None = None
    status: CommandStatus = CommandStatus.PROCESSING
    confidence: float = 0.0
    processing_time_ms: float = 0.0
    result_data: dict[str, Any] = field(default_factory=dict)
    error_message: str | None = None
    command_type: str | None = None
    created_at: str | None = None

    @classmethod
    def pending(cls, text: str) -> "Command":
        """Create the client-side command for a new submission."""
        return cls(text=text.strip())

    @classmethod
    def from_payload(cls, payload: dict[str, Any]) -> "Command":
        """Build a command from a backend result payload."""
        status = payload.get("status") or CommandStatus.PROCESSING.value
        return cls(
            text=(payload.get("command_text") or "").strip(),
            id=payload.get("id"),
            status=CommandStatus(status),
            confidence=float(payload.get("confidence_score") or 0.0),
            processing_time_ms=float(payload.get("processing_time_ms") or 0.0),
            result_data=payload.get("result_data") or {},
            error_message=payload.get("error_message"),
            command_type=payload.get("command_type"),
            created_at=payload.get("created_at"),
        )

    @property
    def report_type(self) -> str | None:
        """Report type from ``result_data.report_info.type``, if present."""
        report_info = self.result_data.get("report_info") or {}
        return report_info.get("type")
