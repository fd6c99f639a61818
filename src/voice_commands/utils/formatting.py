"""Display helpers for command results and history entries."""

import re
from datetime import date, datetime, timezone

from voice_commands.catalog import FORMATS
from voice_commands.config import settings

_STATUS_DISPLAY = {
    "EXECUTED": "✅ Ejecutado",
    "FAILED": "❌ Fallido",
    "PROCESSING": "⏳ Procesando...",
}


def format_confidence(score: float) -> str:
    """Format a [0, 1] confidence score as a whole percentage."""
    return f"{score * 100:.0f}%"


def confidence_level(score: float) -> str:
    """Classify a confidence score as 'high', 'medium' or 'low'."""
    if score >= settings.confidence_high:
        return "high"
    if score >= settings.confidence_medium:
        return "medium"
    return "low"


def format_processing_time(ms: float) -> str:
    if ms < 1000:
        return f"{ms:g}ms"
    return f"{ms / 1000:.2f}s"


def truncate_text(text: str | None, max_length: int = 100) -> str | None:
    if not text or len(text) <= max_length:
        return text
    return f"{text[:max_length]}..."


def status_display(status: str) -> str:
    return _STATUS_DISPLAY.get(status, status)


def clean_report_type(report_type: str) -> str:
    """Replace every non-alphanumeric ASCII character with '_' and lower-case."""
    return re.sub(r"[^a-zA-Z0-9]", "_", report_type).lower()


def generate_filename(
    report_type: str,
    kind: str,
    command_id: int | str,
    today: date | None = None,
) -> str:
    """Build ``{clean_report_type}_{yyyy-mm-dd}_{id}{ext}``.

    Args:
        report_type: Report type or base name
        kind: Format key ("pdf", "excel", "json"); unknown keys get no extension
        command_id: Command identifier
        today: Date to stamp. Defaults to the current UTC date.

    Returns:
        The file name
    """
    today = today or datetime.now(timezone.utc).date()
    report_format = FORMATS.get(kind)
    extension = report_format.extension if report_format else ""
    return f"{clean_report_type(report_type)}_{today.isoformat()}_{command_id}{extension}"
