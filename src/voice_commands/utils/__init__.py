"""Utility modules for voice commands."""

from .formatting import (
    clean_report_type,
    confidence_level,
    format_confidence,
    format_processing_time,
    generate_filename,
    status_display,
    truncate_text,
)

__all__ = [
    "clean_report_type",
    "confidence_level",
    "format_confidence",
    "format_processing_time",
    "generate_filename",
    "status_display",
    "truncate_text",
]
