"""Local validation of command text.

Input errors never reach the network; they are reported with a fixed
Spanish message so the UI can show them directly.
"""

from dataclasses import dataclass
from enum import Enum

from voice_commands.config import settings


class ValidationErrorKind(str, Enum):
    EMPTY_COMMAND = "empty_command"
    TOO_SHORT = "too_short"
    TOO_LONG = "too_long"


@dataclass(frozen=True)
class ValidationResult:
    """Outcome of validating a command text."""

    valid: bool
    kind: ValidationErrorKind | None = None
    error: str | None = None

    def __bool__(self) -> bool:
        return self.valid


OK = ValidationResult(valid=True)


def validate_command(
    text: str | None,
    min_length: int | None = None,
    max_length: int | None = None,
) -> ValidationResult:
    """Check a command text against the length rules.

    Lengths are measured after trimming surrounding whitespace.

    Args:
        text: Raw command text
        min_length: Minimum trimmed length. Defaults to settings.
        max_length: Maximum trimmed length. Defaults to settings.

    Returns:
        ``OK`` or a failed ValidationResult carrying the kind and message
    """
    min_length = min_length or settings.min_command_length
    max_length = max_length or settings.max_command_length
    stripped = (text or "").strip()

    if not stripped:
        return ValidationResult(
            valid=False,
            kind=ValidationErrorKind.EMPTY_COMMAND,
            error="El comando no puede estar vacío.",
        )

    if len(stripped) < min_length:
        return ValidationResult(
            valid=False,
            kind=ValidationErrorKind.TOO_SHORT,
            error=f"El comando debe tener al menos {min_length} caracteres.",
        )

    if len(stripped) > max_length:
        return ValidationResult(
            valid=False,
            kind=ValidationErrorKind.TOO_LONG,
            error=f"El comando es demasiado largo (máximo {max_length} caracteres).",
        )

    return OK
