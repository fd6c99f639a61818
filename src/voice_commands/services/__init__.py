"""Service layer for business logic.

Services depend on protocols (interfaces), not concrete implementations,
making them testable and flexible.

Architecture:
    Handler -> Service -> Repository
    (HTTP)  -> (Business) -> (Data Access)

Usage:
    ```python
    from voice_commands.repositories import HttpCommandGateway
    from voice_commands.services import CommandInput, CommandPipeline, SpeechCapture

    pipeline = CommandPipeline.create(gateway=HttpCommandGateway.create())
    capture = SpeechCapture.create()
    command_input = CommandInput(pipeline=pipeline, capture=capture)
    ```
"""

from . import session
from .command_input import CommandInput
from .command_pipeline import CommandPipeline
from .speech_capture import SPEECH_ERROR_MESSAGES, SpeechCapture
from .validation import ValidationErrorKind, ValidationResult, validate_command

__all__ = [
    "CommandInput",
    "CommandPipeline",
    "SPEECH_ERROR_MESSAGES",
    "SpeechCapture",
    "ValidationErrorKind",
    "ValidationResult",
    "session",
    "validate_command",
]
