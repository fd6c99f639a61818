"""Voice Commands - natural-language report commands with speech input.

This package provides a layered architecture for the command client:

Layers:
    - protocols: Interface contracts (CommandGateway, CommandCache,
      SpeechRecognizer, SessionStore, BlobSaver)
    - repositories: Backend, cache, microphone and storage implementations
    - services: Command pipeline, speech capture and input controller
    - handlers: HTTP endpoint handlers for the local console
    - dto: Data transfer objects (wire contracts)
    - entities: Domain models (internal)

Usage:
    ```python
    from voice_commands.repositories import HttpCommandGateway
    from voice_commands.services import CommandPipeline

    pipeline = CommandPipeline.create(gateway=HttpCommandGateway.create())
    outcome = await pipeline.process("top 10 productos más vendidos")
    ```

For the local console API:
    ```python
    from voice_commands.api.app import app
    ```
"""

from voice_commands.config import settings
from voice_commands.dto import CommandOutcome, CommandResult, PipelineState, Suggestion
from voice_commands.entities import Command, CommandStatus, SpeechSession, SpeechState
from voice_commands.errors import CommandServiceError, SessionStoreError, SpeechRecognizerError
from voice_commands.protocols import (
    BlobSaver,
    CommandCache,
    CommandGateway,
    SessionStore,
    SpeechRecognizer,
)
from voice_commands.repositories import HttpCommandGateway, MemoryCommandCache
from voice_commands.services import CommandInput, CommandPipeline, SpeechCapture

__all__ = [
    # Configuration
    "settings",
    # Protocols (interfaces)
    "BlobSaver",
    "CommandCache",
    "CommandGateway",
    "SessionStore",
    "SpeechRecognizer",
    # Services (business logic)
    "CommandInput",
    "CommandPipeline",
    "SpeechCapture",
    # Repositories
    "HttpCommandGateway",
    "MemoryCommandCache",
    # Entities (domain models)
    "Command",
    "CommandStatus",
    "SpeechSession",
    "SpeechState",
    # DTOs (wire contracts)
    "CommandOutcome",
    "CommandResult",
    "PipelineState",
    "Suggestion",
    # Errors
    "CommandServiceError",
    "SessionStoreError",
    "SpeechRecognizerError",
]
