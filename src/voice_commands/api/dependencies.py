"""Dependency injection configuration for FastAPI app.

Uses FastAPI's app.state pattern for storing service instances.

Pattern:
    - Services stored in app.state during lifespan
    - Dependency functions retrieve from request.app.state
    - Clean separation, no global mutable state
"""

import logging
from contextlib import asynccontextmanager
from typing import Annotated

from fastapi import Depends, FastAPI, Request

from voice_commands.config import configure_logging, settings
from voice_commands.handlers import CommandHandler, SessionHandler, SpeechHandler
from voice_commands.repositories import (
    FileBlobSaver,
    HttpCommandGateway,
    JsonFileSessionStore,
    MemoryCommandCache,
)
from voice_commands.services import CommandInput, CommandPipeline, SpeechCapture

logger = logging.getLogger(__name__)


def get_command_handler(request: Request) -> CommandHandler:
    """Dependency injection for CommandHandler from app.state.

    Args:
        request: FastAPI Request object

    Returns:
        The CommandHandler instance from app.state

    Raises:
        RuntimeError: If handler is not initialized
    """
    handler = getattr(request.app.state, "command_handler", None)
    if handler is None:
        raise RuntimeError("CommandHandler not initialized. Check lifespan setup.")
    return handler


def get_speech_handler(request: Request) -> SpeechHandler:
    """Dependency injection for SpeechHandler from app.state.

    Raises:
        RuntimeError: If handler is not initialized
    """
    handler = getattr(request.app.state, "speech_handler", None)
    if handler is None:
        raise RuntimeError("SpeechHandler not initialized. Check lifespan setup.")
    return handler


def get_session_handler(request: Request) -> SessionHandler:
    """Dependency injection for SessionHandler from app.state.

    Raises:
        RuntimeError: If handler is not initialized
    """
    handler = getattr(request.app.state, "session_handler", None)
    if handler is None:
        raise RuntimeError("SessionHandler not initialized. Check lifespan setup.")
    return handler


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Lifespan context manager for FastAPI app.

    Initializes all layers and stores in app.state:
    1. Repositories (session file, REST gateway, cache, download folder)
    2. Services (pipeline, speech capture, input controller)
    3. Handlers (HTTP endpoints)

    Cleanup:
        Aborts the microphone, closes the HTTP client and removes
        everything from app.state on shutdown
    """
    configure_logging()

    session_store = JsonFileSessionStore.create()
    gateway = HttpCommandGateway.create(session_store=session_store)
    pipeline = CommandPipeline.create(
        gateway=gateway,
        cache=MemoryCommandCache.create(),
        blob_saver=FileBlobSaver.create(),
    )
    capture = SpeechCapture.create()
    command_input = CommandInput(pipeline=pipeline, capture=capture)

    app.state.session_store = session_store
    app.state.gateway = gateway
    app.state.command_input = command_input
    app.state.command_handler = CommandHandler(command_input=command_input)
    app.state.speech_handler = SpeechHandler(command_input=command_input)
    app.state.session_handler = SessionHandler(store=session_store)

    logger.info("Command backend: %s", settings.commands_url)
    logger.info("Speech recognition supported: %s", capture.is_supported)

    yield

    command_input.close()
    capture.close()
    await gateway.close()

    del app.state.session_handler
    del app.state.speech_handler
    del app.state.command_handler
    del app.state.command_input
    del app.state.gateway
    del app.state.session_store
    logger.info("Voice commands console shut down")


# Type aliases for cleaner dependency injection
CommandHandlerDep = Annotated[CommandHandler, Depends(get_command_handler)]
SpeechHandlerDep = Annotated[SpeechHandler, Depends(get_speech_handler)]
SessionHandlerDep = Annotated[SessionHandler, Depends(get_session_handler)]
