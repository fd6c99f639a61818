from typing import Any

from fastapi import Depends, FastAPI
from fastapi.middleware.cors import CORSMiddleware

from voice_commands.api.dependencies import (
    CommandHandlerDep,
    SessionHandlerDep,
    SpeechHandlerDep,
    lifespan,
)
from voice_commands.catalog import EXAMPLES
from voice_commands.config import settings
from voice_commands.dto import (
    CommandOutcome,
    DownloadKind,
    DownloadOutcome,
    HealthCheckResponse,
    HistoryQuery,
    HistoryResponse,
    LoginRequest,
    PipelineState,
    ProcessCommandRequest,
    SessionResponse,
    SpeechStateResponse,
    SuggestionRequest,
    ViewedProductRequest,
)

app = FastAPI(
    title="Voice Commands Console API",
    description="Local console for natural-language report commands with speech input",
    version="0.1.0",
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,  # type: ignore[arg-type]
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.get("/")
async def root() -> dict[str, Any]:
    """Root endpoint with API information."""
    return {
        "name": "Voice Commands Console API",
        "version": "0.1.0",
        "backend": settings.commands_url,
        "endpoints": {
            "commands": "/commands",
            "speech": "/speech",
            "session": "/session",
            "examples": "/examples",
            "health": "/health",
            "docs": "/docs",
        },
    }


@app.get("/health", response_model=HealthCheckResponse)
async def health(handler: CommandHandlerDep, speech: SpeechHandlerDep) -> HealthCheckResponse:
    """Health check endpoint."""
    return await handler.health_check(speech_supported=speech.is_supported)


@app.get("/examples", response_model=dict[str, list[str]])
async def examples() -> dict[str, list[str]]:
    """Example commands grouped by category."""
    return EXAMPLES


# Commands


@app.post("/commands/process", response_model=CommandOutcome)
async def process_command(
    request: ProcessCommandRequest, handler: CommandHandlerDep
) -> CommandOutcome:
    """
    Submit a command and refresh the history.

    Args:
        request: Command text as typed or dictated.

    Returns:
        The outcome, including suggestions when the command was ambiguous.
    """
    return await handler.process_command(request)


@app.post("/commands/reuse", response_model=CommandOutcome)
async def reuse_command(
    request: ProcessCommandRequest, handler: CommandHandlerDep
) -> CommandOutcome:
    """Re-run a command taken from the history."""
    return await handler.reuse_command(request)


@app.post("/commands/suggestion", response_model=CommandOutcome)
async def use_suggestion(request: SuggestionRequest, handler: CommandHandlerDep) -> CommandOutcome:
    """Run the report behind one of the offered suggestions."""
    return await handler.use_suggestion(request)


@app.get("/commands/state", response_model=PipelineState)
async def get_state(handler: CommandHandlerDep) -> PipelineState:
    """Current result, error, suggestions, history and cache statistics."""
    return await handler.get_state()


@app.get("/commands/history", response_model=HistoryResponse)
async def get_history(
    handler: CommandHandlerDep, query: HistoryQuery = Depends()
) -> HistoryResponse:
    """Fetch one page of the command history."""
    return await handler.get_history(query)


@app.get("/commands/capabilities", response_model=dict[str, Any])
async def get_capabilities(handler: CommandHandlerDep) -> dict[str, Any]:
    """Report types and formats supported by the backend."""
    return await handler.get_capabilities()


@app.delete("/commands/result", response_model=PipelineState)
async def clear_result(handler: CommandHandlerDep) -> PipelineState:
    """Dismiss the current result, error and suggestions."""
    return await handler.clear_result()


@app.delete("/commands/cache", response_model=dict[str, Any])
async def clear_cache(handler: CommandHandlerDep) -> dict[str, Any]:
    """Clear all cached command results."""
    return await handler.clear_cache()


@app.get("/commands/{command_id}", response_model=dict[str, Any])
async def get_command(command_id: int, handler: CommandHandlerDep) -> dict[str, Any]:
    """Fetch one executed command from the backend."""
    return await handler.get_command(command_id)


@app.post("/commands/{command_id}/download/{kind}", response_model=DownloadOutcome)
async def download(
    command_id: int, kind: DownloadKind, handler: CommandHandlerDep
) -> DownloadOutcome:
    """
    Save the report of an executed command to the download directory.

    Args:
        command_id: Identifier of the executed command.
        kind: "pdf", "excel" or "json".

    Returns:
        Where the file was written.
    """
    return await handler.download(command_id, kind)


# Speech


@app.post("/speech/start", response_model=SpeechStateResponse)
async def start_listening(handler: SpeechHandlerDep) -> SpeechStateResponse:
    """Start a dictation; the command is submitted when it ends."""
    return await handler.start()


@app.post("/speech/stop", response_model=SpeechStateResponse)
async def stop_listening(handler: SpeechHandlerDep) -> SpeechStateResponse:
    """Ask the recognizer to finish the current dictation."""
    return await handler.stop()


@app.post("/speech/toggle", response_model=SpeechStateResponse)
async def toggle_listening(handler: SpeechHandlerDep) -> SpeechStateResponse:
    """Stop when listening, otherwise clear the input and start."""
    return await handler.toggle()


@app.post("/speech/reset", response_model=SpeechStateResponse)
async def reset_speech(handler: SpeechHandlerDep) -> SpeechStateResponse:
    """Forget the last transcript and error."""
    return await handler.reset()


@app.get("/speech/state", response_model=SpeechStateResponse)
async def speech_state(handler: SpeechHandlerDep) -> SpeechStateResponse:
    """Current microphone state and transcript."""
    return await handler.get_state()



# Session


@app.get("/session", response_model=SessionResponse)
async def get_session(handler: SessionHandlerDep) -> SessionResponse:
    """Whether a backend token is stored, and for whom."""
    return await handler.get_session()


@app.post("/session", response_model=SessionResponse)
async def login(request: LoginRequest, handler: SessionHandlerDep) -> SessionResponse:
    """
    Store the token issued by the backend login.

    Every later backend call carries it as "Authorization: Token <token>".
    """
    return await handler.login(request)


@app.delete("/session", response_model=SessionResponse)
async def logout(handler: SessionHandlerDep) -> SessionResponse:
    """Forget the stored token and profile."""
    return await handler.logout()


@app.post("/session/recently-viewed", response_model=SessionResponse)
async def remember_viewed(
    request: ViewedProductRequest, handler: SessionHandlerDep
) -> SessionResponse:
    """Put a product at the front of the recently viewed list."""
    return await handler.remember_viewed(request)


@app.delete("/session/recently-viewed", response_model=SessionResponse)
async def clear_viewed(handler: SessionHandlerDep) -> SessionResponse:
    """Empty the recently viewed list."""
    return await handler.clear_viewed()


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "voice_commands.api.app:app",
        host=settings.api_host,
        port=settings.api_port,
        reload=settings.api_reload,
    )
