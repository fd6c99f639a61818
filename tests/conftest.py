"""
Shared fakes for the protocol seams.
"""

import asyncio
from typing import Any

import pytest

from voice_commands.dto import (
    CommandResult,
    HistoryResponse,
    ProcessCommandResponse,
    Suggestion,
)
from voice_commands.errors import SpeechRecognizerError
from voice_commands.repositories import MemoryCommandCache, MemorySessionStore
from voice_commands.services import CommandPipeline, SpeechCapture


def executed(command_id: int = 42, text: str = "reporte de ventas del último mes", **extra) -> ProcessCommandResponse:
    """Build a successful backend verdict."""
    data = {
        "id": command_id,
        "command_text": text,
        "status": "EXECUTED",
        "confidence_score": 0.92,
        "processing_time_ms": 850,
        "command_type": "ventas_basico",
        "result_data": {"report_info": {"type": "ventas_basico"}, "data": []},
    }
    data.update(extra)
    return ProcessCommandResponse(success=True, data=CommandResult(**data))


def ambiguous(*names: str) -> ProcessCommandResponse:
    """Build a soft failure carrying suggestions."""
    return ProcessCommandResponse(
        success=False,
        data=CommandResult(error_message="Comando ambiguo"),
        suggestions=[Suggestion(name=name, type="ventas_basico") for name in names],
    )


class FakeClock:
    """Manually advanced time source, in seconds."""

    def __init__(self, now: float = 1000.0) -> None:
        self.now = now

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


class FakeGateway:
    """In-memory CommandGateway with scripted responses."""

    def __init__(self) -> None:
        self.responses: dict[str, Any] = {}
        self.default: Any = executed()
        self.gates: dict[str, asyncio.Event] = {}
        self.process_calls: list[str] = []
        self.history: Any = HistoryResponse(success=True, data=[], count=0)
        self.history_calls: list[dict[str, Any]] = []
        self.capabilities: Any = {"report_types": ["ventas_basico"]}
        self.commands: dict[int, Any] = {}
        self.downloads: dict[tuple[int, str], Any] = {}
        self.download_calls: list[tuple[int, str]] = []

    @staticmethod
    def _resolve(value: Any) -> Any:
        if isinstance(value, Exception):
            raise value
        return value

    async def process_command(self, text: str) -> ProcessCommandResponse:
        self.process_calls.append(text)
        gate = self.gates.get(text)
        if gate is not None:
            await gate.wait()
        return self._resolve(self.responses.get(text, self.default))

    async def get_history(self, **params: Any) -> HistoryResponse:
        self.history_calls.append(params)
        return self._resolve(self.history)

    async def get_capabilities(self) -> dict[str, Any]:
        return self._resolve(self.capabilities)

    async def get_command(self, command_id: int) -> dict[str, Any]:
        return self._resolve(self.commands[command_id])

    async def download(self, command_id: int, kind: str) -> bytes:
        self.download_calls.append((command_id, kind))
        return self._resolve(self.downloads.get((command_id, kind), b"%PDF-1.4"))


class FakeSaver:
    """BlobSaver that keeps files in a dict."""

    def __init__(self, fail: bool = False) -> None:
        self.files: dict[str, bytes] = {}
        self.media_types: dict[str, str] = {}
        self.fail = fail

    def save(self, content: bytes, filename: str, media_type: str) -> str:
        if self.fail:
            raise OSError("disk full")
        self.files[filename] = content
        self.media_types[filename] = media_type
        return f"/downloads/{filename}"


class FakeRecognizer:
    """SpeechRecognizer driven by the test through the captured listener."""

    def __init__(self, supported: bool = True, fail_start: bool = False) -> None:
        self.supported = supported
        self.fail_start = fail_start
        self.listener = None
        self.started = 0
        self.stopped = 0
        self.aborted = 0

    @property
    def is_supported(self) -> bool:
        return self.supported

    def start(self, listener) -> None:
        if self.fail_start:
            raise SpeechRecognizerError("device busy")
        self.started += 1
        self.listener = listener
        listener.on_start()

    def stop(self) -> None:
        self.stopped += 1

    def abort(self) -> None:
        self.aborted += 1

    # Helpers that play the engine's side of a session

    def say(self, transcript: str) -> None:
        self.listener.on_result(transcript, True)

    def fail(self, code: str) -> None:
        self.listener.on_error(code)
        self.listener.on_end()

    def end(self) -> None:
        self.listener.on_end()


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def gateway():
    return FakeGateway()


@pytest.fixture
def saver():
    return FakeSaver()


@pytest.fixture
def cache(clock):
    return MemoryCommandCache(ttl=300, max_size=50, clock=clock)


@pytest.fixture
def pipeline(gateway, cache, saver):
    return CommandPipeline(gateway=gateway, cache=cache, blob_saver=saver)


@pytest.fixture
def recognizer():
    return FakeRecognizer()


@pytest.fixture
def capture(recognizer):
    return SpeechCapture(recognizer=recognizer)


@pytest.fixture
def store():
    return MemorySessionStore()
