"""HTTP handlers for speech capture."""

from voice_commands.dto import SpeechStateResponse
from voice_commands.services import CommandInput, SpeechCapture


class SpeechHandler:
    """HTTP handlers for the microphone state machine.

    The capture reports its own failures as state (``error``), so these
    handlers only forward commands and return the resulting snapshot.
    """

    def __init__(self, command_input: CommandInput) -> None:
        self._input = command_input
        self._capture: SpeechCapture = command_input.capture

    async def start(self) -> SpeechStateResponse:
        """Handle POST /speech/start requests."""
        self._capture.start()
        return self._capture.to_response()

    async def stop(self) -> SpeechStateResponse:
        """Handle POST /speech/stop requests."""
        self._capture.stop()
        return self._capture.to_response()

    async def toggle(self) -> SpeechStateResponse:
        """Handle POST /speech/toggle requests."""
        self._input.toggle_voice()
        return self._capture.to_response()

    async def reset(self) -> SpeechStateResponse:
        """Handle POST /speech/reset requests."""
        self._capture.reset()
        return self._capture.to_response()

    async def get_state(self) -> SpeechStateResponse:
        """Handle GET /speech/state requests."""
        return self._capture.to_response()

    @property
    def is_supported(self) -> bool:
        return self._capture.is_supported
