"""Speech capture state machine.

Wraps a SpeechRecognizer and exposes one listening attempt at a time as a
SpeechSession snapshot. The recognizer drives the transitions through the
RecognitionListener callbacks implemented here.
"""

import logging
from dataclasses import replace
from typing import Callable

from voice_commands.dto import SpeechStateResponse
from voice_commands.entities import SpeechErrorKind, SpeechSession, SpeechState
from voice_commands.errors import CONNECTION_ERROR, SpeechRecognizerError
from voice_commands.protocols import SpeechRecognizer
from voice_commands.repositories import SpeechRecognitionRecognizer

logger = logging.getLogger(__name__)

SPEECH_ERROR_MESSAGES: dict[SpeechErrorKind, str] = {
    SpeechErrorKind.NO_SPEECH: "No se detectó ningún audio. Por favor, intenta de nuevo.",
    SpeechErrorKind.AUDIO_CAPTURE: "No se pudo acceder al micrófono. Verifica los permisos.",
    SpeechErrorKind.NOT_ALLOWED: "Permiso de micrófono denegado. Por favor, habilita el acceso.",
    SpeechErrorKind.NETWORK: CONNECTION_ERROR,
    SpeechErrorKind.ABORTED: "Reconocimiento de voz cancelado.",
    SpeechErrorKind.SERVICE_NOT_ALLOWED: (
        "Servicio no permitido. Verifica que estés en HTTPS o localhost."
    ),
    SpeechErrorKind.UNSUPPORTED: "El reconocimiento de voz no está disponible en este equipo.",
    SpeechErrorKind.START_FAILED: "Error al iniciar el reconocimiento de voz.",
}

SessionObserver = Callable[[SpeechSession], None]


class SpeechCapture:
    """One-shot speech-to-text capture with observable state.

    States are derived from the session snapshot:
    - LISTENING while the recognizer captures audio
    - ERROR_REPORTED after a failed attempt, until the next start or reset
    - IDLE otherwise

    Example:
        ```python
        with SpeechCapture.create() as capture:
            capture.subscribe(lambda session: print(session.transcript))
            capture.start()
        ```
    """

    def __init__(self, recognizer: SpeechRecognizer) -> None:
        """Initialize the capture.

        Args:
            recognizer: Speech-to-text engine (required).
        """
        self._recognizer = recognizer
        self._session = SpeechSession()
        self._observers: list[SessionObserver] = []
        self._closed = False

    @classmethod
    def create(cls, recognizer: SpeechRecognizer | None = None) -> "SpeechCapture":
        """Factory method to create SpeechCapture with the default engine.

        Args:
            recognizer: Speech engine. If None, uses the local microphone
                through SpeechRecognitionRecognizer.

        Returns:
            Configured SpeechCapture
        """
        return cls(recognizer=recognizer or SpeechRecognitionRecognizer.create())

    # State

    @property
    def session(self) -> SpeechSession:
        return self._session

    @property
    def state(self) -> SpeechState:
        return self._session.state

    @property
    def is_listening(self) -> bool:
        return self._session.is_listening

    @property
    def transcript(self) -> str:
        return self._session.transcript

    @property
    def error(self) -> str | None:
        return self._session.error

    @property
    def is_supported(self) -> bool:
        return self._recognizer.is_supported

    def subscribe(self, observer: SessionObserver) -> Callable[[], None]:
        """Register a callback invoked with every new session snapshot.

        Returns:
            A function that removes the callback
        """
        self._observers.append(observer)

        def unsubscribe() -> None:
            if observer in self._observers:
                self._observers.remove(observer)

        return unsubscribe

    def _update(self, **changes) -> None:
        previous = self._session
        self._session = replace(previous, **changes)
        if self._session == previous:
            return
        for observer in list(self._observers):
            observer(self._session)

    # Commands

    def start(self) -> None:
        """Begin listening; no-op while already listening."""
        if self._closed or self._session.is_listening:
            return

        if not self._recognizer.is_supported:
            self._report(SpeechErrorKind.UNSUPPORTED)
            return

        self._update(is_listening=True, transcript="", error=None, error_kind=None)
        try:
            self._recognizer.start(self)
        except SpeechRecognizerError as e:
            logger.error("Error starting speech recognition: %s", e)
            self._report(SpeechErrorKind.START_FAILED)

    def stop(self) -> None:
        """Ask the recognizer to finish; ``on_end`` completes the transition."""
        if self._session.is_listening:
            self._recognizer.stop()

    def reset(self) -> None:
        """Forget the transcript and error of the last attempt."""
        self._update(transcript="", error=None, error_kind=None)

    def close(self) -> None:
        """Abort the recognizer, drop every observer and forget the session."""
        self._closed = True
        self._recognizer.abort()
        self._observers.clear()
        self._session = SpeechSession()

    def __enter__(self) -> "SpeechCapture":
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()

    # RecognitionListener

    def on_start(self) -> None:
        logger.debug("Speech recognition started")

    def on_result(self, transcript: str, is_final: bool) -> None:
        if self._session.is_listening:
            self._update(transcript=transcript)

    def on_error(self, code: str) -> None:
        if not self._session.is_listening:
            return

        kind = SpeechErrorKind.from_code(code)
        if kind is SpeechErrorKind.NETWORK and self._session.transcript:
            # Transcript already captured
            logger.warning("Ignoring network error after transcript was captured")
            self._update(is_listening=False)
            return

        logger.error("Speech recognition error: %s", code)
        self._report(kind, code)

    def on_end(self) -> None:
        logger.debug("Speech recognition ended")
        self._update(is_listening=False)

    def _report(self, kind: SpeechErrorKind, code: str | None = None) -> None:
        message = SPEECH_ERROR_MESSAGES.get(kind) or f"Error: {code or kind.value}"
        self._update(is_listening=False, error=message, error_kind=kind)

    def to_response(self) -> SpeechStateResponse:
        """Get the current state as a DTO."""
        session = self._session
        return SpeechStateResponse(
            state=session.state.value,
            is_listening=session.is_listening,
            is_supported=self.is_supported,
            transcript=session.transcript,
            error=session.error,
            error_kind=session.error_kind.value if session.error_kind else None,
        )
