"""Speech recognizer protocol.

A recognizer turns microphone audio into text and reports its progress
through a listener, the same way a browser speech engine fires
``onstart``/``onresult``/``onerror``/``onend``.

Implementations can include:
- SpeechRecognition package over the local microphone (default)
- NullRecognizer for platforms without speech support
"""

from typing import Protocol, runtime_checkable


@runtime_checkable
class RecognitionListener(Protocol):
    """Receiver of recognizer events.

    Events for one session arrive in order: ``on_start``, zero or more
    ``on_result``, at most one ``on_error``, then ``on_end``.
    """

    def on_start(self) -> None: ...

    def on_result(self, transcript: str, is_final: bool) -> None: ...

    def on_error(self, code: str) -> None: ...

    def on_end(self) -> None: ...


@runtime_checkable
class SpeechRecognizer(Protocol):
    """Protocol for speech-to-text engines."""

    @property
    def is_supported(self) -> bool:
        """Whether this engine can run on the current platform."""
        ...

    def start(self, listener: RecognitionListener) -> None:
        """Begin one non-continuous listening session.

        Raises:
            SpeechRecognizerError: If the session cannot begin
        """
        ...

    def stop(self) -> None:
        """Ask the engine to finish; ``on_end`` acknowledges later."""
        ...

    def abort(self) -> None:
        """Cancel immediately and deliver no further events."""
        ...
