"""Speech session domain entity."""

from dataclasses import dataclass
from enum import Enum


class SpeechState(str, Enum):
    """Observable state of a speech capture."""

    IDLE = "idle"
    LISTENING = "listening"
    ERROR_REPORTED = "error_reported"


class SpeechErrorKind(str, Enum):
    """Normalized recognizer error taxonomy.

    Values are the vendor error codes recognizers report.
    """

    NO_SPEECH = "no-speech"
    AUDIO_CAPTURE = "audio-capture"
    NOT_ALLOWED = "not-allowed"
    NETWORK = "network"
    ABORTED = "aborted"
    SERVICE_NOT_ALLOWED = "service-not-allowed"
    UNSUPPORTED = "unsupported"
    START_FAILED = "start-failed"
    UNKNOWN = "unknown"

    @classmethod
    def from_code(cls, code: str) -> "SpeechErrorKind":
        try:
            return cls(code)
        except ValueError:
            return cls.UNKNOWN


@dataclass(frozen=True)
class SpeechSession:
    """Snapshot of one listening attempt.

    Attributes:
        is_listening: Whether the recognizer is currently capturing
        transcript: Last recognized utterance (interim or final)
        error: User-facing error message, None when no error is reported
        error_kind: Classified error, None when no error is reported
    """

    is_listening: bool = False
    transcript: str = ""
    error: str | None = None
    error_kind: SpeechErrorKind | None = None

    @property
    def state(self) -> SpeechState:
        if self.is_listening:
            return SpeechState.LISTENING
        if self.error is not None:
            return SpeechState.ERROR_REPORTED
        return SpeechState.IDLE
