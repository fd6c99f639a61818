"""Speech recognizer for platforms without speech support."""

from voice_commands.errors import SpeechRecognizerError
from voice_commands.protocols import RecognitionListener


class NullRecognizer:
    """Recognizer that is never supported.

    This class satisfies the SpeechRecognizer protocol. ``start`` always
    fails, so a capture built on it reports the unsupported error.
    """

    @property
    def is_supported(self) -> bool:
        return False

    def start(self, listener: RecognitionListener) -> None:
        raise SpeechRecognizerError("Speech recognition is not supported on this platform")

    def stop(self) -> None:
        pass

    def abort(self) -> None:
        pass
