"""Protocol interfaces for swappable implementations.

This package contains protocol definitions using structural typing.
Protocols enable:
- Easy swapping of implementations (HTTP backend -> fake, microphone -> null)
- Unit testing with fake implementations
- Clear separation of concerns
"""

from .blob_saver import BlobSaver
from .command_cache import CommandCache
from .command_gateway import CommandGateway
from .session_store import SessionStore
from .speech_recognizer import RecognitionListener, SpeechRecognizer

__all__ = [
    "BlobSaver",
    "CommandCache",
    "CommandGateway",
    "RecognitionListener",
    "SessionStore",
    "SpeechRecognizer",
]
