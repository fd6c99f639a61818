"""Repository layer for external resources.

This layer abstracts external dependencies (REST backend, microphone,
filesystem, session persistence) behind protocol-based interfaces. This
enables:
- Easy swapping of implementations (microphone -> null recognizer, etc.)
- Unit testing with fake implementations
- Clear separation of concerns

The repositories are protocol-based (structural typing), not
inheritance-based.
"""

from .file_blob_saver import FileBlobSaver
from .http_command_gateway import HttpCommandGateway
from .json_file_session_store import JsonFileSessionStore
from .memory_command_cache import MemoryCommandCache
from .memory_session_store import MemorySessionStore
from .null_recognizer import NullRecognizer
from .speech_recognition_recognizer import SpeechRecognitionRecognizer

__all__ = [
    "FileBlobSaver",
    "HttpCommandGateway",
    "JsonFileSessionStore",
    "MemoryCommandCache",
    "MemorySessionStore",
    "NullRecognizer",
    "SpeechRecognitionRecognizer",
]
