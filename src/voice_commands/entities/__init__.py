"""Domain entities for internal representation.

These are plain dataclasses used internally by services and repositories.
They are NOT used for wire contracts - use DTOs from the dto package for
that.
"""

from .cache_entry import CacheEntry
from .command import Command, CommandStatus
from .speech_session import SpeechErrorKind, SpeechSession, SpeechState

__all__ = [
    "CacheEntry",
    "Command",
    "CommandStatus",
    "SpeechErrorKind",
    "SpeechSession",
    "SpeechState",
]
