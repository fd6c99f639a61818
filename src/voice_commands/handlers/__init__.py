"""Handler layer for HTTP endpoints.

This layer contains the HTTP request/response handlers.
Handlers depend on services (business logic), not directly on repositories.

Architecture:
    Handler -> Service -> Repository
    (HTTP)  -> (Business) -> (Data Access)
"""

from .command_handler import CommandHandler
from .session_handler import SessionHandler
from .speech_handler import SpeechHandler

__all__ = [
    "CommandHandler",
    "SessionHandler",
    "SpeechHandler",
]
