import logging
import os
from dataclasses import dataclass
from functools import lru_cache

from dotenv import load_dotenv

load_dotenv()


@dataclass(frozen=True)
class Settings:
    """Application settings loaded from environment variables."""

    # Backend
    api_base_url: str = os.getenv("VOICE_API_URL", "http://127.0.0.1:8000")
    processing_timeout: float = float(os.getenv("PROCESSING_TIMEOUT", "30"))
    download_timeout: float = float(os.getenv("DOWNLOAD_TIMEOUT", "60"))

    # Command cache
    cache_ttl: float = float(os.getenv("COMMAND_CACHE_TTL", "300"))  # 5 minutes
    cache_max_size: int = int(os.getenv("COMMAND_CACHE_MAX_SIZE", "50"))

    # Command limits
    min_command_length: int = int(os.getenv("COMMAND_MIN_LENGTH", "3"))
    max_command_length: int = int(os.getenv("COMMAND_MAX_LENGTH", "1000"))
    history_page_size: int = int(os.getenv("HISTORY_PAGE_SIZE", "20"))

    # Confidence thresholds
    confidence_high: float = float(os.getenv("CONFIDENCE_HIGH", "0.7"))
    confidence_medium: float = float(os.getenv("CONFIDENCE_MEDIUM", "0.4"))

    # Speech
    speech_language: str = os.getenv("SPEECH_LANGUAGE", "es-ES")
    speech_phrase_time_limit: float = float(os.getenv("SPEECH_PHRASE_TIME_LIMIT", "10"))
    speech_listen_timeout: float = float(os.getenv("SPEECH_LISTEN_TIMEOUT", "5"))

    # Local state
    session_file: str = os.getenv("SESSION_FILE", ".voice_commands/session.json")
    download_dir: str = os.getenv("DOWNLOAD_DIR", "downloads")
    auth_token_key: str = os.getenv("AUTH_TOKEN_KEY", "authToken")

    # Console API
    api_host: str = os.getenv("API_HOST", "127.0.0.1")
    api_port: int = int(os.getenv("API_PORT", "8100"))
    api_reload: bool = os.getenv("API_RELOAD", "false").lower() == "true"

    log_level: str = os.getenv("LOG_LEVEL", "INFO")

    @property
    def commands_url(self) -> str:
        """Base URL of the voice-commands REST resource."""
        return f"{self.api_base_url.rstrip('/')}/api/voice-commands/"

    def __post_init__(self) -> None:
        """Validate settings after initialization."""
        if self.cache_ttl <= 0:
            raise ValueError("COMMAND_CACHE_TTL must be positive")

        if self.cache_max_size < 1:
            raise ValueError("COMMAND_CACHE_MAX_SIZE must be at least 1")

        if not 0 < self.min_command_length <= self.max_command_length:
            raise ValueError(
                f"COMMAND_MIN_LENGTH must be between 1 and COMMAND_MAX_LENGTH, "
                f"got {self.min_command_length}"
            )

        if not 0 <= self.confidence_medium <= self.confidence_high <= 1:
            raise ValueError("Confidence thresholds must satisfy 0 <= medium <= high <= 1")


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()


# Global settings instance
settings = get_settings()


def configure_logging(level: str | None = None) -> None:
    """Configure root logging for the console app."""
    logging.basicConfig(
        level=(level or settings.log_level).upper(),
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    )
