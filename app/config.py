"""Application settings loaded from .env via pydantic-settings."""

from functools import lru_cache
from typing import List

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Central configuration — values come from environment / .env file."""

    # Ingestion
    allowed_mime_types: List[str] = [
        "audio/mpeg",
        "audio/wav",
        "audio/mp3",
        "audio/x-m4a",
        "audio/aac",
        "audio/flac",
        "audio/ogg",
    ]
    # Only consulted when the MIME type is empty.
    allowed_extensions: List[str] = ["mp3", "wav", "m4a", "aac", "flac", "ogg"]
    untitled_title: str = "Untitled Suno Track"

    # Duration probing
    probe_timeout_seconds: float = 10.0

    # Presentation
    waveform_bars: int = 32

    # Logging
    log_level: str = "INFO"

    model_config = {
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "extra": "ignore",
    }


@lru_cache
def get_settings() -> Settings:
    """Cached singleton so .env is read only once."""
    return Settings()
