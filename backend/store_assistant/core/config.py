"""Application configuration using Pydantic Settings."""

from functools import lru_cache
from pathlib import Path

from pydantic_settings import BaseSettings

# .env lives at the project root (one level above backend/)
_ENV_FILE = Path(__file__).resolve().parents[3] / ".env"


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    app_name: str = "ShelfCure Store Assistant"
    debug: bool = False

    # Store-manager backend (reasoning + document analysis service)
    api_base_url: str = "http://localhost:5000/api/store-manager"
    api_token: str | None = None
    request_timeout_seconds: float = 30.0

    # Error turns keep offering quick replies until this many failures in a row
    retry_warning_threshold: int = 2

    # Attachment validation
    max_attachment_bytes: int = 10 * 1024 * 1024
    allowed_attachment_types: list[str] = [
        "image/jpeg",
        "image/png",
        "image/jpg",
        "application/pdf",
    ]

    cors_origins: str = "http://localhost:5173,http://localhost:3000"

    class Config:
        env_file = str(_ENV_FILE)
        env_file_encoding = "utf-8"
        extra = "ignore"


@lru_cache()
def get_settings() -> Settings:
    """Cached settings instance."""
    return Settings()
