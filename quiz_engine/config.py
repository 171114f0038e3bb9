from functools import lru_cache
from typing import List

from pydantic_settings import BaseSettings, SettingsConfigDict

from .errors import ConfigurationError


class Settings(BaseSettings):
    """Loads and validates environment variables."""

    GEMINI_API_KEY: str | None = None
    GEMINI_MODEL: str = "gemini-1.5-flash-latest"
    GEMINI_TEMPERATURE: float = 0.7
    QUIZ_LANGUAGE: str = "Korean"
    CORS_ORIGINS: List[str] = ["http://localhost:3000"]
    LOG_LEVEL: str = "INFO"

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    def require_api_key(self) -> str:
        """Return the Gemini credential or fail for the whole service."""
        key = (self.GEMINI_API_KEY or "").strip().strip("\"'")
        if not key:
            raise ConfigurationError(
                "Server configuration error: GEMINI_API_KEY not found."
            )
        return key


@lru_cache
def get_settings() -> Settings:
    return Settings()
