"""Typed settings configuration - single source of truth."""

from functools import lru_cache

from pydantic import AliasChoices, Field, SecretStr
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_prefix="DOCQA_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        populate_by_name=True,
    )

    # Model provider
    openai_api_key: SecretStr | None = Field(
        default=None, validation_alias=AliasChoices("DOCQA_OPENAI_API_KEY", "OPENAI_API_KEY")
    )
    openai_base_url: str | None = None
    llm_model: str = "gpt-4o-mini"
    llm_temperature: float = 0.2

    # Timeouts (seconds)
    provider_timeout_seconds: float = 30.0

    # Uploads
    max_upload_bytes: int = 1024 * 1024

    # Prompt assembly (unset keeps documents verbatim)
    max_document_chars: int | None = None

    # UI
    ui_origin: str = "http://localhost:5173"

    # Logging
    log_level: str = "INFO"


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
