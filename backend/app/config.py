"""Typed settings configuration - single source of truth."""

from functools import lru_cache

from pydantic import SecretStr
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")

    # Database
    database_url: str | None = None
    create_tables: bool = False

    # UI
    ui_origin: str = "http://localhost:8501"

    # Identity service (Supabase-compatible /auth/v1/user endpoint)
    identity_url: str | None = None
    identity_api_key: str = ""
    identity_timeout_s: float = 4.0

    # Model-backed generator
    openai_api_key: SecretStr | None = None
    openai_model: str = "gpt-4o-mini"

    # Roadmap sessions
    simulated_latency_ms: int = 0
    generation_timeout_s: float | None = 30.0

    # Logging
    log_level: str = "INFO"


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
