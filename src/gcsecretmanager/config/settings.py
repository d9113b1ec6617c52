"""
Library settings using Pydantic.

Provides environment-based configuration loading with GCSM_ prefix.
"""

from functools import lru_cache

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Library settings."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_prefix="GCSM_",
        extra="ignore",
    )

    # Defaults layer for secret resolution
    project: str | None = None
    version: str = "latest"

    # Secret Manager REST API
    api_base_url: str = "https://secretmanager.googleapis.com/v1"
    http_timeout: float = 30.0

    # Static bearer token; Application Default Credentials are used when unset
    access_token: str | None = None

    # Logging
    log_level: str = "WARNING"


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
