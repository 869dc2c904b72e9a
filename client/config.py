"""
Configuration for the creations API client.
"""

from __future__ import annotations

from functools import lru_cache

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class ClientSettings(BaseSettings):
    """Environment-backed settings for talking to the backend."""

    model_config = SettingsConfigDict(
        env_file=".env", env_file_encoding="utf-8", extra="ignore"
    )

    base_url: str = Field(default="http://localhost:3000", env="BASE_URL")
    api_prefix: str = Field(default="/api")
    # Transport default; the like synchronizer imposes no timeout of its own.
    request_timeout: float = Field(default=30.0, env="REQUEST_TIMEOUT")


@lru_cache(maxsize=1)
def get_client_settings() -> ClientSettings:
    """Return cached client settings instance."""
    return ClientSettings()
