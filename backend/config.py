"""
Configuration and settings for the creations backend.
"""

from __future__ import annotations

from functools import lru_cache
from typing import Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Environment-backed settings for the FastAPI service."""

    model_config = SettingsConfigDict(
        env_file=".env", env_file_encoding="utf-8", extra="ignore"
    )

    api_prefix: str = Field(default="/api")

    # Database (Postgres expected)
    database_url: Optional[str] = Field(default=None, env="DATABASE_URL")

    # Development toggles
    use_in_memory_backends: bool = Field(
        default=False, env="USE_IN_MEMORY_BACKENDS"
    )

    # Bearer token verification. Tokens from the hosted identity provider are
    # checked against its JWKS; a shared secret covers local development.
    jwks_url: Optional[str] = Field(default=None, env="JWKS_URL")
    jwt_secret: Optional[str] = Field(default=None, env="JWT_SECRET")
    jwt_algorithm: str = Field(default="HS256", env="JWT_ALGORITHM")
    jwt_issuer: Optional[str] = Field(default=None, env="JWT_ISSUER")
    jwt_audience: Optional[str] = Field(default=None, env="JWT_AUDIENCE")
    jwt_leeway_seconds: int = Field(default=10, env="JWT_LEEWAY_SECONDS")

    cors_origins: list[str] = Field(default=["*"], env="CORS_ORIGINS")


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Return cached settings instance."""
    return Settings()
