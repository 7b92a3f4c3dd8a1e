"""
Configuration and settings for the taskboard service.
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
    log_level: str = Field(default="INFO")

    # Relational store (any SQLAlchemy URL; the tasks table must already exist)
    database_url: Optional[str] = Field(default=None)

    # Key-value store (Redis)
    redis_url: Optional[str] = Field(default=None)
    theme_key: str = Field(default="theme")

    # LLM / Gemini
    gemini_api_key: Optional[str] = Field(default=None)
    summary_model: str = Field(default="gemini-3-flash-preview")

    # Static assets: a local build directory, or an S3-compatible bucket
    assets_dir: Optional[str] = Field(default=None)
    cos_endpoint: Optional[str] = Field(default=None)
    cos_region: Optional[str] = Field(default=None)
    cos_bucket: Optional[str] = Field(default=None)
    aws_access_key_id: Optional[str] = Field(default=None)
    aws_secret_access_key: Optional[str] = Field(default=None)

    # Development toggles
    use_in_memory_backends: bool = Field(default=False)


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Return cached settings instance."""
    return Settings()
