"""
Client configuration.

Loads settings from ``DEEPL_*`` environment variables (or a ``.env`` file)
with sensible defaults.
"""

from __future__ import annotations

import logging
from functools import lru_cache

from pydantic import field_validator
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """DeepL client settings loaded from environment."""

    # ==========================================================================
    # Credentials
    # ==========================================================================

    api_key: str = ""

    # ==========================================================================
    # Transport
    # ==========================================================================

    # Overrides the tier-based base URL (e.g. for a mock server)
    server_url: str = ""

    # Seconds
    connect_timeout: float = 10.0
    timeout: float = 30.0

    # ==========================================================================
    # Logging
    # ==========================================================================

    log_level: str = "WARNING"

    @field_validator("log_level")
    @classmethod
    def _known_log_level(cls, value: str) -> str:
        level = value.strip().upper()
        # getLevelName maps known names to their numeric level
        if not isinstance(logging.getLevelName(level), int):
            raise ValueError(f"unknown log level: {value!r}")
        return level

    # ==========================================================================
    # Helpers
    # ==========================================================================

    @property
    def has_api_key(self) -> bool:
        return bool(self.api_key.strip())

    class Config:
        env_prefix = "DEEPL_"
        env_file = ".env"
        env_file_encoding = "utf-8"
        extra = "ignore"


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
