"""
Centralized configuration management for carddrawer.
"""

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from .constants import (
    DEFAULT_API_BASE_URL,
    DEFAULT_REQUEST_TIMEOUT,
)


class Settings(BaseSettings):
    """
    Application settings, loaded from CARDDRAWER_* environment variables or
    a .env file.
    """

    model_config = SettingsConfigDict(
        env_prefix="CARDDRAWER_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Base URL of the deck service. Override with CARDDRAWER_API_BASE_URL.
    api_base_url: str = DEFAULT_API_BASE_URL

    # Per-request timeout in seconds. Override with CARDDRAWER_REQUEST_TIMEOUT.
    request_timeout: float = Field(default=DEFAULT_REQUEST_TIMEOUT, gt=0)


def get_settings() -> Settings:
    """Read settings fresh from the environment."""
    return Settings()
