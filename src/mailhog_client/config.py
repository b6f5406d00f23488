"""Configuration management for the MailHog client.

Settings are loaded with Pydantic settings, so every value can come from an
environment variable (``MAILHOG_`` prefix) or a ``.env`` file.
"""

from functools import lru_cache

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Client settings with environment variable support.

    All settings can be overridden via environment variables with
    the MAILHOG_ prefix (e.g., MAILHOG_BASE_URL).
    """

    model_config = SettingsConfigDict(
        env_prefix="MAILHOG_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    base_url: str = Field(
        default="http://localhost:8025",
        description="Base URL of the MailHog HTTP API",
    )
    timeout: float = Field(
        default=10.0,
        gt=0,
        description="Timeout for MailHog API requests in seconds",
    )


@lru_cache
def get_settings() -> Settings:
    """Get cached client settings.

    Returns:
        Settings: Client settings instance.
    """
    return Settings()
