"""Application configuration settings."""

from __future__ import annotations

from functools import lru_cache

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

ENV_FILE = ".env"
ENV_FILE_ENCODING = "utf-8"


class Settings(BaseSettings):
    """Application configuration values loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=ENV_FILE, env_file_encoding=ENV_FILE_ENCODING, extra="ignore"
    )

    database_url: str = Field(
        description="Database connection URL used by SQLAlchemy to connect to the DB",
        min_length=1,
    )
    app_timezone: str = Field(
        default="UTC",
        description="Timezone used to interpret session dates and times",
    )
    store_timeout_seconds: float = Field(
        default=10.0,
        description="Upper bound applied to every database call issued by the engine",
        gt=0,
    )
    notification_dispatch_limit: int = Field(
        default=100,
        description="Maximum number of notifications promoted per dispatch sweep",
        gt=0,
    )
    reminder_seed_window_minutes: int = Field(
        default=1440,
        description="Look-ahead window used when seeding session reminders",
        gt=0,
    )
    default_reminder_lead_seconds: int = Field(
        default=3600,
        description="Reminder lead time used when the session_reminder type is not configured",
        ge=0,
    )
    notification_api_token: str | None = Field(
        default=None,
        description="Shared secret required by the notification endpoints when set",
    )


@lru_cache
def get_settings() -> Settings:
    """Return cached application settings instance."""

    return Settings()


def reset_settings_cache() -> None:
    """Clear the settings cache to force reloading from the environment.

    The application timezone derived from the settings is reloaded as well.
    """

    from app.utils.datetime import get_app_timezone

    get_settings.cache_clear()
    get_app_timezone.cache_clear()


__all__ = ["Settings", "get_settings", "reset_settings_cache"]
