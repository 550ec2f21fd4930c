"""Application configuration settings."""

from __future__ import annotations

import logging
from functools import lru_cache

from pydantic import Field, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

ENV_FILE = ".env"
ENV_FILE_ENCODING = "utf-8"

_LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"


class Settings(BaseSettings):
    """Application configuration values loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=ENV_FILE, env_file_encoding=ENV_FILE_ENCODING, extra="ignore"
    )

    database_url: str = Field(
        default="sqlite:///./notifications.db",
        description="Database connection URL used by SQLAlchemy to connect to the DB",
        min_length=1,
    )
    secret_key: str = Field(
        default="change-me",
        description="Secret key used to verify JWT access tokens",
        min_length=1,
    )
    access_token_expire_minutes: int = Field(
        default=60,
        description="Number of minutes before access tokens expire",
        gt=0,
    )
    app_timezone: str = Field(
        default="America/Sao_Paulo",
        description="IANA timezone (or UTC offset) used for stored timestamps",
    )
    environment: str = Field(
        default="production",
        description="Deployment environment; 'development' exposes storage error details",
    )
    notification_webhook_token: str | None = Field(
        default=None,
        description="Shared secret expected in the X-Webhook-Token header of webhook calls",
    )
    webhook_source_tag: str = Field(
        default="external_webhook",
        description="Attribution recorded for notifications received through the webhook",
        min_length=1,
    )
    cors_origins: list[str] = Field(
        default_factory=lambda: [
            "http://localhost:3000",
            "http://localhost:5173",
            "http://localhost:8080",
        ],
        description="Origins allowed to call the API from a browser",
    )
    log_level: str = Field(default="INFO", description="Root logging level")

    @model_validator(mode="after")
    def _validate_log_level(self) -> "Settings":
        level = self.log_level.upper()
        if not isinstance(logging.getLevelName(level), int):
            raise ValueError(f"LOG_LEVEL '{self.log_level}' is not a valid logging level")
        self.log_level = level
        return self

    @property
    def is_development(self) -> bool:
        return self.environment.strip().lower() == "development"


@lru_cache
def get_settings() -> Settings:
    """Return cached application settings instance."""

    return Settings()


def reset_settings_cache() -> None:
    """Clear the settings cache to force reloading from the environment."""

    get_settings.cache_clear()


def configure_logging(settings: Settings | None = None) -> None:
    """Apply the configured log level to the root logger."""

    settings = settings or get_settings()
    logging.basicConfig(level=settings.log_level, format=_LOG_FORMAT)
    logging.getLogger().setLevel(settings.log_level)


__all__ = ["Settings", "configure_logging", "get_settings", "reset_settings_cache"]
