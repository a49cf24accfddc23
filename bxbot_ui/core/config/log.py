"""Logging configuration for the BX-bot UI server."""

from typing import Literal

from pydantic import Field
from pydantic_settings import SettingsConfigDict

from .base import BaseConfig


class LoggingConfig(BaseConfig):
    """Log output settings, loaded from ``LOG_*`` environment variables."""

    model_config = SettingsConfigDict(env_prefix="LOG_")

    environment: Literal["development", "staging", "production"] = Field(
        default="development",
        description="Selects console (development) or JSON (production) rendering",
    )
    level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = Field(
        default="INFO",
        description="Root log level",
    )
    file: str | None = Field(
        default=None,
        description="Rotating log file path; stdout only when unset",
    )
    retention_days: int = Field(
        default=30,
        description="Days to keep rotated log files",
        ge=1,
    )
