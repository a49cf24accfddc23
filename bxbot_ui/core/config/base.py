"""Base configuration class for the BX-bot UI server."""

from pydantic_settings import BaseSettings, SettingsConfigDict


class BaseConfig(BaseSettings):
    """Base configuration class with common patterns.

    Provides common Pydantic settings configuration with environment
    variable support, case insensitive matching, and validation.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        case_sensitive=False,
        validate_assignment=True,
        extra="ignore",
        populate_by_name=True,
    )
