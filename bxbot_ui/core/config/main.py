"""Main configuration aggregator for the BX-bot UI server."""

import json
from pathlib import Path
from typing import Any

import yaml
from pydantic import ValidationError as PydanticValidationError

from bxbot_ui.core.exceptions import ConfigurationError

from .log import LoggingConfig
from .security import JwtConfig


class Config:
    """
    Main configuration aggregator.

    Domain configs are read from the environment (and ``.env``); an optional
    YAML or JSON file can supply values per section. File values win over
    environment values.
    """

    def __init__(self, config_file: str | None = None):
        """
        Initialize configuration from environment and optional config file.

        Args:
            config_file: Optional path to YAML/JSON config file with ``jwt``
                and ``logging`` sections

        Raises:
            ConfigurationError: If the file or any section is invalid
        """
        config_data: dict[str, Any] = {}
        if config_file:
            config_path = Path(config_file)
            self._validate_config_file(config_path)
            config_data = self._parse_config_file(config_path)

        self.jwt = self._build_section(JwtConfig, "jwt", config_data, config_file)
        self.logging = self._build_section(LoggingConfig, "logging", config_data, config_file)

    def _validate_config_file(self, config_path: Path) -> None:
        """Validate config file exists and has supported format."""
        if not config_path.exists():
            raise ConfigurationError(
                f"Config file not found: {config_path}", config_file=str(config_path)
            )

        if config_path.suffix not in [".yaml", ".yml", ".json"]:
            raise ConfigurationError(
                f"Unsupported config file format: {config_path.suffix}",
                config_file=str(config_path),
            )

    def _parse_config_file(self, config_path: Path) -> dict[str, Any]:
        """Parse config file based on format."""
        try:
            with open(config_path) as file_handle:
                if config_path.suffix in [".yaml", ".yml"]:
                    data = yaml.safe_load(file_handle)
                else:
                    data = json.load(file_handle)
        except (OSError, yaml.YAMLError, json.JSONDecodeError) as e:
            raise ConfigurationError(
                f"Failed to parse config file {config_path}: {e!s}",
                config_file=str(config_path),
            ) from e

        if data is None:
            return {}
        if not isinstance(data, dict):
            raise ConfigurationError(
                f"Config file {config_path} must contain a mapping",
                config_file=str(config_path),
            )
        return data

    @staticmethod
    def _build_section(
        config_cls: type, section: str, config_data: dict[str, Any], config_file: str | None
    ) -> Any:
        section_data = config_data.get(section) or {}
        if not isinstance(section_data, dict):
            raise ConfigurationError(
                f"Config section '{section}' must be a mapping",
                config_file=config_file,
                config_section=section,
            )
        try:
            return config_cls(**section_data)
        except PydanticValidationError as e:
            raise ConfigurationError(
                f"Invalid '{section}' configuration: {e.error_count()} error(s)",
                config_file=config_file,
                config_section=section,
                details={"errors": [err["loc"] for err in e.errors()]},
            ) from e

    def setup_logging(self) -> None:
        """Apply the logging section to structlog and stdlib logging."""
        from bxbot_ui.core.logging import setup_logging

        setup_logging(
            environment=self.logging.environment,
            log_level=self.logging.level,
            log_file=self.logging.file,
            retention_days=self.logging.retention_days,
        )

    def to_dict(self) -> dict[str, Any]:
        """Convert configuration to dictionary, without secrets."""
        return {
            "jwt": self.jwt.get_jwt_config(),
            "logging": self.logging.model_dump(),
        }


_config: Config | None = None


def get_config(config_file: str | None = None, reload: bool = False) -> Config:
    """
    Get the process-wide configuration instance.

    Args:
        config_file: Optional path to config file
        reload: Force reload configuration

    Returns:
        Config: Configuration instance
    """
    global _config
    if _config is None or reload:
        _config = Config(config_file=config_file)
    return _config
