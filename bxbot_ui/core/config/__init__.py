"""
Configuration management for the BX-bot UI server.

Usage:
    ```python
    from bxbot_ui.core.config import get_config

    config = get_config()
    token_service = TokenService(config.jwt)
    ```
"""

from .base import BaseConfig
from .log import LoggingConfig
from .main import Config, get_config
from .security import JwtConfig

__all__ = [
    "BaseConfig",
    "Config",
    "JwtConfig",
    "LoggingConfig",
    "get_config",
]
