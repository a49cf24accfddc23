"""
BX-bot UI server.

Authentication and configuration services for the BX-bot web control panel.
"""

__version__ = "1.0.0"
__description__ = "Authentication and configuration services for the BX-bot UI"

from .core.config import Config, JwtConfig, get_config
from .core.exceptions import AuthenticationError, BxBotError, RefreshError
from .core.logging import correlation_context, get_logger, get_secure_logger, setup_logging

__all__ = [
    "AuthenticationError",
    "BxBotError",
    "Config",
    "JwtConfig",
    "RefreshError",
    "correlation_context",
    "get_config",
    "get_logger",
    "get_secure_logger",
    "setup_logging",
]
