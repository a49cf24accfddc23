"""Domain types for the BX-bot UI server."""

from .auth import JwtUser, UserDetails
from .bot import BotConfig, ExchangeConfig, NetworkConfig

__all__ = [
    "BotConfig",
    "ExchangeConfig",
    "JwtUser",
    "NetworkConfig",
    "UserDetails",
]
