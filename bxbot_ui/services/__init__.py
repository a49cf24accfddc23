"""Configuration services for the BX-bot UI server."""

from .bot_config_service import BotConfigService
from .exchange_config_service import ExchangeConfigService

__all__ = ["BotConfigService", "ExchangeConfigService"]
