"""Persistence contracts for the BX-bot UI server."""

from .interfaces import BotConfigRepository, ExchangeConfigRepository

__all__ = ["BotConfigRepository", "ExchangeConfigRepository"]
