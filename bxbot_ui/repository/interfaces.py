"""
Repository contracts for bot and exchange configuration.

Bot configs live in a local store keyed by bot id; exchange configs live on
the remote bot itself, reached through its BotConfig. Implementations are
provided by the persistence layer.
"""

from typing import Protocol, runtime_checkable

from bxbot_ui.core.types import BotConfig, ExchangeConfig


@runtime_checkable
class BotConfigRepository(Protocol):
    """Local store of bot connection configs."""

    async def find_all(self) -> list[BotConfig]: ...

    async def find_by_id(self, bot_id: str) -> BotConfig | None: ...

    async def save(self, config: BotConfig) -> BotConfig: ...

    async def delete(self, bot_id: str) -> BotConfig | None: ...


@runtime_checkable
class ExchangeConfigRepository(Protocol):
    """Remote store of a bot's exchange config."""

    async def get(self, bot_config: BotConfig) -> ExchangeConfig: ...

    async def save(self, bot_config: BotConfig, config: ExchangeConfig) -> ExchangeConfig: ...
