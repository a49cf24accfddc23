"""
Exchange config service.

Exchange configs live on the remote bots. The bot's connection config is
looked up locally first, so an unknown bot id fails fast instead of going
remote.
"""

from bxbot_ui.core.base import BaseComponent
from bxbot_ui.core.exceptions import BotNotFoundError, BxBotError, ServiceError
from bxbot_ui.core.types import BotConfig, ExchangeConfig
from bxbot_ui.repository import BotConfigRepository, ExchangeConfigRepository


class ExchangeConfigService(BaseComponent):
    """Service handling exchange config business logic."""

    def __init__(
        self,
        exchange_config_repository: ExchangeConfigRepository,
        bot_config_repository: BotConfigRepository,
    ):
        super().__init__(name="ExchangeConfigService")
        self.exchange_config_repository = exchange_config_repository
        self.bot_config_repository = bot_config_repository

    async def get_exchange_config(self, bot_id: str) -> ExchangeConfig:
        """
        Fetch a bot's exchange config.

        Raises:
            BotNotFoundError: If no bot is configured with bot_id
            ServiceError: If the remote fetch fails
        """
        self.logger.info("About to fetch Exchange config", bot_id=bot_id)
        bot_config = await self._find_bot(bot_id)
        try:
            return await self.exchange_config_repository.get(bot_config)
        except BxBotError:
            raise
        except Exception as e:
            self.logger.error(f"Failed to fetch Exchange config for bot {bot_id}: {e}")
            raise ServiceError(
                f"Failed to fetch Exchange config: {e}",
                component=self.name,
                operation="get_exchange_config",
            ) from e

    async def update_exchange_config(
        self, bot_id: str, exchange_config: ExchangeConfig
    ) -> ExchangeConfig:
        """
        Push an updated exchange config to a bot.

        Raises:
            BotNotFoundError: If no bot is configured with bot_id
            ServiceError: If the remote update fails
        """
        bot_config = await self._find_bot(bot_id)
        self.logger.info(
            "About to update Exchange config",
            bot_id=bot_id,
            exchange=exchange_config.name,
            adapter=exchange_config.adapter,
        )
        try:
            return await self.exchange_config_repository.save(bot_config, exchange_config)
        except BxBotError:
            raise
        except Exception as e:
            self.logger.error(f"Failed to update Exchange config for bot {bot_id}: {e}")
            raise ServiceError(
                f"Failed to update Exchange config: {e}",
                component=self.name,
                operation="update_exchange_config",
            ) from e

    async def _find_bot(self, bot_id: str) -> BotConfig:
        bot_config = await self.bot_config_repository.find_by_id(bot_id)
        if bot_config is None:
            raise BotNotFoundError(f"Bot {bot_id} not found", bot_id=bot_id)
        return bot_config
