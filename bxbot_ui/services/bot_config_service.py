"""
Bot config service.

CRUD over the locally stored connection configs of the bots managed by the
UI. Repository failures are reported as ServiceError.
"""

from bxbot_ui.core.base import BaseComponent
from bxbot_ui.core.exceptions import BxBotError, ServiceError
from bxbot_ui.core.types import BotConfig
from bxbot_ui.repository import BotConfigRepository


class BotConfigService(BaseComponent):
    """Service handling bot config business logic."""

    def __init__(self, bot_config_repository: BotConfigRepository):
        super().__init__(name="BotConfigService")
        self.bot_config_repository = bot_config_repository

    async def get_all_bot_config(self) -> list[BotConfig]:
        try:
            return await self.bot_config_repository.find_all()
        except BxBotError:
            raise
        except Exception as e:
            self.logger.error(f"Failed to fetch all Bot configs: {e}")
            raise ServiceError(
                f"Failed to fetch all Bot configs: {e}",
                component=self.name,
                operation="get_all_bot_config",
            ) from e

    async def get_bot_config(self, bot_id: str) -> BotConfig | None:
        """Return the config for a bot, or None if there is none."""
        self.logger.info("Fetching Bot config", bot_id=bot_id)
        try:
            return await self.bot_config_repository.find_by_id(bot_id)
        except BxBotError:
            raise
        except Exception as e:
            self.logger.error(f"Failed to fetch Bot config {bot_id}: {e}")
            raise ServiceError(
                f"Failed to fetch Bot config: {e}",
                component=self.name,
                operation="get_bot_config",
            ) from e

    async def update_bot_config(self, config: BotConfig) -> BotConfig:
        self.logger.info("About to update Bot config", bot_id=config.id, alias=config.alias)
        return await self._save(config, "update_bot_config")

    async def create_bot_config(self, config: BotConfig) -> BotConfig:
        self.logger.info("About to create Bot config", bot_id=config.id, alias=config.alias)
        return await self._save(config, "create_bot_config")

    async def delete_bot_config(self, bot_id: str) -> BotConfig | None:
        """Delete a bot config, returning the removed record if it existed."""
        self.logger.info("About to delete Bot config", bot_id=bot_id)
        try:
            return await self.bot_config_repository.delete(bot_id)
        except BxBotError:
            raise
        except Exception as e:
            self.logger.error(f"Failed to delete Bot config {bot_id}: {e}")
            raise ServiceError(
                f"Failed to delete Bot config: {e}",
                component=self.name,
                operation="delete_bot_config",
            ) from e

    async def _save(self, config: BotConfig, operation: str) -> BotConfig:
        try:
            return await self.bot_config_repository.save(config)
        except BxBotError:
            raise
        except Exception as e:
            self.logger.error(f"Failed to save Bot config {config.id}: {e}")
            raise ServiceError(
                f"Failed to save Bot config: {e}",
                component=self.name,
                operation=operation,
            ) from e
