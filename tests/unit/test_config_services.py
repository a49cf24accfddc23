"""
Unit tests for the bot and exchange config services.

Repositories are replaced with in-memory fakes and AsyncMocks.
"""

from unittest.mock import AsyncMock

import pytest

from bxbot_ui.core.exceptions import BotNotFoundError, ServiceError
from bxbot_ui.core.types import BotConfig, ExchangeConfig, NetworkConfig
from bxbot_ui.repository import BotConfigRepository, ExchangeConfigRepository
from bxbot_ui.services import BotConfigService, ExchangeConfigService


class InMemoryBotConfigRepository:
    """Bot config repository backed by a dict keyed by bot id."""

    def __init__(self, *configs: BotConfig):
        self.configs = {config.id: config for config in configs}

    async def find_all(self) -> list[BotConfig]:
        return list(self.configs.values())

    async def find_by_id(self, bot_id: str) -> BotConfig | None:
        return self.configs.get(bot_id)

    async def save(self, config: BotConfig) -> BotConfig:
        self.configs[config.id] = config
        return config

    async def delete(self, bot_id: str) -> BotConfig | None:
        return self.configs.pop(bot_id, None)


class InMemoryExchangeConfigRepository:
    """Exchange config repository keyed by the owning bot's id."""

    def __init__(self):
        self.configs: dict[str, ExchangeConfig] = {}

    async def get(self, bot_config: BotConfig) -> ExchangeConfig:
        return self.configs[bot_config.id]

    async def save(self, bot_config: BotConfig, config: ExchangeConfig) -> ExchangeConfig:
        self.configs[bot_config.id] = config
        return config


@pytest.fixture
def gdax_bot():
    return BotConfig(
        id="gdax-bot-1",
        alias="GDAX Bot",
        base_url="https://hostname.one/api",
        username="admin",
        password="admin-password",
    )


@pytest.fixture
def gemini_bot():
    return BotConfig(id="gemini-bot-2", alias="Gemini Bot", base_url="https://hostname.two/api")


@pytest.fixture
def bot_repository(gdax_bot, gemini_bot):
    return InMemoryBotConfigRepository(gdax_bot, gemini_bot)


@pytest.fixture
def exchange_repository():
    return InMemoryExchangeConfigRepository()


@pytest.fixture
def gdax_exchange():
    return ExchangeConfig(
        id="gdax-bot-1",
        name="GDAX",
        adapter="com.gazbert.bxbot.exchanges.GdaxExchangeAdapter",
        network_config=NetworkConfig(
            connection_timeout=30,
            non_fatal_error_codes=[502, 503, 504],
            non_fatal_error_messages=["Connection refused", "Connection reset"],
        ),
        other_config={"buy-fee": "0.25", "sell-fee": "0.25"},
    )


class TestRepositoryProtocols:
    """Test the fakes satisfy the repository contracts."""

    def test_fakes_match_protocols(self, bot_repository, exchange_repository):
        assert isinstance(bot_repository, BotConfigRepository)
        assert isinstance(exchange_repository, ExchangeConfigRepository)


class TestBotConfigService:
    """Test bot config CRUD."""

    @pytest.mark.asyncio
    async def test_get_all_bot_config(self, bot_repository, gdax_bot, gemini_bot):
        service = BotConfigService(bot_repository)

        assert await service.get_all_bot_config() == [gdax_bot, gemini_bot]

    @pytest.mark.asyncio
    async def test_get_bot_config(self, bot_repository, gdax_bot):
        service = BotConfigService(bot_repository)

        assert await service.get_bot_config("gdax-bot-1") == gdax_bot
        assert await service.get_bot_config("unknown-bot") is None

    @pytest.mark.asyncio
    async def test_create_bot_config(self, bot_repository):
        service = BotConfigService(bot_repository)
        new_bot = BotConfig(id="kraken-bot-3", alias="Kraken Bot")

        assert await service.create_bot_config(new_bot) == new_bot
        assert await service.get_bot_config("kraken-bot-3") == new_bot

    @pytest.mark.asyncio
    async def test_update_bot_config(self, bot_repository, gdax_bot):
        service = BotConfigService(bot_repository)
        updated = gdax_bot.model_copy(update={"alias": "GDAX Bot (renamed)"})

        await service.update_bot_config(updated)

        assert (await service.get_bot_config("gdax-bot-1")).alias == "GDAX Bot (renamed)"

    @pytest.mark.asyncio
    async def test_delete_bot_config(self, bot_repository, gemini_bot):
        service = BotConfigService(bot_repository)

        assert await service.delete_bot_config("gemini-bot-2") == gemini_bot
        assert await service.get_bot_config("gemini-bot-2") is None
        assert await service.delete_bot_config("gemini-bot-2") is None

    @pytest.mark.asyncio
    async def test_repository_failure_wrapped(self):
        """Test unexpected repository errors surface as ServiceError."""
        repository = AsyncMock()
        repository.save.side_effect = OSError("disk full")
        service = BotConfigService(repository)

        with pytest.raises(ServiceError) as exc_info:
            await service.create_bot_config(BotConfig(id="bot-1"))
        assert exc_info.value.operation == "create_bot_config"
        assert isinstance(exc_info.value.__cause__, OSError)

    def test_password_hidden_from_repr(self, gdax_bot):
        assert "admin-password" not in repr(gdax_bot)


class TestExchangeConfigService:
    """Test exchange config retrieval and update."""

    @pytest.mark.asyncio
    async def test_update_then_get(self, exchange_repository, bot_repository, gdax_exchange):
        service = ExchangeConfigService(exchange_repository, bot_repository)

        assert await service.update_exchange_config("gdax-bot-1", gdax_exchange) == gdax_exchange
        assert await service.get_exchange_config("gdax-bot-1") == gdax_exchange

    @pytest.mark.asyncio
    async def test_repository_receives_bot_config(self, bot_repository, gdax_bot, gdax_exchange):
        """Test the remote repository is addressed through the bot's config."""
        exchange_repository = AsyncMock()
        exchange_repository.get.return_value = gdax_exchange
        service = ExchangeConfigService(exchange_repository, bot_repository)

        await service.get_exchange_config("gdax-bot-1")

        exchange_repository.get.assert_awaited_once_with(gdax_bot)

    @pytest.mark.asyncio
    async def test_unknown_bot_does_not_go_remote(self, bot_repository, gdax_exchange):
        """Test an unknown bot id fails fast without calling the exchange repository."""
        exchange_repository = AsyncMock()
        service = ExchangeConfigService(exchange_repository, bot_repository)

        with pytest.raises(BotNotFoundError) as exc_info:
            await service.get_exchange_config("unknown-bot")
        assert exc_info.value.bot_id == "unknown-bot"

        with pytest.raises(BotNotFoundError):
            await service.update_exchange_config("unknown-bot", gdax_exchange)

        exchange_repository.get.assert_not_called()
        exchange_repository.save.assert_not_called()

    @pytest.mark.asyncio
    async def test_remote_failure_wrapped(self, bot_repository, gdax_exchange):
        """Test remote errors surface as ServiceError."""
        exchange_repository = AsyncMock()
        exchange_repository.save.side_effect = ConnectionError("bot unreachable")
        service = ExchangeConfigService(exchange_repository, bot_repository)

        with pytest.raises(ServiceError) as exc_info:
            await service.update_exchange_config("gdax-bot-1", gdax_exchange)
        assert exc_info.value.operation == "update_exchange_config"

    def test_camel_case_payload(self):
        """Test exchange configs parse from the bot's camelCase JSON."""
        config = ExchangeConfig.model_validate(
            {
                "id": "gdax-bot-1",
                "exchangeName": "GDAX",
                "exchangeAdapter": "com.gazbert.bxbot.exchanges.GdaxExchangeAdapter",
                "networkConfig": {"connectionTimeout": 60, "nonFatalErrorCodes": [502]},
                "otherConfig": {"buy-fee": "0.25"},
            }
        )

        assert config.name == "GDAX"
        assert config.network_config.connection_timeout == 60
        assert config.network_config.non_fatal_error_codes == [502]
        assert config.other_config == {"buy-fee": "0.25"}
