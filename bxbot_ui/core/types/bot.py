"""Bot and exchange configuration types for the BX-bot UI server."""

from pydantic import BaseModel, ConfigDict, Field


class BotConfig(BaseModel):
    """Connection details for a remote bot instance managed by the UI."""

    model_config = ConfigDict(populate_by_name=True)

    id: str = Field(min_length=1)
    alias: str | None = None
    base_url: str | None = Field(default=None, alias="baseUrl")
    username: str | None = None
    password: str | None = Field(default=None, repr=False)


class NetworkConfig(BaseModel):
    """Network settings a bot uses when talking to its exchange."""

    model_config = ConfigDict(populate_by_name=True)

    connection_timeout: int = Field(default=30, ge=0, alias="connectionTimeout")
    non_fatal_error_codes: list[int] = Field(default_factory=list, alias="nonFatalErrorCodes")
    non_fatal_error_messages: list[str] = Field(
        default_factory=list, alias="nonFatalErrorMessages"
    )


class ExchangeConfig(BaseModel):
    """Exchange adapter configuration of a single bot."""

    model_config = ConfigDict(populate_by_name=True)

    id: str | None = None
    name: str | None = Field(default=None, alias="exchangeName")
    adapter: str | None = Field(default=None, alias="exchangeAdapter")
    network_config: NetworkConfig | None = Field(default=None, alias="networkConfig")
    other_config: dict[str, str] = Field(default_factory=dict, alias="otherConfig")
