"""JWT configuration for the BX-bot UI server."""

from pydantic import Field
from pydantic_settings import SettingsConfigDict

from .base import BaseConfig


class JwtConfig(BaseConfig):
    """Token signing and validation settings.

    Loaded from ``JWT_*`` environment variables (or a ``.env`` file) and
    immutable once constructed.
    """

    model_config = SettingsConfigDict(env_prefix="JWT_", frozen=True)

    secret: str = Field(
        description="Shared secret used to sign and verify tokens",
        min_length=1,
        repr=False,
    )
    expiration: int = Field(
        default=600,
        description="Token lifetime in seconds",
        ge=1,
    )
    allowed_clock_skew: int = Field(
        default=60,
        description="Tolerated clock drift in seconds between issuer and validator",
        ge=0,
    )
    issuer: str = Field(
        default="bxbot-ui",
        description="Expected 'iss' claim",
        min_length=1,
    )
    audience: str = Field(
        default="bxbot-ui",
        description="Expected 'aud' claim",
        min_length=1,
    )

    def get_jwt_config(self) -> dict:
        """Get JWT configuration as dictionary, without the secret."""
        return {
            "expiration": self.expiration,
            "allowed_clock_skew": self.allowed_clock_skew,
            "issuer": self.issuer,
            "audience": self.audience,
        }
