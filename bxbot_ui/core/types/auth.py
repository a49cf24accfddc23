"""Authentication types for the BX-bot UI server."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field


class JwtUser(BaseModel):
    """Identity a token is minted for."""

    model_config = ConfigDict(frozen=True)

    username: str = Field(min_length=1)
    roles: list[str] = Field(default_factory=list)
    last_password_reset_at: datetime | None = None


class UserDetails(BaseModel):
    """User record as returned by a user directory."""

    username: str
    roles: list[str] = Field(default_factory=list)
    last_password_reset_at: datetime | None = None
    enabled: bool = True

    def to_jwt_user(self) -> JwtUser:
        return JwtUser(
            username=self.username,
            roles=list(self.roles),
            last_password_reset_at=self.last_password_reset_at,
        )
