"""
Pytest configuration for the BX-bot UI server test suite.

Provides a controllable clock and token service fixtures so time-based
token behaviour can be tested deterministically.
"""

import os

# Keep a developer's .env or shell JWT settings out of the tests
for _var in ("JWT_SECRET", "JWT_EXPIRATION", "JWT_ALLOWED_CLOCK_SKEW", "JWT_ISSUER", "JWT_AUDIENCE"):
    os.environ.pop(_var, None)

from datetime import datetime, timedelta, timezone

import pytest

from bxbot_ui.core.config import JwtConfig
from bxbot_ui.core.types import JwtUser
from bxbot_ui.web_interface.security import TokenService

T0 = datetime(2017, 6, 1, 12, 0, 0, tzinfo=timezone.utc)


class FakeClock:
    """Clock whose current time is set by the test."""

    def __init__(self, now: datetime = T0):
        self.now = now

    def __call__(self) -> datetime:
        return self.now

    def advance(self, seconds: float) -> datetime:
        self.now = self.now + timedelta(seconds=seconds)
        return self.now

    def set(self, now: datetime) -> None:
        self.now = now


@pytest.fixture
def clock():
    """Clock starting at T0."""
    return FakeClock()


@pytest.fixture
def jwt_config():
    """JWT settings from the worked example: one hour tokens, no clock skew."""
    return JwtConfig(
        secret="s3cr3t",
        expiration=3600,
        allowed_clock_skew=0,
        issuer="bxbot-ui",
        audience="bxbot-ui",
        _env_file=None,
    )


@pytest.fixture
def token_service(jwt_config, clock):
    return TokenService(jwt_config, clock=clock)


@pytest.fixture
def alice():
    return JwtUser(username="alice", roles=["ROLE_USER"], last_password_reset_at=T0)
