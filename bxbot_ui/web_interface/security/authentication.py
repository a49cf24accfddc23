"""
Bearer token authentication for incoming UI API requests.

JwtAuthenticationFilter holds the framework-neutral part of request
authentication: pull the token out of the Authorization header, validate it,
cross-check the subject's live password reset time and build the principal.
Any failure, including an unreachable user directory, leaves the request
anonymous so downstream authorization can reject it; the filter itself never
fails the request.
"""

from dataclasses import dataclass, field
from typing import Any, Protocol, runtime_checkable

from bxbot_ui.core.base import BaseComponent
from bxbot_ui.core.exceptions import AuthenticationError
from bxbot_ui.core.types import UserDetails

from .token_service import Claims, TokenService


@runtime_checkable
class UserDirectory(Protocol):
    """Looks up users by username."""

    def get_user(self, username: str) -> UserDetails | None:
        """Return the user's roles and last password reset time, or None if unknown."""
        ...


@dataclass(frozen=True)
class AuthenticatedPrincipal:
    """Security context populated for an authenticated request."""

    username: str
    roles: tuple[str, ...]
    claims: Claims = field(default_factory=dict, compare=False, repr=False)

    def has_role(self, role: str) -> bool:
        return role in self.roles


class JwtAuthenticationFilter(BaseComponent):
    """Authenticates requests carrying a JWT bearer token."""

    def __init__(
        self,
        token_service: TokenService,
        user_directory: UserDirectory,
        header_prefix: str = "Bearer ",
    ):
        super().__init__(name="JwtAuthenticationFilter")
        self.token_service = token_service
        self.user_directory = user_directory
        self.header_prefix = header_prefix

    def extract_token(self, authorization_header: str | None) -> str | None:
        """Return the bearer token from an Authorization header value, if any."""
        if not authorization_header:
            return None
        if not authorization_header.lower().startswith(self.header_prefix.lower()):
            return None
        token = authorization_header[len(self.header_prefix) :].strip()
        return token or None

    def authenticate(self, authorization_header: str | None) -> AuthenticatedPrincipal | None:
        """
        Authenticate a request from its Authorization header.

        Args:
            authorization_header: Raw header value, None when absent

        Returns:
            The authenticated principal, or None to continue anonymously
        """
        token = self.extract_token(authorization_header)
        if token is None:
            # Login requests legitimately arrive without a token
            return None

        try:
            return self._authenticate_token(token)
        except AuthenticationError as e:
            self.logger.warning(
                "Request authentication failed",
                error_type=type(e).__name__,
                error_code=e.error_code,
                reason=e.message,
            )
            return None
        except Exception as e:
            self.logger.error(
                f"Request authentication aborted: {e}",
                error_type=type(e).__name__,
            )
            return None

    def _authenticate_token(self, token: str) -> AuthenticatedPrincipal:
        claims = self.token_service.validate_and_extract_claims(token)
        username = self.token_service.get_username_from_claims(claims)
        roles = self.token_service.get_roles_from_claims(claims)

        user = self.user_directory.get_user(username)
        if user is None:
            raise AuthenticationError("Token subject is not a known user", username=username)
        if not user.enabled:
            raise AuthenticationError("Token subject is disabled", username=username)

        self.token_service.ensure_not_revoked(claims, user.last_password_reset_at)

        self.logger.debug("Request authenticated", username=username, roles=roles)
        return AuthenticatedPrincipal(username=username, roles=tuple(roles), claims=claims)

    def get_security_summary(self) -> dict[str, Any]:
        """Describe how this filter authenticates requests."""
        return {
            "header_prefix": self.header_prefix.strip(),
            **self.token_service.config.get_jwt_config(),
        }
