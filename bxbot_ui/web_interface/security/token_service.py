"""
JWT token handling for BX-bot UI authentication.

This module issues, validates and refreshes the signed bearer tokens used to
authenticate UI API calls. Validation is split in two:

- cryptographic validity (signature, issuer/audience, validity window) is
  fully self-contained and checked here;
- revocation by password reset needs the subject's *current* last password
  reset time, which the caller looks up and passes in. TokenService never
  talks to a user store.
"""

from collections.abc import Callable
from datetime import datetime, timezone
from numbers import Real
from typing import Any

from jose import JWTError, jwt
from jose.exceptions import JWTClaimsError

from bxbot_ui.core.base import BaseComponent
from bxbot_ui.core.config import JwtConfig
from bxbot_ui.core.exceptions import (
    AuthenticationError,
    ClaimExtractionError,
    ClaimMismatchError,
    ExpiredTokenError,
    MalformedTokenError,
    RefreshError,
    RevokedTokenError,
    SignatureError,
)
from bxbot_ui.core.types import JwtUser

Claims = dict[str, Any]

ALGORITHM = "HS512"

CLAIM_KEY_USERNAME = "sub"
CLAIM_KEY_ISSUER = "iss"
CLAIM_KEY_AUDIENCE = "aud"
CLAIM_KEY_ISSUED_AT = "iat"
CLAIM_KEY_EXPIRATION = "exp"
CLAIM_KEY_ROLES = "bxbot:roles"
CLAIM_KEY_LAST_PASSWORD_CHANGE_DATE = "bxbot:lastPasswordChangeDate"

# Time checks are done against the injectable clock, not by jose.
_DECODE_OPTIONS = {
    "verify_signature": True,
    "verify_aud": True,
    "verify_iss": True,
    "verify_iat": False,
    "verify_exp": False,
    "verify_nbf": False,
    "verify_sub": False,
    "verify_jti": False,
    "verify_at_hash": False,
}


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


def _to_numeric_date(value: datetime) -> int:
    """Convert a datetime to whole seconds since the epoch; naive means UTC."""
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    return int(value.timestamp())


def _is_numeric(value: Any) -> bool:
    return isinstance(value, Real) and not isinstance(value, bool)


def _from_numeric_date(value: Any) -> datetime | None:
    """Convert a NumericDate claim to an aware datetime, None if not representable."""
    if not _is_numeric(value):
        return None
    try:
        return datetime.fromtimestamp(value, tz=timezone.utc)
    except (OverflowError, OSError, ValueError):
        return None


class TokenService(BaseComponent):
    """
    Signs, verifies and refreshes JWTs.

    Stateless apart from its immutable configuration, so one instance can be
    shared by any number of concurrent request handlers.
    """

    def __init__(self, config: JwtConfig, clock: Callable[[], datetime] | None = None):
        """
        Initialize the token service.

        Args:
            config: Signing secret, expiration window, clock skew, issuer and audience
            clock: Returns the current time; defaults to UTC wall clock
        """
        super().__init__(name="TokenService")
        self.config = config
        self._clock = clock or _utc_now

        self.logger.info("Token service initialized", **config.get_jwt_config())

    # ------------------------------------------------------------------
    # Issuing
    # ------------------------------------------------------------------

    def generate_token(self, user: JwtUser) -> str:
        """
        Create a signed token for a user.

        Args:
            user: Identity with username, roles and last password reset time

        Returns:
            Encoded JWT
        """
        last_password_change = None
        if user.last_password_reset_at is not None:
            last_password_change = _to_numeric_date(user.last_password_reset_at)

        claims: Claims = {
            CLAIM_KEY_ISSUER: self.config.issuer,
            CLAIM_KEY_ISSUED_AT: _to_numeric_date(self._clock()),
            CLAIM_KEY_AUDIENCE: self.config.audience,
            CLAIM_KEY_USERNAME: user.username,
            CLAIM_KEY_ROLES: list(user.roles),
            CLAIM_KEY_LAST_PASSWORD_CHANGE_DATE: last_password_change,
        }
        token = self._sign(claims)

        self.logger.info("Token created", username=user.username, roles=list(user.roles))
        return token

    def refresh_token(self, token: str) -> str:
        """
        Re-issue a token with a new issued-at and expiration time.

        The presented token must pass the cryptographic checks. The live
        password reset comparison is the caller's job (see can_be_refreshed).

        Args:
            token: Currently valid JWT

        Returns:
            Newly signed JWT carrying the same subject, roles, audience and issuer

        Raises:
            RefreshError: If the presented token cannot be decoded
        """
        try:
            claims = self._decode(token)
        except AuthenticationError as e:
            raise RefreshError(
                f"Failed to refresh token: {e.message}",
                details={"cause": type(e).__name__},
            ) from e

        refreshed = dict(claims)
        refreshed[CLAIM_KEY_ISSUED_AT] = _to_numeric_date(self._clock())
        new_token = self._sign(refreshed)

        self.logger.info("Token refreshed", username=claims.get(CLAIM_KEY_USERNAME))
        return new_token

    # ------------------------------------------------------------------
    # Validation
    # ------------------------------------------------------------------

    def validate_and_extract_claims(
        self, token: str, current_last_password_reset: datetime | None = None
    ) -> Claims:
        """
        Validate a token and return its claims.

        Args:
            token: Encoded JWT
            current_last_password_reset: Subject's live last password reset time,
                when the caller has it; enables the revocation check

        Returns:
            Claims of the verified token

        Raises:
            MalformedTokenError: If the token cannot be parsed
            ClaimMismatchError: If issuer or audience differ from configuration
            SignatureError: If the signature does not verify
            ExpiredTokenError: If now is outside the validity window
            RevokedTokenError: If the token predates a password reset
        """
        claims = self._decode(token)

        # A token minted before the password change it carries is inconsistent
        embedded_reset = self.get_last_password_change_from_claims(claims)
        if embedded_reset is not None:
            self.ensure_not_revoked(claims, embedded_reset)

        if current_last_password_reset is not None:
            self.ensure_not_revoked(claims, current_last_password_reset)

        return claims

    def can_be_refreshed(self, claims: Claims, last_password_reset: datetime | None) -> bool:
        """Return True unless the token was issued before the given password reset."""
        if last_password_reset is None:
            return True
        issued_at = self.get_issued_at_from_claims(claims)
        return not _to_numeric_date(issued_at) < _to_numeric_date(last_password_reset)

    def ensure_not_revoked(self, claims: Claims, last_password_reset: datetime | None) -> None:
        """
        Apply the revocation-by-password-reset rule.

        Raises:
            RevokedTokenError: If the token was issued before last_password_reset
        """
        if not self.can_be_refreshed(claims, last_password_reset):
            raise RevokedTokenError(
                "Token was created before the last password reset",
                username=claims.get(CLAIM_KEY_USERNAME),
                issued_at=self.get_issued_at_from_claims(claims).isoformat(),
                last_password_reset=last_password_reset.isoformat(),
            )

    # ------------------------------------------------------------------
    # Claim extraction
    # ------------------------------------------------------------------

    def get_username_from_claims(self, claims: Claims) -> str:
        username = claims.get(CLAIM_KEY_USERNAME)
        if not isinstance(username, str) or not username:
            raise ClaimExtractionError(
                "Failed to extract username claim from token", claim=CLAIM_KEY_USERNAME
            )
        return username

    def get_roles_from_claims(self, claims: Claims) -> list[str]:
        roles = claims.get(CLAIM_KEY_ROLES)
        if not isinstance(roles, list) or not all(isinstance(role, str) for role in roles):
            raise ClaimExtractionError(
                "Failed to extract roles claim from token",
                claim=CLAIM_KEY_ROLES,
                username=claims.get(CLAIM_KEY_USERNAME),
            )
        return list(roles)

    def get_issued_at_from_claims(self, claims: Claims) -> datetime:
        return self._get_timestamp_claim(claims, CLAIM_KEY_ISSUED_AT)

    def get_expiration_from_claims(self, claims: Claims) -> datetime:
        return self._get_timestamp_claim(claims, CLAIM_KEY_EXPIRATION)

    def get_last_password_change_from_claims(self, claims: Claims) -> datetime | None:
        """
        Return the password reset time embedded at issuance.

        Unlike the other extractors this never raises: a user who never reset
        their password has no value, and a malformed value is treated the same.
        """
        value = claims.get(CLAIM_KEY_LAST_PASSWORD_CHANGE_DATE)
        last_password_change = _from_numeric_date(value)
        if last_password_change is None and value is not None:
            self.logger.warning(
                "Ignoring malformed last password change claim",
                username=claims.get(CLAIM_KEY_USERNAME),
            )
        return last_password_change

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    def _get_timestamp_claim(self, claims: Claims, key: str) -> datetime:
        value = _from_numeric_date(claims.get(key))
        if value is None:
            raise ClaimExtractionError(f"Failed to extract {key} claim from token", claim=key)
        return value

    def _sign(self, claims: Claims) -> str:
        # iat and exp are always set explicitly, never left to library defaults
        issued_at = claims[CLAIM_KEY_ISSUED_AT]
        claims[CLAIM_KEY_EXPIRATION] = issued_at + self.config.expiration
        return jwt.encode(claims, self.config.secret, algorithm=ALGORITHM)

    def _decode(self, token: str) -> Claims:
        unverified = self._read_unverified_claims(token)
        self._check_issuer_and_audience(unverified)

        try:
            claims = jwt.decode(
                token,
                self.config.secret,
                algorithms=[ALGORITHM],
                options=_DECODE_OPTIONS,
                audience=self.config.audience,
                issuer=self.config.issuer,
            )
        except JWTClaimsError as e:
            raise ClaimMismatchError(f"Token claims rejected: {e}") from e
        except JWTError as e:
            raise SignatureError(f"Token signature verification failed: {e}") from e

        self._check_validity_window(claims)
        return claims

    @staticmethod
    def _read_unverified_claims(token: str) -> Claims:
        if not isinstance(token, str) or not token.strip():
            raise MalformedTokenError("Token is empty")
        try:
            jwt.get_unverified_header(token)
            claims = jwt.get_unverified_claims(token)
        except JWTError as e:
            raise MalformedTokenError(f"Token is not a well-formed JWT: {e}") from e

        for key in (CLAIM_KEY_ISSUED_AT, CLAIM_KEY_EXPIRATION):
            if not _is_numeric(claims.get(key)):
                raise MalformedTokenError(f"Token has no valid '{key}' claim", claim=key)
        return claims

    def _check_issuer_and_audience(self, claims: Claims) -> None:
        issuer = claims.get(CLAIM_KEY_ISSUER)
        if issuer != self.config.issuer:
            raise ClaimMismatchError(
                "Token issuer does not match",
                claim=CLAIM_KEY_ISSUER,
                expected=self.config.issuer,
                actual=issuer,
            )

        audience = claims.get(CLAIM_KEY_AUDIENCE)
        audiences = [audience] if isinstance(audience, str) else audience
        if not isinstance(audiences, list) or self.config.audience not in audiences:
            raise ClaimMismatchError(
                "Token audience does not match",
                claim=CLAIM_KEY_AUDIENCE,
                expected=self.config.audience,
                actual=audience,
            )

    def _check_validity_window(self, claims: Claims) -> None:
        now = _to_numeric_date(self._clock())
        skew = self.config.allowed_clock_skew
        issued_at = claims[CLAIM_KEY_ISSUED_AT]
        expires_at = claims[CLAIM_KEY_EXPIRATION]

        if now < issued_at - skew:
            raise ExpiredTokenError(
                "Token is not valid yet",
                username=claims.get(CLAIM_KEY_USERNAME),
                issued_at=issued_at,
                now=now,
            )
        if now > expires_at + skew:
            raise ExpiredTokenError(
                "Token has expired",
                username=claims.get(CLAIM_KEY_USERNAME),
                expires_at=expires_at,
                now=now,
            )
