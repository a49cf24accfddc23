"""Unified exception hierarchy for the BX-bot UI server.

This module provides the standardized exception system with:
- Standardized error codes for every exception
- Categorization (validation, configuration, permission, etc.)
- Rich error context and metadata
- Logging levels and suggested resolutions

USAGE RULES:
1. ALL modules MUST import their exceptions from this module
2. ALL exceptions MUST include error codes

Example Usage:
    from bxbot_ui.core.exceptions import ExpiredTokenError

    raise ExpiredTokenError(
        "Token expired",
        expires_at="2017-06-01T10:00:00+00:00",
    )
"""

import logging
from datetime import datetime, timezone
from enum import Enum
from typing import Any


class ErrorCategory(Enum):
    """Error categorization for automated handling."""

    FATAL = "fatal"  # Cannot be retried, requires manual intervention
    VALIDATION = "validation"  # Input validation errors
    CONFIGURATION = "configuration"  # Configuration errors
    PERMISSION = "permission"  # Authentication/authorization errors
    BUSINESS_LOGIC = "business_logic"  # Business rule violations
    SYSTEM = "system"  # System/infrastructure errors


class ErrorSeverity(Enum):
    """Error severity levels."""

    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"
    CRITICAL = "critical"


class BxBotError(Exception):
    """Base exception for all BX-bot UI server errors.

    Every exception includes standardized metadata for logging, monitoring,
    and automated handling.

    Attributes:
        message: Human-readable error message
        error_code: Standardized error code (e.g., 'SEC_001')
        category: Error category for automated handling
        severity: Error severity level
        details: Additional context data
        suggested_action: Recommended resolution steps
        context: Additional contextual information
        timestamp: When the error occurred
        logger_name: Logger name for this error type
    """

    def __init__(
        self,
        message: str,
        error_code: str | None = None,
        category: ErrorCategory = ErrorCategory.SYSTEM,
        severity: ErrorSeverity = ErrorSeverity.MEDIUM,
        details: dict[str, Any] | None = None,
        suggested_action: str | None = None,
        context: dict[str, Any] | None = None,
        logger_name: str | None = None,
        **kwargs: Any,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.error_code = error_code
        self.category = category
        self.severity = severity
        self.details = details or {}
        self.suggested_action = suggested_action
        self.context = context or {}
        self.timestamp = datetime.now(timezone.utc)
        self.logger_name = logger_name or self.__class__.__module__

        # Remaining keyword arguments are context
        self.context.update(kwargs)

        self._log_error()

    def _sanitize_sensitive_data(self, data: dict[str, Any]) -> dict[str, Any]:
        """Sanitize sensitive data before logging."""
        sensitive_keys = {
            "password",
            "secret",
            "key",
            "token",
            "authorization",
            "credential",
        }

        def sanitize_value(key: str, value: Any) -> Any:
            if isinstance(value, dict):
                return {k: sanitize_value(k, v) for k, v in value.items()}
            elif isinstance(value, list):
                return [sanitize_value(key, item) for item in value]
            elif isinstance(value, str) and any(
                sensitive in key.lower() for sensitive in sensitive_keys
            ):
                # Keep first and last 2 chars for debugging
                if len(value) > 4:
                    return f"{value[:2]}***{value[-2:]}"
                return "***"
            return value

        return {k: sanitize_value(k, v) for k, v in data.items()}

    def _log_error(self) -> None:
        """Log the error with appropriate level based on severity."""
        try:
            logger = logging.getLogger(self.logger_name)

            log_data = self._sanitize_sensitive_data(
                {
                    "error_code": self.error_code,
                    "category": self.category.value,
                    "severity": self.severity.value,
                    "details": self.details,
                    "context": self.context,
                    "timestamp": self.timestamp.isoformat(),
                }
            )

            if self.severity == ErrorSeverity.CRITICAL:
                logger.critical(self.message, extra={"error": log_data})
            elif self.severity == ErrorSeverity.HIGH:
                logger.error(self.message, extra={"error": log_data})
            elif self.severity == ErrorSeverity.MEDIUM:
                logger.warning(self.message, extra={"error": log_data})
            else:
                logger.info(self.message, extra={"error": log_data})
        except Exception:
            # Logging must never mask the original error
            pass

    def to_dict(self) -> dict[str, Any]:
        """Convert exception to dictionary for serialization."""
        return {
            "message": self.message,
            "error_code": self.error_code,
            "category": self.category.value,
            "severity": self.severity.value,
            "details": self.details,
            "suggested_action": self.suggested_action,
            "context": self._sanitize_sensitive_data(self.context),
            "timestamp": self.timestamp.isoformat(),
            "exception_type": self.__class__.__name__,
        }

    def __str__(self) -> str:
        """Return formatted error message with code."""
        if self.error_code:
            return f"[{self.error_code}] {self.message}"
        return self.message

    def __repr__(self) -> str:
        return (
            f"{self.__class__.__name__}("
            f"message='{self.message}', "
            f"error_code='{self.error_code}', "
            f"category={self.category}, "
            f"severity={self.severity}"
            f")"
        )


# =============================================================================
# VALIDATION EXCEPTIONS
# =============================================================================


class ValidationError(BxBotError):
    """Base class for all input and configuration validation errors."""

    def __init__(
        self,
        message: str,
        error_code: str = "VALID_000",
        field_name: str | None = None,
        field_value: Any | None = None,
        **kwargs: Any,
    ) -> None:
        context = kwargs.get("context", {})
        context.update({"field_name": field_name, "field_value": field_value})
        kwargs["context"] = context

        kwargs.setdefault("category", ErrorCategory.VALIDATION)
        kwargs.setdefault("severity", ErrorSeverity.MEDIUM)
        kwargs.setdefault("logger_name", "validation")

        super().__init__(message, error_code, **kwargs)


class ConfigurationError(ValidationError):
    """Configuration file and parameter validation errors.

    Raised when configuration is invalid, missing, or inconsistent.
    """

    def __init__(
        self,
        message: str,
        config_file: str | None = None,
        config_section: str | None = None,
        **kwargs: Any,
    ) -> None:
        kwargs.setdefault("error_code", "VALID_001")
        kwargs.setdefault("category", ErrorCategory.CONFIGURATION)
        kwargs.setdefault("suggested_action", "Review and correct configuration file")

        context = kwargs.get("context", {})
        context.update({"config_file": config_file, "config_section": config_section})
        kwargs["context"] = context

        super().__init__(message, **kwargs)


# =============================================================================
# SECURITY EXCEPTIONS
# =============================================================================


class SecurityError(BxBotError):
    """Base class for all security-related errors."""

    def __init__(
        self,
        message: str,
        error_code: str = "SEC_000",
        username: str | None = None,
        **kwargs: Any,
    ) -> None:
        context = kwargs.get("context", {})
        context.update({"username": username})
        kwargs["context"] = context

        kwargs.setdefault("category", ErrorCategory.PERMISSION)
        kwargs.setdefault("severity", ErrorSeverity.HIGH)
        kwargs.setdefault("logger_name", "security")

        super().__init__(message, error_code, **kwargs)


class AuthenticationError(SecurityError):
    """Authentication failures and credential issues.

    Every token decode or validation failure is an AuthenticationError, so
    callers can treat them uniformly as "unauthenticated".
    """

    def __init__(self, message: str, auth_method: str | None = "jwt", **kwargs: Any) -> None:
        kwargs.setdefault("error_code", "SEC_001")
        kwargs.setdefault("suggested_action", "Log in again to obtain a new token")

        context = kwargs.get("context", {})
        context.update({"auth_method": auth_method})
        kwargs["context"] = context

        super().__init__(message, **kwargs)


class MalformedTokenError(AuthenticationError):
    """Token is not a well-formed signed JWT."""

    def __init__(self, message: str, **kwargs: Any) -> None:
        kwargs.setdefault("error_code", "SEC_010")
        super().__init__(message, **kwargs)


class SignatureError(AuthenticationError):
    """Token signature does not verify against the configured secret."""

    def __init__(self, message: str, **kwargs: Any) -> None:
        kwargs.setdefault("error_code", "SEC_011")
        kwargs.setdefault("severity", ErrorSeverity.HIGH)
        super().__init__(message, **kwargs)


class ClaimMismatchError(AuthenticationError):
    """Token issuer or audience does not match configuration."""

    def __init__(
        self,
        message: str,
        claim: str | None = None,
        expected: str | None = None,
        actual: Any | None = None,
        **kwargs: Any,
    ) -> None:
        kwargs.setdefault("error_code", "SEC_012")

        context = kwargs.get("context", {})
        context.update({"claim": claim, "expected": expected, "actual": actual})
        kwargs["context"] = context

        super().__init__(message, **kwargs)


class ExpiredTokenError(AuthenticationError):
    """Current time is outside the token's validity window."""

    def __init__(self, message: str, **kwargs: Any) -> None:
        kwargs.setdefault("error_code", "SEC_013")
        kwargs.setdefault("severity", ErrorSeverity.MEDIUM)
        super().__init__(message, **kwargs)


class RevokedTokenError(AuthenticationError):
    """Token was issued before the subject's last password reset."""

    def __init__(self, message: str, **kwargs: Any) -> None:
        kwargs.setdefault("error_code", "SEC_014")
        super().__init__(message, **kwargs)


class ClaimExtractionError(AuthenticationError):
    """A required claim is missing or malformed in an otherwise valid token."""

    def __init__(self, message: str, claim: str | None = None, **kwargs: Any) -> None:
        kwargs.setdefault("error_code", "SEC_015")

        context = kwargs.get("context", {})
        context.update({"claim": claim})
        kwargs["context"] = context

        super().__init__(message, **kwargs)


class RefreshError(SecurityError):
    """Token refresh failed; the client must log in again."""

    def __init__(self, message: str, **kwargs: Any) -> None:
        kwargs.setdefault("error_code", "SEC_020")
        kwargs.setdefault("suggested_action", "Log in again to obtain a new token")
        super().__init__(message, **kwargs)


# =============================================================================
# COMPONENT EXCEPTIONS
# =============================================================================


class ComponentError(BxBotError):
    """Base class for all component-related errors."""

    def __init__(
        self,
        message: str,
        component: str | None = None,
        operation: str | None = None,
        **kwargs: Any,
    ) -> None:
        kwargs.setdefault("error_code", "COMP_000")
        kwargs.setdefault("category", ErrorCategory.SYSTEM)
        kwargs.setdefault("logger_name", "component")

        self.component = component
        self.operation = operation

        context = kwargs.get("context", {})
        context.update({"component": component, "operation": operation})
        kwargs["context"] = context

        super().__init__(message, **kwargs)


class ServiceError(ComponentError):
    """Service layer errors."""

    def __init__(self, message: str, **kwargs: Any) -> None:
        kwargs.setdefault("error_code", "SERV_000")
        super().__init__(message, **kwargs)


class BotNotFoundError(ServiceError):
    """No bot config exists for the requested bot id."""

    def __init__(self, message: str, bot_id: str | None = None, **kwargs: Any) -> None:
        kwargs.setdefault("error_code", "SERV_404")
        kwargs.setdefault("category", ErrorCategory.BUSINESS_LOGIC)
        kwargs.setdefault("severity", ErrorSeverity.LOW)
        self.bot_id = bot_id

        context = kwargs.get("context", {})
        context.update({"bot_id": bot_id})
        kwargs["context"] = context

        super().__init__(message, **kwargs)


__all__ = [
    "AuthenticationError",
    "BotNotFoundError",
    "BxBotError",
    "ClaimExtractionError",
    "ClaimMismatchError",
    "ComponentError",
    "ConfigurationError",
    "ErrorCategory",
    "ErrorSeverity",
    "ExpiredTokenError",
    "MalformedTokenError",
    "RefreshError",
    "RevokedTokenError",
    "SecurityError",
    "ServiceError",
    "SignatureError",
    "ValidationError",
]
