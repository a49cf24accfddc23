"""
Structured logging for the BX-bot UI server.

This module provides structlog-based logging with correlation tracking and
secure logging practices. Configured for JSON formatting in production.

Features:
- Structured JSON logging for production
- Correlation ID tracking for request tracing
- Secure logging (no tokens, secrets or passwords)
- Log rotation and retention policies
"""

import contextvars
import logging
import logging.handlers
import sys
import time
import uuid
from contextlib import contextmanager
from pathlib import Path
from typing import Any, cast

import structlog


class CorrelationContext:
    """Correlation ID tracking for request tracing.

    Backed by contextvars, so each thread or task sees its own id.
    """

    def __init__(self):
        self._context: contextvars.ContextVar[str | None] = contextvars.ContextVar(
            "correlation_id", default=None
        )

    def set_correlation_id(self, correlation_id: str) -> None:
        """Set correlation ID for current context."""
        self._context.set(correlation_id)

    def get_correlation_id(self) -> str | None:
        """Get current correlation ID."""
        return self._context.get()

    def generate_correlation_id(self) -> str:
        """Generate a new correlation ID."""
        return str(uuid.uuid4())

    @contextmanager
    def correlation_context(self, correlation_id: str | None = None):
        """Context manager scoping a correlation ID to a block."""
        if correlation_id is None:
            correlation_id = self.generate_correlation_id()

        token = self._context.set(correlation_id)
        try:
            yield correlation_id
        finally:
            self._context.reset(token)


# Global correlation context
correlation_context = CorrelationContext()


def _add_correlation_id(
    logger: Any, method_name: str, event_dict: dict[str, Any]
) -> dict[str, Any]:
    """Add correlation ID to event dict."""
    correlation_id = correlation_context.get_correlation_id()
    if correlation_id is not None:
        event_dict.setdefault("correlation_id", correlation_id)
    return event_dict


def _safe_unicode_decoder(
    logger: Any, method_name: str, event_dict: dict[str, Any]
) -> dict[str, Any]:
    """Unicode decoder tolerating empty event dicts."""
    if event_dict is not None:
        return cast(
            dict[str, Any],
            structlog.processors.UnicodeDecoder()(logger, method_name, event_dict),
        )
    return {}


def setup_logging(
    environment: str = "development",
    log_level: str = "INFO",
    log_file: str | None = None,
    max_bytes: int = 10 * 1024 * 1024,  # 10MB
    backup_count: int = 5,
    retention_days: int = 30,
) -> None:
    """Setup structured logging configuration with rotation and retention.

    Args:
        environment: Environment (development, staging, production)
        log_level: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        log_file: Log file path (None for stdout only)
        max_bytes: Maximum bytes per log file before rotation
        backup_count: Number of backup files to keep
        retention_days: Days to retain log files
    """
    processors = [
        structlog.stdlib.filter_by_level,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.stdlib.PositionalArgumentsFormatter(),
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
        _add_correlation_id,
        _safe_unicode_decoder,
    ]

    if environment == "production":
        processors.append(structlog.processors.JSONRenderer())
    else:
        processors.append(structlog.dev.ConsoleRenderer())

    structlog.configure(
        processors=processors,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )

    level = getattr(logging, log_level.upper())
    handlers: list[logging.Handler] = [logging.StreamHandler(sys.stdout)]

    if log_file:
        log_path = Path(log_file)
        log_path.parent.mkdir(parents=True, exist_ok=True)
        handlers.append(
            logging.handlers.RotatingFileHandler(
                filename=log_file,
                maxBytes=max_bytes,
                backupCount=backup_count,
                encoding="utf-8",
            )
        )
        _cleanup_old_logs(log_path.parent, log_path.stem, retention_days)

    logging.basicConfig(format="%(message)s", level=level, handlers=handlers, force=True)


def get_logger(name: str) -> structlog.stdlib.BoundLogger:
    """Get a structured logger instance.

    Args:
        name: Logger name (usually __name__)

    Returns:
        Configured structured logger with correlation ID support
    """
    return structlog.get_logger(name)


class SecureLogger:
    """Logger wrapper that prevents sensitive data from being logged.

    Sanitizes fields like passwords, secrets and tokens before logging.

    Attributes:
        logger: Underlying structured logger
        sensitive_fields: Set of field names to sanitize
    """

    REDACTED = "***REDACTED***"

    def __init__(self, logger: Any):
        self.logger = logger
        self.sensitive_fields = {
            "password",
            "secret",
            "key",
            "token",
            "authorization",
            "auth",
        }

    def _sanitize_data(self, data: dict[str, Any]) -> dict[str, Any]:
        """Remove sensitive data from logging."""
        sanitized = {}
        for key, value in data.items():
            if isinstance(value, dict):
                sanitized[key] = self._sanitize_data(value)
            elif isinstance(value, str) and any(
                field in key.lower() for field in self.sensitive_fields
            ):
                sanitized[key] = self.REDACTED
            else:
                sanitized[key] = value
        return sanitized

    def bind(self, **kwargs: Any) -> "SecureLogger":
        """Return a secure logger with extra bound context."""
        return SecureLogger(self.logger.bind(**self._sanitize_data(kwargs)))

    def info(self, message: str, **kwargs: Any) -> None:
        self.logger.info(message, **self._sanitize_data(kwargs))

    def warning(self, message: str, **kwargs: Any) -> None:
        self.logger.warning(message, **self._sanitize_data(kwargs))

    def error(self, message: str, **kwargs: Any) -> None:
        self.logger.error(message, **self._sanitize_data(kwargs))

    def critical(self, message: str, **kwargs: Any) -> None:
        self.logger.critical(message, **self._sanitize_data(kwargs))

    def debug(self, message: str, **kwargs: Any) -> None:
        self.logger.debug(message, **self._sanitize_data(kwargs))


def get_secure_logger(name: str) -> SecureLogger:
    """
    Get a secure logger instance that prevents sensitive data logging.

    Args:
        name: Logger name (usually __name__)

    Returns:
        Secure logger instance
    """
    return SecureLogger(get_logger(name))


def _cleanup_old_logs(log_dir: Path, log_name: str, retention_days: int) -> None:
    """Remove rotated log files older than the retention period."""
    if not log_dir.exists():
        return

    cutoff_time = time.time() - (retention_days * 24 * 3600)
    cleanup_logger = logging.getLogger(__name__)

    for log_file in log_dir.glob(f"{log_name}*"):
        try:
            if log_file.stat().st_mtime < cutoff_time:
                log_file.unlink()
                cleanup_logger.info("Removed old log file: %s", log_file)
        except OSError as e:
            cleanup_logger.warning("Failed to remove old log file %s: %s", log_file, e)
