"""
Unit tests for structured logging and the exception hierarchy.
"""

import logging

import pytest

from bxbot_ui.core.base import BaseComponent
from bxbot_ui.core.exceptions import (
    AuthenticationError,
    BxBotError,
    ClaimMismatchError,
    ErrorCategory,
    ErrorSeverity,
    ExpiredTokenError,
    SignatureError,
)
from bxbot_ui.core.logging import (
    SecureLogger,
    correlation_context,
    get_logger,
    get_secure_logger,
    setup_logging,
)


class RecordingLogger:
    """Stands in for a structlog logger and records calls."""

    def __init__(self):
        self.calls = []

    def bind(self, **kwargs):
        self.calls.append(("bind", "", kwargs))
        return self

    def info(self, message, **kwargs):
        self.calls.append(("info", message, kwargs))

    def warning(self, message, **kwargs):
        self.calls.append(("warning", message, kwargs))

    def debug(self, message, **kwargs):
        self.calls.append(("debug", message, kwargs))


class TestLogging:
    """Test logging setup and helpers."""

    def test_setup_logging_writes_file(self, tmp_path):
        """Test a log file is created when one is configured."""
        log_file = tmp_path / "logs" / "bxbot-ui.log"

        setup_logging(environment="production", log_level="INFO", log_file=str(log_file))
        try:
            get_logger("tests").info("Token service ready", issuer="bxbot-ui")
            for handler in logging.getLogger().handlers:
                handler.flush()

            assert log_file.exists()
            assert "Token service ready" in log_file.read_text()
        finally:
            setup_logging()

    def test_correlation_context(self):
        """Test correlation ids are scoped to the context block."""
        assert correlation_context.get_correlation_id() is None

        with correlation_context.correlation_context("req-1") as correlation_id:
            assert correlation_id == "req-1"
            assert correlation_context.get_correlation_id() == "req-1"

        assert correlation_context.get_correlation_id() is None

    def test_generated_correlation_id(self):
        with correlation_context.correlation_context() as correlation_id:
            assert correlation_id
            assert correlation_context.get_correlation_id() == correlation_id

    def test_secure_logger_redacts(self):
        """Test tokens, secrets and passwords are redacted."""
        recorder = RecordingLogger()
        secure = SecureLogger(recorder)

        secure.info(
            "Login",
            username="alice",
            token="eyJhbGciOiJIUzUxMiJ9.x.y",
            nested={"password": "hunter2", "roles": "ROLE_USER"},
        )

        _, message, kwargs = recorder.calls[-1]
        assert message == "Login"
        assert kwargs["username"] == "alice"
        assert kwargs["token"] == SecureLogger.REDACTED
        assert kwargs["nested"] == {"password": SecureLogger.REDACTED, "roles": "ROLE_USER"}

    def test_secure_logger_bind_redacts(self):
        recorder = RecordingLogger()

        SecureLogger(recorder).bind(jwt_secret="s3cr3t").warning("bound")

        assert recorder.calls[0] == ("bind", "", {"jwt_secret": SecureLogger.REDACTED})

    def test_get_secure_logger(self):
        assert isinstance(get_secure_logger(__name__), SecureLogger)

    def test_component_logger_redacts(self, monkeypatch):
        """Test components log through the redacting logger."""
        recorder = RecordingLogger()
        monkeypatch.setattr("bxbot_ui.core.logging.get_logger", lambda name: recorder)

        component = BaseComponent(name="TokenService")
        component.logger.info("Token created", username="alice", token="abc.def.ghi")

        assert isinstance(component.logger, SecureLogger)
        assert recorder.calls[0][0] == "bind"
        assert recorder.calls[0][2]["component"] == "TokenService"
        assert recorder.calls[-1] == (
            "info",
            "Token created",
            {"username": "alice", "token": SecureLogger.REDACTED},
        )


class TestExceptions:
    """Test the exception hierarchy."""

    def test_authentication_error_metadata(self):
        error = ExpiredTokenError("Token has expired", username="alice")

        assert isinstance(error, AuthenticationError)
        assert isinstance(error, BxBotError)
        assert error.error_code == "SEC_013"
        assert error.category == ErrorCategory.PERMISSION
        assert error.severity == ErrorSeverity.MEDIUM
        assert error.context["username"] == "alice"
        assert str(error) == "[SEC_013] Token has expired"

    def test_specific_codes(self):
        assert SignatureError("bad").error_code == "SEC_011"
        assert SignatureError("bad").severity == ErrorSeverity.HIGH
        mismatch = ClaimMismatchError("bad issuer", claim="iss", expected="bxbot-ui", actual="x")
        assert mismatch.error_code == "SEC_012"
        assert mismatch.context["claim"] == "iss"

    def test_to_dict_sanitizes_context(self):
        """Test sensitive context values are masked when serialized."""
        error = AuthenticationError("Login failed", token="abcdefgh")

        error_dict = error.to_dict()

        assert error_dict["exception_type"] == "AuthenticationError"
        assert error_dict["context"]["token"] == "ab***gh"

    def test_error_logs_itself(self, caplog):
        """Test errors are logged on construction at a severity-based level."""
        with caplog.at_level(logging.WARNING, logger="security"):
            ExpiredTokenError("Token has expired")

        assert any(record.getMessage() == "Token has expired" for record in caplog.records)

    def test_signature_error_logged_as_error(self, caplog):
        """Test a forged token is logged at ERROR rather than CRITICAL."""
        with caplog.at_level(logging.INFO, logger="security"):
            SignatureError("Token signature verification failed")

        levels = [
            record.levelno
            for record in caplog.records
            if record.getMessage() == "Token signature verification failed"
        ]
        assert levels == [logging.ERROR]

    def test_raising(self):
        with pytest.raises(AuthenticationError, match="expired"):
            raise ExpiredTokenError("Token has expired")
