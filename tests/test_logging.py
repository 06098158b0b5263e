"""Tests for logging with secret redaction."""

import logging

import pytest

from measure_agi.config import LoggingConfig
from measure_agi.logging import SecretRedactingFilter, redact, setup_logging


class TestRedact:
    """Tests for redact."""

    def test_redact_bearer_token(self) -> None:
        """Test redacting Bearer tokens."""
        result = redact("Bearer my-secret-token-here")
        assert "my-secret-token-here" not in result
        assert "Bearer [REDACTED]" in result

    def test_redact_authorization_header(self) -> None:
        """Test redacting Authorization headers."""
        assert "abc123secret" not in redact("Authorization: abc123secret")

    @pytest.mark.parametrize(
        ("url", "expected"),
        [
            (
                "https://cdn.example.com/data.json?token=s3cr3t&v=2",
                "https://cdn.example.com/data.json?token=[REDACTED]&v=2",
            ),
            (
                "https://cdn.example.com/data.json?v=2&api_key=abc123",
                "https://cdn.example.com/data.json?v=2&api_key=[REDACTED]",
            ),
            (
                "https://bucket.s3.amazonaws.com/d.json?X-Amz-Signature=f00d#top",
                "https://bucket.s3.amazonaws.com/d.json?X-Amz-Signature=[REDACTED]#top",
            ),
            (
                "https://cdn.example.com/d.json?access_token=s3cr3t",
                "https://cdn.example.com/d.json?access_token=[REDACTED]",
            ),
        ],
    )
    def test_redact_url_credentials(self, url: str, expected: str) -> None:
        """Test that credential parameters are redacted and the rest of the URL kept."""
        assert redact(url) == expected

    def test_plain_text_untouched(self) -> None:
        """Test that messages without secrets are unchanged."""
        text = "Loaded payload from assets/data/sample-data.json"
        assert redact(text) == text


class TestSecretRedactingFilter:
    """Tests for the redaction filter."""

    def test_filter_redacts_args(self) -> None:
        """Test that string arguments of a record are redacted."""
        record = logging.LogRecord(
            name="test",
            level=logging.WARNING,
            pathname=__file__,
            lineno=1,
            msg="Error loading data from %s (%d)",
            args=("https://x.test/d.json?token=s3cr3t", 500),
            exc_info=None,
        )

        assert SecretRedactingFilter().filter(record) is True
        assert "s3cr3t" not in record.getMessage()
        assert "500" in record.getMessage()


class TestSetupLogging:
    """Tests for logging setup."""

    def test_installs_filter_once(self) -> None:
        """Test that repeated setup attaches a single redaction filter per handler."""
        setup_logging(LoggingConfig(verbose=True))
        setup_logging(LoggingConfig(verbose=True))

        root = logging.getLogger()
        assert root.handlers
        for handler in root.handlers:
            assert sum(isinstance(f, SecretRedactingFilter) for f in handler.filters) == 1

    def test_quiet_loggers(self) -> None:
        """Test that configured loggers are capped at WARNING."""
        setup_logging(LoggingConfig(quiet_loggers=["measure_agi.test.noisy"]))
        assert logging.getLogger("measure_agi.test.noisy").level == logging.WARNING

    def test_default_settings(self) -> None:
        """Test that setup without settings quiets the HTTP client loggers."""
        setup_logging()
        assert logging.getLogger("httpx").level == logging.WARNING
        assert logging.getLogger("httpcore").level == logging.WARNING
