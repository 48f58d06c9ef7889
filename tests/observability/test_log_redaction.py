"""Tests for structured logging configuration and redaction."""

import logging

import pytest
import structlog

from soapx.observability.logging import (
    ENV_DEBUG,
    REDACTED_PLACEHOLDER,
    _redact_event,
    bind_context,
    clear_context,
    configure_logging,
    get_logger,
    is_debug_mode,
    sanitize_for_logging,
)


class TestConfigureLogging:
    """Tests for configure_logging function."""

    def test_respects_log_level(self) -> None:
        """Test that configure_logging sets the root log level."""
        configure_logging(log_format="console", log_level="WARNING", force=True)

        assert logging.getLogger().level == logging.WARNING

    def test_level_from_environment(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("SOAPX_LOG_LEVEL", "error")

        configure_logging(force=True)

        assert logging.getLogger().level == logging.ERROR

    def test_json_format(self) -> None:
        configure_logging(log_format="json", log_level="INFO", force=True)

        assert get_logger("soapx.test") is not None

    def test_single_handler_after_reconfigure(self) -> None:
        configure_logging(log_level="INFO", force=True)
        configure_logging(log_level="INFO", force=True)

        assert len(logging.getLogger().handlers) == 1

    def test_context_binding(self) -> None:
        bind_context(call_id="abc")
        assert structlog.contextvars.get_contextvars() == {"call_id": "abc"}

        clear_context()
        assert structlog.contextvars.get_contextvars() == {}


class TestRedaction:
    """Tests for sensitive field redaction."""

    def test_sensitive_keys_redacted(self) -> None:
        result = sanitize_for_logging({"login": "alice", "password": "secret123"})

        assert result == {"login": "alice", "password": REDACTED_PLACEHOLDER}

    def test_nested_header_map(self) -> None:
        event = {"headers": {"Authorization": "Basic dTpw", "SOAPAction": '"Op"'}}

        result = sanitize_for_logging(event)

        assert result["headers"] == {"Authorization": REDACTED_PLACEHOLDER, "SOAPAction": '"Op"'}
        assert event["headers"]["Authorization"] == "Basic dTpw"

    def test_key_match_is_case_insensitive(self) -> None:
        assert sanitize_for_logging({"X-Api-TOKEN": "t"}) == {"X-Api-TOKEN": REDACTED_PLACEHOLDER}

    def test_processor_redacts(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.delenv(ENV_DEBUG, raising=False)

        result = _redact_event(None, "info", {"event": "x", "credentials": "u:p"})

        assert result["credentials"] == REDACTED_PLACEHOLDER

    def test_debug_mode_disables_redaction(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv(ENV_DEBUG, "true")

        assert is_debug_mode()
        assert _redact_event(None, "info", {"password": "p"}) == {"password": "p"}

    @pytest.mark.parametrize("value", ["", "0", "false", "no"])
    def test_debug_mode_off(self, monkeypatch: pytest.MonkeyPatch, value: str) -> None:
        monkeypatch.setenv(ENV_DEBUG, value)

        assert not is_debug_mode()
