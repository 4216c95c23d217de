"""
Unit tests for settings and logging helpers.
"""

import json
import logging
import os

import pytest
from pydantic import ValidationError

from hybrid_intent import configure_logging
from hybrid_intent.config import Settings, get_settings
from hybrid_intent.utils.logger import CustomJsonFormatter, get_request_logger

pytestmark = pytest.mark.unit


class TestSettings:

    def test_defaults(self):
        settings = Settings()

        assert settings.SERVICE_NAME == "hybrid-intent"
        assert settings.BAYES_ALPHA == 0.1
        assert settings.RESPONSE_CONFIDENCE_THRESHOLD == 0.7
        assert settings.MODEL_PATH is None
        assert os.path.exists(settings.CORPUS_PATH)
        assert os.path.exists(settings.RULES_PATH)

    def test_log_level_normalized(self):
        assert Settings(LOG_LEVEL="debug").LOG_LEVEL == "DEBUG"

    @pytest.mark.parametrize("overrides", [
        {"LOG_LEVEL": "chatty"},
        {"RESPONSE_CONFIDENCE_THRESHOLD": 1.5},
        {"RESPONSE_CONFIDENCE_THRESHOLD": -0.1},
        {"BAYES_ALPHA": 0},
        {"DIAGNOSTIC_TOP_N": 0},
        {"DIAGNOSTIC_SNIPPET_LENGTH": 0},
    ])
    def test_rejects_invalid_values(self, overrides):
        with pytest.raises(ValidationError):
            Settings(**overrides)

    def test_reads_environment(self, monkeypatch):
        monkeypatch.setenv("BAYES_ALPHA", "0.5")
        monkeypatch.setenv("RESPONSE_INTENTS", '["command"]')

        settings = Settings()

        assert settings.BAYES_ALPHA == 0.5
        assert settings.RESPONSE_INTENTS == ["command"]

    def test_get_settings_is_cached(self):
        assert get_settings() is get_settings()


class TestLogging:

    def test_json_formatter(self):
        record = logging.LogRecord("hybrid_intent.test", logging.INFO, __file__, 1, "classified", None, None)
        record.correlation_id = "abc-123"
        record.intent = "small-talk"

        payload = json.loads(CustomJsonFormatter().format(record))

        assert payload["message"] == "classified"
        assert payload["level"] == "INFO"
        assert payload["service"] == get_settings().SERVICE_NAME
        assert payload["correlation_id"] == "abc-123"
        assert payload["intent"] == "small-talk"

    def test_request_logger_context(self, caplog):
        adapter = get_request_logger("hybrid_intent.test", "abc-123", channel="general")
        assert adapter.extra == {"channel": "general", "correlation_id": "abc-123"}

        with caplog.at_level(logging.INFO, logger="hybrid_intent.test"):
            adapter.info("classified", extra={"intent": "command"})

        payload = json.loads(CustomJsonFormatter().format(caplog.records[-1]))
        assert payload["channel"] == "general"
        assert payload["correlation_id"] == "abc-123"
        assert payload["intent"] == "command"

    def test_request_logger_generates_correlation_id(self):
        adapter = get_request_logger("hybrid_intent.test")
        assert adapter.correlation_id
        assert "channel" not in adapter.extra

    def test_configure_logging(self):
        root = logging.getLogger()
        handlers, level = root.handlers[:], root.level
        try:
            configure_logging("warning")

            assert root.level == logging.WARNING
            assert isinstance(root.handlers[0].formatter, CustomJsonFormatter)
            assert logging.getLogger("sklearn").level == logging.WARNING
        finally:
            root.handlers[:] = handlers
            root.setLevel(level)
