"""Tests for structured logging and URL redaction."""

import json
import logging

import pytest

from breezy_weather.logging_config import get_logger, log_with_context, setup_logging
from breezy_weather.middleware.logging_middleware import redact_sensitive_data


@pytest.mark.parametrize(
    ("url", "expected"),
    [
        (
            "https://api.openweathermap.org/data/2.5/weather?q=Tokyo&appid=abc123&units=metric",
            "https://api.openweathermap.org/data/2.5/weather?q=Tokyo&appid=***REDACTED***&units=metric",
        ),
        ("https://example.test/?APPID=abc", "https://example.test/?APPID=***REDACTED***"),
        ("https://example.test/?token=t&password=p", "https://example.test/?token=***REDACTED***&password=***REDACTED***"),
        ("https://example.test/forecast?q=Paris", "https://example.test/forecast?q=Paris"),
    ],
)
def test_redact_sensitive_data(url, expected):
    """Test secrets in query strings never reach the logs."""
    assert redact_sensitive_data(url) == expected


def test_setup_logging_writes_json(tmp_path):
    """Test context fields end up in the JSON log file."""
    root = logging.getLogger()
    previous_handlers, previous_level = list(root.handlers), root.level
    try:
        setup_logging("DEBUG", log_dir=tmp_path)
        logger = get_logger("breezy_weather.test")

        log_with_context(logger, "info", "City added", city="Tokyo", event_type="city_added")
        for handler in root.handlers:
            handler.flush()

        lines = (tmp_path / "breezy.log").read_text(encoding="utf-8").splitlines()
        record = json.loads(lines[-1])
        assert record["message"] == "City added"
        assert record["city"] == "Tokyo"
        assert record["event_type"] == "city_added"
        assert record["level"] == "INFO"
        assert "time" in record
    finally:
        for handler in root.handlers:
            handler.close()
        root.handlers[:] = previous_handlers
        root.setLevel(previous_level)


def test_log_with_context_level(caplog):
    """Test the level name selects the logger method."""
    logger = get_logger("breezy_weather.test")

    with caplog.at_level(logging.WARNING, logger="breezy_weather.test"):
        log_with_context(logger, "debug", "hidden")
        log_with_context(logger, "WARNING", "shown", city="Paris")

    assert [record.getMessage() for record in caplog.records] == ["shown"]
    assert caplog.records[0].city == "Paris"
