import json
import logging
import sys
from datetime import date
from decimal import Decimal

import pytest

from snowball.config import Settings
from snowball.logging_config import JSONFormatter, get_logger, setup_logging


def test_settings_defaults(monkeypatch):
    for name in (
        "SNOWBALL_MAX_PROJECTION_MONTHS",
        "SNOWBALL_LOG_LEVEL",
        "SNOWBALL_DEV_MODE",
        "SNOWBALL_LOG_JSON",
    ):
        monkeypatch.delenv(name, raising=False)
    settings = Settings()
    assert settings.MAX_PROJECTION_MONTHS == 600
    assert settings.LOG_LEVEL == "INFO"
    assert settings.DEV_MODE is True
    assert settings.LOG_JSON is False


def test_settings_from_environment(monkeypatch):
    monkeypatch.setenv("SNOWBALL_MAX_PROJECTION_MONTHS", "120")
    monkeypatch.setenv("SNOWBALL_LOG_LEVEL", "debug")
    monkeypatch.setenv("SNOWBALL_DEV_MODE", "no")
    monkeypatch.setenv("SNOWBALL_LOG_JSON", "yes")
    settings = Settings()
    assert settings.MAX_PROJECTION_MONTHS == 120
    assert settings.LOG_LEVEL == "DEBUG"
    assert settings.DEV_MODE is False
    assert settings.LOG_JSON is True


@pytest.mark.parametrize("value", ["abc", "0", "-5"])
def test_settings_reject_bad_month_cap(monkeypatch, value):
    monkeypatch.setenv("SNOWBALL_MAX_PROJECTION_MONTHS", value)
    with pytest.raises(ValueError):
        Settings()


def make_record(msg="Projection converged", exc_info=None):
    return logging.LogRecord(
        name="snowball.services",
        level=logging.INFO,
        pathname=__file__,
        lineno=1,
        msg=msg,
        args=(),
        exc_info=exc_info,
    )


def test_json_formatter_nests_context_fields():
    record = make_record()
    record.months = 5
    record.debt_free_date = date(2026, 5, 31)
    record.total_minimums = Decimal("150.50")
    payload = json.loads(JSONFormatter().format(record))
    assert payload["message"] == "Projection converged"
    assert payload["level"] == "INFO"
    assert payload["logger"] == "snowball.services"
    assert payload["context"] == {
        "months": 5,
        "debt_free_date": "2026-05-31",
        "total_minimums": "150.50",
    }
    assert "exc" not in payload


def test_json_formatter_without_context_or_with_exception():
    payload = json.loads(JSONFormatter().format(make_record()))
    assert "context" not in payload

    try:
        raise ValueError("bad month")
    except ValueError:
        record = make_record("Projection failed", exc_info=sys.exc_info())
    payload = json.loads(JSONFormatter().format(record))
    assert "ValueError: bad month" in payload["exc"]
    assert "context" not in payload


def test_setup_logging_replaces_handlers(monkeypatch):
    monkeypatch.setenv("SNOWBALL_LOG_JSON", "true")
    settings = Settings()
    setup_logging(settings)
    logger = setup_logging(settings)
    assert len(logger.handlers) == 1
    assert isinstance(logger.handlers[0].formatter, JSONFormatter)
    assert get_logger("services").name == "snowball.services"
