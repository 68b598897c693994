"""Tests for configuration and logging setup."""

import json
import logging
from decimal import Decimal

import pytest
from pydantic import ValidationError

from offering_domain.log_config import PACKAGE_LOGGERS, JsonFormatter, configure_logging
from offering_domain.settings import OfferingSettings, get_settings


class TestOfferingSettings:

    def test_defaults(self):
        settings = OfferingSettings()
        assert settings.minimum_investment == Decimal("999.90")
        assert settings.default_investment_amount == Decimal("99500")
        assert settings.log_level == "INFO"
        assert settings.log_format == "text"

    def test_environment_override(self, monkeypatch):
        monkeypatch.setenv("OFFERING_MINIMUM_INVESTMENT", "2500")
        monkeypatch.setenv("OFFERING_LOG_FORMAT", "json")
        settings = OfferingSettings()
        assert settings.minimum_investment == Decimal("2500")
        assert settings.log_format == "json"

    def test_default_below_minimum_rejected(self):
        with pytest.raises(ValidationError, match="below minimum_investment"):
            OfferingSettings(minimum_investment=Decimal("5000"), default_investment_amount=Decimal("1000"))

    def test_get_settings_is_cached(self):
        assert get_settings() is get_settings()


@pytest.fixture
def restore_loggers():
    saved = {name: (logging.getLogger(name).level, list(logging.getLogger(name).handlers))
             for name in PACKAGE_LOGGERS}
    yield
    for name, (level, handlers) in saved.items():
        logger = logging.getLogger(name)
        logger.handlers = handlers
        logger.setLevel(level)


class TestConfigureLogging:

    def test_installs_single_handler(self, restore_loggers):
        configure_logging(level="debug", fmt="json")
        configure_logging(level="debug", fmt="json")

        for name in PACKAGE_LOGGERS:
            logger = logging.getLogger(name)
            named = [h for h in logger.handlers if h.get_name() == "offering"]
            assert len(named) == 1
            assert isinstance(named[0].formatter, JsonFormatter)
            assert logger.level == logging.DEBUG

    def test_defaults_from_settings(self, restore_loggers, monkeypatch):
        monkeypatch.setenv("OFFERING_LOG_LEVEL", "WARNING")
        get_settings.cache_clear()
        configure_logging()
        assert logging.getLogger("offering_domain").level == logging.WARNING

    def test_json_formatter(self):
        record = logging.LogRecord(
            name="offering_domain.calculator",
            level=logging.INFO,
            pathname=__file__,
            lineno=1,
            msg="calculated %s",
            args=("1000",),
            exc_info=None,
        )
        payload = json.loads(JsonFormatter().format(record))
        assert payload["level"] == "INFO"
        assert payload["name"] == "offering_domain.calculator"
        assert payload["msg"] == "calculated 1000"
        assert "ts" in payload
