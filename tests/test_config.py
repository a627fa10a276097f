"""Tests for settings and logging helpers."""

import logging

from moltraj.config import load_settings
from moltraj.core import logging_utils


class TestSettings:
    def test_defaults(self, monkeypatch):
        for name in ("MOLTRAJ_LOG_LEVEL", "MOLTRAJ_LOG_FORMAT", "MOLTRAJ_DEFAULT_FORMAT"):
            monkeypatch.delenv(name, raising=False)
        settings = load_settings()
        assert settings.log_level == "INFO"
        assert "%(message)s" in settings.log_format
        assert settings.default_format is None

    def test_environment(self, monkeypatch):
        monkeypatch.setenv("MOLTRAJ_LOG_LEVEL", "debug")
        monkeypatch.setenv("MOLTRAJ_DEFAULT_FORMAT", "XYZ")
        settings = load_settings()
        assert settings.log_level == "DEBUG"
        assert settings.default_format == "XYZ"

    def test_empty_default_format(self, monkeypatch):
        monkeypatch.setenv("MOLTRAJ_DEFAULT_FORMAT", "")
        assert load_settings().default_format is None


class TestWarningSink:
    def test_default_logs(self, caplog):
        with caplog.at_level(logging.WARNING, logger="moltraj.warnings"):
            logging_utils.warn("something odd")
        assert [r.getMessage() for r in caplog.records] == ["something odd"]

    def test_custom_sink(self, collected, caplog):
        logging_utils.set_warning_sink(collected)
        try:
            with caplog.at_level(logging.WARNING, logger="moltraj.warnings"):
                logging_utils.warn("redirected")
        finally:
            logging_utils.reset_warning_sink()
        assert collected.messages == ["redirected"]
        assert caplog.records == []

    def test_get_logger(self):
        assert logging_utils.get_logger("moltraj.test").name == "moltraj.test"
