"""Tests de settings.py y logging_config.py"""

import logging

import pytest

from backend.core.dxcompare.logging_config import setup_logging
from backend.core.dxcompare.settings import Settings, get_settings


class TestSettings:
    def test_defaults(self, monkeypatch):
        for name in ("MAX_WORKERS", "EXTERNAL_TIMEOUT_SECS", "CSV_SNIFF_LINES", "LOG_LEVEL"):
            monkeypatch.delenv(f"DXCOMPARE_{name}", raising=False)

        settings = Settings(_env_file=None)

        assert settings.MAX_WORKERS == 4
        assert settings.EXTERNAL_TIMEOUT_SECS == 300.0
        assert settings.CSV_SNIFF_LINES == 10

    def test_environment_override(self, monkeypatch):
        monkeypatch.setenv("DXCOMPARE_MAX_WORKERS", "2")
        monkeypatch.setenv("DXCOMPARE_EXTERNAL_TIMEOUT_SECS", "12.5")

        settings = Settings(_env_file=None)

        assert settings.MAX_WORKERS == 2
        assert settings.EXTERNAL_TIMEOUT_SECS == 12.5

    def test_get_settings_is_cached(self):
        assert get_settings() is get_settings()


class TestSetupLogging:
    @pytest.fixture(autouse=True)
    def restore_root_logger(self):
        root = logging.getLogger()
        handlers, level = root.handlers[:], root.level
        yield
        for handler in root.handlers[:]:
            if handler not in handlers:
                root.removeHandler(handler)
                handler.close()
        for handler in handlers:
            if handler not in root.handlers:
                root.addHandler(handler)
        root.setLevel(level)

    def test_returns_package_logger(self, tmp_path):
        log_file = tmp_path / "logs" / "run.log"

        logger = setup_logging("debug", log_file)
        logger.info("mensaje de prueba")

        assert logger.name == "dxcompare"
        assert logging.getLogger().level == logging.DEBUG
        assert log_file.exists()

    def test_unknown_level_raises(self):
        with pytest.raises(ValueError):
            setup_logging("verbose")
