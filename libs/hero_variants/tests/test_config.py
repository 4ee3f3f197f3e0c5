"""Tests config: niveau de log du package."""
import logging

import pytest

from hero_variants import config, migrate


@pytest.fixture
def package_logger():
    logger = logging.getLogger("hero_variants")
    level = logger.level
    yield logger
    logger.setLevel(level)


# ── configure_logging ────────────────────────────────────────────────────────

class TestConfigureLogging:
    def test_explicit_level(self, package_logger):
        logger = config.configure_logging("debug")
        assert logger is package_logger
        assert logger.level == logging.DEBUG

    def test_falls_back_to_env_level(self, package_logger, monkeypatch):
        monkeypatch.setattr(config, "LOG_LEVEL", "error")
        assert config.configure_logging().level == logging.ERROR

    def test_module_loggers_inherit_level(self, package_logger, caplog, centered):
        config.configure_logging("INFO")
        with caplog.at_level(logging.INFO, logger="hero_variants"):
            migrate(centered, "minimal", "balanced")
        assert any(r.name == "hero_variants.migration" and "centered" in r.getMessage()
                   for r in caplog.records)
