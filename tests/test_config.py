"""
Tests for environment driven configuration.
"""

import logging

import pytest

from config import JourneyConfig, Environment
from utils.logger import setup_logger


class TestJourneyConfig:
    """Defaults, overrides and validation."""

    def test_defaults(self, monkeypatch):
        for key in ("ENVIRONMENT", "TIMEZONE", "STARTER_PROGRAM_IDS", "ACHIEVEMENT_STREAK_OWN_SEQUENCE",
                    "LOG_TO_FILE"):
            monkeypatch.delenv(key, raising=False)

        journey_config = JourneyConfig()

        assert journey_config.environment == Environment.DEVELOPMENT
        assert journey_config.clock.timezone == "UTC"
        assert journey_config.programs.starter_program_ids == ("30-day-fresh-start",)
        assert journey_config.achievements.streak_own_sequence is False
        assert list(journey_config.get_logging_config()['handlers']) == ['console']

    def test_overrides(self, monkeypatch, tmp_path):
        monkeypatch.delenv("ENVIRONMENT", raising=False)
        monkeypatch.setenv("TIMEZONE", "Europe/Berlin")
        monkeypatch.setenv("STARTER_PROGRAM_IDS", "30-day-fresh-start, breakup-recovery")
        monkeypatch.setenv("ACHIEVEMENT_STREAK_OWN_SEQUENCE", "true")
        monkeypatch.setenv("LOG_TO_FILE", "true")
        monkeypatch.setenv("LOG_DIR", str(tmp_path / "logs"))

        journey_config = JourneyConfig()

        assert journey_config.programs.starter_program_ids == ("30-day-fresh-start", "breakup-recovery")
        assert journey_config.achievements.streak_own_sequence is True
        handler = journey_config.get_logging_config()['handlers']['file']
        assert handler['maxBytes'] == 10485760
        assert handler['filename'].endswith("journey_development.log")

    def test_invalid_timezone(self, monkeypatch):
        monkeypatch.setenv("TIMEZONE", "Mars/Olympus")

        with pytest.raises(ValueError, match="TIMEZONE"):
            JourneyConfig()

    def test_empty_starters(self, monkeypatch):
        monkeypatch.setenv("STARTER_PROGRAM_IDS", " , ")

        with pytest.raises(ValueError, match="STARTER_PROGRAM_IDS"):
            JourneyConfig()


class TestSetupLogger:
    """Applying the logging configuration."""

    def test_creates_directories_and_configures_root(self, monkeypatch, tmp_path):
        monkeypatch.setenv("DATA_DIR", str(tmp_path / "data"))
        monkeypatch.setenv("LOG_DIR", str(tmp_path / "logs"))
        monkeypatch.setenv("LOG_TO_FILE", "true")
        monkeypatch.setenv("LOG_LEVEL", "DEBUG")

        root = setup_logger(JourneyConfig())

        assert (tmp_path / "data").is_dir()
        assert (tmp_path / "logs").is_dir()
        assert root.level == logging.DEBUG
        for handler in root.handlers:
            handler.close()
