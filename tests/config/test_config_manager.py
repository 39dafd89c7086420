"""Tests for environment-driven configuration."""

import logging
from unittest.mock import patch

import pytest

from mark_checker.config import (
    ConfigManager,
    ImageNormalizationConfig,
    SpellingConfig,
    TopicRelevanceConfig,
)
from mark_checker.exceptions import ConfigurationError
from mark_checker.utils.logger import logger

ENV_KEYS = [
    "DEBUG", "LOG_LEVEL", "LEXICON_PATH", "LEXICON_MAX_CANDIDATES", "SPELLING_MAX_ISSUES",
    "TOPIC_COVERAGE_GATE", "TOPIC_JACCARD_GATE", "TOPIC_SENTENCE_OVERLAP",
    "TOPIC_PASS_THRESHOLD", "IMAGE_MAX_WIDTH", "IMAGE_MAX_OUTPUT_BYTES",
    "IMAGE_DOCUMENT_SIZE_THRESHOLD", "IMAGE_DENSITY_THRESHOLD",
]


@pytest.fixture(autouse=True)
def clean_environment(monkeypatch):
    for key in ENV_KEYS:
        monkeypatch.delenv(key, raising=False)
    ConfigManager.reset()
    with patch("mark_checker.config.config_manager.load_dotenv"):
        yield
    ConfigManager.reset()
    logger.set_level("INFO")


class TestConfigManager:
    """Configuration loading."""

    def test_defaults(self):
        config = ConfigManager().config

        assert config.debug is False
        assert config.log_level == "INFO"
        assert config.lexicon_path is None
        assert config.spelling.max_candidates == 400
        assert config.topic.coverage_gate == 0.15
        assert config.topic.pass_threshold == 10
        assert config.image.max_width == 2000
        assert config.image.max_output_bytes == 2 * 1024 * 1024

    def test_singleton(self):
        assert ConfigManager() is ConfigManager()

    def test_environment_overrides(self, monkeypatch):
        monkeypatch.setenv("DEBUG", "true")
        monkeypatch.setenv("TOPIC_COVERAGE_GATE", "0.25  # stricter gate")
        monkeypatch.setenv("TOPIC_PASS_THRESHOLD", "12")
        monkeypatch.setenv("IMAGE_MAX_WIDTH", "1600")
        monkeypatch.setenv("SPELLING_MAX_ISSUES", "10")

        config = ConfigManager().config

        assert config.debug is True
        assert config.topic.coverage_gate == 0.25
        assert config.topic.pass_threshold == 12
        assert config.image.max_width == 1600
        assert config.spelling.max_issues == 10

    def test_debug_switches_engine_logging_to_debug(self, monkeypatch):
        monkeypatch.setenv("DEBUG", "true")
        monkeypatch.setenv("LOG_LEVEL", "warning")

        config = ConfigManager().config

        assert config.log_level == "DEBUG"
        assert logger.logger.level == logging.DEBUG

    def test_log_level_applied_to_engine_logger(self, monkeypatch):
        monkeypatch.setenv("LOG_LEVEL", "warning")

        assert ConfigManager().config.log_level == "WARNING"
        assert logger.logger.level == logging.WARNING

    def test_unknown_log_level_falls_back_to_info(self, monkeypatch):
        monkeypatch.setenv("LOG_LEVEL", "verbose")

        assert ConfigManager().config.log_level == "INFO"

    def test_malformed_value_names_the_key(self, monkeypatch):
        monkeypatch.setenv("IMAGE_MAX_WIDTH", "wide")

        with pytest.raises(ConfigurationError) as exc_info:
            ConfigManager()

        assert exc_info.value.details["config_key"] == "IMAGE_MAX_WIDTH"

    def test_invalid_values_fall_back_to_defaults(self, monkeypatch):
        monkeypatch.setenv("LEXICON_MAX_CANDIDATES", "0")
        monkeypatch.setenv("IMAGE_MAX_WIDTH", "-5")

        config = ConfigManager().config

        assert config.spelling.max_candidates == 400
        assert config.image.max_width == 2000

    def test_reset_rereads_environment(self, monkeypatch):
        assert ConfigManager().config.image.max_width == 2000

        monkeypatch.setenv("IMAGE_MAX_WIDTH", "1200")
        ConfigManager.reset()

        assert ConfigManager().config.image.max_width == 1200


class TestHeuristicConfigs:
    """Tuning dataclasses."""

    def test_to_dict(self):
        assert SpellingConfig().to_dict()["max_issues"] == 30
        assert TopicRelevanceConfig().to_dict()["score_bands"][0] == [70.0, 19, 20, 100.0]
        assert ImageNormalizationConfig().to_dict()["jpeg_quality"] == 85
