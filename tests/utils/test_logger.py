"""Tests for the engine logger."""

import logging

from mark_checker.utils.logger import Logger, logger, setup_logger


class TestSetupLogger:
    """Logger configuration."""

    def test_handlers_and_level(self, tmp_path, monkeypatch):
        monkeypatch.setenv("LOG_LEVEL", "debug")

        configured = setup_logger("mark_checker.test.levels", str(tmp_path / "test.log"))

        assert configured.level == logging.DEBUG
        assert configured.propagate is False
        assert len(configured.handlers) == 2

    def test_invalid_level_falls_back_to_info(self, tmp_path, monkeypatch):
        monkeypatch.setenv("LOG_LEVEL", "verbose")

        configured = setup_logger("mark_checker.test.invalid", str(tmp_path / "test.log"))

        assert configured.level == logging.INFO

    def test_handlers_not_duplicated(self, tmp_path):
        first = setup_logger("mark_checker.test.once", str(tmp_path / "test.log"))
        second = setup_logger("mark_checker.test.once", str(tmp_path / "test.log"))

        assert first is second
        assert len(second.handlers) == 2


class TestEngineLogger:
    """Singleton and counters."""

    def test_singleton(self):
        assert Logger() is logger

    def test_log_metric_increments_known_counters(self):
        before = logger.metrics["analyses"]

        logger.log_metric("analyses")
        logger.log_metric("unknown_metric")

        assert logger.metrics["analyses"] == before + 1
        assert "unknown_metric" not in logger.metrics

    def test_warning_and_error_counters(self):
        warnings, errors = logger.metrics["warnings"], logger.metrics["errors"]

        logger.warning("careful")
        logger.log_error_with_context(ValueError("bad"), {"operation": "test"})

        assert logger.metrics["warnings"] == warnings + 1
        assert logger.metrics["errors"] == errors + 1

    def test_log_performance(self, caplog):
        logger.logger.propagate = True
        try:
            with caplog.at_level(logging.INFO, logger="mark_checker"):
                logger.log_performance()
        finally:
            logger.logger.propagate = False

        assert "Performance Metrics:" in caplog.text
