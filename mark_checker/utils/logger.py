"""
Unified Logging Configuration for the Mark Checker engine.

This module provides a standardized logging interface shared by the grading
heuristics, the lexicon cache and the image normalizer.
"""

import logging
import os
from datetime import datetime
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Any, Dict, Optional

from mark_checker.constants import ENV_LOG_LEVEL

VALID_LOG_LEVELS = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]


def setup_logger(name: str, log_file: Optional[str] = None) -> logging.Logger:
    """
    Set up a logger with proper configuration.

    Args:
        name: Name of the logger (usually __name__)
        log_file: Optional log file path. If not provided, logs to
            <LOG_DIR>/mark_checker.log

    Returns:
        logging.Logger: Configured logger instance
    """
    logger = logging.getLogger(name)

    if not logger.handlers:
        log_level = os.getenv(ENV_LOG_LEVEL, "INFO").upper()
        if log_level not in VALID_LOG_LEVELS:
            log_level = "INFO"

        logger.setLevel(getattr(logging, log_level, logging.INFO))

        file_formatter = logging.Formatter(
            "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
        )
        console_formatter = logging.Formatter("%(levelname)s - %(message)s")

        console_handler = logging.StreamHandler()
        console_handler.setFormatter(console_formatter)
        console_handler.setLevel(getattr(logging, log_level, logging.INFO))
        logger.addHandler(console_handler)

        if log_file is None:
            log_dir = Path(os.getenv("LOG_DIR", "logs"))
            log_dir.mkdir(parents=True, exist_ok=True)
            log_file = log_dir / "mark_checker.log"

        file_handler = RotatingFileHandler(
            str(log_file),
            maxBytes=10 * 1024 * 1024,  # 10MB
            backupCount=5,
            delay=True,
            encoding="utf-8",
        )
        file_handler.setFormatter(file_formatter)
        file_handler.setLevel(getattr(logging, log_level, logging.INFO))
        logger.addHandler(file_handler)

        logger.propagate = False

    return logger


class Logger:
    """Process-wide logger with lightweight engine counters."""

    _instance = None

    def __new__(cls):
        if cls._instance is None:
            cls._instance = super().__new__(cls)
            cls._instance._initialized = False
        return cls._instance

    def __init__(self):
        if getattr(self, "_initialized", False):
            return

        self.logger = setup_logger("mark_checker", None)

        self.metrics = {
            "start_time": datetime.now(),
            "analyses": 0,
            "spelling_checks": 0,
            "lexicon_loads": 0,
            "image_normalizations": 0,
            "image_fallbacks": 0,
            "errors": 0,
            "warnings": 0,
        }

        self._initialized = True

    def set_level(self, level: str) -> None:
        """Apply a level name to the engine logger and its handlers."""
        level = level.upper()
        if level not in VALID_LOG_LEVELS:
            level = "INFO"
        numeric_level = getattr(logging, level)
        self.logger.setLevel(numeric_level)
        for handler in self.logger.handlers:
            handler.setLevel(numeric_level)

    def debug(self, message: str, *args, **kwargs) -> None:
        self.logger.debug(message, *args, **kwargs)

    def info(self, message: str, *args, **kwargs) -> None:
        self.logger.info(message, *args, **kwargs)

    def warning(self, message: str, *args, **kwargs) -> None:
        self.log_metric("warnings")
        self.logger.warning(message, *args, **kwargs)

    def error(self, message: str, *args, **kwargs) -> None:
        self.log_metric("errors")
        self.logger.error(message, *args, **kwargs)

    def exception(self, message: str, *args, **kwargs) -> None:
        self.log_metric("errors")
        self.logger.exception(message, *args, **kwargs)

    def log_error_with_context(self, error: Exception, context: Dict[str, Any]) -> None:
        """Log an error with additional context information.

        Args:
            error: The exception that occurred
            context: Additional context information
        """
        self.log_metric("errors")

        error_info = {
            "error_type": type(error).__name__,
            "error_message": str(error),
            "context": context,
            "timestamp": datetime.now().isoformat(),
        }

        self.logger.error(
            f"Error occurred: {error_info['error_type']} - {error_info['error_message']}",
            extra={"error_context": error_info},
        )

    def log_metric(self, metric_name: str, value: Any = 1) -> None:
        """Log a metric value."""
        if metric_name in self.metrics:
            if isinstance(self.metrics[metric_name], (int, float)):
                self.metrics[metric_name] += value
            else:
                self.metrics[metric_name] = value

    def log_performance(self) -> None:
        """Log accumulated engine counters."""
        duration = (datetime.now() - self.metrics["start_time"]).total_seconds()
        self.info("Performance Metrics:")
        self.info(f"  Duration: {duration:.2f} seconds")
        self.info(f"  Analyses: {self.metrics['analyses']}")
        self.info(f"  Spelling Checks: {self.metrics['spelling_checks']}")
        self.info(f"  Lexicon Loads: {self.metrics['lexicon_loads']}")
        self.info(f"  Image Normalizations: {self.metrics['image_normalizations']}")
        self.info(f"  Image Fallbacks: {self.metrics['image_fallbacks']}")
        self.info(f"  Errors: {self.metrics['errors']}")
        self.info(f"  Warnings: {self.metrics['warnings']}")


# Create default logger instance
logger = Logger()
