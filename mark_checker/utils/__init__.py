"""Shared utilities."""

from .logger import Logger, logger, setup_logger

__all__ = ["Logger", "logger", "setup_logger"]
