"""Configuration for the grading engine."""

from .config_manager import Config, ConfigManager
from .heuristics_config import (
    ImageNormalizationConfig,
    SpellingConfig,
    TopicRelevanceConfig,
)

__all__ = [
    "Config",
    "ConfigManager",
    "SpellingConfig",
    "TopicRelevanceConfig",
    "ImageNormalizationConfig",
]
