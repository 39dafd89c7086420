import os
from dataclasses import dataclass, field
from typing import Callable, Optional, TypeVar

from dotenv import load_dotenv

from mark_checker.config.heuristics_config import (
    ImageNormalizationConfig,
    SpellingConfig,
    TopicRelevanceConfig,
)
from mark_checker.constants import ENV_LEXICON_PATH, ENV_LOG_LEVEL
from mark_checker.exceptions import ConfigurationError
from mark_checker.utils.logger import VALID_LOG_LEVELS, Logger, setup_logger

logger = setup_logger(__name__)

T = TypeVar("T")


@dataclass
class Config:
    """Configuration settings for the grading engine."""
    # Core settings
    debug: bool = False
    log_level: str = "INFO"

    # Lexicon settings
    lexicon_path: Optional[str] = None

    # Heuristic settings
    spelling: SpellingConfig = field(default_factory=SpellingConfig)
    topic: TopicRelevanceConfig = field(default_factory=TopicRelevanceConfig)
    image: ImageNormalizationConfig = field(default_factory=ImageNormalizationConfig)


def _env_value(key: str, default: str, cast: Callable[[str], T]) -> T:
    """Read and cast an environment variable, ignoring trailing comments."""
    raw = os.getenv(key, default).split('#')[0].strip()
    try:
        return cast(raw)
    except ValueError as e:
        raise ConfigurationError(
            f"Invalid value for {key}: {raw!r}", config_key=key, original_error=e
        ) from e


class ConfigManager:
    """Manages engine configuration."""

    _instance = None

    def __new__(cls):
        """Create singleton instance."""
        if cls._instance is None:
            cls._instance = super().__new__(cls)
            cls._instance._initialized = False
        return cls._instance

    def __init__(self):
        """Initialize configuration manager."""
        if self._initialized:
            return

        load_dotenv('.env', override=False)

        defaults_spelling = SpellingConfig()
        defaults_topic = TopicRelevanceConfig()
        defaults_image = ImageNormalizationConfig()

        self.config = Config(
            debug=os.getenv('DEBUG', 'False').lower() == 'true',
            log_level=os.getenv(ENV_LOG_LEVEL, 'INFO').upper(),
            lexicon_path=os.getenv(ENV_LEXICON_PATH) or None,
            spelling=SpellingConfig(
                max_candidates=_env_value(
                    'LEXICON_MAX_CANDIDATES', str(defaults_spelling.max_candidates), int),
                max_issues=_env_value(
                    'SPELLING_MAX_ISSUES', str(defaults_spelling.max_issues), int),
            ),
            topic=TopicRelevanceConfig(
                coverage_gate=_env_value(
                    'TOPIC_COVERAGE_GATE', str(defaults_topic.coverage_gate), float),
                jaccard_gate=_env_value(
                    'TOPIC_JACCARD_GATE', str(defaults_topic.jaccard_gate), float),
                sentence_overlap_threshold=_env_value(
                    'TOPIC_SENTENCE_OVERLAP', str(defaults_topic.sentence_overlap_threshold), float),
                pass_threshold=_env_value(
                    'TOPIC_PASS_THRESHOLD', str(defaults_topic.pass_threshold), int),
            ),
            image=ImageNormalizationConfig(
                max_width=_env_value(
                    'IMAGE_MAX_WIDTH', str(defaults_image.max_width), int),
                max_output_bytes=_env_value(
                    'IMAGE_MAX_OUTPUT_BYTES', str(defaults_image.max_output_bytes), int),
                document_size_threshold=_env_value(
                    'IMAGE_DOCUMENT_SIZE_THRESHOLD', str(defaults_image.document_size_threshold), int),
                density_threshold=_env_value(
                    'IMAGE_DENSITY_THRESHOLD', str(defaults_image.density_threshold), float),
            ),
        )

        self._validate_config()
        Logger().set_level(self.config.log_level)

        self._initialized = True
        logger.debug("Configuration initialized successfully")

    def _validate_config(self) -> None:
        """Validate configuration settings."""
        if self.config.log_level not in VALID_LOG_LEVELS:
            logger.warning(f"Invalid log level {self.config.log_level}, using INFO")
            self.config.log_level = "INFO"

        if self.config.debug:
            self.config.log_level = "DEBUG"

        spelling = self.config.spelling
        if spelling.max_candidates <= 0:
            logger.warning("Invalid lexicon candidate limit, using default of 400")
            spelling.max_candidates = 400

        if spelling.max_issues <= 0:
            logger.warning("Invalid spelling issue cap, using default of 30")
            spelling.max_issues = 30

        if self.config.image.max_width <= 0:
            logger.warning("Invalid image width ceiling, using default of 2000px")
            self.config.image.max_width = 2000

        if self.config.lexicon_path and not os.path.exists(self.config.lexicon_path):
            logger.warning(
                f"LEXICON_PATH {self.config.lexicon_path} does not exist; "
                "spell checking will fall back to common mistakes only"
            )

    @classmethod
    def reset(cls) -> None:
        """Drop the cached configuration so the next access re-reads the environment."""
        cls._instance = None
