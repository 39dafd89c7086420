"""
Writing Grader Service

Runs the local heuristic engine over extracted submission text: spelling,
grammar, punctuation, length, vocabulary and topic relevance, aggregated
into a 100-point rubric result.
"""

import time
from typing import Any, Dict, Optional

from mark_checker.config import Config, ConfigManager
from mark_checker.constants import (
    ANALYSIS_TYPE_LOCAL,
    MODEL_HEURISTIC,
    NO_TEXT_ERROR,
    PROVIDER_LOCAL,
)
from mark_checker.exceptions import ValidationError
from mark_checker.grading.grammar_checker import check_grammar
from mark_checker.grading.punctuation_checker import check_punctuation
from mark_checker.grading.rubric_aggregator import aggregate, score_length
from mark_checker.grading.spell_checker import check_spelling
from mark_checker.grading.text_profile import TextProfile
from mark_checker.grading.topic_relevance import check_topic_relevance
from mark_checker.grading.vocabulary_scorer import check_vocabulary
from mark_checker.models.analysis_models import AnalysisResult
from mark_checker.models.api_responses import ErrorCode, ErrorDetail
from mark_checker.services.base_service import (
    BaseService,
    ServiceInjector,
    ServiceRegistry,
    ServiceStatus,
)
from mark_checker.services.lexicon_service import LexiconService, get_lexicon_service
from mark_checker.utils.logger import logger


class WritingGraderService(BaseService):
    """Grades submissions with the local heuristic engine."""

    def __init__(
        self,
        lexicon_service: Optional[LexiconService] = None,
        config: Optional[Config] = None,
        **kwargs,
    ):
        super().__init__(kwargs.pop("service_name", "writing_grader"), **kwargs)
        self.engine_config = config or ConfigManager().config
        self.lexicon_service: Optional[LexiconService] = None
        ServiceInjector.inject_dependencies(
            self, lexicon_service=lexicon_service or get_lexicon_service()
        )

    def initialize(self) -> bool:
        """Warm the lexicon. The engine still works without it."""
        if not self.lexicon_service.initialize():
            logger.warning("Writing grader starting without a lexicon")
            self.metrics.status = ServiceStatus.DEGRADED
        else:
            self.metrics.status = ServiceStatus.HEALTHY
        self._initialized = True
        return True

    def health_check(self) -> bool:
        return self._initialized

    def cleanup(self) -> None:
        self._initialized = False
        logger.log_performance()
        logger.info(f"{self.service_name} cleaned up")

    def health_report(self) -> Dict[str, Dict[str, Any]]:
        """Health of the grader and of the lexicon it depends on."""
        return ServiceRegistry.health_report(self.service_name)

    def analyze(self, text: str, topic: Optional[str] = None) -> AnalysisResult:
        """Score a submission against the six-category rubric.

        Args:
            text: Extracted submission text
            topic: Optional assigned topic

        Returns:
            AnalysisResult

        Raises:
            ValidationError: If text or topic is not a string
        """
        if not isinstance(text, str):
            raise ValidationError("Submission text must be a string", field="text")
        if topic is not None and not isinstance(topic, str):
            raise ValidationError("Topic must be a string", field="topic")

        start_time = time.time()
        with self.track_request("analyze"):
            profile = TextProfile.from_text(text)
            lexicon = self.lexicon_service.ensure_lexicon()

            spelling = check_spelling(
                profile, lexicon, load_lexicon=False, config=self.engine_config.spelling
            )
            vocabulary = check_vocabulary(profile)
            topic_result = check_topic_relevance(
                profile,
                topic,
                config=self.engine_config.topic,
                transition_bonus=vocabulary.transition_bonus,
            )

            result = aggregate(
                spelling=spelling.to_category(),
                grammar=check_grammar(profile).to_category(),
                punctuation=check_punctuation(profile).to_category(),
                length=score_length(profile),
                vocabulary=vocabulary.to_category(),
                topic_relevance=topic_result.to_category(),
                text=text,
                topic=topic_result.topic,
                pass_threshold=self.engine_config.topic.pass_threshold,
            )

        logger.log_metric("analyses")
        logger.info(
            f"Analysis complete in {time.time() - start_time:.2f}s: "
            f"{result.total_score}/{result.max_score} ({result.grade}), "
            f"words={profile.word_count}, passed={result.passed}"
        )
        return result

    def grade_submission(
        self,
        text: str,
        topic: Optional[str] = None,
        filename: Optional[str] = None,
        file_size: Optional[int] = None,
        mime_type: Optional[str] = None,
    ) -> Dict[str, Any]:
        """Grade extracted text and wrap it in the local-provider response envelope."""
        if isinstance(text, str) and not text.strip():
            logger.warning(f"No readable text in submission {filename or '<unnamed>'}")
            return {
                "success": False,
                "error": NO_TEXT_ERROR,
                "errorDetail": ErrorDetail(
                    code=ErrorCode.EMPTY_CONTENT, message=NO_TEXT_ERROR, field="text"
                ).to_dict(),
                "filename": filename,
                "fileSize": file_size,
                "mimeType": mime_type,
            }

        result = self.analyze(text, topic)
        return {
            "success": True,
            "analysis": result.to_dict(),
            "filename": filename,
            "fileSize": file_size,
            "mimeType": mime_type,
            "provider": PROVIDER_LOCAL,
            "model": MODEL_HEURISTIC,
            "analysisType": ANALYSIS_TYPE_LOCAL,
        }


def shutdown_engine() -> None:
    """Clean up every registered engine service. Call once when the host exits."""
    logger.info("Shutting down grading engine services")
    ServiceRegistry.cleanup_all()
