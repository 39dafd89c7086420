"""
Rubric aggregation.

Combines the six category results into a 100-point total, a letter grade and
a pass/fail verdict. A submission that fails topic relevance scores zero
overall, whatever the other categories earned.
"""

from typing import List, Optional, Union

from mark_checker.config.heuristics_config import TopicRelevanceConfig
from mark_checker.constants import (
    FAILING_GRADE,
    GRADE_THRESHOLDS,
    LENGTH_BANDS,
    LENGTH_OVERFLOW_SCORE,
    LOCAL_ANALYSIS_NOTE,
)
from mark_checker.exceptions import ValidationError
from mark_checker.grading.text_profile import TextProfile
from mark_checker.models.analysis_models import (
    AnalysisResult,
    CategoryKind,
    RubricCategory,
    preview_text,
)
from mark_checker.utils.logger import logger

STRENGTH_RATIO = 0.8
IMPROVEMENT_RATIO = 0.6


def score_length(text: Union[str, TextProfile]) -> RubricCategory:
    """Band the whitespace word count into the 10-point Length category."""
    profile = TextProfile.coerce(text)
    words = profile.word_count
    score = LENGTH_OVERFLOW_SCORE
    for upper_bound, band_score in LENGTH_BANDS:
        if words <= upper_bound:
            score = band_score
            break

    issues, suggestions = [], []
    if words <= LENGTH_BANDS[0][0]:
        issues.append(f"Submission is very short ({words} words)")
        suggestions.append("Develop your ideas in more detail")
    elif words > LENGTH_BANDS[-1][0]:
        issues.append(f"Submission is longer than needed ({words} words)")
        suggestions.append("Tighten the writing and remove repetition")

    return RubricCategory(
        kind=CategoryKind.LENGTH,
        score=score,
        feedback=f"Word count: {words}",
        issues=issues,
        suggestions=suggestions,
    )


def assign_grade(total_score: int) -> str:
    for threshold, grade in GRADE_THRESHOLDS:
        if total_score >= threshold:
            return grade
    return FAILING_GRADE


def _expect(category: RubricCategory, kind: CategoryKind, argument: str) -> RubricCategory:
    if not isinstance(category, RubricCategory) or category.kind is not kind:
        raise ValidationError(
            f"Expected a {kind.display_name} category for '{argument}'",
            field=argument,
        )
    return category


def _overall_feedback(
    total: int, grade: str, passed: bool, topic_category: RubricCategory, topic: Optional[str]
) -> str:
    if not passed:
        summary = (
            f"The submission does not sufficiently address the topic '{topic}' "
            f"and receives 0/100."
        )
    else:
        summary = f"Overall score {total}/100 (grade {grade})."
    if topic_category.issues and passed:
        summary += f" {topic_category.issues[0]}."
    return f"{summary} {LOCAL_ANALYSIS_NOTE}"


def aggregate(
    *,
    spelling: RubricCategory,
    grammar: RubricCategory,
    punctuation: RubricCategory,
    length: RubricCategory,
    vocabulary: RubricCategory,
    topic_relevance: RubricCategory,
    text: str = "",
    topic: Optional[str] = None,
    pass_threshold: Optional[int] = None,
) -> AnalysisResult:
    """Compose the six categories into an AnalysisResult.

    Args:
        spelling, grammar, punctuation, length, vocabulary, topic_relevance:
            Exactly one category of each kind
        text: Submission text, used for the preview
        topic: Assigned topic, if any
        pass_threshold: Minimum topic relevance score to pass

    Raises:
        ValidationError: If an argument holds the wrong category kind
    """
    if pass_threshold is None:
        pass_threshold = TopicRelevanceConfig().pass_threshold

    categories = (
        _expect(spelling, CategoryKind.SPELLING, "spelling"),
        _expect(grammar, CategoryKind.GRAMMAR, "grammar"),
        _expect(punctuation, CategoryKind.PUNCTUATION, "punctuation"),
        _expect(length, CategoryKind.LENGTH, "length"),
        _expect(vocabulary, CategoryKind.VOCABULARY, "vocabulary"),
        _expect(topic_relevance, CategoryKind.TOPIC_RELEVANCE, "topic_relevance"),
    )

    total = sum(category.score for category in categories)
    passed = topic_relevance.score >= pass_threshold
    if not passed:
        total = 0

    grade = assign_grade(total)
    strengths: List[str] = [
        f"{c.name}: {c.feedback}" for c in categories if c.ratio >= STRENGTH_RATIO
    ]
    areas: List[str] = [
        f"{c.name}: {c.issues[0] if c.issues else c.feedback}"
        for c in categories if c.ratio < IMPROVEMENT_RATIO
    ]

    result = AnalysisResult(
        categories=categories,
        total_score=total,
        grade=grade,
        passed=passed,
        overall_feedback=_overall_feedback(total, grade, passed, topic_relevance, topic),
        text_extracted=preview_text(text or ""),
        topic=topic,
        strengths=strengths,
        areas_for_improvement=areas,
    )
    logger.debug(f"Aggregated rubric: total={total} grade={grade} passed={passed}")
    return result
