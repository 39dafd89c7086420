"""
Rubric and analysis result models.

The rubric has a fixed shape: exactly one category of each ``CategoryKind``.
Category scores are clamped into ``[0, max_score]`` on construction so the
aggregate can never exceed 100 points.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional, Tuple

MAX_TOTAL_SCORE = 100
TEXT_PREVIEW_LENGTH = 500


class CategoryKind(Enum):
    """The six rubric categories with their display names and maximum scores."""

    SPELLING = ("Spelling", 15)
    GRAMMAR = ("Grammar", 25)
    PUNCTUATION = ("Punctuation", 15)
    LENGTH = ("Length", 10)
    VOCABULARY = ("Vocabulary", 15)
    TOPIC_RELEVANCE = ("Topic Relevance", 20)

    def __init__(self, display_name: str, max_score: int):
        self.display_name = display_name
        self.max_score = max_score


@dataclass
class RubricCategory:
    """One scored dimension of the grading scheme."""
    kind: CategoryKind
    score: int
    feedback: str = ""
    issues: List[str] = field(default_factory=list)
    suggestions: List[str] = field(default_factory=list)
    corrections: List[str] = field(default_factory=list)

    def __post_init__(self):
        self.score = max(0, min(self.kind.max_score, int(self.score)))

    @property
    def name(self) -> str:
        return self.kind.display_name

    @property
    def max_score(self) -> int:
        return self.kind.max_score

    @property
    def ratio(self) -> float:
        return self.score / (self.max_score or 1)

    def to_dict(self) -> Dict[str, Any]:
        """Convert category to the JSON shape consumed by the web layer."""
        return {
            "category": self.name,
            "score": self.score,
            "maxScore": self.max_score,
            "feedback": self.feedback,
            "issues": list(self.issues),
            "suggestions": list(self.suggestions),
            "corrections": list(self.corrections),
        }


@dataclass
class AnalysisResult:
    """Aggregated rubric outcome for one submission."""
    categories: Tuple[RubricCategory, ...]
    total_score: int
    grade: str
    passed: bool
    overall_feedback: str
    text_extracted: str = ""
    topic: Optional[str] = None
    strengths: List[str] = field(default_factory=list)
    areas_for_improvement: List[str] = field(default_factory=list)
    max_score: int = MAX_TOTAL_SCORE

    def category(self, kind: CategoryKind) -> RubricCategory:
        """Return the category of the given kind."""
        for category in self.categories:
            if category.kind is kind:
                return category
        raise KeyError(kind.display_name)

    @property
    def category_sum(self) -> int:
        return sum(category.score for category in self.categories)

    @property
    def spelling_corrections(self) -> List[str]:
        return list(self.category(CategoryKind.SPELLING).corrections)

    @property
    def grammar_corrections(self) -> List[str]:
        return list(self.category(CategoryKind.GRAMMAR).corrections)

    @property
    def punctuation_corrections(self) -> List[str]:
        return list(self.category(CategoryKind.PUNCTUATION).corrections)

    def to_dict(self) -> Dict[str, Any]:
        """Serialize to the engine's response format."""
        return {
            "textExtracted": self.text_extracted,
            "topic": self.topic,
            "totalScore": self.total_score,
            "maxScore": self.max_score,
            "categories": [category.to_dict() for category in self.categories],
            "grade": self.grade,
            "passed": self.passed,
            "overallFeedback": self.overall_feedback,
            "strengths": list(self.strengths),
            "areasForImprovement": list(self.areas_for_improvement),
            "grammarCorrections": self.grammar_corrections,
            "spellingCorrections": self.spelling_corrections,
            "punctuationCorrections": self.punctuation_corrections,
        }


def preview_text(text: str, limit: int = TEXT_PREVIEW_LENGTH) -> str:
    """Truncate extracted text for display, marking the cut with an ellipsis."""
    cleaned = text.strip()
    return cleaned[:limit] + ("..." if len(cleaned) > limit else "")
