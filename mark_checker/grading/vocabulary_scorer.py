"""
Vocabulary scoring: repetition, filler-word density and cohesive transitions.
"""

from collections import Counter
from dataclasses import dataclass, field
from typing import List, Optional, Union

from mark_checker.constants import FILLER_WORDS, STOPWORDS, TRANSITION_PHRASES
from mark_checker.grading.text_profile import TextProfile
from mark_checker.models.analysis_models import CategoryKind, RubricCategory

MAX_SCORE = CategoryKind.VOCABULARY.max_score
MIN_SCORE = 5
BASELINE_SCORE = 12
MAX_TRANSITION_BONUS = 3
SHORT_TEXT_WORDS = 10
SHORT_TEXT_CAP = 8

# (ratio threshold, penalty), checked from the most severe down
REPETITION_PENALTIES = [(0.08, 5), (0.05, 3), (0.03, 1)]
FILLER_PENALTIES = [(0.10, 4), (0.06, 2), (0.03, 1)]


def _banded_penalty(ratio: float, bands) -> int:
    for threshold, penalty in bands:
        if ratio > threshold:
            return penalty
    return 0


def find_transitions(profile: TextProfile) -> List[str]:
    """Distinct transition phrases used in the text, in list order."""
    haystack = profile.normalized_text
    return [phrase for phrase in TRANSITION_PHRASES if f" {phrase} " in haystack]


@dataclass
class VocabularyResult:
    """Vocabulary measurements and the 15-point score."""
    score: int = BASELINE_SCORE
    most_repeated: Optional[str] = None
    max_freq_ratio: float = 0.0
    filler_density: float = 0.0
    fillers: List[str] = field(default_factory=list)
    transitions: List[str] = field(default_factory=list)
    issues: List[str] = field(default_factory=list)

    @property
    def transition_bonus(self) -> int:
        return min(MAX_TRANSITION_BONUS, len(self.transitions))

    def to_category(self) -> RubricCategory:
        return RubricCategory(
            kind=CategoryKind.VOCABULARY,
            score=self.score,
            feedback="Assessed on word repetition, vague filler words and use of transitions",
            issues=list(self.issues),
            suggestions=["Vary word choice", "Favor precise terms", "Link ideas with transitions"],
        )


def check_vocabulary(text: Union[str, TextProfile]) -> VocabularyResult:
    """Score word choice on a 15-point scale (baseline 12, clamped to 5-15)."""
    profile = TextProfile.coerce(text)
    tokens = profile.tokens
    total = len(tokens) or 1
    result = VocabularyResult()

    content_counts = Counter(t for t in tokens if t not in STOPWORDS)
    repetition_penalty = 0
    if content_counts:
        word, count = content_counts.most_common(1)[0]
        if count >= 2:
            result.most_repeated = word
            result.max_freq_ratio = count / total
            repetition_penalty = _banded_penalty(result.max_freq_ratio, REPETITION_PENALTIES)
            if repetition_penalty:
                result.issues.append(f"'{word}' is repeated {count} times")

    fillers = [t for t in tokens if t in FILLER_WORDS]
    result.filler_density = len(fillers) / total
    result.fillers = list(dict.fromkeys(fillers))
    filler_penalty = _banded_penalty(result.filler_density, FILLER_PENALTIES)
    if filler_penalty:
        result.issues.append(f"Vague filler words: {', '.join(result.fillers)}")

    result.transitions = find_transitions(profile)

    score = BASELINE_SCORE - repetition_penalty - filler_penalty + result.transition_bonus
    if profile.word_count < SHORT_TEXT_WORDS:
        score = min(score, SHORT_TEXT_CAP)
    result.score = max(MIN_SCORE, min(MAX_SCORE, score))
    return result
