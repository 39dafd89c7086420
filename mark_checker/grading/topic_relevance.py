"""
Topic relevance scoring.

Compares a submission against an optional assigned topic using per-sentence
coverage, whole-document Jaccard similarity, topic bigrams and literal phrase
containment. Submissions that share nothing with the topic are caught by the
off-topic gate and score zero.
"""

import math
from collections import Counter
from dataclasses import dataclass, field
from typing import List, Optional, Set, Union

from mark_checker.config.heuristics_config import TopicRelevanceConfig
from mark_checker.grading.text_profile import TextProfile, content_words, tokenize
from mark_checker.grading.vocabulary_scorer import check_vocabulary
from mark_checker.models.analysis_models import CategoryKind, RubricCategory
from mark_checker.utils.logger import logger

MAX_SCORE = CategoryKind.TOPIC_RELEVANCE.max_score
COVERAGE_WEIGHT = 60
JACCARD_WEIGHT, JACCARD_CAP = 100, 20
BIGRAM_WEIGHT, BIGRAM_CAP = 3, 10
PHRASE_BONUS = 5
TRANSITION_CAP = 5


@dataclass
class TopicRelevanceResult:
    """Topic measurements and the 20-point score.

    ``relevant`` is None when no topic was supplied.
    """
    score: int = MAX_SCORE
    relevant: Optional[bool] = None
    topic: Optional[str] = None
    off_topic: bool = False
    coverage_ratio: float = 0.0
    direct_coverage_ratio: float = 0.0
    jaccard: float = 0.0
    bigram_hits: int = 0
    phrase_present: bool = False
    strength: float = 0.0
    issues: List[str] = field(default_factory=list)
    suggestions: List[str] = field(default_factory=list)

    def to_category(self) -> RubricCategory:
        if self.topic is None:
            feedback = "No topic assigned; relevance not assessed"
        elif self.off_topic:
            feedback = "The submission does not address the assigned topic"
        elif self.relevant:
            feedback = "The submission stays on the assigned topic"
        else:
            feedback = "The submission only loosely addresses the assigned topic"
        return RubricCategory(
            kind=CategoryKind.TOPIC_RELEVANCE,
            score=self.score,
            feedback=feedback,
            issues=list(self.issues),
            suggestions=list(self.suggestions),
        )


def _bigrams(words: List[str]) -> Set[str]:
    return {f"{a} {b}" for a, b in zip(words, words[1:])}


def _padded(words) -> str:
    return f" {' '.join(words)} "


def strength_to_score(strength: float, config: TopicRelevanceConfig) -> int:
    """Map a composite strength (roughly 0-100) through the score bands."""
    for minimum, low, high, top in config.score_bands:
        if strength >= minimum:
            span = top - minimum
            fraction = min(1.0, max(0.0, (strength - minimum) / span)) if span > 0 else 1.0
            score = math.floor(low + (high - low) * fraction + 0.5)
            return max(low, min(high, score))
    return config.score_bands[-1][1]


def check_topic_relevance(
    text: Union[str, TextProfile],
    topic: Optional[str] = None,
    config: Optional[TopicRelevanceConfig] = None,
    transition_bonus: Optional[int] = None,
) -> TopicRelevanceResult:
    """Score how closely a submission follows its assigned topic.

    Args:
        text: Submission text or a precomputed profile
        topic: Assigned topic; relevance is not assessed without one
        config: Gate thresholds and score bands
        transition_bonus: The vocabulary step's transition bonus, computed
            from the text when omitted

    Returns:
        TopicRelevanceResult with the 20-point score
    """
    profile = TextProfile.coerce(text)
    config = config or TopicRelevanceConfig()

    if topic is None or not topic.strip():
        return TopicRelevanceResult()

    topic = topic.strip()
    min_length = config.min_unigram_length
    topic_words = content_words(tokenize(topic), min_length)
    if not topic_words:
        result = TopicRelevanceResult(topic=topic)
        result.issues.append("Topic has no distinctive words; relevance not assessed")
        return result

    topic_set = set(topic_words)
    topic_bigrams = _bigrams(topic_words)

    doc_words = content_words(profile.tokens, min_length)
    doc_set = set(doc_words)
    doc_text = _padded(doc_words)

    sentence_sets = []
    covered = []
    for tokens in profile.sentence_tokens:
        words = content_words(tokens, min_length)
        word_set = set(words)
        sentence_sets.append(word_set)
        denominator = max(config.overlap_min_denominator, min(len(topic_set), len(word_set)))
        overlap = len(word_set & topic_set) / denominator
        sentence_text = _padded(words)
        has_bigram = any(f" {b} " in sentence_text for b in topic_bigrams)
        covered.append(overlap >= config.sentence_overlap_threshold or has_bigram)

    sentence_total = len(sentence_sets) or 1
    direct_covered = sum(covered)

    # Words that recur and already appear next to the topic count as topical.
    doc_counts = Counter(doc_words)
    anchors = {
        w for covered_flag, words in zip(covered, sentence_sets) if covered_flag
        for w in words if w not in topic_set and doc_counts.get(w, 0) >= 2
    }
    expanded_covered = sum(
        1 for covered_flag, words in zip(covered, sentence_sets)
        if covered_flag or words & anchors
    )

    result = TopicRelevanceResult(topic=topic)
    result.direct_coverage_ratio = direct_covered / sentence_total
    result.coverage_ratio = expanded_covered / sentence_total
    result.jaccard = len(topic_set & doc_set) / (len(topic_set | doc_set) or 1)
    result.bigram_hits = sum(
        1 for b in topic_bigrams if f" {b} " in doc_text or f" {b} " in profile.normalized_text
    )
    topic_phrase = " ".join(tokenize(topic))
    result.phrase_present = bool(topic_phrase) and f" {topic_phrase} " in profile.normalized_text

    if (
        result.direct_coverage_ratio < config.coverage_gate
        and not result.phrase_present
        and result.jaccard < config.jaccard_gate
        and result.bigram_hits == 0
        and not profile.is_empty
    ):
        result.off_topic = True
        result.relevant = False
        result.score = 0
        result.issues.append(f"Submission does not address the assigned topic: '{topic}'")
        result.suggestions.extend([
            "Focus your writing on the assigned topic",
            f"Refer directly to the key ideas of '{topic}'",
        ])
        logger.info(f"Off-topic submission detected for topic '{topic}'")
        return result

    if transition_bonus is None:
        transition_bonus = check_vocabulary(profile).transition_bonus
    result.strength = (
        COVERAGE_WEIGHT * result.coverage_ratio
        + min(JACCARD_CAP, JACCARD_WEIGHT * result.jaccard)
        + min(BIGRAM_CAP, BIGRAM_WEIGHT * result.bigram_hits)
        + (PHRASE_BONUS if result.phrase_present else 0)
        + min(TRANSITION_CAP, transition_bonus)
    )
    result.score = strength_to_score(result.strength, config)
    result.relevant = result.score >= config.pass_threshold

    if result.coverage_ratio < 0.5:
        result.issues.append(
            f"Only {expanded_covered} of {len(sentence_sets)} sentence(s) relate to the topic"
        )
        result.suggestions.append("Connect each paragraph back to the assigned topic")
    if not result.phrase_present and not result.bigram_hits:
        result.suggestions.append(f"Mention '{topic}' explicitly")

    logger.debug(
        f"Topic relevance: strength={result.strength:.1f} coverage={result.coverage_ratio:.2f} "
        f"jaccard={result.jaccard:.3f} bigrams={result.bigram_hits} score={result.score}"
    )
    return result
