"""
Spell checking against the shared lexicon.

Common misspellings are always reported. When the lexicon is available every
remaining word is looked up, skipping acronyms, contractions, numbers and
recurring capitalized words (treated as proper nouns). Unknown words get a
correction from the nearest lexicon entry within a small edit distance.
"""

import re
from collections import Counter
from dataclasses import dataclass, field
from typing import List, Optional, Union

from mark_checker.config.heuristics_config import SpellingConfig
from mark_checker.constants import COMMON_MISSPELLINGS, CONTRACTIONS
from mark_checker.grading.edit_distance import damerau_levenshtein
from mark_checker.grading.text_profile import TextProfile
from mark_checker.models.analysis_models import CategoryKind, RubricCategory
from mark_checker.services.lexicon_service import Lexicon, ensure_lexicon
from mark_checker.utils.logger import logger

RAW_WORD_PATTERN = re.compile(r"[A-Za-z0-9]+(?:['-][A-Za-z0-9]+)*")
MAX_SCORE = CategoryKind.SPELLING.max_score


@dataclass
class SpellingResult:
    """Outcome of a spell check."""
    issues: List[str] = field(default_factory=list)
    corrections: List[str] = field(default_factory=list)
    flagged_words: List[str] = field(default_factory=list)
    lexicon_used: bool = False
    score: int = MAX_SCORE

    def to_category(self) -> RubricCategory:
        if self.issues:
            feedback = "Some possible spelling mistakes found"
        else:
            feedback = "No spelling errors detected"
        return RubricCategory(
            kind=CategoryKind.SPELLING,
            score=self.score,
            feedback=feedback,
            issues=list(self.issues),
            suggestions=["Proofread for common patterns", "Use a spell-check tool"],
            corrections=list(self.corrections),
        )


def suggest_correction(
    word: str, lexicon: Lexicon, max_candidates: int = 400, max_distance: int = 3
) -> Optional[str]:
    """Closest lexicon word sharing the first two letters, or None."""
    best, best_distance = None, max_distance + 1
    for candidate in lexicon.candidates(word, limit=max_candidates, max_length_delta=max_distance):
        distance = damerau_levenshtein(word, candidate)
        if distance < best_distance:
            best, best_distance = candidate, distance
            if distance <= 1:
                break
    return best if best_distance <= max_distance else None


def _is_skippable(raw_word: str, word: str, capitalized_counts: Counter) -> bool:
    if len(word) <= 2:
        return True
    if any(ch.isdigit() for ch in word):
        return True
    if raw_word.isalpha() and raw_word.isupper() and 2 <= len(raw_word) <= 5:
        return True
    if word in CONTRACTIONS:
        return True
    if raw_word[0].isupper() and capitalized_counts[word] >= 2:
        return True
    return word in COMMON_MISSPELLINGS


def _is_known(word: str, lexicon: Lexicon) -> bool:
    if word in lexicon:
        return True
    if "-" in word:
        return lexicon.accepts_compound(word)
    if word.endswith("'s"):
        return word[:-2] in lexicon
    return False


def find_unknown_words(profile: TextProfile, lexicon: Lexicon) -> List[str]:
    """Distinct lowercase words missing from the lexicon, in document order."""
    raw_words = RAW_WORD_PATTERN.findall(profile.cleaned)
    capitalized_counts = Counter(w.lower() for w in raw_words if w[0].isupper())

    unknown, seen = [], set()
    for raw_word in raw_words:
        word = raw_word.lower()
        if word in seen:
            continue
        seen.add(word)
        if _is_skippable(raw_word, word, capitalized_counts):
            continue
        if not _is_known(word, lexicon):
            unknown.append(word)
    return unknown


def check_spelling(
    text: Union[str, TextProfile],
    lexicon: Optional[Lexicon] = None,
    *,
    load_lexicon: bool = True,
    config: Optional[SpellingConfig] = None,
) -> SpellingResult:
    """Check spelling of a submission.

    Args:
        text: Submission text or a precomputed profile
        lexicon: Word list to check against; loaded from the shared cache when
            omitted and ``load_lexicon`` is true
        load_lexicon: Whether to fall back to the shared cache
        config: Spelling thresholds

    Returns:
        SpellingResult with issues, corrections and the 15-point score
    """
    profile = TextProfile.coerce(text)
    config = config or SpellingConfig()
    if lexicon is None and load_lexicon:
        lexicon = ensure_lexicon()

    result = SpellingResult(lexicon_used=lexicon is not None)

    for wrong, right in COMMON_MISSPELLINGS.items():
        if re.search(rf"\b{re.escape(wrong)}\b", profile.cleaned, re.IGNORECASE):
            result.issues.append(f"'{wrong}' should be '{right}'")
            result.corrections.append(f"{wrong} → {right}")

    if lexicon is not None:
        for word in find_unknown_words(profile, lexicon):
            if len(result.issues) >= config.max_issues:
                break
            result.flagged_words.append(word)
            result.issues.append(f"'{word}' is possibly misspelled")
            suggestion = suggest_correction(
                word,
                lexicon,
                max_candidates=config.max_candidates,
                max_distance=config.max_suggestion_distance,
            )
            if suggestion:
                result.corrections.append(f"{word} → {suggestion}")

    del result.issues[config.max_issues:]
    del result.corrections[config.max_issues:]

    cap = config.lexicon_penalty_cap if lexicon is not None else config.fallback_penalty_cap
    result.score = max(0, MAX_SCORE - min(cap, len(result.issues)) * config.penalty_per_issue)

    logger.log_metric("spelling_checks")
    logger.debug(
        f"Spelling check: {len(result.issues)} issue(s), lexicon={'yes' if lexicon else 'no'}"
    )
    return result
