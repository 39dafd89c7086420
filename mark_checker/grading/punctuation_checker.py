"""
Punctuation heuristics.

Weighted checks over terminal punctuation, commas, exclamation marks,
sentence capitalization, apostrophes and quotation marks. The summed weight
is subtracted from 15.
"""

import re
from typing import List, Optional, Union

from mark_checker.constants import INFORMAL_CONTRACTIONS, MISSING_APOSTROPHES
from mark_checker.grading.rules import RuleBatteryResult, RuleOutcome, run_rules
from mark_checker.grading.text_profile import TextProfile
from mark_checker.models.analysis_models import CategoryKind, RubricCategory

MAX_SCORE = CategoryKind.PUNCTUATION.max_score
SHORT_TEXT_CAP = 6

TERMINAL_PENALTY = 4
NO_TERMINAL_ANYWHERE_PENALTY = 8
COMMA_PENALTY = 3
COMMA_MIN_ALLOWANCE = 3
COMMAS_PER_SENTENCE = 0.8
EXCLAMATION_PENALTY = 2
CAPITALIZATION_PENALTY = 2
CAPITALIZATION_MAX_OCCURRENCES = 3
INFORMAL_PENALTY = 1
INFORMAL_MAX_OCCURRENCES = 3
QUOTE_PENALTY = 2
SPACING_PENALTY = 1

ENDS_WITH_TERMINAL = re.compile(r"[.!?][\"'”’)\]]*$")
ANY_TERMINAL = re.compile(r"[.!?]")
REPEATED_EXCLAMATION = re.compile(r"!{2,}")
FIRST_LETTER = re.compile(r"[A-Za-z]")
SPACE_BEFORE_PUNCTUATION = re.compile(r"\w[ \t]+[,;:!?.](?=\s|$)")


def _excerpt(sentence: str, limit: int = 40) -> str:
    return sentence if len(sentence) <= limit else sentence[:limit].rstrip() + "..."


def check_terminal_punctuation(profile: TextProfile) -> RuleOutcome:
    outcome = RuleOutcome(name="terminal_punctuation")
    if profile.is_empty or ENDS_WITH_TERMINAL.search(profile.cleaned):
        return outcome

    outcome.triggered = True
    if ANY_TERMINAL.search(profile.cleaned):
        outcome.penalty = TERMINAL_PENALTY
        outcome.issues.append("Text does not end with terminal punctuation")
    else:
        outcome.penalty = NO_TERMINAL_ANYWHERE_PENALTY
        outcome.issues.append("No sentence-ending punctuation found")
    outcome.corrections.append("Add a period at the end of the last sentence")
    return outcome


def check_comma_overuse(profile: TextProfile) -> RuleOutcome:
    outcome = RuleOutcome(name="comma_overuse")
    commas = profile.cleaned.count(",")
    allowance = max(COMMA_MIN_ALLOWANCE, COMMAS_PER_SENTENCE * profile.sentence_count)
    if commas > allowance:
        outcome.triggered = True
        outcome.penalty = COMMA_PENALTY
        outcome.issues.append(f"Possible comma overuse ({commas} commas)")
        outcome.corrections.append("Review comma usage; consider periods or semicolons")
    return outcome


def check_repeated_exclamations(profile: TextProfile) -> RuleOutcome:
    outcome = RuleOutcome(name="repeated_exclamations")
    matches = REPEATED_EXCLAMATION.findall(profile.cleaned)
    if matches:
        outcome.triggered = True
        outcome.penalty = EXCLAMATION_PENALTY
        outcome.issues.append(f"Repeated exclamation marks ({len(matches)} occurrence(s))")
        outcome.corrections.append("Use a single exclamation mark, or a period")
    return outcome


def check_sentence_capitalization(profile: TextProfile) -> RuleOutcome:
    outcome = RuleOutcome(name="sentence_capitalization")
    lowercase_starts = []
    for sentence in profile.sentences:
        first = FIRST_LETTER.search(sentence)
        if first and first.group().islower():
            lowercase_starts.append(sentence)

    counted = lowercase_starts[:CAPITALIZATION_MAX_OCCURRENCES]
    if counted:
        outcome.triggered = True
        outcome.penalty = CAPITALIZATION_PENALTY * len(counted)
        for sentence in counted:
            outcome.issues.append(f"Sentence should start with a capital letter: '{_excerpt(sentence)}'")
            outcome.corrections.append(f"Capitalize the first word of '{_excerpt(sentence)}'")
    return outcome


def check_informal_apostrophes(profile: TextProfile) -> RuleOutcome:
    """Missing apostrophes ("dont") and informal contractions ("gonna")."""
    outcome = RuleOutcome(name="informal_apostrophes")
    replacements = {**MISSING_APOSTROPHES, **INFORMAL_CONTRACTIONS}
    occurrences = [t for t in profile.tokens if t in replacements]
    if not occurrences:
        return outcome

    outcome.triggered = True
    outcome.penalty = INFORMAL_PENALTY * min(len(occurrences), INFORMAL_MAX_OCCURRENCES)
    for word in list(dict.fromkeys(occurrences))[:INFORMAL_MAX_OCCURRENCES]:
        outcome.issues.append(f"'{word}' should be '{replacements[word]}'")
        outcome.corrections.append(f"{word} → {replacements[word]}")
    return outcome


def check_quotation_balance(profile: TextProfile) -> RuleOutcome:
    outcome = RuleOutcome(name="quotation_balance")
    text = profile.cleaned
    straight_unbalanced = text.count('"') % 2 == 1
    curly_unbalanced = text.count("“") != text.count("”")
    if straight_unbalanced or curly_unbalanced:
        outcome.triggered = True
        outcome.penalty = QUOTE_PENALTY
        outcome.issues.append("Unbalanced quotation marks")
        outcome.corrections.append("Close every opening quotation mark")
    return outcome


def check_space_before_punctuation(profile: TextProfile) -> RuleOutcome:
    outcome = RuleOutcome(name="space_before_punctuation")
    if SPACE_BEFORE_PUNCTUATION.search(profile.cleaned):
        outcome.triggered = True
        outcome.penalty = SPACING_PENALTY
        outcome.issues.append("Space before punctuation mark")
        outcome.corrections.append("Remove the space before commas and periods")
    return outcome


PUNCTUATION_RULES = [
    check_terminal_punctuation,
    check_comma_overuse,
    check_repeated_exclamations,
    check_sentence_capitalization,
    check_informal_apostrophes,
    check_quotation_balance,
    check_space_before_punctuation,
]


class PunctuationResult(RuleBatteryResult):
    """Punctuation rule outcomes and the 15-point score."""

    def to_category(self) -> RubricCategory:
        issues = self.issues
        return RubricCategory(
            kind=CategoryKind.PUNCTUATION,
            score=self.score,
            feedback=(
                "Minor punctuation concerns detected" if issues
                else "Punctuation looks generally fine"
            ),
            issues=issues,
            suggestions=["End sentences with proper punctuation", "Avoid comma overuse"],
            corrections=self.corrections,
        )


def check_punctuation(
    text: Union[str, TextProfile], rules: Optional[List] = None
) -> PunctuationResult:
    """Run the punctuation battery over a submission."""
    profile = TextProfile.coerce(text)
    return run_rules(
        profile,
        rules if rules is not None else PUNCTUATION_RULES,
        max_score=MAX_SCORE,
        short_text_cap=SHORT_TEXT_CAP,
        result_cls=PunctuationResult,
    )
