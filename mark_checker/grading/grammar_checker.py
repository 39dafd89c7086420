"""
Grammar heuristics.

Each rule inspects the shared sentence segmentation and contributes a fixed
penalty when it fires. The combined penalty is subtracted from 25.
"""

import re
from typing import List, Optional, Union

from mark_checker.constants import (
    AUXILIARY_VERBS,
    PRESENT_AUXILIARIES,
    THIRD_PERSON_PRONOUNS,
)
from mark_checker.grading.rules import RuleBatteryResult, RuleOutcome, run_rules
from mark_checker.grading.text_profile import TextProfile
from mark_checker.models.analysis_models import CategoryKind, RubricCategory

MAX_SCORE = CategoryKind.GRAMMAR.max_score
SHORT_TEXT_CAP = 12

LONG_SENTENCE_WORDS = 25
LONG_SENTENCE_PENALTY = 3
FRAGMENT_MIN_WORDS = 3
FRAGMENT_PENALTY = 4
AGREEMENT_PENALTY = 2
TENSE_MIX_THRESHOLD = 4
TENSE_MIX_PENALTY = 4
WHITESPACE_PENALTY = 1

REPEATED_SPACES = re.compile(r"\S[ \t]{2,}\S")


def _excerpt(sentence: str, limit: int = 60) -> str:
    return sentence if len(sentence) <= limit else sentence[:limit].rstrip() + "..."


def is_verb_like(token: str) -> bool:
    return token in AUXILIARY_VERBS or token.endswith(("ed", "ing", "s"))


def third_person_form(verb: str) -> str:
    if verb.endswith(("sh", "ch", "x", "z", "o")):
        return verb + "es"
    if verb.endswith("y") and len(verb) > 1 and verb[-2] not in "aeiou":
        return verb[:-1] + "ies"
    return verb + "s"


def check_long_sentences(profile: TextProfile) -> RuleOutcome:
    outcome = RuleOutcome(name="long_sentences")
    count = sum(1 for s in profile.sentences if len(s.split()) > LONG_SENTENCE_WORDS)
    if count:
        outcome.triggered = True
        outcome.penalty = count * LONG_SENTENCE_PENALTY
        outcome.issues.append(f"{count} overly long sentence(s)")
        outcome.corrections.append("Split long sentences into shorter ones for clarity")
    return outcome


def check_fragments(profile: TextProfile) -> RuleOutcome:
    """Sentences of three or more words with nothing that looks like a verb."""
    outcome = RuleOutcome(name="fragments")
    for sentence, tokens in zip(profile.sentences, profile.sentence_tokens):
        if len(sentence.split()) < FRAGMENT_MIN_WORDS:
            continue
        if any(is_verb_like(t) for t in tokens):
            continue
        outcome.triggered = True
        outcome.penalty += FRAGMENT_PENALTY
        outcome.issues.append(f"Possible sentence fragment: '{_excerpt(sentence)}'")
        outcome.corrections.append(f"Add a main verb to: '{_excerpt(sentence)}'")
    return outcome


def check_subject_verb_agreement(profile: TextProfile) -> RuleOutcome:
    """he/she/it followed directly by a word of three or more letters not ending in "s".

    Naive by construction: "she walked" and "he quickly" fire as
    well as "she walk". Only bare forms get a rewrite suggestion.
    """
    outcome = RuleOutcome(name="subject_verb_agreement")
    for tokens in profile.sentence_tokens:
        for pronoun, following in zip(tokens, tokens[1:]):
            if pronoun not in THIRD_PERSON_PRONOUNS:
                continue
            if (
                following in AUXILIARY_VERBS
                or sum(ch.isalpha() for ch in following) < 3
                or following.endswith("s")
            ):
                continue
            outcome.triggered = True
            outcome.penalty += AGREEMENT_PENALTY
            outcome.issues.append(f"Subject-verb agreement: '{pronoun} {following}'")
            if following.isalpha() and not following.endswith(("ed", "ly")):
                outcome.corrections.append(
                    f"'{pronoun} {following}' → '{pronoun} {third_person_form(following)}'"
                )
            else:
                outcome.corrections.append(f"Check the verb after '{pronoun}' in '{pronoun} {following}'")
    return outcome


def check_tense_mixing(profile: TextProfile) -> RuleOutcome:
    outcome = RuleOutcome(name="tense_mixing")
    past = sum(1 for t in profile.tokens if len(t) > 3 and t.endswith("ed"))
    present = sum(
        1 for t in profile.tokens
        if t in PRESENT_AUXILIARIES or (len(t) > 3 and t.endswith(("s", "ing")))
    )
    if past > TENSE_MIX_THRESHOLD and present > TENSE_MIX_THRESHOLD:
        outcome.triggered = True
        outcome.penalty = TENSE_MIX_PENALTY
        outcome.issues.append("Mixed past and present tense")
        outcome.corrections.append("Keep verb tense consistent throughout")
    return outcome


def check_repeated_whitespace(profile: TextProfile) -> RuleOutcome:
    outcome = RuleOutcome(name="repeated_whitespace")
    if REPEATED_SPACES.search(profile.text):
        outcome.triggered = True
        outcome.penalty = WHITESPACE_PENALTY
        outcome.issues.append("Multiple spaces detected")
        outcome.corrections.append("Reduce multiple spaces to single spaces")
    return outcome


GRAMMAR_RULES = [
    check_long_sentences,
    check_fragments,
    check_subject_verb_agreement,
    check_tense_mixing,
    check_repeated_whitespace,
]


class GrammarResult(RuleBatteryResult):
    """Grammar rule outcomes and the 25-point score."""

    def to_category(self) -> RubricCategory:
        issues = self.issues
        return RubricCategory(
            kind=CategoryKind.GRAMMAR,
            score=self.score,
            feedback=(
                "Some sentence-level issues detected" if issues
                else "No obvious grammar issues detected"
            ),
            issues=issues,
            suggestions=["Keep sentences concise", "Maintain consistent tense and spacing"],
            corrections=self.corrections,
        )


def check_grammar(
    text: Union[str, TextProfile], rules: Optional[List] = None
) -> GrammarResult:
    """Run the grammar battery over a submission."""
    profile = TextProfile.coerce(text)
    return run_rules(
        profile,
        rules if rules is not None else GRAMMAR_RULES,
        max_score=MAX_SCORE,
        short_text_cap=SHORT_TEXT_CAP,
        result_cls=GrammarResult,
    )
