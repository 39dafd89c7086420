"""Independent pattern checks that each contribute issues and a penalty."""

from dataclasses import dataclass, field
from typing import Callable, List, Sequence, Type

from mark_checker.grading.text_profile import TextProfile


@dataclass
class RuleOutcome:
    """What a single check found. ``triggered`` is false when it found nothing."""
    name: str
    triggered: bool = False
    penalty: int = 0
    issues: List[str] = field(default_factory=list)
    corrections: List[str] = field(default_factory=list)


Rule = Callable[[TextProfile], RuleOutcome]


@dataclass
class RuleBatteryResult:
    """Combined outcome of a battery of rules."""
    outcomes: List[RuleOutcome]
    score: int
    max_score: int

    @property
    def issues(self) -> List[str]:
        return [issue for o in self.outcomes if o.triggered for issue in o.issues]

    @property
    def corrections(self) -> List[str]:
        return [c for o in self.outcomes if o.triggered for c in o.corrections]

    @property
    def penalty(self) -> int:
        return sum(o.penalty for o in self.outcomes if o.triggered)

    def triggered(self, name: str) -> bool:
        return any(o.name == name and o.triggered for o in self.outcomes)


def run_rules(
    profile: TextProfile,
    rules: Sequence[Rule],
    max_score: int,
    short_text_cap: int,
    short_text_words: int = 10,
    result_cls: Type[RuleBatteryResult] = RuleBatteryResult,
) -> RuleBatteryResult:
    """Apply every rule and subtract the summed penalty from ``max_score``.

    Submissions under ``short_text_words`` words are capped at
    ``short_text_cap`` so near-empty text cannot score well by avoiding
    every trigger.
    """
    outcomes = [rule(profile) for rule in rules]
    penalty = sum(o.penalty for o in outcomes if o.triggered)
    score = max(0, max_score - penalty)
    if profile.word_count < short_text_words:
        score = min(score, short_text_cap)
    return result_cls(outcomes=outcomes, score=score, max_score=max_score)
