"""Tests for the punctuation heuristics."""

from mark_checker.grading.punctuation_checker import check_punctuation
from mark_checker.models.analysis_models import CategoryKind


def outcome(result, name):
    return next(o for o in result.outcomes if o.name == name)


class TestTerminalPunctuation:
    """End-of-text punctuation."""

    def test_no_terminal_anywhere(self):
        result = check_punctuation("This has no ending punctuation at all in the whole text")

        assert outcome(result, "terminal_punctuation").penalty == 8

    def test_missing_final_terminal(self):
        result = check_punctuation("The first sentence is fine. The second one has no end")

        assert outcome(result, "terminal_punctuation").penalty == 4

    def test_closing_quote_after_period(self):
        result = check_punctuation('He said it was "the best day of his whole life."')

        assert not result.triggered("terminal_punctuation")

    def test_empty_text_not_flagged(self):
        assert not check_punctuation("").triggered("terminal_punctuation")


class TestPunctuationRules:
    """Remaining punctuation checks."""

    def test_clean_essay_scores_full(self, photosynthesis_essay):
        result = check_punctuation(photosynthesis_essay)

        assert result.issues == []
        assert result.score == 15

    def test_comma_overuse(self):
        result = check_punctuation("We bought apples, pears, plums, grapes, and figs at the market.")

        assert result.triggered("comma_overuse")

    def test_commas_within_allowance(self):
        result = check_punctuation("We bought apples, pears and figs. Then, we went home to rest.")

        assert not result.triggered("comma_overuse")

    def test_repeated_exclamations(self):
        result = check_punctuation("What a great day it was for all of us!! We loved it.")

        assert result.triggered("repeated_exclamations")

    def test_capitalization_capped_at_three(self):
        text = "one is here. two is here. three is here. four is here. five is here."

        result = check_punctuation(text)

        assert outcome(result, "sentence_capitalization").penalty == 6
        assert len(outcome(result, "sentence_capitalization").issues) == 3

    def test_informal_apostrophes(self):
        result = check_punctuation("I dont want to leave yet. We are gonna stay here all night.")

        rule = outcome(result, "informal_apostrophes")
        assert rule.penalty == 2
        assert "dont → don't" in rule.corrections
        assert "gonna → going to" in rule.corrections

    def test_unbalanced_quotes(self):
        assert check_punctuation('He said "hello to everyone in the room.').triggered(
            "quotation_balance"
        )

    def test_unbalanced_curly_quotes(self):
        assert check_punctuation("He said “hello to everyone in the room.").triggered(
            "quotation_balance"
        )

    def test_space_before_punctuation(self):
        assert check_punctuation("Hello , world . This is a test of spacing here.").triggered(
            "space_before_punctuation"
        )


class TestPunctuationScoring:
    """Score bounds."""

    def test_empty_text(self):
        assert check_punctuation("").score == 6

    def test_score_never_negative(self):
        text = 'one, two, three, four, five!! two "three , four dont gonna wanna'

        assert check_punctuation(text).score == 0

    def test_to_category(self):
        category = check_punctuation("i dont know what to say about this topic at all").to_category()

        assert category.kind is CategoryKind.PUNCTUATION
        assert category.feedback == "Minor punctuation concerns detected"
        assert category.corrections
