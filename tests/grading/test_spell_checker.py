"""Tests for the spell checker."""

from unittest.mock import patch

from mark_checker.config import SpellingConfig
from mark_checker.grading.spell_checker import (
    check_spelling,
    find_unknown_words,
    suggest_correction,
)
from mark_checker.grading.text_profile import TextProfile
from mark_checker.models.analysis_models import CategoryKind
from mark_checker.services.lexicon_service import Lexicon


class TestCommonMisspellings:
    """Static common-mistakes list, always applied."""

    def test_recieve_is_corrected(self, small_lexicon):
        result = check_spelling("I will recieve the package tomorrow.", small_lexicon)

        assert "'recieve' should be 'receive'" in result.issues
        assert "recieve → receive" in result.corrections
        assert result.score == 12

    def test_common_mistake_reported_once(self, small_lexicon):
        result = check_spelling("I will recieve the package tomorrow.", small_lexicon)

        assert len(result.issues) == 1

    def test_case_insensitive(self):
        result = check_spelling("Recieve it.", load_lexicon=False)

        assert result.corrections == ["recieve → receive"]

    def test_without_lexicon_uses_fallback_cap(self):
        text = "recieve occured seperate definitly goverment beleive enviroment"

        result = check_spelling(text, load_lexicon=False)

        assert not result.lexicon_used
        assert len(result.issues) == 7
        assert result.score == 0

    def test_without_lexicon_three_mistakes(self):
        result = check_spelling("I recieve wierd freind letters.", load_lexicon=False)

        assert result.score == 6


class TestLexiconLookup:
    """Unknown-word detection against the lexicon."""

    def test_unknown_word_gets_suggestion(self, small_lexicon):
        result = check_spelling("The gardne was beautiful.", small_lexicon)

        assert result.flagged_words == ["gardne"]
        assert "'gardne' is possibly misspelled" in result.issues
        assert "gardne → garden" in result.corrections
        assert result.score == 12

    def test_unknown_word_without_close_match(self, small_lexicon):
        result = check_spelling("The xylqzpt was beautiful.", small_lexicon)

        assert result.flagged_words == ["xylqzpt"]
        assert result.corrections == []

    def test_clean_text_scores_full(self, small_lexicon, photosynthesis_essay):
        result = check_spelling(photosynthesis_essay, small_lexicon)

        assert result.issues == []
        assert result.score == 15

    def test_skips_acronyms_numbers_and_contractions(self, small_lexicon):
        profile = TextProfile.from_text("NASA said 42 and 3rd we'll go home.")

        assert find_unknown_words(profile, small_lexicon) == ["said"]

    def test_recurring_capitalized_words_are_proper_nouns(self, small_lexicon):
        text = "Zorblax was home. Zorblax is the gate."

        assert find_unknown_words(TextProfile.from_text(text), small_lexicon) == []

    def test_single_capitalized_unknown_is_flagged(self, small_lexicon):
        text = "Zorblax was home."

        assert find_unknown_words(TextProfile.from_text(text), small_lexicon) == ["zorblax"]

    def test_possessives_and_compounds(self, small_lexicon):
        text = "The garden's gate is well-known."

        assert find_unknown_words(TextProfile.from_text(text), small_lexicon) == []

    def test_curly_apostrophes_are_normalized(self, small_lexicon):
        text = "The garden’s gate."

        assert find_unknown_words(TextProfile.from_text(text), small_lexicon) == []

    def test_issue_cap(self, small_lexicon):
        text = " ".join(f"zz{chr(97 + i)}qq" for i in range(20))
        config = SpellingConfig(max_issues=5)

        result = check_spelling(text, small_lexicon, config=config)

        assert len(result.issues) == 5
        assert result.score == 0

    def test_lexicon_penalty_cap(self, small_lexicon):
        text = " ".join(f"zz{chr(97 + i)}qq" for i in range(3))

        result = check_spelling(text, small_lexicon)

        assert result.score == 15 - 3 * 3


class TestLexiconLoading:
    """Lexicon resolution and degradation."""

    def test_loads_shared_lexicon_when_omitted(self, small_lexicon):
        with patch(
            "mark_checker.grading.spell_checker.ensure_lexicon", return_value=small_lexicon
        ) as ensure:
            result = check_spelling("The gardne was beautiful.")

        ensure.assert_called_once()
        assert result.lexicon_used

    def test_degrades_when_lexicon_unavailable(self):
        with patch("mark_checker.grading.spell_checker.ensure_lexicon", return_value=None):
            result = check_spelling("The gardne was beautiful.")

        assert not result.lexicon_used
        assert result.issues == []
        assert result.score == 15


class TestSuggestCorrection:
    """Nearest-candidate search."""

    def test_prefers_closest(self):
        lexicon = Lexicon(["recite", "receive", "recover"])

        assert suggest_correction("receve", lexicon) == "receive"

    def test_respects_max_distance(self):
        lexicon = Lexicon(["garden"])

        assert suggest_correction("gaxxxxxxx", lexicon, max_distance=2) is None


class TestEdgeCases:
    """Empty and odd input never raises."""

    def test_empty_text(self, small_lexicon):
        result = check_spelling("", small_lexicon)

        assert result.issues == []
        assert result.score == 15

    def test_to_category(self, small_lexicon):
        category = check_spelling("I recieve it.", small_lexicon).to_category()

        assert category.kind is CategoryKind.SPELLING
        assert category.feedback == "Some possible spelling mistakes found"
        assert category.corrections == ["recieve → receive"]

    def test_to_category_clean(self, small_lexicon):
        category = check_spelling("", small_lexicon).to_category()

        assert category.feedback == "No spelling errors detected"
