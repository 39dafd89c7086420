"""Tests for topic relevance scoring."""

import time
from itertools import product

import pytest

from mark_checker.config import TopicRelevanceConfig
from mark_checker.grading.grammar_checker import check_grammar
from mark_checker.grading.punctuation_checker import check_punctuation
from mark_checker.grading.rubric_aggregator import aggregate, score_length
from mark_checker.grading.spell_checker import check_spelling
from mark_checker.grading.topic_relevance import check_topic_relevance, strength_to_score
from mark_checker.grading.vocabulary_scorer import check_vocabulary
from mark_checker.models.analysis_models import CategoryKind


class TestNoTopic:
    """Without a topic the category is neutral."""

    @pytest.mark.parametrize("topic", [None, "", "   "])
    def test_full_score_and_unknown_relevance(self, cat_essay, topic):
        result = check_topic_relevance(cat_essay, topic)

        assert result.score == 20
        assert result.relevant is None
        assert result.to_category().feedback == "No topic assigned; relevance not assessed"

    def test_topic_of_only_function_words(self, cat_essay):
        result = check_topic_relevance(cat_essay, "it is")

        assert result.score == 20
        assert result.relevant is None
        assert result.issues


class TestOffTopicGate:
    """Submissions with nothing in common with the topic score zero."""

    def test_cat_essay_on_water_cycle(self, cat_essay):
        result = check_topic_relevance(cat_essay, "The water cycle")

        assert result.off_topic
        assert result.score == 0
        assert result.relevant is False
        assert "Submission does not address the assigned topic: 'The water cycle'" in result.issues

    def test_gate_thresholds_are_configurable(self, cat_essay):
        config = TopicRelevanceConfig(coverage_gate=0.0, jaccard_gate=0.0)

        result = check_topic_relevance(cat_essay, "The water cycle", config=config)

        assert not result.off_topic
        assert result.score == 6
        assert result.relevant is False

    def test_single_unrelated_sentence_fails_the_submission(self):
        text = "Cats are wonderful pets that purr loudly."

        topic_result = check_topic_relevance(text, "The water cycle")
        result = aggregate(
            spelling=check_spelling(text, load_lexicon=False).to_category(),
            grammar=check_grammar(text).to_category(),
            punctuation=check_punctuation(text).to_category(),
            length=score_length(text),
            vocabulary=check_vocabulary(text).to_category(),
            topic_relevance=topic_result.to_category(),
            text=text,
            topic="The water cycle",
        )

        assert topic_result.score == 0
        assert result.passed is False
        assert result.total_score == 0
        assert result.category_sum > 0

    def test_empty_text_is_not_gated(self):
        result = check_topic_relevance("", "The water cycle")

        assert not result.off_topic
        assert result.score == 6
        assert result.relevant is False


class TestOnTopic:
    """Relevant submissions."""

    def test_photosynthesis_essay_scores_high(self, photosynthesis_essay):
        result = check_topic_relevance(photosynthesis_essay, "Photosynthesis in plants")

        assert result.coverage_ratio == 1.0
        assert result.jaccard > 0.05
        assert result.score >= 16
        assert result.relevant is True

    def test_phrase_and_bigram_detection(self):
        text = "The water cycle moves water through the air. Rain falls back to the ground."

        result = check_topic_relevance(text, "The water cycle")

        assert result.phrase_present
        assert result.bigram_hits == 1
        assert result.relevant

    def test_recurring_companion_words_extend_coverage(self):
        text = "Photosynthesis needs sunlight. Sunlight warms the leaves. Sunlight is bright."

        result = check_topic_relevance(text, "Photosynthesis")

        assert result.direct_coverage_ratio == pytest.approx(1 / 3)
        assert result.coverage_ratio == 1.0

    def test_partial_coverage_is_reported(self):
        text = (
            "Volcanoes erupt molten rock. Football matches draw crowds. "
            "Chess rewards patience. Gardens need rain."
        )

        result = check_topic_relevance(text, "Volcanoes")

        assert not result.off_topic
        assert result.coverage_ratio == 0.25
        assert any("1 of 4" in issue for issue in result.issues)

    def test_transition_term_uses_vocabulary_bonus(self):
        text = (
            "Plants grow tall. However, plants need water. Therefore plants drink rain. "
            "Moreover, plants bloom. Furthermore, plants make seeds. "
            "Consequently, plants spread. Thus plants thrive."
        )

        default = check_topic_relevance(text, "plants")
        without = check_topic_relevance(text, "plants", transition_bonus=0)
        capped = check_topic_relevance(text, "plants", transition_bonus=9)

        assert check_vocabulary(text).transition_bonus == 3
        assert default.strength - without.strength == pytest.approx(3)
        assert capped.strength - without.strength == pytest.approx(5)

    def test_large_submission_is_scored_quickly(self):
        words = ["".join(letters) for letters in product("bcdfghjklm", repeat=4)]
        sentences = [
            "Plants " + " ".join(words[i:i + 9]) + "."
            for i in range(0, len(words), 9)
        ]
        text = " ".join(sentences + sentences[:600])

        start = time.perf_counter()
        result = check_topic_relevance(text, "Photosynthesis in plants")
        elapsed = time.perf_counter() - start

        assert result.coverage_ratio == 1.0
        assert elapsed < 2.0

    def test_to_category(self, photosynthesis_essay):
        category = check_topic_relevance(photosynthesis_essay, "Photosynthesis").to_category()

        assert category.kind is CategoryKind.TOPIC_RELEVANCE
        assert category.feedback == "The submission stays on the assigned topic"


class TestStrengthBands:
    """Strength to score mapping."""

    @pytest.mark.parametrize("strength, expected", [
        (100, 20),
        (120, 20),
        (70, 19),
        (50, 16),
        (30, 12),
        (15, 8),
        (0, 6),
        (14.9, 10),
    ])
    def test_band_mapping(self, strength, expected):
        assert strength_to_score(strength, TopicRelevanceConfig()) == expected

    def test_scores_stay_in_range(self):
        config = TopicRelevanceConfig()
        scores = [strength_to_score(s, config) for s in range(0, 101)]

        assert min(scores) == 6
        assert max(scores) == 20
        assert scores[15:] == sorted(scores[15:])
