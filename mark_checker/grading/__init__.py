"""Heuristic scorers for the local writing assessment engine."""

from .edit_distance import damerau_levenshtein
from .grammar_checker import GrammarResult, check_grammar
from .punctuation_checker import PunctuationResult, check_punctuation
from .rubric_aggregator import aggregate, assign_grade, score_length
from .spell_checker import SpellingResult, check_spelling, suggest_correction
from .text_profile import TextProfile, tokenize
from .topic_relevance import TopicRelevanceResult, check_topic_relevance
from .vocabulary_scorer import VocabularyResult, check_vocabulary

__all__ = [
    "TextProfile",
    "tokenize",
    "damerau_levenshtein",
    "check_spelling",
    "suggest_correction",
    "SpellingResult",
    "check_grammar",
    "GrammarResult",
    "check_punctuation",
    "PunctuationResult",
    "check_vocabulary",
    "VocabularyResult",
    "check_topic_relevance",
    "TopicRelevanceResult",
    "score_length",
    "assign_grade",
    "aggregate",
]
