"""
Shared tokenization and sentence segmentation.

A ``TextProfile`` is computed once per submission and handed to every scorer
so that all heuristics agree on what counts as a word and a sentence.
"""

import re
from dataclasses import dataclass
from typing import Iterable, List, Tuple, Union

from mark_checker.constants import STOPWORDS

SENTENCE_SPLIT_PATTERN = re.compile(r"[.!?]+")
TOKEN_PATTERN = re.compile(r"[a-z]+(?:'[a-z]+)*")
APOSTROPHE_VARIANTS = str.maketrans({"’": "'", "‘": "'", "ʼ": "'"})


def normalize_apostrophes(text: str) -> str:
    return text.translate(APOSTROPHE_VARIANTS)


def tokenize(text: str) -> List[str]:
    """Lowercase word tokens with internal apostrophes kept (``don't``)."""
    return TOKEN_PATTERN.findall(normalize_apostrophes(text).lower())


def split_sentences(text: str) -> List[str]:
    """Split on runs of ``.``, ``!`` or ``?`` and drop empty pieces."""
    return [s.strip() for s in SENTENCE_SPLIT_PATTERN.split(text) if s.strip()]


def content_words(tokens: Iterable[str], min_length: int = 3) -> List[str]:
    """Tokens that carry meaning: long enough and not a function word."""
    return [t for t in tokens if len(t) >= min_length and t not in STOPWORDS]


@dataclass(frozen=True)
class TextProfile:
    """Immutable per-submission view of the text."""
    text: str
    cleaned: str
    words: Tuple[str, ...]
    sentences: Tuple[str, ...]
    tokens: Tuple[str, ...]
    sentence_tokens: Tuple[Tuple[str, ...], ...]

    @classmethod
    def from_text(cls, text: str) -> "TextProfile":
        cleaned = normalize_apostrophes(text or "").strip()
        sentences = split_sentences(cleaned)
        return cls(
            text=text or "",
            cleaned=cleaned,
            words=tuple(cleaned.split()),
            sentences=tuple(sentences),
            tokens=tuple(tokenize(cleaned)),
            sentence_tokens=tuple(tuple(tokenize(s)) for s in sentences),
        )

    @classmethod
    def coerce(cls, value: Union[str, "TextProfile"]) -> "TextProfile":
        if isinstance(value, TextProfile):
            return value
        return cls.from_text(value)

    @property
    def word_count(self) -> int:
        return len(self.words)

    @property
    def sentence_count(self) -> int:
        return len(self.sentences)

    @property
    def token_count(self) -> int:
        return len(self.tokens)

    @property
    def is_empty(self) -> bool:
        return not self.cleaned

    @property
    def normalized_text(self) -> str:
        """Tokens joined by single spaces, padded for whole-phrase lookups."""
        return f" {' '.join(self.tokens)} "
