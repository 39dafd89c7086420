"""
Lexicon Cache.

Loads a large English word set once per process and shares it read-only with
every spell check. The first caller performs the load; concurrent callers
wait on the same in-flight future instead of starting their own load. A
failed load is memoized as ``None`` so spell checking degrades to the static
common-mistakes list for the rest of the process.
"""

import re
import threading
from collections import defaultdict
from concurrent.futures import Future
from pathlib import Path
from typing import Callable, Dict, FrozenSet, Iterable, Iterator, List, Optional

from spellchecker import SpellChecker

from mark_checker.config import ConfigManager
from mark_checker.exceptions import LexiconUnavailableError
from mark_checker.services.base_service import BaseService, ServiceStatus
from mark_checker.utils.logger import logger

WORD_PATTERN = re.compile(r"^[a-z]+(?:['-][a-z]+)*$")
PREFIX_LENGTH = 2


class Lexicon:
    """Read-only set of valid English words with a two-letter prefix index."""

    def __init__(self, words: Iterable[str]):
        normalized = {w.strip().lower() for w in words if w and w.strip()}
        self._words: FrozenSet[str] = frozenset(w for w in normalized if WORD_PATTERN.match(w))

        by_prefix: Dict[str, List[str]] = defaultdict(list)
        for word in sorted(self._words):
            by_prefix[word[:PREFIX_LENGTH]].append(word)
        self._by_prefix = dict(by_prefix)

    def __contains__(self, word: object) -> bool:
        return isinstance(word, str) and word.lower() in self._words

    def __len__(self) -> int:
        return len(self._words)

    def __iter__(self) -> Iterator[str]:
        return iter(self._words)

    def accepts_compound(self, word: str) -> bool:
        """A hyphenated word is valid when every part is a known word."""
        parts = word.lower().split("-")
        return all(part and part in self._words for part in parts)

    def candidates(self, word: str, limit: int = 400, max_length_delta: int = 3) -> List[str]:
        """Words sharing the first two letters, within edit range by length.

        Words whose length differs by more than ``max_length_delta`` can never
        be within that edit distance, so they are not counted against ``limit``.
        """
        word = word.lower()
        bucket = self._by_prefix.get(word[:PREFIX_LENGTH], [])
        selected = []
        for candidate in bucket:
            if abs(len(candidate) - len(word)) > max_length_delta:
                continue
            selected.append(candidate)
            if len(selected) >= limit:
                break
        return selected

    @classmethod
    def from_file(cls, path: str) -> "Lexicon":
        """Load a newline-delimited word list."""
        try:
            with open(path, "r", encoding="utf-8") as f:
                return cls(line for line in f)
        except OSError as e:
            raise LexiconUnavailableError(
                f"Could not read word list: {e}", source=str(path), original_error=e
            ) from e

    @classmethod
    def from_spellchecker(cls, language: str = "en") -> "Lexicon":
        """Load the English frequency dictionary bundled with pyspellchecker."""
        try:
            checker = SpellChecker(language=language)
            return cls(checker.word_frequency.keys())
        except Exception as e:
            raise LexiconUnavailableError(
                f"Could not load bundled dictionary: {e}",
                source=f"pyspellchecker:{language}",
                original_error=e,
            ) from e


def load_lexicon(path: Optional[str] = None) -> Lexicon:
    """Build a lexicon from ``path`` or, when unset, the bundled dictionary.

    Raises:
        LexiconUnavailableError: If no usable word list could be loaded
    """
    if path:
        lexicon = Lexicon.from_file(str(Path(path)))
        source = str(path)
    else:
        lexicon = Lexicon.from_spellchecker()
        source = "pyspellchecker:en"

    if not len(lexicon):
        raise LexiconUnavailableError("Word list is empty", source=source)
    return lexicon


class LexiconService(BaseService):
    """Process-lifetime owner of the shared lexicon."""

    def __init__(
        self,
        lexicon_path: Optional[str] = None,
        loader: Optional[Callable[[], Lexicon]] = None,
        **kwargs,
    ):
        super().__init__(kwargs.pop("service_name", "lexicon_service"), **kwargs)
        self.lexicon_path = lexicon_path
        self._loader = loader or (lambda: load_lexicon(self.lexicon_path))
        self._load_lock = threading.Lock()
        self._future: Optional["Future[Optional[Lexicon]]"] = None

    def ensure_lexicon(self) -> Optional[Lexicon]:
        """Return the shared lexicon, loading it on first use.

        Returns:
            The lexicon, or None if it could not be loaded
        """
        with self._load_lock:
            future = self._future
            is_owner = future is None
            if is_owner:
                future = Future()
                self._future = future

        if is_owner:
            try:
                future.set_result(self._load())
            except Exception as e:
                logger.log_error_with_context(e, {"operation": "lexicon_load"})
                future.set_result(None)

        return future.result()

    def _load(self) -> Optional[Lexicon]:
        error = None
        with self.track_request("load"):
            try:
                lexicon = self._loader()
            except LexiconUnavailableError as e:
                lexicon, error = None, e

        if lexicon is None:
            logger.warning(f"Lexicon unavailable, using common mistakes only: {error.message}")
            self.metrics.status = ServiceStatus.DEGRADED
            return None

        logger.log_metric("lexicon_loads")
        self.update_custom_metric("lexicon_size", len(lexicon))
        logger.info(f"Lexicon loaded with {len(lexicon)} words")
        return lexicon

    @property
    def is_loaded(self) -> bool:
        future = self._future
        return future is not None and future.done() and future.result() is not None

    def initialize(self) -> bool:
        self._initialized = self.ensure_lexicon() is not None
        return self._initialized

    def health_check(self) -> bool:
        return self.is_loaded

    def cleanup(self) -> None:
        # The lexicon is never invalidated; nothing to release.
        logger.debug(f"{self.service_name} cleanup requested; lexicon retained")


_default_service: Optional[LexiconService] = None
_default_lock = threading.Lock()


def get_lexicon_service() -> LexiconService:
    """Return the process-wide lexicon service, creating it on first use."""
    global _default_service
    with _default_lock:
        if _default_service is None:
            _default_service = LexiconService(
                lexicon_path=ConfigManager().config.lexicon_path
            )
        return _default_service


def ensure_lexicon() -> Optional[Lexicon]:
    """Return the shared lexicon, or None when it cannot be loaded."""
    return get_lexicon_service().ensure_lexicon()
