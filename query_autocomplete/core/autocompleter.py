# autocompleter.py
"""
AutoCompleter - application facade over the prefix index.

Purpose:
 - Own one PrefixIndex for the lifetime of the process (or test)
 - Seed it with scored phrases, count observed queries
 - Simple public API for CLI/tests:
     suggest(prefix, k), record(phrase), set_score(phrase, score),
     seed(pairs), train_lines(lines), stats()
 - Guard the index with a reader/writer lock so suggest() calls can run
   side by side while mutations get exclusive access
"""

from __future__ import annotations
import logging
from typing import Any, Dict, Iterable, List, Optional, Tuple

from query_autocomplete.core.corpus import DEFAULT_CORPUS
from query_autocomplete.core.ranker import Suggestion, top_k
from query_autocomplete.core.trie import PrefixIndex
from query_autocomplete.utils.rwlock import ReadWriteLock

logger = logging.getLogger(__name__)

DEFAULT_K = 5


class AutoCompleter:
    """Thread-safe wrapper around PrefixIndex + ranked top-k queries."""

    def __init__(
        self,
        seed: Optional[Iterable[Tuple[str, int]]] = None,
        default_k: int = DEFAULT_K,
    ) -> None:
        if default_k < 0:
            raise ValueError(f"default_k must be >= 0, got {default_k}")
        self.index = PrefixIndex()
        self.default_k = default_k
        self._lock = ReadWriteLock()
        if seed is not None:
            self.seed(seed)

    @classmethod
    def with_default_corpus(cls, default_k: int = DEFAULT_K) -> "AutoCompleter":
        return cls(seed=DEFAULT_CORPUS, default_k=default_k)

    # mutation ---------------------------------------------------------
    def record(self, phrase: str) -> int:
        """Count one occurrence of `phrase`. Returns its new score."""
        with self._lock.writing():
            score = self.index.insert(phrase)
        logger.debug("recorded %r -> %d", phrase, score)
        return score

    def set_score(self, phrase: str, score: int) -> None:
        with self._lock.writing():
            self.index.set_score(phrase, score)
        logger.debug("set %r = %d", phrase, score)

    def seed(self, pairs: Iterable[Tuple[str, int]]) -> int:
        with self._lock.writing():
            n = self.index.load(pairs)
        logger.info("seeded %d phrases", n)
        return n

    def train_lines(self, lines: Iterable[str]) -> int:
        """
        Record every non-blank line (stripped) as one observed query.
        Returns the number of lines recorded.
        """
        n = 0
        with self._lock.writing():
            for line in lines:
                phrase = line.strip()
                if not phrase:
                    continue
                self.index.insert(phrase)
                n += 1
        logger.info("trained on %d lines", n)
        return n

    # queries ---------------------------------------------------------
    def suggest(self, prefix: str, k: Optional[int] = None) -> List[Suggestion]:
        """
        Top-k completions of `prefix`, best first.
        k defaults to self.default_k. Unknown prefix -> [].
        """
        if k is None:
            k = self.default_k
        with self._lock.reading():
            node = self.index.resolve_prefix(prefix)
            out = top_k(node, prefix, k)
        logger.debug("suggest(%r, k=%d) -> %d results", prefix, k, len(out))
        return out

    def score_of(self, phrase: str) -> Optional[int]:
        with self._lock.reading():
            return self.index.score_of(phrase)

    def stats(self) -> Dict[str, Any]:
        with self._lock.reading():
            return {
                "phrases": len(self.index),
                "nodes": self.index.node_count(),
                "default_k": self.default_k,
            }

    def __len__(self) -> int:
        with self._lock.reading():
            return len(self.index)

    def __contains__(self, phrase: object) -> bool:
        with self._lock.reading():
            return phrase in self.index
