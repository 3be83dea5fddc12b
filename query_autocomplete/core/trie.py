# trie.py
# Prefix index (character trie) for query autocompletion.
# Each stored phrase keeps an integer popularity score used for ranking.
# Phrases are stored verbatim: no case folding, one edge per character.

from __future__ import annotations
import logging
from typing import Dict, Iterable, Optional, Tuple

logger = logging.getLogger(__name__)

Phrase = str
Score = int


class TrieNode:
    """
    A single node in the trie.
    children: char -> TrieNode
    is_terminal: True when the path from the root spells a stored phrase
    score: popularity of that phrase (only meaningful if is_terminal)
    """

    __slots__ = ("children", "is_terminal", "score")

    def __init__(self) -> None:
        self.children: Dict[str, TrieNode] = {}
        self.is_terminal = False
        self.score = 0

    def __repr__(self) -> str:
        return (
            f"TrieNode(children={len(self.children)}, "
            f"is_terminal={self.is_terminal}, score={self.score})"
        )


class PrefixIndex:
    """
    Trie storing phrases with scores, used by the AutoCompleter for:
     - counting observed queries (insert)
     - seeding a corpus with known popularity (set_score)
     - resolving a prefix to the subtree holding all its completions
    """

    def __init__(self) -> None:
        self._root = TrieNode()
        self._size = 0

    @property
    def root(self) -> TrieNode:
        return self._root

    # insertion -----------------------------------------------------
    def _walk_or_create(self, phrase: Phrase) -> TrieNode:
        node = self._root
        for ch in phrase:
            nxt = node.children.get(ch)
            if nxt is None:
                nxt = TrieNode()
                node.children[ch] = nxt
            node = nxt
        if not node.is_terminal:
            node.is_terminal = True
            self._size += 1
        return node

    def insert(self, phrase: Phrase) -> Score:
        """
        Record one observation of `phrase`.
        Creates missing nodes, marks the end node terminal and bumps its
        score by one. Returns the new score.
        """
        node = self._walk_or_create(phrase)
        node.score += 1
        return node.score

    def set_score(self, phrase: Phrase, score: Score) -> None:
        """
        Store `phrase` with an exact score, overwriting any previous value.
        No validation of sign or range.
        """
        node = self._walk_or_create(phrase)
        node.score = score

    def load(self, pairs: Iterable[Tuple[Phrase, Score]]) -> int:
        """Bulk set_score. Returns how many pairs were applied."""
        n = 0
        for phrase, score in pairs:
            self.set_score(phrase, score)
            n += 1
        logger.debug("loaded %d scored phrases (%d distinct stored)", n, self._size)
        return n

    # lookup ---------------------------------------------------------
    def resolve_prefix(self, prefix: str) -> Optional[TrieNode]:
        """
        Return the node reached by following `prefix` from the root,
        or None if the path breaks off. Empty prefix -> root.
        Never creates nodes.
        """
        node = self._root
        for ch in prefix:
            nxt = node.children.get(ch)
            if nxt is None:
                return None
            node = nxt
        return node

    def score_of(self, phrase: Phrase) -> Optional[Score]:
        """Score of a stored phrase, None if it was never stored."""
        node = self.resolve_prefix(phrase)
        if node is None or not node.is_terminal:
            return None
        return node.score

    # convenience/debugging -----------------------------------------------------
    def node_count(self) -> int:
        """
        Count nodes including the root.
        (O(N) walk. For inspection, not runtime.)
        """
        count = 0
        stack = [self._root]
        while stack:
            node = stack.pop()
            count += 1
            stack.extend(node.children.values())
        return count

    def __len__(self) -> int:
        return self._size

    def __contains__(self, phrase: object) -> bool:
        if not isinstance(phrase, str):
            return False
        node = self.resolve_prefix(phrase)
        return node is not None and node.is_terminal
