# ranker.py
# Top-K selection over a trie subtree.
# Ordering: higher score first, then phrase ascending (plain str comparison,
# i.e. codepoint order, case-sensitive). Stored phrases are distinct so the
# order is total and the output does not depend on traversal order.

from __future__ import annotations
import heapq
from typing import List, NamedTuple, Optional, Tuple

from query_autocomplete.core.trie import TrieNode


class Suggestion(NamedTuple):
    """One ranked completion. Unpacks as (score, phrase)."""

    score: int
    phrase: str

    def __str__(self) -> str:
        return f"[{self.score}] {self.phrase}"


def ranking_key(entry: Suggestion) -> Tuple[int, str]:
    """Sort key: ascending order of this key is best-first."""
    return (-entry.score, entry.phrase)


def collect(root: Optional[TrieNode], prefix: str) -> List[Suggestion]:
    """
    Gather every stored phrase in the subtree under `root`.
    Phrases are rebuilt as prefix + edge labels. Unordered.
    Uses an explicit stack, so long phrases can't hit the recursion limit.
    """
    if root is None:
        return []

    out: List[Suggestion] = []
    stack: List[Tuple[TrieNode, str]] = [(root, prefix)]
    while stack:
        node, path = stack.pop()
        if node.is_terminal:
            out.append(Suggestion(node.score, path))
        for ch, child in node.children.items():
            stack.append((child, path + ch))
    return out


def top_k(root: Optional[TrieNode], prefix: str, k: int) -> List[Suggestion]:
    """
    Return the k best completions under `root`.

    - root None (prefix not in the index) -> []
    - k == 0 -> []
    - fewer than k completions -> all of them, ranked
    Raises ValueError for negative k.
    Read-only: the trie is never modified.
    """
    if k < 0:
        raise ValueError(f"k must be >= 0, got {k}")
    if root is None or k == 0:
        return []
    return heapq.nsmallest(k, collect(root, prefix), key=ranking_key)
