"""
query_autocomplete.core

Prefix index and ranked retrieval powering the autocompleter.
Contains:
 - the character trie holding phrases and scores (PrefixIndex)
 - subtree collection and top-k ranking (top_k, Suggestion)
 - the thread-safe application facade (AutoCompleter)
"""

from .trie import PrefixIndex, TrieNode
from .ranker import Suggestion, collect, ranking_key, top_k
from .autocompleter import AutoCompleter
from .corpus import DEFAULT_CORPUS

__all__ = [
    "PrefixIndex",
    "TrieNode",
    "Suggestion",
    "collect",
    "ranking_key",
    "top_k",
    "AutoCompleter",
    "DEFAULT_CORPUS",
]
