"""
query_autocomplete - popularity-ranked prefix autocompletion.

    >>> from query_autocomplete import AutoCompleter
    >>> ac = AutoCompleter.with_default_corpus()
    >>> ac.suggest("how to make", 1)
    [Suggestion(score=55, phrase='how to make money online')]
"""

from query_autocomplete.core import (
    DEFAULT_CORPUS,
    AutoCompleter,
    PrefixIndex,
    Suggestion,
    top_k,
)

__all__ = ["AutoCompleter", "PrefixIndex", "Suggestion", "top_k", "DEFAULT_CORPUS"]

__version__ = "0.1.0"
