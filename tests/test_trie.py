# tests/test_trie.py
# unit tests for PrefixIndex (insert / set_score / resolve_prefix)

import pytest
from query_autocomplete.core.trie import PrefixIndex


@pytest.fixture
def index():
    return PrefixIndex()


def test_insert_accumulates(index):
    assert index.insert("coffee") == 1
    assert index.insert("coffee") == 2
    assert index.insert("coffee") == 3
    assert index.score_of("coffee") == 3
    assert len(index) == 1


def test_set_score_overwrites(index):
    index.set_score("pizza", 50)
    index.set_score("pizza", 7)
    assert index.score_of("pizza") == 7
    assert len(index) == 1


def test_insert_after_set_score_adds_one(index):
    index.set_score("pizza", 50)
    index.insert("pizza")
    assert index.score_of("pizza") == 51


def test_set_score_accepts_any_int(index):
    index.set_score("neg", -4)
    index.set_score("zero", 0)
    assert index.score_of("neg") == -4
    assert index.score_of("zero") == 0
    assert "zero" in index


def test_shared_prefix_shares_nodes(index):
    index.insert("tea")
    before = index.node_count()  # root + t, e, a
    assert before == 4
    index.insert("team")
    assert index.node_count() == before + 1
    index.insert("ten")
    assert index.node_count() == before + 2


def test_prefix_of_stored_phrase_is_not_terminal(index):
    index.insert("team")
    assert "tea" not in index
    assert index.score_of("tea") is None
    node = index.resolve_prefix("tea")
    assert node is not None
    assert not node.is_terminal


def test_resolve_prefix_empty_returns_root(index):
    index.insert("a")
    assert index.resolve_prefix("") is index.root


def test_resolve_prefix_missing(index):
    index.insert("hello")
    assert index.resolve_prefix("help") is None
    assert index.resolve_prefix("hello world") is None


def test_resolve_prefix_does_not_mutate(index):
    index.insert("abc")
    count = index.node_count()
    index.resolve_prefix("abd")
    index.resolve_prefix("xyz")
    index.score_of("zzz")
    assert index.node_count() == count
    assert len(index) == 1


def test_case_and_unicode_kept_verbatim(index):
    index.insert("Café")
    index.insert("café")
    assert len(index) == 2
    assert index.score_of("Café") == 1
    assert index.resolve_prefix("caf").children.keys() == {"é"}


def test_empty_phrase_marks_root(index):
    index.insert("")
    assert index.root.is_terminal
    assert index.score_of("") == 1


def test_load_bulk(index):
    n = index.load([("a", 1), ("b", 2), ("a", 3)])
    assert n == 3
    assert len(index) == 2
    assert index.score_of("a") == 3


def test_contains_non_string(index):
    index.insert("1")
    assert 1 not in index
