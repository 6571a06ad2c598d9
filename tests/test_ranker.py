# tests/test_ranker.py
# ordering, ties, cap and prefix option for the suggestion ranker

import pytest

from emoji_picker.core.pair import Entry
from emoji_picker.core.ranker import Ranker, rank

A = Entry("a", "1")
B = Entry("b", "2")
C = Entry("c", "3")
D = Entry("d", "4")


def test_rank_sorts_by_distance():
    assert rank([(3, A), (0, B), (1, C)]) == [B, C, A]


def test_rank_ties_keep_input_order():
    assert rank([(1, C), (0, D), (1, A), (1, B)]) == [D, C, A, B]


def test_rank_is_deterministic():
    hits = [(2, A), (1, B), (2, C), (1, D)]
    assert rank(hits, 3) == rank(list(hits), 3) == [B, D, A]


def test_rank_cap():
    hits = [(i, Entry(str(i), "x")) for i in range(10)]
    assert len(rank(hits, 5)) == 5
    assert rank(hits, 0) == []
    assert rank(hits, -1) == []


def test_rank_empty():
    assert rank([]) == []


def test_prefix_filter_is_opt_in():
    crab, cab, grab = Entry("crab", "🦀"), Entry("cab", "🚕"), Entry("grab", "✊")
    hits = [(1, grab), (1, cab), (0, crab)]
    assert rank(hits) == [crab, grab, cab]
    assert rank(hits, prefix="c") == [crab, cab]
    assert rank(hits, prefix="cr") == [crab]


def test_prefix_filter_applies_before_cap():
    hits = [(0, Entry("zz", "")), (1, Entry("zy", "")), (2, Entry("ab", ""))]
    assert rank(hits, cap=1, prefix="a") == [Entry("ab", "")]


@pytest.mark.parametrize("prefix_filter,expected", [(False, ["grab", "crab"]), (True, ["crab"])])
def test_ranker_object(prefix_filter, expected):
    r = Ranker(cap=5, prefix_filter=prefix_filter)
    hits = [(1, Entry("grab", "")), (1, Entry("crab", ""))]
    assert [e.name for e in r.rank(hits, "cr")] == expected
