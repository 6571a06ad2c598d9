# tests/test_bktree.py
import random

import pytest

from emoji_picker.core.bktree import BKTree, levenshtein, levenshtein_with_cutoff, scan_within
from emoji_picker.core.pair import Dictionary, Entry


def brute_force(entries, name, tolerance):
    return {(levenshtein(name, e.name), e) for e in entries if levenshtein(name, e.name) <= tolerance}


@pytest.mark.parametrize(
    "a,b,expected",
    [
        ("", "", 0),
        ("", "abc", 3),
        ("kitten", "sitting", 3),
        ("flaw", "lawn", 2),
        ("crab", "snake", 4),
        ("crab", "coffee", 5),
        ("🦀", "🐍", 1),
        ("héllo", "hello", 1),
    ],
)
def test_levenshtein(a, b, expected):
    assert levenshtein(a, b) == expected
    assert levenshtein(b, a) == expected


def test_cutoff_matches_exact_within_budget():
    words = ["crab", "crib", "cab", "scrabble", "", "coffee", "grab"]
    for a in words:
        for b in words:
            d = levenshtein(a, b)
            for k in range(0, 6):
                got = levenshtein_with_cutoff(a, b, k)
                assert got == (d if d <= k else k + 1)


def test_find_exact_small(small_index):
    assert small_index.find_exact("crab") == Entry("crab", "🦀")
    assert small_index.find_exact("crb") is None
    assert small_index.find_exact("") is None


def test_find_within_tolerance_one(small_index):
    assert small_index.find_within("crab", 1) == [(0, Entry("crab", "🦀"))]


def test_find_within_returns_dictionary_order(small_index):
    hits = small_index.find_within("crab", 5)
    assert [e.name for _, e in hits] == ["crab", "snake", "coffee"]
    assert [d for d, _ in hits] == [0, 4, 5]


def test_empty_index():
    index = BKTree.build([])
    assert len(index) == 0
    assert index.find_exact("crab") is None
    assert index.find_within("crab", 10) == []
    assert index.depth() == 0
    assert "crab" not in index


def test_negative_tolerance(small_index):
    assert small_index.find_within("crab", -1) == []


def test_every_entry_found_exactly(emoji_index, emoji_dict):
    for e in emoji_dict:
        found = emoji_index.find_exact(e.name)
        assert found is not None
        assert found.value == e.value


@pytest.mark.parametrize("query", ["crab", "hart", "coffe", "thumbs", "moon", "", "zzzzzz", "red heart"])
@pytest.mark.parametrize("tolerance", [0, 1, 2, 3, 5])
def test_fuzzy_matches_brute_force(emoji_index, emoji_dict, query, tolerance):
    got = emoji_index.find_within(query, tolerance)
    assert set(got) == brute_force(emoji_dict, query, tolerance)
    assert len(got) == len(set(got))
    assert set(got) == set(scan_within(emoji_dict, query, tolerance))


def test_fuzzy_matches_brute_force_random_dictionary():
    rng = random.Random(1234)
    alphabet = "abcde"

    def word():
        return "".join(rng.choice(alphabet) for _ in range(rng.randint(0, 7)))

    # duplicate names on purpose
    entries = [Entry(word(), str(i)) for i in range(300)]
    index = BKTree.build(entries)
    assert len(index) == len(entries)
    for _ in range(60):
        q = word()
        t = rng.randint(0, 4)
        assert set(index.find_within(q, t)) == brute_force(entries, q, t)


def test_duplicate_names_keep_first_for_exact():
    index = BKTree.build([Entry("star", "⭐"), Entry("star", "🌟")])
    assert index.find_exact("star") == Entry("star", "⭐")
    assert {e.value for _, e in index.find_within("star", 0)} == {"⭐", "🌟"}


def test_results_do_not_depend_on_insertion_order(emoji_dict):
    shuffled = list(emoji_dict)
    random.Random(7).shuffle(shuffled)
    a = BKTree.build(emoji_dict)
    b = BKTree.build(shuffled)
    for q in ["crab", "sun", "heart"]:
        assert set(a.find_within(q, 3)) == set(b.find_within(q, 3))


def test_child_keys_are_real_distances(emoji_index):
    entries = emoji_index.dictionary
    arena = emoji_index.nodes()
    for pos, children in arena:
        for dist, child in children.items():
            assert levenshtein(entries[pos].name, entries[arena[child][0]].name) == dist


def test_contains_and_len(small_index):
    assert "snake" in small_index
    assert "snak" not in small_index
    assert len(small_index) == 3
    assert small_index.entries == tuple(Dictionary.from_pairs(
        [("crab", "🦀"), ("snake", "🐍"), ("coffee", "☕")]
    ))
