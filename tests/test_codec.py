# tests/test_codec.py
import json
import zlib

import pytest

from emoji_picker.core.bktree import BKTree
from emoji_picker.core.codec import MAGIC, VERSION, decode, encode
from emoji_picker.core.errors import CorruptIndex
from emoji_picker.core.pair import Entry


def blob_of(doc) -> bytes:
    return MAGIC + bytes([VERSION]) + zlib.compress(json.dumps(doc).encode("utf-8"))


def test_round_trip_answers_same_queries(emoji_index, emoji_dict):
    loaded = decode(encode(emoji_index))
    assert len(loaded) == len(emoji_index)
    for e in emoji_dict:
        assert loaded.find_exact(e.name) == emoji_index.find_exact(e.name)
    for q in ["crab", "hart", "sun", "", "xyzzy"]:
        for t in (0, 2, 5):
            assert set(loaded.find_within(q, t)) == set(emoji_index.find_within(q, t))


def test_round_trip_empty_index():
    loaded = decode(encode(BKTree.build([])))
    assert len(loaded) == 0
    assert loaded.find_exact("crab") is None


def test_round_trip_keeps_duplicates():
    index = BKTree.build([Entry("star", "⭐"), Entry("star", "🌟"), Entry("stars", "✨")])
    loaded = decode(encode(index))
    assert loaded.find_exact("star") == Entry("star", "⭐")
    assert len(loaded.find_within("star", 1)) == 3


def test_encode_starts_with_header(small_index):
    blob = encode(small_index)
    assert blob[:4] == MAGIC
    assert blob[4] == VERSION


def test_truncated_blob_is_corrupt(small_index):
    blob = encode(small_index)
    for n in range(len(blob)):
        with pytest.raises(CorruptIndex):
            decode(blob[:n])


@pytest.mark.parametrize(
    "data",
    [
        b"",
        b"garbage",
        b"\x00" * 64,
        MAGIC,
        MAGIC + bytes([VERSION]) + b"not zlib at all",
        MAGIC + bytes([VERSION + 1]) + zlib.compress(b"{}"),
        MAGIC + bytes([VERSION]) + zlib.compress(b"\xff\xfe not utf-8"),
        MAGIC + bytes([VERSION]) + zlib.compress(b"{not json"),
    ],
)
def test_garbage_is_corrupt(data):
    with pytest.raises(CorruptIndex):
        decode(data)


def test_non_bytes_is_corrupt():
    with pytest.raises(CorruptIndex):
        decode("EMJT")  # type: ignore[arg-type]


@pytest.mark.parametrize(
    "doc",
    [
        [],
        {"nodes": []},
        {"entries": [["crab"]], "nodes": [[0, []]]},
        {"entries": [["crab", 1]], "nodes": [[0, []]]},
        {"entries": [["crab", "🦀"]]},
        {"entries": [["crab", "🦀"]], "nodes": []},
        {"entries": [["crab", "🦀"]], "nodes": [[5, []]]},
        {"entries": [["crab", "🦀"]], "nodes": [[True, []]]},
        {"entries": [["crab", "🦀"]], "nodes": [[0, [[1]]]]},
        # child index out of range / pointing at root
        {"entries": [["crab", "🦀"], ["crib", "x"]], "nodes": [[0, [[1, 2]]], [1, []]]},
        {"entries": [["crab", "🦀"], ["crib", "x"]], "nodes": [[0, [[1, 0]]], [1, []]]},
        # wrong distance on the edge
        {"entries": [["crab", "🦀"], ["crib", "x"]], "nodes": [[0, [[3, 1]]], [1, []]]},
        # edge to the parent is right but the grandparent key is wrong
        {
            "entries": [["a", "1"], ["b", "2"], ["xyz", "3"]],
            "nodes": [[0, [[1, 1]]], [1, [[3, 2]]], [2, []]],
        },
        # same entry stored twice
        {"entries": [["crab", "🦀"], ["crib", "x"]], "nodes": [[0, [[0, 1]]], [0, []]]},
        # unreachable node
        {"entries": [["crab", "🦀"], ["crib", "x"]], "nodes": [[0, []], [1, []]]},
        # duplicate distance key
        {
            "entries": [["crab", "🦀"], ["crib", "x"], ["grab", "y"]],
            "nodes": [[0, [[1, 1], [1, 2]]], [1, []], [2, []]],
        },
    ],
)
def test_structurally_invalid_documents(doc):
    with pytest.raises(CorruptIndex):
        decode(blob_of(doc))


def test_hand_written_valid_document():
    doc = {"entries": [["crab", "🦀"], ["crib", "x"]], "nodes": [[0, [[1, 1]]], [1, []]]}
    index = decode(blob_of(doc))
    assert index.find_exact("crib") == Entry("crib", "x")
