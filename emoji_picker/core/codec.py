# codec.py
# Binary persistence for BKTree.
#
# Layout:
#   4 bytes  magic b"EMJT"
#   1 byte   format version
#   rest     zlib-compressed UTF-8 JSON:
#            {"entries": [[name, value], ...],
#             "nodes":   [[entry_pos, [[dist, child_pos], ...]], ...]}
#
# decode() checks the whole document before building anything and raises
# CorruptIndex for every kind of bad input, including a node whose distance
# to any ancestor differs from the edge key taken below that ancestor.

from __future__ import annotations

import json
import logging
import zlib
from typing import Any, List

from .bktree import BKTree, levenshtein
from .errors import CorruptIndex
from .pair import Dictionary, Entry

logger = logging.getLogger(__name__)

MAGIC = b"EMJT"
VERSION = 1
_HEADER_LEN = len(MAGIC) + 1


def encode(index: BKTree) -> bytes:
    doc = {
        "entries": [[e.name, e.value] for e in index.dictionary],
        "nodes": [[pos, sorted(children.items())] for pos, children in index.nodes()],
    }
    payload = json.dumps(doc, ensure_ascii=False, separators=(",", ":")).encode("utf-8")
    blob = MAGIC + bytes([VERSION]) + zlib.compress(payload, 9)
    logger.debug("encoded %d nodes into %d bytes", len(index), len(blob))
    return blob


def decode(data: bytes) -> BKTree:
    if not isinstance(data, (bytes, bytearray, memoryview)):
        raise CorruptIndex(f"expected bytes, got {type(data).__name__}")
    data = bytes(data)
    if len(data) < _HEADER_LEN or data[: len(MAGIC)] != MAGIC:
        raise CorruptIndex("bad magic header")
    if data[len(MAGIC)] != VERSION:
        raise CorruptIndex(f"unsupported format version {data[len(MAGIC)]}")

    try:
        payload = zlib.decompress(data[_HEADER_LEN:])
        doc = json.loads(payload.decode("utf-8"))
    except (zlib.error, UnicodeDecodeError, ValueError, RecursionError) as e:
        raise CorruptIndex(f"unreadable payload: {e}") from e

    dictionary = _read_entries(doc)
    nodes = _read_nodes(doc, dictionary)
    logger.debug("decoded index with %d nodes", len(nodes))
    return BKTree(dictionary, nodes)


# validation helpers ------------------------------------------------------------
def _read_entries(doc: Any) -> Dictionary:
    if not isinstance(doc, dict) or not isinstance(doc.get("entries"), list):
        raise CorruptIndex("missing entries table")
    entries: List[Entry] = []
    for raw in doc["entries"]:
        if (
            not isinstance(raw, list)
            or len(raw) != 2
            or not all(isinstance(s, str) for s in raw)
        ):
            raise CorruptIndex(f"malformed entry: {raw!r}")
        entries.append(Entry(raw[0], raw[1]))
    return Dictionary(entries)


def _is_int(x: Any) -> bool:
    return isinstance(x, int) and not isinstance(x, bool)


def _read_nodes(doc: dict, dictionary: Dictionary) -> List[BKTree.Node]:
    raw_nodes = doc.get("nodes")
    if not isinstance(raw_nodes, list):
        raise CorruptIndex("missing node table")
    if len(raw_nodes) != len(dictionary):
        raise CorruptIndex(
            f"node count {len(raw_nodes)} does not match entry count {len(dictionary)}"
        )

    nodes: List[BKTree.Node] = []
    for raw in raw_nodes:
        if not isinstance(raw, list) or len(raw) != 2 or not isinstance(raw[1], list):
            raise CorruptIndex(f"malformed node: {raw!r}")
        pos, children = raw
        if not _is_int(pos) or not 0 <= pos < len(dictionary):
            raise CorruptIndex(f"node entry out of range: {pos!r}")
        node = BKTree.Node(pos)
        for edge in children:
            if (
                not isinstance(edge, list)
                or len(edge) != 2
                or not all(_is_int(x) for x in edge)
            ):
                raise CorruptIndex(f"malformed edge: {edge!r}")
            dist, child = edge
            if dist < 0 or dist in node.children:
                raise CorruptIndex(f"bad edge distance: {dist!r}")
            if not 0 < child < len(raw_nodes):
                raise CorruptIndex(f"edge target out of range: {child!r}")
            node.children[dist] = child
        nodes.append(node)

    _check_tree(nodes, dictionary)
    return nodes


def _check_tree(nodes: List[BKTree.Node], dictionary: Dictionary) -> None:
    """Every node reachable exactly once from the root, every entry used once,
    and every node at the recorded distance from each of its ancestors."""
    if not nodes:
        return

    seen = [False] * len(nodes)
    used = [False] * len(dictionary)
    # (position, ((ancestor name, key taken below that ancestor), ...))
    stack = [(0, ())]
    seen[0] = True
    while stack:
        pos, path = stack.pop()
        node = nodes[pos]
        if used[node.entry]:
            raise CorruptIndex(f"entry {node.entry} stored twice")
        used[node.entry] = True
        name = dictionary[node.entry].name
        for ancestor, key in path:
            if levenshtein(ancestor, name) != key:
                raise CorruptIndex(f"edge distance {key} inconsistent at node {pos}")
        for dist, child in node.children.items():
            if seen[child]:
                raise CorruptIndex(f"node {child} reachable twice")
            seen[child] = True
            stack.append((child, path + ((name, dist),)))
    if not all(seen):
        raise CorruptIndex("unreachable nodes in tree")
