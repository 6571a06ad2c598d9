# bktree.py
# BK-tree for approximate/fuzzy lookup of dictionary entries by name.
# Build once from a Dictionary, then query:
# - find_exact(name): walk the single path of matching distances
# - find_within(name, tolerance): all entries within an edit distance
# Nodes live in a flat arena (list) and refer to each other by position,
# which keeps the tree trivially serializable (see codec.py).
# Query uses an explicit stack (no recursion) and prunes using the
# triangle property of edit distance.

from __future__ import annotations

import logging
from typing import Dict, Iterable, List, Optional, Tuple, Union

from .pair import Dictionary, Entry

logger = logging.getLogger(__name__)

Hit = Tuple[int, Entry]  # (distance, entry)


def levenshtein(a: str, b: str) -> int:
    """Classic Levenshtein distance over code points (ins/del/sub cost 1)."""
    if a == b:
        return 0

    # ensure a is the longer string, the row is sized by the shorter one
    if len(a) < len(b):
        a, b = b, a
    if not b:
        return len(a)

    prev = list(range(len(b) + 1))
    for i, ca in enumerate(a, 1):
        curr = [i]
        for j, cb in enumerate(b, 1):
            ins = curr[j - 1] + 1
            delete = prev[j] + 1
            replace = prev[j - 1] + (0 if ca == cb else 1)
            val = ins if ins < delete else delete
            if replace < val:
                val = replace
            curr.append(val)
        prev = curr
    return prev[-1]


def levenshtein_with_cutoff(a: str, b: str, max_dist: int) -> int:
    """
    Levenshtein distance with early exit once the distance must exceed max_dist.
    Returns the exact distance when it is <= max_dist, otherwise max_dist + 1.
    Only valid for a yes/no "within tolerance" test, never for tree keys:
    scan_within compares every entry directly against the query, so a capped
    value can only ever reject an entry that is out of range anyway. Tree keys
    and pruning need the exact distance.
    """
    if a == b:
        return 0
    if len(a) < len(b):
        a, b = b, a
    la, lb = len(a), len(b)

    # length difference alone already exceeds the budget
    if la - lb > max_dist:
        return max_dist + 1

    prev = list(range(lb + 1))
    for i in range(1, la + 1):
        ca = a[i - 1]
        curr = [i]
        row_min = i
        for j in range(1, lb + 1):
            ins = curr[j - 1] + 1
            delete = prev[j] + 1
            replace = prev[j - 1] + (0 if ca == b[j - 1] else 1)
            val = ins if ins < delete else delete
            if replace < val:
                val = replace
            curr.append(val)
            if val < row_min:
                row_min = val
        # every later row is >= this row's minimum
        if row_min > max_dist:
            return max_dist + 1
        prev = curr
    return prev[-1] if prev[-1] <= max_dist else max_dist + 1


def scan_within(entries: Iterable[Entry], name: str, tolerance: int) -> List[Hit]:
    """Brute-force reference: compare `name` against every entry."""
    if tolerance < 0:
        return []
    out: List[Hit] = []
    for e in entries:
        d = levenshtein_with_cutoff(name, e.name, tolerance)
        if d <= tolerance:
            out.append((d, e))
    return out


class BKTree:
    """
    BK-tree over a Dictionary, read-only after build.

    Invariant: for node N with child C stored under key d,
    levenshtein(N.name, C.name) == d.
    """

    class Node:
        __slots__ = ("entry", "children")

        def __init__(self, entry: int):
            self.entry = entry  # position in the dictionary
            self.children: Dict[int, int] = {}  # distance -> arena position

    def __init__(self, dictionary: Dictionary, nodes: List["BKTree.Node"]):
        # prefer BKTree.build(); this constructor trusts its arguments
        self._dict = dictionary
        self._nodes = nodes

    # building -------------------------------------------------------------------
    @classmethod
    def build(cls, entries: Union[Dictionary, Iterable[Entry]]) -> "BKTree":
        """Insert entries one at a time, in the given (dictionary) order."""
        dictionary = entries if isinstance(entries, Dictionary) else Dictionary(entries)
        nodes: List[BKTree.Node] = []
        for pos, entry in enumerate(dictionary):
            cls._insert(dictionary, nodes, pos, entry.name)
        logger.debug("built BK-tree with %d nodes", len(nodes))
        return cls(dictionary, nodes)

    @staticmethod
    def _insert(dictionary: Dictionary, nodes: List["BKTree.Node"], pos: int, name: str) -> None:
        if not nodes:
            nodes.append(BKTree.Node(pos))
            return

        node = nodes[0]
        while True:
            # duplicates (d == 0) hang under key 0 so nothing is dropped
            d = levenshtein(name, dictionary[node.entry].name)
            child = node.children.get(d)
            if child is None:
                node.children[d] = len(nodes)
                nodes.append(BKTree.Node(pos))
                return
            node = nodes[child]

    # queries ----------------------------------------------------------------------
    def find_exact(self, name: str) -> Optional[Entry]:
        """Entry whose name equals `name` (first inserted wins), or None."""
        if not self._nodes:
            return None

        node = self._nodes[0]
        while True:
            entry = self._dict[node.entry]
            d = levenshtein(name, entry.name)
            if d == 0:
                return entry
            child = node.children.get(d)
            if child is None:
                return None
            node = self._nodes[child]

    def find_within(self, name: str, tolerance: int) -> List[Hit]:
        """
        Return (distance, entry) for every entry within `tolerance` of `name`.
        Same result set as scan_within() over the whole dictionary; results
        come back in dictionary order.
        """
        if not self._nodes or tolerance < 0:
            return []

        found: List[Tuple[int, int]] = []  # (dictionary position, distance)
        stack = [0]
        while stack:
            node = self._nodes[stack.pop()]
            # exact distance: pruning needs it even when d > tolerance
            d = levenshtein(name, self._dict[node.entry].name)
            if d <= tolerance:
                found.append((node.entry, d))

            # only keys in [d - tolerance, d + tolerance] can hold matches
            low = d - tolerance
            high = d + tolerance
            for key, child in node.children.items():
                if low <= key <= high:
                    stack.append(child)

        found.sort()
        return [(d, self._dict[pos]) for pos, d in found]

    # utilities ---------------------------------------------------------------------
    @property
    def dictionary(self) -> Dictionary:
        return self._dict

    @property
    def entries(self) -> Tuple[Entry, ...]:
        """All entries, in dictionary order."""
        return tuple(self._dict)

    def nodes(self) -> List[Tuple[int, Dict[int, int]]]:
        """Flat arena dump: (dictionary position, {distance: arena position})."""
        return [(n.entry, dict(n.children)) for n in self._nodes]

    def depth(self) -> int:
        """Longest root-to-leaf path, counted in nodes."""
        if not self._nodes:
            return 0
        best = 0
        stack = [(0, 1)]
        while stack:
            idx, level = stack.pop()
            best = max(best, level)
            for child in self._nodes[idx].children.values():
                stack.append((child, level + 1))
        return best

    def __len__(self) -> int:
        return len(self._nodes)

    def __contains__(self, name: object) -> bool:
        return isinstance(name, str) and self.find_exact(name) is not None

    def __repr__(self) -> str:
        return f"BKTree({len(self._nodes)} entries, depth={self.depth()})"
