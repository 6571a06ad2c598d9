# emoji_picker/core/ranker.py
"""
Ranker - turns raw index hits into the short suggestion list shown to the user.

Design goals:
 - Pure edit-distance ranking: smaller distance first.
 - Deterministic tie-breaking: entries tied on distance keep the order they
   arrived in (find_within returns dictionary order), via a stable sort.
 - Size cap (topn) applied last.
 - Optional prefix filter. Off by default; callers opt in explicitly.
"""

from __future__ import annotations

import logging
from typing import Iterable, List, Optional, Sequence, Tuple

from .pair import Entry

logger = logging.getLogger(__name__)

Hit = Tuple[int, Entry]

DEFAULT_CAP = 5


def rank(hits: Iterable[Hit], cap: int = DEFAULT_CAP, prefix: Optional[str] = None) -> List[Entry]:
    """
    Sort hits ascending by distance (stable), optionally keep only names that
    start with `prefix`, and truncate to `cap` entries.
    """
    if cap <= 0:
        return []

    ordered = sorted(hits, key=lambda hit: hit[0])
    if prefix is not None:
        ordered = [hit for hit in ordered if hit[1].name.startswith(prefix)]
    return [entry for _dist, entry in ordered[:cap]]


class Ranker:
    """
    Holds the ranking knobs for a session so they travel together.

      Ranker(cap=5).rank(hits)                 -> pure edit distance
      Ranker(cap=5, prefix_filter=True).rank(hits, query)
    """

    def __init__(self, cap: int = DEFAULT_CAP, prefix_filter: bool = False):
        self.cap = cap
        self.prefix_filter = prefix_filter

    def rank(self, hits: Sequence[Hit], query: str = "") -> List[Entry]:
        out = rank(hits, self.cap, prefix=query if self.prefix_filter else None)
        logger.debug("ranked %d hits -> %d suggestions for %r", len(hits), len(out), query)
        return out

    def __repr__(self) -> str:
        return f"Ranker(cap={self.cap}, prefix_filter={self.prefix_filter})"
