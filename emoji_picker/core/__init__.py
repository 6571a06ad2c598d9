"""
emoji_picker.core

The search engine behind the picker.
Contains:
 - the entry/dictionary data model (Entry, Dictionary)
 - the BK-tree index with exact and bounded fuzzy lookup (BKTree)
 - distance ranking of index hits (rank, Ranker)
 - binary persistence of the index (encode, decode)
 - the incremental-search state machine (SearchSession) and its event loop
"""

from .pair import Dictionary, Entry
from .bktree import BKTree, levenshtein
from .ranker import Ranker, rank
from .codec import decode, encode
from .errors import (
    ClipboardWriteFailed,
    CorruptIndex,
    EmojiPickerError,
    EntryNotFound,
    IndexLoadFailed,
    TerminalInitFailed,
)
from .session import SearchSession


def lookup_exact(index: BKTree, name: str) -> Entry:
    """Direct (non-interactive) lookup; raises EntryNotFound on a miss."""
    entry = index.find_exact(name)
    if entry is None:
        raise EntryNotFound(name)
    return entry


__all__ = [
    "Entry",
    "Dictionary",
    "BKTree",
    "levenshtein",
    "Ranker",
    "rank",
    "encode",
    "decode",
    "SearchSession",
    "lookup_exact",
    "EmojiPickerError",
    "IndexLoadFailed",
    "CorruptIndex",
    "EntryNotFound",
    "ClipboardWriteFailed",
    "TerminalInitFailed",
]
