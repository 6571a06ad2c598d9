# pair.py
# Entry (name -> value) and the immutable Dictionary the index is built from.

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Iterator, Sequence, Tuple, Union, overload

# width of the name column when an entry is displayed
NAME_COLUMN = 20


@dataclass(frozen=True)
class Entry:
    """One (name, value) pair, e.g. ("crab", "🦀")."""

    name: str
    value: str

    def display(self) -> str:
        """Name left-aligned in a fixed column, then the value, so values line up."""
        pad = max(0, NAME_COLUMN - len(self.name))
        return f"{self.name}{' ' * pad}{self.value}"

    def __str__(self) -> str:
        return self.display()


class Dictionary(Sequence[Entry]):
    """
    Immutable ordered collection of entries.
    The position of an entry is its dictionary order, which the ranker
    uses to break distance ties.
    """

    __slots__ = ("_entries",)

    def __init__(self, entries: Iterable[Union[Entry, Tuple[str, str]]] = ()):
        self._entries: Tuple[Entry, ...] = tuple(
            e if isinstance(e, Entry) else Entry(str(e[0]), str(e[1])) for e in entries
        )

    @classmethod
    def from_pairs(cls, pairs: Iterable[Tuple[str, str]]) -> "Dictionary":
        return cls(Entry(name, value) for name, value in pairs)

    @overload
    def __getitem__(self, i: int) -> Entry: ...

    @overload
    def __getitem__(self, i: slice) -> Tuple[Entry, ...]: ...

    def __getitem__(self, i):
        return self._entries[i]

    def __len__(self) -> int:
        return len(self._entries)

    def __iter__(self) -> Iterator[Entry]:
        return iter(self._entries)

    def __eq__(self, other: object) -> bool:
        if isinstance(other, Dictionary):
            return self._entries == other._entries
        return NotImplemented

    def __hash__(self) -> int:
        return hash(self._entries)

    def __repr__(self) -> str:
        return f"Dictionary({len(self._entries)} entries)"

    def pairs(self) -> Tuple[Tuple[str, str], ...]:
        return tuple((e.name, e.value) for e in self._entries)
