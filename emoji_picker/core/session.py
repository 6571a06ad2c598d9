# session.py
# Incremental-search state machine: type to narrow, arrow to browse,
# enter to commit.
#
# A SearchSession is immutable. apply(command) returns the next session and,
# for Commit/Cancel, an output event telling the caller the run is over.
# No command raises; out-of-range moves clamp or do nothing.

from __future__ import annotations

from dataclasses import dataclass, field, replace
from typing import Optional, Tuple, Union

from .bktree import BKTree
from .pair import Entry
from .ranker import DEFAULT_CAP, Ranker

DEFAULT_TOLERANCE = 5


# modes -----------------------------------------------------------------------
@dataclass(frozen=True)
class Editing:
    """Typing a query."""


@dataclass(frozen=True)
class Browsing:
    """Cycling through suggestions; `selected` indexes the suggestion list."""

    selected: int = 0


Mode = Union[Editing, Browsing]


# commands ----------------------------------------------------------------------
@dataclass(frozen=True)
class InsertChar:
    char: str


@dataclass(frozen=True)
class DeleteBack:
    pass


@dataclass(frozen=True)
class MoveUp:
    pass


@dataclass(frozen=True)
class MoveDown:
    pass


@dataclass(frozen=True)
class MoveLeft:
    pass


@dataclass(frozen=True)
class MoveRight:
    pass


@dataclass(frozen=True)
class Commit:
    pass


@dataclass(frozen=True)
class Cancel:
    pass


Command = Union[InsertChar, DeleteBack, MoveUp, MoveDown, MoveLeft, MoveRight, Commit, Cancel]


# output events -------------------------------------------------------------------
@dataclass(frozen=True)
class Selected:
    entry: Entry


@dataclass(frozen=True)
class Cancelled:
    pass


Outcome = Union[Selected, Cancelled]


@dataclass(frozen=True)
class SearchSession:
    """
    State for one interactive run.

    index and ranker are shared, read-only collaborators; everything else is
    the per-run state the presenter renders after every transition.
    """

    index: BKTree = field(repr=False, compare=False)
    ranker: Ranker = field(default_factory=Ranker, repr=False, compare=False)
    tolerance: int = DEFAULT_TOLERANCE
    query: str = ""
    cursor: int = 0
    mode: Mode = field(default_factory=Editing)
    suggestions: Tuple[Entry, ...] = ()

    @classmethod
    def start(
        cls,
        index: BKTree,
        tolerance: int = DEFAULT_TOLERANCE,
        cap: int = DEFAULT_CAP,
        prefix_filter: bool = False,
    ) -> "SearchSession":
        return cls(index=index, ranker=Ranker(cap, prefix_filter), tolerance=tolerance)

    # read helpers ----------------------------------------------------------------
    @property
    def selected(self) -> Optional[int]:
        return self.mode.selected if isinstance(self.mode, Browsing) else None

    @property
    def browsing(self) -> bool:
        return isinstance(self.mode, Browsing)

    def current(self) -> Optional[Entry]:
        """Suggestion under the selection, if browsing."""
        if isinstance(self.mode, Browsing):
            return self.suggestions[self.mode.selected]
        return None

    # transitions -------------------------------------------------------------------
    def apply(self, command: Command) -> Tuple["SearchSession", Optional[Outcome]]:
        if isinstance(command, InsertChar):
            return self._insert(command.char), None
        if isinstance(command, DeleteBack):
            return self._delete_back(), None
        if isinstance(command, MoveDown):
            return self._move_down(), None
        if isinstance(command, MoveUp):
            return self._move_up(), None
        if isinstance(command, MoveLeft):
            return replace(self, cursor=max(0, self.cursor - 1)), None
        if isinstance(command, MoveRight):
            return replace(self, cursor=min(len(self.query), self.cursor + 1)), None
        if isinstance(command, Commit):
            if isinstance(self.mode, Browsing):
                return self, Selected(self.suggestions[self.mode.selected])
            return self, None  # enter while typing does not submit
        if isinstance(command, Cancel):
            return self, Cancelled()
        return self, None

    def _search(self, query: str) -> Tuple[Entry, ...]:
        hits = self.index.find_within(query, self.tolerance)
        return tuple(self.ranker.rank(hits, query))

    def _insert(self, char: str) -> "SearchSession":
        if not char:
            return self
        query = self.query[: self.cursor] + char + self.query[self.cursor :]
        return replace(
            self,
            query=query,
            cursor=self.cursor + len(char),
            mode=Editing(),
            suggestions=self._search(query),
        )

    def _delete_back(self) -> "SearchSession":
        if self.cursor == 0:
            return self
        query = self.query[: self.cursor - 1] + self.query[self.cursor :]
        suggestions = self._search(query) if query else ()
        return replace(
            self,
            query=query,
            cursor=self.cursor - 1,
            mode=Editing(),
            suggestions=suggestions,
        )

    def _move_down(self) -> "SearchSession":
        if isinstance(self.mode, Browsing):
            last = len(self.suggestions) - 1
            return replace(self, mode=Browsing(min(self.mode.selected + 1, last)))
        if self.suggestions:
            return replace(self, mode=Browsing(0))
        return self

    def _move_up(self) -> "SearchSession":
        if isinstance(self.mode, Browsing) and self.mode.selected > 0:
            return replace(self, mode=Browsing(self.mode.selected - 1))
        return self
