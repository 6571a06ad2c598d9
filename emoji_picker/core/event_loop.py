# emoji_picker/core/event_loop.py
"""
Event loop for one interactive run, and the small Protocols it depends on.

The loop never reads a terminal itself. A presenter supplies:
  - an EventSource: blocks for at most `timeout` seconds and returns either a
    session Command or a Tick (nothing happened, redraw if you like)
  - a Presenter: shows the session after every transition

so the whole run can be driven by a scripted list of events in tests.
"""

from __future__ import annotations

import logging
from collections import deque
from dataclasses import dataclass
from typing import Iterable, List, Optional, Protocol, Union, runtime_checkable

from .session import (
    Cancel,
    Cancelled,
    Command,
    Commit,
    DeleteBack,
    InsertChar,
    MoveDown,
    MoveLeft,
    MoveRight,
    MoveUp,
    Outcome,
    SearchSession,
)

logger = logging.getLogger(__name__)

DEFAULT_TICK_RATE = 0.25  # seconds


@dataclass(frozen=True)
class Tick:
    """No input arrived before the timeout."""


InputEvent = Union[Command, Tick]


# Protocols ------------------------------------------------------------------

@runtime_checkable
class EventSource(Protocol):
    def next_event(self, timeout: float) -> Optional[InputEvent]:
        """
        Return the next input event, a Tick when `timeout` passes without
        input, or None when the source is exhausted (closed).
        """
        ...


@runtime_checkable
class Presenter(Protocol):
    def show(self, session: SearchSession) -> None:
        ...


# Implementations -----------------------------------------------------------

class ScriptedEventSource:
    """Replays a fixed list of events, then reports exhaustion."""

    def __init__(self, events: Iterable[InputEvent]):
        self._events = deque(events)

    def next_event(self, timeout: float) -> Optional[InputEvent]:
        if not self._events:
            return None
        return self._events.popleft()

    def remaining(self) -> int:
        return len(self._events)


class NullPresenter:
    """Renders nothing; keeps the last session it was shown."""

    def __init__(self) -> None:
        self.last: Optional[SearchSession] = None
        self.frames = 0

    def show(self, session: SearchSession) -> None:
        self.last = session
        self.frames += 1


class SessionDriver:
    """
    Owns the current session for presenters that push commands one at a time
    (e.g. the textual app reacting to key presses).
    """

    def __init__(self, session: SearchSession):
        self.session = session
        self.outcome: Optional[Outcome] = None

    @property
    def finished(self) -> bool:
        return self.outcome is not None

    def feed(self, command: Command) -> Optional[Outcome]:
        if self.outcome is not None:
            return self.outcome
        self.session, event = self.session.apply(command)
        if event is not None:
            logger.debug("session finished: %r", event)
            self.outcome = event
        return event


_KEY_NAMES = {
    "up": MoveUp(),
    "down": MoveDown(),
    "left": MoveLeft(),
    "right": MoveRight(),
    "bs": DeleteBack(),
    "backspace": DeleteBack(),
    "enter": Commit(),
    "esc": Cancel(),
    "cancel": Cancel(),
    "tick": Tick(),
}


def parse_keys(script: str) -> List[InputEvent]:
    """
    Turn a key script into events, e.g. "crab<down><enter>".
    Named keys go in angle brackets; any other text (including an unknown
    "<...>") is typed character by character.
    """
    events: List[InputEvent] = []
    i = 0
    while i < len(script):
        if script[i] == "<":
            end = script.find(">", i + 1)
            if end != -1 and script[i + 1 : end].lower() in _KEY_NAMES:
                events.append(_KEY_NAMES[script[i + 1 : end].lower()])
                i = end + 1
                continue
        events.append(InsertChar(script[i]))
        i += 1
    return events


def run_session(
    session: SearchSession,
    source: EventSource,
    presenter: Presenter,
    tick_rate: float = DEFAULT_TICK_RATE,
) -> Outcome:
    """
    Pull events until the session emits Selected or Cancelled.
    Ticks only cause a redraw. An exhausted source counts as Cancelled.
    """
    driver = SessionDriver(session)
    presenter.show(driver.session)
    while True:
        event = source.next_event(tick_rate)
        if event is None:
            logger.debug("event source closed, cancelling run")
            return Cancelled()
        if isinstance(event, Tick):
            presenter.show(driver.session)
            continue
        outcome = driver.feed(event)
        presenter.show(driver.session)
        if outcome is not None:
            return outcome
