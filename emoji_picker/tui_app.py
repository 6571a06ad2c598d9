# tui_app.py - Emoji Picker TUI Application
# -------------------------------------------------------
# Text based terminal UI around one SearchSession.
# Features:
#  - Live suggestions as you type (up to 5)
#  - Up/Down to browse suggestions, Enter to pick
#  - Left/Right to move the cursor inside the query
#  - Esc / Ctrl+C to cancel
# The app only translates keys into session commands and draws whatever
# state the session is in afterwards; all search logic lives in core/.
# -------------------------------------------------------

from __future__ import annotations

from typing import Optional

from rich.text import Text
from textual import events
from textual.app import App, ComposeResult
from textual.binding import Binding
from textual.containers import Vertical
from textual.widgets import Static

from emoji_picker.core.event_loop import DEFAULT_TICK_RATE, SessionDriver
from emoji_picker.core.session import (
    Cancel,
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

SEARCH_PROMPT = "Search for an emoji"
EDIT_HINT = "⬆️  ⬇️  [Up / Down Arrows]: Select emoji"
BROWSE_HINT = "↩️   [Enter / Return Key]: Copy emoji to clipboard"


class QueryBar(Static):
    """Top box: the typed query with the cursor shown while editing."""

    def update_query(self, session: SearchSession):
        text = Text(session.query, style="yellow" if not session.browsing else "")
        if not session.browsing:
            # reverse-video cell under the cursor (a blank one at the end)
            if session.cursor < len(session.query):
                text.stylize("reverse", session.cursor, session.cursor + 1)
            else:
                text.append(" ", style="reverse")
        self.update(text)


class SuggestionPanel(Static):
    """
    Bottom box: up to 5 suggestions, aligned "name    value" rows.
    The selected row gets a "> " marker and bold style.
    """

    def update_suggestions(self, session: SearchSession):
        if not session.suggestions:
            self.update(Text("No suggestions", style="dim"))
            return

        selected = session.selected
        lines = Text()
        for i, entry in enumerate(session.suggestions):
            if i:
                lines.append("\n")
            if i == selected:
                lines.append(f"> {i + 1}. {entry.display()}", style="bold yellow")
            else:
                lines.append(f"  {i + 1}. {entry.display()}")
        self.update(lines)


# Main Application -----------------------------------------------------------------
class PickerApp(App[Outcome]):
    """
    Architecture:
     - key press -> session command
     - SessionDriver applies it -> new session (+ maybe an outcome)
     - show(session) redraws the widgets
     - an outcome (Selected/Cancelled) exits the app with that value
    """

    CSS = """
    #query { border: round $accent; height: 3; padding: 0 1; }
    #suggestions { border: round $secondary; height: auto; min-height: 3; padding: 0 1; }
    """

    # priority bindings run before any widget sees the key
    BINDINGS = [
        Binding("up", "command('up')", "Up", show=False, priority=True),
        Binding("down", "command('down')", "Down", show=False, priority=True),
        Binding("left", "command('left')", "Left", show=False, priority=True),
        Binding("right", "command('right')", "Right", show=False, priority=True),
        Binding("backspace", "command('backspace')", "Delete", show=False, priority=True),
        Binding("enter", "command('enter')", "Pick", show=False, priority=True),
        Binding("escape", "command('cancel')", "Cancel", show=False, priority=True),
        Binding("ctrl+c", "command('cancel')", "Cancel", show=False, priority=True),
    ]

    KEY_COMMANDS = {
        "up": MoveUp(),
        "down": MoveDown(),
        "left": MoveLeft(),
        "right": MoveRight(),
        "backspace": DeleteBack(),
        "enter": Commit(),
        "cancel": Cancel(),
    }

    def __init__(self, session: SearchSession, tick_rate: float = DEFAULT_TICK_RATE):
        super().__init__()
        self.session_driver = SessionDriver(session)
        self.tick_rate = tick_rate
        self.ticks = 0

    # UI --------------------------------------------------------------------
    def compose(self) -> ComposeResult:
        with Vertical():
            yield QueryBar(id="query")
            yield SuggestionPanel(id="suggestions")

    def on_mount(self) -> None:
        self.query_one(QueryBar).border_title = SEARCH_PROMPT
        self.show(self.session_driver.session)
        # periodic redraw only; never advances the session
        self.set_interval(self.tick_rate, self._on_tick)

    def _on_tick(self) -> None:
        self.ticks += 1
        self.show(self.session_driver.session)

    def show(self, session: SearchSession) -> None:
        """Presenter hook: draw `session`."""
        self.query_one(QueryBar).update_query(session)
        panel = self.query_one(SuggestionPanel)
        panel.update_suggestions(session)
        panel.border_subtitle = BROWSE_HINT if session.browsing else EDIT_HINT

    # Input -----------------------------------------------------------------------
    def action_command(self, name: str) -> None:
        self.feed(self.KEY_COMMANDS[name])

    async def on_key(self, event: events.Key) -> None:
        if event.is_printable and event.character:
            event.stop()
            self.feed(InsertChar(event.character))

    def feed(self, command: Command) -> Optional[Outcome]:
        outcome = self.session_driver.feed(command)
        if outcome is not None:
            self.exit(outcome)
            return outcome
        self.show(self.session_driver.session)
        return None
