"""
cli.py - command line entry point
Features:
- Direct lookup: `emoji-picker crab` copies the exact match or exits 1
- Interactive search (no query): live fuzzy suggestions in a textual UI
- Headless replay of a key script with --keys (same session, no terminal)
- Uses Rich for messages and the config table
"""

import argparse
import logging
import sys
from typing import List, Optional

from rich import box
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from emoji_picker import __version__
from emoji_picker.core import lookup_exact
from emoji_picker.core.bktree import BKTree
from emoji_picker.core.errors import EmojiPickerError, EntryNotFound, TerminalInitFailed
from emoji_picker.core.event_loop import NullPresenter, ScriptedEventSource, parse_keys, run_session
from emoji_picker.core.pair import Entry
from emoji_picker.core.session import Cancelled, Outcome, SearchSession
from emoji_picker.utils.clipboard import copy_to_clipboard
from emoji_picker.utils.config_manager import Config
from emoji_picker.utils.index_store import default_index
from emoji_picker.utils.logger_utils import setup_logging

logger = logging.getLogger(__name__)

# messages go to stderr so stdout only ever carries a value (--print)
console = Console(stderr=True)

EXIT_OK = 0
EXIT_CANCELLED = 130


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="emoji-picker",
        description="Find an emoji by name and copy it to the clipboard.",
    )
    parser.add_argument("query", nargs="?", help="exact emoji name; omit for interactive search")
    parser.add_argument("--index", metavar="PATH", help="index file to load instead of the packaged one")
    parser.add_argument("--config", metavar="PATH", help="config file (JSON)")
    parser.add_argument("--tolerance", type=int, help="max edit distance for suggestions")
    parser.add_argument("--prefix", action="store_true", help="only suggest names starting with the query")
    parser.add_argument("--keys", metavar="SCRIPT", help='replay keys instead of opening the UI, e.g. "crab<down><enter>"')
    parser.add_argument("--print", dest="print_value", action="store_true", help="print the value instead of copying it")
    parser.add_argument("--show-config", action="store_true", help="show effective configuration and exit")
    parser.add_argument("-v", "--verbose", action="store_true", help="debug logging on stderr")
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    return parser


class CLI:
    """Runs one lookup (direct or interactive) and maps its result to an exit code."""

    def __init__(self, args: argparse.Namespace, cfg: Config):
        self.args = args
        self.cfg = cfg
        # command line beats config file
        if args.index:
            cfg.set("index_path", args.index)
        if args.tolerance is not None:
            cfg.set("tolerance", args.tolerance)
        if args.prefix:
            cfg.set("prefix_filter", True)

    def run(self) -> int:
        if self.args.show_config:
            self._show_config()
            return EXIT_OK
        try:
            index = default_index(self.cfg["index_path"])
            if self.args.query is not None:
                entry = lookup_exact(index, self.args.query)
            else:
                outcome = self._interactive(index)
                if isinstance(outcome, Cancelled):
                    console.print("[dim]Cancelled.[/dim]")
                    return EXIT_CANCELLED
                entry = outcome.entry
            self._deliver(entry)
        except EntryNotFound as e:
            console.print(f"[yellow]No emoji named[/yellow] {escape(repr(e.name))}")
            return e.exit_code
        except EmojiPickerError as e:
            logger.error("%s", e)
            return e.exit_code
        return EXIT_OK

    # INTERACTIVE -----------------------------------------------------------
    def _new_session(self, index: BKTree) -> SearchSession:
        return SearchSession.start(
            index,
            tolerance=self.cfg["tolerance"],
            cap=self.cfg["max_suggestions"],
            prefix_filter=self.cfg["prefix_filter"],
        )

    def _interactive(self, index: BKTree) -> Outcome:
        session = self._new_session(index)
        if self.args.keys is not None:
            presenter = NullPresenter()
            outcome = run_session(
                session,
                ScriptedEventSource(parse_keys(self.args.keys)),
                presenter,
                tick_rate=self.cfg["tick_rate"],
            )
            logger.debug("replayed %d frames", presenter.frames)
            return outcome
        return self._run_tui(session)

    def _run_tui(self, session: SearchSession) -> Outcome:
        if not (sys.stdin.isatty() and sys.stdout.isatty()):
            raise TerminalInitFailed("interactive mode needs a terminal (stdin and stdout)")

        from emoji_picker.tui_app import PickerApp

        app = PickerApp(session, tick_rate=self.cfg["tick_rate"])
        try:
            outcome = app.run()
        except OSError as e:
            raise TerminalInitFailed(f"could not start terminal UI: {e}") from e
        return outcome if outcome is not None else Cancelled()

    # OUTPUT ------------------------------------------------------------------
    def _deliver(self, entry: Entry) -> None:
        if self.args.print_value:
            sys.stdout.write(entry.value + "\n")
            return
        copy_to_clipboard(entry.value)
        console.print(f"[green]Copied[/green] {escape(entry.display())}")

    def _show_config(self) -> None:
        table = Table(title=f"Config ({self.cfg.path})", box=box.SIMPLE)
        table.add_column("Option", style="cyan")
        table.add_column("Value")
        for k, v in self.cfg.data.items():
            table.add_row(k, repr(v))
        console.print(table)


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    cfg = Config(args.config)
    setup_logging(verbose=args.verbose, log_file=cfg["log_file"])
    return CLI(args, cfg).run()


def run() -> None:
    """Console-script entry point."""
    sys.exit(main())


if __name__ == "__main__":
    run()
