# errors.py
# Error kinds surfaced by the picker. Each carries the process exit code the
# CLI uses when the error reaches it.

from __future__ import annotations

from typing import Optional


class EmojiPickerError(Exception):
    """Base class for every error the picker raises on purpose."""

    exit_code = 1


class IndexLoadFailed(EmojiPickerError):
    """Persisted index blob is missing or unreadable."""

    exit_code = 2

    def __init__(self, path: str, reason: Optional[str] = None):
        self.path = path
        self.reason = reason
        msg = f"cannot load index file {path!r}"
        if reason:
            msg += f": {reason}"
        super().__init__(msg)


class CorruptIndex(EmojiPickerError, ValueError):
    """Index blob was read but does not decode into a valid tree."""

    exit_code = 2


class EntryNotFound(EmojiPickerError, LookupError):
    """Exact lookup missed. A normal outcome of the direct path."""

    exit_code = 1

    def __init__(self, name: str):
        self.name = name
        super().__init__(f"no entry named {name!r}")


class ClipboardWriteFailed(EmojiPickerError):
    """Clipboard collaborator could not store the value."""

    exit_code = 3


class TerminalInitFailed(EmojiPickerError):
    """Presenter could not enter interactive mode."""

    exit_code = 4
