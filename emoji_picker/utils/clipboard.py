# clipboard.py - best-effort write of the chosen value to the system clipboard

import logging

import pyperclip

from emoji_picker.core.errors import ClipboardWriteFailed

logger = logging.getLogger(__name__)


def copy_to_clipboard(value: str) -> None:
    """Store `value` on the clipboard or raise ClipboardWriteFailed."""
    try:
        pyperclip.copy(value)
    except pyperclip.PyperclipException as e:
        raise ClipboardWriteFailed(f"could not copy {value!r} to clipboard: {e}") from e
    logger.debug("copied %r to clipboard", value)
