"""emoji_picker - find an emoji by (approximate) name and copy it to the clipboard."""

__version__ = "0.1.0"
