"""Terminal display width of characters and strings."""

from __future__ import annotations

from wcwidth import wcwidth


def char_width(char: str) -> int:
    """Columns a character occupies; control and non-printable characters take none."""

    width = wcwidth(char)
    return width if width > 0 else 0


def text_width(text: str) -> int:
    return sum(char_width(char) for char in text)


__all__ = ["char_width", "text_width"]
