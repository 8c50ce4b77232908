"""Stateless cursor motion resolver."""

from __future__ import annotations

import string
from enum import Enum
from typing import Optional, Sequence

from .state import Position
from .viewport import Viewport

_PUNCTUATION = frozenset(string.punctuation)


class CharKind(Enum):
    SPACE = "space"
    PUNCT = "punct"
    OTHER = "other"

    @classmethod
    def of(cls, char: str) -> "CharKind":
        if char.isspace():
            return cls.SPACE
        if char in _PUNCTUATION:
            return cls.PUNCT
        return cls.OTHER


def find_word_start_forward(line: str, start_col: int) -> Optional[int]:
    """Column of the next word start after ``start_col``, if the line has one.

    A word starts wherever the character class changes into a non-space
    class, so ``fn foo(a)`` holds the words ``fn``, ``foo``, ``(``, ``a``, ``)``.
    """

    rest = line[start_col:]
    if not rest:
        return None
    prev = CharKind.of(rest[0])
    for col, char in enumerate(rest[1:], start=start_col + 1):
        cur = CharKind.of(char)
        if cur is not CharKind.SPACE and cur is not prev:
            return col
        prev = cur
    return None


def find_word_start_backward(line: str, start_col: int) -> Optional[int]:
    start_col = min(start_col, len(line))
    before = line[:start_col][::-1]
    if not before:
        return None
    cur = CharKind.of(before[0])
    for i, char in enumerate(before[1:], start=1):
        nxt = CharKind.of(char)
        if cur is not CharKind.SPACE and nxt is not cur:
            return start_col - i
        cur = nxt
    return 0 if cur is not CharKind.SPACE else None


def _clamp(value: int, low: int, high: int) -> int:
    return max(low, min(value, high))


class CursorMove(str, Enum):
    """How to move the cursor; see ``next_cursor`` for the exact rules."""

    FORWARD = "forward"
    BACK = "back"
    UP = "up"
    DOWN = "down"
    HEAD = "head"
    END = "end"
    WORD_FORWARD = "word_forward"
    WORD_BACK = "word_back"
    IN_VIEWPORT = "in_viewport"

    def next_cursor(
        self,
        cursor: Position,
        lines: Sequence[str],
        viewport: Viewport,
    ) -> Optional[Position]:
        """Return the target position, or ``None`` when no move is possible."""

        row, col = cursor
        line = lines[row]

        if self is CursorMove.FORWARD:
            if col >= len(line):
                return (row + 1, 0) if row + 1 < len(lines) else None
            return (row, col + 1)

        if self is CursorMove.BACK:
            if col == 0:
                if row == 0:
                    return None
                return (row - 1, len(lines[row - 1]))
            return (row, col - 1)

        if self is CursorMove.UP:
            if row == 0:
                return None
            return (row - 1, min(col, len(lines[row - 1])))

        if self is CursorMove.DOWN:
            if row + 1 >= len(lines):
                return None
            return (row + 1, min(col, len(lines[row + 1])))

        if self is CursorMove.HEAD:
            return (row, 0)

        if self is CursorMove.END:
            return (row, len(line))

        if self is CursorMove.WORD_FORWARD:
            target = find_word_start_forward(line, col)
            if target is not None:
                return (row, target)
            if row + 1 < len(lines):
                return (row + 1, 0)
            return (row, len(line))

        if self is CursorMove.WORD_BACK:
            target = find_word_start_backward(line, col)
            if target is not None:
                return (row, target)
            if row > 0:
                return (row - 1, len(lines[row - 1]))
            return (row, 0)

        top_row, top_col, bottom_row, bottom_col = viewport.position()
        row = min(_clamp(row, top_row, bottom_row), len(lines) - 1)
        col = min(_clamp(col, top_col, bottom_col), len(lines[row]))
        return (row, col)


__all__ = [
    "CharKind",
    "CursorMove",
    "find_word_start_backward",
    "find_word_start_forward",
]
