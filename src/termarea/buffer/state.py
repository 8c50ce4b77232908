"""Cursor, selection anchor, and position helpers for text buffers."""

from __future__ import annotations

from dataclasses import dataclass
from typing import NamedTuple, Optional, Sequence, Tuple

Position = Tuple[int, int]  # (row, column), 0-based, character-indexed
SelectionRange = Tuple[Position, Position]


class Pos(NamedTuple):
    """Position plus the index into its line, resolved once per operation."""

    row: int
    col: int
    offset: int

    @property
    def position(self) -> Position:
        return (self.row, self.col)


def char_offset(line: str, col: int) -> int:
    """Index of the ``col``-th character of ``line``, or its length past the end."""

    return min(col, len(line))


def resolve_pos(lines: Sequence[str], row: int, col: int) -> Pos:
    line = lines[row] if row < len(lines) else lines[-1]
    return Pos(row, col, char_offset(line, col))


@dataclass(slots=True)
class BufferState:
    """Mutable cursor plus the optional selection anchor.

    The active selection is the ordered pair of anchor and cursor. An anchor
    that coincides with the cursor is set but selects nothing.
    """

    cursor: Position = (0, 0)
    anchor: Optional[Position] = None

    def set_cursor(self, row: int, col: int) -> None:
        self.cursor = (row, col)

    def start_selection(self) -> None:
        self.anchor = self.cursor

    def cancel_selection(self) -> None:
        self.anchor = None

    @property
    def selecting(self) -> bool:
        return self.anchor is not None

    def selection_positions(self, lines: Sequence[str]) -> Optional[Tuple[Pos, Pos]]:
        if self.anchor is None:
            return None
        start = resolve_pos(lines, *self.anchor)
        end = resolve_pos(lines, *self.cursor)
        start_key = (start.row, start.offset)
        end_key = (end.row, end.offset)
        if start_key < end_key:
            return start, end
        if start_key > end_key:
            return end, start
        return None

    def selection_range(self, lines: Sequence[str]) -> Optional[SelectionRange]:
        positions = self.selection_positions(lines)
        if positions is None:
            return None
        start, end = positions
        return start.position, end.position


__all__ = [
    "BufferState",
    "Pos",
    "Position",
    "SelectionRange",
    "char_offset",
    "resolve_pos",
]
