"""Invariant checks shared across buffer operations."""

from __future__ import annotations

from typing import Sequence

from .state import Position
from .sync import BufferInvariantError


def ensure_lines(lines: Sequence[str]) -> Sequence[str]:
    if not lines:
        raise BufferInvariantError("Buffer has no lines")
    return lines


def ensure_cursor(lines: Sequence[str], cursor: Position) -> Position:
    row, col = cursor
    if row < 0 or row >= len(lines):
        raise BufferInvariantError(
            f"Row {row} out of range for {len(lines)} lines", cursor=cursor
        )
    line = lines[row]
    if col < 0 or col > len(line):
        raise BufferInvariantError(
            f"Column {col} out of range for line of {len(line)} chars", cursor=cursor
        )
    return cursor
