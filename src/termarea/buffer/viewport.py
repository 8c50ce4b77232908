"""Visible cell rectangle and scroll requests."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Tuple, Union

Rect = Tuple[int, int, int, int]


@dataclass(slots=True)
class Viewport:
    """Top-left corner plus size of the area last rendered, in character cells."""

    row: int = 0
    col: int = 0
    width: int = 0
    height: int = 0

    def position(self) -> Rect:
        """Return ``(top_row, top_col, bottom_row, bottom_col)``, bounds inclusive."""

        row_bottom = max(self.row, self.row + self.height - 1)
        col_bottom = max(self.col, self.col + self.width - 1)
        return (self.row, self.col, row_bottom, col_bottom)

    def rect(self) -> Rect:
        return (self.row, self.col, self.width, self.height)

    def update(self, row: int, col: int, width: int, height: int) -> None:
        self.row = max(0, row)
        self.col = max(0, col)
        self.width = max(0, width)
        self.height = max(0, height)

    def scroll(self, rows: int, cols: int) -> None:
        self.row = max(0, self.row + rows)
        self.col = max(0, self.col + cols)


class ScrollKind(str, Enum):
    DELTA = "delta"
    PAGE_DOWN = "page_down"
    PAGE_UP = "page_up"
    HALF_PAGE_DOWN = "half_page_down"
    HALF_PAGE_UP = "half_page_up"


@dataclass(frozen=True, slots=True)
class Scrolling:
    """A scroll request; page variants are sized by the viewport height."""

    kind: ScrollKind = ScrollKind.DELTA
    rows: int = 0
    cols: int = 0

    @classmethod
    def delta(cls, rows: int, cols: int = 0) -> "Scrolling":
        return cls(ScrollKind.DELTA, rows, cols)

    @classmethod
    def coerce(cls, value: "ScrollingLike") -> "Scrolling":
        if isinstance(value, Scrolling):
            return value
        if isinstance(value, ScrollKind):
            return cls(value)
        rows, cols = value
        return cls.delta(rows, cols)

    def apply(self, viewport: Viewport) -> None:
        height = viewport.height
        if self.kind is ScrollKind.DELTA:
            rows, cols = self.rows, self.cols
        elif self.kind is ScrollKind.PAGE_DOWN:
            rows, cols = height, 0
        elif self.kind is ScrollKind.PAGE_UP:
            rows, cols = -height, 0
        elif self.kind is ScrollKind.HALF_PAGE_DOWN:
            rows, cols = height // 2, 0
        else:
            rows, cols = -(height // 2), 0
        viewport.scroll(rows, cols)


ScrollingLike = Union[Scrolling, ScrollKind, Tuple[int, int]]


def next_scroll_top(prev_top: int, cursor: int, length: int) -> int:
    """Smallest shift of ``prev_top`` that keeps ``cursor`` inside ``length`` cells."""

    if cursor < prev_top:
        return cursor
    if prev_top + length <= cursor:
        return cursor + 1 - length
    return prev_top


__all__ = [
    "Rect",
    "ScrollKind",
    "Scrolling",
    "ScrollingLike",
    "Viewport",
    "next_scroll_top",
]
