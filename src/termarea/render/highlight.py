"""Per-line style compositing for cursor and selection overlays.

Each overlay contributes a start boundary and an ``END`` boundary at string
offsets into the line. Boundaries are sorted by offset, then by rank, and
replayed against a style stack: a start pushes its style, an end pops back to
whatever was underneath. Ends rank lowest so a region closes before another
opens at the same offset, and the cursor ranks above the selection so its
start is pushed last and stays on top while both are open.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import IntEnum
from typing import List, NamedTuple, Optional, Tuple

from rich.style import Style
from rich.text import Text

from termarea.width import char_width


class Fragment(NamedTuple):
    text: str
    style: Style


class BoundaryKind(IntEnum):
    END = 0
    SELECT = 1
    CURSOR = 3


@dataclass(frozen=True, slots=True)
class Boundary:
    kind: BoundaryKind
    style: Optional[Style] = None


_END = Boundary(BoundaryKind.END)


class DisplayTextBuilder:
    """Turns raw line text into what the terminal shows.

    Tabs expand to the next tab stop measured in display columns, which
    carry over between successive ``build`` calls on the same line. With a
    mask set every character becomes the mask and tabs stay one cell wide.
    """

    def __init__(self, tab_length: int, mask: Optional[str]) -> None:
        self.tab_length = tab_length
        self.mask = mask
        self.width = 0

    def build(self, text: str) -> str:
        if self.mask is not None:
            return self.mask * len(text)

        if "\t" not in text:
            self.width += sum(char_width(char) for char in text)
            return text

        parts: List[str] = []
        for char in text:
            if char == "\t":
                if self.tab_length > 0:
                    length = self.tab_length - (self.width % self.tab_length)
                    parts.append(" " * length)
                    self.width += length
            else:
                parts.append(char)
                self.width += char_width(char)
        return "".join(parts)


class LineHighlighter:
    """Collects overlays for one line, then emits its styled fragments."""

    def __init__(
        self,
        line: str,
        *,
        cursor_style: Style,
        selection_style: Style,
        tab_length: int = 2,
        mask: Optional[str] = None,
        base_style: Optional[Style] = None,
    ) -> None:
        self.line = line
        self.cursor_style = cursor_style
        self.selection_style = selection_style
        self.tab_length = tab_length
        self.mask = mask
        self.style_begin = base_style if base_style is not None else Style()
        self.cursor_at_end = False
        self.select_at_end = False
        self._boundaries: List[Tuple[Boundary, int]] = []

    def cursor_line(self, cursor_col: int, style: Style) -> None:
        if cursor_col < len(self.line):
            self._boundaries.append((Boundary(BoundaryKind.CURSOR, self.cursor_style), cursor_col))
            self._boundaries.append((_END, cursor_col + 1))
        else:
            self.cursor_at_end = True
        self.style_begin = style

    def selection(
        self,
        current_row: int,
        start_row: int,
        start_offset: int,
        end_row: int,
        end_offset: int,
    ) -> None:
        if current_row == start_row:
            if start_row == end_row:
                start, end = start_offset, end_offset
            else:
                self.select_at_end = True
                start, end = start_offset, len(self.line)
        elif current_row == end_row:
            start, end = 0, end_offset
        elif start_row < current_row < end_row:
            self.select_at_end = True
            start, end = 0, len(self.line)
        else:
            return
        if start != end:
            self._boundaries.append((Boundary(BoundaryKind.SELECT, self.selection_style), start))
            self._boundaries.append((_END, end))

    def _trailing(self) -> List[Fragment]:
        if self.cursor_at_end:
            return [Fragment(" ", self.cursor_style)]
        if self.select_at_end:
            return [Fragment(" ", self.selection_style)]
        return []

    def fragments(self) -> List[Fragment]:
        line = self.line
        builder = DisplayTextBuilder(self.tab_length, self.mask)
        fragments: List[Fragment] = []

        if not self._boundaries:
            built = builder.build(line)
            if built:
                fragments.append(Fragment(built, self.style_begin))
            return fragments + self._trailing()

        boundaries = sorted(self._boundaries, key=lambda item: (item[1], item[0].kind))
        style = self.style_begin
        stack: List[Style] = []
        start = 0

        for boundary, end in boundaries:
            if start < end:
                fragments.append(Fragment(builder.build(line[start:end]), style))
            if boundary.style is not None:
                stack.append(style)
                style = boundary.style
            else:
                style = stack.pop() if stack else self.style_begin
            start = end

        if start != len(line):
            fragments.append(Fragment(builder.build(line[start:]), style))

        return fragments + self._trailing()


def fragments_to_text(fragments: List[Fragment]) -> Text:
    return Text.assemble(*fragments)


__all__ = [
    "Boundary",
    "BoundaryKind",
    "DisplayTextBuilder",
    "Fragment",
    "LineHighlighter",
    "fragments_to_text",
]
