"""Project a text buffer onto a ``width`` x ``height`` cell area."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Optional, Sequence

from rich.text import Text

from termarea.buffer import TextBuffer
from termarea.buffer.viewport import next_scroll_top
from termarea.config import Alignment
from termarea.width import char_width, text_width

from .highlight import DisplayTextBuilder, Fragment, LineHighlighter, fragments_to_text


@dataclass(slots=True)
class RenderedLine:
    """One visible row; ``row`` is the buffer row it shows."""

    row: int
    fragments: List[Fragment] = field(default_factory=list)

    @property
    def plain(self) -> str:
        return "".join(fragment.text for fragment in self.fragments)

    @property
    def width(self) -> int:
        return text_width(self.plain)

    def to_text(self) -> Text:
        return fragments_to_text(self.fragments)


def line_fragments(buffer: TextBuffer, row: int) -> List[Fragment]:
    """Styled fragments for buffer ``row`` with cursor and selection applied."""

    config = buffer.config
    highlighter = LineHighlighter(
        buffer.line(row),
        cursor_style=config.cursor_style,
        selection_style=config.selection_style,
        tab_length=config.tab_length,
        mask=config.mask,
        base_style=config.style,
    )

    cursor_row, cursor_col = buffer.cursor
    if row == cursor_row:
        highlighter.cursor_line(cursor_col, config.style + config.cursor_line_style)

    positions = buffer.selection_positions()
    if positions is not None:
        start, end = positions
        highlighter.selection(row, start.row, start.offset, end.row, end.offset)

    return highlighter.fragments()


def cursor_display_col(buffer: TextBuffer) -> int:
    row, col = buffer.cursor
    builder = DisplayTextBuilder(buffer.config.tab_length, buffer.config.mask)
    return text_width(builder.build(buffer.line(row)[:col]))


def clip_fragments(fragments: Sequence[Fragment], start: int, width: int) -> List[Fragment]:
    """Keep display columns ``[start, start + width)``.

    A wide character cut by either edge is replaced by spaces for its visible part.
    """

    end = start + width
    clipped: List[Fragment] = []
    col = 0
    for fragment in fragments:
        if col >= end:
            break
        kept: List[str] = []
        for char in fragment.text:
            if col >= end:
                break
            cells = char_width(char)
            if col + cells <= start:
                pass
            elif col >= start and col + cells <= end:
                kept.append(char)
            else:
                kept.append(" " * (min(col + cells, end) - max(col, start)))
            col += cells
        if kept:
            clipped.append(Fragment("".join(kept), fragment.style))
    return clipped


def align_fragments(
    fragments: List[Fragment], width: int, alignment: Alignment, fill: Fragment
) -> List[Fragment]:
    slack = width - sum(text_width(fragment.text) for fragment in fragments)
    if slack <= 0 or alignment is Alignment.LEFT:
        return fragments
    pad = slack // 2 if alignment is Alignment.CENTER else slack
    return [Fragment(fill.text * pad, fill.style), *fragments]


def _placeholder_line(buffer: TextBuffer) -> RenderedLine:
    config = buffer.config
    return RenderedLine(
        row=0,
        fragments=[
            Fragment(" ", config.cursor_style),
            Fragment(config.placeholder, config.placeholder_style),
        ],
    )


def render_lines(buffer: TextBuffer, width: int, height: int) -> List[RenderedLine]:
    """Render the visible rows, scrolling the viewport just enough to show the cursor."""

    if width <= 0 or height <= 0:
        return []

    config = buffer.config
    cursor_row, _ = buffer.cursor
    viewport = buffer.viewport
    top_row = next_scroll_top(viewport.row, cursor_row, height)
    if config.alignment is Alignment.LEFT:
        top_col = next_scroll_top(viewport.col, cursor_display_col(buffer), width)
    else:
        top_col = 0
    viewport.update(top_row, top_col, width, height)

    if buffer.is_empty() and config.placeholder_enabled:
        rendered = [_placeholder_line(buffer)]
    else:
        bottom = min(top_row + height, buffer.line_count)
        rendered = [
            RenderedLine(row=row, fragments=line_fragments(buffer, row))
            for row in range(top_row, bottom)
        ]

    fill = Fragment(" ", config.style)
    for line in rendered:
        clipped = clip_fragments(line.fragments, top_col, width)
        line.fragments = align_fragments(clipped, width, config.alignment, fill)
    return rendered


def render_text(buffer: TextBuffer, width: int, height: int) -> Text:
    text = Text()
    for index, line in enumerate(render_lines(buffer, width, height)):
        if index:
            text.append("\n")
        text.append_text(line.to_text())
    return text


def visible_rows(buffer: TextBuffer) -> Optional[range]:
    """Buffer rows covered by the last render, or ``None`` before any render."""

    top_row, _, bottom_row, _ = buffer.viewport.position()
    if buffer.viewport.height == 0:
        return None
    return range(top_row, min(bottom_row + 1, buffer.line_count))


__all__ = [
    "RenderedLine",
    "align_fragments",
    "clip_fragments",
    "cursor_display_col",
    "line_fragments",
    "render_lines",
    "render_text",
    "visible_rows",
]
