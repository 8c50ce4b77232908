"""Styled row rendering for text buffers."""

from .highlight import DisplayTextBuilder, Fragment, LineHighlighter
from .view import RenderedLine, line_fragments, render_lines, render_text

__all__ = [
    "DisplayTextBuilder",
    "Fragment",
    "LineHighlighter",
    "RenderedLine",
    "line_fragments",
    "render_lines",
    "render_text",
]
