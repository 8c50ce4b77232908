"""Text buffer kernel: lines, cursor, selection, yank, and viewport."""

from .buffer import TextBuffer, Transaction
from .cursor import CharKind, CursorMove
from .state import BufferState, Pos, Position, SelectionRange
from .sync import BufferInvariantError, BufferMirror, BufferSync
from .validation import ensure_cursor, ensure_lines
from .viewport import ScrollKind, Scrolling, Viewport
from .yank import YankStore, YankText

__all__ = [
    "BufferInvariantError",
    "BufferMirror",
    "BufferState",
    "BufferSync",
    "CharKind",
    "CursorMove",
    "Pos",
    "Position",
    "ScrollKind",
    "Scrolling",
    "SelectionRange",
    "TextBuffer",
    "Transaction",
    "Viewport",
    "YankStore",
    "YankText",
    "ensure_cursor",
    "ensure_lines",
]
