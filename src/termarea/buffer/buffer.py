"""Line buffer with cursor, selection, and yank; the text area's editing kernel."""

from __future__ import annotations

from contextlib import AbstractContextManager
from dataclasses import replace
from typing import ContextManager, Iterable, List, Optional, Sequence, Tuple

from rich.style import Style

from termarea.config import Alignment, TextAreaConfig
from termarea.input import Input, InputKind
from termarea.runtime import telemetry
from termarea.validators import (
    Check,
    ValidationResult,
    ValidatorFn,
    as_validator,
    run_validators,
)
from termarea.width import text_width

from .cursor import CursorMove
from .state import BufferState, Pos, Position, SelectionRange, char_offset
from .sync import BufferMirror
from .validation import ensure_cursor, ensure_lines
from .viewport import Scrolling, ScrollingLike, Viewport
from .yank import YankStore, YankText, split_lines

_MOTIONS = {
    InputKind.UP: CursorMove.UP,
    InputKind.DOWN: CursorMove.DOWN,
    InputKind.LEFT: CursorMove.BACK,
    InputKind.RIGHT: CursorMove.FORWARD,
    InputKind.HOME: CursorMove.HEAD,
    InputKind.END: CursorMove.END,
    InputKind.WORD_LEFT: CursorMove.WORD_BACK,
    InputKind.WORD_RIGHT: CursorMove.WORD_FORWARD,
}


class TextBuffer:
    """Ordered lines plus cursor, selection anchor, yank, and viewport.

    Every public operation keeps ``lines`` non-empty and the cursor within
    ``(row < len(lines), col <= len(lines[row]))``. Operations that cannot
    apply are no-ops and report ``False``.
    """

    def __init__(
        self,
        lines: Optional[Iterable[str]] = None,
        *,
        name: str = "default",
        config: Optional[TextAreaConfig] = None,
    ) -> None:
        self.name = name
        self._lines: List[str] = list(lines) if lines is not None else []
        if not self._lines:
            self._lines.append("")
        if config is None:
            self.config = TextAreaConfig()
        else:
            self.config = replace(config, validators=list(config.validators))
        self.state = BufferState()
        self.yank = YankStore()
        self.viewport = Viewport()
        self._transaction_depth = 0

    @classmethod
    def from_text(
        cls,
        text: str,
        *,
        name: str = "default",
        config: Optional[TextAreaConfig] = None,
    ) -> "TextBuffer":
        return cls(split_lines(text), name=name, config=config)

    @property
    def lines(self) -> List[str]:
        return list(self._lines)

    @property
    def line_count(self) -> int:
        return len(self._lines)

    def line(self, row: int) -> str:
        return self._lines[row]

    @property
    def cursor(self) -> Position:
        return self.state.cursor

    @property
    def yank_text(self) -> str:
        return self.yank.text

    def set_yank_text(self, text: str) -> None:
        """Replace the yank; ``\\n`` and ``\\r\\n`` split lines, a lone ``\\r`` does not."""

        self.yank.set_text(text)

    def snapshot(self) -> Tuple[str, ...]:
        return tuple(self._lines)

    def text(self) -> str:
        return "\n".join(self._lines)

    def is_empty(self) -> bool:
        return self._lines == [""]

    def mirror(self, *, attributes: Optional[dict[str, str]] = None) -> BufferMirror:
        return BufferMirror(
            lines=self.snapshot(),
            cursor=self.state.cursor,
            selection=self.selection_range(),
            yank=self.yank.text,
            attributes=dict(attributes or {}),
        )

    def set_tab_length(self, length: int) -> None:
        if length < 0:
            raise ValueError("tab length cannot be negative")
        self.config.tab_length = length

    def set_mask_char(self, mask: Optional[str]) -> None:
        if mask is not None and len(mask) != 1:
            raise ValueError("mask must be a single character")
        self.config.mask = mask

    def clear_mask_char(self) -> None:
        self.config.mask = None

    def set_style(self, style: Style) -> None:
        self.config.style = style

    def set_cursor_style(self, style: Style) -> None:
        self.config.cursor_style = style

    def set_cursor_line_style(self, style: Style) -> None:
        self.config.cursor_line_style = style

    def set_selection_style(self, style: Style) -> None:
        self.config.selection_style = style

    def set_placeholder(self, text: str) -> None:
        self.config.placeholder = text

    def set_placeholder_style(self, style: Style) -> None:
        self.config.placeholder_style = style

    def placeholder_style(self) -> Optional[Style]:
        """The placeholder style, or ``None`` while the placeholder is disabled."""

        if not self.config.placeholder_enabled:
            return None
        return self.config.placeholder_style

    def set_alignment(self, alignment: Alignment) -> None:
        self.config.alignment = Alignment(alignment)

    def add_validator(self, check: Check | ValidatorFn) -> None:
        self.config.validators.append(as_validator(check))

    def validate(self) -> ValidationResult:
        result = run_validators(self.config.validators, self.text())
        if not result.valid:
            telemetry.record_event(
                "validation.failed",
                data={"buffer": self.name, "errors": list(result.errors)},
            )
        return result

    def is_valid(self) -> bool:
        return self.validate().valid

    def input(self, event: Input) -> bool:
        """Apply one classified key press; return whether the text changed."""

        kind = event.kind()
        if kind is InputKind.CHAR:
            char = event.maybe_char()
            modified = char is not None and self.insert_char(char)
        elif kind is InputKind.NEWLINE:
            modified = self.insert_newline()
        elif kind is InputKind.TAB:
            modified = self.insert_tab()
        elif kind is InputKind.BACKSPACE:
            modified = self.delete_char()
        elif kind is InputKind.DELETE:
            modified = self.delete_next_char()
        elif kind in _MOTIONS:
            modified = self.move_cursor_with_shift(_MOTIONS[kind], event.shift)
        else:
            modified = False

        telemetry.record_event(
            "textarea.input",
            data={
                "buffer": self.name,
                "kind": kind.value,
                "modified": modified,
                "cursor": self.state.cursor,
            },
        )
        if __debug__:
            self.check_invariants()
        return modified

    def check_invariants(self) -> None:
        ensure_lines(self._lines)
        ensure_cursor(self._lines, self.state.cursor)

    def insert_char(self, char: str) -> bool:
        if char in ("\n", "\r"):
            return self.insert_newline()

        with Transaction(self, "insert_char"):
            self.delete_selection(False)
            row, col = self.state.cursor
            line = self._lines[row]
            i = char_offset(line, col)
            self._lines[row] = line[:i] + char + line[i:]
            self.state.set_cursor(row, col + 1)
        return True

    def insert_str(self, text: str) -> bool:
        """Insert ``text`` at the cursor, splitting on ``\\n`` and ``\\r\\n``."""

        with Transaction(self, "insert_str"):
            modified = self.delete_selection(False)
            pieces = split_lines(text)
            if len(pieces) == 1:
                return self._insert_piece(pieces[0]) or modified
            return self._insert_chunk(pieces)

    def _insert_piece(self, piece: str) -> bool:
        if not piece:
            return False
        row, col = self.state.cursor
        line = self._lines[row]
        i = char_offset(line, col)
        self._lines[row] = line[:i] + piece + line[i:]
        self.state.set_cursor(row, col + len(piece))
        return True

    def _insert_chunk(self, chunk: Sequence[str]) -> bool:
        row, col = self.state.cursor
        line = self._lines[row]
        i = char_offset(line, col)
        head, tail = line[:i], line[i:]
        inserted = [head + chunk[0], *chunk[1:-1], chunk[-1] + tail]
        self._lines[row : row + 1] = inserted
        self.state.set_cursor(row + len(chunk) - 1, len(chunk[-1]))
        return True

    def insert_newline(self) -> bool:
        with Transaction(self, "insert_newline"):
            self.delete_selection(False)
            row, col = self.state.cursor
            line = self._lines[row]
            i = char_offset(line, col)
            self._lines[row] = line[:i]
            self._lines.insert(row + 1, line[i:])
            self.state.set_cursor(row + 1, 0)
        return True

    def insert_tab(self) -> bool:
        """Pad with spaces up to the next tab stop; does nothing when the tab length is 0."""

        with Transaction(self, "insert_tab"):
            modified = self.delete_selection(False)
            tab = self.config.tab_length
            if tab == 0:
                return modified
            row, col = self.state.cursor
            width = text_width(self._lines[row][:col])
            return self._insert_piece(" " * (tab - width % tab)) or modified

    def delete_char(self) -> bool:
        """Backspace: delete the selection, or the character (or line break) before the cursor."""

        with Transaction(self, "delete_char"):
            if self.delete_selection(True):
                return True
            row, col = self.state.cursor
            if col == 0:
                return self.delete_newline()
            line = self._lines[row]
            i = char_offset(line, col - 1)
            self._lines[row] = line[:i] + line[i + 1 :]
            self.state.set_cursor(row, col - 1)
            return True

    def delete_next_char(self) -> bool:
        with Transaction(self, "delete_next_char"):
            if self.delete_selection(True):
                return True
            before = self.state.cursor
            self.move_cursor_with_shift(CursorMove.FORWARD, False)
            if self.state.cursor == before:
                return False
            return self.delete_char()

    def delete_newline(self) -> bool:
        """Join the cursor line onto the previous one."""

        with Transaction(self, "delete_newline"):
            if self.delete_selection(True):
                return True
            row, _ = self.state.cursor
            if row == 0:
                return False
            line = self._lines.pop(row)
            prev_line = self._lines[row - 1]
            self.state.set_cursor(row - 1, len(prev_line))
            self._lines[row - 1] = prev_line + line
            return True

    def delete_str(self, count: int) -> bool:
        """Delete ``count`` units forward, where each character and each line break is one unit."""

        with Transaction(self, "delete_str"):
            if self.delete_selection(True):
                return True
            if count <= 0:
                return False

            start_row, start_col = self.state.cursor
            first = self._lines[start_row]
            start_offset = char_offset(first, start_col)
            remaining = count

            rest = len(first) - start_offset
            if remaining <= rest:
                end_offset = start_offset + remaining
                self.yank.store_piece(first[start_offset:end_offset])
                self._lines[start_row] = first[:start_offset] + first[end_offset:]
                self._record_yank()
                return True

            if start_row + 1 >= len(self._lines) and rest == 0:
                return False

            remaining -= rest + 1
            row = start_row + 1
            end_offset = 0
            while row < len(self._lines):
                line = self._lines[row]
                if remaining <= len(line):
                    end_offset = remaining
                    break
                remaining -= len(line) + 1
                row += 1

            start = Pos(start_row, start_col, start_offset)
            end = Pos(row, end_offset, end_offset)
            self._delete_range(start, end, True)
            return True

    def _delete_range(self, start: Pos, end: Pos, should_yank: bool) -> None:
        self.state.set_cursor(start.row, start.col)

        if start.row == end.row:
            line = self._lines[start.row]
            removed = line[start.offset : end.offset]
            self._lines[start.row] = line[: start.offset] + line[end.offset :]
            if should_yank:
                self.yank.store_piece(removed)
                self._record_yank()
            return

        first = self._lines[start.row]
        deleted = [first[start.offset :]]
        head = first[: start.offset]
        deleted.extend(self._lines[start.row + 1 : end.row])
        del self._lines[start.row + 1 : end.row]
        if start.row + 1 < len(self._lines):
            last_line = self._lines.pop(start.row + 1)
            head += last_line[end.offset :]
            deleted.append(last_line[: end.offset])
        self._lines[start.row] = head

        if should_yank:
            self.yank.store_chunk(deleted)
            self._record_yank()

    def _record_yank(self) -> None:
        value: YankText = self.yank.value
        telemetry.record_event(
            "buffer.yank",
            data={"buffer": self.name, "kind": value.kind, "lines": len(value.lines)},
        )

    def start_selection(self) -> None:
        """Anchor a selection at the cursor, replacing any previous anchor."""

        self.state.start_selection()

    def cancel_selection(self) -> None:
        self.state.cancel_selection()

    def is_selecting(self) -> bool:
        return self.state.selecting

    def selection_range(self) -> Optional[SelectionRange]:
        """Ordered ``(start, end)`` of the selection, end exclusive; ``None`` when empty."""

        return self.state.selection_range(self._lines)

    def selection_positions(self) -> Optional[Tuple[Pos, Pos]]:
        return self.state.selection_positions(self._lines)

    def delete_selection(self, should_yank: bool) -> bool:
        positions = self.state.selection_positions(self._lines)
        self.state.cancel_selection()
        if positions is None:
            return False
        with Transaction(self, "delete_selection"):
            start, end = positions
            self._delete_range(start, end, should_yank)
        return True

    def move_cursor(self, motion: CursorMove) -> bool:
        return self.move_cursor_with_shift(motion, False)

    def move_cursor_with_shift(self, motion: CursorMove, shift: bool) -> bool:
        """Move the cursor; Shift extends the selection, anything else cancels it.

        Always returns ``False`` since motion never changes the text.
        """

        target = motion.next_cursor(self.state.cursor, self._lines, self.viewport)
        if shift:
            if not self.state.selecting:
                self.state.start_selection()
        else:
            self.state.cancel_selection()
        if target is not None:
            self.state.set_cursor(*target)
        return False

    def scroll(self, scrolling: ScrollingLike) -> None:
        """Scroll the viewport, then pull the cursor back inside it.

        An ongoing selection is extended by the cursor adjustment.
        """

        request = Scrolling.coerce(scrolling)
        shift = self.state.selecting
        request.apply(self.viewport)
        telemetry.record_event(
            "viewport.scroll",
            data={
                "buffer": self.name,
                "kind": request.kind.value,
                "viewport": self.viewport.position(),
            },
        )
        self.move_cursor_with_shift(CursorMove.IN_VIEWPORT, shift)


class Transaction(AbstractContextManager["Transaction"]):
    """Profiled edit; nested edits join the outermost one, which reports any change."""

    def __init__(self, buffer: TextBuffer, label: str) -> None:
        self.buffer = buffer
        self.label = label
        self._span: Optional[ContextManager[telemetry.EditRecord]] = None
        self._record: Optional[telemetry.EditRecord] = None
        self._before: Tuple[str, ...] = ()

    def __enter__(self) -> "Transaction":
        self.buffer._transaction_depth += 1
        if self.buffer._transaction_depth == 1:
            self._before = self.buffer.snapshot()
            self._span = telemetry.edit_span(self.label, buffer=self.buffer.name)
            self._record = self._span.__enter__()
        return self

    def __exit__(self, exc_type, exc, tb) -> bool:
        self.buffer._transaction_depth -= 1
        if self._span is not None and self._record is not None:
            self._record.changed = self.buffer.snapshot() != self._before
            self._span.__exit__(exc_type, exc, tb)
        return False


__all__ = ["TextBuffer", "Transaction"]
