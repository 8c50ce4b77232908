"""Backend-agnostic key input and its classification."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Optional


class Key(str, Enum):
    CHAR = "char"
    BACKSPACE = "backspace"
    ENTER = "enter"
    LEFT = "left"
    RIGHT = "right"
    UP = "up"
    DOWN = "down"
    TAB = "tab"
    DELETE = "delete"
    HOME = "home"
    END = "end"
    WORD_LEFT = "word_left"
    WORD_RIGHT = "word_right"
    ESC = "escape"
    NULL = "null"


class InputKind(str, Enum):
    """What a key press means to the text buffer."""

    CHAR = "char"
    NEWLINE = "newline"
    TAB = "tab"
    BACKSPACE = "backspace"
    DELETE = "delete"
    UP = "up"
    DOWN = "down"
    LEFT = "left"
    RIGHT = "right"
    HOME = "home"
    END = "end"
    WORD_LEFT = "word_left"
    WORD_RIGHT = "word_right"
    ESCAPE = "escape"
    OTHER = "other"


_PLAIN_KINDS = {
    Key.TAB: InputKind.TAB,
    Key.BACKSPACE: InputKind.BACKSPACE,
    Key.DELETE: InputKind.DELETE,
    Key.UP: InputKind.UP,
    Key.DOWN: InputKind.DOWN,
    Key.LEFT: InputKind.LEFT,
    Key.RIGHT: InputKind.RIGHT,
}


@dataclass(frozen=True, slots=True)
class Input:
    """A single key press with its modifier flags."""

    key: Key = Key.NULL
    char: Optional[str] = None
    ctrl: bool = False
    alt: bool = False
    shift: bool = False

    def __post_init__(self) -> None:
        if self.key is Key.CHAR and (self.char is None or len(self.char) != 1):
            raise ValueError("Key.CHAR input requires exactly one character")

    @classmethod
    def of_char(
        cls, char: str, *, ctrl: bool = False, alt: bool = False, shift: bool = False
    ) -> "Input":
        return cls(Key.CHAR, char, ctrl=ctrl, alt=alt, shift=shift)

    @property
    def plain(self) -> bool:
        return not self.ctrl and not self.alt

    def maybe_char(self) -> Optional[str]:
        """The typed character when no modifier other than Shift is held."""

        if self.key is Key.CHAR and self.plain:
            return self.char
        return None

    def is_newline_except_enter(self) -> bool:
        """Newline produced by anything but a bare Enter (e.g. Shift+Enter, ``\\n``)."""

        if self.key is Key.CHAR:
            return self.plain and self.char in ("\n", "\r")
        if self.key is Key.ENTER:
            return self.ctrl or self.alt or self.shift
        return False

    def is_newline(self) -> bool:
        return self.is_newline_except_enter() or self.key is Key.ENTER

    def kind(self) -> InputKind:
        if self.is_newline():
            return InputKind.NEWLINE
        if self.key is Key.CHAR:
            return InputKind.CHAR if self.plain else InputKind.OTHER
        if self.key is Key.HOME:
            return InputKind.HOME
        if self.key is Key.END:
            return InputKind.END
        if self.key is Key.ESC:
            return InputKind.ESCAPE
        if self.key is Key.WORD_LEFT:
            return InputKind.WORD_LEFT
        if self.key is Key.WORD_RIGHT:
            return InputKind.WORD_RIGHT
        if self.key in (Key.LEFT, Key.RIGHT) and self.ctrl and not self.alt:
            return InputKind.WORD_LEFT if self.key is Key.LEFT else InputKind.WORD_RIGHT
        if self.plain and self.key in _PLAIN_KINDS:
            return _PLAIN_KINDS[self.key]
        return InputKind.OTHER


__all__ = ["Input", "InputKind", "Key"]
