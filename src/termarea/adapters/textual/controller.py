"""Textual adapter translating key events into text buffer input."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Dict, Optional

from termarea.buffer import BufferMirror, TextBuffer
from termarea.buffer.viewport import ScrollingLike
from termarea.input import Input, InputKind, Key

_SPECIAL_KEYS: Dict[str, Key] = {
    "backspace": Key.BACKSPACE,
    "delete": Key.DELETE,
    "enter": Key.ENTER,
    "return": Key.ENTER,
    "tab": Key.TAB,
    "left": Key.LEFT,
    "right": Key.RIGHT,
    "up": Key.UP,
    "down": Key.DOWN,
    "home": Key.HOME,
    "end": Key.END,
    "escape": Key.ESC,
}

_NAMED_CHARS = {"space": " "}

_UNHANDLED = (InputKind.OTHER, InputKind.ESCAPE)


def input_from_textual(key: str, character: Optional[str] = None) -> Input:
    """Build an ``Input`` from a Textual key name such as ``"ctrl+shift+left"``."""

    *modifiers, name = key.split("+") if key != "+" else ["+"]
    mods = {modifier.lower() for modifier in modifiers}
    ctrl = "ctrl" in mods
    alt = bool(mods & {"alt", "meta"})
    shift = "shift" in mods

    if name == "backtab":
        return Input(Key.TAB, ctrl=ctrl, alt=alt, shift=True)

    special = _SPECIAL_KEYS.get(name.lower())
    if special is not None:
        return Input(special, ctrl=ctrl, alt=alt, shift=shift)

    if (
        not ctrl
        and not alt
        and character is not None
        and len(character) == 1
        and character.isprintable()
    ):
        return Input.of_char(character, shift=shift)

    if name in _NAMED_CHARS:
        return Input.of_char(_NAMED_CHARS[name], ctrl=ctrl, alt=alt, shift=shift)
    if len(name) == 1:
        return Input.of_char(name, ctrl=ctrl, alt=alt, shift=shift)
    return Input()


def _noop(*_args, **_kwargs) -> None:  # pragma: no cover - default hook
    return None


@dataclass(slots=True)
class TextAreaHooks:
    """Callbacks invoked by the adapter to update Textual widgets."""

    refresh: Callable[[BufferMirror], None]
    update_status: Callable[[str], None] = _noop
    log: Callable[[str], None] = _noop


class TextualTextAreaAdapter:
    """Bridges Textual key and paste events to a ``TextBuffer``."""

    def __init__(self, buffer: TextBuffer, hooks: TextAreaHooks) -> None:
        self.buffer = buffer
        self.hooks = hooks
        self._refresh()

    def handles(self, key: str, character: Optional[str] = None) -> bool:
        """Whether the buffer acts on this key; other keys should bubble to bindings."""

        return input_from_textual(key, character).kind() not in _UNHANDLED

    def handle_textual_key(self, key: str, *, character: Optional[str] = None) -> bool:
        event = input_from_textual(key, character)
        self._log_state("key ->", key=key, kind=event.kind().value)
        modified = self.buffer.input(event)
        self._after_edit(modified)
        self._log_state("result <-", modified=modified)
        return modified

    def paste(self, text: str) -> bool:
        self._log_state("paste ->", length=len(text))
        modified = self.buffer.insert_str(text)
        self._after_edit(modified)
        return modified

    def pull_buffer(self) -> BufferMirror:
        return self.buffer.mirror()

    def push_paste(self, text: str) -> bool:
        return self.paste(text)

    def scroll(self, scrolling: ScrollingLike) -> None:
        self.buffer.scroll(scrolling)
        self._log_state("scroll ->", viewport=self.buffer.viewport.position())
        self._refresh()

    def _after_edit(self, modified: bool) -> None:
        if modified:
            result = self.buffer.validate()
            self.hooks.update_status("; ".join(result.errors) if result.errors else "")
        self._refresh()

    def _refresh(self) -> None:
        self.hooks.refresh(self.buffer.mirror())

    def _log_state(self, prefix: str, **fields: object) -> None:
        snapshot: Dict[str, object] = {
            "buffer": self.buffer.name,
            "cursor": self.buffer.cursor,
            "selection": self.buffer.selection_range(),
        }
        snapshot.update({k: v for k, v in fields.items() if v is not None})
        parts = [prefix]
        for key, value in snapshot.items():
            parts.append(f"{key}={value!r}")
        self.hooks.log(" ".join(parts))


__all__ = ["TextAreaHooks", "TextualTextAreaAdapter", "input_from_textual"]
