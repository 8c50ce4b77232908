"""Executable Textual app that hosts a text buffer."""

from __future__ import annotations

import argparse
import os
from typing import List, Optional, Sequence

try:  # pragma: no cover - imported only when demo is run
    from textual import events
    from textual.app import App, ComposeResult
    from textual.widget import Widget
    from textual.widgets import Footer, Static
except ModuleNotFoundError as exc:  # pragma: no cover - friendly error for missing dep
    raise RuntimeError(
        "Install the 'textual' package to use termarea.adapters.textual.app"
    ) from exc

from rich.console import RenderableType

from termarea.buffer import BufferMirror, TextBuffer
from termarea.config import Alignment, TextAreaConfig
from termarea.render import render_text
from termarea.runtime import telemetry
from termarea.validators import required_validator

from .controller import TextAreaHooks, TextualTextAreaAdapter


class TextAreaWidget(Widget):
    """Paints the visible rows of a buffer, sized to the widget content area."""

    def __init__(self, buffer: TextBuffer, *, id: str | None = None) -> None:
        super().__init__(id=id)
        self.buffer = buffer

    def render(self) -> RenderableType:
        size = self.content_size
        return render_text(self.buffer, size.width, size.height)


class TextAreaApp(App[List[str]]):
    """Single text area; Esc finishes and returns the buffer lines."""

    CSS = """
	Screen {
		layout: vertical;
	}

	#buffer-view {
		height: 1fr;
		border: round $accent;
		padding: 0 1;
	}

	#status-line {
		height: 1;
		background: $surface-darken-1;
		padding: 0 1;
	}
	"""

    BINDINGS = [
        ("escape", "finish", "Done"),
    ]

    def __init__(self, buffer: Optional[TextBuffer] = None) -> None:
        super().__init__()
        self.buffer = buffer or TextBuffer()
        self.adapter: TextualTextAreaAdapter | None = None
        self.log_lines: List[str] = []
        self._buffer_widget: TextAreaWidget | None = None
        self._status_widget: Static | None = None

    def compose(self) -> ComposeResult:
        self._buffer_widget = TextAreaWidget(self.buffer, id="buffer-view")
        self._status_widget = Static("", id="status-line")
        yield self._buffer_widget
        yield self._status_widget
        yield Footer()

    def on_mount(self) -> None:
        hooks = TextAreaHooks(
            refresh=self._update_buffer,
            update_status=self._update_status,
            log=self.log_lines.append,
        )
        self.adapter = TextualTextAreaAdapter(self.buffer, hooks)

    def on_key(self, event: events.Key) -> None:
        if not self.adapter or not self.adapter.handles(event.key, event.character):
            return
        self.adapter.handle_textual_key(event.key, character=event.character)
        event.prevent_default()
        event.stop()

    def on_paste(self, event: events.Paste) -> None:
        if self.adapter:
            self.adapter.paste(event.text)
            event.stop()

    def action_finish(self) -> None:
        self.exit(self.buffer.lines)

    def _update_buffer(self, mirror: BufferMirror) -> None:
        del mirror
        if self._buffer_widget is not None:
            self._buffer_widget.refresh()

    def _update_status(self, status: str) -> None:
        if self._status_widget:
            self._status_widget.update(status)


def _env_int(key: str, fallback: int) -> int:
    value = os.environ.get(key)
    if value is None:
        return fallback
    try:
        return int(value)
    except ValueError:
        return fallback


def _parse_args(argv: Optional[Sequence[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Run the termarea Textual demo.")
    parser.add_argument(
        "--placeholder",
        default="Type something...",
        help="Text shown while the area is empty",
    )
    parser.add_argument("--mask", default=None, help="Mask character, e.g. '*'")
    parser.add_argument(
        "--tab-length",
        type=int,
        default=_env_int("TERMAREA_TAB_LENGTH", 2),
        help="Tab width in display columns (default: 2)",
    )
    parser.add_argument(
        "--align",
        choices=[alignment.value for alignment in Alignment],
        default=Alignment.LEFT.value,
    )
    parser.add_argument(
        "--required",
        action="store_true",
        help="Report an error while the area is empty",
    )
    parser.add_argument(
        "--log-preset",
        choices=sorted(telemetry.PRESETS),
        default=None,
        help="telelog preset to use instead of the environment defaults",
    )
    return parser.parse_args(argv)


def build_buffer(args: argparse.Namespace) -> TextBuffer:
    config = TextAreaConfig(
        tab_length=args.tab_length,
        mask=args.mask,
        placeholder=args.placeholder,
        alignment=Alignment(args.align),
    )
    buffer = TextBuffer(name="demo", config=config)
    if args.required:
        buffer.add_validator(required_validator)
    return buffer


def main(argv: Optional[Sequence[str]] = None) -> None:
    args = _parse_args(argv)
    if args.log_preset:
        telemetry.configure(preset=args.log_preset)
    lines = TextAreaApp(build_buffer(args)).run()
    print(f"Lines: {lines!r}")


if __name__ == "__main__":  # pragma: no cover - manual demo
    main()
