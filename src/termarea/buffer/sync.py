"""Adapter boundary types for syncing buffers with host widgets."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional, Protocol, Tuple

from .state import Position, SelectionRange


@dataclass(slots=True)
class BufferMirror:
    """Host-friendly snapshot describing the current buffer state."""

    lines: Tuple[str, ...]
    cursor: Position
    selection: Optional[SelectionRange]
    yank: str = ""
    attributes: dict[str, str] = field(default_factory=dict)

    @property
    def text(self) -> str:
        return "\n".join(self.lines)


class BufferSync(Protocol):
    """Protocol describing how adapters exchange data with the buffer layer."""

    def pull_buffer(self) -> BufferMirror:
        """Return the latest buffer snapshot that the host should render."""
        ...

    def push_paste(self, text: str) -> bool:
        """Submit bulk text (clipboard paste, IME commit) to the buffer."""
        ...


class BufferInvariantError(RuntimeError):
    """Raised when the line list or cursor violates the buffer invariants."""

    def __init__(self, message: str, *, cursor: Position | None = None) -> None:
        super().__init__(message)
        self.cursor = cursor
