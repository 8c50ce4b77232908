"""Storage for the most recently deleted text."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Tuple


def split_lines(text: str) -> list[str]:
    """Split on ``\\n`` and ``\\r\\n``; a lone ``\\r`` is kept as content."""

    return [piece[:-1] if piece.endswith("\r") else piece for piece in text.split("\n")]


@dataclass(frozen=True, slots=True)
class YankText:
    """Deleted text kept either as a single piece or as a multi-line chunk."""

    lines: Tuple[str, ...] = ("",)

    @classmethod
    def piece(cls, text: str) -> "YankText":
        return cls(lines=(text,))

    @classmethod
    def chunk(cls, lines: Iterable[str]) -> "YankText":
        collected = tuple(lines)
        return cls(lines=collected or ("",))

    @property
    def is_chunk(self) -> bool:
        return len(self.lines) > 1

    @property
    def kind(self) -> str:
        return "chunk" if self.is_chunk else "piece"

    def __str__(self) -> str:
        return "\n".join(self.lines)


class YankStore:
    """Holds exactly one yank; every store replaces the previous one."""

    def __init__(self) -> None:
        self._value = YankText()

    @property
    def value(self) -> YankText:
        return self._value

    @property
    def text(self) -> str:
        return str(self._value)

    def store_piece(self, text: str) -> None:
        self._value = YankText.piece(text)

    def store_chunk(self, lines: Iterable[str]) -> None:
        self._value = YankText.chunk(lines)

    def set_text(self, text: str) -> None:
        self._value = YankText.chunk(split_lines(text))


__all__ = ["YankStore", "YankText", "split_lines"]
