"""Rendering and editing options for a text area."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional

from rich.style import Style

from termarea.validators import ValidatorFn


class Alignment(str, Enum):
    LEFT = "left"
    CENTER = "center"
    RIGHT = "right"


def _cursor_style() -> Style:
    return Style(reverse=True)


def _selection_style() -> Style:
    return Style(bgcolor="bright_blue")


def _placeholder_style() -> Style:
    return Style(color="bright_black")


@dataclass(slots=True)
class TextAreaConfig:
    """Options that shape display only, except ``tab_length`` which also drives tab insertion."""

    tab_length: int = 2
    mask: Optional[str] = None
    style: Style = field(default_factory=Style)
    cursor_style: Style = field(default_factory=_cursor_style)
    cursor_line_style: Style = field(default_factory=Style)
    selection_style: Style = field(default_factory=_selection_style)
    placeholder: str = ""
    placeholder_style: Style = field(default_factory=_placeholder_style)
    alignment: Alignment = Alignment.LEFT
    validators: List[ValidatorFn] = field(default_factory=list)

    def __post_init__(self) -> None:
        if self.tab_length < 0:
            raise ValueError("tab_length cannot be negative")
        if self.mask is not None and len(self.mask) != 1:
            raise ValueError("mask must be a single character")

    @property
    def placeholder_enabled(self) -> bool:
        return bool(self.placeholder)


__all__ = ["Alignment", "TextAreaConfig"]
