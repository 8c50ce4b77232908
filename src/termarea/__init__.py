"""Terminal text-area editing kernel."""

from .buffer import CursorMove, Scrolling, TextBuffer
from .config import Alignment, TextAreaConfig
from .input import Input, InputKind, Key
from .render import Fragment, LineHighlighter, render_lines
from .validators import ValidationResult, required_validator

__all__ = [
    "Alignment",
    "CursorMove",
    "Fragment",
    "Input",
    "InputKind",
    "Key",
    "LineHighlighter",
    "Scrolling",
    "TextAreaConfig",
    "TextBuffer",
    "ValidationResult",
    "render_lines",
    "required_validator",
]

__version__ = "0.1.0"
