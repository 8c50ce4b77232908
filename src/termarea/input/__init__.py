"""Classified key input consumed by ``TextBuffer.input``."""

from .keys import Input, InputKind, Key

__all__ = ["Input", "InputKind", "Key"]
