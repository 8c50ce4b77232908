"""Textual integration for termarea buffers."""

from .controller import TextAreaHooks, TextualTextAreaAdapter, input_from_textual

__all__ = ["TextAreaHooks", "TextualTextAreaAdapter", "input_from_textual"]
