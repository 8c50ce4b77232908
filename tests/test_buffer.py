from __future__ import annotations

import random

import pytest

from termarea import Input, Key, TextAreaConfig, TextBuffer
from termarea.buffer import BufferInvariantError, CursorMove, Scrolling, ScrollKind
from termarea.render import render_lines


def make_buffer(*lines: str, tab_length: int = 2) -> TextBuffer:
    return TextBuffer(list(lines) or None, config=TextAreaConfig(tab_length=tab_length))


def type_text(buffer: TextBuffer, text: str) -> None:
    for char in text:
        buffer.input(Input.of_char(char))


def test_new_buffer_has_one_empty_line() -> None:
    buffer = TextBuffer()

    assert buffer.lines == [""]
    assert buffer.cursor == (0, 0)
    assert buffer.is_empty()
    assert buffer.selection_range() is None
    assert buffer.yank_text == ""


def test_from_text_splits_crlf_and_lf() -> None:
    buffer = TextBuffer.from_text("one\r\ntwo\nthree")

    assert buffer.lines == ["one", "two", "three"]
    assert buffer.text() == "one\ntwo\nthree"


def test_typing_then_backspace_restores_text() -> None:
    buffer = make_buffer()

    type_text(buffer, "abc")
    assert buffer.lines == ["abc"]
    assert buffer.cursor == (0, 3)

    assert buffer.input(Input(Key.BACKSPACE)) is True
    assert buffer.lines == ["ab"]
    assert buffer.cursor == (0, 2)


def test_enter_splits_line_at_cursor() -> None:
    buffer = make_buffer("hello")
    buffer.move_cursor(CursorMove.FORWARD)
    buffer.move_cursor(CursorMove.FORWARD)

    assert buffer.input(Input(Key.ENTER)) is True

    assert buffer.lines == ["he", "llo"]
    assert buffer.cursor == (1, 0)


def test_backspace_at_line_start_joins_lines() -> None:
    buffer = make_buffer("ab", "cd")
    buffer.move_cursor(CursorMove.DOWN)

    assert buffer.delete_char() is True

    assert buffer.lines == ["abcd"]
    assert buffer.cursor == (0, 2)


def test_backspace_at_buffer_start_is_noop() -> None:
    buffer = make_buffer("ab")

    assert buffer.delete_char() is False
    assert buffer.lines == ["ab"]


def test_delete_newline_on_first_row_is_noop() -> None:
    buffer = make_buffer("ab", "cd")

    assert buffer.delete_newline() is False
    assert buffer.lines == ["ab", "cd"]


def test_delete_next_char_joins_following_line() -> None:
    buffer = make_buffer("ab", "c")
    buffer.move_cursor(CursorMove.END)

    assert buffer.delete_next_char() is True

    assert buffer.lines == ["abc"]
    assert buffer.cursor == (0, 2)


def test_delete_next_char_at_buffer_end_is_noop() -> None:
    buffer = make_buffer("ab")
    buffer.move_cursor(CursorMove.END)

    assert buffer.delete_next_char() is False
    assert buffer.lines == ["ab"]


def test_insert_tab_pads_to_next_stop() -> None:
    buffer = make_buffer(tab_length=4)
    type_text(buffer, "a")

    assert buffer.insert_tab() is True
    assert buffer.lines == ["a   "]
    assert buffer.cursor == (0, 4)

    assert buffer.insert_tab() is True
    assert buffer.lines == ["a       "]


def test_insert_tab_measures_wide_characters() -> None:
    buffer = make_buffer(tab_length=4)
    type_text(buffer, "あ")

    buffer.insert_tab()

    assert buffer.lines == ["あ  "]


def test_insert_tab_with_zero_length_does_nothing() -> None:
    buffer = make_buffer("ab", tab_length=0)

    assert buffer.insert_tab() is False
    assert buffer.lines == ["ab"]


def test_typing_replaces_selection_without_yanking() -> None:
    buffer = make_buffer("hello")
    buffer.move_cursor_with_shift(CursorMove.FORWARD, True)
    buffer.move_cursor_with_shift(CursorMove.FORWARD, True)

    assert buffer.selection_range() == ((0, 0), (0, 2))

    buffer.input(Input.of_char("X"))

    assert buffer.lines == ["Xllo"]
    assert buffer.cursor == (0, 1)
    assert buffer.yank_text == ""
    assert not buffer.is_selecting()


def test_backspace_deletes_multiline_selection_into_yank() -> None:
    buffer = make_buffer("ab", "cd", "ef")
    buffer.move_cursor(CursorMove.FORWARD)
    buffer.input(Input(Key.DOWN, shift=True))
    buffer.input(Input(Key.DOWN, shift=True))

    assert buffer.selection_range() == ((0, 1), (2, 1))

    assert buffer.input(Input(Key.BACKSPACE)) is True

    assert buffer.lines == ["af"]
    assert buffer.cursor == (0, 1)
    assert buffer.yank_text == "b\ncd\ne"
    assert buffer.yank.value.is_chunk


def test_selection_made_backwards_is_ordered() -> None:
    buffer = make_buffer("abcd")
    buffer.move_cursor(CursorMove.END)
    buffer.move_cursor_with_shift(CursorMove.BACK, True)
    buffer.move_cursor_with_shift(CursorMove.BACK, True)

    assert buffer.selection_range() == ((0, 2), (0, 4))

    buffer.delete_next_char()

    assert buffer.lines == ["ab"]
    assert buffer.yank_text == "cd"


def test_unshifted_motion_cancels_selection() -> None:
    buffer = make_buffer("abc")
    buffer.move_cursor_with_shift(CursorMove.FORWARD, True)
    assert buffer.is_selecting()

    buffer.input(Input(Key.RIGHT))

    assert not buffer.is_selecting()
    assert buffer.cursor == (0, 2)


def test_shift_motion_that_cannot_move_still_anchors() -> None:
    buffer = make_buffer("abc")

    assert buffer.move_cursor_with_shift(CursorMove.BACK, True) is False

    assert buffer.is_selecting()
    assert buffer.selection_range() is None


def test_cancel_selection_is_idempotent() -> None:
    buffer = make_buffer("abc")
    buffer.start_selection()

    buffer.cancel_selection()
    buffer.cancel_selection()

    assert not buffer.is_selecting()
    assert buffer.delete_selection(True) is False


def test_delete_str_within_line() -> None:
    buffer = make_buffer("abc")

    assert buffer.delete_str(2) is True

    assert buffer.lines == ["c"]
    assert buffer.yank_text == "ab"


def test_delete_str_counts_line_break_as_one_unit() -> None:
    buffer = make_buffer("ab", "cd")
    buffer.move_cursor(CursorMove.FORWARD)

    assert buffer.delete_str(3) is True

    assert buffer.lines == ["ad"]
    assert buffer.cursor == (0, 1)
    assert buffer.yank_text == "b\nc"


def test_delete_str_at_buffer_end_returns_false() -> None:
    buffer = make_buffer("ab")
    buffer.move_cursor(CursorMove.END)

    assert buffer.delete_str(1) is False
    assert buffer.lines == ["ab"]


def test_delete_str_prefers_active_selection() -> None:
    buffer = make_buffer("abcd")
    buffer.move_cursor_with_shift(CursorMove.FORWARD, True)

    assert buffer.delete_str(3) is True

    assert buffer.lines == ["bcd"]
    assert buffer.yank_text == "a"


def test_insert_str_single_piece() -> None:
    buffer = make_buffer("ad")
    buffer.move_cursor(CursorMove.FORWARD)

    assert buffer.insert_str("bc") is True

    assert buffer.lines == ["abcd"]
    assert buffer.cursor == (0, 3)


def test_insert_str_chunk_splits_lines() -> None:
    buffer = make_buffer("xy")
    buffer.move_cursor(CursorMove.FORWARD)

    assert buffer.insert_str("1\n2\r\n3") is True

    assert buffer.lines == ["x1", "2", "3y"]
    assert buffer.cursor == (2, 1)


def test_insert_empty_str_is_noop() -> None:
    buffer = make_buffer("ab")

    assert buffer.insert_str("") is False
    assert buffer.lines == ["ab"]


def test_set_yank_text_keeps_lone_carriage_return() -> None:
    buffer = make_buffer()

    buffer.set_yank_text("a\r\nb\rc")

    assert buffer.yank.value.lines == ("a", "b\rc")


def test_modifier_chars_do_not_edit() -> None:
    buffer = make_buffer("ab")

    assert buffer.input(Input.of_char("x", ctrl=True)) is False
    assert buffer.input(Input(Key.ESC)) is False
    assert buffer.lines == ["ab"]


def test_check_invariants_rejects_out_of_range_cursor() -> None:
    buffer = make_buffer("ab")
    buffer.state.set_cursor(0, 5)

    with pytest.raises(BufferInvariantError) as excinfo:
        buffer.check_invariants()

    assert excinfo.value.cursor == (0, 5)


def test_scroll_pulls_cursor_into_viewport() -> None:
    buffer = make_buffer(*[str(index) for index in range(10)])
    buffer.viewport.update(0, 0, 10, 3)

    buffer.scroll(Scrolling.delta(5))

    assert buffer.viewport.row == 5
    assert buffer.cursor == (5, 0)
    assert not buffer.is_selecting()


def test_scroll_extends_active_selection() -> None:
    buffer = make_buffer(*[str(index) for index in range(10)])
    buffer.viewport.update(0, 0, 10, 3)
    buffer.start_selection()

    buffer.scroll(ScrollKind.PAGE_DOWN)

    assert buffer.cursor == (3, 0)
    assert buffer.selection_range() == ((0, 0), (3, 0))


def test_validators_report_errors() -> None:
    buffer = make_buffer()
    buffer.add_validator(lambda text: None if text else "empty")

    assert buffer.validate().errors == ("empty",)

    type_text(buffer, "a")

    assert buffer.is_valid()


def test_config_setters_validate_input() -> None:
    buffer = make_buffer()

    with pytest.raises(ValueError):
        buffer.set_tab_length(-1)
    with pytest.raises(ValueError):
        buffer.set_mask_char("**")

    buffer.set_mask_char("*")
    assert buffer.config.mask == "*"
    buffer.clear_mask_char()
    assert buffer.config.mask is None


def test_placeholder_style_requires_placeholder_text() -> None:
    buffer = make_buffer()

    assert buffer.placeholder_style() is None

    buffer.set_placeholder("Name")

    assert buffer.placeholder_style() == buffer.config.placeholder_style


def test_mirror_snapshots_state() -> None:
    buffer = make_buffer("ab")
    buffer.move_cursor_with_shift(CursorMove.END, True)

    mirror = buffer.mirror(attributes={"mode": "edit"})

    assert mirror.lines == ("ab",)
    assert mirror.cursor == (0, 2)
    assert mirror.selection == ((0, 0), (0, 2))
    assert mirror.attributes == {"mode": "edit"}
    assert mirror.text == "ab"


def test_typing_then_backspace_round_trips() -> None:
    buffer = make_buffer("hello")
    buffer.move_cursor(CursorMove.END)

    buffer.insert_char("!")
    buffer.delete_char()

    assert buffer.lines == ["hello"]
    assert buffer.cursor == (0, 5)


def test_insert_tab_rounds_up_to_tab_width() -> None:
    buffer = make_buffer("abc", tab_length=2)
    buffer.move_cursor(CursorMove.END)

    buffer.insert_tab()
    assert buffer.lines == ["abc "]

    buffer.insert_tab()
    assert buffer.lines == ["abc   "]


def test_buffers_built_from_one_config_keep_separate_validators() -> None:
    config = TextAreaConfig(placeholder="Name")
    first = TextBuffer(config=config)
    second = TextBuffer(config=config)

    first.add_validator(lambda text: "always")

    assert len(first.config.validators) == 1
    assert second.config.validators == []
    assert config.validators == []
    assert second.config.placeholder == "Name"


_KEYS = [
    Key.BACKSPACE,
    Key.DELETE,
    Key.ENTER,
    Key.TAB,
    Key.LEFT,
    Key.RIGHT,
    Key.UP,
    Key.DOWN,
    Key.HOME,
    Key.END,
    Key.ESC,
]
_PASTES = ["x", "", "1\n2", "\r\n", "ab\ncd\nef", "あい"]


def apply_random_edit(buffer: TextBuffer, rng: random.Random) -> None:
    choice = rng.randrange(9)
    if choice == 0:
        buffer.input(Input.of_char(rng.choice("ab (\tあ")))
    elif choice == 1:
        buffer.input(
            Input(rng.choice(_KEYS), ctrl=rng.random() < 0.2, shift=rng.random() < 0.3)
        )
    elif choice == 2:
        buffer.insert_str(rng.choice(_PASTES))
    elif choice == 3:
        buffer.delete_str(rng.randrange(6))
    elif choice == 4:
        buffer.start_selection()
    elif choice == 5:
        buffer.cancel_selection()
    elif choice == 6:
        buffer.delete_selection(rng.random() < 0.5)
    elif choice == 7:
        render_lines(buffer, rng.randrange(1, 8), rng.randrange(1, 5))
    else:
        buffer.scroll(
            rng.choice(
                [
                    Scrolling.delta(rng.randrange(-3, 4), rng.randrange(-2, 3)),
                    ScrollKind.PAGE_DOWN,
                    ScrollKind.HALF_PAGE_UP,
                ]
            )
        )


@pytest.mark.parametrize("seed", range(40))
def test_random_edits_keep_buffer_invariants(seed: int) -> None:
    rng = random.Random(seed)
    buffer = make_buffer("fn foo(a)", "", "bar")

    for _ in range(80):
        apply_random_edit(buffer, rng)

        lines = buffer.lines
        row, col = buffer.cursor
        assert len(lines) >= 1
        assert 0 <= row < len(lines)
        assert 0 <= col <= len(lines[row])
        selection = buffer.selection_range()
        if selection is not None:
            start, end = selection
            assert start < end
            assert end[0] < len(lines)
