from __future__ import annotations

from contextlib import contextmanager
from typing import Iterator, List

import pytest

from termarea import CursorMove, TextBuffer
from termarea.runtime import telemetry


def test_settings_read_prefixed_environment() -> None:
    settings = telemetry.LogSettings.from_env(
        {
            "TERMAREA_LOG_LEVEL": "debug",
            "TERMAREA_DISABLE_CONSOLE": "1",
            "TERMAREA_LOG_BUFFERED": "yes",
            "LOG_LEVEL": "ERROR",
        }
    )

    assert settings.level == "DEBUG"
    assert settings.console is False
    assert settings.buffer_size == 2048
    assert settings.profile is False


def test_settings_default_to_quiet_console() -> None:
    settings = telemetry.LogSettings.from_env({})

    assert settings == telemetry.LogSettings()
    assert settings.level == "WARNING"


def test_configure_rejects_unknown_or_conflicting_input() -> None:
    with pytest.raises(ValueError):
        telemetry.configure(preset="verbose")
    with pytest.raises(ValueError):
        telemetry.configure(preset="development", settings=telemetry.LogSettings())


def test_outermost_edit_reports_whether_text_changed(
    monkeypatch: pytest.MonkeyPatch,
) -> None:
    records: List[telemetry.EditRecord] = []

    @contextmanager
    def collect(label: str, *, buffer: str) -> Iterator[telemetry.EditRecord]:
        record = telemetry.EditRecord(label, buffer)
        records.append(record)
        yield record

    monkeypatch.setattr(telemetry, "edit_span", collect)
    buffer = TextBuffer(["ab"], name="notes")

    buffer.insert_char("x")
    buffer.insert_str("")
    buffer.start_selection()
    buffer.move_cursor_with_shift(CursorMove.END, True)
    buffer.delete_char()

    assert [(r.label, r.buffer, r.changed) for r in records] == [
        ("insert_char", "notes", True),
        ("insert_str", "notes", False),
        ("delete_char", "notes", True),
    ]
