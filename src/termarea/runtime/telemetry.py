"""telelog wiring for termarea.

Buffers report through two calls:

``record_event(name, data=...)`` -- one structured ``event::<name>`` line per
input, yank, scroll or failed validation
``edit_span(label, buffer=...)`` -- profiles one outermost edit and logs
``edit::<label>`` with whether the text changed

``configure`` swaps the active telelog config, either from a named preset or
from ``TERMAREA_*`` environment variables.
"""

from __future__ import annotations

import os
from contextlib import contextmanager
from dataclasses import dataclass
from typing import Any, Dict, Iterator, List, Mapping, Optional, Tuple, cast

import telelog  # type: ignore[import]

tl = cast(Any, telelog)

ENV_PREFIX = "TERMAREA_"
LOGGER_NAME = "termarea"

Pairs = List[Tuple[str, str]]

_loggers: Dict[str, Any] = {}
_active_config: Optional[Any] = None


@dataclass(frozen=True, slots=True)
class LogSettings:
    """The subset of ``tl.Config`` a text area needs."""

    level: str = "WARNING"
    console: bool = True
    color: bool = True
    json: bool = False
    log_file: str = ""
    buffer_size: Optional[int] = None
    profile: bool = False

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "LogSettings":
        env = os.environ if environ is None else environ

        def get(name: str) -> str:
            return env.get(f"{ENV_PREFIX}{name}", "")

        def flag(name: str) -> bool:
            return get(name).lower() in {"1", "true", "yes", "on"}

        buffer_size = None
        if flag("LOG_BUFFERED"):
            buffer_size = int(get("LOG_BUFFER_SIZE") or "2048")
        return cls(
            level=(get("LOG_LEVEL") or "WARNING").upper(),
            console=not flag("DISABLE_CONSOLE"),
            color=not flag("NO_COLOR"),
            json=flag("LOG_JSON"),
            log_file=get("LOG_FILE"),
            buffer_size=buffer_size,
            profile=flag("PROFILE"),
        )

    def to_config(self) -> Any:
        config = tl.Config()
        config.with_min_level(self.level)
        config.with_console_output(self.console)
        if self.console:
            config.with_colored_output(self.color)
        if self.json:
            config.with_json_format(True)
        if self.log_file:
            config.with_file_output(self.log_file)
        if self.buffer_size is not None:
            config.with_buffering(True)
            config.with_buffer_size(self.buffer_size)
        config.with_profiling(self.profile)
        return config


PRESETS: Dict[str, LogSettings] = {
    "development": LogSettings(level="DEBUG"),
    "production": LogSettings(
        level="INFO", console=False, log_file="termarea.log", buffer_size=2048
    ),
    "performance": LogSettings(
        level="DEBUG",
        console=False,
        json=True,
        log_file="termarea-performance.log",
        buffer_size=2048,
        profile=True,
    ),
}


def configure(
    *, preset: Optional[str] = None, settings: Optional[LogSettings] = None
) -> None:
    """Replace the active config; with no arguments, re-read the environment."""

    global _active_config
    if preset is not None and settings is not None:
        raise ValueError("Provide either `preset` or `settings`, not both.")

    if preset is not None:
        try:
            settings = PRESETS[preset.lower()]
        except KeyError:
            raise ValueError(f"Unknown preset '{preset}'.") from None
    elif settings is None:
        settings = LogSettings.from_env()

    _active_config = settings.to_config()
    _loggers.clear()


def get_logger(name: Optional[str] = None) -> Any:
    global _active_config
    logger_name = name or LOGGER_NAME
    if logger_name not in _loggers:
        if _active_config is None:
            _active_config = LogSettings.from_env().to_config()
        _loggers[logger_name] = tl.Logger.with_config(logger_name, _active_config)
    return _loggers[logger_name]


def _pairs(data: Mapping[str, Any]) -> Pairs:
    return [
        (str(key), value if isinstance(value, str) else repr(value))
        for key, value in data.items()
    ]


def _emit(log: Any, level: str, message: str, pairs: Pairs) -> None:
    with_data = getattr(log, f"{level}_with", None)
    if with_data is not None:
        with_data(message, pairs)
        return
    method = getattr(log, level, None)
    if method is None:
        raise ValueError(f"Unsupported log level '{level}'.")
    method(f"{message} {dict(pairs)}")


def record_event(
    name: str, *, data: Optional[Mapping[str, Any]] = None, level: str = "debug"
) -> None:
    pairs = _pairs({"event": name, **(data or {})})
    _emit(get_logger(), level.lower(), f"event::{name}", pairs)


@dataclass(slots=True)
class EditRecord:
    """Outcome of one edit, filled in by the caller before the span closes."""

    label: str
    buffer: str
    changed: bool = False


@contextmanager
def edit_span(label: str, *, buffer: str) -> Iterator[EditRecord]:
    """Profile an edit under the ``buffer`` component, tagged with the buffer name."""

    log = get_logger()
    record = EditRecord(label, buffer)
    log.add_context("buffer", buffer)
    try:
        with log.track_component("buffer"), log.profile(f"buffer::{label}"):
            try:
                yield record
            except Exception as exc:
                _emit(log, "error", f"edit::{label}", _pairs({"failed": str(exc)}))
                raise
        _emit(log, "debug", f"edit::{label}", _pairs({"changed": record.changed}))
    finally:
        log.remove_context("buffer")


__all__ = [
    "EditRecord",
    "LogSettings",
    "PRESETS",
    "configure",
    "edit_span",
    "get_logger",
    "record_event",
]
