"""Content validators run against the joined buffer text."""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Callable, Iterable, Optional, Tuple

Check = Callable[[str], Optional[str]]


@dataclass(frozen=True, slots=True)
class ValidatorFn:
    """Wraps a check returning ``None`` when valid, or a failure message."""

    check: Check
    name: str = ""

    def __call__(self, text: str) -> Optional[str]:
        return self.check(text)


@dataclass(frozen=True, slots=True)
class ValidationResult:
    errors: Tuple[str, ...] = ()

    @property
    def valid(self) -> bool:
        return not self.errors

    def __bool__(self) -> bool:
        return self.valid


def as_validator(check: Check | ValidatorFn) -> ValidatorFn:
    if isinstance(check, ValidatorFn):
        return check
    if not callable(check):
        raise TypeError("validator must be callable")
    return ValidatorFn(check, name=getattr(check, "__name__", ""))


def run_validators(validators: Iterable[ValidatorFn], text: str) -> ValidationResult:
    errors = [message for validator in validators if (message := validator(text)) is not None]
    return ValidationResult(tuple(errors))


def required_validator(text: str) -> Optional[str]:
    if not text:
        return "This field is required"
    return None


def max_length(limit: int) -> ValidatorFn:
    def check(text: str) -> Optional[str]:
        if len(text) > limit:
            return f"Must be at most {limit} characters"
        return None

    return ValidatorFn(check, name=f"max_length({limit})")


def matches(pattern: str, message: str | None = None) -> ValidatorFn:
    compiled = re.compile(pattern)

    def check(text: str) -> Optional[str]:
        if compiled.fullmatch(text) is None:
            return message or f"Must match {pattern!r}"
        return None

    return ValidatorFn(check, name=f"matches({pattern!r})")


__all__ = [
    "ValidationResult",
    "ValidatorFn",
    "as_validator",
    "matches",
    "max_length",
    "required_validator",
    "run_validators",
]
