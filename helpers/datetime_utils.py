"""Shared utilities for parsing and normalizing time-of-day input."""
from __future__ import annotations

from datetime import date, datetime, timezone
from typing import Optional, Sequence, Tuple, Union

TimeParts = Tuple[int, int, int]
TimeInput = Union[str, Sequence[int], None]

MIDNIGHT: TimeParts = (0, 0, 0)


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


def iso_week(value: Optional[date] = None) -> int:
    """ISO-8601 week number (weeks start on Monday, week 1 holds Jan 4th)."""
    return (value or date.today()).isocalendar()[1]


def _check_range(name: str, value: int, upper: int) -> int:
    if isinstance(value, bool) or not isinstance(value, int):
        raise ValueError(f"{name} must be an integer, got {value!r}")
    if not 0 <= value <= upper:
        raise ValueError(f"{name} must be within 0..{upper}, got {value}")
    return value


def format_time(hour: int, minute: int, second: int) -> str:
    """Return zero-padded ``HH:MM:SS`` after range checks."""

    _check_range("hour", hour, 23)
    _check_range("minute", minute, 59)
    _check_range("second", second, 59)
    return f"{hour:02d}:{minute:02d}:{second:02d}"


def _parse_int(value: str) -> Optional[int]:
    try:
        return int(value)
    except (TypeError, ValueError):
        return None


def parse_time(value: str) -> TimeParts:
    """Parse ``H:M:S`` (or ``H:M``) into integer parts.

    Components do not need to be zero-padded. Raises ``ValueError`` for
    anything else.
    """

    text = (value or "").strip()
    parts = text.split(":")
    if len(parts) == 2:
        parts.append("0")
    if len(parts) != 3:
        raise ValueError(f"Unrecognised time value: {value!r}")
    numbers = [_parse_int(p.strip()) for p in parts]
    if any(n is None for n in numbers):
        raise ValueError(f"Unrecognised time value: {value!r}")
    hour, minute, second = numbers
    format_time(hour, minute, second)
    return hour, minute, second


def normalize_time_value(value: TimeInput) -> Optional[str]:
    """Turn a string, an ``(h, m, s)`` sequence or ``None`` into ``HH:MM:SS``.

    Empty strings mean "no time" and give ``None``.
    """

    if value is None:
        return None
    if isinstance(value, str):
        if not value.strip():
            return None
        return format_time(*parse_time(value))
    parts = tuple(value)
    if len(parts) != 3:
        raise ValueError(f"Expected (hour, minute, second), got {value!r}")
    return format_time(*parts)


def split_time(value: Optional[str]) -> TimeParts:
    """Split a stored time into parts; missing times read as midnight."""
    if not value:
        return MIDNIGHT
    return parse_time(value)


def format_time_text(value: Optional[str]) -> str:
    """Human-readable rendering used by the task list, ``--`` for no time."""

    if not value:
        return "--"
    hour, minute, second = split_time(value)
    if hour > 0:
        return f"{hour} Hours {minute} Minute {second} Second"
    if minute > 0:
        suffix = f" {second} Second" if second > 0 else ""
        return f"{minute} Minute{suffix}"
    if second > 0:
        return f"{second} Second"
    return "--"


__all__ = [
    "MIDNIGHT",
    "TimeInput",
    "TimeParts",
    "format_time",
    "format_time_text",
    "iso_week",
    "normalize_time_value",
    "parse_time",
    "split_time",
    "utc_now",
]
