"""Day-of-week helpers shared by the store and the view."""
from __future__ import annotations

from datetime import date
from typing import Dict, Optional

# Monday is day 0, matching date.weekday().
DAY_NAMES = (
    "Monday",
    "Tuesday",
    "Wednesday",
    "Thursday",
    "Friday",
    "Saturday",
    "Sunday",
)

FIRST_DAY = 0
LAST_DAY = len(DAY_NAMES) - 1


def is_valid_day(value: object) -> bool:
    return isinstance(value, int) and not isinstance(value, bool) and FIRST_DAY <= value <= LAST_DAY


def normalize_day(value: int | str | None, default: int = FIRST_DAY) -> int:
    """Coerce external values (dropdown keys, config entries) to a day index."""
    if value is None:
        return default
    try:
        ivalue = int(value)
    except (TypeError, ValueError):
        return default
    if not FIRST_DAY <= ivalue <= LAST_DAY:
        return default
    return ivalue


def today_index(today: Optional[date] = None) -> int:
    return (today or date.today()).weekday()


def day_options() -> Dict[str, str]:
    """Return mapping of dropdown values -> labels."""
    return {str(index): name for index, name in enumerate(DAY_NAMES)}


__all__ = [
    "DAY_NAMES",
    "FIRST_DAY",
    "LAST_DAY",
    "day_options",
    "is_valid_day",
    "normalize_day",
    "today_index",
]
