"""Reset-on-launch of the weekly task list.

Weeks are ISO-8601 weeks: they start on Monday 00:00 local time and week 1
is the week holding January 4th, so the year boundary goes 52 or 53 -> 1.
Only the week number is compared, which makes the check deterministic across
restarts inside the same week. There is no timer: an app left
open across the Monday boundary resets on its next launch.
"""
from __future__ import annotations

import logging
from datetime import date
from enum import Enum
from typing import Callable

from helpers.datetime_utils import iso_week
from services.errors import PersistenceError
from services.task_store import TaskStore

logger = logging.getLogger("weekly_task.reset")


class ResetState(str, Enum):
    UNCHECKED = "unchecked"
    CHECKED = "checked"


class WeeklyResetController:
    def __init__(self, store: TaskStore, *, clock: Callable[[], date] = date.today):
        self._store = store
        self._clock = clock
        self._state = ResetState.UNCHECKED

    @property
    def state(self) -> ResetState:
        return self._state

    def run_on_launch(self) -> bool:
        """Reset once if the stored week differs; return True when it did."""

        if self._state is ResetState.CHECKED:
            return False
        self._state = ResetState.CHECKED

        if self._store.load_failed:
            logger.error("Stored tasks were not loaded, skipping weekly reset")
            return False

        current_week = iso_week(self._clock())
        try:
            last_week = self._store.last_reset_week()
        except PersistenceError as exc:
            logger.error("Reset marker unreadable, skipping weekly reset: %s", exc)
            return False

        if last_week is not None and last_week == current_week:
            logger.info("Week %s already reset", current_week)
            return False

        logger.info("Weekly reset for week %s (last reset week: %s)", current_week, last_week)
        self._store.reset_weekly()
        self._store.record_reset_week(current_week)
        return True


__all__ = ["ResetState", "WeeklyResetController"]
