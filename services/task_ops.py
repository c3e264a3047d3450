"""Pure mutations over a task collection.

Every function takes the current snapshot and returns a new list; the input
is never modified. Persisting the result is the caller's job.
"""
from __future__ import annotations

from dataclasses import replace
from typing import Any, Iterable, List, Optional, Sequence, Tuple

from core.weekdays import is_valid_day
from helpers.datetime_utils import TimeInput, normalize_time_value
from models.task import Task
from services.errors import NotFoundError, ValidationError

EDITABLE_FIELDS = frozenset({"text", "detail", "day", "once", "time"})


def validate_text(text: Any) -> str:
    if not isinstance(text, str) or not text.strip():
        raise ValidationError("Task title must not be empty")
    return text


def validate_day(day: Any) -> int:
    if not is_valid_day(day):
        raise ValidationError(f"Day must be an integer within 0..6, got {day!r}")
    return day


def validate_detail(detail: Any) -> str:
    if detail is None:
        return ""
    if not isinstance(detail, str):
        raise ValidationError(f"Task detail must be text, got {type(detail).__name__}")
    return detail


def validate_once(once: Any) -> bool:
    if not isinstance(once, bool):
        raise ValidationError(f"Once must be true or false, got {once!r}")
    return once


def validate_time(value: TimeInput) -> Optional[str]:
    try:
        return normalize_time_value(value)
    except (TypeError, ValueError) as exc:
        raise ValidationError(str(exc)) from exc


def build_task(
    task_id: str,
    text: str,
    *,
    detail: str = "",
    day: int = 0,
    once: bool = False,
    time: TimeInput = None,
) -> Task:
    return Task(
        id=task_id,
        text=validate_text(text),
        detail=validate_detail(detail),
        once=validate_once(once),
        day=validate_day(day),
        done=False,
        time=validate_time(time),
    )


def clean_changes(changes: dict) -> dict:
    unknown = set(changes) - EDITABLE_FIELDS
    if unknown:
        raise ValidationError(f"Unsupported field(s): {', '.join(sorted(unknown))}")
    cleaned = dict(changes)
    if "text" in cleaned:
        validate_text(cleaned["text"])
    if "detail" in cleaned:
        cleaned["detail"] = validate_detail(cleaned["detail"])
    if "day" in cleaned:
        validate_day(cleaned["day"])
    if "once" in cleaned:
        validate_once(cleaned["once"])
    if "time" in cleaned:
        cleaned["time"] = validate_time(cleaned["time"])
    return cleaned


def find_task(tasks: Iterable[Task], task_id: str) -> Optional[Task]:
    for task in tasks:
        if task.id == task_id:
            return task
    return None


def add_task(tasks: Sequence[Task], task: Task) -> List[Task]:
    return [*tasks, task]


def edit_task(tasks: Sequence[Task], task_id: str, **changes: Any) -> Tuple[List[Task], Task]:
    """Apply ``changes`` to one task; ``done`` is not editable here."""

    cleaned = clean_changes(changes)
    current = find_task(tasks, task_id)
    if current is None:
        raise NotFoundError(task_id)
    updated = replace(current, **cleaned)
    return [updated if t.id == task_id else t for t in tasks], updated


def toggle_task(tasks: Sequence[Task], task_id: str) -> Tuple[List[Task], Optional[Task]]:
    current = find_task(tasks, task_id)
    if current is None:
        return list(tasks), None
    flipped = replace(current, done=not current.done)
    return [flipped if t.id == task_id else t for t in tasks], flipped


def remove_task(tasks: Sequence[Task], task_id: str) -> Tuple[List[Task], bool]:
    remaining = [t for t in tasks if t.id != task_id]
    return remaining, len(remaining) != len(tasks)


def reset_week(tasks: Sequence[Task]) -> List[Task]:
    """Drop one-off tasks and clear ``done`` on the recurring ones."""
    return [replace(t, done=False) if t.done else t for t in tasks if not t.once]


def tasks_for_day(tasks: Iterable[Task], day: int) -> List[Task]:
    return [t for t in tasks if t.day == day]


__all__ = [
    "EDITABLE_FIELDS",
    "add_task",
    "build_task",
    "clean_changes",
    "edit_task",
    "find_task",
    "remove_task",
    "reset_week",
    "tasks_for_day",
    "toggle_task",
    "validate_day",
    "validate_detail",
    "validate_once",
    "validate_text",
    "validate_time",
]
