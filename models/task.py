# weekly_task/models/task.py
from __future__ import annotations

from dataclasses import asdict, dataclass, field
from typing import Any, Dict, Optional

from helpers.datetime_utils import format_time, split_time


@dataclass(frozen=True)
class Task:
    """A weekly task.

    ``once`` tasks are dropped by the next weekly reset; the others only get
    their ``done`` flag cleared. ``time`` is ``HH:MM:SS`` or ``None``.
    """

    id: str
    text: str
    detail: str = ""
    once: bool = False
    day: int = 0
    done: bool = False
    time: Optional[str] = None

    def to_record(self) -> Dict[str, Any]:
        record = asdict(self)
        if record["time"] is None:
            del record["time"]
        return record


@dataclass
class TaskDraft:
    """Raw form fields as the add/edit dialog holds them."""

    text: str = ""
    detail: str = ""
    day: int = 0
    once: bool = False
    hour: int = 0
    minute: int = 0
    second: int = 0
    task_id: Optional[str] = field(default=None, compare=False)

    @classmethod
    def from_task(cls, task: Task) -> "TaskDraft":
        hour, minute, second = split_time(task.time)
        return cls(
            text=task.text,
            detail=task.detail,
            day=task.day,
            once=task.once,
            hour=hour,
            minute=minute,
            second=second,
            task_id=task.id,
        )

    @property
    def is_edit(self) -> bool:
        return self.task_id is not None

    def time_value(self) -> str:
        return format_time(self.hour, self.minute, self.second)

    def fields(self) -> Dict[str, Any]:
        return {
            "text": self.text,
            "detail": self.detail,
            "day": self.day,
            "once": self.once,
            "time": self.time_value(),
        }


__all__ = ["Task", "TaskDraft"]
