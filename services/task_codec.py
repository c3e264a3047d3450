"""JSON encoding of the persisted keys."""
from __future__ import annotations

import json
import logging
from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, List, Optional

from core.weekdays import is_valid_day
from helpers.datetime_utils import normalize_time_value
from models.task import Task

logger = logging.getLogger("weekly_task.codec")


def dump_tasks(tasks: Iterable[Task]) -> str:
    return json.dumps([t.to_record() for t in tasks], ensure_ascii=False)


def _flag(record: Dict[str, Any], name: str) -> bool:
    value = record.get(name, False)
    if not isinstance(value, bool):
        raise ValueError(f"bad {name} {value!r}")
    return value


def _record_to_task(record: Dict[str, Any]) -> Task:
    task_id = record.get("id")
    text = record.get("text")
    if not isinstance(task_id, str) or not task_id:
        raise ValueError("missing id")
    if not isinstance(text, str) or not text.strip():
        raise ValueError("missing text")
    detail = record.get("detail", "")
    if detail is None:
        detail = ""
    if not isinstance(detail, str):
        raise ValueError(f"bad detail {detail!r}")
    day = record.get("day", 0)
    if not is_valid_day(day):
        raise ValueError(f"bad day {day!r}")
    raw_time = record.get("time")
    if raw_time is not None and not isinstance(raw_time, str):
        raise ValueError(f"bad time {raw_time!r}")
    return Task(
        id=task_id,
        text=text,
        detail=detail,
        once=_flag(record, "once"),
        day=day,
        done=_flag(record, "done"),
        time=normalize_time_value(raw_time),
    )


@dataclass(frozen=True)
class DecodedTasks:
    """Result of reading the ``tasks`` payload.

    ``unreadable`` means nothing could be decoded; ``dropped`` counts records
    that were skipped. Either way the stored payload holds data the list
    does not.
    """

    tasks: List[Task] = field(default_factory=list)
    dropped: int = 0
    unreadable: bool = False

    @property
    def lossy(self) -> bool:
        return self.unreadable or self.dropped > 0


def decode_tasks(payload: Optional[str]) -> DecodedTasks:
    """Decode the ``tasks`` payload.

    Damaged records are skipped; when two records share an id the first one
    wins.
    """

    if not payload:
        return DecodedTasks()
    try:
        data = json.loads(payload)
    except json.JSONDecodeError as exc:
        logger.error("Unreadable tasks payload: %s", exc)
        return DecodedTasks(unreadable=True)
    if not isinstance(data, list):
        logger.error("Tasks payload of type %s is not a list", type(data).__name__)
        return DecodedTasks(unreadable=True)

    tasks: List[Task] = []
    seen: set[str] = set()
    for index, record in enumerate(data):
        if not isinstance(record, dict):
            logger.warning("Skipping task record #%d: not an object", index)
            continue
        try:
            task = _record_to_task(record)
        except ValueError as exc:
            logger.warning("Skipping task record #%d: %s", index, exc)
            continue
        if task.id in seen:
            logger.warning("Skipping task record #%d: duplicate id %s", index, task.id)
            continue
        seen.add(task.id)
        tasks.append(task)
    return DecodedTasks(tasks=tasks, dropped=len(data) - len(tasks))


def dump_week(week: int) -> str:
    return json.dumps(int(week))


def load_week(payload: Optional[str]) -> Optional[int]:
    if payload is None:
        return None
    try:
        value = json.loads(payload)
    except json.JSONDecodeError:
        logger.warning("Unreadable reset marker %r", payload)
        return None
    # Older payloads stored the number as a string.
    if isinstance(value, str) and value.strip().isdigit():
        value = int(value)
    if isinstance(value, bool) or not isinstance(value, int):
        logger.warning("Unexpected reset marker %r", payload)
        return None
    return value


__all__ = ["DecodedTasks", "decode_tasks", "dump_tasks", "dump_week", "load_week"]
