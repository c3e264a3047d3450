"""Error types raised by the task store and its storage adapters."""
from __future__ import annotations


class WeeklyTaskError(Exception):
    """Base class for application errors."""


class ValidationError(WeeklyTaskError, ValueError):
    """Input rejected before any state change (empty title, bad day or time)."""


class NotFoundError(WeeklyTaskError, LookupError):
    """No task with the requested id."""

    def __init__(self, task_id: str):
        super().__init__(f"Task not found: {task_id}")
        self.task_id = task_id


class PersistenceError(WeeklyTaskError, RuntimeError):
    """The key-value storage could not be read or written."""


__all__ = ["NotFoundError", "PersistenceError", "ValidationError", "WeeklyTaskError"]
