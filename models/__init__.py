"""Data models exposed by the Weekly-Task application."""
from .task import Task, TaskDraft
from .kv_entry import KeyValueEntry

__all__ = ["Task", "TaskDraft", "KeyValueEntry"]
