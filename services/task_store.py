# weekly_task/services/task_store.py
from __future__ import annotations

import logging
import uuid
from typing import Any, Callable, List, Optional, Set

from core.settings import STORAGE_KEYS
from helpers.datetime_utils import TimeInput
from models.task import Task
from services import task_ops
from services.errors import PersistenceError
from services.task_codec import decode_tasks, dump_tasks, dump_week, load_week
from storage.kv import KeyValueStore

logger = logging.getLogger("weekly_task.store")

Listener = Callable[[], None]


class TaskStore:
    """Owns the task collection and the weekly reset marker.

    Mutations run as: pure function over the current snapshot, swap the
    snapshot in memory, write the whole collection to ``kv``. A failed write
    is logged and the in-memory collection stays authoritative.
    """

    def __init__(self, kv: KeyValueStore, *, id_factory: Callable[[], str] | None = None):
        self._kv = kv
        self._id_factory = id_factory or (lambda: str(uuid.uuid4()))
        self._tasks: List[Task] = []
        self._listeners: Set[Listener] = set()
        self._load_failed = False
        self._backup_pending = False
        self._unread_payload: Optional[str] = None

    # ---------- events ----------
    def subscribe(self, callback: Listener) -> None:
        self._listeners.add(callback)

    def unsubscribe(self, callback: Listener) -> None:
        self._listeners.discard(callback)

    def _emit(self) -> None:
        for listener in list(self._listeners):
            try:
                listener()
            except Exception:
                logger.exception("Task listener %r failed", listener)

    # ---------- loading / reading ----------
    def load(self) -> List[Task]:
        """Read the collection from ``kv``.

        When the stored payload cannot be read, or only partly decodes, the
        store starts with what it could get and :attr:`load_failed` or the
        pending backup records it. The stored payload is copied to
        ``tasks.corrupt`` before the first write replaces it.
        """

        self._load_failed = False
        self._backup_pending = False
        self._unread_payload = None
        try:
            payload = self._kv.get(STORAGE_KEYS.tasks)
        except PersistenceError as exc:
            logger.error("Loading tasks failed, starting empty: %s", exc)
            self._load_failed = True
            self._backup_pending = True
            self._tasks = []
            return self.tasks

        decoded = decode_tasks(payload)
        self._tasks = decoded.tasks
        if decoded.lossy:
            self._load_failed = decoded.unreadable
            self._backup_pending = True
            self._unread_payload = payload
            logger.warning(
                "Tasks payload only partly decoded (%d record(s) dropped, unreadable=%s)",
                decoded.dropped,
                decoded.unreadable,
            )
        logger.info("Loaded %d task(s)", len(self._tasks))
        return self.tasks

    @property
    def load_failed(self) -> bool:
        """True when the last :meth:`load` could not read the stored tasks."""
        return self._load_failed

    @property
    def tasks(self) -> List[Task]:
        return list(self._tasks)

    def get(self, task_id: str) -> Optional[Task]:
        return task_ops.find_task(self._tasks, task_id)

    def tasks_for_day(self, day: int) -> List[Task]:
        return task_ops.tasks_for_day(self._tasks, day)

    # ---------- commit ----------
    def _commit(self, tasks: List[Task]) -> None:
        self._tasks = tasks
        self._persist()
        self._emit()

    def _preserve_unread(self) -> bool:
        if not self._backup_pending:
            return True
        payload = self._unread_payload
        try:
            if payload is None:
                payload = self._kv.get(STORAGE_KEYS.tasks)
            if payload:
                self._kv.set(STORAGE_KEYS.tasks_backup, payload)
        except PersistenceError as exc:
            logger.error("Backing up stored tasks failed: %s", exc)
            return False
        if payload:
            logger.warning("Stored tasks copied to %r before overwrite", STORAGE_KEYS.tasks_backup)
        self._backup_pending = False
        self._unread_payload = None
        return True

    def _persist(self) -> bool:
        if not self._preserve_unread():
            logger.error("Stored tasks left untouched until they can be backed up")
            return False
        try:
            self._kv.set(STORAGE_KEYS.tasks, dump_tasks(self._tasks))
        except PersistenceError as exc:
            logger.error("Persisting %d task(s) failed: %s", len(self._tasks), exc)
            return False
        return True

    def _new_id(self) -> str:
        existing = {t.id for t in self._tasks}
        task_id = self._id_factory()
        while task_id in existing:
            task_id = self._id_factory()
        return task_id

    # ---------- CRUD ----------
    def create(
        self,
        text: str,
        detail: str = "",
        day: int = 0,
        once: bool = False,
        time: TimeInput = None,
    ) -> Task:
        # Validate first so a rejected save never consumes an id.
        task_ops.validate_text(text)
        task_ops.validate_detail(detail)
        task_ops.validate_day(day)
        task_ops.validate_once(once)
        task_ops.validate_time(time)

        task = task_ops.build_task(
            self._new_id(), text, detail=detail, day=day, once=once, time=time
        )
        self._commit(task_ops.add_task(self._tasks, task))
        logger.debug("Task created id=%s day=%s once=%s", task.id, task.day, task.once)
        return task

    def update(self, task_id: str, **fields: Any) -> Task:
        tasks, updated = task_ops.edit_task(self._tasks, task_id, **fields)
        self._commit(tasks)
        logger.debug("Task updated id=%s fields=%s", task_id, sorted(fields))
        return updated

    def toggle_done(self, task_id: str) -> Optional[Task]:
        tasks, toggled = task_ops.toggle_task(self._tasks, task_id)
        if toggled is None:
            logger.debug("Toggle ignored, no task %s", task_id)
            return None
        self._commit(tasks)
        return toggled

    def delete(self, task_id: str) -> bool:
        tasks, removed = task_ops.remove_task(self._tasks, task_id)
        if not removed:
            logger.debug("Delete ignored, no task %s", task_id)
            return False
        self._commit(tasks)
        logger.debug("Task deleted id=%s", task_id)
        return True

    def delete_all(self) -> None:
        count = len(self._tasks)
        self._commit([])
        logger.info("Deleted all %d task(s)", count)

    def reset_weekly(self) -> None:
        before = len(self._tasks)
        self._commit(task_ops.reset_week(self._tasks))
        logger.info(
            "Weekly reset: %d task(s) kept, %d one-off task(s) removed",
            len(self._tasks),
            before - len(self._tasks),
        )

    # ---------- reset marker ----------
    def last_reset_week(self) -> Optional[int]:
        """Raises :class:`PersistenceError` when the marker cannot be read."""
        return load_week(self._kv.get(STORAGE_KEYS.last_reset_week))

    def record_reset_week(self, week: int) -> bool:
        try:
            self._kv.set(STORAGE_KEYS.last_reset_week, dump_week(week))
        except PersistenceError as exc:
            logger.error("Recording reset week %s failed: %s", week, exc)
            return False
        return True


__all__ = ["TaskStore"]
