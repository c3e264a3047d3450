"""Key-value persistence port and its SQLite adapter."""
from __future__ import annotations

import logging
from typing import Callable, Optional, Protocol

from sqlalchemy.exc import SQLAlchemyError
from sqlmodel import Session

from helpers.datetime_utils import utc_now
from models.kv_entry import KeyValueEntry
from services.errors import PersistenceError
from storage.db import get_session

logger = logging.getLogger("weekly_task.storage")


class KeyValueStore(Protocol):
    def get(self, key: str) -> Optional[str]:
        ...

    def set(self, key: str, value: str) -> None:
        ...


class SqlKeyValueStore:
    """``KeyValueStore`` over the ``kv_store`` table.

    Each call runs in its own session. Any SQLAlchemy failure is re-raised as
    :class:`PersistenceError` so callers never depend on the driver.
    """

    def __init__(self, session_factory: Callable[[], Session] = get_session):
        self._session_factory = session_factory

    def get(self, key: str) -> Optional[str]:
        try:
            with self._session_factory() as session:
                row = session.get(KeyValueEntry, key)
                return row.value if row else None
        except SQLAlchemyError as exc:
            logger.error("Read of %r failed: %s", key, exc)
            raise PersistenceError(f"Could not read {key!r}") from exc

    def set(self, key: str, value: str) -> None:
        try:
            with self._session_factory() as session:
                row = session.get(KeyValueEntry, key)
                if row is None:
                    row = KeyValueEntry(key=key, value=value)
                else:
                    row.value = value
                    row.updated_at = utc_now()
                session.add(row)
                session.commit()
        except SQLAlchemyError as exc:
            logger.error("Write of %r failed: %s", key, exc)
            raise PersistenceError(f"Could not write {key!r}") from exc
        logger.debug("Stored %r (%d chars)", key, len(value))


__all__ = ["KeyValueStore", "SqlKeyValueStore"]
