# weekly_task/storage/db.py
from __future__ import annotations

from pathlib import Path
from typing import Optional

from sqlalchemy.engine import Engine
from sqlmodel import SQLModel, Session, create_engine

from core.settings import DB_PATH

# Ensure SQLModel metadata is populated
import models.kv_entry  # noqa: F401


_engine: Optional[Engine] = None


def create_db_engine(path: Optional[Path] = None) -> Engine:
    target = Path(path or DB_PATH)
    target.parent.mkdir(parents=True, exist_ok=True)
    return create_engine(f"sqlite:///{target.as_posix()}", echo=False)


def get_engine() -> Engine:
    """Return (and lazily create) the engine for the application database."""

    global _engine
    if _engine is None:
        _engine = create_db_engine()
    return _engine


def init_db(engine: Optional[Engine] = None) -> Engine:
    actual_engine = engine or get_engine()
    SQLModel.metadata.create_all(actual_engine)
    return actual_engine


def get_session() -> Session:
    return Session(get_engine())


__all__ = ["create_db_engine", "get_engine", "get_session", "init_db"]
