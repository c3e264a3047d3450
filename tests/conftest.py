from typing import Dict, Optional, Set

import pytest
from sqlmodel import Session, SQLModel, create_engine

import models  # noqa: F401
from services.errors import PersistenceError
from services.task_store import TaskStore
from storage.kv import SqlKeyValueStore


class FakeKeyValueStore:
    """In-memory stand-in for :class:`SqlKeyValueStore` with switchable failures."""

    def __init__(self, data: Optional[Dict[str, str]] = None):
        self.data: Dict[str, str] = dict(data or {})
        self.fail_reads = False
        self.fail_read_keys: Set[str] = set()
        self.fail_writes = False
        self.writes: list[tuple[str, str]] = []

    def get(self, key):
        if self.fail_reads or key in self.fail_read_keys:
            raise PersistenceError(f"read {key}")
        return self.data.get(key)

    def set(self, key, value):
        if self.fail_writes:
            raise PersistenceError(f"write {key}")
        self.data[key] = value
        self.writes.append((key, value))


@pytest.fixture()
def session_factory():
    engine = create_engine("sqlite:///:memory:")
    SQLModel.metadata.create_all(engine)

    def factory():
        return Session(engine)

    return factory


@pytest.fixture()
def sql_kv(session_factory):
    return SqlKeyValueStore(session_factory=session_factory)


@pytest.fixture()
def fake_kv():
    return FakeKeyValueStore()


@pytest.fixture()
def store(fake_kv):
    counter = iter(range(1, 10_000))
    task_store = TaskStore(fake_kv, id_factory=lambda: str(next(counter)))
    task_store.load()
    return task_store
