import json

import pytest
from sqlalchemy.exc import OperationalError

from models.kv_entry import KeyValueEntry
from services.errors import PersistenceError
from storage.config import AppConfig, load_config, persist_config, save_config
from storage.kv import SqlKeyValueStore


def test_kv_set_get_overwrite(sql_kv, session_factory):
    assert sql_kv.get("tasks") is None

    sql_kv.set("tasks", "[]")
    sql_kv.set("tasks", '[{"id": "1"}]')
    assert sql_kv.get("tasks") == '[{"id": "1"}]'

    with session_factory() as session:
        assert session.get(KeyValueEntry, "tasks").updated_at is not None


def test_kv_wraps_database_errors():
    class BrokenSession:
        def __enter__(self):
            raise OperationalError("SELECT 1", {}, Exception("disk I/O error"))

        def __exit__(self, *exc):
            return False

    kv = SqlKeyValueStore(session_factory=BrokenSession)
    with pytest.raises(PersistenceError):
        kv.get("tasks")
    with pytest.raises(PersistenceError):
        kv.set("tasks", "[]")


def test_config_defaults_when_missing(tmp_path):
    assert load_config(tmp_path / "config.json") == AppConfig()


def test_config_round_trip(tmp_path):
    path = tmp_path / "nested" / "config.json"
    save_config(AppConfig(start_on_today=False, last_selected_day=4), path)
    assert load_config(path) == AppConfig(start_on_today=False, last_selected_day=4)

    assert persist_config(AppConfig(confirm_destructive=False), path) is True
    assert json.loads(path.read_text(encoding="utf-8"))["confirm_destructive"] is False
    assert not path.with_suffix(".tmp").exists()


def test_persist_config_logs_write_errors(tmp_path, caplog):
    # The target's parent is a regular file, so the directory cannot be created.
    blocker = tmp_path / "blocker"
    blocker.write_text("", encoding="utf-8")

    with caplog.at_level("ERROR", logger="weekly_task.config"):
        assert persist_config(AppConfig(), blocker / "config.json") is False
    assert "Saving config" in caplog.text


def test_config_ignores_corrupt_and_invalid_values(tmp_path):
    path = tmp_path / "config.json"
    path.write_text("{oops", encoding="utf-8")
    assert load_config(path) == AppConfig()

    path.write_text(
        json.dumps({"start_on_today": "yes", "last_selected_day": 12, "confirm_destructive": False}),
        encoding="utf-8",
    )
    assert load_config(path) == AppConfig(start_on_today=True, last_selected_day=None, confirm_destructive=False)
