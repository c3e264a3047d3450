import json

import pytest

from services.errors import NotFoundError, ValidationError
from services.task_store import TaskStore
from conftest import FakeKeyValueStore


def _stored_tasks(kv):
    return json.loads(kv.data["tasks"])


def test_create_preserves_fields_and_pads_time(store, fake_kv):
    task = store.create("Gym ", detail="legs", day=3, once=True, time="7:5:0")

    found = store.get(task.id)
    assert found == task
    assert found.text == "Gym "
    assert found.detail == "legs"
    assert found.day == 3
    assert found.once is True
    assert found.done is False
    assert found.time == "07:05:00"
    assert _stored_tasks(fake_kv) == [
        {"id": task.id, "text": "Gym ", "detail": "legs", "once": True, "day": 3, "done": False, "time": "07:05:00"}
    ]


def test_create_without_time_omits_the_key(store, fake_kv):
    task = store.create("Read")
    assert task.time is None
    assert "time" not in _stored_tasks(fake_kv)[0]


@pytest.mark.parametrize("title", ["", "   ", "\n\t"])
def test_create_with_blank_title_changes_nothing(fake_kv, title):
    calls = []

    def id_factory():
        calls.append(1)
        return "x"

    store = TaskStore(fake_kv, id_factory=id_factory)
    store.create("Keep")
    calls.clear()
    writes_before = len(fake_kv.writes)

    with pytest.raises(ValidationError):
        store.create(title, day=1)

    assert [t.text for t in store.tasks] == ["Keep"]
    assert calls == []
    assert len(fake_kv.writes) == writes_before


@pytest.mark.parametrize(
    "kwargs",
    [{"day": 7}, {"day": -1}, {"time": "24:00:00"}, {"time": (1, 2)}, {"once": "false"}, {"detail": 3}],
)
def test_create_rejects_invalid_fields(store, kwargs):
    with pytest.raises(ValidationError):
        store.create("Task", **kwargs)
    assert store.tasks == []


def test_ids_are_unique_even_if_factory_repeats(fake_kv):
    ids = iter(["a", "a", "a", "b"])
    store = TaskStore(fake_kv, id_factory=lambda: next(ids))
    first = store.create("One")
    second = store.create("Two")
    assert (first.id, second.id) == ("a", "b")


def test_update_replaces_fields_but_not_done(store):
    task = store.create("Old", day=0, time="01:00:00")
    store.toggle_done(task.id)

    updated = store.update(task.id, text="New", detail="d", day=5, once=True, time=(2, 3, 4))

    assert updated.text == "New"
    assert updated.detail == "d"
    assert updated.day == 5
    assert updated.once is True
    assert updated.time == "02:03:04"
    assert updated.done is True
    assert store.get(task.id) == updated


def test_update_missing_id_raises_and_keeps_collection(store, fake_kv):
    store.create("Only")
    before = store.tasks
    writes_before = len(fake_kv.writes)

    with pytest.raises(NotFoundError):
        store.update("1-missing", text="New")

    assert store.tasks == before
    assert len(fake_kv.writes) == writes_before


@pytest.mark.parametrize(
    "changes",
    [{"text": " "}, {"done": True}, {"day": 9}, {"colour": "red"}, {"once": "yes"}, {"detail": 1}],
)
def test_update_rejects_invalid_changes(store, changes):
    task = store.create("Stay")
    with pytest.raises(ValidationError):
        store.update(task.id, **changes)
    assert store.get(task.id) == task


def test_toggle_done_twice_restores(store):
    task = store.create("Flip")
    assert store.toggle_done(task.id).done is True
    assert store.toggle_done(task.id).done is False
    assert store.get(task.id) == task


def test_toggle_and_delete_missing_are_noops(store, fake_kv):
    store.create("Only")
    writes_before = len(fake_kv.writes)
    assert store.toggle_done("nope") is None
    assert store.delete("nope") is False
    assert len(fake_kv.writes) == writes_before


def test_delete_and_delete_all(store, fake_kv):
    a = store.create("A")
    b = store.create("B")
    assert store.delete(a.id) is True
    assert [t.id for t in store.tasks] == [b.id]

    store.delete_all()
    assert store.tasks == []
    assert _stored_tasks(fake_kv) == []


def test_reset_weekly_scenario(fake_kv):
    fake_kv.data["tasks"] = json.dumps(
        [
            {"id": "1", "text": "Gym", "detail": "", "day": 0, "once": False, "done": True},
            {"id": "2", "text": "Call", "detail": "", "day": 0, "once": True, "done": False},
        ]
    )
    store = TaskStore(fake_kv)
    store.load()

    store.reset_weekly()

    assert [t.to_record() for t in store.tasks] == [
        {"id": "1", "text": "Gym", "detail": "", "once": False, "day": 0, "done": False}
    ]
    assert _stored_tasks(fake_kv) == [t.to_record() for t in store.tasks]


def test_reset_weekly_is_idempotent(store):
    store.create("Weekly")
    once = store.create("Once", once=True)
    store.toggle_done(once.id)

    store.reset_weekly()
    first = store.tasks
    store.reset_weekly()
    assert store.tasks == first


def test_tasks_for_day_keeps_insertion_order(store):
    store.create("Mon 1", day=0)
    store.create("Tue", day=1)
    store.create("Mon 2", day=0)
    assert [t.text for t in store.tasks_for_day(0)] == ["Mon 1", "Mon 2"]


def test_tasks_property_is_a_copy(store):
    store.create("A")
    snapshot = store.tasks
    snapshot.clear()
    assert len(store.tasks) == 1


def test_write_failure_keeps_memory_state(store, fake_kv):
    fake_kv.fail_writes = True
    task = store.create("Offline")
    assert store.get(task.id) == task
    assert "tasks" not in fake_kv.data

    fake_kv.fail_writes = False
    store.toggle_done(task.id)
    assert _stored_tasks(fake_kv)[0]["done"] is True


def test_load_failure_starts_empty():
    kv = FakeKeyValueStore({"tasks": "[]"})
    kv.fail_reads = True
    store = TaskStore(kv)
    assert store.load() == []
    assert store.load_failed is True


TRUNCATED = '[{"id":"1","text":"Gym","day":0}'


def test_truncated_payload_is_backed_up_before_first_write():
    kv = FakeKeyValueStore({"tasks": TRUNCATED})
    store = TaskStore(kv, id_factory=lambda: "new")
    assert store.load() == []
    assert store.load_failed is True

    store.create("New")
    assert kv.data["tasks.corrupt"] == TRUNCATED
    assert [t["text"] for t in _stored_tasks(kv)] == ["New"]

    # Later writes leave the copy alone.
    store.toggle_done("new")
    assert kv.data["tasks.corrupt"] == TRUNCATED
    assert [key for key, _ in kv.writes].count("tasks.corrupt") == 1


def test_read_failure_backs_up_stored_tasks_once_readable():
    original = json.dumps([{"id": "1", "text": "Gym", "day": 0}])
    kv = FakeKeyValueStore({"tasks": original})
    kv.fail_read_keys.add("tasks")
    store = TaskStore(kv, id_factory=lambda: "new")
    store.load()

    kv.fail_read_keys.clear()
    store.create("New")
    assert kv.data["tasks.corrupt"] == original


def test_stored_tasks_untouched_while_backup_impossible():
    original = json.dumps([{"id": "1", "text": "Gym", "day": 0}])
    kv = FakeKeyValueStore({"tasks": original})
    kv.fail_read_keys.add("tasks")
    store = TaskStore(kv, id_factory=lambda: "new")
    store.load()

    task = store.create("New")
    assert store.get(task.id) == task
    assert kv.data["tasks"] == original
    assert "tasks.corrupt" not in kv.data


def test_dropped_records_are_backed_up_but_load_succeeds():
    payload = json.dumps([{"id": "1", "text": "Gym", "day": 0}, {"id": "2", "text": "Bad", "once": "false"}])
    kv = FakeKeyValueStore({"tasks": payload})
    store = TaskStore(kv)
    assert [t.id for t in store.load()] == ["1"]
    assert store.load_failed is False

    store.toggle_done("1")
    assert kv.data["tasks.corrupt"] == payload
    assert _stored_tasks(kv)[0]["done"] is True


def test_clean_load_writes_no_backup(store, fake_kv):
    store.create("A")
    store.delete_all()
    assert "tasks.corrupt" not in fake_kv.data
    assert store.load_failed is False


def test_listeners_called_after_commit_and_failures_isolated(store):
    seen = []

    def broken():
        raise RuntimeError("boom")

    store.subscribe(broken)
    store.subscribe(lambda: seen.append(len(store.tasks)))
    store.create("A")
    store.toggle_done("missing")
    assert seen == [1]

    store.unsubscribe(broken)
    store.delete_all()
    assert seen == [1, 0]


def test_reset_marker_round_trip(store, fake_kv):
    assert store.last_reset_week() is None
    assert store.record_reset_week(15) is True
    assert fake_kv.data["lastResetWeek"] == "15"
    assert store.last_reset_week() == 15


def test_store_over_sqlite(sql_kv):
    store = TaskStore(sql_kv)
    store.load()
    task = store.create("Persisted", day=2, time="10:00:00")

    reloaded = TaskStore(sql_kv)
    assert reloaded.load() == [task]
