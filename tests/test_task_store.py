# tests/test_task_store.py

from __future__ import annotations

from datetime import timedelta

from roi_tasks.tasks.task_models import TaskPriority, TaskStatus, UndoRecord
from roi_tasks.tasks.task_store import TaskStore

from .fakes import FIXED_NOW

NOW_ISO = "2024-06-01T12:00:00.000Z"


def _seeded(store: TaskStore, *ids: str) -> None:
    for tid in ids:
        store.add_task({"id": tid, "title": f"Task {tid}", "revenue": 100, "timeTaken": 2})


def test_add_task_sanitizes_input(store: TaskStore) -> None:
    task = store.add_task(
        {"title": "   ", "revenue": "-3", "timeTaken": 0, "priority": "urgent", "status": "Nope"}
    )

    assert task.id
    assert task.title == "Untitled Task"
    assert task.revenue == 0
    assert task.time_taken == 1
    assert task.priority == TaskPriority.MEDIUM
    assert task.status == TaskStatus.TODO
    assert task.notes == ""
    assert task.created_at == NOW_ISO
    assert task.completed_at is None
    assert store.tasks == (task,)


def test_add_task_done_stamps_completed_at(store: TaskStore) -> None:
    task = store.add_task({"title": "Closed deal", "status": "Done"})
    assert task.completed_at == task.created_at == NOW_ISO


def test_add_task_appends_and_keeps_ids_unique(store: TaskStore) -> None:
    first = store.add_task({"id": "a", "title": "First"})
    second = store.add_task({"id": "a", "title": "Second"})
    third = store.add_task(None)

    assert first.id == "a"
    assert second.id != "a"
    assert [t.id for t in store.tasks] == ["a", second.id, third.id]


def test_update_unknown_id_is_noop(store: TaskStore) -> None:
    _seeded(store, "a")
    before = store.tasks
    store.update_task("missing", {"title": "x"})
    assert store.tasks == before


def test_update_merges_and_recoerces(store: TaskStore) -> None:
    _seeded(store, "a")
    store.update_task(
        "a",
        {
            "id": "hijack",
            "createdAt": "2000-01-01T00:00:00.000Z",
            "title": "  Renamed ",
            "revenue": "abc",
            "timeTaken": -4,
            "priority": "High",
            "notes": "called twice",
        },
    )
    task = store.get_task("a")

    assert task is not None
    assert store.get_task("hijack") is None
    assert task.created_at == NOW_ISO
    assert task.title == "Renamed"
    assert task.revenue == 0
    assert task.time_taken == 1
    assert task.priority == TaskPriority.HIGH
    assert task.notes == "called twice"


def test_update_blank_title_and_invalid_enums_keep_prior(store: TaskStore) -> None:
    _seeded(store, "a")
    store.update_task("a", {"title": "  ", "priority": "Urgent", "status": "Blocked"})
    task = store.get_task("a")

    assert task is not None
    assert task.title == "Task a"
    assert task.priority == TaskPriority.MEDIUM
    assert task.status == TaskStatus.TODO
    assert task.revenue == 100
    assert task.time_taken == 2


def test_completed_at_is_set_on_done_and_sticky() -> None:
    now = [FIXED_NOW]
    store = TaskStore(clock=lambda: now[0])
    _seeded(store, "a")

    now[0] = FIXED_NOW + timedelta(hours=3)
    store.update_task("a", {"status": "Done"})
    done = store.get_task("a")
    assert done is not None
    assert done.completed_at == "2024-06-01T15:00:00.000Z"

    now[0] = FIXED_NOW + timedelta(hours=5)
    store.update_task("a", {"status": "Todo", "completedAt": None})
    reopened = store.get_task("a")
    assert reopened is not None
    assert reopened.status == TaskStatus.TODO
    assert reopened.completed_at == "2024-06-01T15:00:00.000Z"

    store.update_task("a", {"status": "Done"})
    again = store.get_task("a")
    assert again is not None
    assert again.completed_at == "2024-06-01T15:00:00.000Z"


def test_update_to_done_uses_supplied_completed_at(store: TaskStore) -> None:
    _seeded(store, "a")
    store.update_task("a", {"status": "Done", "completedAt": "2024-05-01T08:00:00Z"})
    task = store.get_task("a")
    assert task is not None
    assert task.completed_at == "2024-05-01T08:00:00.000Z"


def test_update_ignores_out_of_range_completed_at(store: TaskStore) -> None:
    _seeded(store, "a", "b")
    store.update_task("a", {"completedAt": "0001-01-01T00:00:00+05:00"})
    store.update_task("b", {"status": "Done", "completedAt": "9999-12-31T23:00:00-05:00"})

    untouched = store.get_task("a")
    done = store.get_task("b")
    assert untouched is not None and untouched.completed_at is None
    assert done is not None and done.completed_at == NOW_ISO


def test_delete_then_undo_restores_exact_collection(store: TaskStore) -> None:
    _seeded(store, "a", "b", "c")
    before = store.tasks

    store.delete_task("b")
    assert [t.id for t in store.tasks] == ["a", "c"]
    assert store.last_deleted == UndoRecord(task=before[1], index=1)

    store.undo_delete()
    assert store.tasks == before
    assert store.last_deleted is None


def test_second_delete_overwrites_undo_slot(store: TaskStore) -> None:
    _seeded(store, "a", "b", "c")

    store.delete_task("a")
    store.delete_task("c")
    record = store.last_deleted
    assert record is not None
    assert record.task.id == "c"

    store.undo_delete()
    assert [t.id for t in store.tasks] == ["b", "c"]

    store.undo_delete()
    assert [t.id for t in store.tasks] == ["b", "c"]


def test_undo_index_is_clamped_when_collection_shrank(store: TaskStore) -> None:
    _seeded(store, "a", "b", "c", "d")
    store.delete_task("d")
    store.update_task("a", {"title": "still here"})

    # simulate the collection shrinking without touching the undo slot
    store._tasks = list(store.tasks[:1])  # noqa: SLF001
    store.undo_delete()

    assert [t.id for t in store.tasks] == ["a", "d"]


def test_delete_unknown_keeps_existing_undo(store: TaskStore) -> None:
    _seeded(store, "a", "b")
    store.delete_task("a")
    store.delete_task("zzz")

    record = store.last_deleted
    assert record is not None
    assert record.task.id == "a"


def test_dismiss_undo_clears_without_restoring(store: TaskStore) -> None:
    _seeded(store, "a", "b")
    store.delete_task("a")
    store.dismiss_undo()

    assert store.last_deleted is None
    store.undo_delete()
    assert [t.id for t in store.tasks] == ["b"]


def test_add_does_not_reuse_id_pending_undo(store: TaskStore) -> None:
    _seeded(store, "a")
    store.delete_task("a")
    clone = store.add_task({"id": "a", "title": "clone"})
    store.undo_delete()

    ids = [t.id for t in store.tasks]
    assert clone.id != "a"
    assert len(set(ids)) == len(ids) == 2


def test_replace_all_reassigns_duplicate_ids(store: TaskStore) -> None:
    _seeded(store, "a")
    task = store.tasks[0]
    store.delete_task("a")

    store.replace_all([task, task])

    ids = [t.id for t in store.tasks]
    assert ids[0] == "a"
    assert ids[1] != "a"
    assert store.last_deleted is None
