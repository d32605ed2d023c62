# src/roi_tasks/tasks/task_store.py

from __future__ import annotations

import dataclasses
import logging
import threading
from collections.abc import Callable, Iterable, Mapping
from datetime import datetime
from typing import Any

from .normalize import (
    clean_title,
    coerce_notes,
    coerce_priority,
    coerce_revenue,
    coerce_time_taken,
    has_field,
    new_task_id,
    pick,
)
from .task_models import Task, TaskPriority, TaskStatus, UndoRecord, format_iso, parse_iso, utc_now

logger = logging.getLogger(__name__)

Clock = Callable[[], datetime]


class TaskStore:
    """
    In-memory task store with a single-slot undo for deletes.

    The collection keeps insertion order. That order has no display meaning;
    it only decides where an undone delete is put back.

    Thread-safety:
    - every operation runs under one re-entrant lock
    - mutations build a new list and publish it with a single assignment,
      so readers only ever see committed snapshots

    No operation raises on bad input: fields are coerced to defaults, and
    unknown ids are no-ops.
    """

    def __init__(
        self,
        tasks: Iterable[Task] = (),
        *,
        clock: Clock | None = None,
    ) -> None:
        self._lock = threading.RLock()
        self._clock: Clock = clock or utc_now
        self._tasks: list[Task] = []
        self._last_deleted: UndoRecord | None = None
        self.replace_all(tasks)

    # ---- low-level helpers ----

    def _now_iso(self) -> str:
        return format_iso(self._clock())

    def _index_of(self, task_id: str) -> int | None:
        for idx, task in enumerate(self._tasks):
            if task.id == task_id:
                return idx
        return None

    def _taken_ids(self) -> set[str]:
        taken = {t.id for t in self._tasks}
        if self._last_deleted is not None:
            # keep the pending undo restorable without an id clash
            taken.add(self._last_deleted.task.id)
        return taken

    def _apply_patch(self, current: Task, patch: Mapping[str, Any]) -> Task:
        changes: dict[str, Any] = {}

        if has_field(patch, "title"):
            title = clean_title(pick(patch, "title"))
            if title:
                changes["title"] = title

        changes["revenue"] = coerce_revenue(pick(patch, "revenue", current.revenue))
        changes["time_taken"] = coerce_time_taken(pick(patch, "time_taken", current.time_taken))

        if has_field(patch, "priority"):
            priority = TaskPriority.parse(pick(patch, "priority"))
            if priority is not None:
                changes["priority"] = priority

        status = current.status
        if has_field(patch, "status"):
            parsed = TaskStatus.parse(pick(patch, "status"))
            if parsed is not None:
                status = parsed
                changes["status"] = parsed

        if has_field(patch, "notes"):
            changes["notes"] = coerce_notes(pick(patch, "notes"))

        # completed_at is sticky: it can be filled in, never cleared.
        completed_at = current.completed_at
        if completed_at is None and has_field(patch, "completed_at"):
            supplied = parse_iso(pick(patch, "completed_at"))
            if supplied is not None:
                completed_at = format_iso(supplied)
        if current.status != TaskStatus.DONE and status == TaskStatus.DONE and completed_at is None:
            completed_at = self._now_iso()
        changes["completed_at"] = completed_at

        return dataclasses.replace(current, **changes)

    # ---- public API ----

    @property
    def tasks(self) -> tuple[Task, ...]:
        with self._lock:
            return tuple(self._tasks)

    @property
    def last_deleted(self) -> UndoRecord | None:
        with self._lock:
            return self._last_deleted

    def count_tasks(self) -> int:
        with self._lock:
            return len(self._tasks)

    def get_task(self, task_id: str) -> Task | None:
        with self._lock:
            idx = self._index_of(task_id)
            return self._tasks[idx] if idx is not None else None

    def replace_all(self, tasks: Iterable[Task]) -> None:
        """Swap in a whole collection (initial load). Clears the undo slot."""
        seen: set[str] = set()
        fresh: list[Task] = []
        for task in tasks:
            if task.id in seen or not task.id:
                new_id = new_task_id()
                logger.warning("Duplicate task id=%r on replace; reassigned to %s", task.id, new_id)
                task = dataclasses.replace(task, id=new_id)
            seen.add(task.id)
            fresh.append(task)

        with self._lock:
            self._tasks = fresh
            self._last_deleted = None
        logger.info("TaskStore ready total=%s", len(fresh))

    def add_task(self, data: Mapping[str, Any] | None = None) -> Task:
        """
        Create a task from loosely typed input and append it.

        Uses the same coercions as normalization, except:
        - blank title -> "Untitled Task"
        - invalid status -> Todo (no pass-through)
        - created_at is now; completed_at is now iff status is Done
        """
        data = data if isinstance(data, Mapping) else {}

        with self._lock:
            raw_id = pick(data, "id")
            task_id = raw_id if isinstance(raw_id, str) and raw_id else None
            if task_id is None or task_id in self._taken_ids():
                if task_id is not None:
                    logger.debug("add_task: id %s already in use; generating a new one", task_id)
                task_id = new_task_id()

            status = TaskStatus.parse(pick(data, "status")) or TaskStatus.TODO
            created_at = self._now_iso()

            task = Task(
                id=task_id,
                title=clean_title(pick(data, "title")) or "Untitled Task",
                revenue=coerce_revenue(pick(data, "revenue")),
                time_taken=coerce_time_taken(pick(data, "time_taken")),
                priority=coerce_priority(pick(data, "priority")),
                status=status,
                notes=coerce_notes(pick(data, "notes")),
                created_at=created_at,
                completed_at=created_at if status == TaskStatus.DONE else None,
            )
            self._tasks = [*self._tasks, task]

        logger.debug("Task added id=%s status=%s priority=%s", task.id, task.status, task.priority)
        return task

    def update_task(self, task_id: str, patch: Mapping[str, Any] | None = None) -> None:
        """
        Merge `patch` onto an existing task. Unknown ids are ignored.

        - id and created_at are immutable; patch values for them are ignored
        - revenue/time_taken are re-coerced
        - invalid priority/status and blank titles keep the prior value
        - entering Done stamps completed_at if the task has none
        """
        patch = patch if isinstance(patch, Mapping) else {}

        with self._lock:
            idx = self._index_of(task_id)
            if idx is None:
                logger.debug("update_task: unknown id=%s (no-op)", task_id)
                return
            updated = self._apply_patch(self._tasks[idx], patch)
            tasks = list(self._tasks)
            tasks[idx] = updated
            self._tasks = tasks

        logger.debug("Task updated id=%s status=%s", task_id, updated.status)

    def delete_task(self, task_id: str) -> None:
        """Remove a task and remember it for undo (replacing any older undo)."""
        with self._lock:
            idx = self._index_of(task_id)
            if idx is None:
                logger.debug("delete_task: unknown id=%s (no-op)", task_id)
                return
            target = self._tasks[idx]
            self._tasks = [*self._tasks[:idx], *self._tasks[idx + 1:]]
            self._last_deleted = UndoRecord(task=target, index=idx)

        logger.debug("Task deleted id=%s index=%s", task_id, idx)

    def undo_delete(self) -> None:
        """Put the last deleted task back at its old index, clamped to the current bounds."""
        with self._lock:
            record = self._last_deleted
            if record is None:
                return
            idx = min(max(0, record.index), len(self._tasks))
            tasks = list(self._tasks)
            tasks.insert(idx, record.task)
            self._tasks = tasks
            self._last_deleted = None

        logger.debug("Undo delete id=%s index=%s", record.task.id, idx)

    def dismiss_undo(self) -> None:
        with self._lock:
            self._last_deleted = None
