# src/roi_tasks/tasks/task_board.py

from __future__ import annotations

"""
Consumer-facing task board.

Owns one TaskStore and exposes:
- read surface: tasks, derived_sorted, metrics, loading, error, last_deleted
- write surface: add/update/delete/undo/dismiss, delegated to the store
- load(): the one-shot asynchronous initial load

Derived views are recomputed from a store snapshot on every read, so there
is no window where a reader sees metrics for an older collection.
"""

import logging
from collections.abc import Mapping
from typing import Any

from ..core.ports import SeedGenerator, TaskLoader, TaskRepo
from ..errors import TaskLoadError
from .derive import aggregate_metrics, with_derived
from .normalize import normalize_tasks
from .ordering import order_for_display
from .seed import DEFAULT_SEED_COUNT
from .task_models import DerivedTask, Metrics, Task, UndoRecord
from .task_store import Clock, TaskStore

logger = logging.getLogger(__name__)

DEFAULT_LOAD_ERROR = "Failed to load tasks"


class TaskBoard:
    def __init__(
        self,
        loader: TaskLoader,
        seeder: SeedGenerator,
        *,
        store: TaskRepo | None = None,
        seed_count: int = DEFAULT_SEED_COUNT,
        strict_status: bool = True,
        clock: Clock | None = None,
    ) -> None:
        self._loader = loader
        self._seeder = seeder
        self._store: TaskRepo = store if store is not None else TaskStore(clock=clock)
        self._seed_count = max(0, int(seed_count))
        self._strict_status = strict_status
        self._clock = clock

        self._loading = True
        self._error: str | None = None
        self._started = False
        self._mounted = True

    # ---- lifecycle ----

    async def load(self) -> None:
        """
        Fetch, normalize and install the initial dataset. Runs at most once.

        - zero usable records -> seed generator fills in `seed_count` tasks
        - loader failure -> `error` is set and the collection stays empty
        - closed before the fetch settles -> the result is discarded
        Never raises (cancellation aside).
        """
        if self._started:
            logger.debug("TaskBoard.load called again; ignoring")
            return
        self._started = True

        try:
            data = await self._loader.fetch()
            now = self._clock() if self._clock is not None else None
            tasks = normalize_tasks(data, now=now, strict_status=self._strict_status)
            if not tasks:
                logger.info("No usable task records; generating %d seed tasks", self._seed_count)
                tasks = self._seeder.generate(self._seed_count)

            if not self._mounted:
                logger.info("TaskBoard closed before load settled; discarding %d tasks", len(tasks))
                return

            self._store.replace_all(tasks)
            self._error = None
            logger.info("Initial load complete total=%d", len(tasks))
        except TaskLoadError as e:
            if self._mounted:
                logger.warning("Initial task load failed: %s", e.message)
                self._error = e.message or DEFAULT_LOAD_ERROR
        except Exception as e:
            if self._mounted:
                logger.exception("Initial task load failed")
                self._error = str(e) or DEFAULT_LOAD_ERROR
        finally:
            if self._mounted:
                self._loading = False

    def close(self) -> None:
        """Mark the board as gone; a pending load will not apply its result."""
        self._mounted = False

    @property
    def closed(self) -> bool:
        return not self._mounted

    # ---- read surface ----

    @property
    def store(self) -> TaskRepo:
        return self._store

    @property
    def tasks(self) -> tuple[Task, ...]:
        return self._store.tasks

    @property
    def derived_sorted(self) -> list[DerivedTask]:
        return order_for_display(with_derived(self._store.tasks))

    @property
    def metrics(self) -> Metrics:
        return aggregate_metrics(self._store.tasks)

    @property
    def loading(self) -> bool:
        return self._loading

    @property
    def error(self) -> str | None:
        return self._error

    @property
    def last_deleted(self) -> UndoRecord | None:
        return self._store.last_deleted

    # ---- write surface ----

    def add_task(self, data: Mapping[str, Any] | None = None) -> Task:
        return self._store.add_task(data)

    def update_task(self, task_id: str, patch: Mapping[str, Any] | None = None) -> None:
        self._store.update_task(task_id, patch)

    def delete_task(self, task_id: str) -> None:
        self._store.delete_task(task_id)

    def undo_delete(self) -> None:
        self._store.undo_delete()

    def dismiss_undo(self) -> None:
        self._store.dismiss_undo()
