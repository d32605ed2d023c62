# src/roi_tasks/core/ports.py

from __future__ import annotations

"""
Ports (interfaces) used by the task board.

The board depends on Protocols instead of concrete implementations.
This keeps the dataset source and the seed generator swappable and makes
testing easier.
"""

from collections.abc import Mapping
from typing import Any, Protocol

from ..tasks.task_models import Task, UndoRecord


class TaskLoader(Protocol):
    """
    Source of the initial dataset.

    fetch() returns decoded JSON (normally a list of loosely typed records)
    or raises TaskLoadError with a human-readable message.
    """

    async def fetch(self) -> Any: ...


class SeedGenerator(Protocol):
    """Fallback producer of well-formed tasks when the loader yields none."""

    def generate(self, n: int) -> list[Task]: ...


class TaskRepo(Protocol):
    # Read API
    @property
    def tasks(self) -> tuple[Task, ...]: ...
    @property
    def last_deleted(self) -> UndoRecord | None: ...

    # Initial load
    def replace_all(self, tasks: list[Task]) -> None: ...

    # Mutations
    def add_task(self, data: Mapping[str, Any] | None = None) -> Task: ...
    def update_task(self, task_id: str, patch: Mapping[str, Any] | None = None) -> None: ...
    def delete_task(self, task_id: str) -> None: ...
    def undo_delete(self) -> None: ...
    def dismiss_undo(self) -> None: ...
