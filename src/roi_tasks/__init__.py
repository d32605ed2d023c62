# src/roi_tasks/__init__.py

"""In-memory task store with ROI metrics, deterministic ordering and single-level undo."""

from __future__ import annotations

from .bootstrap import create_task_board, start_task_board
from .errors import RoiTasksError, TaskLoadError
from .tasks.derive import aggregate_metrics, derive_roi
from .tasks.normalize import normalize_tasks
from .tasks.ordering import order_for_display
from .tasks.task_board import TaskBoard
from .tasks.task_models import (
    DerivedTask,
    Metrics,
    PerformanceGrade,
    Task,
    TaskPriority,
    TaskStatus,
    UndoRecord,
)
from .tasks.task_store import TaskStore

__all__ = [
    "DerivedTask",
    "Metrics",
    "PerformanceGrade",
    "RoiTasksError",
    "Task",
    "TaskBoard",
    "TaskLoadError",
    "TaskPriority",
    "TaskStatus",
    "TaskStore",
    "UndoRecord",
    "aggregate_metrics",
    "create_task_board",
    "derive_roi",
    "normalize_tasks",
    "order_for_display",
    "start_task_board",
]
