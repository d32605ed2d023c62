# src/roi_tasks/tasks/derive.py

"""
Per-task ROI and fleet-wide metrics.

Everything here is a pure function of the task list passed in. Callers
recompute on every read; nothing is cached.
"""

from __future__ import annotations

import math
from collections.abc import Iterable, Sequence

from .task_models import INITIAL_METRICS, DerivedTask, Metrics, PerformanceGrade, Task, TaskStatus

# (minimum average ROI, grade), highest first.
GRADE_THRESHOLDS: tuple[tuple[float, PerformanceGrade], ...] = (
    (500.0, PerformanceGrade.EXCELLENT),
    (200.0, PerformanceGrade.GOOD),
)


def compute_roi(task: Task) -> float:
    """Revenue per unit of time. 0 when the ratio is not a finite number."""
    if task.time_taken <= 0:
        return 0.0
    roi = task.revenue / task.time_taken
    return roi if math.isfinite(roi) else 0.0


def derive_roi(task: Task) -> DerivedTask:
    return DerivedTask(
        id=task.id,
        title=task.title,
        revenue=task.revenue,
        time_taken=task.time_taken,
        priority=task.priority,
        status=task.status,
        notes=task.notes,
        created_at=task.created_at,
        completed_at=task.completed_at,
        roi=compute_roi(task),
    )


def with_derived(tasks: Iterable[Task]) -> list[DerivedTask]:
    return [derive_roi(t) for t in tasks]


def compute_total_revenue(tasks: Iterable[Task]) -> float:
    return sum(t.revenue for t in tasks)


def compute_total_time(tasks: Iterable[Task]) -> float:
    return sum(t.time_taken for t in tasks)


def compute_time_efficiency(tasks: Sequence[Task]) -> float:
    """Share of total time that went into Done tasks, as a percentage."""
    total = compute_total_time(tasks)
    if total <= 0:
        return 0.0
    done = sum(t.time_taken for t in tasks if t.status == TaskStatus.DONE)
    return done / total * 100.0


def compute_revenue_per_hour(tasks: Sequence[Task]) -> float:
    total_time = compute_total_time(tasks)
    if total_time <= 0:
        return 0.0
    return compute_total_revenue(tasks) / total_time


def compute_average_roi(tasks: Sequence[Task]) -> float:
    if not tasks:
        return 0.0
    return sum(compute_roi(t) for t in tasks) / len(tasks)


def performance_grade(average_roi: float) -> PerformanceGrade:
    """Step function over average ROI; never decreases as ROI grows."""
    for minimum, grade in GRADE_THRESHOLDS:
        if average_roi >= minimum:
            return grade
    return PerformanceGrade.NEEDS_IMPROVEMENT


def aggregate_metrics(tasks: Sequence[Task]) -> Metrics:
    if not tasks:
        return INITIAL_METRICS

    total_revenue = compute_total_revenue(tasks)
    total_time = compute_total_time(tasks)
    average_roi = compute_average_roi(tasks)
    return Metrics(
        total_revenue=total_revenue,
        total_time_taken=total_time,
        time_efficiency_pct=compute_time_efficiency(tasks),
        revenue_per_hour=total_revenue / total_time if total_time > 0 else 0.0,
        average_roi=average_roi,
        performance_grade=performance_grade(average_roi),
    )
