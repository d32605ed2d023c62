# src/roi_tasks/tasks/task_models.py

from __future__ import annotations

import math
from dataclasses import dataclass, fields
from datetime import datetime, timezone
from enum import StrEnum
from typing import Any


class TaskPriority(StrEnum):
    HIGH = "High"
    MEDIUM = "Medium"
    LOW = "Low"

    @property
    def rank(self) -> int:
        return _PRIORITY_RANK[self]

    @classmethod
    def parse(cls, raw: Any) -> TaskPriority | None:
        """Exact match against the enum values; anything else is None."""
        if not isinstance(raw, str):
            return None
        try:
            return cls(raw)
        except ValueError:
            return None


_PRIORITY_RANK = {
    TaskPriority.HIGH: 3,
    TaskPriority.MEDIUM: 2,
    TaskPriority.LOW: 1,
}


class TaskStatus(StrEnum):
    """
    Task lifecycle status.

    Notes:
    - values keep the original record spelling ("InProgress", not "in_progress")
      so raw JSON round-trips without a mapping table.
    """

    TODO = "Todo"
    IN_PROGRESS = "InProgress"
    DONE = "Done"

    @classmethod
    def parse(cls, raw: Any) -> TaskStatus | None:
        if not isinstance(raw, str):
            return None
        try:
            return cls(raw)
        except ValueError:
            return None


class PerformanceGrade(StrEnum):
    NEEDS_IMPROVEMENT = "Needs Improvement"
    GOOD = "Good"
    EXCELLENT = "Excellent"

    @property
    def rank(self) -> int:
        return _GRADE_RANK[self]


_GRADE_RANK = {
    PerformanceGrade.NEEDS_IMPROVEMENT: 0,
    PerformanceGrade.GOOD: 1,
    PerformanceGrade.EXCELLENT: 2,
}


# ---- timestamps ----

def format_iso(dt: datetime) -> str:
    """UTC ISO-8601 with millisecond precision and a Z suffix (sorts lexicographically)."""
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=timezone.utc)
    dt = dt.astimezone(timezone.utc).replace(tzinfo=None)
    return dt.isoformat(timespec="milliseconds") + "Z"


def parse_iso(raw: Any) -> datetime | None:
    """
    Parse a timestamp from a loosely typed record.

    Accepts ISO-8601 strings (naive values are taken as UTC) and numbers as
    epoch milliseconds. Returns None for anything unparseable.
    """
    if raw is None or isinstance(raw, bool):
        return None

    if isinstance(raw, (int, float)):
        if not math.isfinite(raw):
            return None
        try:
            return datetime.fromtimestamp(raw / 1000.0, tz=timezone.utc)
        except (OverflowError, OSError, ValueError):
            return None

    if not isinstance(raw, str):
        return None

    s = raw.strip()
    if not s:
        return None
    try:
        dt = datetime.fromisoformat(s)
    except ValueError:
        return None
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=timezone.utc)
    try:
        return dt.astimezone(timezone.utc)
    except (OverflowError, ValueError):
        # offset pushes the instant outside the representable range
        return None


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


# ---- entities ----

_CAMEL_KEYS = {
    "time_taken": "timeTaken",
    "created_at": "createdAt",
    "completed_at": "completedAt",
    "revenue_per_hour": "revenuePerHour",
    "total_revenue": "totalRevenue",
    "total_time_taken": "totalTimeTaken",
    "time_efficiency_pct": "timeEfficiencyPct",
    "average_roi": "averageROI",
    "performance_grade": "performanceGrade",
}


def _to_camel_dict(obj: Any) -> dict[str, Any]:
    out: dict[str, Any] = {}
    for f in fields(obj):
        value = getattr(obj, f.name)
        if isinstance(value, StrEnum):
            value = value.value
        out[_CAMEL_KEYS.get(f.name, f.name)] = value
    return out


@dataclass(frozen=True, slots=True)
class Task:
    id: str
    title: str
    revenue: float
    time_taken: float
    priority: TaskPriority
    status: TaskStatus
    notes: str
    created_at: str
    completed_at: str | None = None

    def to_dict(self) -> dict[str, Any]:
        return _to_camel_dict(self)


@dataclass(frozen=True, slots=True)
class DerivedTask:
    """A Task plus its computed ROI. Built on every read, never stored."""

    id: str
    title: str
    revenue: float
    time_taken: float
    priority: TaskPriority
    status: TaskStatus
    notes: str
    created_at: str
    completed_at: str | None
    roi: float

    def to_dict(self) -> dict[str, Any]:
        return _to_camel_dict(self)


@dataclass(frozen=True, slots=True)
class Metrics:
    total_revenue: float
    total_time_taken: float
    time_efficiency_pct: float
    revenue_per_hour: float
    average_roi: float
    performance_grade: PerformanceGrade

    def to_dict(self) -> dict[str, Any]:
        return _to_camel_dict(self)


INITIAL_METRICS = Metrics(
    total_revenue=0.0,
    total_time_taken=0.0,
    time_efficiency_pct=0.0,
    revenue_per_hour=0.0,
    average_roi=0.0,
    performance_grade=PerformanceGrade.NEEDS_IMPROVEMENT,
)


@dataclass(frozen=True, slots=True)
class UndoRecord:
    """The most recently deleted task and where it sat in the collection."""

    task: Task
    index: int
