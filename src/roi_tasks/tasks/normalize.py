# src/roi_tasks/tasks/normalize.py

"""
Input sanitization for loosely typed task records.

Every raw record maps to exactly one Task: nothing is rejected, malformed
fields are repaired with defaults instead. The same field coercions are
reused by TaskStore for add/update.
"""

from __future__ import annotations

import logging
import math
import uuid
from collections.abc import Mapping
from datetime import datetime, timedelta
from typing import Any

from .task_models import Task, TaskPriority, TaskStatus, format_iso, parse_iso, utc_now

logger = logging.getLogger(__name__)

ONE_DAY = timedelta(days=1)

# Raw records use camelCase keys; snake_case is accepted as well.
FIELD_ALIASES: dict[str, tuple[str, ...]] = {
    "id": ("id",),
    "title": ("title",),
    "revenue": ("revenue",),
    "time_taken": ("timeTaken", "time_taken"),
    "priority": ("priority",),
    "status": ("status",),
    "notes": ("notes",),
    "created_at": ("createdAt", "created_at"),
    "completed_at": ("completedAt", "completed_at"),
}

_MISSING: Any = object()

# Unsigned integer literals with a radix prefix, e.g. "0x10".
_RADIX_PREFIXES = {"0x": 16, "0o": 8, "0b": 2}


def new_task_id() -> str:
    return str(uuid.uuid4())


def pick(record: Mapping[str, Any], name: str, default: Any = None) -> Any:
    """Read a field by its canonical name, trying each accepted spelling."""
    for key in FIELD_ALIASES.get(name, (name,)):
        if key in record:
            return record[key]
    return default


def has_field(record: Mapping[str, Any], name: str) -> bool:
    return pick(record, name, _MISSING) is not _MISSING


def to_number(raw: Any) -> float:
    """
    Loose numeric coercion:
    - None and "" -> 0
    - bools -> 0/1
    - numeric strings -> parsed, including 0x/0o/0b integer literals
    - anything else -> NaN
    """
    if raw is None:
        return 0.0
    if isinstance(raw, bool):
        return 1.0 if raw else 0.0
    if isinstance(raw, (int, float)):
        try:
            return float(raw)
        except OverflowError:
            return math.inf
    if isinstance(raw, str):
        s = raw.strip()
        if not s:
            return 0.0
        if "_" in s:
            return math.nan
        base = _RADIX_PREFIXES.get(s[:2].lower())
        if base is not None:
            digits = s[2:]
            if not (digits.isascii() and digits.isalnum()):
                return math.nan
            try:
                return float(int(digits, base))
            except ValueError:
                return math.nan
            except OverflowError:
                return math.inf
        try:
            return float(s)
        except ValueError:
            return math.nan
    return math.nan


def coerce_revenue(raw: Any) -> float:
    value = to_number(raw)
    if not math.isfinite(value) or value < 0:
        return 0.0
    return value


def coerce_time_taken(raw: Any) -> float:
    value = to_number(raw)
    if not math.isfinite(value) or value <= 0:
        return 1.0
    return value


def coerce_priority(raw: Any) -> TaskPriority:
    return TaskPriority.parse(raw) or TaskPriority.MEDIUM


def coerce_notes(raw: Any) -> str:
    if raw is None:
        return ""
    return raw if isinstance(raw, str) else str(raw)


def clean_title(raw: Any) -> str:
    """Stripped title, or "" when the value is not usable."""
    if not isinstance(raw, str):
        return ""
    return raw.strip()


def _coerce_status(raw: Any, *, strict: bool) -> TaskStatus | str:
    status = TaskStatus.parse(raw)
    if status is not None:
        return status
    if raw is None:
        return TaskStatus.TODO
    if not strict and isinstance(raw, str) and raw:
        # Compatibility mode: unknown values survive normalization as-is.
        return raw
    return TaskStatus.TODO


def _is_valid_id(raw: Any) -> bool:
    return isinstance(raw, str) and raw != ""


def normalize_task(
    record: Any,
    index: int,
    *,
    now: datetime,
    seen_ids: set[str],
    strict_status: bool = True,
) -> Task:
    """Repair one raw record. `seen_ids` is updated with the id that was assigned."""
    rec: Mapping[str, Any] = record if isinstance(record, Mapping) else {}
    repaired: list[str] = []

    raw_id = pick(rec, "id")
    if _is_valid_id(raw_id) and raw_id not in seen_ids:
        task_id = raw_id
    else:
        task_id = new_task_id()
        repaired.append("id")
    seen_ids.add(task_id)

    created = parse_iso(pick(rec, "created_at"))
    if created is None:
        # Older the further down the input: input order acts as recency.
        created = now - (index + 1) * ONE_DAY
        repaired.append("createdAt")

    status = _coerce_status(pick(rec, "status"), strict=strict_status)

    completed = parse_iso(pick(rec, "completed_at"))
    if completed is None and status == TaskStatus.DONE:
        try:
            completed = created + ONE_DAY
        except OverflowError:
            completed = created
        repaired.append("completedAt")

    title = clean_title(pick(rec, "title"))
    if not title:
        title = f"Untitled {index + 1}"
        repaired.append("title")

    task = Task(
        id=task_id,
        title=title,
        revenue=coerce_revenue(pick(rec, "revenue")),
        time_taken=coerce_time_taken(pick(rec, "time_taken")),
        priority=coerce_priority(pick(rec, "priority")),
        status=status,  # type: ignore[arg-type]
        notes=coerce_notes(pick(rec, "notes")),
        created_at=format_iso(created),
        completed_at=format_iso(completed) if completed is not None else None,
    )
    if repaired:
        logger.debug("Normalized record index=%s repaired=%s", index, ",".join(repaired))
    return task


def normalize_tasks(
    raw: Any,
    *,
    now: datetime | None = None,
    strict_status: bool = True,
) -> list[Task]:
    """
    Turn an untrusted sequence of records into well-formed Tasks.

    Never raises. Non-sequence input yields []. Output length always equals
    input length and output ids are pairwise distinct.
    """
    if not isinstance(raw, (list, tuple)):
        if raw is not None:
            logger.warning("Task payload is not a list (got %s); using empty set", type(raw).__name__)
        return []

    if now is None:
        now = utc_now()

    seen: set[str] = set()
    out = [
        normalize_task(rec, idx, now=now, seen_ids=seen, strict_status=strict_status)
        for idx, rec in enumerate(raw)
    ]
    logger.info("Normalized %d task records", len(out))
    return out
