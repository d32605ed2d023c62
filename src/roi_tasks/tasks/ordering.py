# src/roi_tasks/tasks/ordering.py

from __future__ import annotations

from collections.abc import Iterable

from .task_models import DerivedTask, TaskPriority


def priority_rank(priority: object) -> int:
    """High=3, Medium=2, anything else ranks as Low."""
    parsed = priority if isinstance(priority, TaskPriority) else TaskPriority.parse(priority)
    return parsed.rank if parsed is not None else 1


def order_for_display(derived: Iterable[DerivedTask]) -> list[DerivedTask]:
    """
    Deterministic total order for display:

      1. roi          desc
      2. priority     desc (High > Medium > Low)
      3. created_at   desc (ISO-8601 strings compare by instant)
      4. title        asc
      5. id           asc  (ids are unique, so no two rows tie)

    Implemented as stable passes from the least significant key up, since
    string keys cannot be negated. The input is never mutated.
    """
    out = list(derived)
    out.sort(key=lambda t: t.id)
    out.sort(key=lambda t: t.title)
    out.sort(key=lambda t: t.created_at, reverse=True)
    out.sort(key=lambda t: priority_rank(t.priority), reverse=True)
    out.sort(key=lambda t: t.roi, reverse=True)
    return out
