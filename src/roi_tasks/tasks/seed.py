# src/roi_tasks/tasks/seed.py

"""Synthetic sales-pipeline tasks, used when the loaded dataset is empty."""

from __future__ import annotations

import logging
import random
from datetime import datetime, timedelta

from .normalize import new_task_id
from .task_models import Task, TaskPriority, TaskStatus, format_iso, utc_now

logger = logging.getLogger(__name__)

DEFAULT_SEED_COUNT = 50

_ACTIONS = (
    "Follow up with",
    "Prepare proposal for",
    "Demo call with",
    "Negotiate renewal with",
    "Send pricing to",
    "Onboarding session for",
    "Quarterly review with",
    "Cold outreach to",
)

_ACCOUNTS = (
    "Acme Corp",
    "Globex",
    "Initech",
    "Umbrella Health",
    "Stark Logistics",
    "Wayne Retail",
    "Hooli",
    "Soylent Foods",
    "Vandelay Imports",
    "Wonka Labs",
)

_NOTES = (
    "",
    "",
    "Decision maker is the CFO.",
    "Asked for a discount on annual plan.",
    "Waiting on legal review.",
    "Warm lead from conference.",
)

_STATUS_WEIGHTS = (
    (TaskStatus.TODO, 4),
    (TaskStatus.IN_PROGRESS, 3),
    (TaskStatus.DONE, 3),
)


def _make_task(rng: random.Random, now: datetime) -> Task:
    status = rng.choices([s for s, _ in _STATUS_WEIGHTS], weights=[w for _, w in _STATUS_WEIGHTS])[0]
    created = now - timedelta(days=rng.randint(1, 60), minutes=rng.randint(0, 24 * 60 - 1))

    completed_at = None
    if status == TaskStatus.DONE:
        completed = created + timedelta(hours=rng.randint(1, 72))
        completed_at = format_iso(min(completed, now))

    return Task(
        id=new_task_id(),
        title=f"{rng.choice(_ACTIONS)} {rng.choice(_ACCOUNTS)}",
        revenue=float(rng.randrange(0, 20_001, 50)),
        time_taken=float(rng.randint(1, 40)),
        priority=rng.choice(list(TaskPriority)),
        status=status,
        notes=rng.choice(_NOTES),
        created_at=format_iso(created),
        completed_at=completed_at,
    )


def generate_sales_tasks(
    n: int = DEFAULT_SEED_COUNT,
    *,
    rng: random.Random | None = None,
    now: datetime | None = None,
) -> list[Task]:
    """Return `n` valid tasks with unique ids. n <= 0 yields []."""
    rng = rng or random.Random()
    now = now or utc_now()
    tasks = [_make_task(rng, now) for _ in range(max(0, int(n)))]
    logger.info("Generated %d seed tasks", len(tasks))
    return tasks


class SalesTaskSeeder:
    """SeedGenerator port over generate_sales_tasks (optionally deterministic)."""

    def __init__(self, *, seed: int | None = None) -> None:
        self._rng = random.Random(seed)

    def generate(self, n: int) -> list[Task]:
        return generate_sales_tasks(n, rng=self._rng)
