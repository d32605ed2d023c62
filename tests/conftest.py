# tests/conftest.py

from __future__ import annotations

from pathlib import Path
from types import SimpleNamespace

import pytest

from roi_tasks.tasks.task_store import TaskStore

from .fakes import FIXED_NOW


@pytest.fixture()
def settings(tmp_path: Path) -> SimpleNamespace:
    """Stand-in for `Settings` pointing every path into tmp_path; no env or .env is read."""
    return SimpleNamespace(
        app_name="roi-tasks-test",
        log_level="INFO",
        log_dir=tmp_path / "logs",
        tasks_source=str(tmp_path / "tasks.json"),
        load_timeout_seconds=1.0,
        seed_count=5,
        strict_status=True,
    )


@pytest.fixture()
def clock():
    return lambda: FIXED_NOW


@pytest.fixture()
def store(clock) -> TaskStore:
    return TaskStore(clock=clock)
