# src/roi_tasks/bootstrap.py

"""
Composition root.

- reads settings once (or takes injected ones),
- optionally configures logging,
- wires the loader, seed generator and store into a TaskBoard,
- runs the initial load.

The host owns the returned board and passes it to whatever needs it.
"""

from __future__ import annotations

import logging

from .config import get_settings
from .core.ports import SeedGenerator, TaskLoader
from .logging_setup import setup_logging
from .tasks.seed import SalesTaskSeeder
from .tasks.task_board import TaskBoard
from .tasks.task_loader import make_loader

logger = logging.getLogger(__name__)


def configure_logging(settings) -> None:
    level_name = str(getattr(settings, "log_level", "INFO")).upper()
    console_level = getattr(logging, level_name, logging.INFO)
    setup_logging(log_dir=getattr(settings, "log_dir", ".local/roi_tasks"), console_level=console_level)


def create_task_board(
    *,
    settings=None,
    loader: TaskLoader | None = None,
    seeder: SeedGenerator | None = None,
) -> TaskBoard:
    """
    Build a TaskBoard from settings.

    Keeping settings and collaborators injectable makes the board easy to
    test and avoids hidden global config reads. If settings is None, falls
    back to get_settings().
    """
    if settings is None:
        settings = get_settings()

    if loader is None:
        loader = make_loader(settings.tasks_source, timeout=settings.load_timeout_seconds)
    if seeder is None:
        seeder = SalesTaskSeeder()

    return TaskBoard(
        loader,
        seeder,
        seed_count=settings.seed_count,
        strict_status=settings.strict_status,
    )


async def start_task_board(
    *,
    settings=None,
    loader: TaskLoader | None = None,
    seeder: SeedGenerator | None = None,
    init_logging: bool = False,
) -> TaskBoard:
    """Create a board and await its initial load. Load errors end up in board.error."""
    if settings is None:
        settings = get_settings()
    if init_logging:
        configure_logging(settings)

    logger.info("Starting %s...", getattr(settings, "app_name", "roi-tasks"))
    board = create_task_board(settings=settings, loader=loader, seeder=seeder)
    await board.load()
    return board
