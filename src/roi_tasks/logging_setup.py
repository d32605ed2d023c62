# src/roi_tasks/logging_setup.py

from __future__ import annotations

import logging
import sys
from pathlib import Path

LOG_FORMAT = "%(asctime)s.%(msecs)03d %(levelname)s %(name)s: %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

# Loggers that chatter at INFO on every request.
QUIET_LOGGERS = ("httpx", "httpcore")


class _ConsoleNoiseFilter(logging.Filter):
    """Stderr shows everything from roi_tasks, and only errors from other loggers."""

    def filter(self, record: logging.LogRecord) -> bool:
        if record.name == "roi_tasks" or record.name.startswith("roi_tasks."):
            return True
        # py.warnings and library loggers alike
        return record.levelno >= logging.ERROR


def setup_logging(
    *,
    log_dir: str | Path = ".local/roi_tasks",
    console_level: int = logging.INFO,
    file_level: int = logging.DEBUG,
) -> None:
    """
    Route root logging to stderr and to `<log_dir>/roi_tasks.log`.

    The console copy is filtered down to task-board messages; the file keeps
    everything at `file_level` and above. Existing root handlers are dropped,
    so calling this again reconfigures rather than duplicates output.
    """
    log_dir = Path(log_dir)
    log_dir.mkdir(parents=True, exist_ok=True)

    root = logging.getLogger()
    root.setLevel(logging.DEBUG)
    for handler in list(root.handlers):
        root.removeHandler(handler)

    formatter = logging.Formatter(fmt=LOG_FORMAT, datefmt=DATE_FORMAT)

    console = logging.StreamHandler(sys.stderr)
    console.setLevel(console_level)
    console.setFormatter(formatter)
    console.addFilter(_ConsoleNoiseFilter())
    root.addHandler(console)

    log_file = logging.FileHandler(str(log_dir / "roi_tasks.log"), encoding="utf-8")
    log_file.setLevel(file_level)
    log_file.setFormatter(formatter)
    root.addHandler(log_file)

    logging.captureWarnings(True)

    for name in QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)
