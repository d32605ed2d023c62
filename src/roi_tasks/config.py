# src/roi_tasks/config.py

"""Centralized settings loaded from environment variables (+ optional .env).

Design goals:
- One Settings object for the whole app (normal "settings layer").
- Nothing required at import time; every value has a default.
- Malformed values fall back to defaults instead of failing startup.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from functools import lru_cache
from pathlib import Path

from dotenv import find_dotenv, load_dotenv

ENV_PREFIX = "ROI_TASKS"


def _k(suffix: str) -> str:
    """Build env var name with the project prefix."""
    return f"{ENV_PREFIX}_{suffix}"


def _env(name: str, default: str = "") -> str:
    v = os.getenv(name)
    return default if v is None else v


def _env_bool(name: str, default: bool) -> bool:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    return raw.strip().lower() in {"1", "true", "yes", "y", "on"}


def _env_int(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        return int(raw)
    except ValueError:
        return default


def _env_float(name: str, default: float) -> float:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        return float(raw)
    except ValueError:
        return default


def _env_path(name: str, default: Path) -> Path:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    return Path(raw).expanduser()


@dataclass(frozen=True, slots=True)
class Settings:
    # ---- App / logging ----
    app_name: str
    log_level: str
    log_dir: Path

    # ---- Initial load ----
    tasks_source: str
    load_timeout_seconds: float
    seed_count: int

    # ---- Normalization ----
    strict_status: bool

    @staticmethod
    def from_env() -> "Settings":
        load_dotenv(find_dotenv(usecwd=True), override=False)

        app_name = _env(_k("APP_NAME"), "roi-tasks").strip() or "roi-tasks"
        log_level = _env(_k("LOG_LEVEL"), "INFO").strip().upper() or "INFO"
        log_dir = _env_path(_k("LOG_DIR"), Path(".local/roi_tasks"))

        tasks_source = _env(_k("SOURCE"), "tasks.json").strip() or "tasks.json"
        load_timeout_seconds = _env_float(_k("LOAD_TIMEOUT_SECONDS"), 10.0)
        if load_timeout_seconds <= 0:
            load_timeout_seconds = 10.0
        seed_count = max(0, _env_int(_k("SEED_COUNT"), 50))

        # false = keep unknown status strings as-is (legacy datasets)
        strict_status = _env_bool(_k("STRICT_STATUS"), True)

        return Settings(
            app_name=app_name,
            log_level=log_level,
            log_dir=log_dir,
            tasks_source=tasks_source,
            load_timeout_seconds=load_timeout_seconds,
            seed_count=seed_count,
            strict_status=strict_status,
        )


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    return Settings.from_env()
