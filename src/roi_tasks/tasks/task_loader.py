# src/roi_tasks/tasks/task_loader.py

"""
Initial dataset loaders.

Both loaders return decoded JSON untouched; shaping it into Tasks is the
normalizer's job. Failures surface as TaskLoadError with a message that can
be shown to a user as-is.
"""

from __future__ import annotations

import asyncio
import json
import logging
from pathlib import Path
from typing import Any
from urllib.parse import urlsplit

import httpx

from ..errors import TaskLoadError

logger = logging.getLogger(__name__)


def _source_name(source: str) -> str:
    path = urlsplit(source).path if "://" in source else source
    name = path.rstrip("/").rsplit("/", 1)[-1]
    return name or source


def _make_timeout(timeout_s: float) -> httpx.Timeout:
    # connect stays short; read is what slow static hosts need
    connect_s = min(5.0, timeout_s)
    return httpx.Timeout(timeout_s, connect=connect_s, pool=connect_s)


class HttpTaskLoader:
    """GET a JSON document over HTTP(S)."""

    def __init__(
        self,
        url: str,
        *,
        timeout: float = 10.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._url = url
        self._name = _source_name(url)
        self._timeout = _make_timeout(max(0.1, float(timeout)))
        self._transport = transport

    @property
    def url(self) -> str:
        return self._url

    async def fetch(self) -> Any:
        logger.info("Loading tasks from %s", self._url)
        try:
            async with httpx.AsyncClient(timeout=self._timeout, transport=self._transport) as client:
                res = await client.get(self._url)
        except httpx.HTTPError as e:
            logger.info("Task fetch failed url=%s (%s)", self._url, e.__class__.__name__)
            raise TaskLoadError(f"Failed to load {self._name} ({e.__class__.__name__})") from e

        if not res.is_success:
            raise TaskLoadError(
                f"Failed to load {self._name} ({res.status_code})",
                status=res.status_code,
            )

        try:
            return res.json()
        except ValueError as e:
            raise TaskLoadError(f"Failed to parse {self._name} (invalid JSON)", status=res.status_code) from e


class FileTaskLoader:
    """Read a JSON document from the local filesystem."""

    def __init__(self, path: str | Path) -> None:
        self._path = Path(path).expanduser()

    @property
    def path(self) -> Path:
        return self._path

    def _read(self) -> Any:
        try:
            raw = self._path.read_text("utf-8")
        except FileNotFoundError as e:
            raise TaskLoadError(f"Failed to load {self._path.name} (404)", status=404) from e
        except UnicodeDecodeError as e:
            raise TaskLoadError(f"Failed to parse {self._path.name} (invalid JSON)") from e
        except OSError as e:
            raise TaskLoadError(f"Failed to load {self._path.name} ({e.strerror or e})") from e

        try:
            return json.loads(raw)
        except json.JSONDecodeError as e:
            raise TaskLoadError(f"Failed to parse {self._path.name} (invalid JSON)") from e

    async def fetch(self) -> Any:
        logger.info("Loading tasks from %s", self._path)
        return await asyncio.to_thread(self._read)


def make_loader(source: str, *, timeout: float = 10.0) -> HttpTaskLoader | FileTaskLoader:
    """Pick a loader by source: http(s) URLs go over the network, anything else is a path."""
    scheme = urlsplit(source).scheme.lower()
    if scheme in ("http", "https"):
        return HttpTaskLoader(source, timeout=timeout)
    return FileTaskLoader(source)
