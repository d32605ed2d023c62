# src/roi_tasks/errors.py

from __future__ import annotations


class RoiTasksError(Exception):
    """Base class for errors raised by roi_tasks collaborators."""


class TaskLoadError(RoiTasksError):
    """
    The initial dataset could not be fetched or decoded.

    `status` carries the HTTP-like status code when one is known
    (e.g. 404 for a missing file), otherwise None.
    """

    def __init__(self, message: str, *, status: int | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.status = status
