"""Cooperative cancellation handle for running automation tasks."""

from __future__ import annotations

import threading


class TaskCancelledError(Exception):
    def __init__(self, message: str = "Task aborted"):
        super().__init__(message)


class TaskControl:
    """Lets handler loops stop early when a cancel was requested."""

    def __init__(self, task_id: str):
        self.task_id = task_id
        self._cancelled = threading.Event()

    def cancel(self) -> None:
        self._cancelled.set()

    @property
    def cancelled(self) -> bool:
        return self._cancelled.is_set()

    def should_stop(self) -> bool:
        return self.cancelled

    def raise_if_cancelled(self) -> None:
        if self.cancelled:
            raise TaskCancelledError()
