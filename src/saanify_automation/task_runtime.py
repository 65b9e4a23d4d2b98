"""In-flight registry: at most one execution per task id."""

from __future__ import annotations

import threading
from contextlib import contextmanager
from typing import Iterator

from .task_control import TaskControl


class TaskAlreadyRunningError(Exception):
    def __init__(self, task_id: str):
        super().__init__(f"task already running: {task_id}")
        self.task_id = task_id


class InFlightRegistry:
    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._controls: dict[str, TaskControl] = {}

    @contextmanager
    def acquire(self, task_id: str) -> Iterator[TaskControl]:
        with self._lock:
            if task_id in self._controls:
                raise TaskAlreadyRunningError(task_id)
            control = TaskControl(task_id)
            self._controls[task_id] = control
        try:
            yield control
        finally:
            with self._lock:
                # A cancel followed by a new run may already own this slot.
                if self._controls.get(task_id) is control:
                    del self._controls[task_id]

    def cancel(self, task_id: str) -> bool:
        with self._lock:
            control = self._controls.pop(task_id, None)
        if control is None:
            return False
        control.cancel()
        return True

    def is_running(self, task_id: str) -> bool:
        with self._lock:
            return task_id in self._controls

    def running_ids(self) -> set[str]:
        with self._lock:
            return set(self._controls)
