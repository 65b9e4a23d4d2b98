"""Handler protocol, run context and result envelope."""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any

from .backend import BackendClient, BackendProvider
from .local_store import LocalStore
from .settings import Settings
from .task_control import TaskControl

# Marker for figures no handler actually measures.
UNMEASURED = "unmeasured"


@dataclass
class RunResult:
    success: bool
    message: str = ""
    result: dict[str, Any] | None = None

    def to_dict(self) -> dict[str, Any]:
        payload: dict[str, Any] = {"success": self.success, "message": self.message}
        if self.result is not None:
            payload["result"] = self.result
        return payload


@dataclass
class TaskContext:
    task_id: str
    provider: BackendProvider
    store: LocalStore
    settings: Settings
    control: TaskControl | None = None

    def __post_init__(self) -> None:
        if self.control is None:
            self.control = TaskControl(self.task_id)

    def backend(self) -> BackendClient:
        return self.provider.get()


class TaskHandler(ABC):
    @abstractmethod
    async def execute(self, context: TaskContext) -> RunResult:
        """Run the task and return a normalized result."""
