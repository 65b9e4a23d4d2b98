"""Task runner: one execution per task id, uniform result envelope."""

from __future__ import annotations

import logging

from saanify_automation.backend import BackendProvider
from saanify_automation.execution import RunResult, TaskContext
from saanify_automation.handlers import HandlerRegistry
from saanify_automation.local_store import LocalStore
from saanify_automation.settings import Settings
from saanify_automation.task_runtime import InFlightRegistry, TaskAlreadyRunningError

from .run_history import RunHistory

logger = logging.getLogger(__name__)

ALREADY_RUNNING_MESSAGE = "Task is already running"


class TaskRunner:
    def __init__(
        self,
        handlers: HandlerRegistry,
        provider: BackendProvider,
        store: LocalStore,
        settings: Settings,
        in_flight: InFlightRegistry | None = None,
        history: RunHistory | None = None,
    ):
        self.handlers = handlers
        self.provider = provider
        self.store = store
        self.settings = settings
        self.in_flight = in_flight or InFlightRegistry()
        self.history = history

    async def run(self, task_id: str) -> RunResult:
        try:
            with self.in_flight.acquire(task_id) as control:
                handler = self.handlers.get(task_id)
                if handler is None:
                    logger.warning("unknown automation task requested: %s", task_id)
                    return RunResult(success=False, message=f"Unknown task: {task_id}")

                logger.info("running automation task %s", task_id)
                context = TaskContext(
                    task_id=task_id,
                    provider=self.provider,
                    store=self.store,
                    settings=self.settings,
                    control=control,
                )
                try:
                    result = await handler.execute(context)
                except Exception as exc:  # noqa: BLE001
                    logger.exception("automation task %s failed: %s", task_id, exc)
                    result = RunResult(success=False, message=str(exc) or "Task failed")
                else:
                    if not result.message:
                        result.message = f"Task {task_id} completed successfully"
        except TaskAlreadyRunningError:
            return RunResult(success=False, message=ALREADY_RUNNING_MESSAGE)

        await self._record(task_id, result)
        return result

    def cancel(self, task_id: str) -> bool:
        cancelled = self.in_flight.cancel(task_id)
        if cancelled:
            logger.info("cancellation requested for automation task %s", task_id)
        return cancelled

    def is_running(self, task_id: str) -> bool:
        return self.in_flight.is_running(task_id)

    async def _record(self, task_id: str, result: RunResult) -> None:
        if self.history is None:
            return
        try:
            await self.history.record(task_id, result)
        except Exception as exc:  # noqa: BLE001
            logger.warning("could not record run of %s: %s", task_id, exc)
