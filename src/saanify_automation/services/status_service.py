"""Point-in-time status snapshot of every registered task."""

from __future__ import annotations

import asyncio
import logging
from typing import Any, Iterable

from saanify_automation import catalog
from saanify_automation.catalog import TaskDescriptor
from saanify_automation.schemas import AutomationStatus, TaskRunState
from saanify_automation.task_runtime import InFlightRegistry
from saanify_automation.time_utils import parse_timestamp

from .run_history import RunHistory
from .settings_service import SettingsService

logger = logging.getLogger(__name__)

RECENT_LOG_MESSAGES = 5
BACKUP_TASK_IDS = (catalog.BACKUP_NOW, catalog.AUTO_BACKUP)


def _latest_completed(rows_by_task: dict[str, list[dict[str, Any]]], task_ids: Iterable[str]):
    latest = None
    for task_id in task_ids:
        for row in rows_by_task.get(task_id, []):
            if row.get("status") != "completed":
                continue
            created_at = parse_timestamp(row.get("created_at"))
            if created_at is not None and (latest is None or created_at > latest):
                latest = created_at
            break
    return latest


class StatusService:
    def __init__(
        self,
        tasks: tuple[TaskDescriptor, ...],
        in_flight: InFlightRegistry,
        history: RunHistory,
        settings_service: SettingsService,
        history_window: int = 100,
    ):
        self.tasks = tasks
        self.in_flight = in_flight
        self.history = history
        self.settings_service = settings_service
        self.history_window = history_window

    async def get_status(self) -> AutomationStatus:
        source = "history"
        try:
            rows_by_task = await self.history.rows_by_task(self.history_window)
        except Exception as exc:  # noqa: BLE001
            logger.warning("run history unavailable, reporting default task states: %s", exc)
            rows_by_task = {}
            source = "defaults"

        overrides = await asyncio.to_thread(self.settings_service.task_enabled_overrides)
        running = self.in_flight.running_ids()
        states = [
            self._task_state(task, rows_by_task.get(task.id, []), overrides, running)
            for task in self.tasks
        ]
        return AutomationStatus(
            enabled=await asyncio.to_thread(self.settings_service.is_automation_enabled),
            last_sync=_latest_completed(rows_by_task, (catalog.AUTO_SYNC,)),
            last_backup=_latest_completed(rows_by_task, BACKUP_TASK_IDS),
            error_count=sum(1 for state in states if state.status == "error"),
            tasks=states,
            source=source,
        )

    async def list_tasks(self, status_filter: str | None = None) -> AutomationStatus:
        snapshot = await self.get_status()
        if status_filter and status_filter != "all":
            snapshot.tasks = [task for task in snapshot.tasks if task.status == status_filter]
        return snapshot

    def _task_state(
        self,
        task: TaskDescriptor,
        rows: list[dict[str, Any]],
        overrides: dict[str, bool],
        running: set[str],
    ) -> TaskRunState:
        state = TaskRunState(
            id=task.id,
            name=task.name,
            description=task.description,
            schedule=task.schedule,
            enabled=overrides.get(task.id, task.enabled),
        )
        if rows:
            latest = rows[0]
            state.status = "completed" if latest.get("status") == "completed" else "error"
            state.last_run = parse_timestamp(latest.get("created_at"))
            state.result = latest.get("result")
            state.logs = [str(row.get("message") or "") for row in rows[:RECENT_LOG_MESSAGES]]
        if task.id in running:
            state.status = "running"
        return state
