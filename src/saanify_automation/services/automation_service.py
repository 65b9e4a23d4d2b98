"""Automation facade used by the HTTP API and the CLI."""

from __future__ import annotations

from saanify_automation import catalog
from saanify_automation.backend import BackendProvider
from saanify_automation.catalog import TaskDescriptor
from saanify_automation.db import get_session
from saanify_automation.execution import RunResult
from saanify_automation.handlers import HandlerRegistry
from saanify_automation.local_store import LocalStore
from saanify_automation.schemas import AutomationStatus, BackupObject, RestoreResponse
from saanify_automation.settings import Settings
from saanify_automation.task_runtime import InFlightRegistry

from .restore_service import RestoreService
from .run_history import RunHistory
from .settings_service import SettingsService
from .status_service import StatusService
from .task_runner import TaskRunner


class AutomationService:
    def __init__(
        self,
        runner: TaskRunner,
        status_service: StatusService,
        settings_service: SettingsService,
        restore_service: RestoreService,
        tasks: tuple[TaskDescriptor, ...] = catalog.TASKS,
    ):
        self.runner = runner
        self.status_service = status_service
        self.settings_service = settings_service
        self.restore_service = restore_service
        self.tasks = tasks

    def describe(self, task_id: str) -> TaskDescriptor | None:
        for task in self.tasks:
            if task.id == task_id:
                return task
        return None

    async def run(self, task_id: str) -> RunResult:
        return await self.runner.run(task_id)

    def cancel(self, task_id: str) -> bool:
        return self.runner.cancel(task_id)

    async def get_status(self) -> AutomationStatus:
        return await self.status_service.get_status()

    async def list_tasks(self, status_filter: str | None = None) -> AutomationStatus:
        return await self.status_service.list_tasks(status_filter)

    def toggle_task(self, task_id: str, enabled: bool | None = None) -> bool:
        task = self.describe(task_id)
        if task is None:
            raise ValueError(f"Task not found: {task_id}")
        return self.settings_service.set_task_enabled(task_id, enabled, default=task.enabled)

    def toggle_automation(self, enabled: bool) -> bool:
        return self.settings_service.set_automation_enabled(enabled)

    async def restore(self, backup_id: str | None, target_path: str | None = None) -> RestoreResponse:
        return await self.restore_service.restore(backup_id, target_path)

    async def list_backups(self) -> list[BackupObject]:
        return await self.restore_service.list_backups()


def build_automation_service(
    settings: Settings,
    provider: BackendProvider | None = None,
    handlers: HandlerRegistry | None = None,
    session_factory=get_session,
) -> AutomationService:
    provider = provider or BackendProvider.from_settings(settings)
    in_flight = InFlightRegistry()
    history = RunHistory(provider, table=settings.log_table)
    settings_service = SettingsService(session_factory)
    runner = TaskRunner(
        handlers=handlers or HandlerRegistry.default(),
        provider=provider,
        store=LocalStore(session_factory),
        settings=settings,
        in_flight=in_flight,
        history=history,
    )
    status_service = StatusService(
        tasks=catalog.TASKS,
        in_flight=in_flight,
        history=history,
        settings_service=settings_service,
        history_window=settings.history_window,
    )
    return AutomationService(
        runner=runner,
        status_service=status_service,
        settings_service=settings_service,
        restore_service=RestoreService(provider, bucket=settings.backup_bucket),
    )
