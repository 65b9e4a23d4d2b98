"""Task handler registry."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict

from saanify_automation import catalog
from saanify_automation.execution import TaskHandler

from .backup import AutoBackupHandler, BackupNowHandler
from .insights import AIOptimizationHandler, HealthCheckHandler, SecurityScanHandler
from .maintenance import LogRotationHandler
from .schema import SchemaSyncHandler
from .sync import AutoSyncHandler


@dataclass
class HandlerRegistry:
    handlers: Dict[str, TaskHandler]

    @classmethod
    def default(cls) -> "HandlerRegistry":
        backup = BackupNowHandler()
        return cls(
            handlers={
                catalog.SCHEMA_SYNC: SchemaSyncHandler(),
                catalog.AUTO_SYNC: AutoSyncHandler(),
                catalog.BACKUP_NOW: backup,
                catalog.AUTO_BACKUP: AutoBackupHandler(backup),
                catalog.AI_OPTIMIZATION: AIOptimizationHandler(),
                catalog.SECURITY_SCAN: SecurityScanHandler(),
                catalog.LOG_ROTATION: LogRotationHandler(),
                catalog.HEALTH_CHECK: HealthCheckHandler(),
            }
        )

    def get(self, task_id: str) -> TaskHandler | None:
        return self.handlers.get(task_id)

    def register(self, task_id: str, handler: TaskHandler) -> None:
        self.handlers[task_id] = handler
