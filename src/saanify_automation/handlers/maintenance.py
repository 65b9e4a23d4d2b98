"""Retention pruning of the remote automation log table."""

from __future__ import annotations

from datetime import datetime, timedelta
from typing import Callable

from saanify_automation.backend import BackendError
from saanify_automation.execution import RunResult, TaskContext, TaskHandler
from saanify_automation.time_utils import isoformat_utc, now_utc


class LogRotationHandler(TaskHandler):
    def __init__(self, retention_days: int | None = None, clock: Callable[[], datetime] = now_utc):
        self.retention_days = retention_days
        self.clock = clock

    async def execute(self, context: TaskContext) -> RunResult:
        backend = context.backend()
        days = self.retention_days if self.retention_days is not None else context.settings.log_retention_days
        cutoff = isoformat_utc(self.clock() - timedelta(days=days))
        try:
            await backend.delete_where_lt(context.settings.log_table, "created_at", cutoff)
        except BackendError as exc:
            raise BackendError(f"Failed to rotate logs: {exc.message}", code=exc.code) from exc

        return RunResult(
            success=True,
            message="Log rotation completed",
            result={"deletedBefore": cutoff, "status": "success"},
        )
