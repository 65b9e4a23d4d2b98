"""Run history kept in the remote automation log table."""

from __future__ import annotations

from typing import Any

from saanify_automation.backend import BackendProvider
from saanify_automation.execution import RunResult
from saanify_automation.time_utils import isoformat_utc, now_utc


def run_status(result: RunResult) -> str:
    return "completed" if result.success else "error"


class RunHistory:
    def __init__(self, provider: BackendProvider, table: str = "automation_logs"):
        self.provider = provider
        self.table = table

    async def record(self, task_id: str, result: RunResult) -> None:
        await self.provider.get().insert(
            self.table,
            {
                "task_id": task_id,
                "status": run_status(result),
                "message": result.message,
                "result": result.result,
                "created_at": isoformat_utc(now_utc()),
            },
        )

    async def recent(self, limit: int = 100) -> list[dict[str, Any]]:
        return await self.provider.get().select(
            self.table,
            order_by="created_at",
            descending=True,
            limit=limit,
        )

    async def rows_by_task(self, limit: int = 100) -> dict[str, list[dict[str, Any]]]:
        """Recent rows grouped by task id, newest first within each group."""
        grouped: dict[str, list[dict[str, Any]]] = {}
        for row in await self.recent(limit):
            task_id = row.get("task_id")
            if task_id:
                grouped.setdefault(str(task_id), []).append(row)
        return grouped
