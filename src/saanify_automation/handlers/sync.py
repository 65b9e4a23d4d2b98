"""Push local users and clients to the remote store."""

from __future__ import annotations

import asyncio
import logging
from typing import Any

from saanify_automation.backend import BackendClient, BackendError
from saanify_automation.execution import RunResult, TaskContext, TaskHandler
from saanify_automation.task_control import TaskControl
from saanify_automation.time_utils import isoformat_utc, now_utc

logger = logging.getLogger(__name__)


def user_row(user: dict[str, Any], updated_at: str) -> dict[str, Any]:
    return {
        "id": user["id"],
        "email": user.get("email"),
        "name": user.get("name"),
        "role": user.get("role") or "user",
        "updated_at": updated_at,
    }


def client_row(client: dict[str, Any], updated_at: str) -> dict[str, Any]:
    return {
        "id": client["id"],
        "name": client.get("name"),
        "email": client.get("email"),
        "phone": client.get("phone"),
        "society_name": client.get("society_name"),
        "updated_at": updated_at,
    }


async def _upsert_each(
    backend: BackendClient,
    control: TaskControl,
    table: str,
    rows: list[dict[str, Any]],
) -> int:
    synced = 0
    for row in rows:
        control.raise_if_cancelled()
        try:
            await backend.upsert(table, row)
        except BackendError as exc:
            logger.debug("skipping %s row %s: %s", table, row.get("id"), exc)
            continue
        synced += 1
    return synced


class AutoSyncHandler(TaskHandler):
    async def execute(self, context: TaskContext) -> RunResult:
        backend = context.backend()
        updated_at = isoformat_utc(now_utc())
        local_users = await asyncio.to_thread(context.store.list_users)
        local_clients = await asyncio.to_thread(context.store.list_clients)
        users = [user_row(user, updated_at) for user in local_users]
        clients = [client_row(client, updated_at) for client in local_clients]

        synced_users = await _upsert_each(backend, context.control, "users", users)
        synced_clients = await _upsert_each(backend, context.control, "clients", clients)

        return RunResult(
            success=True,
            message="Auto-sync completed",
            result={
                "syncedUsers": synced_users,
                "syncedClients": synced_clients,
                "totalRecords": synced_users + synced_clients,
                "failedRecords": len(users) + len(clients) - synced_users - synced_clients,
            },
        )
