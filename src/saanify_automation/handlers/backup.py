"""JSON snapshot of local records uploaded to object storage."""

from __future__ import annotations

import asyncio
import json
import logging
from datetime import datetime
from typing import Any

from saanify_automation.backend import BackendError
from saanify_automation.execution import RunResult, TaskContext, TaskHandler
from saanify_automation.time_utils import now_utc

logger = logging.getLogger(__name__)

SCHEMA_VERSION = "1.0"


def _json_default(value: Any) -> Any:
    if isinstance(value, datetime):
        return value.isoformat()
    raise TypeError(f"not JSON serializable: {type(value).__name__}")


def backup_file_name(now: datetime) -> str:
    stamp = now.strftime("%Y-%m-%dT%H-%M-%S")
    return f"backup-{stamp}-{now.microsecond // 1000:03d}Z.json"


def build_snapshot(
    users: list[dict[str, Any]],
    clients: list[dict[str, Any]],
    secrets: list[dict[str, Any]],
    created_at: datetime,
) -> dict[str, Any]:
    tables = {"users": users, "clients": clients, "secrets": secrets}
    return {
        "metadata": {
            "timestamp": created_at.isoformat(),
            "schema_version": SCHEMA_VERSION,
            "created_by": "automation_system",
            "tables": [{"name": name, "record_count": len(rows)} for name, rows in tables.items()],
            "total_records": sum(len(rows) for rows in tables.values()),
        },
        **tables,
    }


class BackupNowHandler(TaskHandler):
    async def execute(self, context: TaskContext) -> RunResult:
        backend = context.backend()
        created_at = now_utc()
        snapshot = build_snapshot(
            users=await asyncio.to_thread(context.store.list_users),
            clients=await asyncio.to_thread(context.store.list_clients),
            secrets=await asyncio.to_thread(context.store.list_secret_metadata),
            created_at=created_at,
        )
        file_name = backup_file_name(created_at)
        size = len(json.dumps(snapshot, default=_json_default))

        stored = True
        try:
            await backend.put_object(
                context.settings.backup_bucket,
                file_name,
                json.dumps(snapshot, indent=2, default=_json_default).encode("utf-8"),
            )
        except BackendError as exc:
            # The snapshot only ever lived in memory; it is gone once we return.
            logger.warning("backup upload of %s failed, backup not stored: %s", file_name, exc)
            stored = False

        return RunResult(
            success=True,
            message="Backup completed",
            result={
                "fileName": file_name,
                "bucket": context.settings.backup_bucket,
                "size": size,
                "stored": stored,
                "records": {
                    "users": len(snapshot["users"]),
                    "clients": len(snapshot["clients"]),
                    "secrets": len(snapshot["secrets"]),
                },
            },
        )


class AutoBackupHandler(TaskHandler):
    """Scheduled variant; identical to an immediate backup."""

    def __init__(self, delegate: BackupNowHandler | None = None):
        self.delegate = delegate or BackupNowHandler()

    async def execute(self, context: TaskContext) -> RunResult:
        return await self.delegate.execute(context)
