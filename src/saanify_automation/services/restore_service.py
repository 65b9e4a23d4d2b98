"""Backup download and restore progress reporting."""

from __future__ import annotations

import json
import logging
from typing import Any

from saanify_automation.backend import BackendProvider
from saanify_automation.schemas import BackupObject, RestoreResponse, RestoreStep
from saanify_automation.time_utils import now_utc, parse_timestamp

logger = logging.getLogger(__name__)

ESTIMATED_DURATION = "5-15 minutes"


def restore_steps() -> list[RestoreStep]:
    # Progress shape shown to the UI; nothing is written back yet.
    return [
        RestoreStep(name="Validating backup", status="completed"),
        RestoreStep(name="Downloading files", status="completed"),
        RestoreStep(name="Restoring database", status="in_progress"),
        RestoreStep(name="Verifying integrity", status="pending"),
    ]


class RestoreService:
    def __init__(self, provider: BackendProvider, bucket: str):
        self.provider = provider
        self.bucket = bucket

    async def restore(self, backup_id: str | None, target_path: str | None = None) -> RestoreResponse:
        if not backup_id:
            raise ValueError("Backup ID is required for restore operation")

        raw = await self.provider.get().get_object(self.bucket, backup_id)
        try:
            payload: Any = json.loads(raw)
        except (UnicodeDecodeError, json.JSONDecodeError) as exc:
            raise ValueError(f"backup {backup_id} is not valid JSON: {exc}") from exc

        started = now_utc()
        logger.info("restore of %s started", backup_id)
        metadata = payload.get("metadata") if isinstance(payload, dict) else None
        return RestoreResponse(
            restore_id=f"restore_{int(started.timestamp() * 1000)}",
            backup_id=backup_id,
            target_path=target_path,
            status="started",
            start_time=started,
            estimated_duration=ESTIMATED_DURATION,
            steps=restore_steps(),
            backup_metadata=metadata if isinstance(metadata, dict) else None,
        )

    async def list_backups(self) -> list[BackupObject]:
        objects = await self.provider.get().list_objects(self.bucket)
        backups = []
        for item in objects:
            name = item.get("name")
            if not name:
                continue
            size = (item.get("metadata") or {}).get("size")
            backups.append(
                BackupObject(
                    name=name,
                    size=int(size) if size is not None else None,
                    created_at=parse_timestamp(item.get("created_at")),
                )
            )
        return backups
