"""Static catalog of automation tasks."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class TaskDescriptor:
    id: str
    name: str
    description: str
    enabled: bool = True
    # Cron expression or "manual"; informational only, nothing executes it.
    schedule: str = "manual"


SCHEMA_SYNC = "schema-sync"
AUTO_SYNC = "auto-sync"
BACKUP_NOW = "backup-now"
AUTO_BACKUP = "auto-backup"
AI_OPTIMIZATION = "ai-optimization"
SECURITY_SCAN = "security-scan"
LOG_ROTATION = "log-rotation"
HEALTH_CHECK = "health-check"

TASKS: tuple[TaskDescriptor, ...] = (
    TaskDescriptor(SCHEMA_SYNC, "Schema Sync", "Sync database schema with Supabase", schedule="0 */6 * * *"),
    TaskDescriptor(AUTO_SYNC, "Auto-Sync", "Automatically sync data to Supabase", schedule="0 */2 * * *"),
    TaskDescriptor(BACKUP_NOW, "Backup Now", "Create immediate backup to Supabase storage"),
    TaskDescriptor(AUTO_BACKUP, "Auto-Backup", "Scheduled automatic backups", schedule="0 2 * * *"),
    TaskDescriptor(
        AI_OPTIMIZATION,
        "AI Optimization",
        "Analyze and optimize AI usage patterns",
        schedule="0 */4 * * *",
    ),
    TaskDescriptor(SECURITY_SCAN, "Security Scan", "Run security and permission checks", schedule="0 3 * * 1"),
    TaskDescriptor(LOG_ROTATION, "Log Rotation", "Clean and archive old logs", schedule="0 0 * * 0"),
    TaskDescriptor(HEALTH_CHECK, "Health Check", "Monitor system health and performance", schedule="*/5 * * * *"),
)

_BY_ID = {task.id: task for task in TASKS}


def get_descriptor(task_id: str) -> TaskDescriptor | None:
    return _BY_ID.get(task_id)
