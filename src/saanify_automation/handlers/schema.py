"""Baseline remote schema bootstrap."""

from __future__ import annotations

import logging
import re

from saanify_automation.backend import BackendError
from saanify_automation.execution import RunResult, TaskContext, TaskHandler

logger = logging.getLogger(__name__)

PROBE_TABLE = "users"

DEFAULT_SCHEMA: tuple[str, ...] = (
    """CREATE TABLE IF NOT EXISTS users (
        id UUID DEFAULT gen_random_uuid() PRIMARY KEY,
        email VARCHAR(255) UNIQUE NOT NULL,
        name VARCHAR(255),
        role VARCHAR(50) DEFAULT 'user',
        created_at TIMESTAMP WITH TIME ZONE DEFAULT NOW(),
        updated_at TIMESTAMP WITH TIME ZONE DEFAULT NOW()
    )""",
    """CREATE TABLE IF NOT EXISTS admins (
        id UUID DEFAULT gen_random_uuid() PRIMARY KEY,
        user_id UUID REFERENCES users(id) ON DELETE CASCADE,
        permissions JSONB DEFAULT '{}',
        created_at TIMESTAMP WITH TIME ZONE DEFAULT NOW()
    )""",
    """CREATE TABLE IF NOT EXISTS clients (
        id UUID DEFAULT gen_random_uuid() PRIMARY KEY,
        name VARCHAR(255) NOT NULL,
        email VARCHAR(255),
        phone VARCHAR(50),
        society_name VARCHAR(255),
        created_at TIMESTAMP WITH TIME ZONE DEFAULT NOW(),
        updated_at TIMESTAMP WITH TIME ZONE DEFAULT NOW()
    )""",
    """CREATE TABLE IF NOT EXISTS automation_logs (
        id UUID DEFAULT gen_random_uuid() PRIMARY KEY,
        task_id VARCHAR(100) NOT NULL,
        status VARCHAR(50) NOT NULL,
        message TEXT,
        result JSONB,
        created_at TIMESTAMP WITH TIME ZONE DEFAULT NOW()
    )""",
)

_TABLE_NAME = re.compile(r"CREATE TABLE IF NOT EXISTS (\w+)")


def table_name(statement: str) -> str:
    match = _TABLE_NAME.search(statement)
    return match.group(1) if match else "unknown"


class SchemaSyncHandler(TaskHandler):
    def __init__(self, statements: tuple[str, ...] = DEFAULT_SCHEMA):
        self.statements = statements

    async def execute(self, context: TaskContext) -> RunResult:
        backend = context.backend()
        if await backend.table_exists(PROBE_TABLE):
            return RunResult(
                success=True,
                message="Schema already exists",
                result={"tables": [PROBE_TABLE], "created": False},
            )

        tables = []
        for statement in self.statements:
            name = table_name(statement)
            try:
                await backend.execute_sql(statement)
            except BackendError as exc:
                logger.warning("failed to create table %s via exec_sql: %s", name, exc)
                tables.append({"table": name, "status": "failed", "error": str(exc)})
                continue
            tables.append({"table": name, "status": "created"})

        return RunResult(
            success=True,
            message="Default schema created",
            result={"tables": tables, "created": True},
        )
