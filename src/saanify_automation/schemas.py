"""API schemas for the automation service."""

from __future__ import annotations

from datetime import datetime
from typing import Any, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

TaskStatusValue = Literal["idle", "running", "completed", "error"]


class CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class TaskRunState(CamelModel):
    id: str
    name: str
    description: str
    schedule: str
    enabled: bool
    status: TaskStatusValue = "idle"
    last_run: Optional[datetime] = None
    next_run: Optional[datetime] = None
    progress: Optional[float] = None
    logs: list[str] = Field(default_factory=list)
    result: Optional[Any] = None


class AutomationStatus(CamelModel):
    enabled: bool
    last_sync: Optional[datetime] = None
    last_backup: Optional[datetime] = None
    error_count: int = 0
    tasks: list[TaskRunState] = Field(default_factory=list)
    source: Literal["history", "defaults"] = "defaults"


class TaskListResponse(CamelModel):
    success: bool = True
    data: list[TaskRunState]
    total: int
    source: Literal["history", "defaults"]


class AutomationActionRequest(CamelModel):
    action: str = Field(..., min_length=1)
    task_id: Optional[str] = None
    config: Optional[dict[str, Any]] = None


class RunResponse(CamelModel):
    success: bool
    message: str
    result: Optional[Any] = None
    run_id: str
    task_id: str
    task_name: str
    start_time: datetime


class ToggleRequest(CamelModel):
    enabled: bool


class TaskToggleResponse(CamelModel):
    task_id: str
    enabled: bool
    message: str


class AutomationToggleResponse(CamelModel):
    success: bool
    enabled: bool
    message: str


class CancelResponse(CamelModel):
    task_id: str
    cancelled: bool


class RestoreStep(CamelModel):
    name: str
    status: Literal["pending", "in_progress", "completed"]


class RestoreResponse(CamelModel):
    restore_id: str
    backup_id: str
    target_path: Optional[str] = None
    status: str
    start_time: datetime
    estimated_duration: str
    steps: list[RestoreStep]
    backup_metadata: Optional[dict[str, Any]] = None


class BackupObject(CamelModel):
    name: str
    size: Optional[int] = None
    created_at: Optional[datetime] = None
