"""Saanify automation FastAPI application."""

from __future__ import annotations

from typing import Optional

import uvicorn
from fastapi import Depends, FastAPI, HTTPException, Query, Request

from saanify_automation.backend import BackendConfigError, BackendError
from saanify_automation.db import create_db_and_tables
from saanify_automation.schemas import (
    AutomationActionRequest,
    AutomationStatus,
    AutomationToggleResponse,
    BackupObject,
    CancelResponse,
    RestoreResponse,
    RunResponse,
    TaskListResponse,
    TaskToggleResponse,
    ToggleRequest,
)
from saanify_automation.services import AutomationService, build_automation_service
from saanify_automation.settings import settings
from saanify_automation.time_utils import now_utc


def get_automation(request: Request) -> AutomationService:
    return request.app.state.automation


def _backend_http_error(exc: BackendError) -> HTTPException:
    status_code = 503 if isinstance(exc, BackendConfigError) else 502
    return HTTPException(status_code=status_code, detail=str(exc))


async def _run_task(automation: AutomationService, task_id: str) -> RunResponse:
    task = automation.describe(task_id)
    if task is None:
        raise HTTPException(status_code=404, detail="Task not found")
    started = now_utc()
    result = await automation.run(task_id)
    return RunResponse(
        success=result.success,
        message=result.message,
        result=result.result,
        run_id=f"run_{int(started.timestamp() * 1000)}",
        task_id=task_id,
        task_name=task.name,
        start_time=started,
    )


def _toggle_task(automation: AutomationService, task_id: str, enabled: object) -> TaskToggleResponse:
    task = automation.describe(task_id)
    if task is None:
        raise HTTPException(status_code=404, detail="Task not found")
    if enabled is not None and not isinstance(enabled, bool):
        raise HTTPException(status_code=400, detail="enabled must be a boolean")
    value = automation.toggle_task(task_id, enabled)
    return TaskToggleResponse(
        task_id=task_id,
        enabled=value,
        message=f'Task "{task.name}" {"enabled" if value else "disabled"}',
    )


async def _restore(automation: AutomationService, config: dict) -> RestoreResponse:
    try:
        return await automation.restore(config.get("backupId"), config.get("targetPath"))
    except ValueError as exc:
        raise HTTPException(status_code=400, detail=str(exc)) from exc
    except BackendError as exc:
        raise _backend_http_error(exc) from exc


def create_app(automation: AutomationService | None = None) -> FastAPI:
    app = FastAPI(title="saanify-automation", version="0.1.0")
    app.state.automation = automation or build_automation_service(settings)

    @app.on_event("startup")
    def startup() -> None:
        create_db_and_tables()

    @app.get("/health")
    def health() -> dict:
        return {"status": "ok", "service": "saanify-automation"}

    @app.get("/automation/status", response_model=AutomationStatus)
    async def automation_status(
        automation: AutomationService = Depends(get_automation),
    ) -> AutomationStatus:
        return await automation.get_status()

    @app.get("/automation/tasks", response_model=TaskListResponse)
    async def list_tasks(
        status: Optional[str] = Query(default=None),
        automation: AutomationService = Depends(get_automation),
    ) -> TaskListResponse:
        snapshot = await automation.list_tasks(status)
        return TaskListResponse(
            data=snapshot.tasks,
            total=len(snapshot.tasks),
            source=snapshot.source,
        )

    @app.post("/automation")
    async def automation_action(
        payload: AutomationActionRequest,
        automation: AutomationService = Depends(get_automation),
    ):
        config = payload.config or {}
        if payload.action == "run":
            return await _run_task(automation, payload.task_id or "")
        if payload.action == "toggle":
            return _toggle_task(automation, payload.task_id or "", config.get("enabled"))
        if payload.action == "restore":
            return await _restore(automation, config)
        raise HTTPException(status_code=400, detail="Invalid action")

    @app.post("/automation/toggle", response_model=AutomationToggleResponse)
    def toggle_automation(
        payload: ToggleRequest,
        automation: AutomationService = Depends(get_automation),
    ) -> AutomationToggleResponse:
        enabled = automation.toggle_automation(payload.enabled)
        return AutomationToggleResponse(
            success=True,
            enabled=enabled,
            message=f"Automation {'enabled' if enabled else 'disabled'}",
        )

    @app.get("/automation/backups", response_model=list[BackupObject])
    async def list_backups(
        automation: AutomationService = Depends(get_automation),
    ) -> list[BackupObject]:
        try:
            return await automation.list_backups()
        except BackendError as exc:
            raise _backend_http_error(exc) from exc

    @app.post("/automation/{task_id}/run", response_model=RunResponse)
    async def run_task(
        task_id: str,
        automation: AutomationService = Depends(get_automation),
    ) -> RunResponse:
        return await _run_task(automation, task_id)

    @app.post("/automation/{task_id}/cancel", response_model=CancelResponse)
    def cancel_task(
        task_id: str,
        automation: AutomationService = Depends(get_automation),
    ) -> CancelResponse:
        if automation.describe(task_id) is None:
            raise HTTPException(status_code=404, detail="Task not found")
        return CancelResponse(task_id=task_id, cancelled=automation.cancel(task_id))

    return app


app = create_app()


def main() -> None:
    uvicorn.run(
        "saanify_automation.api:app",
        host=settings.api_host,
        port=settings.api_port,
        reload=False,
    )


if __name__ == "__main__":
    main()
