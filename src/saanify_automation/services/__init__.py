from .automation_service import AutomationService, build_automation_service
from .restore_service import RestoreService
from .run_history import RunHistory
from .settings_service import SettingsService
from .status_service import StatusService
from .task_runner import TaskRunner

__all__ = [
    "AutomationService",
    "RestoreService",
    "RunHistory",
    "SettingsService",
    "StatusService",
    "TaskRunner",
    "build_automation_service",
]
