"""Master switch and per-task enabled overrides."""

from __future__ import annotations

from typing import Callable

from sqlmodel import Session

from saanify_automation.repositories import get_setting, list_settings, upsert_setting

AUTOMATION_KEY = "automation"


class SettingsService:
    def __init__(self, session_factory: Callable[[], Session]):
        self._session_factory = session_factory

    def is_automation_enabled(self) -> bool:
        with self._session_factory() as session:
            row = get_setting(session, AUTOMATION_KEY)
            return True if row is None else bool(row.enabled)

    def set_automation_enabled(self, enabled: bool) -> bool:
        with self._session_factory() as session:
            row = upsert_setting(session, AUTOMATION_KEY, enabled)
            session.commit()
            return bool(row.enabled)

    def task_enabled_overrides(self) -> dict[str, bool]:
        with self._session_factory() as session:
            return {
                row.key: bool(row.enabled)
                for row in list_settings(session)
                if row.key != AUTOMATION_KEY
            }

    def set_task_enabled(self, task_id: str, enabled: bool | None, default: bool = True) -> bool:
        """Store an override; ``enabled=None`` flips the current value."""
        with self._session_factory() as session:
            if enabled is None:
                row = get_setting(session, task_id)
                current = default if row is None else bool(row.enabled)
                enabled = not current
            row = upsert_setting(session, task_id, enabled)
            session.commit()
            return bool(row.enabled)
