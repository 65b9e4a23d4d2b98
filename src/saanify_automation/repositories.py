"""Repository helpers for the local Saanify datastore."""

from __future__ import annotations

from typing import Optional

from sqlmodel import Session, select

from .models import AutomationSetting, Client, Secret, User
from .time_utils import now_utc


def list_users(session: Session) -> list[User]:
    statement = select(User).order_by(User.created_at.asc())
    return list(session.exec(statement).all())


def list_clients(session: Session) -> list[Client]:
    statement = select(Client).order_by(Client.created_at.asc())
    return list(session.exec(statement).all())


def list_secret_metadata(session: Session) -> list[dict]:
    statement = select(Secret.key, Secret.description, Secret.last_rotated).order_by(Secret.key.asc())
    return [
        {"key": key, "description": description, "last_rotated": last_rotated}
        for key, description, last_rotated in session.exec(statement).all()
    ]


def get_setting(session: Session, key: str) -> Optional[AutomationSetting]:
    statement = select(AutomationSetting).where(AutomationSetting.key == key)
    return session.exec(statement).first()


def list_settings(session: Session) -> list[AutomationSetting]:
    return list(session.exec(select(AutomationSetting)).all())


def upsert_setting(session: Session, key: str, enabled: bool) -> AutomationSetting:
    row = get_setting(session, key)
    if row is None:
        row = AutomationSetting(key=key, enabled=enabled)
    else:
        row.enabled = enabled
        row.updated_at = now_utc()
    session.add(row)
    session.flush()
    return row
