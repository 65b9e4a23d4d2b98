"""SQLModel entities for the local Saanify datastore."""

from __future__ import annotations

from datetime import datetime
from typing import Optional

from sqlalchemy import Column, Text
from sqlmodel import Field, SQLModel

from .time_utils import now_utc


class User(SQLModel, table=True):
    __tablename__ = "users"

    id: str = Field(primary_key=True)
    email: str = Field(index=True, unique=True)
    name: Optional[str] = None
    role: Optional[str] = Field(default="user")
    created_at: datetime = Field(default_factory=now_utc)
    updated_at: datetime = Field(default_factory=now_utc)


class Client(SQLModel, table=True):
    __tablename__ = "clients"

    id: str = Field(primary_key=True)
    name: str
    email: Optional[str] = None
    phone: Optional[str] = None
    society_name: Optional[str] = None
    created_at: datetime = Field(default_factory=now_utc)
    updated_at: datetime = Field(default_factory=now_utc)


class Secret(SQLModel, table=True):
    __tablename__ = "secrets"

    id: Optional[int] = Field(default=None, primary_key=True)
    key: str = Field(index=True, unique=True)
    value: str = Field(sa_column=Column(Text, nullable=False))
    description: Optional[str] = None
    last_rotated: Optional[datetime] = None
    created_at: datetime = Field(default_factory=now_utc)


class AutomationSetting(SQLModel, table=True):
    __tablename__ = "automation_settings"

    key: str = Field(primary_key=True)
    enabled: bool = Field(default=True)
    updated_at: datetime = Field(default_factory=now_utc)
