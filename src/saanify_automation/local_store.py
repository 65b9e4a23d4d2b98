"""Read-only access to local users, clients and secret metadata."""

from __future__ import annotations

from typing import Any, Callable

from sqlmodel import Session

from .repositories import list_clients, list_secret_metadata, list_users


class LocalStore:
    def __init__(self, session_factory: Callable[[], Session]):
        self._session_factory = session_factory

    def list_users(self) -> list[dict[str, Any]]:
        with self._session_factory() as session:
            return [row.model_dump() for row in list_users(session)]

    def list_clients(self) -> list[dict[str, Any]]:
        with self._session_factory() as session:
            return [row.model_dump() for row in list_clients(session)]

    def list_secret_metadata(self) -> list[dict[str, Any]]:
        """Secret keys and rotation data; values are never read."""
        with self._session_factory() as session:
            return list_secret_metadata(session)
