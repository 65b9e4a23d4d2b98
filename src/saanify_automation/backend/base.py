"""Backend protocol used by automation handlers."""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any, Mapping


class BackendError(Exception):
    def __init__(self, message: str, code: str | None = None):
        super().__init__(message)
        self.message = message
        self.code = code


class BackendConfigError(BackendError):
    """Raised when the backend URL or service key is missing."""


@dataclass
class ConnectionProbe:
    success: bool
    message: str

    def to_dict(self) -> dict[str, Any]:
        return {"success": self.success, "message": self.message}


class BackendClient(ABC):
    """Privileged access to the remote database and object storage.

    Every method is a single remote operation; there is no client-side
    transaction wrapping. Failures surface as ``BackendError``.
    """

    @abstractmethod
    async def upsert(self, table: str, row: Mapping[str, Any]) -> None:
        """Insert or update one row keyed by its primary key."""

    @abstractmethod
    async def insert(self, table: str, row: Mapping[str, Any]) -> None:
        """Insert one row."""

    @abstractmethod
    async def select(
        self,
        table: str,
        *,
        filters: Mapping[str, Any] | None = None,
        order_by: str | None = None,
        descending: bool = False,
        limit: int | None = None,
    ) -> list[dict[str, Any]]:
        """Select rows matching equality filters."""

    @abstractmethod
    async def delete_where_lt(self, table: str, column: str, value: Any) -> None:
        """Delete rows whose ``column`` is strictly less than ``value``."""

    @abstractmethod
    async def execute_sql(self, sql: str) -> None:
        """Run a raw SQL statement through the ``exec_sql`` RPC."""

    @abstractmethod
    async def table_exists(self, table: str) -> bool:
        """Probe whether a table is reachable."""

    @abstractmethod
    async def put_object(
        self,
        bucket: str,
        key: str,
        data: bytes,
        content_type: str = "application/json",
    ) -> None:
        """Upload (and overwrite) one object."""

    @abstractmethod
    async def get_object(self, bucket: str, key: str) -> bytes:
        """Download one object."""

    @abstractmethod
    async def list_objects(self, bucket: str) -> list[dict[str, Any]]:
        """List objects in a bucket."""

    @abstractmethod
    async def test_connection(self) -> ConnectionProbe:
        """Connectivity probe. Never raises."""
