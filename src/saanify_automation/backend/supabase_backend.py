"""Supabase implementation of the backend protocol."""

from __future__ import annotations

import asyncio
import logging
from contextlib import contextmanager
from typing import Any, Iterator, Mapping

import httpx
from postgrest.exceptions import APIError
from storage3.exceptions import StorageException
from supabase import AsyncClient, acreate_client

from .base import BackendClient, BackendConfigError, BackendError, ConnectionProbe

logger = logging.getLogger(__name__)

# PostgREST/Postgres codes for "relation does not exist" style failures.
MISSING_TABLE_CODES = {"42P01", "PGRST116", "PGRST205"}


def _api_error(exc: APIError) -> BackendError:
    return BackendError(exc.message or str(exc), code=exc.code)


def _storage_error(exc: StorageException) -> BackendError:
    message = getattr(exc, "message", None) or str(exc)
    code = getattr(exc, "code", None) or getattr(exc, "status", None)
    return BackendError(str(message), code=None if code is None else str(code))


def _transport_error(exc: httpx.HTTPError) -> BackendError:
    return BackendError(str(exc) or type(exc).__name__, code=type(exc).__name__)


@contextmanager
def _backend_errors() -> Iterator[None]:
    """Re-raise client, storage and transport failures as BackendError."""
    try:
        yield
    except APIError as exc:
        raise _api_error(exc) from exc
    except StorageException as exc:
        raise _storage_error(exc) from exc
    except httpx.HTTPError as exc:
        raise _transport_error(exc) from exc


class SupabaseBackend(BackendClient):
    def __init__(self, url: str | None, service_role_key: str | None):
        if not url or not service_role_key:
            raise BackendConfigError("Missing Supabase service configuration")
        self.url = url
        self._service_role_key = service_role_key
        self._client: AsyncClient | None = None
        self._client_lock = asyncio.Lock()

    async def _get_client(self) -> AsyncClient:
        async with self._client_lock:
            if self._client is None:
                with _backend_errors():
                    self._client = await acreate_client(self.url, self._service_role_key)
            return self._client

    async def upsert(self, table: str, row: Mapping[str, Any]) -> None:
        client = await self._get_client()
        with _backend_errors():
            await client.table(table).upsert(dict(row)).execute()

    async def insert(self, table: str, row: Mapping[str, Any]) -> None:
        client = await self._get_client()
        with _backend_errors():
            await client.table(table).insert(dict(row)).execute()

    async def select(
        self,
        table: str,
        *,
        filters: Mapping[str, Any] | None = None,
        order_by: str | None = None,
        descending: bool = False,
        limit: int | None = None,
    ) -> list[dict[str, Any]]:
        client = await self._get_client()
        query = client.table(table).select("*")
        for column, value in (filters or {}).items():
            query = query.eq(column, value)
        if order_by:
            query = query.order(order_by, desc=descending)
        if limit is not None:
            query = query.limit(limit)
        with _backend_errors():
            response = await query.execute()
        return list(response.data or [])

    async def delete_where_lt(self, table: str, column: str, value: Any) -> None:
        client = await self._get_client()
        with _backend_errors():
            await client.table(table).delete().lt(column, value).execute()

    async def execute_sql(self, sql: str) -> None:
        client = await self._get_client()
        with _backend_errors():
            await client.rpc("exec_sql", {"sql_query": sql}).execute()

    async def table_exists(self, table: str) -> bool:
        client = await self._get_client()
        try:
            with _backend_errors():
                await client.table(table).select("id").limit(1).execute()
        except BackendError as exc:
            if exc.code in MISSING_TABLE_CODES:
                return False
            raise
        return True

    async def put_object(
        self,
        bucket: str,
        key: str,
        data: bytes,
        content_type: str = "application/json",
    ) -> None:
        client = await self._get_client()
        with _backend_errors():
            await client.storage.from_(bucket).upload(
                path=key,
                file=data,
                file_options={"content-type": content_type, "upsert": "true"},
            )

    async def get_object(self, bucket: str, key: str) -> bytes:
        client = await self._get_client()
        with _backend_errors():
            return await client.storage.from_(bucket).download(key)

    async def list_objects(self, bucket: str) -> list[dict[str, Any]]:
        client = await self._get_client()
        with _backend_errors():
            return list(await client.storage.from_(bucket).list())

    async def test_connection(self) -> ConnectionProbe:
        try:
            await self.table_exists("users")
        except Exception as exc:  # noqa: BLE001
            logger.warning("supabase connection probe failed: %s", exc)
            return ConnectionProbe(success=False, message=str(exc))
        return ConnectionProbe(success=True, message="Connected to Supabase")
