import unittest
from unittest.mock import AsyncMock, MagicMock

import httpx
from postgrest.exceptions import APIError
from storage3.exceptions import StorageException

from _test_support import reset_database  # noqa: F401
from fakes import FakeLocalStore, make_clients, make_users
from saanify_automation import catalog
from saanify_automation.backend import BackendConfigError, BackendError, BackendProvider
from saanify_automation.backend.supabase_backend import SupabaseBackend
from saanify_automation.execution import TaskContext
from saanify_automation.handlers import AutoSyncHandler, BackupNowHandler
from saanify_automation.settings import Settings

SERVICE_KEY = "test-service-role-key"


def _connect_error():
    return httpx.ConnectError("All connection attempts failed")


def _backend_with_client(client):
    backend = SupabaseBackend("http://127.0.0.1:9", SERVICE_KEY)
    backend._client = client
    return backend


def _table_execute(client, *chain):
    """Return the AsyncMock at the end of client.table(...).<chain>...execute()."""
    builder = client.table.return_value
    for name in chain:
        builder = getattr(builder, name).return_value
    builder.execute = AsyncMock()
    return builder.execute


class SupabaseBackendTests(unittest.IsolatedAsyncioTestCase):
    def test_missing_configuration_is_rejected(self):
        with self.assertRaises(BackendConfigError):
            SupabaseBackend(None, SERVICE_KEY)
        with self.assertRaises(BackendConfigError):
            SupabaseBackend("https://example.supabase.co", "")

    async def test_upsert_transport_failure_becomes_backend_error(self):
        client = MagicMock()
        _table_execute(client, "upsert").side_effect = _connect_error()
        backend = _backend_with_client(client)

        with self.assertRaises(BackendError) as ctx:
            await backend.upsert("users", {"id": "user-1"})
        self.assertIn("All connection attempts failed", str(ctx.exception))
        self.assertIsInstance(ctx.exception.__cause__, httpx.ConnectError)

    async def test_upsert_api_error_keeps_code(self):
        client = MagicMock()
        _table_execute(client, "upsert").side_effect = APIError(
            {"message": "duplicate key value", "code": "23505"}
        )
        backend = _backend_with_client(client)

        with self.assertRaises(BackendError) as ctx:
            await backend.upsert("users", {"id": "user-1"})
        self.assertEqual(ctx.exception.code, "23505")
        self.assertEqual(ctx.exception.message, "duplicate key value")

    async def test_put_object_failures_become_backend_errors(self):
        client = MagicMock()
        bucket = client.storage.from_.return_value
        bucket.upload = AsyncMock(side_effect=_connect_error())
        backend = _backend_with_client(client)

        with self.assertRaises(BackendError):
            await backend.put_object("backups", "backup-1.json", b"{}")

        bucket.upload = AsyncMock(side_effect=StorageException({"message": "Bucket not found", "statusCode": 404}))
        with self.assertRaises(BackendError):
            await backend.put_object("backups", "backup-1.json", b"{}")

    async def test_get_object_timeout_becomes_backend_error(self):
        client = MagicMock()
        client.storage.from_.return_value.download = AsyncMock(side_effect=httpx.ReadTimeout("timed out"))
        backend = _backend_with_client(client)

        with self.assertRaises(BackendError):
            await backend.get_object("backups", "backup-1.json")

    async def test_table_exists_reports_missing_relations(self):
        for code in ("42P01", "PGRST205"):
            client = MagicMock()
            _table_execute(client, "select", "limit").side_effect = APIError(
                {"message": "relation does not exist", "code": code}
            )
            backend = _backend_with_client(client)
            self.assertFalse(await backend.table_exists("users"), code)

    async def test_table_exists_raises_other_api_errors(self):
        client = MagicMock()
        _table_execute(client, "select", "limit").side_effect = APIError(
            {"message": "permission denied", "code": "42501"}
        )
        backend = _backend_with_client(client)

        with self.assertRaises(BackendError) as ctx:
            await backend.table_exists("users")
        self.assertEqual(ctx.exception.code, "42501")

    async def test_table_exists_true_when_query_succeeds(self):
        client = MagicMock()
        _table_execute(client, "select", "limit")
        backend = _backend_with_client(client)
        self.assertTrue(await backend.table_exists("users"))

    async def test_connection_probe_never_raises(self):
        client = MagicMock()
        _table_execute(client, "select", "limit").side_effect = _connect_error()
        backend = _backend_with_client(client)

        probe = await backend.test_connection()

        self.assertFalse(probe.success)
        self.assertIn("All connection attempts failed", probe.message)


class UnreachableBackendHandlerTests(unittest.IsolatedAsyncioTestCase):
    def _context(self, task_id, client, store):
        return TaskContext(
            task_id=task_id,
            provider=BackendProvider.of(_backend_with_client(client)),
            store=store,
            settings=Settings(),
        )

    async def test_backup_still_succeeds_when_storage_is_unreachable(self):
        client = MagicMock()
        client.storage.from_.return_value.upload = AsyncMock(side_effect=_connect_error())
        store = FakeLocalStore(users=make_users(2), clients=make_clients(1))

        result = await BackupNowHandler().execute(self._context(catalog.BACKUP_NOW, client, store))

        self.assertTrue(result.success)
        self.assertFalse(result.result["stored"])
        self.assertEqual(result.result["records"], {"users": 2, "clients": 1, "secrets": 0})

    async def test_sync_skips_records_when_backend_is_unreachable(self):
        client = MagicMock()
        execute = _table_execute(client, "upsert")
        execute.side_effect = _connect_error()
        store = FakeLocalStore(users=make_users(3), clients=make_clients(2))

        result = await AutoSyncHandler().execute(self._context(catalog.AUTO_SYNC, client, store))

        self.assertTrue(result.success)
        self.assertEqual(result.result["totalRecords"], 0)
        self.assertEqual(result.result["failedRecords"], 5)
        self.assertEqual(execute.await_count, 5)


if __name__ == "__main__":
    unittest.main()
