import json
import unittest

from fastapi.testclient import TestClient

from _test_support import reset_database
from fakes import FakeBackend, FakeLocalStore, make_clients, make_users
from saanify_automation import catalog
from saanify_automation.api import create_app
from saanify_automation.backend import BackendProvider
from saanify_automation.services import build_automation_service
from saanify_automation.settings import Settings


class ApiTests(unittest.TestCase):
    def setUp(self):
        reset_database()
        self.backend = FakeBackend()
        self.service = build_automation_service(Settings(), provider=BackendProvider.of(self.backend))
        self.service.runner.store = FakeLocalStore(users=make_users(2), clients=make_clients(1))
        self.client = TestClient(create_app(self.service))

    def test_health(self):
        response = self.client.get("/health")
        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.json()["service"], "saanify-automation")

    def test_run_action_returns_envelope_with_run_metadata(self):
        response = self.client.post(
            "/automation",
            json={"action": "run", "taskId": catalog.SECURITY_SCAN},
        )
        self.assertEqual(response.status_code, 200)
        body = response.json()
        self.assertTrue(body["success"])
        self.assertEqual(body["message"], "Security scan completed")
        self.assertEqual(body["taskId"], catalog.SECURITY_SCAN)
        self.assertEqual(body["taskName"], "Security Scan")
        self.assertTrue(body["runId"].startswith("run_"))
        self.assertIn("startTime", body)
        self.assertEqual(body["result"]["status"], "success")

    def test_run_unknown_task_is_404(self):
        response = self.client.post("/automation", json={"action": "run", "taskId": "not-a-real-task"})
        self.assertEqual(response.status_code, 404)

    def test_failed_run_is_reported_not_raised(self):
        self.backend.fail_delete = True
        response = self.client.post(f"/automation/{catalog.LOG_ROTATION}/run")
        self.assertEqual(response.status_code, 200)
        body = response.json()
        self.assertFalse(body["success"])
        self.assertTrue(body["message"].startswith("Failed to rotate logs"))

    def test_invalid_action_is_400(self):
        response = self.client.post("/automation", json={"action": "explode", "taskId": catalog.AUTO_SYNC})
        self.assertEqual(response.status_code, 400)

    def test_toggle_action_flips_and_sets(self):
        flipped = self.client.post("/automation", json={"action": "toggle", "taskId": catalog.AUTO_SYNC})
        self.assertEqual(flipped.status_code, 200)
        self.assertFalse(flipped.json()["enabled"])

        explicit = self.client.post(
            "/automation",
            json={"action": "toggle", "taskId": catalog.AUTO_SYNC, "config": {"enabled": True}},
        )
        self.assertTrue(explicit.json()["enabled"])

        missing = self.client.post("/automation", json={"action": "toggle", "taskId": "ghost"})
        self.assertEqual(missing.status_code, 404)

    def test_toggle_rejects_non_boolean_enabled(self):
        for value in ("false", 0, ["yes"]):
            response = self.client.post(
                "/automation",
                json={"action": "toggle", "taskId": catalog.AUTO_SYNC, "config": {"enabled": value}},
            )
            self.assertEqual(response.status_code, 400, value)
            self.assertEqual(response.json()["detail"], "enabled must be a boolean")

        status = self.client.get("/automation/status").json()
        by_id = {task["id"]: task for task in status["tasks"]}
        self.assertTrue(by_id[catalog.AUTO_SYNC]["enabled"])

    def test_null_config_is_treated_as_empty(self):
        run = self.client.post(
            "/automation",
            json={"action": "run", "taskId": catalog.HEALTH_CHECK, "config": None},
        )
        self.assertEqual(run.status_code, 200)
        self.assertTrue(run.json()["success"])

        toggle = self.client.post(
            "/automation",
            json={"action": "toggle", "taskId": catalog.AUTO_SYNC, "config": None},
        )
        self.assertEqual(toggle.status_code, 200)
        self.assertFalse(toggle.json()["enabled"])

        restore = self.client.post("/automation", json={"action": "restore", "config": None})
        self.assertEqual(restore.status_code, 400)

    def test_restore_action(self):
        missing_id = self.client.post("/automation", json={"action": "restore", "config": {}})
        self.assertEqual(missing_id.status_code, 400)

        missing_object = self.client.post(
            "/automation",
            json={"action": "restore", "config": {"backupId": "nope.json"}},
        )
        self.assertEqual(missing_object.status_code, 502)

        self.backend.objects[("backups", "backup-1.json")] = json.dumps({"metadata": {"total_records": 3}}).encode()
        restored = self.client.post(
            "/automation",
            json={"action": "restore", "config": {"backupId": "backup-1.json"}},
        )
        self.assertEqual(restored.status_code, 200)
        body = restored.json()
        self.assertEqual(body["status"], "started")
        self.assertEqual(body["backupMetadata"], {"total_records": 3})
        self.assertEqual(len(body["steps"]), 4)

    def test_status_reflects_history_and_master_switch(self):
        self.client.post(f"/automation/{catalog.AUTO_SYNC}/run")
        toggle = self.client.post("/automation/toggle", json={"enabled": False})
        self.assertEqual(toggle.status_code, 200)
        self.assertEqual(toggle.json()["message"], "Automation disabled")

        response = self.client.get("/automation/status")
        self.assertEqual(response.status_code, 200)
        body = response.json()
        self.assertFalse(body["enabled"])
        self.assertEqual(body["errorCount"], 0)
        self.assertEqual(body["source"], "history")
        self.assertIsNotNone(body["lastSync"])
        by_id = {task["id"]: task for task in body["tasks"]}
        self.assertEqual(by_id[catalog.AUTO_SYNC]["status"], "completed")
        self.assertEqual(by_id[catalog.AUTO_SYNC]["result"]["syncedUsers"], 2)
        self.assertEqual(by_id[catalog.BACKUP_NOW]["status"], "idle")

    def test_task_list_filter(self):
        self.client.post(f"/automation/{catalog.HEALTH_CHECK}/run")
        response = self.client.get("/automation/tasks", params={"status": "completed"})
        self.assertEqual(response.status_code, 200)
        body = response.json()
        self.assertTrue(body["success"])
        self.assertEqual(body["total"], 1)
        self.assertEqual(body["data"][0]["id"], catalog.HEALTH_CHECK)

    def test_cancel_endpoint(self):
        idle = self.client.post(f"/automation/{catalog.AUTO_SYNC}/cancel")
        self.assertEqual(idle.status_code, 200)
        self.assertEqual(idle.json(), {"taskId": catalog.AUTO_SYNC, "cancelled": False})

        unknown = self.client.post("/automation/ghost/cancel")
        self.assertEqual(unknown.status_code, 404)

    def test_backup_then_list_backups(self):
        run = self.client.post(f"/automation/{catalog.BACKUP_NOW}/run")
        self.assertTrue(run.json()["success"])
        self.assertEqual(run.json()["result"]["records"], {"users": 2, "clients": 1, "secrets": 0})

        response = self.client.get("/automation/backups")
        self.assertEqual(response.status_code, 200)
        self.assertEqual([item["name"] for item in response.json()], [run.json()["result"]["fileName"]])


if __name__ == "__main__":
    unittest.main()
