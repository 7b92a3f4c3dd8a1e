import unittest

from fastapi.testclient import TestClient

from taskboard.app import create_app
from taskboard.assets import InMemoryAssetStore
from taskboard.db import InMemoryDbClient
from taskboard.dependencies import (
    get_asset_store,
    get_db_client,
    get_summarizer,
    get_theme_store,
)
from taskboard.kv import InMemoryKvClient, ThemeStore
from taskboard.summarizer import InMemorySummarizer

CORS_HEADERS = {
    "access-control-allow-origin": "*",
    "access-control-allow-methods": "GET, POST, PUT, DELETE, OPTIONS",
    "access-control-allow-headers": "Content-Type",
}


class FailingDbClient(InMemoryDbClient):
    def create_task(self, title: str):
        raise RuntimeError("UNIQUE constraint failed: tasks.id")


class BackendApiTests(unittest.TestCase):
    def setUp(self):
        self.app = create_app()
        self.db = InMemoryDbClient()
        self.kv = InMemoryKvClient()
        self.summarizer = InMemorySummarizer(reply="Buy groceries for the week")
        self.assets = InMemoryAssetStore(
            objects={
                "index.html": b"<html>spa</html>",
                "assets/app.js": b"console.log('hi')",
            }
        )
        self.app.dependency_overrides[get_db_client] = lambda: self.db
        self.app.dependency_overrides[get_theme_store] = lambda: ThemeStore(
            kv=self.kv
        )
        self.app.dependency_overrides[get_summarizer] = lambda: self.summarizer
        self.app.dependency_overrides[get_asset_store] = lambda: self.assets
        self.client = TestClient(self.app)

    def assertCorsHeaders(self, response):
        for name, value in CORS_HEADERS.items():
            self.assertEqual(response.headers.get(name), value)

    def test_theme_defaults_to_light_then_reads_back(self):
        response = self.client.get("/api/theme")
        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.json(), {"theme": "light"})

        response = self.client.post("/api/theme", json={"theme": "dark"})
        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.json(), {"success": True})

        response = self.client.get("/api/theme")
        self.assertEqual(response.json(), {"theme": "dark"})
        self.assertCorsHeaders(response)

    def test_summarize_relays_model_text(self):
        response = self.client.post(
            "/api/summarize", json={"text": "remember to buy milk, eggs and bread"}
        )
        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.json(), {"summary": "Buy groceries for the week"})
        self.assertEqual(
            self.summarizer.prompts,
            [
                "Summarize this task in under 10 words: "
                "remember to buy milk, eggs and bread"
            ],
        )

    def test_summarize_without_text_sends_empty_prompt(self):
        response = self.client.post("/api/summarize", json={})
        self.assertEqual(response.status_code, 200)
        self.assertEqual(
            self.summarizer.prompts, ["Summarize this task in under 10 words: "]
        )

    def test_summarize_null_text_sends_empty_prompt(self):
        response = self.client.post("/api/summarize", json={"text": None})
        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.json(), {"summary": "Buy groceries for the week"})
        self.assertEqual(
            self.summarizer.prompts, ["Summarize this task in under 10 words: "]
        )

    def test_task_lifecycle(self):
        created = self.client.post("/api/tasks", json={"title": "Write report"})
        self.assertEqual(created.status_code, 200)
        task = created.json()
        self.assertEqual(task["title"], "Write report")
        self.assertFalse(task["completed"])
        self.assertIsInstance(task["created_at"], int)
        self.assertTrue(task["id"])

        listed = self.client.get("/api/tasks")
        self.assertEqual(listed.status_code, 200)
        self.assertEqual(listed.json(), [task])

        updated = self.client.put(
            f"/api/tasks/{task['id']}", json={"title": "x", "completed": True}
        )
        self.assertEqual(updated.status_code, 200)
        self.assertEqual(
            updated.json(), {"id": task["id"], "title": "x", "completed": True}
        )
        self.assertTrue(self.client.get("/api/tasks").json()[0]["completed"])

        deleted = self.client.delete(f"/api/tasks/{task['id']}")
        self.assertEqual(deleted.status_code, 200)
        self.assertEqual(deleted.json(), {"success": True})
        self.assertEqual(self.client.get("/api/tasks").json(), [])

    def test_update_unknown_task_echoes_request(self):
        response = self.client.put(
            "/api/tasks/does-not-exist", json={"title": "x", "completed": True}
        )
        self.assertEqual(response.status_code, 200)
        self.assertEqual(
            response.json(), {"id": "does-not-exist", "title": "x", "completed": True}
        )
        self.assertEqual(self.db.tasks, {})

    def test_update_uses_first_segment_after_tasks_prefix(self):
        task = self.db.create_task("Draft")
        response = self.client.put(
            f"/api/tasks/{task.id}/extra/segments",
            json={"title": "Final", "completed": True},
        )
        self.assertEqual(response.status_code, 200)
        self.assertEqual(
            response.json(), {"id": task.id, "title": "Final", "completed": True}
        )
        self.assertEqual(self.db.tasks[task.id].title, "Final")

    def test_delete_uses_first_segment_after_tasks_prefix(self):
        keep = self.db.create_task("keep")
        drop = self.db.create_task("drop")
        response = self.client.delete(f"/api/tasks/{drop.id}/more")
        self.assertEqual(response.status_code, 200)
        self.assertEqual(list(self.db.tasks), [keep.id])

    def test_delete_with_empty_id_succeeds(self):
        self.db.create_task("keep")
        response = self.client.delete("/api/tasks/")
        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.json(), {"success": True})
        self.assertEqual(len(self.db.tasks), 1)

    def test_delete_unknown_task_succeeds(self):
        response = self.client.delete("/api/tasks/does-not-exist")
        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.json(), {"success": True})

    def test_options_preflight_returns_204(self):
        for path in ("/api/tasks", "/api/tasks/abc", "/api/anything/at/all"):
            response = self.client.options(path)
            self.assertEqual(response.status_code, 204)
            self.assertEqual(response.content, b"")
            self.assertCorsHeaders(response)

    def test_unmatched_api_route_is_plain_404(self):
        for method, path in (
            ("GET", "/api/unknown"),
            ("GET", "/api/summarize"),
            ("PATCH", "/api/tasks/abc"),
            ("PUT", "/api/tasks"),
            ("GET", "/api/"),
        ):
            response = self.client.request(method, path)
            self.assertEqual(response.status_code, 404, (method, path))
            self.assertEqual(response.text, "Not Found")
            self.assertCorsHeaders(response)

    def test_missing_field_is_server_error(self):
        response = self.client.post("/api/tasks", json={})
        self.assertEqual(response.status_code, 500)
        self.assertCorsHeaders(response)

    def test_malformed_json_is_server_error(self):
        response = self.client.post(
            "/api/theme",
            content=b"{not json",
            headers={"Content-Type": "application/json"},
        )
        self.assertEqual(response.status_code, 500)

    def test_store_failure_is_server_error(self):
        self.app.dependency_overrides[get_db_client] = lambda: FailingDbClient()
        response = self.client.post("/api/tasks", json={"title": "boom"})
        self.assertEqual(response.status_code, 500)
        self.assertEqual(response.text, "Internal Server Error")
        self.assertCorsHeaders(response)

    def test_static_asset_served(self):
        response = self.client.get("/assets/app.js")
        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.content, b"console.log('hi')")
        self.assertIn("javascript", response.headers["content-type"])
        self.assertNotIn("access-control-allow-origin", response.headers)

    def test_options_on_static_path_goes_to_asset_store(self):
        response = self.client.options("/assets/app.js")
        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.content, b"console.log('hi')")
        self.assertNotIn("access-control-allow-origin", response.headers)

    def test_root_serves_index(self):
        response = self.client.get("/")
        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.content, b"<html>spa</html>")

    def test_unknown_path_falls_back_to_spa_entry(self):
        response = self.client.get("/tasks/42/edit")
        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.content, b"<html>spa</html>")
        self.assertIn("text/html", response.headers["content-type"])

    def test_api_without_trailing_slash_is_static(self):
        response = self.client.get("/api")
        self.assertEqual(response.content, b"<html>spa</html>")

    def test_missing_spa_entry_is_404(self):
        self.assets.objects.pop("index.html")
        response = self.client.get("/nowhere")
        self.assertEqual(response.status_code, 404)

    def test_static_path_without_asset_store_is_500(self):
        self.app.dependency_overrides[get_asset_store] = lambda: None
        response = self.client.get("/index.html")
        self.assertEqual(response.status_code, 500)
        self.assertEqual(response.text, "Assets not configured")


if __name__ == "__main__":
    unittest.main()
