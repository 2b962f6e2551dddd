# =============================================================================
# tests/test_routers.py - HTTP Endpoint Tests
# =============================================================================
# Exercises the FastAPI app end to end with:
# - the Supabase client replaced by a MagicMock
# - the filename synthesizer using a fake vision client
# - n8n replaced via a ScheduleService dependency override
# =============================================================================

import re
from types import SimpleNamespace
from unittest.mock import AsyncMock, MagicMock, patch

import httpx
import pytest
from fastapi.testclient import TestClient

from agents.filename_synthesizer import FilenameSynthesizer
from app.config import FilenameConfig, get_settings
from app.dependencies import get_filename_synthesizer, get_schedule_service
from app.exceptions import WorkflowError
from app.main import app
from core.services.schedule_service import ScheduleService
from lib.n8n_client import SCHEDULE_TRIGGER_TYPE, N8nClient

API = "/api/v1"


@pytest.fixture
def client(supabase_mock, fake_vision):
    """TestClient with a deterministic synthesizer and no notifications."""
    synthesizer = FilenameSynthesizer(FilenameConfig(), fake_vision(answer="sneaker"))
    app.dependency_overrides[get_filename_synthesizer] = lambda: synthesizer

    with patch("core.services.upload_service.notify_upload", new_callable=AsyncMock):
        yield TestClient(app)

    app.dependency_overrides.clear()


@pytest.fixture
def bucket(supabase_mock):
    bucket = supabase_mock.storage.from_.return_value
    bucket.get_public_url.side_effect = lambda key: f"https://cdn.test/{key}"
    return bucket


def _profile_rows(supabase_mock, rows):
    chain = supabase_mock.table.return_value.select.return_value.limit.return_value
    chain.execute.return_value = MagicMock(data=rows)


# =============================================================================
# Root / Health
# =============================================================================

class TestHealth:
    """Test health endpoints."""

    def test_root(self, client):
        assert client.get("/").json()["health"] == "/api/v1/health"

    def test_health(self, client):
        response = client.get(f"{API}/health")
        assert response.status_code == 200
        assert response.json()["status"] == "healthy"

    def test_ready_when_all_buckets_exist(self, client, supabase_mock):
        settings = get_settings()
        supabase_mock.storage.list_buckets.return_value = [
            SimpleNamespace(name=settings.ASSETS_BUCKET),
            SimpleNamespace(name=settings.VIDEOS_BUCKET),
            {"name": settings.PRODUCTS_BUCKET},
        ]

        body = client.get(f"{API}/health/ready").json()

        assert body["status"] == "ready"
        assert body["database"] == "ok"
        assert set(body["buckets"].values()) == {"ok"}
        assert body["n8n"] == ("configured" if settings.n8n_configured else "not configured")

    def test_missing_bucket_is_degraded(self, client, supabase_mock):
        settings = get_settings()
        supabase_mock.storage.list_buckets.return_value = [SimpleNamespace(name=settings.ASSETS_BUCKET)]

        body = client.get(f"{API}/health/ready").json()

        assert body["status"] == "degraded"
        assert body["buckets"][settings.ASSETS_BUCKET] == "ok"
        assert body["buckets"][settings.PRODUCTS_BUCKET] == "missing"

    def test_storage_failure_is_degraded(self, client, supabase_mock):
        supabase_mock.storage.list_buckets.side_effect = Exception("storage down")

        body = client.get(f"{API}/health/ready").json()

        assert body["status"] == "degraded"
        assert body["database"] == "ok"
        assert all(state.startswith("error: storage down") for state in body["buckets"].values())


# =============================================================================
# Uploads
# =============================================================================

class TestUploads:
    """Test upload endpoints."""

    def test_upload_asset(self, client, supabase_mock, bucket):
        _profile_rows(supabase_mock, [])

        response = client.post(
            f"{API}/upload/asset",
            files={"file": ("IMG_1.png", b"\x89PNG", "image/png")},
        )

        assert response.status_code == 200
        body = response.json()
        assert re.fullmatch(r"sneaker_\d+\.png", body["name"])
        assert body["bucket"] == get_settings().ASSETS_BUCKET
        assert body["public_url"] == f"https://cdn.test/{body['name']}"

    def test_upload_video_uses_video_bucket(self, client, supabase_mock, bucket):
        _profile_rows(supabase_mock, [])

        response = client.post(
            f"{API}/upload/video",
            files={"file": ("clip.jpg", b"jpeg", "image/jpeg")},
        )

        assert response.json()["bucket"] == get_settings().VIDEOS_BUCKET
        supabase_mock.storage.from_.assert_called_with(get_settings().VIDEOS_BUCKET)

    def test_upload_without_file(self, client):
        response = client.post(f"{API}/upload/asset", data={"note": "no file"})

        assert response.status_code == 400
        assert response.json()["code"] == "MISSING_FIELD"

    def test_upload_non_image(self, client):
        response = client.post(
            f"{API}/upload/asset",
            files={"file": ("doc.pdf", b"%PDF", "application/pdf")},
        )
        assert response.status_code == 400
        assert response.json()["code"] == "INVALID_FILE_TYPE"

    def test_storage_error_forwarded(self, client, supabase_mock, bucket):
        _profile_rows(supabase_mock, [])
        bucket.upload.side_effect = Exception("The resource already exists")

        response = client.post(
            f"{API}/upload/asset",
            files={"file": ("a.png", b"png", "image/png")},
        )

        assert response.status_code == 400
        assert response.json()["detail"] == "The resource already exists"

    def test_upload_product_keeps_filename(self, client, bucket):
        response = client.post(
            f"{API}/upload/product",
            files={"file": ("red-shoe.jpg", b"jpeg", "image/jpeg")},
        )

        assert response.status_code == 200
        assert response.json()["name"] == "red-shoe.jpg"


# =============================================================================
# Listing / Deletion
# =============================================================================

class TestAssets:
    """Test list and delete endpoints."""

    def test_list_products(self, client, bucket):
        bucket.list.return_value = [{"name": "shoe.jpg"}]

        response = client.get(f"{API}/list/product", params={"limit": 5})

        assert response.json() == {"items": [{"name": "shoe.jpg", "url": "https://cdn.test/shoe.jpg"}]}
        assert bucket.list.call_args.args[1]["limit"] == 5

    def test_list_assets_defaults(self, client, bucket):
        bucket.list.return_value = []

        assert client.get(f"{API}/list/asset").json() == {"items": []}
        options = bucket.list.call_args.args[1]
        assert (options["limit"], options["offset"]) == (24, 0)

    def test_delete_product(self, client, bucket):
        response = client.post(f"{API}/delete/product", json={"name": "shoe.jpg"})

        assert response.json() == {"ok": True}
        bucket.remove.assert_called_once_with(["shoe.jpg"])

    def test_delete_requires_name(self, client, bucket):
        response = client.post(f"{API}/delete/product", json={})

        assert response.status_code == 400
        bucket.remove.assert_not_called()


# =============================================================================
# Prompt
# =============================================================================

class TestPrompt:
    """Test POST /prompt/product."""

    def test_prompt_from_name(self, client, supabase_mock):
        _profile_rows(supabase_mock, [])

        response = client.post(f"{API}/prompt/product", json={"name": "shoe.jpg", "price": "R999"})

        assert response.status_code == 200
        body = response.json()
        settings = get_settings()
        expected = f"{settings.SUPABASE_URL.rstrip('/')}/storage/v1/object/public/{settings.PRODUCTS_BUCKET}/shoe.jpg"
        assert body["variables"]["image"] == expected
        assert body["variables"]["brand_primary"] == "#0A84FF"
        assert "PRICE: R999" in body["user_prompt"]

    def test_prompt_requires_image_or_name(self, client):
        response = client.post(f"{API}/prompt/product", json={})

        assert response.status_code == 400
        assert response.json()["code"] == "PROMPT_INPUT_MISSING"

    def test_prompt_survives_profile_failure(self, client, supabase_mock):
        chain = supabase_mock.table.return_value.select.return_value.limit.return_value
        chain.execute.side_effect = Exception("db down")

        response = client.post(f"{API}/prompt/product", json={"image": "https://cdn.test/a.png"})

        assert response.status_code == 200
        assert response.json()["variables"]["company"] == "Our Brand"


# =============================================================================
# Profile
# =============================================================================

class TestProfile:
    """Test profile endpoints."""

    def test_get_profile_empty(self, client, supabase_mock):
        _profile_rows(supabase_mock, [])
        assert client.get(f"{API}/profile").json() == {"profile": None}

    def test_put_profile(self, client, supabase_mock):
        upsert = supabase_mock.table.return_value.upsert
        upsert.return_value.execute.side_effect = lambda: MagicMock(data=[upsert.call_args.args[0]])

        response = client.put(
            f"{API}/profile",
            json={"company_name": "Acme", "key_topics": "shoes, socks"},
        )

        assert response.status_code == 200
        profile = response.json()["profile"]
        assert profile["id"] == 1
        assert profile["key_topics"] == ["shoes", "socks"]
        assert profile["timezone"] == get_settings().DEFAULT_TIMEZONE
        assert profile["schedule_hours"] == [8]

    def test_put_profile_database_error(self, client, supabase_mock):
        upsert = supabase_mock.table.return_value.upsert
        upsert.return_value.execute.side_effect = Exception("permission denied")

        response = client.put(f"{API}/profile", json={})

        assert response.status_code == 400
        assert response.json()["code"] == "DATABASE_ERROR"


# =============================================================================
# Schedule
# =============================================================================

class TestSchedule:
    """Test schedule and run-now endpoints."""

    @pytest.fixture
    def n8n(self):
        n8n = MagicMock()
        n8n.get_workflow = AsyncMock(return_value={
            "id": "wf1",
            "name": "Daily",
            "active": False,
            "nodes": [{"type": SCHEDULE_TRIGGER_TYPE, "parameters": {}}],
        })
        n8n.patch_workflow = AsyncMock(return_value={"id": "wf1", "active": True})
        return n8n

    def _use(self, service):
        app.dependency_overrides[get_schedule_service] = lambda: service

    def test_put_schedule_not_configured(self, client):
        self._use(ScheduleService(None, None))

        response = client.put(f"{API}/schedule", json={"enabled": True, "hour": 9})

        assert response.status_code == 501

    def test_put_schedule(self, client, supabase_mock, n8n):
        self._use(ScheduleService(n8n, "wf1"))
        upsert = supabase_mock.table.return_value.upsert
        upsert.return_value.execute.return_value = MagicMock(data=[{"id": 1, "schedule_hours": [9]}])

        response = client.put(f"{API}/schedule", json={"enabled": True, "hour": 9})

        assert response.status_code == 200
        assert response.json()["workflow"] == {"id": "wf1", "active": True}
        assert response.json()["ok"] is True
        assert response.json()["profile"] == {"id": 1, "schedule_hours": [9]}

    def test_put_schedule_upstream_error(self, client, n8n):
        n8n.patch_workflow.side_effect = WorkflowError("patch", 400, "invalid")
        self._use(ScheduleService(n8n, "wf1"))

        response = client.put(f"{API}/schedule", json={"hours": [8]})

        assert response.status_code == 502
        assert "invalid" in response.json()["detail"]

    def test_put_schedule_n8n_unreachable(self, client):
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("connection refused", request=request)

        n8n = N8nClient("https://n8n.example.com", "secret", transport=httpx.MockTransport(handler))
        self._use(ScheduleService(n8n, "wf1"))

        response = client.put(f"{API}/schedule", json={"hours": [8]})

        assert response.status_code == 502
        assert response.json()["code"] == "WORKFLOW_ERROR"
        assert "connection refused" in response.json()["detail"]

    def test_put_schedule_bad_hour(self, client):
        self._use(ScheduleService(None, None))

        response = client.put(f"{API}/schedule", json={"hours": [30]})

        assert response.status_code == 400
        assert response.json()["code"] == "VALIDATION_ERROR"

    def test_get_schedule(self, client, supabase_mock, n8n):
        self._use(ScheduleService(n8n, "wf1"))
        _profile_rows(supabase_mock, [{"id": 1, "schedule_hours": [8], "enabled": True}])

        body = client.get(f"{API}/schedule").json()

        assert body["profile"]["schedule_hours"] == [8]
        assert body["workflow"] == {"id": "wf1", "active": False}

    def test_get_schedule_without_workflow(self, client, supabase_mock):
        self._use(ScheduleService(None, None))
        _profile_rows(supabase_mock, [{"id": 1, "schedule_hours": [8], "description": None}])

        body = client.get(f"{API}/schedule").json()

        assert body == {"profile": {"id": 1, "schedule_hours": [8], "description": None}}

    def test_run_now_not_configured(self, client):
        self._use(ScheduleService(None, None))

        response = client.post(f"{API}/run-now")

        assert response.status_code == 501
        assert "N8N_RUN_WEBHOOK_URL" in response.json()["detail"]
        assert "Webhook node" in response.json()["suggestion"]


# =============================================================================
# Posts
# =============================================================================

class TestPosts:
    """Test planned post endpoints."""

    def test_create_post(self, client, supabase_mock):
        insert = supabase_mock.table.return_value.insert
        insert.return_value.execute.return_value = MagicMock(data=[{"id": 3, "status": "todo"}])

        response = client.post(
            f"{API}/posts",
            json={
                "date": "2024-06-01",
                "template": "spotlight",
                "headline": "Fresh bread",
                "image_strategy": "ai",
            },
        )

        assert response.status_code == 200
        assert response.json() == {"row": {"id": 3, "status": "todo"}}

    def test_create_post_invalid(self, client):
        response = client.post(f"{API}/posts", json={"date": "2024-06-01"})
        assert response.status_code == 400

    def test_recent_posts(self, client, supabase_mock):
        chain = supabase_mock.table.return_value.select.return_value.order.return_value.order.return_value
        chain.limit.return_value.execute.return_value = MagicMock(data=[{"id": 1}])

        assert client.get(f"{API}/posts/recent").json() == {"posts": [{"id": 1}]}
        chain.limit.assert_called_with(10)
