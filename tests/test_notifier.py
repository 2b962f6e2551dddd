# =============================================================================
# tests/test_notifier.py - Upload Notification Tests
# =============================================================================

import json

import httpx
import pytest

from lib.notifier import notify_upload

URL = "https://hooks.example.com/upload"


class TestNotifyUpload:
    """Test notify_upload()."""

    @pytest.mark.asyncio
    async def test_no_url_is_noop(self):
        assert await notify_upload(None, "a.png", "https://x/a.png", "ig_assets", "image/png", 3) is False

    @pytest.mark.asyncio
    async def test_posts_payload(self):
        seen = {}

        def handler(request: httpx.Request) -> httpx.Response:
            seen["body"] = json.loads(request.content)
            return httpx.Response(204)

        ok = await notify_upload(
            URL, "a_1.png", "https://x/a_1.png", "ig_assets", "image/png", 3,
            transport=httpx.MockTransport(handler),
        )

        assert ok is True
        body = seen["body"]
        assert body["name"] == "a_1.png"
        assert body["bucket"] == "ig_assets"
        assert body["size"] == 3
        assert body["timestamp"]

    @pytest.mark.asyncio
    async def test_error_status_returns_false(self):
        transport = httpx.MockTransport(lambda request: httpx.Response(500))
        ok = await notify_upload(URL, "a.png", "u", "b", None, 1, transport=transport)
        assert ok is False

    @pytest.mark.asyncio
    async def test_transport_failure_is_swallowed(self):
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("refused", request=request)

        ok = await notify_upload(URL, "a.png", "u", "b", None, 1, transport=httpx.MockTransport(handler))
        assert ok is False
