# =============================================================================
# tests/test_n8n_client.py - n8n Client Tests
# =============================================================================
# Uses httpx.MockTransport; no network access.
# =============================================================================

import json

import httpx
import pytest

from app.exceptions import WebhookError, WorkflowError
from lib.n8n_client import SCHEDULE_TRIGGER_TYPE, N8nClient, apply_trigger_hours, trigger_webhook

WORKFLOW = {
    "id": "wf1",
    "name": "Daily IG",
    "active": False,
    "connections": {"Schedule": {"main": []}},
    "settings": {"timezone": "Africa/Johannesburg"},
    "nodes": [
        {
            "name": "Schedule",
            "type": SCHEDULE_TRIGGER_TYPE,
            "parameters": {"rule": {"interval": [{"triggerAtHour": 8}]}, "keep": "me"},
        },
        {"name": "Fetch", "type": "n8n-nodes-base.httpRequest", "parameters": {"url": "x"}},
    ],
}


# =============================================================================
# Trigger Hours
# =============================================================================

class TestApplyTriggerHours:
    """Test apply_trigger_hours()."""

    def test_updates_schedule_nodes_only(self):
        nodes = apply_trigger_hours(WORKFLOW["nodes"], [9, 17])

        assert nodes[0]["parameters"]["rule"] == {
            "interval": [{"triggerAtHour": 9}, {"triggerAtHour": 17}]
        }
        assert nodes[0]["parameters"]["keep"] == "me"
        assert nodes[1] == WORKFLOW["nodes"][1]

    def test_does_not_mutate_input(self):
        apply_trigger_hours(WORKFLOW["nodes"], [23])
        assert WORKFLOW["nodes"][0]["parameters"]["rule"]["interval"] == [{"triggerAtHour": 8}]

    def test_node_without_parameters(self):
        nodes = apply_trigger_hours([{"type": SCHEDULE_TRIGGER_TYPE}], [6])
        assert nodes[0]["parameters"]["rule"]["interval"] == [{"triggerAtHour": 6}]


# =============================================================================
# REST Client
# =============================================================================

class TestN8nClient:
    """Test N8nClient."""

    @pytest.mark.asyncio
    async def test_get_workflow(self):
        seen = {}

        def handler(request: httpx.Request) -> httpx.Response:
            seen["url"] = str(request.url)
            seen["auth"] = request.headers.get("authorization")
            return httpx.Response(200, json=WORKFLOW)

        client = N8nClient("https://n8n.example.com/", "secret", transport=httpx.MockTransport(handler))
        wf = await client.get_workflow("wf1")

        assert wf["name"] == "Daily IG"
        assert seen["url"] == "https://n8n.example.com/rest/workflows/wf1"
        assert seen["auth"] == "Bearer secret"

    @pytest.mark.asyncio
    async def test_get_workflow_error(self):
        transport = httpx.MockTransport(lambda request: httpx.Response(404, text="nope"))
        client = N8nClient("https://n8n.example.com", "secret", transport=transport)

        with pytest.raises(WorkflowError) as exc_info:
            await client.get_workflow("missing")

        assert exc_info.value.details["upstream_status"] == 404

    @pytest.mark.asyncio
    async def test_patch_workflow_sends_body(self):
        seen = {}

        def handler(request: httpx.Request) -> httpx.Response:
            seen["method"] = request.method
            seen["body"] = json.loads(request.content)
            return httpx.Response(200, json={"id": "wf1", "active": True})

        client = N8nClient("https://n8n.example.com", "secret", transport=httpx.MockTransport(handler))
        result = await client.patch_workflow("wf1", {"active": True, "nodes": []})

        assert seen["method"] == "PATCH"
        assert seen["body"] == {"active": True, "nodes": []}
        assert result["active"] is True

    @pytest.mark.asyncio
    async def test_patch_error_includes_body(self):
        transport = httpx.MockTransport(lambda request: httpx.Response(400, text="bad nodes"))
        client = N8nClient("https://n8n.example.com", "secret", transport=transport)

        with pytest.raises(WorkflowError) as exc_info:
            await client.patch_workflow("wf1", {})

        assert "bad nodes" in exc_info.value.message

    @pytest.mark.asyncio
    @pytest.mark.parametrize("method", ["get", "patch"])
    async def test_unreachable_raises_workflow_error(self, method):
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("connection refused", request=request)

        client = N8nClient("https://n8n.example.com", "secret", transport=httpx.MockTransport(handler))

        with pytest.raises(WorkflowError) as exc_info:
            if method == "get":
                await client.get_workflow("wf1")
            else:
                await client.patch_workflow("wf1", {"active": True})

        assert exc_info.value.status_code == 502
        assert "connection refused" in exc_info.value.message
        assert "None" not in exc_info.value.message
        assert exc_info.value.details["upstream_status"] is None


# =============================================================================
# Run Webhook
# =============================================================================

class TestTriggerWebhook:
    """Test trigger_webhook()."""

    @pytest.mark.asyncio
    async def test_returns_text(self):
        def handler(request: httpx.Request) -> httpx.Response:
            assert request.method == "POST"
            return httpx.Response(200, text="Workflow was started")

        text = await trigger_webhook("https://n8n.example.com/webhook/run", httpx.MockTransport(handler))

        assert text == "Workflow was started"

    @pytest.mark.asyncio
    async def test_error_status_raises(self):
        transport = httpx.MockTransport(lambda request: httpx.Response(500, text="boom"))

        with pytest.raises(WebhookError) as exc_info:
            await trigger_webhook("https://n8n.example.com/webhook/run", transport)

        assert exc_info.value.status_code == 500
        assert exc_info.value.details == {"upstream_status": 500, "body": "boom"}

    @pytest.mark.asyncio
    async def test_unreachable_raises_webhook_error(self):
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectTimeout("timed out", request=request)

        with pytest.raises(WebhookError) as exc_info:
            await trigger_webhook("https://n8n.example.com/webhook/run", httpx.MockTransport(handler))

        assert exc_info.value.status_code == 500
        assert exc_info.value.message == "Webhook unreachable: timed out"
        assert exc_info.value.details == {"upstream_status": None, "body": "timed out"}
