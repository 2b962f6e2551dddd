# =============================================================================
# lib/n8n_client.py - n8n REST API Client
# =============================================================================
# The daily posting workflow lives in n8n. This system only:
# - reads the workflow (to show whether it is active)
# - patches its schedule trigger hours and active flag
# - POSTs to a Webhook node to start a run immediately
#
# Usage:
#   client = N8nClient(base_url, api_key)
#   wf = await client.get_workflow(workflow_id)
# =============================================================================

from __future__ import annotations

import copy
import logging
from typing import Any

import httpx

from app.exceptions import WebhookError, WorkflowError

logger = logging.getLogger(__name__)

SCHEDULE_TRIGGER_TYPE = "n8n-nodes-base.scheduleTrigger"


def apply_trigger_hours(nodes: list[dict[str, Any]], hours: list[int]) -> list[dict[str, Any]]:
    """
    Point every schedule-trigger node at the given hours.

    Other nodes are returned unchanged. The input list is not mutated.

    Example:
        hours=[8, 16] -> parameters.rule = {"interval": [{"triggerAtHour": 8}, {"triggerAtHour": 16}]}
    """
    updated = []
    for node in nodes:
        if node.get("type") == SCHEDULE_TRIGGER_TYPE:
            node = copy.deepcopy(node)
            parameters = node.get("parameters") or {}
            parameters["rule"] = {"interval": [{"triggerAtHour": h} for h in hours]}
            node["parameters"] = parameters
        updated.append(node)
    return updated


class N8nClient:
    """
    Minimal async client for /rest/workflows.

    Attributes:
        base_url: n8n instance URL (no trailing slash needed)
        api_key: Sent as a Bearer token
    """

    def __init__(
        self,
        base_url: str,
        api_key: str,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self.base_url = base_url.rstrip("/")
        self.api_key = api_key
        self._transport = transport

    def _workflow_url(self, workflow_id: str) -> str:
        return f"{self.base_url}/rest/workflows/{workflow_id}"

    @property
    def _headers(self) -> dict[str, str]:
        return {"Authorization": f"Bearer {self.api_key}"}

    async def get_workflow(self, workflow_id: str) -> dict[str, Any]:
        """
        Fetch a workflow definition.

        Returns:
            Workflow dict: id, name, active, nodes, connections, settings

        Raises:
            WorkflowError: Non-2xx response, or n8n unreachable
        """
        try:
            async with httpx.AsyncClient(transport=self._transport) as client:
                resp = await client.get(self._workflow_url(workflow_id), headers=self._headers)
        except httpx.HTTPError as e:
            logger.error(f"n8n get workflow {workflow_id} failed: {e}")
            raise WorkflowError("get workflow", None, str(e))

        if resp.status_code >= 400:
            logger.error(f"n8n get workflow {workflow_id} failed: {resp.status_code}")
            raise WorkflowError("get workflow", resp.status_code)
        return resp.json()

    async def patch_workflow(self, workflow_id: str, fields: dict[str, Any]) -> dict[str, Any]:
        """
        Patch a workflow.

        Args:
            workflow_id: Workflow to update
            fields: Partial workflow (name, active, nodes, connections, settings)

        Returns:
            The updated workflow

        Raises:
            WorkflowError: Non-2xx response (body included in the message),
                or n8n unreachable
        """
        try:
            async with httpx.AsyncClient(transport=self._transport) as client:
                resp = await client.patch(
                    self._workflow_url(workflow_id),
                    json=fields,
                    headers=self._headers,
                )
        except httpx.HTTPError as e:
            logger.error(f"n8n patch workflow {workflow_id} failed: {e}")
            raise WorkflowError("patch", None, str(e))

        if resp.status_code >= 400:
            logger.error(f"n8n patch workflow {workflow_id} failed: {resp.status_code}")
            raise WorkflowError("patch", resp.status_code, resp.text)

        logger.info(f"Patched n8n workflow {workflow_id} (active={fields.get('active')})")
        return resp.json()


async def trigger_webhook(url: str, transport: httpx.AsyncBaseTransport | None = None) -> str:
    """
    Start a run via a Webhook node. POST with no body.

    Returns:
        Response text from the webhook

    Raises:
        WebhookError: Non-2xx response, or the webhook is unreachable
    """
    try:
        async with httpx.AsyncClient(transport=transport) as client:
            resp = await client.post(url)
    except httpx.HTTPError as e:
        logger.error(f"Run webhook unreachable: {e}")
        raise WebhookError(None, str(e))

    if resp.status_code >= 400:
        logger.error(f"Run webhook returned {resp.status_code}")
        raise WebhookError(resp.status_code, resp.text)

    logger.info("Triggered n8n run webhook")
    return resp.text
