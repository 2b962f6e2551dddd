# =============================================================================
# core/services/schedule_service.py - Posting Schedule Sync
# =============================================================================
# Keeps the n8n daily workflow's trigger hours in sync with the schedule the
# operator picks on the dashboard, and mirrors it on the business profile.
#
# Order on save: patch n8n first, then the profile. If the profile write
# fails the workflow stays patched (no compensation).
# =============================================================================

import logging
from typing import Any

from lib.n8n_client import N8nClient, apply_trigger_hours, trigger_webhook
from core.models.schedule import ScheduleUpdate
from core.services.profile_service import ProfileService
from app.config import Settings
from app.exceptions import DatabaseError, WorkflowError, WorkflowNotConfiguredError

logger = logging.getLogger(__name__)

RUN_WEBHOOK_HINT = (
    "Create a Webhook node in your n8n daily workflow and expose its "
    "production URL, then set it as N8N_RUN_WEBHOOK_URL."
)


class ScheduleService:
    """
    Schedule operations backed by n8n and the profile table.

    Attributes:
        n8n: Workflow API client (None when n8n is not configured)
        workflow_id: The daily workflow to patch
        run_webhook_url: Webhook that starts a run immediately
    """

    def __init__(
        self,
        n8n: N8nClient | None,
        workflow_id: str | None,
        run_webhook_url: str | None = None,
    ):
        self.n8n = n8n
        self.workflow_id = workflow_id
        self.run_webhook_url = run_webhook_url

    @classmethod
    def from_settings(cls, settings: Settings) -> "ScheduleService":
        n8n = None
        if settings.n8n_configured:
            n8n = N8nClient(settings.N8N_BASE_URL, settings.N8N_API_KEY)
        return cls(n8n, settings.N8N_DAILY_WORKFLOW_ID, settings.N8N_RUN_WEBHOOK_URL)

    def _require_workflow(self) -> N8nClient:
        if self.n8n is None or not self.workflow_id:
            raise WorkflowNotConfiguredError(
                "N8N_BASE_URL/N8N_API_KEY/N8N_DAILY_WORKFLOW_ID",
                hint="Set the n8n connection settings to manage the posting schedule",
            )
        return self.n8n

    async def get_schedule(self) -> dict[str, Any]:
        """
        Saved schedule plus the workflow's active flag.

        The workflow part is omitted when n8n is unreachable or not set up.
        """
        try:
            profile = ProfileService.get_profile()
        except DatabaseError as e:
            logger.warning(f"Could not read saved schedule: {e.message}")
            profile = None
        result: dict[str, Any] = {"profile": profile}

        if self.n8n is None or not self.workflow_id:
            return result

        try:
            wf = await self.n8n.get_workflow(self.workflow_id)
            result["workflow"] = {"id": wf.get("id"), "active": wf.get("active")}
        except WorkflowError as e:
            logger.warning(f"Could not read n8n workflow {self.workflow_id}: {e}")

        return result

    async def update_schedule(self, update: ScheduleUpdate) -> dict[str, Any]:
        """
        Push trigger hours + active flag to n8n, then save them on the profile.

        Returns:
            {"ok": True, "profile": row, "workflow": {"id", "active"}}

        Raises:
            WorkflowNotConfiguredError: n8n settings missing
            WorkflowError: n8n unreachable, or it rejected the read or the patch
            DatabaseError: profile write failed
        """
        n8n = self._require_workflow()
        hours = update.resolved_hours()

        wf = await n8n.get_workflow(self.workflow_id)
        nodes = apply_trigger_hours(wf.get("nodes") or [], hours)
        patched = await n8n.patch_workflow(
            self.workflow_id,
            {
                "name": wf.get("name"),
                "active": update.enabled,
                "connections": wf.get("connections"),
                "nodes": nodes,
                "settings": wf.get("settings"),
            },
        )

        profile = ProfileService.save_schedule(hours, update.enabled)
        logger.info(f"Schedule saved: hours={hours} enabled={update.enabled}")

        return {
            "ok": True,
            "profile": profile,
            "workflow": {"id": patched.get("id"), "active": patched.get("active")},
        }

    async def run_now(self) -> dict[str, Any]:
        """
        Start the daily workflow immediately through its webhook.

        Raises:
            WorkflowNotConfiguredError: N8N_RUN_WEBHOOK_URL missing (501)
            WebhookError: webhook answered with an error
        """
        if not self.run_webhook_url:
            raise WorkflowNotConfiguredError("N8N_RUN_WEBHOOK_URL", hint=RUN_WEBHOOK_HINT)

        body = await trigger_webhook(self.run_webhook_url)
        return {"ok": True, "body": body}
