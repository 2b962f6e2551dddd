# =============================================================================
# lib/notifier.py - Upload Notification Webhook
# =============================================================================
# Fire-and-forget POST after a successful upload. Failures are logged and
# otherwise ignored; the upload itself is never rolled back.
# =============================================================================

import logging
from datetime import datetime, timezone

import httpx

logger = logging.getLogger(__name__)


async def notify_upload(
    webhook_url: str | None,
    name: str,
    url: str,
    bucket: str,
    mime: str | None,
    size: int,
    transport: httpx.AsyncBaseTransport | None = None,
) -> bool:
    """
    Tell the notification webhook about a new object.

    Returns:
        True if the webhook accepted the POST, False otherwise (including
        when no webhook is configured)
    """
    if not webhook_url:
        return False

    payload = {
        "name": name,
        "url": url,
        "bucket": bucket,
        "mime": mime,
        "size": size,
        "timestamp": datetime.now(timezone.utc).isoformat(),
    }

    try:
        async with httpx.AsyncClient(transport=transport) as client:
            resp = await client.post(webhook_url, json=payload)
        if resp.status_code >= 400:
            logger.warning(f"Upload notification returned {resp.status_code} for {name}")
            return False
        return True
    except Exception as e:
        logger.warning(f"Upload notification failed for {name}: {e}")
        return False
