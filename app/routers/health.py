# =============================================================================
# app/routers/health.py - Health Check Endpoints
# =============================================================================
# - GET /health        process is up, plus environment/version
# - GET /health/ready  can we serve the dashboard?
#
# Readiness means the profile table answers and every configured bucket
# exists. n8n is reported but never blocks readiness: without it only the
# schedule endpoints return 501.
# =============================================================================

from datetime import datetime, timezone
from typing import Any, Literal

from fastapi import APIRouter
from pydantic import BaseModel

from app.config import Settings
from app.dependencies import SettingsDep
from lib.supabase_client import PROFILE_TABLE, SupabaseClient

router = APIRouter()

API_VERSION = "1.0.0"


class HealthResponse(BaseModel):
    status: str
    environment: str
    version: str
    timestamp: str


class ReadinessResponse(BaseModel):
    """
    Dependency status.

    Example:
        {
            "status": "degraded",
            "database": "ok",
            "buckets": {"ig_assets": "ok", "ig_videos": "missing", "ig_products": "ok"},
            "n8n": "not configured"
        }
    """
    status: Literal["ready", "degraded"]
    database: str
    buckets: dict[str, str]
    n8n: Literal["configured", "not configured"]
    timestamp: str


def _bucket_name(bucket: Any) -> str | None:
    # supabase-py returns bucket objects; older releases returned dicts
    if isinstance(bucket, dict):
        return bucket.get("name")
    return getattr(bucket, "name", None)


def _check_database() -> str:
    try:
        SupabaseClient.get_client().table(PROFILE_TABLE).select("id").limit(1).execute()
        return "ok"
    except Exception as e:
        return f"error: {str(e)[:80]}"


def _check_buckets(settings: Settings) -> dict[str, str]:
    wanted = [settings.ASSETS_BUCKET, settings.VIDEOS_BUCKET, settings.PRODUCTS_BUCKET]
    try:
        existing = {_bucket_name(b) for b in SupabaseClient.get_client().storage.list_buckets()}
    except Exception as e:
        return {name: f"error: {str(e)[:80]}" for name in wanted}
    return {name: "ok" if name in existing else "missing" for name in wanted}


@router.get("/health", response_model=HealthResponse)
async def health_check(settings: SettingsDep):
    """Process is up; reports environment and version."""
    return HealthResponse(
        status="healthy",
        environment=settings.ENVIRONMENT,
        version=API_VERSION,
        timestamp=datetime.now(timezone.utc).isoformat(),
    )


@router.get("/health/ready", response_model=ReadinessResponse)
async def readiness_check(settings: SettingsDep):
    """Profile table, storage buckets and n8n configuration."""
    database = _check_database()
    buckets = _check_buckets(settings)
    ready = database == "ok" and all(state == "ok" for state in buckets.values())

    return ReadinessResponse(
        status="ready" if ready else "degraded",
        database=database,
        buckets=buckets,
        n8n="configured" if settings.n8n_configured else "not configured",
        timestamp=datetime.now(timezone.utc).isoformat(),
    )
