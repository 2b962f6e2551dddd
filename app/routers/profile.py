# =============================================================================
# app/routers/profile.py - Business Profile Endpoints
# =============================================================================

from fastapi import APIRouter

from app.dependencies import SettingsDep
from core.models.profile import BusinessProfileUpdate, ProfileEnvelope
from core.services.profile_service import ProfileService

router = APIRouter()


@router.get("/profile", response_model=ProfileEnvelope)
async def get_profile():
    """Current profile row, or null when none has been saved."""
    return ProfileEnvelope(profile=ProfileService.get_profile())


@router.put("/profile", response_model=ProfileEnvelope)
async def put_profile(update: BusinessProfileUpdate, settings: SettingsDep):
    """
    Save the whole profile form.

    `key_topics`, `hashtags` and `content_pillars` accept a list or a
    comma-separated string.
    """
    row = ProfileService.upsert_profile(update, default_timezone=settings.DEFAULT_TIMEZONE)
    return ProfileEnvelope(profile=row)
