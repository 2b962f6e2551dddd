# =============================================================================
# core/services/profile_service.py - Business Profile Logic
# =============================================================================
# Reads and writes the single business_profile row.
# Separates HTTP concerns from database/business logic.
# =============================================================================

import logging
from datetime import datetime, timezone
from typing import Any

from pydantic import ValidationError

from lib.supabase_client import SupabaseClient, SupabaseClientError
from core.models.profile import BusinessProfile, BusinessProfileUpdate
from app.exceptions import DatabaseError

logger = logging.getLogger(__name__)


class ProfileService:
    """Service for business profile operations."""

    @staticmethod
    def get_profile() -> dict[str, Any] | None:
        """
        Get the raw profile row.

        Returns:
            Row dict, or None if no profile has been saved yet

        Raises:
            DatabaseError: If the query fails
        """
        try:
            return SupabaseClient.fetch_business_profile()
        except SupabaseClientError as e:
            logger.error(f"Failed to load profile: {e}")
            raise DatabaseError("business_profile", e.message)

    @staticmethod
    def get_business_profile() -> BusinessProfile:
        """Typed profile; an empty profile when none is saved."""
        return BusinessProfile.from_row(ProfileService.get_profile())

    @staticmethod
    def get_business_profile_or_empty() -> BusinessProfile:
        """
        Typed profile for best-effort callers.

        Database failures and rows that don't fit BusinessProfile are logged
        and produce an empty profile.
        """
        try:
            return ProfileService.get_business_profile()
        except DatabaseError as e:
            logger.warning(f"Profile unavailable, continuing without it: {e.message}")
            return BusinessProfile()
        except ValidationError as e:
            logger.warning(f"Profile row malformed, continuing without it: {e.error_count()} errors")
            return BusinessProfile()

    @staticmethod
    def upsert_profile(
        update: BusinessProfileUpdate,
        default_timezone: str = "Africa/Johannesburg",
    ) -> dict[str, Any] | None:
        """
        Save the full profile form.

        Returns:
            Stored row

        Raises:
            DatabaseError: If the upsert fails
        """
        try:
            return SupabaseClient.upsert_business_profile(update.to_payload(default_timezone))
        except SupabaseClientError as e:
            logger.error(f"Failed to save profile: {e}")
            raise DatabaseError("business_profile", e.message)

    @staticmethod
    def save_schedule(hours: list[int], enabled: bool) -> dict[str, Any] | None:
        """
        Mirror the posting schedule onto the profile row.

        Only schedule_hours, enabled and updated_at are written; other
        columns keep their values.

        Raises:
            DatabaseError: If the upsert fails
        """
        payload = {
            "schedule_hours": hours,
            "enabled": enabled,
            "updated_at": datetime.now(timezone.utc).isoformat(),
        }
        try:
            return SupabaseClient.upsert_business_profile(payload)
        except SupabaseClientError as e:
            logger.error(f"Failed to save schedule: {e}")
            raise DatabaseError("business_profile", e.message)
