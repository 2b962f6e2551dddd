# =============================================================================
# core/models/profile.py - Business Profile Schemas
# =============================================================================
# The business_profile table holds a single row describing the brand:
# name, industry, topics, tone, colors and the posting schedule.
#
# - BusinessProfile: read model, built leniently from whatever row comes back
# - BusinessProfileUpdate: the upsert payload written by PUT /profile
#
# Both AI helpers read a BusinessProfile. It is fetched fresh per request.
# =============================================================================

from __future__ import annotations

from datetime import datetime, timezone
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator


def to_text_list(value: Any) -> list[str] | None:
    """
    Normalize list input: accept a list or a comma-separated string.

    Items are stripped and empties dropped. Anything else becomes None.

    Example:
        "cakes, , bread" -> ["cakes", "bread"]
    """
    if isinstance(value, (list, tuple)):
        return [str(v).strip() for v in value if str(v).strip()]
    if isinstance(value, str):
        return [v.strip() for v in value.split(",") if v.strip()]
    return None


class BusinessProfile(BaseModel):
    """
    Read model for the single business_profile row.

    Every field is optional because the row may be missing entirely or
    only partially filled in by the operator.
    """

    model_config = ConfigDict(extra="ignore")

    id: int | str | None = None
    company_name: str | None = None
    industry: str | None = None
    key_topics: list[str] | None = None
    tone_style: str | None = None
    content_brief: str | None = None
    brand_primary_hex: str | None = None
    brand_accent_hex: str | None = None

    logo_url: str | None = None
    timezone: str | None = None
    schedule_hours: list[int] | None = None
    enabled: bool | None = None
    target_audience: str | None = None
    brand_voice: str | None = None
    products_services: str | None = None
    website: str | None = None
    location: str | None = None
    goals: str | None = None
    hashtags: list[str] | None = None
    content_pillars: list[str] | None = None
    updated_at: str | None = None

    @field_validator("key_topics", "hashtags", "content_pillars", mode="before")
    @classmethod
    def _normalize_lists(cls, value: Any) -> list[str] | None:
        return to_text_list(value)

    @classmethod
    def from_row(cls, row: dict[str, Any] | None) -> BusinessProfile:
        """Build a profile from a raw table row; None gives an empty profile."""
        return cls.model_validate(row or {})


class BusinessProfileUpdate(BaseModel):
    """
    Upsert payload for PUT /profile.

    Uses the extended column set. Fields the caller omits are written as
    NULL (or their default), matching a full-form save from the dashboard.
    """

    model_config = ConfigDict(extra="ignore")

    company_name: str | None = None
    brand_primary_hex: str | None = None
    brand_accent_hex: str | None = None
    logo_url: str | None = None
    timezone: str | None = None
    schedule_hours: list[int] | None = None
    enabled: bool | None = None
    industry: str | None = None
    target_audience: str | None = None
    brand_voice: str | None = None
    products_services: str | None = None
    website: str | None = None
    location: str | None = None
    goals: str | None = None

    content_brief: str | None = None
    key_topics: list[str] | None = None
    tone_style: str | None = None
    hashtags: list[str] | None = None
    content_pillars: list[str] | None = None

    @field_validator("key_topics", "hashtags", "content_pillars", mode="before")
    @classmethod
    def _normalize_lists(cls, value: Any) -> list[str] | None:
        return to_text_list(value)

    @field_validator("schedule_hours", mode="before")
    @classmethod
    def _hours_must_be_list(cls, value: Any) -> list[int] | None:
        # Non-list input falls back to the default schedule
        return value if isinstance(value, list) else None

    def to_payload(self, default_timezone: str = "Africa/Johannesburg") -> dict[str, Any]:
        """
        Build the row written to business_profile.

        Args:
            default_timezone: Used when the caller sent no timezone

        Returns:
            Dict ready for upsert, including updated_at
        """
        payload = self.model_dump()
        payload["timezone"] = self.timezone or default_timezone
        payload["schedule_hours"] = self.schedule_hours if self.schedule_hours is not None else [8]
        payload["enabled"] = True if self.enabled is None else self.enabled
        payload["updated_at"] = datetime.now(timezone.utc).isoformat()
        return payload


class ProfileEnvelope(BaseModel):
    """Response wrapper used by GET/PUT /profile."""

    profile: dict[str, Any] | None = Field(default=None)
