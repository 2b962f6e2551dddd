# =============================================================================
# core/models/schedule.py - Posting Schedule Schemas
# =============================================================================
# The operator picks one or two hours of the day; those hours are pushed to
# the n8n schedule trigger and mirrored on the business profile for the UI.
# =============================================================================

from typing import Any

from pydantic import BaseModel, Field, field_validator

DEFAULT_HOUR = 8


class ScheduleUpdate(BaseModel):
    """
    Body of PUT /schedule.

    Either `hours` (list) or a single `hour` may be sent.
    """

    enabled: bool = False
    hours: list[int] | None = None
    hour: int | None = None

    @field_validator("hours")
    @classmethod
    def _hours_in_range(cls, value: list[int] | None) -> list[int] | None:
        if value is not None:
            for hour in value:
                if not 0 <= hour <= 23:
                    raise ValueError(f"hour out of range: {hour}")
        return value

    @field_validator("hour")
    @classmethod
    def _hour_in_range(cls, value: int | None) -> int | None:
        if value is not None and not 0 <= value <= 23:
            raise ValueError(f"hour out of range: {value}")
        return value

    def resolved_hours(self) -> list[int]:
        """Hours to schedule: the list if given, else [hour or 8]."""
        if self.hours is not None:
            return list(self.hours)
        return [self.hour if self.hour is not None else DEFAULT_HOUR]


class WorkflowSummary(BaseModel):
    """The bits of an n8n workflow the dashboard shows."""

    id: str | int | None = None
    active: bool | None = None


class ScheduleResponse(BaseModel):
    """Response of GET/PUT /schedule."""

    ok: bool | None = None
    profile: dict[str, Any] | None = None
    workflow: WorkflowSummary | None = Field(default=None)
