# =============================================================================
# app/routers/schedule.py - Posting Schedule Endpoints
# =============================================================================
# - GET  /schedule  saved schedule + n8n workflow active flag
# - PUT  /schedule  push hours to n8n and save them on the profile
# - POST /run-now   start the daily workflow immediately
# =============================================================================

from fastapi import APIRouter

from app.dependencies import ScheduleServiceDep
from core.models.schedule import ScheduleResponse, ScheduleUpdate

router = APIRouter()


@router.get("/schedule", response_model=ScheduleResponse, response_model_exclude_unset=True)
async def get_schedule(schedule: ScheduleServiceDep):
    """Saved schedule. `workflow` is omitted when n8n can't be reached."""
    return ScheduleResponse(**await schedule.get_schedule())


@router.put("/schedule", response_model=ScheduleResponse, response_model_exclude_unset=True)
async def put_schedule(update: ScheduleUpdate, schedule: ScheduleServiceDep):
    """
    Update the posting schedule.

    Body: `{"enabled": true, "hours": [8, 16]}` or `{"enabled": true, "hour": 8}`.
    """
    return ScheduleResponse(**await schedule.update_schedule(update))


@router.post("/run-now")
async def run_now(schedule: ScheduleServiceDep):
    """Trigger the n8n run webhook. 501 when it is not configured."""
    return await schedule.run_now()
