# API routes for the NBA schedule feed
import logging
from fastapi import APIRouter, Depends, HTTPException, Query
from fastapi.responses import JSONResponse
from app.api.deps import get_schedule_client
from app.schemas.schedule import WeekData
from app.services.schedule_client import ScheduleClient, build_week, nba_teams

logger = logging.getLogger(__name__)

router = APIRouter()


# full season schedule, passed through as-is
@router.get("/schedule")
async def get_schedule(client: ScheduleClient = Depends(get_schedule_client)):
    try:
        return await client.fetch_schedule()
    except Exception as e:
        logger.error(f"Error fetching NBA schedule: {e}")
        return JSONResponse(
            status_code=500, content={"error": "Failed to fetch NBA schedule"}
        )


# games between two dates (inclusive), in the shape generate-calendar expects
@router.get("/schedule/week", response_model=WeekData)
async def get_week(
    start: str = Query(..., description="YYYY-MM-DD"),
    end: str = Query(..., description="YYYY-MM-DD"),
    client: ScheduleClient = Depends(get_schedule_client),
):
    try:
        schedule = await client.fetch_schedule()
    except Exception as e:
        logger.error(f"Error fetching NBA schedule: {e}")
        raise HTTPException(
            status_code=500,
            detail={"error": "Failed to fetch NBA schedule", "details": str(e)},
        )

    try:
        return build_week(schedule, start, end)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))


@router.get("/teams")
def list_teams():
    return nba_teams()
