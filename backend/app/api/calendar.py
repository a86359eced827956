# API route that turns a week of games into a per-TV viewing calendar
import logging
from fastapi import APIRouter, Depends, HTTPException
from app.api.deps import get_calendar_service
from app.core.exceptions import ConfigurationError
from app.schemas.calendar import CalendarRequest, CalendarResponse
from app.services.calendar import CalendarService

logger = logging.getLogger(__name__)

router = APIRouter()


@router.post("/generate-calendar", response_model=CalendarResponse)
async def generate_calendar(
    request: CalendarRequest,
    service: CalendarService = Depends(get_calendar_service),
):
    try:
        return await service.generate(request.week_data, request.user_preferences)
    except ConfigurationError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except Exception as e:
        logger.error(f"Generate calendar error: {e}")
        raise HTTPException(
            status_code=500,
            detail={"error": "Failed to generate calendar", "details": str(e)},
        )
