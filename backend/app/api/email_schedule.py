# API route to email a week's schedule (resend.com)
import logging
from fastapi import APIRouter, Depends, HTTPException
from app.api.deps import get_email_client
from app.schemas.calendar import EmailRequest, EmailResponse
from app.services.email_client import EmailClient
from app.services.email_render import email_subject, render_schedule_email
from app.services.timefmt import format_week_range

logger = logging.getLogger(__name__)

router = APIRouter()


@router.post("/email-schedule", response_model=EmailResponse)
async def email_schedule(
    request: EmailRequest,
    client: EmailClient = Depends(get_email_client),
):
    week = request.week_data
    try:
        message_id = await client.send(
            to=request.recipient_email,
            subject=email_subject(week),
            html=render_schedule_email(week),
        )
    except Exception as e:
        logger.error(f"Email schedule error: {e}")
        raise HTTPException(
            status_code=500,
            detail={"error": "Failed to send email", "details": str(e)},
        )

    return EmailResponse(
        success=True,
        message_id=message_id,
        week_range=format_week_range(week.week_start, week.week_end),
    )
