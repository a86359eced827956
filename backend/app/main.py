# Main FastAPI application
from fastapi import FastAPI
from app.api import calendar, email_schedule, health, preferences, schedule
from app.core.config import settings
from app.db.base import Base
from app.db.session import engine
from app.models import user_preferences  # noqa: F401 (registers the table)
import logging

# for logging in fastapi
logging.basicConfig(
    level=settings.LOG_LEVEL,
    format="%(levelname)s: %(name)s: %(message)s",
)


app = FastAPI(title="NBA TV Planner API")

app.include_router(health.router)
app.include_router(schedule.router, prefix="/api", tags=["Schedule"])
app.include_router(calendar.router, prefix="/api", tags=["Calendar"])
app.include_router(email_schedule.router, prefix="/api", tags=["Email"])
app.include_router(preferences.router, prefix="/api/preferences", tags=["Preferences"])


@app.on_event("startup")
async def startup():
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)


@app.get("/")
def root():
    return {"message": "NBA TV Planner API running"}
