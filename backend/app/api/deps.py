# FastAPI dependencies for the external clients (overridden in tests)
from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession
from app.db.session import get_db
from app.db.store_preferences import PreferencesStore, SqlPreferencesStore
from app.services.calendar import CalendarService
from app.services.email_client import EmailClient
from app.services.oracle_client import OracleClient
from app.services.schedule_client import ScheduleClient


def get_schedule_client() -> ScheduleClient:
    return ScheduleClient()


# one OpenAI connection pool per request, closed once the response is sent
async def get_oracle_client():
    oracle = OracleClient.from_settings()
    try:
        yield oracle
    finally:
        if oracle is not None:
            await oracle.close()


def get_calendar_service(
    oracle: OracleClient | None = Depends(get_oracle_client),
) -> CalendarService:
    return CalendarService(oracle=oracle)


def get_email_client() -> EmailClient:
    return EmailClient()


def get_preferences_store(db: AsyncSession = Depends(get_db)) -> PreferencesStore:
    return SqlPreferencesStore(db)
