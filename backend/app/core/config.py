from pydantic_settings import BaseSettings, SettingsConfigDict
from pathlib import Path

BASE_DIR = Path(__file__).resolve().parents[3]


class Settings(BaseSettings):
    DATABASE_URL: str = "sqlite+aiosqlite:///./tv_planner.db"
    LOG_LEVEL: str = "INFO"

    # cdn.nba.com season schedule feed
    NBA_SCHEDULE_URL: str = (
        "https://cdn.nba.com/static/json/staticData/scheduleLeagueV2.json"
    )
    SCHEDULE_CACHE_SECONDS: int = 60 * 10

    # openai (optional, fallback allocator is used without a key)
    OPENAI_API_KEY: str | None = None
    OPENAI_MODEL: str = "gpt-4o-mini"
    OPENAI_TEMPERATURE: float = 0.7
    OPENAI_MAX_TOKENS: int = 2000

    # resend.com
    RESEND_API_KEY: str | None = None
    RESEND_BASE_URL: str = "https://api.resend.com"
    EMAIL_FROM: str = "Sports Schedule <onboarding@resend.dev>"
    EMAIL_REPLY_TO: str = "onboarding@resend.dev"

    model_config = SettingsConfigDict(
        env_file=BASE_DIR / ".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )


settings = Settings()
