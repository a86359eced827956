# app/db/store_preferences.py
import logging
from datetime import datetime, timezone
from pydantic import ValidationError
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession
from app.core.constants import PREFERENCES_STORAGE_KEY
from app.models.user_preferences import StoredPreferences
from app.schemas.preferences import UserPreferences

logger = logging.getLogger(__name__)


class PreferencesStore:
    """Load/save UserPreferences as one JSON blob under a storage key."""

    async def load(self, key: str = PREFERENCES_STORAGE_KEY) -> UserPreferences | None:
        raise NotImplementedError

    async def save(
        self, preferences: UserPreferences, key: str = PREFERENCES_STORAGE_KEY
    ) -> UserPreferences:
        raise NotImplementedError


def _decode(key: str, payload: str) -> UserPreferences | None:
    # a corrupt blob is treated like a missing one
    try:
        return UserPreferences.model_validate_json(payload)
    except ValidationError as e:
        logger.error(f"Failed to load preferences for {key!r}: {e}")
        return None


def _encode(preferences: UserPreferences) -> str:
    return preferences.model_dump_json(by_alias=True)


class MemoryPreferencesStore(PreferencesStore):
    def __init__(self):
        self._blobs = {}

    async def load(self, key=PREFERENCES_STORAGE_KEY):
        payload = self._blobs.get(key)
        if payload is None:
            return None
        return _decode(key, payload)

    async def save(self, preferences, key=PREFERENCES_STORAGE_KEY):
        self._blobs[key] = _encode(preferences)
        return preferences


class SqlPreferencesStore(PreferencesStore):
    def __init__(self, db: AsyncSession):
        self.db = db

    async def load(self, key=PREFERENCES_STORAGE_KEY):
        result = await self.db.execute(
            select(StoredPreferences).where(StoredPreferences.storage_key == key)
        )
        row = result.scalar_one_or_none()
        if row is None:
            return None
        return _decode(key, row.payload)

    async def save(self, preferences, key=PREFERENCES_STORAGE_KEY):
        result = await self.db.execute(
            select(StoredPreferences).where(StoredPreferences.storage_key == key)
        )
        row = result.scalar_one_or_none()
        # naive UTC, matching the DateTime column
        now = datetime.now(timezone.utc).replace(tzinfo=None)

        # upsert by storage key
        if row is None:
            self.db.add(
                StoredPreferences(storage_key=key, payload=_encode(preferences), updated_at=now)
            )
        else:
            row.payload = _encode(preferences)
            row.updated_at = now

        await self.db.commit()
        logger.info(f"Saved preferences for {key!r}")
        return preferences
