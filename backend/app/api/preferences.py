# API routes for the user's persisted viewing preferences
from fastapi import APIRouter, Depends, HTTPException
from app.api.deps import get_preferences_store
from app.core.constants import PREFERENCES_STORAGE_KEY
from app.db.store_preferences import PreferencesStore
from app.schemas.preferences import UserPreferences
from app.services.schedule_client import unknown_team_codes

router = APIRouter()


# saved preferences, or the defaults when nothing was saved yet
@router.get("", response_model=UserPreferences)
async def get_preferences(
    key: str = PREFERENCES_STORAGE_KEY,
    store: PreferencesStore = Depends(get_preferences_store),
):
    return await store.load(key) or UserPreferences()


@router.put("", response_model=UserPreferences)
async def save_preferences(
    preferences: UserPreferences,
    key: str = PREFERENCES_STORAGE_KEY,
    store: PreferencesStore = Depends(get_preferences_store),
):
    if preferences.number_of_tvs < 1:
        raise HTTPException(status_code=400, detail="numberOfTvs must be at least 1")

    unknown = unknown_team_codes(preferences.favorite_nba_teams)
    if unknown:
        raise HTTPException(
            status_code=400, detail=f"Unknown NBA team codes: {', '.join(unknown)}"
        )

    return await store.save(preferences, key)
