"""Shared fixtures: game factories and a clean upstream cache per test."""

import pytest

from app.schemas.preferences import UserPreferences
from app.schemas.schedule import Game, Team
from app.services.cache import CACHE
from app.services.scoring import ScoredGame


@pytest.fixture(autouse=True)
def clear_cache():
    CACHE.clear()
    yield
    CACHE.clear()


def build_game(
    game_id,
    away="BOS",
    home="NYK",
    time="7:00 pm ET",
    day="2025-01-15",
    away_record=(41, 41),
    home_record=(41, 41),
    label="",
):
    return Game(
        game_id=game_id,
        game_status_text=time,
        game_date_est=f"{day}T00:00:00Z",
        game_label=label,
        arena_name="Madison Square Garden",
        arena_city="New York",
        arena_state="NY",
        away_team=Team(
            team_id=1,
            team_city="Away",
            team_name=away.title(),
            team_tricode=away,
            wins=away_record[0],
            losses=away_record[1],
        ),
        home_team=Team(
            team_id=2,
            team_city="Home",
            team_name=home.title(),
            team_tricode=home,
            wins=home_record[0],
            losses=home_record[1],
        ),
    )


@pytest.fixture
def make_game():
    return build_game


@pytest.fixture
def make_scored():
    def factory(game_id, priority=5, is_favorite=False, **game_kwargs):
        return ScoredGame(
            game=build_game(game_id, **game_kwargs),
            priority=priority,
            is_favorite=is_favorite,
        )

    return factory


@pytest.fixture
def prefs():
    return UserPreferences(number_of_tvs=3, favorite_nba_teams=["LAL"])
