# Game priority scoring (1-10) from user preferences and team records
import math
from dataclasses import dataclass
from app.core.constants import (
    BASE_PRIORITY,
    MIN_PRIORITY,
    MAX_PRIORITY,
    FAVORITE_TEAM_BONUS,
    REGIONAL_BONUS,
    PLAYOFF_BONUS,
    STRONG_RECORD_PCT,
    WEAK_RECORD_PCT,
    WEST_COAST_ZIP_PREFIX,
    WEST_COAST_TEAMS,
    PLAYOFF_KEYWORDS,
)
from app.schemas.schedule import Game, Team
from app.schemas.preferences import UserPreferences


@dataclass(frozen=True)
class ScoredGame:
    game: Game
    priority: int
    is_favorite: bool = False

    @property
    def game_id(self) -> str:
        return self.game.game_id


def win_pct(team: Team) -> float:
    played = team.wins + team.losses
    if played == 0:
        return math.nan
    return team.wins / played


def is_favorite_game(game: Game, preferences: UserPreferences) -> bool:
    favorites = preferences.favorite_set
    return (
        game.home_team.team_tricode in favorites
        or game.away_team.team_tricode in favorites
    )


def calculate_priority(game: Game, preferences: UserPreferences) -> int:
    priority = BASE_PRIORITY

    if is_favorite_game(game, preferences):
        priority += FAVORITE_TEAM_BONUS

    codes = {game.home_team.team_tricode, game.away_team.team_tricode}
    if (preferences.zip_code or "").startswith(WEST_COAST_ZIP_PREFIX) and (
        codes & WEST_COAST_TEAMS
    ):
        priority += REGIONAL_BONUS

    label = (game.game_label or "").lower()
    if any(keyword in label for keyword in PLAYOFF_KEYWORDS):
        priority += PLAYOFF_BONUS

    # a team with no games played has no record; skip the adjustment entirely
    avg_pct = (win_pct(game.home_team) + win_pct(game.away_team)) / 2
    if not math.isnan(avg_pct):
        if avg_pct > STRONG_RECORD_PCT:
            priority += 1
        elif avg_pct < WEAK_RECORD_PCT:
            priority -= 1

    return max(MIN_PRIORITY, min(MAX_PRIORITY, priority))


def score_games(games: list[Game], preferences: UserPreferences) -> list[ScoredGame]:
    """Score every game, highest priority first (stable for ties)."""
    scored = [
        ScoredGame(
            game=game,
            priority=calculate_priority(game, preferences),
            is_favorite=is_favorite_game(game, preferences),
        )
        for game in games
    ]
    scored.sort(key=lambda sg: sg.priority, reverse=True)
    return scored


def priority_color(priority: int) -> str:
    # blue for low priority through to yellow for high priority
    normalized = (priority - MIN_PRIORITY) / (MAX_PRIORITY - MIN_PRIORITY)
    red = round(normalized * 255)
    green = round(165 + normalized * 90)
    blue = round(255 - normalized * 255)
    return f"rgb({red}, {green}, {blue})"
