# Shapes taken from cdn.nba.com scheduleLeagueV2.json (only the fields we use)
from pydantic import ConfigDict
from app.schemas import CamelModel


class Team(CamelModel):
    model_config = ConfigDict(frozen=True)

    team_id: int = 0
    team_name: str = ""
    team_city: str = ""
    team_tricode: str = ""
    team_slug: str = ""
    wins: int = 0
    losses: int = 0
    score: int | None = 0
    seed: int | None = None


class Game(CamelModel):
    model_config = ConfigDict(frozen=True)

    game_id: str
    game_code: str = ""
    game_status: int = 1
    game_status_text: str = ""  # displayed start time, e.g. "7:30 pm ET"
    game_date_est: str = ""
    game_time_est: str = ""
    game_label: str = ""
    game_sub_label: str = ""
    series_text: str = ""
    arena_name: str = ""
    arena_city: str = ""
    arena_state: str = ""
    is_neutral: bool = False
    home_team: Team
    away_team: Team
    broadcasters: dict | None = None

    @property
    def matchup(self) -> str:
        return f"{self.away_team.team_tricode} @ {self.home_team.team_tricode}"


class WeekData(CamelModel):
    week_start: str
    week_end: str
    games: list[Game] = []
