# Client for the cdn.nba.com season schedule feed
import httpx
import logging
from nba_api.stats.static import teams as nba_static_teams
from app.core.config import settings
from app.schemas.schedule import Game, WeekData
from app.services.cache import cached
from app.services.timefmt import parse_date

logger = logging.getLogger(__name__)


class ScheduleClient:
    def __init__(self, url: str | None = None, timeout: float = 20, transport=None):
        self.url = url or settings.NBA_SCHEDULE_URL
        self.timeout = timeout
        self.transport = transport

    @property
    def cache_scope(self):
        return self.url

    @cached(ttl_seconds=lambda: settings.SCHEDULE_CACHE_SECONDS)
    async def fetch_schedule(self):
        logger.info("NBA SCHEDULE FEED CALLED: fetch_schedule")

        async with httpx.AsyncClient(timeout=self.timeout, transport=self.transport) as client:
            res = await client.get(self.url, headers={"Accept": "application/json"})
            res.raise_for_status()
            return res.json()


def build_week(schedule: dict, week_start: str, week_end: str) -> WeekData:
    """Flatten leagueSchedule.gameDates into the games of [week_start, week_end]."""
    start = parse_date(week_start)
    end = parse_date(week_end)
    if start is None or end is None or end < start:
        raise ValueError(f"Invalid week range: {week_start} - {week_end}")

    game_dates = (schedule or {}).get("leagueSchedule", {}).get("gameDates", [])

    games = []
    skipped = 0
    for game_date in game_dates:
        day = parse_date(game_date.get("gameDate"))
        if day is None or not start <= day <= end:
            continue
        for raw in game_date.get("games", []):
            # placeholder playoff games have no teams yet
            if not raw.get("homeTeam") or not raw.get("awayTeam"):
                skipped += 1
                continue
            games.append(Game.model_validate(raw))

    if skipped:
        logger.info(f"Skipped {skipped} games without teams in {week_start} - {week_end}")

    return WeekData(week_start=start.isoformat(), week_end=end.isoformat(), games=games)


def broadcaster_names(game: Game) -> list[str]:
    """Non-TBD broadcaster display names, national first, de-duplicated."""
    groups = (
        "nationalBroadcasters",
        "homeTvBroadcasters",
        "homeRadioBroadcasters",
        "awayTvBroadcasters",
        "awayRadioBroadcasters",
    )
    names = []
    for group in groups:
        for broadcaster in (game.broadcasters or {}).get(group) or []:
            display = broadcaster.get("broadcasterDisplay")
            if display and display != "TBD" and display not in names:
                names.append(display)
    return names


def nba_teams() -> list[dict]:
    # static dataset shipped with nba_api, no network call
    return sorted(
        (
            {"tricode": t["abbreviation"], "name": t["full_name"]}
            for t in nba_static_teams.get_teams()
        ),
        key=lambda t: t["tricode"],
    )


def unknown_team_codes(codes) -> list[str]:
    known = {t["tricode"] for t in nba_teams()}
    return [code for code in codes if code not in known]
