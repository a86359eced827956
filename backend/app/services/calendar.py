# Builds a week's multi-TV viewing calendar
import logging
from collections import defaultdict
from app.schemas.calendar import Assignment, CalendarResponse, OptimizedGame
from app.schemas.preferences import UserPreferences
from app.schemas.schedule import WeekData
from app.services.allocator import TvAllocator
from app.services.oracle_client import OracleClient
from app.services.scoring import ScoredGame, priority_color, score_games
from app.services.timefmt import format_week_range, game_date_key, time_window

logger = logging.getLogger(__name__)


class CalendarService:
    def __init__(self, oracle: OracleClient | None = None):
        self.oracle = oracle

    async def generate(
        self, week_data: WeekData, preferences: UserPreferences
    ) -> CalendarResponse:
        # raises ConfigurationError before any scoring/oracle work
        allocator = TvAllocator(preferences.number_of_tvs)
        scored = score_games(week_data.games, preferences)
        week_range = format_week_range(week_data.week_start, week_data.week_end)

        if not scored:
            proposed = []
            recommendations = ["No games scheduled for this week"]
            week_summary = f"No games scheduled for {week_range}"
        elif self.oracle is None:
            logger.warning("Oracle not configured, using fallback allocation")
            note = " (optimized for your TV setup)" if preferences.tv_setup_description else ""
            proposed = allocator.seed(scored, note=note)
            recommendations = fallback_recommendations(preferences)
            week_summary = (
                f"Automatic viewing plan for {week_range} with priority-based TV distribution"
            )
        else:
            plan = await self.oracle.propose(
                scored, preferences, week_data.week_start, week_data.week_end
            )
            proposed = plan.tv_assignments
            recommendations = plan.recommendations or [
                "AI recommendations unavailable - using automatic assignments"
            ]
            week_summary = plan.week_summary or (
                f"Viewing plan for {week_range} with automatic TV assignments"
            )

        result = allocator.allocate(scored, proposed=proposed)
        if result.conflicts:
            logger.error(f"{len(result.conflicts)} TV conflicts left in the calendar")

        optimized = build_optimized_games(result.assignments, scored)
        return CalendarResponse(
            optimized_games=optimized,
            tv_schedule=group_by_tv(optimized, preferences.number_of_tvs),
            recommendations=recommendations,
            week_summary=week_summary,
        )


def fallback_recommendations(preferences: UserPreferences) -> list[str]:
    return [
        "OpenAI API not configured - using automatic assignments based on priority",
        f"Games distributed across {preferences.number_of_tvs} TVs with highest "
        "priority content on primary screens",
        "TV placement considers your setup description for optimal viewing"
        if preferences.tv_setup_description
        else "Consider adding TV setup description for better optimization",
    ]


def build_optimized_games(
    assignments: list[Assignment], scored: list[ScoredGame]
) -> list[OptimizedGame]:
    by_id = {sg.game_id: sg for sg in scored}
    optimized = []
    for assignment in assignments:
        sg = by_id[assignment.game_id]
        optimized.append(
            OptimizedGame(
                **sg.game.model_dump(),
                priority=sg.priority,
                tv_assignment=assignment.tv_number,
                color=priority_color(sg.priority),
                reasoning=assignment.reasoning,
                assigned_date=assignment.date,
                assigned_time_slot=assignment.time_slot,
                time_window=time_window(assignment.time_slot),
            )
        )
    return optimized


def group_by_tv(optimized: list[OptimizedGame], number_of_tvs: int) -> dict:
    schedule = {tv: [] for tv in range(1, number_of_tvs + 1)}
    for game in optimized:
        schedule.setdefault(game.tv_assignment, []).append(game)

    empty = [tv for tv, games in schedule.items() if not games]
    if empty and optimized:
        logger.error(f"TVs with no games assigned: {empty}")
    return schedule


def _day_of(game: OptimizedGame) -> str:
    return game.assigned_date or game_date_key(game)


def games_by_date(calendar: CalendarResponse) -> dict[str, list[OptimizedGame]]:
    """Unique games per date (a game shown on several TVs appears once)."""
    days = defaultdict(dict)
    for game in calendar.optimized_games:
        days[_day_of(game)].setdefault(game.game_id, game)
    return {day: list(days[day].values()) for day in sorted(days)}


def tv_schedule_for_date(calendar: CalendarResponse, day: str) -> dict:
    return {
        tv: [game for game in games if _day_of(game) == day]
        for tv, games in calendar.tv_schedule.items()
    }
