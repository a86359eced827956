from pydantic import ConfigDict, Field
from app.schemas import CamelModel
from app.schemas.schedule import Game, WeekData
from app.schemas.preferences import UserPreferences


class Assignment(CamelModel):
    model_config = ConfigDict(frozen=True)

    game_id: str
    tv_number: int
    date: str
    time_slot: str
    reasoning: str = ""


class OptimizedGame(Game):
    priority: int
    tv_assignment: int
    color: str
    reasoning: str
    assigned_date: str | None = None
    assigned_time_slot: str | None = None
    time_window: str | None = None


class CalendarRequest(CamelModel):
    week_data: WeekData
    user_preferences: UserPreferences


class CalendarResponse(CamelModel):
    optimized_games: list[OptimizedGame]
    tv_schedule: dict[int, list[OptimizedGame]]
    recommendations: list[str]
    week_summary: str


# What the oracle must send back (validated before use)
class OracleAssignment(CamelModel):
    model_config = ConfigDict(coerce_numbers_to_str=True)

    game_id: str
    tv_number: int
    date: str | None = None
    time_slot: str | None = None
    reasoning: str | None = None


class OracleResponse(CamelModel):
    tv_assignments: list[OracleAssignment]
    recommendations: list[str]
    week_summary: str | None = None


class EmailRequest(CamelModel):
    week_data: WeekData
    recipient_email: str = Field(min_length=3)


class EmailResponse(CamelModel):
    success: bool
    message_id: str | None = None
    week_range: str
