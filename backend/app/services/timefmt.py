# Date/time formatting helpers for the schedule feed's display strings
import re
from datetime import date, datetime
from app.core.constants import GAME_DURATION_MINUTES, END_TIME_TBD

_TIME_RE = re.compile(r"(\d{1,2}):(\d{2})\s*(am|pm)", re.IGNORECASE)

# formats seen in gameDateEst / gameDate and in week boundaries
_DATE_FORMATS = (
    "%Y-%m-%dT%H:%M:%SZ",
    "%Y-%m-%dT%H:%M:%S",
    "%Y-%m-%d",
    "%m/%d/%Y %H:%M:%S",
    "%m/%d/%Y",
)


def parse_start_minutes(start_time: str) -> int | None:
    """Minutes after midnight for strings like "7:30 pm ET", or None."""
    match = _TIME_RE.search(start_time or "")
    if not match:
        return None

    hours = int(match.group(1))
    minutes = int(match.group(2))
    period = match.group(3).lower()

    if period == "pm" and hours != 12:
        hours += 12
    if period == "am" and hours == 12:
        hours = 0
    return hours * 60 + minutes


def _format_clock(total_minutes: int) -> str:
    hours = (total_minutes // 60) % 24
    minutes = total_minutes % 60
    period = "pm" if hours >= 12 else "am"
    display = 12 if hours == 0 else hours - 12 if hours > 12 else hours
    return f"{display}:{minutes:02d} {period} ET"


def get_end_time(start_time: str) -> str:
    start = parse_start_minutes(start_time)
    if start is None:
        return END_TIME_TBD
    return _format_clock(start + GAME_DURATION_MINUTES)


def time_window(start_time: str) -> str:
    return f"{start_time} - {get_end_time(start_time)}"


def slot_sort_key(time_slot: str):
    # unparseable slots ("TBD", "Final") sort after real start times
    minutes = parse_start_minutes(time_slot)
    return (minutes is None, minutes if minutes is not None else 0, time_slot)


def parse_date(value) -> date | None:
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if not value:
        return None

    text = str(value).strip()
    for fmt in _DATE_FORMATS:
        try:
            return datetime.strptime(text, fmt).date()
        except ValueError:
            continue
    try:
        return datetime.fromisoformat(text.replace("Z", "+00:00")).date()
    except ValueError:
        return None


def game_date_key(game) -> str:
    """Calendar date (YYYY-MM-DD) a game is played on, US Eastern."""
    parsed = parse_date(game.game_date_est)
    if parsed is not None:
        return parsed.isoformat()
    return (game.game_date_est or "").split(" ")[0]


def format_week_range(week_start, week_end) -> str:
    start = parse_date(week_start)
    end = parse_date(week_end)
    if start is None or end is None:
        return f"{week_start} - {week_end}"

    start_month = start.strftime("%b")
    end_month = end.strftime("%b")
    if start_month == end_month:
        return f"{start_month} {start.day}-{end.day}, {end.year}"
    return f"{start_month} {start.day} - {end_month} {end.day}, {end.year}"


def format_long_date(value) -> str:
    """'2025-01-15' -> 'Wednesday, January 15, 2025'."""
    parsed = parse_date(value)
    if parsed is None:
        return str(value)
    return f"{parsed.strftime('%A, %B')} {parsed.day}, {parsed.year}"
