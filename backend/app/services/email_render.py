# HTML email body for a week's schedule (inline styles for mail clients)
from collections import defaultdict
from datetime import datetime
from html import escape
from app.schemas.schedule import Game, Team, WeekData
from app.services.schedule_client import broadcaster_names
from app.services.timefmt import format_long_date, format_week_range, game_date_key

BADGE = "padding: 4px 8px; border-radius: 4px; font-size: 14px;"


def _team_row(label: str, team: Team) -> str:
    return f"""
        <div style="display: flex; align-items: center; gap: 12px; margin-bottom: 8px;">
          <span style="font-size: 14px; color: #6b7280; width: 48px;">{label}:</span>
          <span style="font-weight: 600; color: #111827;">{escape(team.team_city)} {escape(team.team_name)}</span>
          <span style="background-color: #e5e7eb; color: #374151; {BADGE} font-family: monospace;">{escape(team.team_tricode)}</span>
          <span style="font-size: 14px; color: #6b7280;">({team.wins}-{team.losses})</span>
        </div>"""


def _venue(game: Game) -> str:
    parts = [p for p in (game.arena_name, game.arena_city, game.arena_state) if p]
    return escape(", ".join(parts))


def _game_card(game: Game) -> str:
    sub_label = (
        f'<span style="background-color: #f3f4f6; color: #374151; {BADGE}">'
        f"{escape(game.game_sub_label)}</span>"
        if game.game_sub_label
        else ""
    )
    neutral = (
        '<span style="background-color: #fef3c7; color: #d97706; padding: 2px 8px; '
        'border-radius: 4px; font-size: 12px;">Neutral Site</span>'
        if game.is_neutral
        else ""
    )
    networks = broadcaster_names(game)
    watch_on = (
        f'<div style="font-size: 14px; color: #6b7280; margin-top: 8px;">'
        f"Watch on: {escape(', '.join(networks))}</div>"
        if networks
        else ""
    )

    return f"""
      <div style="border: 1px solid #e5e7eb; border-radius: 8px; padding: 16px; margin: 8px 0; background-color: #ffffff;">
        <div style="display: flex; justify-content: space-between; align-items: center; margin-bottom: 12px;">
          <div style="display: flex; align-items: center; gap: 8px;">
            <span style="background-color: #fed7aa; color: #ea580c; {BADGE} font-weight: 500;">{escape(game.game_label)}</span>
            {sub_label}
          </div>
          <div style="font-size: 18px; font-weight: 600; color: #2563eb;">{escape(game.game_status_text)}</div>
        </div>
        {_team_row("Away", game.away_team)}
        {_team_row("Home", game.home_team)}
        <div style="border-top: 1px solid #e5e7eb; padding-top: 12px; font-size: 14px; color: #6b7280;">
          <span>{_venue(game)}</span>
          {neutral}
        </div>
        {watch_on}
      </div>"""


def _day_section(day: str, games: list[Game]) -> str:
    count = f"{len(games)} game{'s' if len(games) != 1 else ''}"
    cards = "".join(_game_card(game) for game in games)
    return f"""
    <div style="margin-bottom: 32px;">
      <h3 style="background-color: #2563eb; color: white; padding: 16px 24px; margin: 0; font-size: 20px; font-weight: 600; border-radius: 8px 8px 0 0;">{escape(format_long_date(day))}</h3>
      <div style="background-color: #f9fafb; padding: 16px 24px; border-radius: 0 0 8px 8px;">
        <p style="color: #2563eb; margin: 0 0 16px 0; font-size: 16px;">{count}</p>
        {cards}
      </div>
    </div>"""


def render_schedule_email(week_data: WeekData, generated_at: datetime | None = None) -> str:
    week_range = escape(format_week_range(week_data.week_start, week_data.week_end))
    generated_at = generated_at or datetime.now()

    games_by_date = defaultdict(list)
    for game in week_data.games:
        games_by_date[game_date_key(game)].append(game)

    if games_by_date:
        body = "".join(_day_section(day, games_by_date[day]) for day in sorted(games_by_date))
    else:
        body = (
            '<p style="text-align: center; color: #666; font-style: italic; margin: 20px 0;">'
            "No games scheduled for this week.</p>"
        )

    stamp = (
        f"{generated_at.strftime('%A, %B')} {generated_at.day}, {generated_at.year} "
        f"{generated_at.strftime('%I:%M %p').lstrip('0')}"
    )

    return f"""<!DOCTYPE html>
<html>
<head>
  <meta charset="utf-8">
  <meta name="viewport" content="width=device-width, initial-scale=1">
  <title>NBA Schedule - {week_range}</title>
</head>
<body style="font-family: -apple-system, BlinkMacSystemFont, 'Segoe UI', Roboto, sans-serif; line-height: 1.6; color: #333; max-width: 800px; margin: 0 auto; padding: 20px; background-color: #f9fafb;">
  <div style="background-color: white; border-radius: 12px; overflow: hidden; box-shadow: 0 4px 6px rgba(0, 0, 0, 0.1);">
    <header style="background: linear-gradient(135deg, #2563eb 0%, #1d4ed8 100%); color: white; padding: 32px 24px; text-align: center;">
      <h1 style="margin: 0 0 8px 0; font-size: 32px; font-weight: bold;">NBA Schedule</h1>
      <h2 style="margin: 0; font-size: 24px; font-weight: 600; opacity: 0.9;">{week_range}</h2>
    </header>
    <div style="padding: 32px 24px;">{body}
    </div>
    <footer style="background-color: #f3f4f6; padding: 16px 24px; text-align: center; color: #6b7280; font-size: 14px;">
      <p style="margin: 0;">Generated on {escape(stamp)}</p>
    </footer>
  </div>
</body>
</html>
"""


def email_subject(week_data: WeekData) -> str:
    return f"Sports Schedule - {format_week_range(week_data.week_start, week_data.week_end)}"
