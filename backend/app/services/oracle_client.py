# Client for the LLM "oracle" that proposes a TV assignment plan (OpenAI)
import json
import logging
from collections import defaultdict
from openai import AsyncOpenAI
from pydantic import ValidationError
from app.core.config import settings
from app.core.exceptions import OracleResponseError, UpstreamError
from app.schemas.calendar import OracleResponse
from app.schemas.preferences import UserPreferences
from app.services.scoring import ScoredGame
from app.services.timefmt import format_week_range, game_date_key, slot_sort_key

logger = logging.getLogger(__name__)

SYSTEM_PROMPT = (
    "You are a sports viewing optimizer that helps users manage multiple NBA "
    "games across multiple TVs. Always respond with valid JSON."
)

INSTRUCTIONS = """\
Plan which NBA game each TV shows, for every day of the week below.

Rules:
- Every TV must show a game whenever at least one game is on. No TV stays dark.
- A game lasts about 3.5 hours including pre/post-game coverage. When a TV's game
  ends, switch it to the next available game.
- When several games start at the same time, split the TVs between them and give
  the higher priority game (favorite teams first) more TVs.
- When a time slot has only one game, put it on every TV.
- Put the highest priority games on the most prominent TVs described in the TV
  setup ("main", "large", "living room" before "kitchen", "small", "corner").
- Use TV numbers 1 through {number_of_tvs} only.
- Explain each choice in "reasoning" (priority, TV prominence, timing).

TV setup: {tv_setup}
Favorite teams: {favorites}
Number of TVs: {number_of_tvs}
Week: {week_range}

Games by date (gameId | matchup | start | priority):
{listings}

Respond with a JSON object exactly like:
{{
  "tvAssignments": [
    {{"gameId": "0022400061", "tvNumber": 1, "date": "2025-01-15",
      "timeSlot": "7:00 pm ET", "reasoning": "..."}}
  ],
  "recommendations": ["..."],
  "weekSummary": "One line summary of the week's TV plan"
}}
"""


def build_prompt(
    games: list[ScoredGame],
    preferences: UserPreferences,
    week_start: str,
    week_end: str,
) -> str:
    by_date = defaultdict(list)
    for sg in games:
        by_date[game_date_key(sg.game)].append(sg)

    lines = []
    for day in sorted(by_date):
        lines.append(f"{day}:")
        for sg in sorted(by_date[day], key=lambda g: slot_sort_key(g.game.game_status_text)):
            game = sg.game
            lines.append(
                f"  - {game.game_id} | {game.matchup} "
                f"({game.away_team.team_city} {game.away_team.team_name} vs "
                f"{game.home_team.team_city} {game.home_team.team_name}) | "
                f"{game.game_status_text} | {sg.priority}/10"
            )

    return INSTRUCTIONS.format(
        number_of_tvs=preferences.number_of_tvs,
        tv_setup=preferences.tv_setup_description or "No description provided",
        favorites=", ".join(preferences.favorite_nba_teams) or "None specified",
        week_range=format_week_range(week_start, week_end),
        listings="\n".join(lines) or "  (no games)",
    )


def parse_oracle_response(content: str | None) -> OracleResponse:
    """Schema-check the oracle's raw text. Anything unusable is a hard error."""
    if not content:
        raise OracleResponseError("No response from oracle")

    try:
        data = json.loads(content)
    except json.JSONDecodeError as e:
        logger.error(f"Oracle returned invalid JSON: {content[:500]}")
        raise OracleResponseError(f"Invalid JSON response from oracle: {e}") from e

    if not isinstance(data, dict):
        raise OracleResponseError("Oracle response is not a JSON object")

    try:
        return OracleResponse.model_validate(data)
    except ValidationError as e:
        raise OracleResponseError(f"Oracle response failed validation: {e}") from e


class OracleClient:
    def __init__(self, client: AsyncOpenAI, model: str | None = None):
        self.client = client
        self.model = model or settings.OPENAI_MODEL

    @classmethod
    def from_settings(cls):
        """None when no API key is configured (callers fall back)."""
        if not settings.OPENAI_API_KEY:
            return None
        return cls(AsyncOpenAI(api_key=settings.OPENAI_API_KEY, timeout=60))

    async def close(self):
        await self.client.close()

    async def propose(
        self,
        games: list[ScoredGame],
        preferences: UserPreferences,
        week_start: str,
        week_end: str,
    ) -> OracleResponse:
        logger.info(f"ORACLE CALLED: propose ({len(games)} games, model={self.model})")
        prompt = build_prompt(games, preferences, week_start, week_end)

        try:
            completion = await self.client.chat.completions.create(
                model=self.model,
                messages=[
                    {"role": "system", "content": SYSTEM_PROMPT},
                    {"role": "user", "content": prompt},
                ],
                response_format={"type": "json_object"},
                temperature=settings.OPENAI_TEMPERATURE,
                max_tokens=settings.OPENAI_MAX_TOKENS,
            )
        except Exception as e:
            raise UpstreamError(f"Oracle request failed: {e}") from e

        content = completion.choices[0].message.content if completion.choices else None
        logger.debug(f"Raw oracle response: {content}")
        return parse_oracle_response(content)
