import json
from datetime import date, datetime, timedelta

import httpx


def prompt(text: str, default: str | None = None) -> str:
    hint = f" [{default}]" if default is not None else ""
    value = input(f"{text}{hint}: ").strip()
    return value or (default or "")


def prompt_yes_no(text: str, default: bool = False) -> bool:
    suffix = "Y/n" if default else "y/N"
    value = input(f"{text} ({suffix}): ").strip().lower()
    if not value:
        return default
    return value in {"y", "yes"}


def call_api(
    client: httpx.Client,
    method: str,
    path: str,
    params: dict | None = None,
    body: dict | None = None,
):
    print(f"-> {method} {path} {params or ''}".strip())
    response = client.request(method, path, params=params, json=body, timeout=120)
    response.raise_for_status()
    return response.json()


def print_tv_schedule(calendar: dict):
    print(f"\n{calendar['weekSummary']}\n")
    for tv, games in calendar["tvSchedule"].items():
        print(f"TV {tv}:")
        for game in games:
            matchup = f"{game['awayTeam']['teamTricode']} @ {game['homeTeam']['teamTricode']}"
            print(
                f"  {game['assignedDate']} {game['timeWindow']:<26} {matchup:<10} "
                f"(priority {game['priority']})"
            )
    print("\nRecommendations:")
    for rec in calendar["recommendations"]:
        print(f"  - {rec}")


def main():
    print("NBA TV planner")
    base_url = prompt("API base URL", "http://127.0.0.1:8000")
    today = date.today()
    monday = today - timedelta(days=today.weekday())
    week_start = prompt("Week start (YYYY-MM-DD)", monday.isoformat())

    try:
        start = datetime.strptime(week_start, "%Y-%m-%d").date()
    except ValueError as exc:
        raise SystemExit("Invalid date format, expected YYYY-MM-DD.") from exc
    week_end = (start + timedelta(days=6)).isoformat()

    with httpx.Client(base_url=base_url) as client:
        preferences = call_api(client, "GET", "/api/preferences")
        print(f"   using preferences: {json.dumps(preferences)}")

        week = call_api(
            client, "GET", "/api/schedule/week", {"start": week_start, "end": week_end}
        )
        print(f"   {len(week['games'])} games between {week_start} and {week_end}")

        calendar = call_api(
            client,
            "POST",
            "/api/generate-calendar",
            body={"weekData": week, "userPreferences": preferences},
        )
        print_tv_schedule(calendar)

        if prompt_yes_no("Email this week's schedule", False):
            recipient = prompt("Recipient email")
            result = call_api(
                client,
                "POST",
                "/api/email-schedule",
                body={"weekData": week, "recipientEmail": recipient},
            )
            print(f"   sent: {result['messageId']}")

    print("Done.")


if __name__ == "__main__":
    main()
