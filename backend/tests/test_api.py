"""Route tests with the external clients swapped out via dependency overrides."""

from unittest.mock import AsyncMock

import pytest
from fastapi.testclient import TestClient

from app.api.deps import (
    get_calendar_service,
    get_email_client,
    get_preferences_store,
    get_schedule_client,
)
from app.core.exceptions import EmailDeliveryError, OracleResponseError
from app.db.store_preferences import MemoryPreferencesStore
from app.main import app
from app.schemas.calendar import OracleResponse
from app.services.calendar import CalendarService
from app.services.oracle_client import OracleClient


def feed_game(game_id, away, home, time="7:00 pm ET", date="2025-01-15T00:00:00Z"):
    def team(code, wins, losses):
        return {
            "teamId": hash(code) % 1000,
            "teamName": code.title(),
            "teamCity": "City",
            "teamTricode": code,
            "teamSlug": code.lower(),
            "wins": wins,
            "losses": losses,
            "score": 0,
            "seed": None,
        }

    return {
        "gameId": game_id,
        "gameCode": f"20250115/{away}{home}",
        "gameStatus": 1,
        "gameStatusText": time,
        "gameDateEst": date,
        "gameLabel": "",
        "arenaName": "Arena",
        "isNeutral": False,
        "pointsLeaders": [],
        "homeTeam": team(home, 30, 10),
        "awayTeam": team(away, 20, 20),
    }


FEED = {
    "meta": {"version": 1},
    "leagueSchedule": {
        "seasonYear": "2024-25",
        "gameDates": [
            {"gameDate": "01/14/2025 00:00:00", "games": [feed_game("a", "MIA", "ORL")]},
            {
                "gameDate": "01/15/2025 00:00:00",
                "games": [feed_game("b", "LAL", "DEN"), feed_game("c", "BOS", "NYK")],
            },
            {"gameDate": "01/22/2025 00:00:00", "games": [feed_game("d", "UTA", "SAS")]},
        ],
    },
}


@pytest.fixture
def schedule_client():
    client = AsyncMock()
    client.fetch_schedule = AsyncMock(return_value=FEED)
    return client


@pytest.fixture
def email_client():
    client = AsyncMock()
    client.send = AsyncMock(return_value="msg_123")
    return client


@pytest.fixture
def store():
    return MemoryPreferencesStore()


@pytest.fixture
def client(schedule_client, email_client, store):
    app.dependency_overrides[get_schedule_client] = lambda: schedule_client
    app.dependency_overrides[get_email_client] = lambda: email_client
    app.dependency_overrides[get_preferences_store] = lambda: store
    app.dependency_overrides[get_calendar_service] = lambda: CalendarService()
    yield TestClient(app)
    app.dependency_overrides.clear()


def week_payload():
    return {
        "weekStart": "2025-01-13",
        "weekEnd": "2025-01-19",
        "games": [feed_game("b", "LAL", "DEN"), feed_game("c", "BOS", "NYK")],
    }


class TestSchedule:
    def test_health(self, client):
        assert client.get("/health").json() == {"status": "ok"}

    def test_feed_passthrough(self, client):
        res = client.get("/api/schedule")
        assert res.status_code == 200
        assert res.json() == FEED

    def test_feed_failure(self, client, schedule_client):
        schedule_client.fetch_schedule.side_effect = RuntimeError("503 from cdn")
        res = client.get("/api/schedule")
        assert res.status_code == 500
        assert res.json() == {"error": "Failed to fetch NBA schedule"}

    def test_week_filters_dates(self, client):
        res = client.get("/api/schedule/week", params={"start": "2025-01-13", "end": "2025-01-19"})
        assert res.status_code == 200
        body = res.json()
        assert [g["gameId"] for g in body["games"]] == ["a", "b", "c"]
        assert body["weekStart"] == "2025-01-13"

    def test_week_bad_range(self, client):
        res = client.get("/api/schedule/week", params={"start": "2025-01-19", "end": "2025-01-13"})
        assert res.status_code == 400

    def test_teams(self, client):
        teams = client.get("/api/teams").json()
        assert len(teams) == 30
        assert {"tricode": "LAL", "name": "Los Angeles Lakers"} in teams


class TestGenerateCalendar:
    def test_fallback_calendar(self, client):
        res = client.post(
            "/api/generate-calendar",
            json={
                "weekData": week_payload(),
                "userPreferences": {"numberOfTvs": 3, "favoriteNbaTeams": ["LAL"]},
            },
        )
        assert res.status_code == 200
        body = res.json()
        assert set(body) == {"optimizedGames", "tvSchedule", "recommendations", "weekSummary"}
        assert set(body["tvSchedule"]) == {"1", "2", "3"}

        shares = {}
        for game in body["optimizedGames"]:
            shares[game["gameId"]] = shares.get(game["gameId"], 0) + 1
        assert shares == {"b": 2, "c": 1}

        first = body["optimizedGames"][0]
        assert {"priority", "tvAssignment", "color", "reasoning", "assignedDate"} <= set(first)

    def test_zero_tvs_rejected(self, client):
        res = client.post(
            "/api/generate-calendar",
            json={"weekData": week_payload(), "userPreferences": {"numberOfTvs": 0}},
        )
        assert res.status_code == 400

    def test_missing_fields(self, client):
        res = client.post("/api/generate-calendar", json={"weekData": week_payload()})
        assert res.status_code == 422

    def test_oracle_failure_is_500(self, client):
        oracle = AsyncMock()
        oracle.propose = AsyncMock(side_effect=OracleResponseError("Invalid JSON"))
        app.dependency_overrides[get_calendar_service] = lambda: CalendarService(oracle)

        res = client.post(
            "/api/generate-calendar",
            json={"weekData": week_payload(), "userPreferences": {"numberOfTvs": 2}},
        )
        assert res.status_code == 500
        assert res.json()["detail"]["error"] == "Failed to generate calendar"
        assert "Invalid JSON" in res.json()["detail"]["details"]

    def test_oracle_client_closed_after_request(self, client, monkeypatch):
        oracle = AsyncMock()
        oracle.propose = AsyncMock(
            return_value=OracleResponse(tv_assignments=[], recommendations=["Enjoy"])
        )
        oracle.close = AsyncMock()
        monkeypatch.setattr(OracleClient, "from_settings", lambda: oracle)
        del app.dependency_overrides[get_calendar_service]

        res = client.post(
            "/api/generate-calendar",
            json={"weekData": week_payload(), "userPreferences": {"numberOfTvs": 2}},
        )
        assert res.status_code == 200
        assert res.json()["recommendations"] == ["Enjoy"]
        oracle.propose.assert_awaited_once()
        oracle.close.assert_awaited_once()


class TestEmailSchedule:
    def test_sends_rendered_schedule(self, client, email_client):
        res = client.post(
            "/api/email-schedule",
            json={"weekData": week_payload(), "recipientEmail": "fan@example.com"},
        )
        assert res.status_code == 200
        assert res.json() == {
            "success": True,
            "messageId": "msg_123",
            "weekRange": "Jan 13-19, 2025",
        }

        kwargs = email_client.send.call_args.kwargs
        assert kwargs["to"] == "fan@example.com"
        assert kwargs["subject"] == "Sports Schedule - Jan 13-19, 2025"
        assert "LAL" in kwargs["html"]

    def test_delivery_failure(self, client, email_client):
        email_client.send.side_effect = EmailDeliveryError("422 invalid recipient")
        res = client.post(
            "/api/email-schedule",
            json={"weekData": week_payload(), "recipientEmail": "fan@example.com"},
        )
        assert res.status_code == 500
        assert res.json()["detail"]["error"] == "Failed to send email"


class TestPreferences:
    def test_defaults(self, client):
        assert client.get("/api/preferences").json() == {
            "sportsInterests": [],
            "numberOfTvs": 1,
            "tvSetupDescription": "",
            "favoriteNbaTeams": [],
            "zipCode": "",
        }

    def test_save_and_load(self, client):
        prefs = {
            "sportsInterests": ["NBA"],
            "numberOfTvs": 4,
            "tvSetupDescription": "Big TV in the den",
            "favoriteNbaTeams": ["lal", "GSW", "LAL"],
            "zipCode": "94110",
        }
        saved = client.put("/api/preferences", json=prefs)
        assert saved.status_code == 200
        assert saved.json()["favoriteNbaTeams"] == ["LAL", "GSW"]

        loaded = client.get("/api/preferences").json()
        assert loaded["numberOfTvs"] == 4
        assert loaded["favoriteNbaTeams"] == ["LAL", "GSW"]

    def test_unknown_team_rejected(self, client):
        res = client.put("/api/preferences", json={"favoriteNbaTeams": ["XYZ"]})
        assert res.status_code == 400

    def test_zero_tvs_rejected(self, client):
        res = client.put("/api/preferences", json={"numberOfTvs": 0})
        assert res.status_code == 400
