"""Tests for game priority scoring."""

import itertools

import pytest

from app.schemas.preferences import UserPreferences
from app.services.scoring import calculate_priority, priority_color, score_games


class TestCalculatePriority:
    def test_neutral_game_is_base_priority(self, make_game):
        assert calculate_priority(make_game("1"), UserPreferences()) == 5

    def test_favorite_team_at_500_record(self, make_game):
        prefs = UserPreferences(favorite_nba_teams=["LAL"])
        game = make_game("1", away="LAL", home="DEN")
        assert calculate_priority(game, prefs) == 8

    def test_favorite_matches_either_side(self, make_game):
        prefs = UserPreferences(favorite_nba_teams=["DEN"])
        assert calculate_priority(make_game("1", away="LAL", home="DEN"), prefs) == 8

    def test_west_coast_zip_with_regional_team(self, make_game):
        prefs = UserPreferences(zip_code="94110")
        assert calculate_priority(make_game("1", away="GSW", home="PHX"), prefs) == 7

    def test_west_coast_zip_without_regional_team(self, make_game):
        prefs = UserPreferences(zip_code="94110")
        assert calculate_priority(make_game("1", away="BOS", home="NYK"), prefs) == 5

    def test_regional_team_outside_west_coast(self, make_game):
        prefs = UserPreferences(zip_code="10001")
        assert calculate_priority(make_game("1", away="SAC", home="NYK"), prefs) == 5

    @pytest.mark.parametrize("label", ["NBA Finals", "East First Round PLAYOFFS", "playoff"])
    def test_playoff_labels(self, make_game, label):
        assert calculate_priority(make_game("1", label=label), UserPreferences()) == 7

    def test_strong_records_bonus(self, make_game):
        game = make_game("1", away_record=(60, 10), home_record=(55, 15))
        assert calculate_priority(game, UserPreferences()) == 6

    def test_weak_records_penalty(self, make_game):
        game = make_game("1", away_record=(10, 60), home_record=(12, 58))
        assert calculate_priority(game, UserPreferences()) == 4

    def test_team_without_games_is_neutral(self, make_game):
        game = make_game("1", away_record=(0, 0), home_record=(60, 10))
        assert calculate_priority(game, UserPreferences()) == 5

    def test_opening_night_both_teams_without_games(self, make_game):
        game = make_game("1", away_record=(0, 0), home_record=(0, 0))
        assert calculate_priority(game, UserPreferences()) == 5

    def test_clamped_to_ten(self, make_game):
        prefs = UserPreferences(favorite_nba_teams=["LAL"], zip_code="90012")
        game = make_game(
            "1",
            away="LAL",
            home="BOS",
            label="NBA Finals",
            away_record=(65, 5),
            home_record=(64, 6),
        )
        assert calculate_priority(game, prefs) == 10

    def test_always_within_bounds(self, make_game):
        records = [(0, 0), (0, 82), (41, 41), (82, 0)]
        labels = ["", "Playoffs"]
        zips = ["", "90210"]
        for away_rec, home_rec, label, zip_code in itertools.product(
            records, records, labels, zips
        ):
            prefs = UserPreferences(favorite_nba_teams=["LAL"], zip_code=zip_code)
            game = make_game(
                "1", away="LAL", away_record=away_rec, home_record=home_rec, label=label
            )
            assert 1 <= calculate_priority(game, prefs) <= 10


class TestScoreGames:
    def test_sorted_by_priority_and_stable(self, make_game):
        prefs = UserPreferences(favorite_nba_teams=["LAL"])
        games = [
            make_game("a"),
            make_game("b", away="LAL"),
            make_game("c"),
        ]
        scored = score_games(games, prefs)
        assert [sg.game_id for sg in scored] == ["b", "a", "c"]
        assert scored[0].is_favorite is True
        assert scored[1].is_favorite is False


class TestPriorityColor:
    def test_lowest_priority_is_blue(self):
        assert priority_color(1) == "rgb(0, 165, 255)"

    def test_highest_priority_is_yellow(self):
        assert priority_color(10) == "rgb(255, 255, 0)"
