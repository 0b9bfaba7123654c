"""Tests for core types, status and competition helpers."""

import pytest

from footyrater.config import Settings
from footyrater.core import GoalEvent, InvalidMatchError, MatchInput, MatchRecord, Side
from footyrater.utilities.competitions import competition_matches, normalize_competition
from footyrater.utilities.event_status import is_match_finished


class TestGoalEvent:
    def test_team_tag_case_insensitive(self):
        assert GoalEvent.from_dict({"team": "AWAY", "minute": 3}).team is Side.AWAY

    def test_minute_defaults_to_zero(self):
        assert GoalEvent.from_dict({"team": "home"}).minute == 0

    def test_bool_minute_rejected(self):
        with pytest.raises(InvalidMatchError):
            GoalEvent(team="home", minute=True)

    def test_non_mapping_rejected(self):
        with pytest.raises(InvalidMatchError):
            GoalEvent.from_dict(["home", 10])


class TestMatchInput:
    def test_snake_case_keys(self):
        match = MatchInput.from_dict(
            {"home_team": "A", "away_team": "B", "home_score": 2, "away_score": 2}
        )
        assert match.total_goals == 4
        assert match.goals == ()

    def test_goal_dicts_coerced(self):
        match = MatchInput("A", "B", 1, 0, goals=[{"team": "home", "minute": 5}])
        assert match.goals == (GoalEvent(Side.HOME, 5),)

    def test_record_external_id_is_string(self):
        record = MatchRecord(537817, "A", "B", 0, 0, "2025-09-13", "FINISHED", "Premier League")
        assert record.external_id == "537817"
        assert record.to_match_input().home_team == "A"


class TestMatchStatus:
    @pytest.mark.parametrize(
        "status,expected",
        [
            ("FINISHED", True),
            ("finished", True),
            ("IN_PLAY", False),
            ("SCHEDULED", False),
            (None, False),
        ],
    )
    def test_is_match_finished(self, status, expected):
        assert is_match_finished(status) is expected


class TestCompetitions:
    def test_normalize(self):
        assert normalize_competition("  Ligue   1 Übereats ") == "ligue 1 ubereats"
        assert normalize_competition(None) == ""

    def test_aliases_use_containment(self):
        assert competition_matches("Champions League", "UEFA Champions League")
        assert competition_matches("premier league", "Premier League")
        assert not competition_matches("Champions League", "Europa League")

    def test_exact_match_otherwise(self):
        assert competition_matches("Serie A", "Serie A")
        assert not competition_matches("Serie A", "Serie A Women")
        assert not competition_matches("Serie A", None)


class TestSettings:
    def test_from_env(self, monkeypatch, tmp_path):
        monkeypatch.setenv("FOOTYRATER_DB_PATH", str(tmp_path / "x.db"))
        monkeypatch.setenv("FOOTYRATER_SEED_SAMPLE", "true")
        monkeypatch.setenv("FOOTYRATER_CORS_ORIGINS", "http://a.test, http://b.test")
        monkeypatch.setenv("FOOTBALL_DATA_MAX_CALLS", "5")
        monkeypatch.delenv("FOOTBALL_DATA_API_TOKEN", raising=False)

        settings = Settings.from_env()
        assert settings.db_path == tmp_path / "x.db"
        assert settings.seed_sample is True
        assert settings.cors_origins == ["http://a.test", "http://b.test"]
        assert settings.football_data.max_calls == 5
        assert settings.football_data.api_token is None
        assert settings.port == 3000
