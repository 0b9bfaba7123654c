"""Tests for the match store (SQLite)."""

import json

import pytest

from footyrater.core import GoalEvent, MatchRecord, Side
from footyrater.database import (
    count_matches,
    get_all_matches,
    get_db,
    get_match,
    get_match_id,
    get_matches_by_competition,
    get_top_rated_matches,
    init_db,
    save_match,
)
from footyrater.database.seed import load_sample_matches, seed_if_needed
from footyrater.rating import compute_rating


@pytest.fixture
def db_path(tmp_path):
    path = tmp_path / "footyrater.db"
    init_db(path)
    return path


def make_record(
    external_id="1",
    home_score=2,
    away_score=1,
    date="2025-09-13T14:00:00Z",
    competition="Premier League",
    goals=None,
) -> MatchRecord:
    if goals is None:
        goals = [GoalEvent(Side.HOME, 10)] * home_score + [GoalEvent(Side.AWAY, 85)] * away_score
    return MatchRecord(
        external_id=external_id,
        home_team="Home FC",
        away_team="Away FC",
        home_score=home_score,
        away_score=away_score,
        date=date,
        status="FINISHED",
        competition=competition,
        goals=goals,
    )


def store(conn, record: MatchRecord) -> int:
    return save_match(conn, record, compute_rating(record.to_match_input()))


class TestInitDb:
    def test_idempotent(self, db_path):
        init_db(db_path)
        init_db(db_path)
        with get_db(db_path) as conn:
            assert count_matches(conn) == 0

    def test_creates_parent_directory(self, tmp_path):
        path = tmp_path / "nested" / "dir" / "store.db"
        init_db(path)
        assert path.exists()

    def test_migrates_ratings_without_category(self, tmp_path):
        path = tmp_path / "old.db"
        with get_db(path) as conn:
            conn.execute(
                """
                CREATE TABLE ratings (
                    id INTEGER PRIMARY KEY AUTOINCREMENT,
                    match_id INTEGER NOT NULL UNIQUE,
                    goal_volume_score INTEGER NOT NULL DEFAULT 0,
                    goal_timing_score INTEGER NOT NULL DEFAULT 0,
                    goal_distribution_score INTEGER NOT NULL DEFAULT 0,
                    total_score INTEGER NOT NULL DEFAULT 0
                )
                """
            )

        init_db(path)
        with get_db(path) as conn:
            columns = {row["name"] for row in conn.execute("PRAGMA table_info(ratings)")}
        assert "rating_category" in columns


class TestSaveMatch:
    """Saving is idempotent on the external id."""

    def test_same_external_id_saved_once(self, db_path):
        with get_db(db_path) as conn:
            first = store(conn, make_record("42"))
            second = store(conn, make_record("42", home_score=5))
            assert first == second
            assert count_matches(conn) == 1
            # The original row is kept untouched
            assert get_match(conn, first).home_score == 2

    def test_external_id_int_and_str_are_the_same_match(self, db_path):
        with get_db(db_path) as conn:
            first = store(conn, make_record(537817))
            assert get_match_id(conn, "537817") == first
            assert get_match_id(conn, 537817) == first

    def test_round_trip_keeps_breakdown_and_total(self, db_path):
        record = make_record("7")
        rating = compute_rating(record.to_match_input())
        with get_db(db_path) as conn:
            match_id = save_match(conn, record, rating)
            stored = get_match(conn, match_id)

        assert stored.rating.breakdown == rating.breakdown
        assert stored.rating.total_score == rating.total_score
        assert stored.rating.category == rating.category
        assert stored.goals == record.goals
        assert stored.external_id == "7"


class TestReadMatches:
    def test_all_matches_newest_first(self, db_path):
        with get_db(db_path) as conn:
            store(conn, make_record("1", date="2025-09-01T12:00:00Z"))
            store(conn, make_record("2", date="2025-09-03T12:00:00Z"))
            store(conn, make_record("3", date="2025-09-02T12:00:00Z"))
            matches = get_all_matches(conn)

        assert [m.external_id for m in matches] == ["2", "3", "1"]

    def test_top_rated(self, db_path):
        with get_db(db_path) as conn:
            store(conn, make_record("low", home_score=1, away_score=0))
            store(conn, make_record("high", home_score=4, away_score=3))
            store(conn, make_record("mid", home_score=2, away_score=1))
            top = get_top_rated_matches(conn, limit=2)

        assert [m.external_id for m in top] == ["high", "mid"]
        assert top[0].rating.total_score >= top[1].rating.total_score

    def test_competition_alias_uses_containment(self, db_path):
        with get_db(db_path) as conn:
            store(conn, make_record("1", competition="UEFA Champions League"))
            store(conn, make_record("2", competition="Premier League"))
            found = get_matches_by_competition(conn, "Champions League")

        assert [m.external_id for m in found] == ["1"]

    def test_other_competitions_need_exact_name(self, db_path):
        with get_db(db_path) as conn:
            store(conn, make_record("1", competition="Serie A"))
            store(conn, make_record("2", competition="Serie A Women"))
            found = get_matches_by_competition(conn, "Serie A")

        assert [m.external_id for m in found] == ["1"]


class TestRecomputeIfMissing:
    """Older rows without a stored breakdown are re-rated on read."""

    def _insert_legacy(self, conn, goals, score=None, category=None, home_score=1, away_score=0):
        cursor = conn.execute(
            """
            INSERT INTO matches (
                external_id, home_team, away_team, home_score, away_score,
                date, status, competition, goals, watchability_score, rating_category
            ) VALUES ('legacy', 'Home FC', 'Away FC', ?, ?,
                      '2025-01-01T00:00:00Z', 'FINISHED', 'Premier League', ?, ?, ?)
            """,
            (home_score, away_score, json.dumps(goals), score, category),
        )
        return cursor.lastrowid

    def test_missing_breakdown_is_recomputed(self, db_path):
        with get_db(db_path) as conn:
            match_id = self._insert_legacy(
                conn, [{"team": "home", "minute": 90}], score=5, category="Very Poor"
            )
            stored = get_match(conn, match_id)

        assert stored.rating.breakdown.goal_volume == 5
        assert stored.rating.breakdown.goal_timing == 10
        assert stored.rating.breakdown.goal_distribution == 2
        assert stored.rating.total_score == 17
        assert stored.rating.category == "Average"

    def test_unrated_match_has_no_rating(self, db_path):
        with get_db(db_path) as conn:
            match_id = self._insert_legacy(conn, [{"team": "home", "minute": 90}])
            stored = get_match(conn, match_id)

        assert stored.rating is None

    def test_top_rated_ranks_by_recomputed_total(self, db_path):
        thriller_goals = [
            {"team": team, "minute": minute}
            for team, minute in [
                ("home", 12), ("away", 28), ("home", 35), ("away", 50),
                ("home", 67), ("away", 74), ("home", 89),
            ]
        ]
        with get_db(db_path) as conn:
            store(conn, make_record("new", home_score=1, away_score=1))
            self._insert_legacy(
                conn, thriller_goals, score=1, category="Very Poor", home_score=4, away_score=3
            )
            top = get_top_rated_matches(conn, limit=1)
            ranked = get_top_rated_matches(conn, limit=10)

        assert [(m.external_id, m.rating.total_score) for m in top] == [("legacy", 83)]
        totals = [m.rating.total_score for m in ranked]
        assert totals == sorted(totals, reverse=True)


class TestSeed:
    def test_sample_file_loads(self):
        records = load_sample_matches()
        assert [r.external_id for r in records] == ["537817", "537815", "551941"]

    def test_seed_only_into_empty_store(self, db_path):
        with get_db(db_path) as conn:
            result = seed_if_needed(conn)
            assert result == {"seeded": True, "matches_added": 3}
            assert seed_if_needed(conn)["seeded"] is False
            assert count_matches(conn) == 3

    def test_init_db_can_seed(self, tmp_path):
        path = tmp_path / "seeded.db"
        init_db(path, seed_sample=True)
        with get_db(path) as conn:
            matches = get_all_matches(conn)

        assert len(matches) == 3
        assert all(m.rating is not None for m in matches)

    def test_missing_sample_file(self, tmp_path):
        assert load_sample_matches(tmp_path / "missing.json") == []
