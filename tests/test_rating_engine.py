"""Tests for the watchability rating engine.

Covers the three sub-scorers, the aggregate score and the reference matches:
- A: 4-3 end-to-end thriller
- B: 0-0
- C: 1-0 with a 90th-minute winner
"""

import pytest

from footyrater.core import GoalEvent, InvalidMatchError, MatchInput, Side
from footyrater.rating import (
    compute_rating,
    goal_distribution_score,
    goal_timing_score,
    goal_volume_score,
    sort_goals,
)
from footyrater.rating.engine import (
    MAX_GOAL_DISTRIBUTION_SCORE,
    MAX_GOAL_TIMING_SCORE,
    MAX_GOAL_VOLUME_SCORE,
)


def home(minute: int) -> GoalEvent:
    return GoalEvent(team=Side.HOME, minute=minute)


def away(minute: int) -> GoalEvent:
    return GoalEvent(team=Side.AWAY, minute=minute)


def thriller() -> MatchInput:
    return MatchInput(
        home_team="Home FC",
        away_team="Away FC",
        home_score=4,
        away_score=3,
        goals=(home(12), away(28), home(35), away(50), home(67), away(74), home(89)),
    )


# ---------- Goal volume ----------


class TestGoalVolume:
    """Volume follows the fixed table and caps at 50."""

    @pytest.mark.parametrize(
        "total,expected",
        [(0, 0), (1, 5), (2, 15), (3, 25), (4, 35), (5, 45), (6, 50), (7, 50), (12, 50)],
    )
    def test_table(self, total, expected):
        assert goal_volume_score(total) == expected

    def test_monotonic(self):
        scores = [goal_volume_score(n) for n in range(15)]
        assert scores == sorted(scores)
        assert max(scores) == MAX_GOAL_VOLUME_SCORE

    def test_negative_total_rejected(self):
        with pytest.raises(InvalidMatchError):
            goal_volume_score(-1)


# ---------- Goal timing ----------


class TestGoalTiming:
    """Timing bands stack per goal and the sum is capped at 25."""

    def test_no_goals(self):
        assert goal_timing_score([]) == 0

    def test_midfield_minutes_score_nothing(self):
        assert goal_timing_score([home(16), away(45), home(74)]) == 0

    def test_early_goal_boundary(self):
        assert goal_timing_score([home(15)]) == 3
        assert goal_timing_score([home(0)]) == 3

    def test_late_bands_stack(self):
        assert goal_timing_score([home(75)]) == 3
        assert goal_timing_score([home(80)]) == 5
        assert goal_timing_score([home(90)]) == 10
        assert goal_timing_score([home(95)]) == 10

    def test_capped(self):
        goals = [home(90), away(91), home(92), away(93)]
        assert goal_timing_score(goals) == MAX_GOAL_TIMING_SCORE


# ---------- Goal distribution ----------


class TestGoalDistribution:
    """Both-teams-scored, comebacks, equalizers and late winners."""

    def test_both_teams_scored_uses_final_tallies(self):
        # No goal detail at all; the bonus still comes from the score line
        assert goal_distribution_score(1, 1, []) == 15

    def test_one_sided_match(self):
        assert goal_distribution_score(3, 0, [home(10), home(20), home(30)]) == 0

    def test_equalizer(self):
        # 0-1, 1-1
        assert goal_distribution_score(1, 1, [away(10), home(20)]) == 15 + 3

    def test_comeback_after_equalizer(self):
        # 0-1, 1-1 (equalizer), 2-1 (comeback)
        assert goal_distribution_score(2, 1, [away(10), home(20), home(30)]) == 15 + 3 + 4

    def test_late_winner(self):
        assert goal_distribution_score(1, 0, [home(85)]) == 2

    def test_late_goal_while_trailing_is_not_a_winner(self):
        # 2-0, then 2-1 at 83'
        assert goal_distribution_score(2, 1, [home(15), home(37), away(83)]) == 15

    def test_capped(self):
        assert goal_distribution_score(4, 3, thriller().goals) == MAX_GOAL_DISTRIBUTION_SCORE

    def test_unsorted_goals_are_walked_in_minute_order(self):
        ordered = [away(10), home(20), home(85)]
        shuffled = [home(85), away(10), home(20)]
        assert goal_distribution_score(2, 1, shuffled) == goal_distribution_score(2, 1, ordered)

    def test_sort_is_stable(self):
        first, second = home(30), away(30)
        assert sort_goals([first, second]) == [first, second]


# ---------- Full rating ----------


class TestComputeRating:
    """Aggregate score, category and match summary."""

    def test_thriller(self):
        result = compute_rating(thriller())
        assert result.breakdown.goal_volume == 50
        assert result.breakdown.goal_timing == 8
        assert result.breakdown.goal_distribution == 25
        assert result.total_score == 83
        assert result.category == "AMAZING"

    def test_goalless_draw(self):
        result = compute_rating(
            MatchInput(home_team="A", away_team="B", home_score=0, away_score=0)
        )
        assert result.total_score == 0
        assert result.category == "Very Poor"
        assert result.match_summary.score_line == "0-0"
        assert result.match_summary.total_goals == 0

    def test_stoppage_time_winner(self):
        result = compute_rating(
            MatchInput(
                home_team="A", away_team="B", home_score=1, away_score=0, goals=(home(90),)
            )
        )
        assert result.breakdown.goal_volume == 5
        assert result.breakdown.goal_timing == 10
        assert result.breakdown.goal_distribution == 2
        assert result.total_score == 17
        assert result.category == "Average"

    def test_total_equals_sum_of_breakdown(self):
        result = compute_rating(thriller())
        breakdown = result.breakdown
        assert result.total_score == (
            breakdown.goal_volume + breakdown.goal_timing + breakdown.goal_distribution
        )
        assert 0 <= result.total_score <= 100

    def test_accepts_camel_case_mapping(self):
        result = compute_rating(
            {
                "homeTeam": "A",
                "awayTeam": "B",
                "homeScore": 1,
                "awayScore": 0,
                "goals": [{"team": "HOME", "minute": 90}],
            }
        )
        assert result.total_score == 17
        assert result.match_summary.home_team == "A"

    def test_missing_minute_counts_as_zero(self):
        result = compute_rating(
            {
                "homeTeam": "A",
                "awayTeam": "B",
                "homeScore": 1,
                "awayScore": 0,
                "goals": [{"team": "home"}],
            }
        )
        # minute 0 is an early goal
        assert result.breakdown.goal_timing == 3

    def test_partial_goal_list(self):
        # 3-2 final but only one goal reported
        result = compute_rating(
            MatchInput(
                home_team="A", away_team="B", home_score=3, away_score=2, goals=(home(5),)
            )
        )
        assert result.breakdown.goal_volume == 45
        assert result.breakdown.goal_distribution == 15

    def test_deterministic(self):
        assert compute_rating(thriller()) == compute_rating(thriller())

    @pytest.mark.parametrize(
        "payload",
        [
            {"homeTeam": "A", "awayTeam": "B", "homeScore": -1, "awayScore": 0},
            {"homeTeam": "A", "awayTeam": "B", "homeScore": 1, "awayScore": "2"},
            {"homeTeam": "", "awayTeam": "B", "homeScore": 0, "awayScore": 0},
            {
                "homeTeam": "A",
                "awayTeam": "B",
                "homeScore": 1,
                "awayScore": 0,
                "goals": [{"team": "left", "minute": 10}],
            },
            {
                "homeTeam": "A",
                "awayTeam": "B",
                "homeScore": 1,
                "awayScore": 0,
                "goals": [{"team": "home", "minute": -5}],
            },
            {
                "homeTeam": "A",
                "awayTeam": "B",
                "homeScore": 1,
                "awayScore": 0,
                "goals": [{"team": "home", "minute": 45.5}],
            },
        ],
    )
    def test_invalid_input_rejected(self, payload):
        with pytest.raises(InvalidMatchError):
            compute_rating(payload)
