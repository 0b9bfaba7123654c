"""Watchability rating engine.

Scores a finished match from its score line and goal timeline:

    goal volume        0-50   total goals, fixed table
    goal timing        0-25   early / late / stoppage-time goals
    goal distribution  0-25   both teams scoring, comebacks, equalizers, late winners

Every function here is pure. The same input always produces the same score.
"""

import logging
from collections.abc import Iterable, Mapping
from typing import Any

from footyrater.core import (
    GoalEvent,
    InvalidMatchError,
    MatchInput,
    MatchSummary,
    RatingBreakdown,
    RatingResult,
    Side,
)
from footyrater.rating.categories import get_rating_category

logger = logging.getLogger(__name__)

MAX_GOAL_VOLUME_SCORE = 50
MAX_GOAL_TIMING_SCORE = 25
MAX_GOAL_DISTRIBUTION_SCORE = 25

# Index = total goals; six or more goals hit MAX_GOAL_VOLUME_SCORE
GOAL_VOLUME_TABLE: tuple[int, ...] = (0, 5, 15, 25, 35, 45)

# Timing bands (minute thresholds). A goal collects every band it falls in.
EARLY_GOAL_MINUTE = 15
EARLY_GOAL_POINTS = 3
LATE_GOAL_MINUTE = 75
LATE_GOAL_POINTS = 3
FINAL_TEN_MINUTE = 80
FINAL_TEN_POINTS = 2
INJURY_TIME_MINUTE = 90
INJURY_TIME_POINTS = 5

# Distribution bonuses
BOTH_TEAMS_SCORED_POINTS = 15
COMEBACK_POINTS = 4
EQUALIZER_POINTS = 3
LATE_WINNER_MINUTE = 80
LATE_WINNER_POINTS = 2


def _clamp(value: float, upper: int) -> int:
    return int(round(max(0, min(value, upper))))


def sort_goals(goals: Iterable[GoalEvent]) -> list[GoalEvent]:
    """Order goals by minute. Ties keep their original order."""
    return sorted(goals, key=lambda goal: goal.minute)


def goal_volume_score(total_goals: int) -> int:
    """Score the total number of goals scored by both teams."""
    if total_goals < 0:
        raise InvalidMatchError(f"total goals must be >= 0, got {total_goals}")
    if total_goals < len(GOAL_VOLUME_TABLE):
        return GOAL_VOLUME_TABLE[total_goals]
    return MAX_GOAL_VOLUME_SCORE


def goal_timing_score(goals: Iterable[GoalEvent]) -> int:
    """Score when goals were scored.

    Bands stack: a 90th-minute goal earns the late, final-ten and injury-time
    points (3 + 2 + 5).
    """
    score = 0
    for goal in goals:
        minute = goal.minute
        if minute <= EARLY_GOAL_MINUTE:
            score += EARLY_GOAL_POINTS
        if minute >= LATE_GOAL_MINUTE:
            score += LATE_GOAL_POINTS
        if minute >= FINAL_TEN_MINUTE:
            score += FINAL_TEN_POINTS
        if minute >= INJURY_TIME_MINUTE:
            score += INJURY_TIME_POINTS
    return _clamp(score, MAX_GOAL_TIMING_SCORE)


def goal_distribution_score(
    home_score: int, away_score: int, goals: Iterable[GoalEvent]
) -> int:
    """Score the competitive dynamics of the match.

    The both-teams-scored bonus uses the final tallies. Comebacks, equalizers
    and late winners are detected by walking the goals in minute order with
    running tallies, judged after each goal is counted.
    """
    score = 0
    if home_score > 0 and away_score > 0:
        score += BOTH_TEAMS_SCORED_POINTS

    tally = {Side.HOME: 0, Side.AWAY: 0}
    for goal in sort_goals(goals):
        scoring = goal.team
        other = Side.AWAY if scoring is Side.HOME else Side.HOME
        tally[scoring] += 1
        ours, theirs = tally[scoring], tally[other]

        if ours > theirs and theirs > 0:
            score += COMEBACK_POINTS
        elif ours == theirs and theirs > 0:
            score += EQUALIZER_POINTS

        if goal.minute >= LATE_WINNER_MINUTE and ours > theirs:
            score += LATE_WINNER_POINTS

    return _clamp(score, MAX_GOAL_DISTRIBUTION_SCORE)


def compute_breakdown(match: MatchInput) -> RatingBreakdown:
    """Compute the three sub-scores for a validated match."""
    return RatingBreakdown(
        goal_volume=goal_volume_score(match.total_goals),
        goal_timing=goal_timing_score(match.goals),
        goal_distribution=goal_distribution_score(
            match.home_score, match.away_score, match.goals
        ),
    )


def compute_rating(match: MatchInput | Mapping[str, Any]) -> RatingResult:
    """Rate a finished match.

    Args:
        match: MatchInput, or a mapping with homeTeam/awayTeam/homeScore/
            awayScore/goals (snake_case keys also accepted)

    Returns:
        A fresh RatingResult

    Raises:
        InvalidMatchError: If the input is malformed
    """
    if not isinstance(match, MatchInput):
        match = MatchInput.from_dict(match)

    breakdown = compute_breakdown(match)
    total_score = breakdown.total
    category = get_rating_category(total_score)

    logger.debug(
        "[RATING] %s %d-%d %s -> %d (%s)",
        match.home_team,
        match.home_score,
        match.away_score,
        match.away_team,
        total_score,
        category,
    )

    return RatingResult(
        total_score=total_score,
        breakdown=breakdown,
        category=category,
        match_summary=MatchSummary(
            home_team=match.home_team,
            away_team=match.away_team,
            score_line=f"{match.home_score}-{match.away_score}",
            total_goals=match.total_goals,
        ),
    )
