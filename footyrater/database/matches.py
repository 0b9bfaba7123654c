"""Database operations for rated matches.

Matches are keyed by the external (provider) match id. Saving is idempotent:
a known external id is never inserted twice.

Stored breakdowns are returned exactly as saved. The one exception is the
recompute-if-missing fallback for older rows whose breakdown was never
written (all zeros while the match has goals); those are re-rated from the
stored goals when read.
"""

import json
import logging
import sqlite3
from sqlite3 import Connection

from footyrater.core import (
    GoalEvent,
    InvalidMatchError,
    MatchInput,
    MatchRecord,
    RatingBreakdown,
    RatingResult,
    StoredMatch,
    StoredRating,
)
from footyrater.rating import compute_rating
from footyrater.utilities.competitions import (
    CONTAINMENT_ALIASES,
    competition_matches,
    normalize_competition,
)

logger = logging.getLogger(__name__)

UNKNOWN_CATEGORY = "Unknown"

_SELECT_MATCHES = """
    SELECT m.*,
           r.goal_volume_score,
           r.goal_timing_score,
           r.goal_distribution_score
    FROM matches m
    LEFT JOIN ratings r ON r.match_id = m.id
"""


def _parse_goals(goals_json: str | None) -> tuple[GoalEvent, ...]:
    """Parse stored goals JSON, skipping entries that no longer validate."""
    if not goals_json:
        return ()
    try:
        raw = json.loads(goals_json)
    except (json.JSONDecodeError, TypeError):
        logger.warning("[STORE] Unreadable goals JSON: %.60s", goals_json)
        return ()

    goals = []
    for item in raw if isinstance(raw, list) else []:
        try:
            goals.append(GoalEvent.from_dict(item))
        except InvalidMatchError as e:
            logger.warning("[STORE] Skipping stored goal %r: %s", item, e)
    return tuple(goals)


def _recompute_rating(row, goals: tuple[GoalEvent, ...]) -> StoredRating | None:
    """Re-rate a stored match from its goals. None if the stored data is invalid."""
    try:
        result = compute_rating(
            MatchInput(
                home_team=row["home_team"],
                away_team=row["away_team"],
                home_score=row["home_score"],
                away_score=row["away_score"],
                goals=goals,
            )
        )
    except InvalidMatchError as e:
        logger.warning("[STORE] Cannot recompute rating for match %s: %s", row["id"], e)
        return None

    logger.debug("[STORE] Recomputed missing breakdown for match %s", row["id"])
    return StoredRating(
        total_score=result.total_score,
        breakdown=result.breakdown,
        category=result.category,
    )


def _row_to_rating(row, goals: tuple[GoalEvent, ...]) -> StoredRating | None:
    """Build the rating part of a row, applying the recompute-if-missing fallback."""
    if row["watchability_score"] is None and row["rating_category"] is None:
        return None

    breakdown = RatingBreakdown(
        goal_volume=row["goal_volume_score"] or 0,
        goal_timing=row["goal_timing_score"] or 0,
        goal_distribution=row["goal_distribution_score"] or 0,
    )

    if breakdown.is_empty() and (goals or row["home_score"] or row["away_score"]):
        recomputed = _recompute_rating(row, goals)
        if recomputed is not None:
            return recomputed

    return StoredRating(
        total_score=row["watchability_score"] or 0,
        breakdown=breakdown,
        category=row["rating_category"] or UNKNOWN_CATEGORY,
    )


def _row_to_match(row) -> StoredMatch:
    """Convert a joined database row to StoredMatch."""
    goals = _parse_goals(row["goals"])
    return StoredMatch(
        id=row["id"],
        external_id=row["external_id"],
        home_team=row["home_team"],
        away_team=row["away_team"],
        home_score=row["home_score"],
        away_score=row["away_score"],
        date=row["date"],
        status=row["status"],
        competition=row["competition"],
        goals=goals,
        rating=_row_to_rating(row, goals),
    )


# =============================================================================
# WRITE OPERATIONS
# =============================================================================


def save_match(conn: Connection, match: MatchRecord, rating: RatingResult) -> int:
    """Save a match and its rating.

    Idempotent on external_id: if the match is already stored nothing is
    written and the existing row id is returned.

    Args:
        conn: Database connection
        match: Match as fetched from the source
        rating: Result of compute_rating for this match

    Returns:
        Row id of the stored match
    """
    existing_id = get_match_id(conn, match.external_id)
    if existing_id is not None:
        logger.debug(
            "[STORE] Match %s already stored as id=%d, skipping", match.external_id, existing_id
        )
        return existing_id

    goals_json = json.dumps([goal.to_dict() for goal in match.goals])

    try:
        cursor = conn.execute(
            """
            INSERT INTO matches (
                external_id, home_team, away_team, home_score, away_score,
                date, status, competition, goals, watchability_score, rating_category
            ) VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?)
            """,
            (
                match.external_id,
                match.home_team,
                match.away_team,
                match.home_score,
                match.away_score,
                match.date,
                match.status,
                match.competition,
                goals_json,
                rating.total_score,
                rating.category,
            ),
        )
    except sqlite3.IntegrityError:
        # Lost a race with another writer for the same external id
        existing_id = get_match_id(conn, match.external_id)
        if existing_id is None:
            raise
        return existing_id

    match_id = cursor.lastrowid
    conn.execute(
        """
        INSERT INTO ratings (
            match_id, goal_volume_score, goal_timing_score,
            goal_distribution_score, total_score, rating_category
        ) VALUES (?, ?, ?, ?, ?, ?)
        """,
        (
            match_id,
            rating.breakdown.goal_volume,
            rating.breakdown.goal_timing,
            rating.breakdown.goal_distribution,
            rating.total_score,
            rating.category,
        ),
    )

    logger.info(
        "[STORE] Saved %s vs %s (%s) as id=%d, score=%d",
        match.home_team,
        match.away_team,
        match.external_id,
        match_id,
        rating.total_score,
    )
    return match_id


# =============================================================================
# READ OPERATIONS
# =============================================================================


def get_match_id(conn: Connection, external_id: str | int) -> int | None:
    """Get the row id for an external match id."""
    cursor = conn.execute(
        "SELECT id FROM matches WHERE external_id = ?", (str(external_id),)
    )
    row = cursor.fetchone()
    return row["id"] if row else None


def get_match(conn: Connection, match_id: int) -> StoredMatch | None:
    """Get a stored match by row id."""
    cursor = conn.execute(f"{_SELECT_MATCHES} WHERE m.id = ?", (match_id,))
    row = cursor.fetchone()
    return _row_to_match(row) if row else None


def count_matches(conn: Connection) -> int:
    cursor = conn.execute("SELECT COUNT(*) AS n FROM matches")
    return cursor.fetchone()["n"]


def get_all_matches(conn: Connection) -> list[StoredMatch]:
    """Get all matches with ratings, newest first."""
    cursor = conn.execute(f"{_SELECT_MATCHES} ORDER BY m.date DESC, m.id DESC")
    return [_row_to_match(row) for row in cursor.fetchall()]


def get_matches_by_competition(conn: Connection, competition: str) -> list[StoredMatch]:
    """Get matches for a competition, newest first.

    "Premier League" and "Champions League" match any competition name that
    contains them (e.g. "UEFA Champions League"). Other values must match the
    stored name exactly.
    """
    if normalize_competition(competition) in CONTAINMENT_ALIASES:
        cursor = conn.execute(f"{_SELECT_MATCHES} ORDER BY m.date DESC, m.id DESC")
        rows = [
            row
            for row in cursor.fetchall()
            if competition_matches(competition, row["competition"])
        ]
    else:
        cursor = conn.execute(
            f"{_SELECT_MATCHES} WHERE m.competition = ? ORDER BY m.date DESC, m.id DESC",
            (competition,),
        )
        rows = cursor.fetchall()

    logger.debug("[STORE] %d matches for competition %r", len(rows), competition)
    return [_row_to_match(row) for row in rows]


def get_top_rated_matches(conn: Connection, limit: int = 10) -> list[StoredMatch]:
    """Get the highest-rated matches, best first.

    Args:
        conn: Database connection
        limit: Maximum number of matches to return

    Returns:
        Up to `limit` matches ordered by the total score they are returned
        with (after any recompute), newest first on ties
    """
    cursor = conn.execute(f"{_SELECT_MATCHES} ORDER BY m.date DESC, m.id DESC")
    matches = [_row_to_match(row) for row in cursor.fetchall()]
    # Rank on the returned rating; legacy rows are recomputed during conversion
    matches.sort(key=lambda m: m.rating.total_score if m.rating else 0, reverse=True)
    return matches[: max(0, limit)]
