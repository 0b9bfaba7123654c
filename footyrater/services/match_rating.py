"""Fetch, rate and store matches.

Glue between a MatchSource, the rating engine and the store. Errors from the
source or the store propagate unchanged.
"""

import logging
from dataclasses import dataclass
from pathlib import Path

from footyrater.core import MatchRecord, MatchSource, RatingResult
from footyrater.database import get_db, save_match
from footyrater.rating import compute_rating
from footyrater.utilities.event_status import is_match_finished

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RatedMatch:
    """A match together with the rating computed for it."""

    match: MatchRecord
    rating: RatingResult
    match_id: int | None = None


def rate_record(record: MatchRecord) -> RatingResult:
    """Rate a single match record."""
    return compute_rating(record.to_match_input())


def fetch_and_rate_matches(
    source: MatchSource, db_path: Path | str | None = None, days: int = 7
) -> list[RatedMatch]:
    """Fetch recent finished matches, rate them and save them.

    Already-stored matches are not written again; they are still returned
    with their freshly computed rating.

    Args:
        source: Match source
        db_path: Database file (default path if None)
        days: How many days back to fetch

    Returns:
        Rated matches in source order
    """
    records = source.get_recent_matches(days)
    logger.info("[RATING] %d matches to process", len(records))

    rated: list[RatedMatch] = []
    with get_db(db_path) as conn:
        for record in records:
            if not is_match_finished(record.status):
                logger.debug(
                    "[RATING] Skipping %s vs %s - status %s",
                    record.home_team,
                    record.away_team,
                    record.status,
                )
                continue

            rating = rate_record(record)
            match_id = save_match(conn, record, rating)
            logger.info(
                "[RATING] %s vs %s: %d/100 (%s)",
                record.home_team,
                record.away_team,
                rating.total_score,
                rating.category,
            )
            rated.append(RatedMatch(match=record, rating=rating, match_id=match_id))

    logger.info("[RATING] Processed %d matches", len(rated))
    return rated


def rate_match_details(source: MatchSource, match_id: int | str) -> RatedMatch | None:
    """Fetch one match from the source and rate it without storing.

    Returns:
        RatedMatch, or None if the match has not finished
    """
    record = source.get_match_details(match_id)
    if record is None:
        return None
    return RatedMatch(match=record, rating=rate_record(record))
