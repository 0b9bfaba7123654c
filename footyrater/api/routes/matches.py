"""Matches API endpoints."""

import logging

from fastapi import APIRouter, Depends, HTTPException, Query, status

from footyrater.api.dependencies import get_db_path, get_provider
from footyrater.api.models import FetchRequest, FetchResponse, MatchResponse, RatedMatchResponse
from footyrater.core import MatchSource
from footyrater.database import (
    get_all_matches,
    get_db,
    get_matches_by_competition,
    get_top_rated_matches,
)
from footyrater.services import fetch_and_rate_matches, rate_match_details

logger = logging.getLogger(__name__)

router = APIRouter()


# =============================================================================
# Stored matches
# =============================================================================


@router.get("/matches", response_model=list[MatchResponse], response_model_by_alias=True)
def list_matches(db_path=Depends(get_db_path)):
    """List all stored matches, newest first."""
    with get_db(db_path) as conn:
        matches = get_all_matches(conn)
    return [MatchResponse.from_stored(m) for m in matches]


@router.get("/matches/top-rated", response_model=list[MatchResponse], response_model_by_alias=True)
def list_top_rated(
    limit: int = Query(default=10, ge=1, le=100),
    db_path=Depends(get_db_path),
):
    """List the highest rated matches."""
    with get_db(db_path) as conn:
        matches = get_top_rated_matches(conn, limit)
    return [MatchResponse.from_stored(m) for m in matches]


@router.get(
    "/matches/competition/{competition}",
    response_model=list[MatchResponse],
    response_model_by_alias=True,
)
def list_by_competition(competition: str, db_path=Depends(get_db_path)):
    """List stored matches for a competition.

    "Premier League" and "Champions League" match any competition name that
    contains them; other names must match exactly.
    """
    with get_db(db_path) as conn:
        matches = get_matches_by_competition(conn, competition)
    return [MatchResponse.from_stored(m) for m in matches]


# =============================================================================
# Upstream matches
# =============================================================================


@router.get(
    "/matches/{match_id}/details",
    response_model=RatedMatchResponse,
    response_model_by_alias=True,
)
def get_match_details(match_id: int, source: MatchSource = Depends(get_provider)):
    """Fetch one match from the source and rate it (not stored)."""
    rated = rate_match_details(source, match_id)
    if rated is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Match not found or not finished",
        )
    return RatedMatchResponse.from_record(rated.match, rated.rating)


@router.post("/matches/fetch", response_model=FetchResponse, response_model_by_alias=True)
def fetch_matches(
    body: FetchRequest | None = None,
    source: MatchSource = Depends(get_provider),
    db_path=Depends(get_db_path),
):
    """Fetch recent finished matches, rate them and store them."""
    days = body.days if body else 7
    logger.info("[API] Fetching matches from the last %d days", days)

    rated = fetch_and_rate_matches(source, db_path=db_path, days=days)
    return FetchResponse(
        message=f"Processed {len(rated)} matches",
        matches=[RatedMatchResponse.from_record(r.match, r.rating, r.match_id) for r in rated],
    )
