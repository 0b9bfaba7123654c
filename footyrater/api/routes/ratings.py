"""Rating API endpoints."""

from fastapi import APIRouter

from footyrater.api.models import (
    LegendEntryModel,
    MatchInputModel,
    RatingCategoriesResponse,
    RatingResultModel,
)
from footyrater.rating import DISPLAY_LEGEND, compute_rating

router = APIRouter()


@router.post("/rate-match", response_model=RatingResultModel, response_model_by_alias=True)
def rate_match(match: MatchInputModel):
    """Rate a match from its final score and goal timeline.

    Invalid values (negative scores or minutes, unknown team tags) are
    rejected with 400.
    """
    result = compute_rating(match.to_match_input())
    return RatingResultModel.from_result(result)


@router.get("/rating-categories", response_model=RatingCategoriesResponse)
def list_rating_categories():
    """Display legend: category bands with their colors."""
    return RatingCategoriesResponse(
        categories=[LegendEntryModel.from_entry(entry) for entry in DISPLAY_LEGEND]
    )
