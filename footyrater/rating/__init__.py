"""Watchability rating engine."""

from footyrater.rating.categories import (
    DISPLAY_LEGEND,
    RATING_CATEGORIES,
    LegendEntry,
    get_rating_category,
    get_rating_color,
)
from footyrater.rating.engine import (
    compute_breakdown,
    compute_rating,
    goal_distribution_score,
    goal_timing_score,
    goal_volume_score,
    sort_goals,
)

__all__ = [
    # Categories
    "DISPLAY_LEGEND",
    "RATING_CATEGORIES",
    "LegendEntry",
    "get_rating_category",
    "get_rating_color",
    # Engine
    "compute_breakdown",
    "compute_rating",
    "goal_distribution_score",
    "goal_timing_score",
    "goal_volume_score",
    "sort_goals",
]
