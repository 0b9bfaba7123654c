"""Rating categories and display metadata.

Two separate mappings live here and must not be mixed up:

- RATING_CATEGORIES: the thresholds compute_rating uses to label a score.
- DISPLAY_LEGEND: evenly banded, differently worded labels shown in a UI
  legend. Display only; never used to compute a category.
"""

from dataclasses import dataclass

# Highest threshold first; first match wins
RATING_CATEGORIES: tuple[tuple[int, str], ...] = (
    (90, "ALL TIME LEGENDARY"),
    (75, "AMAZING"),
    (60, "REALLY Good"),
    (30, "Good"),
    (15, "Average"),
)
LOWEST_CATEGORY = "Very Poor"

# UI colour scale for a score
RATING_COLORS: tuple[tuple[int, str], ...] = (
    (90, "#22c55e"),  # green
    (75, "#84cc16"),  # light green
    (60, "#eab308"),  # yellow
    (40, "#f97316"),  # orange
    (20, "#ef4444"),  # red
)
LOWEST_COLOR = "#dc2626"  # dark red


@dataclass(frozen=True)
class LegendEntry:
    """One band of the UI legend."""

    name: str
    min: int
    max: int
    color: str


DISPLAY_LEGEND: tuple[LegendEntry, ...] = (
    LegendEntry("Excellent", 90, 100, "#22c55e"),
    LegendEntry("Very Good", 75, 89, "#84cc16"),
    LegendEntry("Good", 60, 74, "#eab308"),
    LegendEntry("Average", 40, 59, "#f97316"),
    LegendEntry("Poor", 20, 39, "#ef4444"),
    LegendEntry("Very Poor", 0, 19, "#dc2626"),
)


def get_rating_category(score: int) -> str:
    """Return the category label for a total score."""
    for threshold, label in RATING_CATEGORIES:
        if score >= threshold:
            return label
    return LOWEST_CATEGORY


def get_rating_color(score: int) -> str:
    """Return the UI colour for a total score."""
    for threshold, color in RATING_COLORS:
        if score >= threshold:
            return color
    return LOWEST_COLOR
