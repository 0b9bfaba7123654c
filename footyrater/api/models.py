"""Pydantic models for API requests and responses.

JSON keys are camelCase (homeTeam, totalScore...); Python attributes stay
snake_case.
"""

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from footyrater.core import (
    GoalEvent,
    MatchInput,
    MatchRecord,
    RatingBreakdown,
    RatingResult,
    StoredMatch,
    StoredRating,
)
from footyrater.rating import LegendEntry, get_rating_color


class CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


# =============================================================================
# Rating input
# =============================================================================


class GoalEventModel(CamelModel):
    """A goal. team is "home" or "away"; minute defaults to 0."""

    team: str
    minute: int | None = 0
    scorer: str | None = None
    type: str | None = None

    @classmethod
    def from_goal(cls, goal: GoalEvent) -> "GoalEventModel":
        return cls(team=goal.team.value, minute=goal.minute, scorer=goal.scorer, type=goal.type)


class MatchInputModel(CamelModel):
    """Request body for rating a match."""

    home_team: str
    away_team: str
    home_score: int
    away_score: int
    goals: list[GoalEventModel] = []

    def to_match_input(self) -> MatchInput:
        """Convert to the core type. Raises InvalidMatchError on bad values."""
        return MatchInput(
            home_team=self.home_team,
            away_team=self.away_team,
            home_score=self.home_score,
            away_score=self.away_score,
            goals=[goal.model_dump() for goal in self.goals],
        )


# =============================================================================
# Rating output
# =============================================================================


class BreakdownModel(CamelModel):
    goal_volume: int
    goal_timing: int
    goal_distribution: int

    @classmethod
    def from_breakdown(cls, breakdown: RatingBreakdown) -> "BreakdownModel":
        return cls(
            goal_volume=breakdown.goal_volume,
            goal_timing=breakdown.goal_timing,
            goal_distribution=breakdown.goal_distribution,
        )


class MatchSummaryModel(CamelModel):
    home_team: str
    away_team: str
    score_line: str
    total_goals: int


class RatingResultModel(CamelModel):
    """Response body for a freshly computed rating."""

    total_score: int
    breakdown: BreakdownModel
    category: str
    color: str
    match_summary: MatchSummaryModel

    @classmethod
    def from_result(cls, result: RatingResult) -> "RatingResultModel":
        summary = result.match_summary
        return cls(
            total_score=result.total_score,
            breakdown=BreakdownModel.from_breakdown(result.breakdown),
            category=result.category,
            color=get_rating_color(result.total_score),
            match_summary=MatchSummaryModel(
                home_team=summary.home_team,
                away_team=summary.away_team,
                score_line=summary.score_line,
                total_goals=summary.total_goals,
            ),
        )


class StoredRatingModel(CamelModel):
    """Rating as stored alongside a match."""

    total_score: int
    breakdown: BreakdownModel
    category: str
    color: str

    @classmethod
    def from_stored(cls, rating: StoredRating) -> "StoredRatingModel":
        return cls(
            total_score=rating.total_score,
            breakdown=BreakdownModel.from_breakdown(rating.breakdown),
            category=rating.category,
            color=get_rating_color(rating.total_score),
        )


# =============================================================================
# Matches
# =============================================================================


class MatchBase(CamelModel):
    external_id: str
    home_team: str
    away_team: str
    home_score: int
    away_score: int
    date: str | None
    status: str | None
    competition: str | None
    goals: list[GoalEventModel]


class MatchResponse(MatchBase):
    """A stored match with its rating (null if unrated)."""

    id: int
    rating: StoredRatingModel | None

    @classmethod
    def from_stored(cls, match: StoredMatch) -> "MatchResponse":
        return cls(
            id=match.id,
            external_id=match.external_id,
            home_team=match.home_team,
            away_team=match.away_team,
            home_score=match.home_score,
            away_score=match.away_score,
            date=match.date,
            status=match.status,
            competition=match.competition,
            goals=[GoalEventModel.from_goal(goal) for goal in match.goals],
            rating=StoredRatingModel.from_stored(match.rating) if match.rating else None,
        )


class RatedMatchResponse(MatchBase):
    """A match fetched from the source and rated on the spot."""

    id: int | None = None
    rating: RatingResultModel

    @classmethod
    def from_record(
        cls, match: MatchRecord, rating: RatingResult, match_id: int | None = None
    ) -> "RatedMatchResponse":
        return cls(
            id=match_id,
            external_id=match.external_id,
            home_team=match.home_team,
            away_team=match.away_team,
            home_score=match.home_score,
            away_score=match.away_score,
            date=match.date,
            status=match.status,
            competition=match.competition,
            goals=[GoalEventModel.from_goal(goal) for goal in match.goals],
            rating=RatingResultModel.from_result(rating),
        )


class FetchRequest(CamelModel):
    """Request body for fetching new matches."""

    days: int = Field(default=7, ge=1, le=30)


class FetchResponse(CamelModel):
    message: str
    matches: list[RatedMatchResponse]


# =============================================================================
# Categories
# =============================================================================


class LegendEntryModel(CamelModel):
    name: str
    min: int
    max: int
    color: str

    @classmethod
    def from_entry(cls, entry: LegendEntry) -> "LegendEntryModel":
        return cls(name=entry.name, min=entry.min, max=entry.max, color=entry.color)


class RatingCategoriesResponse(CamelModel):
    categories: list[LegendEntryModel]
