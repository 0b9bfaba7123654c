"""Core data types.

All types are immutable dataclasses. Provider payloads and API request bodies
are converted into these before reaching the rating engine.
"""

from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field
from enum import Enum
from typing import Any

from footyrater.core.exceptions import InvalidMatchError


class Side(str, Enum):
    """Which team a goal was scored for."""

    HOME = "home"
    AWAY = "away"

    @classmethod
    def parse(cls, value: Any) -> "Side":
        """Parse a team tag case-insensitively ("home", "HOME", Side.HOME)."""
        if isinstance(value, Side):
            return value
        if isinstance(value, str):
            try:
                return cls(value.strip().lower())
            except ValueError:
                pass
        raise InvalidMatchError(f"unrecognized goal team tag: {value!r}")


def _parse_minute(value: Any) -> int:
    if value is None:
        return 0
    if isinstance(value, bool) or not isinstance(value, int):
        raise InvalidMatchError(f"goal minute must be an integer, got {value!r}")
    if value < 0:
        raise InvalidMatchError(f"goal minute must be >= 0, got {value}")
    return value


def _parse_score(name: str, value: Any) -> int:
    if isinstance(value, bool) or not isinstance(value, int):
        raise InvalidMatchError(f"{name} must be an integer, got {value!r}")
    if value < 0:
        raise InvalidMatchError(f"{name} must be >= 0, got {value}")
    return value


def _pick(data: Mapping[str, Any], *keys: str, default: Any = None) -> Any:
    """Return the first key present in data (accepts camelCase and snake_case)."""
    for key in keys:
        if key in data:
            return data[key]
    return default


@dataclass(frozen=True)
class GoalEvent:
    """A single goal in a match timeline."""

    team: Side
    minute: int = 0
    scorer: str | None = None
    type: str | None = None

    def __post_init__(self) -> None:
        object.__setattr__(self, "team", Side.parse(self.team))
        object.__setattr__(self, "minute", _parse_minute(self.minute))

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "GoalEvent":
        if not isinstance(data, Mapping):
            raise InvalidMatchError(f"goal must be an object, got {type(data).__name__}")
        return cls(
            team=data.get("team"),
            minute=data.get("minute"),
            scorer=data.get("scorer"),
            type=data.get("type"),
        )

    def to_dict(self) -> dict:
        return {
            "team": self.team.value,
            "minute": self.minute,
            "scorer": self.scorer,
            "type": self.type,
        }


def _coerce_goals(goals: Iterable[Any] | None) -> tuple[GoalEvent, ...]:
    if goals is None:
        return ()
    return tuple(g if isinstance(g, GoalEvent) else GoalEvent.from_dict(g) for g in goals)


@dataclass(frozen=True)
class MatchInput:
    """Everything the rating engine needs to score a match.

    home_score/away_score are the authoritative final tallies. goals is only
    used for timing and distribution, and may be partial.
    """

    home_team: str
    away_team: str
    home_score: int
    away_score: int
    goals: tuple[GoalEvent, ...] = ()

    def __post_init__(self) -> None:
        for name in ("home_team", "away_team"):
            value = getattr(self, name)
            if not isinstance(value, str) or not value.strip():
                raise InvalidMatchError(f"{name} must be a non-empty string")
        _parse_score("home_score", self.home_score)
        _parse_score("away_score", self.away_score)
        object.__setattr__(self, "goals", _coerce_goals(self.goals))

    @property
    def total_goals(self) -> int:
        return self.home_score + self.away_score

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "MatchInput":
        """Build from a plain mapping using either camelCase or snake_case keys."""
        if not isinstance(data, Mapping):
            raise InvalidMatchError(f"match must be an object, got {type(data).__name__}")
        return cls(
            home_team=_pick(data, "homeTeam", "home_team"),
            away_team=_pick(data, "awayTeam", "away_team"),
            home_score=_pick(data, "homeScore", "home_score"),
            away_score=_pick(data, "awayScore", "away_score"),
            goals=_pick(data, "goals"),
        )


@dataclass(frozen=True)
class MatchRecord:
    """A finished match as supplied by a match source or read from the store."""

    external_id: str
    home_team: str
    away_team: str
    home_score: int
    away_score: int
    date: str
    status: str
    competition: str
    goals: tuple[GoalEvent, ...] = ()

    def __post_init__(self) -> None:
        object.__setattr__(self, "external_id", str(self.external_id))
        object.__setattr__(self, "goals", _coerce_goals(self.goals))

    def to_match_input(self) -> MatchInput:
        return MatchInput(
            home_team=self.home_team,
            away_team=self.away_team,
            home_score=self.home_score,
            away_score=self.away_score,
            goals=self.goals,
        )


@dataclass(frozen=True)
class RatingBreakdown:
    """The three capped sub-scores."""

    goal_volume: int = 0
    goal_timing: int = 0
    goal_distribution: int = 0

    @property
    def total(self) -> int:
        return self.goal_volume + self.goal_timing + self.goal_distribution

    def is_empty(self) -> bool:
        return self.total == 0


@dataclass(frozen=True)
class MatchSummary:
    home_team: str
    away_team: str
    score_line: str
    total_goals: int


@dataclass(frozen=True)
class RatingResult:
    """Output of a single scoring call."""

    total_score: int
    breakdown: RatingBreakdown
    category: str
    match_summary: MatchSummary


@dataclass(frozen=True)
class StoredRating:
    """Rating as read back from the store (no match summary)."""

    total_score: int
    breakdown: RatingBreakdown
    category: str


@dataclass(frozen=True)
class StoredMatch:
    """A persisted match joined with its rating."""

    id: int
    external_id: str
    home_team: str
    away_team: str
    home_score: int
    away_score: int
    date: str
    status: str
    competition: str
    goals: tuple[GoalEvent, ...] = field(default_factory=tuple)
    rating: StoredRating | None = None
