"""Core types, interfaces and exceptions."""

from footyrater.core.exceptions import (
    InvalidMatchError,
    ProviderConfigError,
    ProviderError,
    ProviderNotFoundError,
    ProviderRateLimitError,
)
from footyrater.core.interfaces import MatchSource
from footyrater.core.types import (
    GoalEvent,
    MatchInput,
    MatchRecord,
    MatchSummary,
    RatingBreakdown,
    RatingResult,
    Side,
    StoredMatch,
    StoredRating,
)

__all__ = [
    # Exceptions
    "InvalidMatchError",
    "ProviderConfigError",
    "ProviderError",
    "ProviderNotFoundError",
    "ProviderRateLimitError",
    # Interfaces
    "MatchSource",
    # Types
    "GoalEvent",
    "MatchInput",
    "MatchRecord",
    "MatchSummary",
    "RatingBreakdown",
    "RatingResult",
    "Side",
    "StoredMatch",
    "StoredRating",
]
