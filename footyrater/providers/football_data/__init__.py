"""football-data.org match source."""

from footyrater.providers.football_data.client import FootballDataClient
from footyrater.providers.football_data.provider import (
    FootballDataProvider,
    extract_goals,
    parse_match,
    synthesize_goals,
)

__all__ = [
    "FootballDataClient",
    "FootballDataProvider",
    "extract_goals",
    "parse_match",
    "synthesize_goals",
]
