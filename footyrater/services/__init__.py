"""Service layer."""

from footyrater.services.match_rating import (
    RatedMatch,
    fetch_and_rate_matches,
    rate_match_details,
    rate_record,
)

__all__ = [
    "RatedMatch",
    "fetch_and_rate_matches",
    "rate_match_details",
    "rate_record",
]
