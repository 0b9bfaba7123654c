"""Database layer."""

from footyrater.database.connection import get_connection, get_db, init_db
from footyrater.database.matches import (
    count_matches,
    get_all_matches,
    get_match,
    get_match_id,
    get_matches_by_competition,
    get_top_rated_matches,
    save_match,
)

__all__ = [
    # Connection
    "get_connection",
    "get_db",
    "init_db",
    # Matches
    "count_matches",
    "get_all_matches",
    "get_match",
    "get_match_id",
    "get_matches_by_competition",
    "get_top_rated_matches",
    "save_match",
]
