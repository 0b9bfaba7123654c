"""Seed the store with bundled sample matches.

Used for demo deployments without an API token: on first run (store empty)
the matches in sample_matches.json are rated by the engine and saved.
"""

import json
import logging
from pathlib import Path
from sqlite3 import Connection

from footyrater.core import InvalidMatchError, MatchRecord
from footyrater.database.matches import count_matches, save_match
from footyrater.rating import compute_rating

logger = logging.getLogger(__name__)

SEED_FILE = Path(__file__).parent / "sample_matches.json"


def load_sample_matches(path: Path = SEED_FILE) -> list[MatchRecord]:
    """Load sample match records from file.

    Returns:
        List of MatchRecord, empty if the file is missing or unreadable
    """
    if not path.exists():
        logger.warning("[SEED] Sample file not found: %s", path)
        return []

    try:
        with open(path, encoding="utf-8") as f:
            data = json.load(f)
    except (OSError, json.JSONDecodeError) as e:
        logger.error("[SEED] Failed to read sample file: %s", e)
        return []

    records = []
    for item in data.get("matches", []):
        try:
            records.append(
                MatchRecord(
                    external_id=item["id"],
                    home_team=item["homeTeam"],
                    away_team=item["awayTeam"],
                    home_score=item["homeScore"],
                    away_score=item["awayScore"],
                    date=item["date"],
                    status=item["status"],
                    competition=item["competition"],
                    goals=item.get("goals", []),
                )
            )
        except (KeyError, InvalidMatchError) as e:
            logger.warning("[SEED] Skipping malformed sample match: %s", e)
    return records


def seed_if_needed(conn: Connection, path: Path = SEED_FILE) -> dict:
    """Seed sample matches if the store is empty.

    Args:
        conn: Database connection
        path: Sample file to read

    Returns:
        Dict with seeding results
    """
    if count_matches(conn) > 0:
        return {"seeded": False, "reason": "not_empty"}

    records = load_sample_matches(path)
    if not records:
        return {"seeded": False, "reason": "no_samples"}

    for record in records:
        save_match(conn, record, compute_rating(record.to_match_input()))

    return {"seeded": True, "matches_added": len(records)}
