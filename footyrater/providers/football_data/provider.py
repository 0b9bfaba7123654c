"""football-data.org match source.

Turns raw API payloads into MatchRecord objects. Only finished matches are
returned; status filtering happens here, before anything is rated.
"""

import logging
import random
from datetime import UTC, date, datetime, timedelta

from footyrater.core import GoalEvent, MatchRecord, Side
from footyrater.providers.football_data.client import FootballDataClient
from footyrater.providers.football_data.constants import (
    COMPETITIONS,
    DEFAULT_GOAL_TYPE,
    SYNTHETIC_MINUTE_RANGE,
    UNKNOWN_SCORER,
)
from footyrater.utilities.event_status import is_match_finished

logger = logging.getLogger(__name__)


def _full_time(payload: dict) -> tuple[int, int]:
    """Final score from a match payload; missing values count as 0."""
    full_time = (payload.get("score") or {}).get("fullTime") or {}
    return full_time.get("home") or 0, full_time.get("away") or 0


def synthesize_goals(match_id: int | str, home_score: int, away_score: int) -> list[GoalEvent]:
    """Build placeholder goals from a final score.

    Used when a payload carries no goal detail (the free tier often omits it).
    Minutes are drawn from a generator seeded with the match id, so the same
    match always gets the same timeline and therefore the same rating.
    """
    rng = random.Random(str(match_id))
    low, high = SYNTHETIC_MINUTE_RANGE
    goals = [
        GoalEvent(
            team=side,
            minute=rng.randint(low, high),
            scorer=UNKNOWN_SCORER,
            type=DEFAULT_GOAL_TYPE,
        )
        for side, count in ((Side.HOME, home_score), (Side.AWAY, away_score))
        for _ in range(count)
    ]
    return sorted(goals, key=lambda goal: goal.minute)


def extract_goals(payload: dict) -> list[GoalEvent]:
    """Extract goal events from a match payload, sorted by minute."""
    raw_goals = payload.get("goals") or []
    if not raw_goals:
        home_score, away_score = _full_time(payload)
        return synthesize_goals(payload.get("id"), home_score, away_score)

    home_id = (payload.get("homeTeam") or {}).get("id")
    goals = []
    for raw in raw_goals:
        team_id = (raw.get("team") or {}).get("id")
        if team_id is None:
            logger.warning(
                "[FOOTBALL-DATA] Goal without team in match %s, skipping", payload.get("id")
            )
            continue
        goals.append(
            GoalEvent(
                team=Side.HOME if team_id == home_id else Side.AWAY,
                minute=raw.get("minute") or 0,
                scorer=(raw.get("scorer") or {}).get("name"),
                type=raw.get("type") or DEFAULT_GOAL_TYPE,
            )
        )
    return sorted(goals, key=lambda goal: goal.minute)


def parse_match(payload: dict) -> MatchRecord:
    """Convert a raw match payload into a MatchRecord."""
    home_score, away_score = _full_time(payload)
    return MatchRecord(
        external_id=payload["id"],
        home_team=(payload.get("homeTeam") or {}).get("name") or "Home",
        away_team=(payload.get("awayTeam") or {}).get("name") or "Away",
        home_score=home_score,
        away_score=away_score,
        date=payload.get("utcDate") or "",
        status=payload.get("status") or "",
        competition=(payload.get("competition") or {}).get("name") or "",
        goals=extract_goals(payload),
    )


class FootballDataProvider:
    """Finished-match source backed by football-data.org."""

    def __init__(
        self,
        client: FootballDataClient,
        competitions: dict[str, int] | None = None,
    ):
        self._client = client
        self._competitions = competitions if competitions is not None else dict(COMPETITIONS)

    def _finished(self, payloads: list[dict]) -> list[MatchRecord]:
        records = []
        for payload in payloads:
            if not is_match_finished(payload.get("status")):
                logger.debug(
                    "[FOOTBALL-DATA] Skipping match %s - status %s",
                    payload.get("id"),
                    payload.get("status"),
                )
                continue
            records.append(parse_match(payload))
        return records

    def get_competition_matches(
        self, code: str, date_from: date, date_to: date
    ) -> list[MatchRecord]:
        """Finished matches for one competition code (e.g. "PL") in a date range."""
        competition_id = self._competitions[code]
        data = self._client.get_competition_matches(
            competition_id, date_from.isoformat(), date_to.isoformat()
        )
        payloads = data.get("matches") or []
        records = self._finished(payloads)
        logger.info(
            "[FOOTBALL-DATA] %s: %d matches, %d finished", code, len(payloads), len(records)
        )
        return records

    def get_recent_matches(self, days: int = 7, today: date | None = None) -> list[MatchRecord]:
        """Finished matches from every configured competition.

        The window runs from `days` days ago up to tomorrow (UTC).
        """
        today = today or datetime.now(UTC).date()
        date_from = today - timedelta(days=days)
        date_to = today + timedelta(days=1)
        logger.info("[FOOTBALL-DATA] Fetching matches from %s to %s", date_from, date_to)

        records: list[MatchRecord] = []
        for code in self._competitions:
            records.extend(self.get_competition_matches(code, date_from, date_to))
        return records

    def get_match_details(self, match_id: int | str) -> MatchRecord | None:
        """A single match, or None if it is not finished yet."""
        payload = self._client.get_match(match_id)
        if not is_match_finished(payload.get("status")):
            logger.info(
                "[FOOTBALL-DATA] Match %s is not finished (status: %s)",
                match_id,
                payload.get("status"),
            )
            return None
        return parse_match(payload)

    def close(self) -> None:
        self._client.close()
