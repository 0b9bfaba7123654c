"""Interfaces between layers.

The rating engine only consumes plain data. Anything that supplies matches
implements MatchSource.
"""

from typing import Protocol

from footyrater.core.types import MatchRecord


class MatchSource(Protocol):
    """Supplies finished matches."""

    def get_recent_matches(self, days: int = 7) -> list[MatchRecord]:
        """Finished matches from the last `days` days."""
        ...

    def get_match_details(self, match_id: int | str) -> MatchRecord | None:
        """A single finished match, or None if it has not finished."""
        ...

    def close(self) -> None: ...
