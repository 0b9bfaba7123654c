"""Match status utilities.

Single source of truth for deciding whether a match is finished.
Only finished matches may be rated.
"""

# football-data.org statuses that mean the match was played to full time
FINISHED_STATUSES = frozenset({"FINISHED"})


def is_match_finished(status: str | None) -> bool:
    """Check if a provider status string means the match is over.

    Args:
        status: Raw status, e.g. "FINISHED", "IN_PLAY", "SCHEDULED"

    Returns:
        True if the match is finished, False otherwise
    """
    if not status:
        return False
    return status.strip().upper() in FINISHED_STATUSES
