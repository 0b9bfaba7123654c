"""Competition name matching.

Providers name the same competition differently ("UEFA Champions League" vs
"Champions League"). Filter values listed in CONTAINMENT_ALIASES match any
competition whose name contains them; every other value must match exactly.
"""

from unidecode import unidecode

CONTAINMENT_ALIASES: frozenset[str] = frozenset({"premier league", "champions league"})


def normalize_competition(name: str | None) -> str:
    """Lowercase, strip accents and collapse whitespace."""
    if not name:
        return ""
    return " ".join(unidecode(name).lower().split())


def competition_matches(filter_value: str, competition: str | None) -> bool:
    """Check whether a stored competition name satisfies a filter value.

    Examples:
        >>> competition_matches("Champions League", "UEFA Champions League")
        True
        >>> competition_matches("Serie A", "Serie A")
        True
        >>> competition_matches("Serie A", "Serie A Women")
        False
    """
    if competition is None:
        return False
    wanted = normalize_competition(filter_value)
    if wanted in CONTAINMENT_ALIASES:
        return wanted in normalize_competition(competition)
    return filter_value == competition
