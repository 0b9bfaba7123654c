"""football-data.org provider constants."""

# Competition code -> football-data.org competition id
COMPETITIONS: dict[str, int] = {
    "PL": 2021,  # Premier League
    "CL": 2001,  # UEFA Champions League
}

# Goal detail placeholders used when a payload has no goal list
UNKNOWN_SCORER = "Unknown"
DEFAULT_GOAL_TYPE = "REGULAR"

# Synthesised goals get a minute in this range (inclusive)
SYNTHETIC_MINUTE_RANGE = (1, 90)
