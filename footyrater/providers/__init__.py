"""Match sources."""

from footyrater.config import FootballDataSettings
from footyrater.providers.football_data import FootballDataClient, FootballDataProvider
from footyrater.utilities.rate_limit import SlidingWindowRateLimiter


def create_provider(settings: FootballDataSettings) -> FootballDataProvider:
    """Build the football-data.org provider from settings."""
    client = FootballDataClient(
        api_token=settings.api_token,
        base_url=settings.base_url,
        timeout=settings.timeout,
        retry_count=settings.retry_count,
        rate_limiter=SlidingWindowRateLimiter(
            max_calls=settings.max_calls,
            window_seconds=settings.window_seconds,
        ),
    )
    return FootballDataProvider(client)


__all__ = [
    "FootballDataClient",
    "FootballDataProvider",
    "create_provider",
]
