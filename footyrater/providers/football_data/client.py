"""football-data.org API HTTP client.

Handles raw HTTP requests to the v4 API.
No data transformation - just fetch and return JSON.

Every request first takes a slot from a SlidingWindowRateLimiter (the free
tier allows 10 calls per minute). Failures are raised, never returned as
empty data, so callers can tell "no matches" from "source unavailable".
"""

import logging
import random
import threading
import time

import httpx

from footyrater.config import DEFAULT_FOOTBALL_DATA_URL
from footyrater.core import (
    ProviderConfigError,
    ProviderError,
    ProviderNotFoundError,
    ProviderRateLimitError,
)
from footyrater.utilities.rate_limit import SlidingWindowRateLimiter

logger = logging.getLogger(__name__)

# Retry backoff configuration
RETRY_BASE_DELAY = 0.5  # Start at 500ms
RETRY_MAX_DELAY = 10.0
RETRY_JITTER = 0.3  # ±30% randomization

# Rate limit (429) handling - the proactive limiter should make these rare
RATE_LIMIT_BASE_DELAY = 5.0
RATE_LIMIT_MAX_DELAY = 60.0
RATE_LIMIT_MAX_RETRIES = 3

RETRYABLE_STATUS_CODES = {500, 502, 503, 504}


class FootballDataClient:
    """Low-level football-data.org API client.

    Usage:
        with FootballDataClient(token) as client:
            data = client.get_competition_matches(2021, "2025-09-01", "2025-09-08")
    """

    def __init__(
        self,
        api_token: str | None,
        base_url: str = DEFAULT_FOOTBALL_DATA_URL,
        timeout: float = 10.0,
        retry_count: int = 3,
        rate_limiter: SlidingWindowRateLimiter | None = None,
        transport: httpx.BaseTransport | None = None,
    ):
        """Initialize client.

        Args:
            api_token: football-data.org token (sent as X-Auth-Token)
            base_url: API base URL
            timeout: Request timeout in seconds
            retry_count: Attempts per request for transient errors
            rate_limiter: Outbound limiter; defaults to 10 calls / 60s
            transport: Optional httpx transport (tests use MockTransport)
        """
        self._api_token = api_token
        self._base_url = base_url.rstrip("/")
        self._timeout = timeout
        self._retry_count = max(1, retry_count)
        self._rate_limiter = rate_limiter or SlidingWindowRateLimiter()
        self._transport = transport
        self._client: httpx.Client | None = None
        self._lock = threading.Lock()

    @property
    def rate_limiter(self) -> SlidingWindowRateLimiter:
        return self._rate_limiter

    def _get_client(self) -> httpx.Client:
        if self._client is None:
            with self._lock:
                # Double-check after acquiring lock
                if self._client is None:
                    self._client = httpx.Client(
                        base_url=self._base_url,
                        timeout=self._timeout,
                        headers={
                            "X-Auth-Token": self._api_token or "",
                            "Accept": "application/json",
                        },
                        transport=self._transport,
                    )
        return self._client

    def _calculate_delay(self, attempt: int) -> float:
        """Exponential backoff with jitter: 0.5, 1, 2, 4... capped at 10s."""
        base_delay = RETRY_BASE_DELAY * (2**attempt)
        capped = min(base_delay, RETRY_MAX_DELAY)
        jitter = capped * RETRY_JITTER * (2 * random.random() - 1)
        return max(0.1, capped + jitter)

    def _rate_limit_delay(self, response: httpx.Response, retries: int) -> float:
        """Delay before retrying a 429, honouring Retry-After when present."""
        retry_after = response.headers.get("Retry-After")
        if retry_after:
            try:
                return min(float(retry_after), RATE_LIMIT_MAX_DELAY)
            except ValueError:
                pass
        return min(RATE_LIMIT_BASE_DELAY * (2 ** (retries - 1)), RATE_LIMIT_MAX_DELAY)

    def _request(self, path: str, params: dict | None = None) -> dict:
        """GET a JSON resource with rate limiting and retries.

        Raises:
            ProviderConfigError: No API token configured
            ProviderNotFoundError: HTTP 404
            ProviderRateLimitError: HTTP 429 persisted after retries
            ProviderError: Any other failure after retries
        """
        if not self._api_token:
            raise ProviderConfigError("football-data.org API token is not configured")

        failures = 0
        rate_limit_retries = 0

        while True:
            self._rate_limiter.acquire()
            try:
                response = self._get_client().get(path, params=params)
            except httpx.RequestError as e:
                failures += 1
                logger.warning("[FOOTBALL-DATA] Request failed for %s: %s", path, e)
                if failures < self._retry_count:
                    time.sleep(self._calculate_delay(failures - 1))
                    continue
                raise ProviderError(f"football-data.org unreachable: {e}") from e

            status = response.status_code

            if status == 429:
                rate_limit_retries += 1
                if rate_limit_retries > RATE_LIMIT_MAX_RETRIES:
                    logger.error(
                        "[FOOTBALL-DATA] Rate limit (429) persisted after %d retries for %s",
                        RATE_LIMIT_MAX_RETRIES,
                        path,
                    )
                    raise ProviderRateLimitError(
                        "football-data.org rate limit exceeded", status_code=429
                    )
                delay = self._rate_limit_delay(response, rate_limit_retries)
                logger.warning(
                    "[FOOTBALL-DATA] Rate limited (429). Retry %d/%d in %.1fs for %s",
                    rate_limit_retries,
                    RATE_LIMIT_MAX_RETRIES,
                    delay,
                    path,
                )
                time.sleep(delay)
                continue

            if status == 404:
                raise ProviderNotFoundError(f"Not found: {path}", status_code=404)

            if status in RETRYABLE_STATUS_CODES:
                failures += 1
                logger.warning("[FOOTBALL-DATA] HTTP %d for %s", status, path)
                if failures < self._retry_count:
                    time.sleep(self._calculate_delay(failures - 1))
                    continue
                raise ProviderError(
                    f"football-data.org returned HTTP {status}", status_code=status
                )

            if status >= 400:
                logger.error("[FOOTBALL-DATA] HTTP %d for %s", status, path)
                raise ProviderError(
                    f"football-data.org returned HTTP {status}", status_code=status
                )

            logger.debug(
                "[FOOTBALL-DATA] %s (%d/%d calls in window)",
                path,
                self._rate_limiter.calls_in_window(),
                self._rate_limiter.max_calls,
            )
            try:
                return response.json()
            except ValueError as e:
                raise ProviderError(f"Invalid JSON from {path}") from e

    def get_competition_matches(
        self, competition_id: int, date_from: str, date_to: str
    ) -> dict:
        """Fetch matches for a competition in a date range.

        Args:
            competition_id: football-data.org competition id (e.g. 2021)
            date_from: YYYY-MM-DD
            date_to: YYYY-MM-DD

        Returns:
            Raw API response ({"matches": [...], ...})
        """
        return self._request(
            f"/competitions/{competition_id}/matches",
            {"dateFrom": date_from, "dateTo": date_to},
        )

    def get_match(self, match_id: int | str) -> dict:
        """Fetch a single match by id."""
        return self._request(f"/matches/{match_id}")

    def close(self) -> None:
        with self._lock:
            if self._client:
                self._client.close()
                self._client = None

    def __enter__(self) -> "FootballDataClient":
        return self

    def __exit__(self, *exc) -> None:
        self.close()
