"""Sliding-window rate limiter for outbound API calls.

football-data.org's free tier allows a fixed number of calls per minute.
Each limiter instance owns its own call log; nothing is shared between
instances.
"""

import logging
import threading
import time
from collections import deque
from collections.abc import Callable

logger = logging.getLogger(__name__)


class SlidingWindowRateLimiter:
    """Allow at most max_calls calls in any window_seconds span.

    acquire() blocks until a slot is free, then records the call.
    clock and sleep are injectable for tests.
    """

    def __init__(
        self,
        max_calls: int = 10,
        window_seconds: float = 60.0,
        clock: Callable[[], float] = time.monotonic,
        sleep: Callable[[float], None] = time.sleep,
    ):
        if max_calls < 1:
            raise ValueError("max_calls must be >= 1")
        if window_seconds <= 0:
            raise ValueError("window_seconds must be > 0")
        self._max_calls = max_calls
        self._window = window_seconds
        self._clock = clock
        self._sleep = sleep
        self._calls: deque[float] = deque()
        self._lock = threading.Lock()

    @property
    def max_calls(self) -> int:
        return self._max_calls

    def _prune(self, now: float) -> None:
        cutoff = now - self._window
        while self._calls and self._calls[0] <= cutoff:
            self._calls.popleft()

    def calls_in_window(self) -> int:
        """Number of calls recorded in the current window."""
        with self._lock:
            self._prune(self._clock())
            return len(self._calls)

    def time_until_available(self) -> float:
        """Seconds until the next call would be allowed (0 if allowed now)."""
        with self._lock:
            now = self._clock()
            self._prune(now)
            if len(self._calls) < self._max_calls:
                return 0.0
            return max(0.0, self._calls[0] + self._window - now)

    def acquire(self) -> None:
        """Wait for a free slot and record a call."""
        while True:
            with self._lock:
                now = self._clock()
                self._prune(now)
                if len(self._calls) < self._max_calls:
                    self._calls.append(now)
                    return
                wait = self._calls[0] + self._window - now

            logger.info(
                "[RATE-LIMIT] %d calls in %.0fs window, waiting %.1fs",
                self._max_calls,
                self._window,
                wait,
            )
            self._sleep(max(wait, 0.0))

    def reset(self) -> None:
        with self._lock:
            self._calls.clear()
