"""Pacing for rate-limited API calls."""

import threading
import time
from typing import Callable


class FixedIntervalRateLimiter:
    """Lets calls through no more often than once per interval.

    Safe to share between worker threads.
    """

    def __init__(
        self,
        interval: float,
        clock: Callable[[], float] = time.monotonic,
        sleep: Callable[[float], None] = time.sleep,
    ) -> None:
        """Initialize rate limiter.

        Args:
            interval: Minimum seconds between two calls
            clock: Monotonic clock
            sleep: Function used to wait
        """
        if interval < 0:
            raise ValueError("interval must not be negative")
        self.interval = interval
        self._clock = clock
        self._sleep = sleep
        self._lock = threading.Lock()
        self._next_allowed = None

    def wait(self) -> None:
        """Block until the next call is allowed."""
        if self.interval == 0:
            return

        with self._lock:
            now = self._clock()
            if self._next_allowed is None or now >= self._next_allowed:
                self._next_allowed = now + self.interval
                return
            delay = self._next_allowed - now
            self._next_allowed += self.interval

        self._sleep(delay)
