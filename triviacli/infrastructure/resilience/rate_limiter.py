"""Implementation of a minimum-interval rate gate.

The question bank rejects requests issued too close together. The gate keeps
the time of the last completed question request and delays the next dispatch
until a fixed interval has passed since that completion.
"""

import logging
from typing import Optional

from triviacli.domain.exceptions import DeadlineExceededError
from triviacli.domain.interfaces.clock import Clock
from triviacli.infrastructure.resilience.clock import MonotonicClock

logger = logging.getLogger(__name__)

DEFAULT_MIN_INTERVAL_SECONDS = 5.0

class RateLimiter:
    """Enforces a minimum gap between one request's completion and the next dispatch."""

    def __init__(
        self,
        min_interval: float = DEFAULT_MIN_INTERVAL_SECONDS,
        clock: Optional[Clock] = None,
    ):
        """Initializes the rate gate.

        Args:
            min_interval: Minimum seconds between a completion and the next dispatch.
            clock: Time source; defaults to the monotonic system clock.
        """
        if min_interval < 0:
            raise ValueError("Minimum interval must not be negative.")

        self.min_interval = min_interval
        self.clock = clock or MonotonicClock()
        # None until the first request completes, so the first dispatch never waits
        self._last_dispatch: Optional[float] = None
        logger.info(f"RateLimiter initialized: minimum interval {self.min_interval:.2f} seconds.")

    @property
    def last_dispatch(self) -> Optional[float]:
        return self._last_dispatch

    def wait_time(self) -> float:
        """Seconds the next dispatch must still wait; 0 if it may go now."""
        if self._last_dispatch is None:
            return 0.0
        elapsed = self.clock.monotonic() - self._last_dispatch
        return max(0.0, self.min_interval - elapsed)

    async def gate(self, deadline: Optional[float] = None) -> float:
        """Suspends the caller until a dispatch is permitted.

        Args:
            deadline: Absolute clock time by which the caller must be released.

        Returns:
            The number of seconds waited.

        Raises:
            DeadlineExceededError: If the required wait would run past the deadline.
        """
        wait_needed = self.wait_time()
        if wait_needed <= 0:
            logger.debug("Rate gate open.")
            return 0.0

        if deadline is not None and self.clock.monotonic() + wait_needed > deadline:
            raise DeadlineExceededError(
                f"Rate limit wait of {wait_needed:.2f}s would exceed the deadline."
            )

        logger.debug(f"Rate gate closed. Waiting {wait_needed:.2f} seconds.")
        await self.clock.sleep(wait_needed)
        return wait_needed

    def record_dispatch(self) -> None:
        """Records the completion time of a question request, successful or not."""
        self._last_dispatch = self.clock.monotonic()
        logger.debug(f"Request completion recorded at {self._last_dispatch:.3f}.")
