"""Interface for time sources.

The rate gate and deadlines read time only through this contract so tests
can simulate elapsed time without sleeping.
"""

import abc


class Clock(abc.ABC):
    """Abstract Base Class for a monotonic time source with async sleep."""

    @abc.abstractmethod
    def monotonic(self) -> float:
        """Returns the current monotonic time in seconds."""
        pass

    @abc.abstractmethod
    async def sleep(self, seconds: float) -> None:
        """Suspends the caller for the given number of seconds."""
        pass
