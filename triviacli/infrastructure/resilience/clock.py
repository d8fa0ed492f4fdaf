"""Production time source backed by time.monotonic and asyncio.sleep."""

import asyncio
import time

from triviacli.domain.interfaces.clock import Clock


class MonotonicClock(Clock):
    """Wall-clock independent time source used outside tests."""

    def monotonic(self) -> float:
        return time.monotonic()

    async def sleep(self, seconds: float) -> None:
        await asyncio.sleep(seconds)
