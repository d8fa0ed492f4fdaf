"""Bounds an awaited operation by a caller-supplied time budget.

Per-step timeouts (httpx connect/read/write/pool) do not add up to a total
budget, so anything a caller gives a timeout to is also run under
`asyncio.wait_for`. Expiry surfaces as DeadlineExceededError.
"""

import asyncio
import logging
from typing import Awaitable, Optional, TypeVar

from triviacli.domain.exceptions import DeadlineExceededError

logger = logging.getLogger(__name__)

T = TypeVar("T")

async def run_within(awaitable: Awaitable[T], timeout: Optional[float], action: str) -> T:
    """Awaits `awaitable`, cancelling it once `timeout` seconds have passed.

    Args:
        awaitable: The operation to run; it is always awaited or cancelled.
        timeout: Total seconds allowed; None means no bound.
        action: Short description used in the error message.

    Raises:
        DeadlineExceededError: If the operation is still running at the deadline.
    """
    if timeout is None:
        return await awaitable
    try:
        return await asyncio.wait_for(awaitable, max(timeout, 0.0))
    except asyncio.TimeoutError as e:
        logger.warning(f"{action} cancelled after {timeout:.2f} seconds.")
        raise DeadlineExceededError(f"{action} did not finish within {timeout:.2f}s.") from e
