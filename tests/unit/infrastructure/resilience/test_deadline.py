import asyncio

import pytest

from triviacli.domain.exceptions import DeadlineExceededError
from triviacli.infrastructure.resilience.deadline import run_within


async def finishes_after(seconds, value="done"):
    await asyncio.sleep(seconds)
    return value


def test_no_timeout_awaits_to_completion():
    assert asyncio.run(run_within(finishes_after(0.01), None, "Work")) == "done"


def test_result_within_timeout():
    assert asyncio.run(run_within(finishes_after(0.01), 1.0, "Work")) == "done"


def test_expiry_raises_deadline_exceeded():
    with pytest.raises(DeadlineExceededError, match="Work did not finish"):
        asyncio.run(run_within(finishes_after(1.0), 0.05, "Work"))


def test_non_positive_timeout_expires_immediately():
    with pytest.raises(DeadlineExceededError):
        asyncio.run(run_within(finishes_after(0.5), 0.0, "Work"))


def test_inner_errors_pass_through():
    async def broken():
        raise ValueError("bad")

    with pytest.raises(ValueError):
        asyncio.run(run_within(broken(), 1.0, "Work"))
