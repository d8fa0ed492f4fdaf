import asyncio

import pytest

from triviacli.domain.exceptions import DeadlineExceededError
from triviacli.infrastructure.resilience.clock import MonotonicClock
from triviacli.infrastructure.resilience.rate_limiter import DEFAULT_MIN_INTERVAL_SECONDS, RateLimiter


def test_rate_limiter_initialization(fake_clock):
    limiter = RateLimiter(clock=fake_clock)
    assert limiter.min_interval == DEFAULT_MIN_INTERVAL_SECONDS == 5.0
    assert limiter.last_dispatch is None


def test_default_clock_is_monotonic():
    assert isinstance(RateLimiter().clock, MonotonicClock)


def test_negative_interval_is_rejected():
    with pytest.raises(ValueError):
        RateLimiter(min_interval=-1)


def test_first_gate_does_not_wait(fake_clock):
    limiter = RateLimiter(clock=fake_clock)

    waited = asyncio.run(limiter.gate())

    assert waited == 0.0
    assert fake_clock.sleeps == []


def test_gate_waits_remaining_interval(fake_clock):
    limiter = RateLimiter(min_interval=5.0, clock=fake_clock)
    limiter.record_dispatch()
    fake_clock.advance(2.0)

    waited = asyncio.run(limiter.gate())

    assert waited == pytest.approx(3.0)
    assert fake_clock.sleeps == [pytest.approx(3.0)]


def test_gate_open_after_interval_elapsed(fake_clock):
    limiter = RateLimiter(min_interval=5.0, clock=fake_clock)
    limiter.record_dispatch()
    fake_clock.advance(7.0)

    assert limiter.wait_time() == 0.0
    assert asyncio.run(limiter.gate()) == 0.0


def test_gate_refuses_wait_past_deadline(fake_clock):
    limiter = RateLimiter(min_interval=5.0, clock=fake_clock)
    limiter.record_dispatch()

    with pytest.raises(DeadlineExceededError):
        asyncio.run(limiter.gate(deadline=fake_clock.now + 4.0))

    assert fake_clock.sleeps == []


def test_gate_allows_wait_within_deadline(fake_clock):
    limiter = RateLimiter(min_interval=5.0, clock=fake_clock)
    limiter.record_dispatch()

    assert asyncio.run(limiter.gate(deadline=fake_clock.now + 5.0)) == 5.0


def test_zero_interval_never_waits(fake_clock):
    limiter = RateLimiter(min_interval=0, clock=fake_clock)
    limiter.record_dispatch()

    assert limiter.wait_time() == 0.0


def test_record_dispatch_uses_clock(fake_clock):
    limiter = RateLimiter(clock=fake_clock)
    fake_clock.advance(12.5)
    limiter.record_dispatch()
    assert limiter.last_dispatch == fake_clock.now
