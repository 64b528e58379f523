"""Tests for the LLM call pacing."""

import pytest

from trending.config import Settings
from trending.services.rate_limiter import (
    FixedDelayLimiter,
    TokenBucketLimiter,
    build_rate_limiter,
)

from fakes import FakeClock


@pytest.mark.asyncio
async def test_fixed_delay_sleeps_every_call(fake_sleep):
    limiter = FixedDelayLimiter(70, sleep=fake_sleep)

    await limiter.wait()
    await limiter.wait()

    assert fake_sleep.await_count == 2
    assert [c.args[0] for c in fake_sleep.await_args_list] == [70, 70]


def test_fixed_delay_rejects_negative():
    with pytest.raises(ValueError):
        FixedDelayLimiter(-1)


@pytest.mark.asyncio
async def test_token_bucket_first_wait_pays_for_first_call():
    clock = FakeClock()
    limiter = TokenBucketLimiter(1 / 70, capacity=1, clock=clock, sleep=clock.sleep)

    await limiter.wait()

    assert clock.sleeps == [pytest.approx(70)]


@pytest.mark.asyncio
async def test_token_bucket_waits_for_refill():
    clock = FakeClock()
    limiter = TokenBucketLimiter(1 / 70, capacity=1, clock=clock, sleep=clock.sleep)

    await limiter.wait()
    await limiter.wait()
    await limiter.wait()

    assert clock.sleeps == [pytest.approx(70)] * 3


@pytest.mark.asyncio
async def test_token_bucket_credits_elapsed_time():
    clock = FakeClock()
    limiter = TokenBucketLimiter(1 / 70, capacity=1, clock=clock, sleep=clock.sleep)

    await limiter.wait()
    clock.now += 50  # real work took 50s
    await limiter.wait()

    assert clock.sleeps == [pytest.approx(70), pytest.approx(20)]


@pytest.mark.asyncio
async def test_token_bucket_burst():
    clock = FakeClock()
    limiter = TokenBucketLimiter(1.0, capacity=3, clock=clock, sleep=clock.sleep)

    # three calls may go out together: the first is already out, two more are free
    await limiter.wait()
    await limiter.wait()
    assert clock.sleeps == []

    await limiter.wait()
    assert clock.sleeps == [pytest.approx(1.0)]


@pytest.mark.asyncio
async def test_token_bucket_stalled_clock_still_paces(fake_sleep):
    limiter = TokenBucketLimiter(0.5, capacity=1, clock=lambda: 0.0, sleep=fake_sleep)

    await limiter.wait()
    await limiter.wait()

    assert [c.args[0] for c in fake_sleep.await_args_list] == [pytest.approx(2.0), pytest.approx(2.0)]


def test_token_bucket_rejects_bad_arguments():
    with pytest.raises(ValueError):
        TokenBucketLimiter(0)
    with pytest.raises(ValueError):
        TokenBucketLimiter(1.0, capacity=0)


def test_build_rate_limiter_defaults_to_fixed_70s():
    limiter = build_rate_limiter(Settings())

    assert isinstance(limiter, FixedDelayLimiter)
    assert limiter.delay_seconds == 70


def test_build_rate_limiter_token_bucket():
    limiter = build_rate_limiter(
        Settings(RATE_LIMIT_STRATEGY="token_bucket", RATE_LIMIT_PER_MINUTE=6, RATE_LIMIT_BURST=2)
    )

    assert isinstance(limiter, TokenBucketLimiter)
    assert limiter.rate == pytest.approx(0.1)
    assert limiter.capacity == 2


def test_build_rate_limiter_unknown_strategy():
    with pytest.raises(ValueError, match="RATE_LIMIT_STRATEGY"):
        build_rate_limiter(Settings(RATE_LIMIT_STRATEGY="leaky"))
