"""Pacing for calls against the rate-limited chat-completion API.

Both limiters take their ``sleep`` (and the bucket its ``clock``) as
arguments so tests can drive them without real time passing.
"""

import asyncio
import time
from typing import Awaitable, Callable, Optional, Protocol

from loguru import logger

from ..config import Settings, get_settings

SleepFn = Callable[[float], Awaitable[None]]


class RateLimiter(Protocol):
    async def wait(self) -> None:
        ...


class FixedDelayLimiter(RateLimiter):
    """Suspends for a fixed delay on every call."""

    def __init__(self, delay_seconds: float, sleep: SleepFn = asyncio.sleep):
        if delay_seconds < 0:
            raise ValueError("delay_seconds must be >= 0")
        self.delay_seconds = delay_seconds
        self._sleep = sleep

    async def wait(self) -> None:
        logger.debug(f"[限速] 等待 {self.delay_seconds}s")
        await self._sleep(self.delay_seconds)


class TokenBucketLimiter(RateLimiter):
    """Token bucket: holds at most ``capacity`` tokens, refilled at ``rate_per_second``.

    wait() is called after each paced call and pays for it: it consumes one
    token, sleeping until one is available. The first call has already gone
    out before any wait(), so the bucket starts with ``capacity - 1`` tokens.
    """

    def __init__(
        self,
        rate_per_second: float,
        capacity: int = 1,
        clock: Callable[[], float] = time.monotonic,
        sleep: SleepFn = asyncio.sleep,
    ):
        if rate_per_second <= 0:
            raise ValueError("rate_per_second must be > 0")
        if capacity < 1:
            raise ValueError("capacity must be >= 1")
        self.rate = rate_per_second
        self.capacity = capacity
        self._clock = clock
        self._sleep = sleep
        self._tokens = float(capacity - 1)
        self._updated = clock()

    def _refill(self) -> None:
        now = self._clock()
        elapsed = max(0.0, now - self._updated)
        self._tokens = min(self.capacity, self._tokens + elapsed * self.rate)
        self._updated = now

    async def wait(self) -> None:
        self._refill()
        if self._tokens < 1:
            delay = (1 - self._tokens) / self.rate
            logger.debug(f"[限速] 令牌不足，等待 {delay:.1f}s")
            await self._sleep(delay)
            self._refill()
            # the clock may not have advanced by the full delay (e.g. sleep was cut short)
            self._tokens = max(self._tokens, 1.0)
        self._tokens -= 1


def build_rate_limiter(settings: Optional[Settings] = None, sleep: SleepFn = asyncio.sleep) -> RateLimiter:
    settings = settings or get_settings()
    strategy = settings.rate_limit_strategy.lower()
    if strategy == "fixed":
        return FixedDelayLimiter(settings.llm_delay_seconds, sleep=sleep)
    if strategy == "token_bucket":
        return TokenBucketLimiter(
            settings.rate_limit_per_minute / 60.0,
            capacity=settings.rate_limit_burst,
            sleep=sleep,
        )
    raise ValueError(f"Unknown RATE_LIMIT_STRATEGY: {settings.rate_limit_strategy}")
