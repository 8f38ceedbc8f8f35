"""
Rate limiting for the request pipeline.

A fixed-window counter per client key (the client IP, as resolved by
slowapi's get_remote_address). Limits are written as rate strings such
as "60/minute" and parsed with the `limits` library.

Each bucket carries its own lock; the registry lock is only taken to
create buckets or sweep expired ones, so counting for one client never
blocks another.
"""

import logging
import threading
import time
from dataclasses import dataclass, field
from typing import Callable

from limits import parse as parse_rate

from invoice_api.domain.access.errors import RateLimitExceededError
from invoice_api.shared.dispatch.context import (
    Continue,
    RequestContext,
    Stage,
    StageResult,
    Terminate,
)
from invoice_api.shared.errors.handlers import rate_limit_response

logger = logging.getLogger(__name__)

DEFAULT_RATE_LIMIT = "60/minute"
DEFAULT_MAX_BUCKETS = 10_000


@dataclass
class RateLimitBucket:
    """Request count for one client key within the current window."""

    window_start: float
    count: int = 0
    lock: threading.Lock = field(default_factory=threading.Lock, repr=False, compare=False)

    def expired(self, now: float, window_seconds: float) -> bool:
        return now - self.window_start >= window_seconds


@dataclass(frozen=True)
class RateLimitDecision:
    """Outcome of counting one request against a bucket."""

    allowed: bool
    limit: int
    remaining: int
    reset_after: float


class FixedWindowRateLimiter:
    """Counts requests per key over fixed windows of `window_seconds`.

    Args:
        limit: Requests allowed per window.
        window_seconds: Window length.
        clock: Monotonic time source, injectable for tests.
        max_buckets: Registry size above which expired buckets are swept.
    """

    def __init__(
        self,
        limit: int,
        window_seconds: float,
        clock: Callable[[], float] = time.monotonic,
        max_buckets: int = DEFAULT_MAX_BUCKETS,
    ) -> None:
        if limit < 1:
            raise ValueError("limit must be at least 1")
        if window_seconds <= 0:
            raise ValueError("window_seconds must be positive")
        self.limit = limit
        self.window_seconds = window_seconds
        self._clock = clock
        self._max_buckets = max_buckets
        self._buckets: dict[str, RateLimitBucket] = {}
        self._registry_lock = threading.Lock()

    @classmethod
    def from_rate(cls, rate: str, **kwargs) -> "FixedWindowRateLimiter":
        """Build a limiter from a rate string such as "60/minute"."""
        item = parse_rate(rate)
        return cls(limit=item.amount, window_seconds=item.get_expiry(), **kwargs)

    def hit(self, key: str) -> RateLimitDecision:
        """Count one request for `key` and decide whether it may proceed."""
        while True:
            bucket = self._bucket_for(key)
            with bucket.lock:
                if self._buckets.get(key) is not bucket:
                    # swept between lookup and lock
                    continue
                now = self._clock()
                if bucket.expired(now, self.window_seconds):
                    bucket.window_start = now
                    bucket.count = 0
                bucket.count += 1
                count = bucket.count
                reset_after = self.window_seconds - (now - bucket.window_start)
            return RateLimitDecision(
                allowed=count <= self.limit,
                limit=self.limit,
                remaining=max(0, self.limit - count),
                reset_after=reset_after,
            )

    def sweep(self) -> int:
        """Drop buckets whose window has expired. Returns how many were removed."""
        now = self._clock()
        removed = 0
        with self._registry_lock:
            for key, bucket in list(self._buckets.items()):
                if not bucket.lock.acquire(blocking=False):
                    continue
                try:
                    if bucket.expired(now, self.window_seconds):
                        del self._buckets[key]
                        removed += 1
                finally:
                    bucket.lock.release()
        if removed:
            logger.debug("Swept %d expired rate-limit buckets", removed)
        return removed

    def __len__(self) -> int:
        with self._registry_lock:
            return len(self._buckets)

    def _bucket_for(self, key: str) -> RateLimitBucket:
        bucket = self._buckets.get(key)
        if bucket is not None:
            return bucket
        if len(self._buckets) >= self._max_buckets:
            self.sweep()
        with self._registry_lock:
            return self._buckets.setdefault(key, RateLimitBucket(window_start=self._clock()))


class RateLimitStage(Stage):
    """Pipeline stage that refuses clients over their request budget."""

    name = "rate_limit"

    def __init__(self, limiter: FixedWindowRateLimiter) -> None:
        self._limiter = limiter

    async def process(self, context: RequestContext) -> StageResult:
        decision = self._limiter.hit(context.client_key)
        if decision.allowed:
            return Continue(context)
        logger.warning("Rate limit exceeded: key=%s", context.client_key)
        return Terminate(
            rate_limit_response(
                RateLimitExceededError(
                    key=context.client_key,
                    limit=decision.limit,
                    window_seconds=self._limiter.window_seconds,
                    retry_after=decision.reset_after,
                )
            )
        )
