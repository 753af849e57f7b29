"""
In-memory fixed window rate limiting.

Each identifier gets a window of ``window_seconds`` during which at most
``max_requests`` checks are allowed. The request that goes over the limit blocks
the identifier for ``block_seconds``. Entries that no longer affect a decision
are swept out at most once per ``PRUNE_INTERVAL_SECONDS``.
"""

import time
from dataclasses import dataclass
from typing import Callable, Dict, Optional

from .security_logger import log_security_event


@dataclass(frozen=True)
class RateLimitConfig:
    window_seconds: float = 60.0
    max_requests: int = 100
    block_seconds: float = 300.0


@dataclass
class RateLimitEntry:
    count: int
    reset_time: float
    blocked: bool = False
    block_until: Optional[float] = None


@dataclass(frozen=True)
class RateLimitResult:
    allowed: bool
    remaining: int
    reset_time: float
    blocked: bool

    def retry_after(self, now: float) -> int:
        """Whole seconds until the client may try again (at least 1)."""
        return max(1, int(round(self.reset_time - now)))


DEFAULT_RATE_LIMIT = RateLimitConfig()
LOGIN_RATE_LIMIT = RateLimitConfig(window_seconds=15 * 60, max_requests=5, block_seconds=30 * 60)
API_RATE_LIMIT = RateLimitConfig(window_seconds=60, max_requests=60, block_seconds=5 * 60)
FILE_UPLOAD_RATE_LIMIT = RateLimitConfig(window_seconds=5 * 60, max_requests=10, block_seconds=15 * 60)

# Minimum seconds between two sweeps of expired entries
PRUNE_INTERVAL_SECONDS = 60.0


class RateLimiter:
    """Tracks request counts per identifier (user id or client address)."""

    def __init__(self, clock: Callable[[], float] = time.time) -> None:
        self._store: Dict[str, RateLimitEntry] = {}
        self._clock = clock
        self._last_prune = clock()

    def _prune(self, now: float) -> None:
        """Drop entries whose window is over and which are not serving a block."""
        if now - self._last_prune < PRUNE_INTERVAL_SECONDS:
            return
        self._last_prune = now
        expired = [
            identifier
            for identifier, entry in self._store.items()
            if (entry.blocked and entry.block_until is not None and now >= entry.block_until)
            or (not entry.blocked and now > entry.reset_time)
        ]
        for identifier in expired:
            del self._store[identifier]

    def check(self, identifier: str, config: RateLimitConfig = DEFAULT_RATE_LIMIT) -> RateLimitResult:
        """
        Count a request for ``identifier`` and decide whether it is allowed.

        Args:
            identifier: Who is making the request
            config: Window, limit and block duration to apply

        Returns:
            RateLimitResult with the remaining budget and when it resets
        """
        now = self._clock()
        self._prune(now)
        current = self._store.get(identifier)

        if current and current.blocked and current.block_until and now < current.block_until:
            return RateLimitResult(allowed=False, remaining=0, reset_time=current.block_until, blocked=True)

        if current is None or now > current.reset_time or current.blocked:
            reset_time = now + config.window_seconds
            self._store[identifier] = RateLimitEntry(count=1, reset_time=reset_time)
            return RateLimitResult(
                allowed=True, remaining=config.max_requests - 1, reset_time=reset_time, blocked=False
            )

        current.count += 1

        if current.count > config.max_requests:
            current.blocked = True
            current.block_until = now + config.block_seconds
            log_security_event(
                event_type="RATE_LIMIT_EXCEEDED",
                severity="medium",
                description=f"Rate limit exceeded for identifier: {identifier}",
                additional_data={
                    "identifier": identifier,
                    "count": current.count,
                    "limit": config.max_requests,
                    "block_duration": config.block_seconds,
                },
            )
            return RateLimitResult(allowed=False, remaining=0, reset_time=current.block_until, blocked=True)

        return RateLimitResult(
            allowed=True,
            remaining=config.max_requests - current.count,
            reset_time=current.reset_time,
            blocked=False,
        )

    def reset(self, identifier: str) -> None:
        self._store.pop(identifier, None)

    def get_status(self, identifier: str) -> Optional[RateLimitEntry]:
        return self._store.get(identifier)

    def login(self, identifier: str) -> RateLimitResult:
        return self.check(identifier, LOGIN_RATE_LIMIT)

    def api(self, identifier: str) -> RateLimitResult:
        return self.check(identifier, API_RATE_LIMIT)

    def file_upload(self, identifier: str) -> RateLimitResult:
        return self.check(identifier, FILE_UPLOAD_RATE_LIMIT)


rate_limiter = RateLimiter()
