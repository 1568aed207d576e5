"""
Shared permit sources for throttling GitHub calls and merges.

A limiter is owned by whoever schedules the merge invocations and is
borrowed by each of them; invocations only ever call ``acquire()``.
"""

import asyncio
import threading
import time
from collections.abc import Awaitable, Callable
from typing import Protocol, runtime_checkable

from prmerge.logging import log_permit_wait


@runtime_checkable
class RateLimiter(Protocol):
    """Anything that hands out one permit per ``acquire()`` call."""

    async def acquire(self) -> None:
        """Block until a permit is available, then consume it."""
        ...


class IntervalRateLimiter:
    """
    Emits one permit every ``interval`` seconds.

    Behaves like a periodic ticker: the first permit becomes available one
    interval after construction and an idle limiter banks at most one
    permit. Each waiter reserves the next free slot when it arrives and
    then sleeps until that slot, so waiters are served in arrival order.
    Reserving never awaits, so one limiter can be shared by tasks on
    different event loops or threads and outlives any single loop.

    A cancelled waiter hands its slot back unless another waiter has
    already reserved the slot after it.
    """

    def __init__(
        self,
        interval: float,
        name: str = "limiter",
        clock: Callable[[], float] = time.monotonic,
        sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
    ) -> None:
        """
        Initialize the limiter.

        Args:
            interval: Seconds between permits
            name: Name used in log messages
            clock: Monotonic clock in seconds
            sleep: Coroutine function used to wait
        """
        if interval <= 0:
            raise ValueError(f"interval must be positive, got {interval}")

        self.interval = interval
        self.name = name
        self._clock = clock
        self._sleep = sleep
        self._next_permit = clock() + interval
        self._lock = threading.Lock()

    @classmethod
    def from_rate(cls, per_second: float, name: str = "limiter") -> "IntervalRateLimiter":
        """Create a limiter emitting ``per_second`` permits per second."""
        if per_second <= 0:
            raise ValueError(f"rate must be positive, got {per_second}")
        return cls(1.0 / per_second, name=name)

    @classmethod
    def per_minute(cls, count: int, name: str = "limiter") -> "IntervalRateLimiter":
        """Create a limiter emitting ``count`` permits per minute."""
        if count <= 0:
            raise ValueError(f"count must be positive, got {count}")
        return cls(60.0 / count, name=name)

    async def acquire(self) -> None:
        """Reserve the next permit and wait until it is due."""
        with self._lock:
            now = self._clock()
            slot = max(self._next_permit, now)
            # Two permits are never handed out less than one interval apart.
            self._next_permit = slot + self.interval

        delay = slot - now
        if delay > 0:
            try:
                await self._sleep(delay)
            except asyncio.CancelledError:
                self._release(slot)
                raise

        log_permit_wait(self.name, max(delay, 0.0))

    def _release(self, slot: float) -> None:
        """Give back an unused slot if nobody has reserved one after it."""
        with self._lock:
            if self._next_permit == slot + self.interval:
                self._next_permit = slot

    def __repr__(self) -> str:
        return f"IntervalRateLimiter(interval={self.interval!r}, name={self.name!r})"
