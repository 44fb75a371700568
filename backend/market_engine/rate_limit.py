"""
market_engine/rate_limit.py
───────────────────────────
Fixed-interval gate used by provider adapters to pace upstream calls.

Every adapter owns one :class:`IntervalGate`.  Calling ``await
gate.wait()`` before a request guarantees at least ``interval`` seconds
between the starts of two consecutive requests through that adapter, so
the symbol loops in :mod:`market_engine.fetchers` never sleep themselves.
"""

import asyncio
import time
from typing import Awaitable, Callable, Optional


class IntervalGate:
    """
    Let one caller through per ``interval`` seconds.

    Args:
        interval: Minimum spacing between passes, in seconds (0 disables).
        clock:    Monotonic clock; injectable for tests.
        sleep:    Coroutine used to wait; injectable for tests.

    Example:
        >>> gate = IntervalGate(0.1)
        >>> await gate.wait()   # immediate
        >>> await gate.wait()   # ~100 ms later
    """

    def __init__(
        self,
        interval: float,
        *,
        clock: Callable[[], float] = time.monotonic,
        sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
    ) -> None:
        if interval < 0:
            raise ValueError("interval must be >= 0")
        self.interval = interval
        self._clock = clock
        self._sleep = sleep
        self._next_at: Optional[float] = None
        self._lock = asyncio.Lock()

    async def wait(self) -> None:
        """Block until the next slot is open, then claim it."""
        async with self._lock:
            now = self._clock()
            if self._next_at is not None and now < self._next_at:
                await self._sleep(self._next_at - now)
                now = max(self._clock(), self._next_at)
            self._next_at = now + self.interval
