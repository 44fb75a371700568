"""
core/cache.py
─────────────
Process-wide, in-memory payload cache with a fixed TTL per key.

One ``CacheService`` is built at startup (see ``app.main.lifespan``) and
handed to the :class:`~market_engine.coordinator.MarketCoordinator`.
There is one entry per logical endpoint (``indices``, ``all-movers``,
``forex-heatmap`` …).  An entry is reused while
``now - written_at < ttl(key)`` and is always replaced wholesale.

The clock is injectable so expiry can be tested without sleeping.
"""

import logging
import threading
import time
from dataclasses import dataclass
from typing import Any, Awaitable, Callable, Dict, Mapping, Optional

logger = logging.getLogger(__name__)

Clock = Callable[[], float]


@dataclass(frozen=True)
class CacheEntry:
    """A cached payload and the clock reading at which it was stored."""

    payload: Any
    written_at: float


class CacheService:
    """
    Keyed TTL cache.

    Entries are immutable; a write swaps the whole entry under a lock, so
    readers never observe a half-written payload even if handlers run on
    worker threads.

    Args:
        ttls:  Mapping of cache key → lifetime in seconds.
        clock: Monotonic clock returning seconds (``time.monotonic``).

    Example:
        >>> cache = CacheService({"indices": 60})
        >>> cache.set("indices", [])
        >>> cache.get("indices")
        []
    """

    def __init__(self, ttls: Mapping[str, float], clock: Clock = time.monotonic) -> None:
        self._ttls: Dict[str, float] = dict(ttls)
        self._clock = clock
        self._entries: Dict[str, CacheEntry] = {}
        self._lock = threading.Lock()

    # ── public API ────────────────────────────────────────────────────────

    def ttl_for(self, key: str) -> float:
        """
        Return the configured lifetime for ``key``.

        Raises:
            KeyError: If ``key`` has no TTL configured.
        """
        try:
            return self._ttls[key]
        except KeyError:
            raise KeyError(f"No cache TTL configured for '{key}'") from None

    def get(self, key: str) -> Optional[Any]:
        """
        Return the payload for ``key`` if it is still fresh, else ``None``.

        Args:
            key: Cache key.

        Returns:
            The cached payload, or ``None`` on a miss or an expired entry.
        """
        ttl = self.ttl_for(key)
        entry = self._entries.get(key)
        if entry is None:
            return None
        if self._clock() - entry.written_at < ttl:
            return entry.payload
        return None

    def set(self, key: str, payload: Any) -> CacheEntry:
        """Store ``payload`` under ``key``, replacing any previous entry."""
        self.ttl_for(key)
        entry = CacheEntry(payload=payload, written_at=self._clock())
        with self._lock:
            self._entries[key] = entry
        return entry

    async def get_or_fetch(
        self, key: str, fetch: Callable[[], Awaitable[Any]]
    ) -> Any:
        """
        Return the fresh payload for ``key`` or run ``fetch`` and store it.

        Exceptions raised by ``fetch`` propagate and leave the previous
        entry untouched.

        Args:
            key:   Cache key.
            fetch: Zero-argument coroutine function producing the payload.

        Returns:
            Cached or freshly fetched payload.
        """
        cached = self.get(key)
        if cached is not None:
            logger.debug("Cache hit for %s", key)
            return cached

        logger.debug("Cache miss for %s — fetching", key)
        payload = await fetch()
        self.set(key, payload)
        return payload
