"""
market_engine/aggregator.py
───────────────────────────
Cross-asset "all movers" feed.

1. Run the stock, crypto, forex and commodity mover sources concurrently;
   a source that raises contributes nothing and never cancels the others.
2. Append index movers from their own paced, sequential fetch.
3. Deduplicate by symbol (larger ``|raw_change|`` wins), rank by
   ``|raw_change|`` descending and keep the top N.
"""

import asyncio
import logging
from typing import List, Optional, Protocol, Sequence

from market_engine.movers import dedupe_by_symbol, rank_movers
from market_engine.results import BatchResult
from schemas.markets import MoverRecord

logger = logging.getLogger(__name__)


class MoverSource(Protocol):
    label: str

    async def fetch_movers(self) -> BatchResult[MoverRecord]: ...


class MoversAggregator:
    """
    Combine several mover sources into one ranked list.

    Args:
        sources:      Sources joined concurrently (fail-tolerant).
        index_source: Source fetched afterwards, on its own.
        limit:        Size of the final ranking.

    Example:
        >>> aggregator = MoversAggregator([stocks, crypto, fx, commodities], indices)
        >>> top = await aggregator.build()
    """

    def __init__(
        self,
        sources: Sequence[MoverSource],
        index_source: Optional[MoverSource] = None,
        limit: int = 10,
    ) -> None:
        self._sources = list(sources)
        self._index_source = index_source
        self.limit = limit

    async def collect(self) -> BatchResult[MoverRecord]:
        """
        Gather raw movers from every source without ranking.

        Returns:
            Every record produced this cycle, in source order, plus all
            skip entries.
        """
        results = await asyncio.gather(
            *(source.fetch_movers() for source in self._sources),
            return_exceptions=True,
        )
        combined: BatchResult[MoverRecord] = BatchResult()
        for source, result in zip(self._sources, results):
            if isinstance(result, Exception):
                logger.warning("Movers: %s source failed: %r", source.label, result)
                combined.skip(source.label, repr(result))
                continue
            if isinstance(result, BaseException):
                raise result
            combined.extend(result)

        if self._index_source is not None:
            try:
                combined.extend(await self._index_source.fetch_movers())
            except Exception as exc:
                logger.warning("Movers: %s source failed: %r", self._index_source.label, exc)
                combined.skip(self._index_source.label, repr(exc))
        return combined

    async def build(self) -> List[MoverRecord]:
        """Collect, deduplicate, rank and truncate."""
        combined = await self.collect()
        for skipped in combined.skipped:
            logger.debug("Movers skipped %s: %s", skipped.symbol, skipped.reason)
        top = rank_movers(dedupe_by_symbol(combined.records), self.limit)
        logger.info(
            "All movers: %d collected, %d skipped, returning %d",
            len(combined.records),
            len(combined.skipped),
            len(top),
        )
        return top
