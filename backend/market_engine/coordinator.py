"""
market_engine/coordinator.py
────────────────────────────
Cache-aware coordinator: the SINGLE entry point for all market data.

Workflow (per request)
----------------------
1. Check the :class:`~core.cache.CacheService` entry for the endpoint.
2. On a miss, run the relevant fetcher / aggregator / heatmap builder.
3. Store the complete result (never a partial one) and return it.

Composite endpoints (``forex-strength``, ``sa-markets``) call the other
coordinator methods in-process, so they share the same cache entries.
"""

import logging
from dataclasses import dataclass
from datetime import date, datetime, timedelta, timezone
from typing import Any, Awaitable, Callable, Dict, List, TypeVar

from core.cache import CacheService
from core.config import Settings
from market_engine.aggregator import MoversAggregator
from market_engine.calendar import normalize_calendar
from market_engine.fetchers import (
    CommodityFetcher,
    CryptoFetcher,
    ForexFetcher,
    IndexFetcher,
    JseStockFetcher,
    UsStockFetcher,
)
from market_engine.heatmap import HeatmapBuilder
from market_engine.movers import by_magnitude
from market_engine.providers.base import ProviderError
from market_engine.strength import strength_from_quotes
from schemas.markets import (
    CommodityQuote,
    CryptoQuote,
    EconomicEvent,
    ForexQuote,
    Heatmap,
    IndexQuote,
    MoverRecord,
    RegionalStockQuote,
    SaCommodity,
    SaMarketsResponse,
    SaNextEvent,
    Strength,
)

logger = logging.getLogger(__name__)

T = TypeVar("T")


class CacheKey:
    """Cache keys, one per cached endpoint."""

    INDICES = "indices"
    FOREX = "forex"
    CRYPTO = "crypto"
    COMMODITIES = "commodities"
    ALL_MOVERS = "all-movers"
    FOREX_HEATMAP = "forex-heatmap"
    CRYPTO_HEATMAP = "crypto-heatmap"
    ECONOMIC_CALENDAR = "economic-calendar"


@dataclass
class MarketSources:
    """Every fetch component the coordinator drives."""

    indices: IndexFetcher
    forex: ForexFetcher
    crypto: CryptoFetcher
    commodities: CommodityFetcher
    jse_stocks: JseStockFetcher
    us_stocks: UsStockFetcher
    movers: MoversAggregator
    forex_heatmap: HeatmapBuilder
    crypto_heatmap: HeatmapBuilder
    news: Any
    calendar: Any


def _utc_today() -> date:
    return datetime.now(timezone.utc).date()


class MarketCoordinator:
    """
    Serve each endpoint from cache or from a fresh fetch cycle.

    Args:
        cache:    Shared cache service (one per process).
        sources:  Fetch components, built by :func:`market_engine.factory.build_sources`.
        settings: Application settings.
        today:    Date provider for the calendar window; injectable for tests.
    """

    def __init__(
        self,
        cache: CacheService,
        sources: MarketSources,
        settings: Settings,
        today: Callable[[], date] = _utc_today,
    ) -> None:
        self._cache = cache
        self._sources = sources
        self._settings = settings
        self._today = today

    # ── pass-through ──────────────────────────────────────────────────────

    async def news(self) -> Any:
        """General news feed, uncached and untransformed."""
        return await self._sources.news.fetch_news("general")

    # ── per-class snapshots ───────────────────────────────────────────────

    async def indices(self) -> List[IndexQuote]:
        return await self._cache.get_or_fetch(CacheKey.INDICES, self._fetch_indices)

    async def forex(self) -> List[ForexQuote]:
        return await self._cache.get_or_fetch(CacheKey.FOREX, self._fetch_forex)

    async def crypto(self) -> List[CryptoQuote]:
        return await self._cache.get_or_fetch(CacheKey.CRYPTO, self._fetch_crypto)

    async def commodities(self) -> List[CommodityQuote]:
        return await self._cache.get_or_fetch(CacheKey.COMMODITIES, self._fetch_commodities)

    async def forex_strength(self) -> Dict[str, Strength]:
        """
        Classify currencies from the (cached) forex snapshot.

        A failing forex fetch degrades to "every currency Neutral".
        """
        try:
            quotes = await self.forex()
        except Exception:
            logger.exception("Forex snapshot unavailable for strength")
            quotes = []
        return strength_from_quotes(quotes)

    # ── aggregated views ──────────────────────────────────────────────────

    async def all_movers(self) -> List[MoverRecord]:
        return await self._cache.get_or_fetch(CacheKey.ALL_MOVERS, self._sources.movers.build)

    async def forex_heatmap(self) -> Heatmap:
        return await self._cache.get_or_fetch(
            CacheKey.FOREX_HEATMAP, self._sources.forex_heatmap.build
        )

    async def crypto_heatmap(self) -> Heatmap:
        return await self._cache.get_or_fetch(
            CacheKey.CRYPTO_HEATMAP, self._sources.crypto_heatmap.build
        )

    async def economic_calendar(self) -> List[EconomicEvent]:
        """
        Upcoming events for the next ``CALENDAR_LOOKAHEAD_DAYS`` days.

        An empty provider response is returned as-is and NOT cached, so
        the next request tries again.

        Raises:
            ProviderError: If the calendar provider fails.
        """
        cached = self._cache.get(CacheKey.ECONOMIC_CALENDAR)
        if cached is not None:
            logger.debug("Using cached calendar data")
            return cached

        today = self._today()
        end = today + timedelta(days=self._settings.CALENDAR_LOOKAHEAD_DAYS)
        raw = await self._sources.calendar.fetch_economic_calendar(today, end)
        if not raw:
            logger.warning("No economic events returned for %s → %s", today, end)
            return []

        events = normalize_calendar(raw, today, limit=self._settings.CALENDAR_MAX_EVENTS)
        self._cache.set(CacheKey.ECONOMIC_CALENDAR, events)
        return events

    # ── regional equities (uncached) ──────────────────────────────────────

    async def jse_stocks(self) -> List[RegionalStockQuote]:
        batch = await self._sources.jse_stocks.fetch()
        return by_magnitude(batch.records)

    async def us_stocks(self) -> List[RegionalStockQuote]:
        """
        Raises:
            ProviderError: If the EODHD key is not configured.
        """
        if not self._sources.us_stocks.configured:
            raise ProviderError("EODHD API key not configured")
        batch = await self._sources.us_stocks.fetch()
        return by_magnitude(batch.records)

    async def sa_markets(self) -> SaMarketsResponse:
        """
        South-Africa view composed from the indices, forex and commodity
        snapshots.

        Each part degrades to an empty list on failure.  Commodity prices
        are converted with the live USD/ZAR rate, or the configured
        fallback rate when that pair is missing.
        """
        indices = await self._or_empty(self.indices, "indices")
        forex = await self._or_empty(self.forex, "forex")
        commodities = await self._or_empty(self.commodities, "commodities")

        jse_indices = [i for i in indices if "JSE" in i.name or ".JO" in i.symbol]
        zar_forex = [fx for fx in forex if "ZAR" in fx.pair]
        usd_zar = next(
            (fx.price for fx in zar_forex if fx.pair == "USD/ZAR"),
            self._settings.USD_ZAR_FALLBACK_RATE,
        )
        commodities_zar = [
            SaCommodity(
                name=c.name,
                price_zar=f"R {float(c.price) * usd_zar:,.0f}",
                change=c.change,
                raw_change=c.raw_change,
            )
            for c in commodities
        ]
        return SaMarketsResponse(
            indices=jse_indices,
            forex=zar_forex,
            commodities=commodities_zar,
            next_event=SaNextEvent(
                name=self._settings.SA_NEXT_EVENT_NAME,
                date=self._settings.SA_NEXT_EVENT_DATE,
            ),
        )

    # ── private helpers ───────────────────────────────────────────────────

    async def _fetch_indices(self) -> List[IndexQuote]:
        return (await self._sources.indices.fetch()).records

    async def _fetch_forex(self) -> List[ForexQuote]:
        return (await self._sources.forex.fetch()).records

    async def _fetch_crypto(self) -> List[CryptoQuote]:
        return (await self._sources.crypto.fetch()).records

    async def _fetch_commodities(self) -> List[CommodityQuote]:
        return by_magnitude((await self._sources.commodities.fetch()).records)

    @staticmethod
    async def _or_empty(fetch: Callable[[], Awaitable[List[T]]], what: str) -> List[T]:
        try:
            return await fetch()
        except Exception:
            logger.exception("SA markets: %s unavailable", what)
            return []
