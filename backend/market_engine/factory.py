"""
market_engine/factory.py
────────────────────────
Wire providers, pacing gates and fetchers from settings.

Every fetcher gets its OWN adapter instance and therefore its own
:class:`IntervalGate`: the crypto snapshot and the crypto movers source
pace independently, exactly like two separate sequential loops would.

Usage
-----
    from market_engine.factory import build_coordinator

    async with httpx.AsyncClient() as http:
        coordinator = build_coordinator(get_settings(), http)
        await coordinator.all_movers()
"""

import logging
import time
from typing import Callable

import httpx

from core.cache import CacheService
from core.config import Settings
from market_engine.aggregator import MoversAggregator
from market_engine.coordinator import MarketCoordinator, MarketSources
from market_engine.fetchers import (
    CommodityFetcher,
    CryptoFetcher,
    ForexFetcher,
    ForexMoversFetcher,
    IndexFetcher,
    JseStockFetcher,
    StockMoversFetcher,
    UsStockFetcher,
)
from market_engine.heatmap import HeatmapBuilder
from market_engine.providers import (
    EodhdClient,
    FinnhubClient,
    FmpClient,
    TwelveDataClient,
    YahooChartAdapter,
)
from market_engine.rate_limit import IntervalGate
from market_engine.symbols import (
    COMMODITY_ETFS,
    CRYPTO_HEATMAP_SYMBOLS,
    CRYPTO_MOVER_SYMBOLS,
    CRYPTO_SYMBOLS,
    FOREX_HEATMAP_SYMBOLS,
    FOREX_PAIRS,
    INDEX_SYMBOLS,
    JSE_SYMBOLS,
    US_STOCK_SYMBOLS,
    YAHOO_FOREX_SYMBOLS,
)

logger = logging.getLogger(__name__)


def build_sources(settings: Settings, http: httpx.AsyncClient) -> MarketSources:
    """
    Instantiate every fetch component.

    Args:
        settings: Provides API keys, pacing delays and limits.
        http:     Shared async HTTP client for the JSON providers.

    Returns:
        Fully wired :class:`MarketSources`.
    """
    timeout = settings.HTTP_TIMEOUT_SECONDS

    def yahoo(pacing: float) -> YahooChartAdapter:
        return YahooChartAdapter(IntervalGate(pacing), timeout=timeout)

    def eodhd(pacing: float) -> EodhdClient:
        return EodhdClient(http, settings.EODHD_API_KEY, IntervalGate(pacing))

    movers = MoversAggregator(
        sources=[
            StockMoversFetcher(eodhd(0), limit=settings.STOCK_SCREENER_LIMIT),
            CryptoFetcher(CRYPTO_MOVER_SYMBOLS, yahoo(settings.CRYPTO_PACING_SECONDS)),
            ForexMoversFetcher(
                TwelveDataClient(http, settings.TWELVEDATA_API_KEY), FOREX_PAIRS
            ),
            CommodityFetcher(COMMODITY_ETFS, eodhd(settings.COMMODITY_PACING_SECONDS)),
        ],
        index_source=IndexFetcher(INDEX_SYMBOLS, yahoo(settings.INDEX_PACING_SECONDS)),
        limit=settings.MOVERS_LIMIT,
    )

    return MarketSources(
        indices=IndexFetcher(INDEX_SYMBOLS, yahoo(settings.INDEX_PACING_SECONDS)),
        forex=ForexFetcher(YAHOO_FOREX_SYMBOLS, yahoo(settings.FOREX_PACING_SECONDS)),
        crypto=CryptoFetcher(CRYPTO_SYMBOLS, yahoo(settings.CRYPTO_PACING_SECONDS)),
        commodities=CommodityFetcher(COMMODITY_ETFS, eodhd(settings.COMMODITY_PACING_SECONDS)),
        jse_stocks=JseStockFetcher(JSE_SYMBOLS, yahoo(settings.JSE_PACING_SECONDS)),
        us_stocks=UsStockFetcher(US_STOCK_SYMBOLS, eodhd(settings.US_STOCK_PACING_SECONDS)),
        movers=movers,
        forex_heatmap=HeatmapBuilder(
            FOREX_HEATMAP_SYMBOLS,
            yahoo(settings.HEATMAP_PACING_SECONDS),
            label="forex heatmap",
        ),
        crypto_heatmap=HeatmapBuilder(
            CRYPTO_HEATMAP_SYMBOLS,
            yahoo(settings.HEATMAP_PACING_SECONDS),
            label="crypto heatmap",
        ),
        news=FinnhubClient(http, settings.FINNHUB_API_KEY),
        calendar=FmpClient(http, settings.FMP_API_KEY),
    )


def build_coordinator(
    settings: Settings,
    http: httpx.AsyncClient,
    clock: Callable[[], float] = time.monotonic,
) -> MarketCoordinator:
    """Build the process-wide cache and the coordinator on top of it."""
    cache = CacheService(settings.CACHE_TTLS, clock=clock)
    missing = [
        name
        for name, key in (
            ("EODHD", settings.EODHD_API_KEY),
            ("Twelve Data", settings.TWELVEDATA_API_KEY),
            ("Finnhub", settings.FINNHUB_API_KEY),
            ("FMP", settings.FMP_API_KEY),
        )
        if not key
    ]
    if missing:
        logger.warning("No API key configured for: %s", ", ".join(missing))
    return MarketCoordinator(cache, build_sources(settings, http), settings)
