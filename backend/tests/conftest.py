"""
tests/conftest.py
──────────────────
Shared pytest fixtures for the backend test suite.

Fixtures
--------
clock
    ``ManualClock`` driving cache expiry, so TTL tests never sleep.

series / quotes / screener / forex_batch / news_feed / calendar_feed
    In-memory stand-ins for the provider adapters.  Each one records the
    calls it receives and can be re-programmed per test.

coordinator
    ``MarketCoordinator`` wired to the fakes above with a small, fixed
    symbol universe.

app_client
    ``httpx.AsyncClient`` wired to the FastAPI app with the coordinator
    dependency overridden, so tests never hit a real provider.

Usage
-----
    async def test_health(app_client):
        resp = await app_client.get("/")
        assert resp.status_code == 200
"""

from datetime import date
from typing import Any, AsyncGenerator, Dict, List, Mapping, Optional, Sequence, Tuple

import pytest
from httpx import ASGITransport, AsyncClient

from app.api.dependencies import get_coordinator
from app.main import app
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
from market_engine.providers.base import ProviderError, Quote

TODAY = date(2026, 3, 2)


# ── Clock ─────────────────────────────────────────────────────────────────────


class ManualClock:
    """Monotonic clock that only moves when told to."""

    def __init__(self, start: float = 1_000.0) -> None:
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


# ── Fake provider adapters ────────────────────────────────────────────────────


class FakeSeries:
    """
    Close-series source.

    ``data[symbol]`` is a list of closes, an exception to raise, or a
    dict keyed by bar interval (for heatmaps).  Unknown symbols raise
    ``ProviderError``.
    """

    def __init__(self, data: Optional[Mapping[str, Any]] = None) -> None:
        self.data: Dict[str, Any] = dict(data or {})
        self.calls: List[Tuple[str, str, str]] = []

    async def fetch_closes(
        self, symbol: str, interval: str = "1d", range_: str = "5d"
    ) -> Sequence[float]:
        self.calls.append((symbol, interval, range_))
        value = self.data.get(symbol)
        if isinstance(value, dict):
            value = value.get(interval)
        if value is None:
            raise ProviderError(f"no data for {symbol}")
        if isinstance(value, Exception):
            raise value
        return list(value)


class FakeQuotes:
    """Real-time quote source; ``data[symbol]`` is a ``Quote`` or an exception."""

    def __init__(self, data: Optional[Mapping[str, Any]] = None, configured: bool = True) -> None:
        self.data: Dict[str, Any] = dict(data or {})
        self.configured = configured
        self.calls: List[str] = []

    async def fetch_quote(self, symbol: str) -> Quote:
        self.calls.append(symbol)
        value = self.data.get(symbol)
        if value is None:
            raise ProviderError(f"No data for {symbol}")
        if isinstance(value, Exception):
            raise value
        return value


class FakeScreener:
    """EODHD screener stand-in; ``rows[screener]`` is a list or an exception."""

    def __init__(self, rows: Optional[Mapping[str, Any]] = None, configured: bool = True) -> None:
        self.rows: Dict[str, Any] = dict(rows or {})
        self.configured = configured
        self.calls: List[Tuple[str, int]] = []

    async def fetch_top(self, screener: str, limit: int) -> List[Dict[str, Any]]:
        self.calls.append((screener, limit))
        value = self.rows.get(screener, [])
        if isinstance(value, Exception):
            raise value
        return list(value)[:limit]


class FakeForexBatch:
    """Twelve Data stand-in returning one payload (or raising)."""

    def __init__(self, payload: Any = None) -> None:
        self.payload = payload if payload is not None else {}
        self.calls = 0

    async def fetch_quotes(self, pairs: Sequence[str]) -> Dict[str, Any]:
        self.calls += 1
        if isinstance(self.payload, Exception):
            raise self.payload
        return self.payload


class FakeNews:
    def __init__(self, payload: Any = None) -> None:
        self.payload = payload if payload is not None else []
        self.categories: List[str] = []

    async def fetch_news(self, category: str = "general") -> Any:
        self.categories.append(category)
        if isinstance(self.payload, Exception):
            raise self.payload
        return self.payload


class FakeCalendar:
    def __init__(self, rows: Any = None) -> None:
        self.rows = rows if rows is not None else []
        self.windows: List[Tuple[date, date]] = []

    async def fetch_economic_calendar(self, start: date, end: date) -> List[Dict[str, Any]]:
        self.windows.append((start, end))
        if isinstance(self.rows, Exception):
            raise self.rows
        return list(self.rows)


# ── Symbol universe used by the coordinator fixture ───────────────────────────

INDICES = {"S&P 500": "^GSPC", "JSE Top 40": "^J200.JO"}
FOREX = {"EUR/USD": "EURUSD=X", "USD/ZAR": "USDZAR=X"}
CRYPTO = {"BTC": "BTC-USD", "ETH": "ETH-USD"}
COMMODITIES = {"Gold": "GLD.US", "Crude Oil": "USO.US"}
JSE = {"Naspers": "NPN.JO", "Sasol": "SOL.JO"}
US = {"Apple": "AAPL.US", "Tesla": "TSLA.US"}
FX_HEATMAP = {"EUR/USD": "EURUSD=X"}
CRYPTO_HEATMAP = {"BTC": "BTC-USD"}


@pytest.fixture
def settings() -> Settings:
    return Settings(_env_file=None)


@pytest.fixture
def clock() -> ManualClock:
    return ManualClock()


@pytest.fixture
def series() -> FakeSeries:
    """Daily closes for every Yahoo symbol in the test universe."""
    return FakeSeries(
        {
            "^GSPC": [5000.0, 5050.0],          # +1.00 %
            "^J200.JO": [80000.0, 79200.0],     # -1.00 %
            "EURUSD=X": [1.10, 1.111],          # +1.00 %
            "USDZAR=X": [18.0, 18.36],          # +2.00 %
            "BTC-USD": [60000.0, 63000.0],      # +5.00 %
            "ETH-USD": [3000.0, 2910.0],        # -3.00 %
            "NPN.JO": [3000.0, 3030.0],         # +1.00 %
            "SOL.JO": [150.0, 141.0],           # -6.00 %
        }
    )


@pytest.fixture
def quotes() -> FakeQuotes:
    return FakeQuotes(
        {
            "GLD.US": Quote(close=200.0, previous_close=196.0),    # +2.04 %
            "USO.US": Quote(close=70.0, previous_close=77.0),      # -9.09 %
            "AAPL.US": Quote(close=190.0, previous_close=200.0),   # -5.00 %
            "TSLA.US": Quote(close=202.0, previous_close=200.0),   # +1.00 %
        }
    )


@pytest.fixture
def screener() -> FakeScreener:
    return FakeScreener(
        {
            "most_gainer_stocks": [
                {"code": "ACME", "name": "Acme Corp", "change_percent": 12.5},
            ],
            "most_loser_stocks": [
                {"code": "BUST", "name": "Bust Inc", "change_percent": "-7.25"},
            ],
        }
    )


@pytest.fixture
def forex_batch() -> FakeForexBatch:
    return FakeForexBatch(
        {
            "EUR/USD": {"percent_change": "0.50"},
            "USD/ZAR": {"percent_change": "-0.75"},
        }
    )


@pytest.fixture
def news_feed() -> FakeNews:
    return FakeNews([{"headline": "Markets rally", "id": 1}])


@pytest.fixture
def calendar_feed() -> FakeCalendar:
    return FakeCalendar(
        [
            {"event": "CPI YoY", "country": "US", "date": "2026-03-10 12:30:00", "estimate": 3.1},
            {"event": "Minor Index", "country": "Atlantis", "date": "2026-03-05 08:00:00"},
        ]
    )


@pytest.fixture
def sources(
    series: FakeSeries,
    quotes: FakeQuotes,
    screener: FakeScreener,
    forex_batch: FakeForexBatch,
    news_feed: FakeNews,
    calendar_feed: FakeCalendar,
) -> MarketSources:
    movers = MoversAggregator(
        sources=[
            StockMoversFetcher(screener, limit=6),
            CryptoFetcher(CRYPTO, series),
            ForexMoversFetcher(forex_batch, list(FOREX)),
            CommodityFetcher(COMMODITIES, quotes),
        ],
        index_source=IndexFetcher(INDICES, series),
        limit=10,
    )
    return MarketSources(
        indices=IndexFetcher(INDICES, series),
        forex=ForexFetcher(FOREX, series),
        crypto=CryptoFetcher(CRYPTO, series),
        commodities=CommodityFetcher(COMMODITIES, quotes),
        jse_stocks=JseStockFetcher(JSE, series),
        us_stocks=UsStockFetcher(US, quotes),
        movers=movers,
        forex_heatmap=HeatmapBuilder(FX_HEATMAP, series, label="forex heatmap"),
        crypto_heatmap=HeatmapBuilder(CRYPTO_HEATMAP, series, label="crypto heatmap"),
        news=news_feed,
        calendar=calendar_feed,
    )


@pytest.fixture
def coordinator(
    sources: MarketSources, settings: Settings, clock: ManualClock
) -> MarketCoordinator:
    cache = CacheService(settings.CACHE_TTLS, clock=clock)
    return MarketCoordinator(cache, sources, settings, today=lambda: TODAY)


# ── Test client ───────────────────────────────────────────────────────────────


@pytest.fixture
async def app_client(coordinator: MarketCoordinator) -> AsyncGenerator[AsyncClient, None]:
    """
    Async HTTPX client with the coordinator dependency overridden.

    Startup lifespan is skipped, so no outbound HTTP client is created.
    """
    app.dependency_overrides[get_coordinator] = lambda: coordinator

    async with AsyncClient(
        transport=ASGITransport(app=app),
        base_url="http://test",
    ) as client:
        yield client

    app.dependency_overrides.clear()
