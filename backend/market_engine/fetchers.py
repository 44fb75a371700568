"""
market_engine/fetchers.py
─────────────────────────
Asset-class fetchers: one per class, each owning a fixed symbol map.

Workflow (per fetch cycle)
--------------------------
1. Walk the ``display name → provider symbol`` map in order, one call at
   a time (the adapter's gate paces the calls).
2. Turn each response into a percent change; skip the symbol on any
   provider error or unusable price.
3. Return a :class:`BatchResult` with the records and the skip list.

A run where every symbol fails returns an empty batch ("no data right
now") instead of raising.
"""

import logging
from abc import ABC, abstractmethod
from typing import Any, Generic, Mapping, Optional, Protocol, Sequence, TypeVar

from market_engine.changes import is_valid_change, percent_change, series_change
from market_engine.movers import format_mover, format_percent, trend_of
from market_engine.providers.base import ProviderError, Quote, to_float
from market_engine.results import BatchResult
from market_engine.symbols import COMMODITY_SPOT_FACTORS, STOCK_SCREENERS
from schemas.markets import (
    AssetType,
    CommodityQuote,
    CryptoQuote,
    ForexQuote,
    IndexQuote,
    MoverRecord,
    RegionalStockQuote,
)

logger = logging.getLogger(__name__)

R = TypeVar("R")


class InvalidPriceData(ValueError):
    """Provider answered, but the prices cannot yield a change."""


# ── adapter interfaces ────────────────────────────────────────────────────────


class SeriesSource(Protocol):
    async def fetch_closes(
        self, symbol: str, interval: str = "1d", range_: str = "5d"
    ) -> Sequence[float]: ...


class QuoteSource(Protocol):
    async def fetch_quote(self, symbol: str) -> Quote: ...


# ── base classes ──────────────────────────────────────────────────────────────


class AssetClassFetcher(ABC, Generic[R]):
    """
    Sequential per-symbol fetch loop shared by every asset class.

    Subclasses implement :meth:`_load` (one symbol → one record) and set
    ``asset_type`` / ``label``.

    Args:
        symbols: Ordered mapping of display name → provider symbol.
    """

    asset_type: AssetType
    label: str = "asset"

    def __init__(self, symbols: Mapping[str, str]) -> None:
        self.symbols = dict(symbols)

    # ── public API ────────────────────────────────────────────────────────

    async def fetch(self) -> BatchResult[R]:
        """
        Fetch every symbol once, in order.

        Returns:
            Records for the symbols that succeeded plus a skip entry for
            each one that did not.
        """
        batch: BatchResult[R] = BatchResult()
        for name, symbol in self.symbols.items():
            try:
                record = await self._load(name, symbol)
            except (ProviderError, InvalidPriceData) as exc:
                logger.warning("%s skipped %s: %s", self.label, symbol, exc)
                batch.skip(symbol, str(exc))
                continue
            except Exception as exc:
                logger.exception("%s fetch failed for %s", self.label, symbol)
                batch.skip(symbol, f"unexpected error: {exc!r}")
                continue
            batch.add(record)

        logger.info(
            "Loaded %d %s quotes (%d skipped)",
            len(batch.records),
            self.label,
            len(batch.skipped),
        )
        return batch

    async def fetch_movers(self) -> BatchResult[MoverRecord]:
        """Fetch the class and reshape every record as a mover."""
        batch = await self.fetch()
        return batch.map(self.to_mover)

    def to_mover(self, record: Any) -> MoverRecord:
        return format_mover(record.name, record.symbol, record.raw_change, self.asset_type)

    # ── hooks ─────────────────────────────────────────────────────────────

    @abstractmethod
    async def _load(self, name: str, symbol: str) -> R:
        """Fetch one symbol and return its record."""

    @abstractmethod
    def build(self, name: str, symbol: str, price: float, pct: float) -> R:
        """Shape a validated price and change into the class record."""


class YahooSeriesFetcher(AssetClassFetcher[R]):
    """Day-over-day change from the last two daily closes."""

    interval = "1d"
    range_ = "5d"

    def __init__(self, symbols: Mapping[str, str], adapter: SeriesSource) -> None:
        super().__init__(symbols)
        self._adapter = adapter

    async def _load(self, name: str, symbol: str) -> R:
        closes = await self._adapter.fetch_closes(symbol, self.interval, self.range_)
        if len(closes) < 2:
            raise InvalidPriceData(f"insufficient data ({len(closes)} closes)")
        pct = series_change(closes)
        if not is_valid_change(pct):
            raise InvalidPriceData(f"invalid prices {closes[-2]!r} → {closes[-1]!r}")
        return self.build(name, symbol, closes[-1], pct)


class QuoteFetcher(AssetClassFetcher[R]):
    """Change between a real-time close and the previous close."""

    def __init__(self, symbols: Mapping[str, str], client: QuoteSource) -> None:
        super().__init__(symbols)
        self._client = client

    @property
    def configured(self) -> bool:
        """False when the underlying client has no API key."""
        return getattr(self._client, "configured", True)

    async def _load(self, name: str, symbol: str) -> R:
        quote = await self._client.fetch_quote(symbol)
        pct = percent_change(quote.close, quote.previous_close)
        if not is_valid_change(pct):
            raise InvalidPriceData(
                f"invalid data: close={quote.close}, prev={quote.previous_close}"
            )
        return self.build(name, symbol, quote.close, pct)


# ── concrete asset classes ────────────────────────────────────────────────────


class IndexFetcher(YahooSeriesFetcher[IndexQuote]):
    asset_type = "Index"
    label = "index"

    def build(self, name: str, symbol: str, price: float, pct: float) -> IndexQuote:
        return IndexQuote(
            name=name,
            symbol=symbol,
            change=format_percent(pct),
            latest=f"{price:.2f}",
            raw_change=pct,
        )


class ForexFetcher(YahooSeriesFetcher[ForexQuote]):
    asset_type = "Forex"
    label = "forex"

    def build(self, name: str, symbol: str, price: float, pct: float) -> ForexQuote:
        return ForexQuote(
            pair=name,
            name=name,
            change=format_percent(pct),
            trend=trend_of(pct),
            price=price,
            raw_change=pct,
        )

    def to_mover(self, record: ForexQuote) -> MoverRecord:
        # Forex movers are keyed by pair, matching the Twelve Data feed.
        return format_mover(record.pair, record.pair, record.raw_change, self.asset_type)


class CryptoFetcher(YahooSeriesFetcher[CryptoQuote]):
    asset_type = "Crypto"
    label = "crypto"

    def build(self, name: str, symbol: str, price: float, pct: float) -> CryptoQuote:
        return CryptoQuote(
            name=name,
            symbol=symbol,
            price=f"{price:.2f}",
            change=format_percent(pct),
            trend=trend_of(pct),
            raw_change=pct,
        )


class JseStockFetcher(YahooSeriesFetcher[RegionalStockQuote]):
    asset_type = "Stock"
    label = "JSE stock"

    def build(self, name: str, symbol: str, price: float, pct: float) -> RegionalStockQuote:
        return RegionalStockQuote(
            name=name,
            symbol=symbol,
            price=f"R {price:.2f}",
            change=format_percent(pct),
            trend=trend_of(pct),
            raw_change=pct,
            currency="ZAR",
        )


class CommodityFetcher(QuoteFetcher[CommodityQuote]):
    """ETF-backed commodities; the symbol shown is the commodity name."""

    asset_type = "Commodity"
    label = "commodity"

    def build(self, name: str, symbol: str, price: float, pct: float) -> CommodityQuote:
        display_price = price * COMMODITY_SPOT_FACTORS.get(name, 1.0)
        return CommodityQuote(
            name=name,
            symbol=name,
            change=format_percent(pct),
            trend=trend_of(pct),
            price=f"{display_price:.2f}",
            raw_change=pct,
        )


class UsStockFetcher(QuoteFetcher[RegionalStockQuote]):
    asset_type = "Stock"
    label = "US stock"

    def build(self, name: str, symbol: str, price: float, pct: float) -> RegionalStockQuote:
        return RegionalStockQuote(
            name=name,
            symbol=symbol,
            price=f"${price:.2f}",
            change=format_percent(pct),
            trend=trend_of(pct),
            raw_change=pct,
            currency="USD",
        )


# ── mover-only sources ────────────────────────────────────────────────────────


class StockMoversFetcher:
    """
    Top gainers then top losers from the EODHD screener.

    A failed screener side contributes nothing; a missing API key yields
    an empty batch.
    """

    label = "stock movers"

    def __init__(
        self,
        client: Any,
        limit: int = 6,
        screeners: Optional[Sequence[str]] = None,
    ) -> None:
        self._client = client
        self._limit = limit
        self._screeners = list(screeners or STOCK_SCREENERS)

    async def fetch_movers(self) -> BatchResult[MoverRecord]:
        batch: BatchResult[MoverRecord] = BatchResult()
        if not getattr(self._client, "configured", True):
            batch.skip("EODHD", "API key not configured")
            return batch

        for screener in self._screeners:
            try:
                rows = await self._client.fetch_top(screener, self._limit)
            except ProviderError as exc:
                logger.warning("Screener %s failed: %s", screener, exc)
                batch.skip(screener, str(exc))
                continue
            for row in rows:
                code = row.get("code")
                if not code:
                    continue
                pct = to_float(row.get("change_percent", 0))
                if not is_valid_change(pct):
                    batch.skip(code, f"invalid change_percent {row.get('change_percent')!r}")
                    continue
                batch.add(format_mover(row.get("name") or code, code, pct, "Stock"))
        return batch


class ForexMoversFetcher:
    """All forex pairs in one Twelve Data batch request."""

    label = "forex movers"

    def __init__(self, client: Any, pairs: Sequence[str]) -> None:
        self._client = client
        self._pairs = list(pairs)

    async def fetch_movers(self) -> BatchResult[MoverRecord]:
        batch: BatchResult[MoverRecord] = BatchResult()
        try:
            payload = await self._client.fetch_quotes(self._pairs)
        except ProviderError as exc:
            logger.warning("Forex movers request failed: %s", exc)
            batch.skip(",".join(self._pairs), str(exc))
            return batch

        for pair in self._pairs:
            quote = payload.get(pair)
            raw = quote.get("percent_change") if isinstance(quote, dict) else None
            if not raw:
                batch.skip(pair, "no percent_change")
                continue
            pct = to_float(raw)
            if not is_valid_change(pct):
                batch.skip(pair, f"invalid percent_change {raw!r}")
                continue
            batch.add(format_mover(pair, pair, pct, "Forex"))
        return batch
