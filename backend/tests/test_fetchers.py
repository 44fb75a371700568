"""
tests/test_fetchers.py
───────────────────────
Unit tests for the asset-class fetchers and the mover-only sources.

A bad symbol must be skipped, never fail the batch.  The fake adapters
come from ``conftest.py`` and are re-programmed per test.

Run with::

    cd backend
    pytest tests/test_fetchers.py -v
"""

import math

import pytest

from market_engine.fetchers import (
    AssetClassFetcher,
    CommodityFetcher,
    CryptoFetcher,
    ForexFetcher,
    ForexMoversFetcher,
    IndexFetcher,
    JseStockFetcher,
    StockMoversFetcher,
    UsStockFetcher,
    YahooSeriesFetcher,
)
from market_engine.providers.base import ProviderError, Quote


# ── Base class ────────────────────────────────────────────────────────────────


class TestAssetClassFetcherBase:
    """Tests for the abstract hooks every asset class must supply."""

    def test_base_cannot_be_instantiated(self) -> None:
        with pytest.raises(TypeError):
            AssetClassFetcher({"S&P 500": "^GSPC"})

    def test_subclass_without_build_is_rejected(self, series) -> None:
        class Unfinished(YahooSeriesFetcher):
            pass

        with pytest.raises(TypeError, match="build"):
            Unfinished({"S&P 500": "^GSPC"}, series)

    def test_concrete_fetcher_instantiates(self, series) -> None:
        assert isinstance(IndexFetcher({"S&P 500": "^GSPC"}, series), AssetClassFetcher)


# ── Yahoo series fetchers ─────────────────────────────────────────────────────


class TestSeriesFetchers:
    """Tests for fetchers built on daily close series."""

    async def test_index_quote_shape(self, series) -> None:
        batch = await IndexFetcher({"S&P 500": "^GSPC"}, series).fetch()
        (quote,) = batch.records
        assert quote.name == "S&P 500"
        assert quote.symbol == "^GSPC"
        assert quote.latest == "5050.00"
        assert quote.change == "+1.00%"
        assert quote.raw_change == pytest.approx(1.0)
        assert series.calls == [("^GSPC", "1d", "5d")]

    async def test_symbols_fetched_in_order(self, series) -> None:
        await CryptoFetcher({"BTC": "BTC-USD", "ETH": "ETH-USD"}, series).fetch()
        assert [call[0] for call in series.calls] == ["BTC-USD", "ETH-USD"]

    async def test_provider_error_skips_symbol(self, series) -> None:
        series.data["BAD"] = ProviderError("503 from query1.finance.yahoo.com")
        batch = await CryptoFetcher({"Bad": "BAD", "BTC": "BTC-USD"}, series).fetch()
        assert [r.symbol for r in batch.records] == ["BTC-USD"]
        assert batch.skipped[0].symbol == "BAD"
        assert "503" in batch.skipped[0].reason

    async def test_unexpected_error_skips_symbol(self, series) -> None:
        series.data["BAD"] = RuntimeError("parser broke")
        batch = await CryptoFetcher({"Bad": "BAD", "ETH": "ETH-USD"}, series).fetch()
        assert [r.symbol for r in batch.records] == ["ETH-USD"]
        assert len(batch.skipped) == 1

    @pytest.mark.parametrize(
        "closes",
        [
            [],
            [100.0],
            [0.0, 5.0],
        ],
    )
    async def test_unusable_series_skipped(self, series, closes) -> None:
        series.data["ODD"] = closes
        batch = await IndexFetcher({"Odd": "ODD"}, series).fetch()
        assert batch.records == []
        assert batch.skipped[0].symbol == "ODD"

    async def test_every_symbol_failing_returns_empty_batch(self, series) -> None:
        batch = await IndexFetcher({"A": "MISSING-A", "B": "MISSING-B"}, series).fetch()
        assert len(batch) == 0
        assert [s.symbol for s in batch.skipped] == ["MISSING-A", "MISSING-B"]

    async def test_forex_quote_and_mover_keyed_by_pair(self, series) -> None:
        fetcher = ForexFetcher({"EUR/USD": "EURUSD=X"}, series)
        movers = await fetcher.fetch_movers()
        (mover,) = movers.records
        assert mover.symbol == "EUR/USD"
        assert mover.type == "Forex"

        series.calls.clear()
        (quote,) = (await fetcher.fetch()).records
        assert quote.pair == quote.name == "EUR/USD"
        assert quote.price == pytest.approx(1.111)
        assert quote.trend == "positive"

    async def test_crypto_price_string(self, series) -> None:
        (quote,) = (await CryptoFetcher({"ETH": "ETH-USD"}, series).fetch()).records
        assert quote.price == "2910.00"
        assert quote.change == "-3.00%"
        assert quote.trend == "negative"

    async def test_jse_stock_priced_in_rand(self, series) -> None:
        (quote,) = (await JseStockFetcher({"Sasol": "SOL.JO"}, series).fetch()).records
        assert quote.price == "R 141.00"
        assert quote.currency == "ZAR"
        assert quote.raw_change == pytest.approx(-6.0)


# ── Real-time quote fetchers ──────────────────────────────────────────────────


class TestQuoteFetchers:
    """Tests for fetchers built on ``(close, previous_close)`` quotes."""

    async def test_commodity_uses_display_name_and_spot_factor(self, quotes) -> None:
        (quote,) = (await CommodityFetcher({"Gold": "GLD.US"}, quotes).fetch()).records
        assert quote.symbol == "Gold"
        assert quote.price == "2000.00"
        assert quote.raw_change == pytest.approx(2.0408163)

    async def test_crude_has_no_spot_factor(self, quotes) -> None:
        (quote,) = (await CommodityFetcher({"Crude Oil": "USO.US"}, quotes).fetch()).records
        assert quote.price == "70.00"

    async def test_commodity_mover_symbol_is_name(self, quotes) -> None:
        movers = await CommodityFetcher({"Gold": "GLD.US"}, quotes).fetch_movers()
        assert movers.records[0].symbol == "Gold"
        assert movers.records[0].type == "Commodity"

    @pytest.mark.parametrize(
        "quote",
        [
            Quote(close=10.0, previous_close=0.0),
            Quote(close=math.nan, previous_close=10.0),
        ],
    )
    async def test_invalid_quote_skipped(self, quotes, quote) -> None:
        quotes.data["ZZZ.US"] = quote
        batch = await UsStockFetcher({"Zed": "ZZZ.US", "Apple": "AAPL.US"}, quotes).fetch()
        assert [r.symbol for r in batch.records] == ["AAPL.US"]
        assert batch.skipped[0].symbol == "ZZZ.US"

    async def test_us_stock_priced_in_dollars(self, quotes) -> None:
        (quote,) = (await UsStockFetcher({"Apple": "AAPL.US"}, quotes).fetch()).records
        assert quote.price == "$190.00"
        assert quote.currency == "USD"
        assert quote.change == "-5.00%"

    def test_configured_reflects_client(self, quotes) -> None:
        quotes.configured = False
        assert not UsStockFetcher({"Apple": "AAPL.US"}, quotes).configured


# ── Mover-only sources ────────────────────────────────────────────────────────


class TestStockMoversFetcher:
    """Tests for the EODHD gainers/losers screener source."""

    async def test_gainers_then_losers(self, screener) -> None:
        batch = await StockMoversFetcher(screener, limit=6).fetch_movers()
        assert [r.symbol for r in batch.records] == ["ACME", "BUST"]
        assert batch.records[1].raw_change == pytest.approx(-7.25)
        assert screener.calls == [("most_gainer_stocks", 6), ("most_loser_stocks", 6)]

    async def test_failed_side_contributes_nothing(self, screener) -> None:
        screener.rows["most_gainer_stocks"] = ProviderError("timeout")
        batch = await StockMoversFetcher(screener).fetch_movers()
        assert [r.symbol for r in batch.records] == ["BUST"]

    async def test_missing_key_yields_empty(self, screener) -> None:
        screener.configured = False
        batch = await StockMoversFetcher(screener).fetch_movers()
        assert batch.records == []
        assert screener.calls == []

    async def test_rows_without_code_or_change_ignored(self, screener) -> None:
        screener.rows["most_gainer_stocks"] = [
            {"name": "No Code", "change_percent": 50},
            {"code": "NAN", "change_percent": "n/a"},
            {"code": "ZERO"},
        ]
        screener.rows["most_loser_stocks"] = []
        batch = await StockMoversFetcher(screener).fetch_movers()
        assert [r.symbol for r in batch.records] == ["ZERO"]
        assert batch.records[0].performance == "+0.00%"


class TestForexMoversFetcher:
    """Tests for the Twelve Data batch forex source."""

    async def test_pairs_from_batch(self, forex_batch) -> None:
        batch = await ForexMoversFetcher(forex_batch, ["EUR/USD", "USD/ZAR"]).fetch_movers()
        assert [(r.symbol, r.performance) for r in batch.records] == [
            ("EUR/USD", "+0.50%"),
            ("USD/ZAR", "-0.75%"),
        ]
        assert forex_batch.calls == 1

    async def test_missing_percent_change_skipped(self, forex_batch) -> None:
        forex_batch.payload = {"EUR/USD": {"percent_change": "0.1"}, "USD/ZAR": {"code": 429}}
        batch = await ForexMoversFetcher(forex_batch, ["EUR/USD", "USD/ZAR", "GBP/USD"]).fetch_movers()
        assert [r.symbol for r in batch.records] == ["EUR/USD"]
        assert {s.symbol for s in batch.skipped} == {"USD/ZAR", "GBP/USD"}

    async def test_failed_request_yields_empty(self, forex_batch) -> None:
        forex_batch.payload = ProviderError("Twelve Data API key not configured")
        batch = await ForexMoversFetcher(forex_batch, ["EUR/USD"]).fetch_movers()
        assert batch.records == []
