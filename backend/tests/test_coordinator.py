"""
tests/test_coordinator.py
──────────────────────────
Unit tests for ``MarketCoordinator``: cache reuse and expiry, composite
views and graceful degradation.

Run with::

    cd backend
    pytest tests/test_coordinator.py -v
"""

from datetime import date

import pytest

from market_engine.providers.base import ProviderError


# ── Cache behaviour ───────────────────────────────────────────────────────────


class TestCaching:
    """Tests for per-endpoint TTL reuse."""

    async def test_indices_reused_within_ttl(self, coordinator, series, clock) -> None:
        first = await coordinator.indices()
        calls = len(series.calls)
        clock.advance(59)
        assert await coordinator.indices() == first
        assert len(series.calls) == calls

    async def test_indices_refetched_after_ttl(self, coordinator, series, clock) -> None:
        await coordinator.indices()
        calls = len(series.calls)
        clock.advance(60)
        await coordinator.indices()
        assert len(series.calls) == 2 * calls

    async def test_cached_value_survives_provider_outage(self, coordinator, series, clock) -> None:
        first = await coordinator.crypto()
        series.data.clear()
        clock.advance(30)
        assert await coordinator.crypto() == first

    async def test_all_movers_ttl_is_two_minutes(self, coordinator, screener, clock) -> None:
        await coordinator.all_movers()
        clock.advance(119)
        await coordinator.all_movers()
        assert len(screener.calls) == 2          # one gainers + one losers call
        clock.advance(1)
        await coordinator.all_movers()
        assert len(screener.calls) == 4

    async def test_heatmap_ttl_is_five_minutes(self, coordinator, series, clock) -> None:
        await coordinator.forex_heatmap()
        calls = len(series.calls)
        clock.advance(299)
        await coordinator.forex_heatmap()
        assert len(series.calls) == calls
        clock.advance(1)
        await coordinator.forex_heatmap()
        assert len(series.calls) == 2 * calls

    async def test_regional_stocks_not_cached(self, coordinator, series) -> None:
        await coordinator.jse_stocks()
        await coordinator.jse_stocks()
        assert [c[0] for c in series.calls].count("NPN.JO") == 2


# ── Snapshots and composites ──────────────────────────────────────────────────


class TestViews:
    """Tests for the shape and ordering of coordinator results."""

    async def test_commodities_sorted_by_magnitude(self, coordinator) -> None:
        result = await coordinator.commodities()
        assert [c.name for c in result] == ["Crude Oil", "Gold"]

    async def test_all_movers_ranking(self, coordinator) -> None:
        top = await coordinator.all_movers()
        assert [m.symbol for m in top] == [
            "ACME",
            "Crude Oil",
            "BUST",
            "BTC-USD",
            "ETH-USD",
            "Gold",
            "^GSPC",
            "^J200.JO",
            "USD/ZAR",
            "EUR/USD",
        ]
        assert {m.type for m in top} == {"Stock", "Commodity", "Crypto", "Index", "Forex"}

    async def test_all_movers_survives_source_outages(
        self, coordinator, screener, forex_batch
    ) -> None:
        screener.configured = False
        forex_batch.payload = ProviderError("down")
        top = await coordinator.all_movers()
        assert "ACME" not in {m.symbol for m in top}
        assert "BTC-USD" in {m.symbol for m in top}

    async def test_forex_strength_from_forex_snapshot(self, coordinator) -> None:
        result = await coordinator.forex_strength()
        assert result["EUR"] == "Strong"
        assert result["USD"] == "Strong"   # (-1.0 + 2.0) / 2
        assert result["ZAR"] == "Weak"
        assert result["GBP"] == "Neutral"

    async def test_forex_strength_neutral_when_forex_fails(self, coordinator, sources) -> None:
        async def broken():
            raise RuntimeError("boom")

        sources.forex.fetch = broken
        result = await coordinator.forex_strength()
        assert set(result.values()) == {"Neutral"}

    async def test_sa_markets(self, coordinator) -> None:
        result = await coordinator.sa_markets()
        assert [i.name for i in result.indices] == ["JSE Top 40"]
        assert [fx.pair for fx in result.forex] == ["USD/ZAR"]
        assert [(c.name, c.price_zar) for c in result.commodities] == [
            ("Crude Oil", "R 1,285"),
            ("Gold", "R 36,720"),
        ]
        assert result.next_event.name == "SARB Interest Rate Decision"

    async def test_sa_markets_uses_fallback_rate(self, coordinator, series) -> None:
        del series.data["USDZAR=X"]
        result = await coordinator.sa_markets()
        assert result.forex == []
        gold = next(c for c in result.commodities if c.name == "Gold")
        assert gold.price_zar == "R 37,500"    # 2000 × 18.75

    async def test_us_stocks_requires_key(self, coordinator, quotes) -> None:
        quotes.configured = False
        with pytest.raises(ProviderError, match="EODHD API key not configured"):
            await coordinator.us_stocks()

    async def test_us_stocks_sorted(self, coordinator) -> None:
        assert [s.name for s in await coordinator.us_stocks()] == ["Apple", "Tesla"]


# ── Economic calendar ─────────────────────────────────────────────────────────


class TestEconomicCalendar:
    """Tests for the calendar window and its cache policy."""

    async def test_window_is_thirty_days(self, coordinator, calendar_feed) -> None:
        events = await coordinator.economic_calendar()
        assert calendar_feed.windows == [(date(2026, 3, 2), date(2026, 4, 1))]
        assert [e.event for e in events] == ["CPI YoY"]
        assert events[0].forecast == 3.1

    async def test_result_cached(self, coordinator, calendar_feed, clock) -> None:
        await coordinator.economic_calendar()
        clock.advance(6 * 60 * 60 - 1)
        await coordinator.economic_calendar()
        assert len(calendar_feed.windows) == 1

    async def test_empty_response_not_cached(self, coordinator, calendar_feed) -> None:
        calendar_feed.rows = []
        assert await coordinator.economic_calendar() == []
        await coordinator.economic_calendar()
        assert len(calendar_feed.windows) == 2

    async def test_provider_error_propagates(self, coordinator, calendar_feed) -> None:
        calendar_feed.rows = ProviderError("FMP API key not configured")
        with pytest.raises(ProviderError):
            await coordinator.economic_calendar()
