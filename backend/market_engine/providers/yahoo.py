"""
market_engine/providers/yahoo.py
────────────────────────────────
Thin wrapper around ``yfinance``, the ONLY place in the codebase that
calls Yahoo Finance directly.

``yfinance`` is blocking, so every download runs on a small thread pool
and the event loop only awaits the future.  Each adapter instance owns an
:class:`IntervalGate`, so two asset classes hitting Yahoo are paced
independently.
"""

import asyncio
import logging
from concurrent.futures import ThreadPoolExecutor
from functools import partial
from typing import List, Optional

import pandas as pd
import yfinance as yf

from market_engine.providers.base import ProviderError
from market_engine.rate_limit import IntervalGate

logger = logging.getLogger(__name__)

# yfinance is blocking; fetchers call it one symbol at a time.
_executor = ThreadPoolExecutor(max_workers=4, thread_name_prefix="yahoo")


def closes_from_history(df: pd.DataFrame) -> List[float]:
    """
    Extract a clean close series from a ``Ticker.history`` frame.

    Non-numeric, missing and infinite closes are dropped; order is kept
    (oldest → newest).

    Args:
        df: Frame as returned by ``yfinance`` (``Close`` column).

    Returns:
        List of float closes, possibly empty.
    """
    if df is None or df.empty or "Close" not in df.columns:
        return []
    closes = pd.to_numeric(df["Close"], errors="coerce")
    closes = closes.replace([float("inf"), float("-inf")], float("nan")).dropna()
    return [float(value) for value in closes.tolist()]


class YahooChartAdapter:
    """
    Fetch close-price series from Yahoo Finance.

    Args:
        gate:    Pacing gate awaited before every download.
        timeout: Seconds before a download is abandoned.

    Example:
        >>> adapter = YahooChartAdapter(IntervalGate(0.12))
        >>> await adapter.fetch_closes("^GSPC", interval="1d", range_="5d")
        [5012.3, 5020.1, ...]
    """

    def __init__(self, gate: Optional[IntervalGate] = None, timeout: float = 10.0) -> None:
        self._gate = gate or IntervalGate(0)
        self._timeout = timeout

    # ── public API ────────────────────────────────────────────────────────

    async def fetch_closes(
        self, symbol: str, interval: str = "1d", range_: str = "5d"
    ) -> List[float]:
        """
        Download closes for ``symbol`` at ``interval`` granularity over ``range_``.

        Args:
            symbol:   Yahoo ticker (``"^GSPC"``, ``"EURUSD=X"``, ``"BTC-USD"``).
            interval: Bar size (``"5m"``, ``"15m"``, ``"1d"`` …).
            range_:   Look-back period (``"1d"``, ``"5d"``, ``"1mo"`` …).

        Returns:
            Close series, oldest first.

        Raises:
            ProviderError: If the download fails or times out.
        """
        await self._gate.wait()
        loop = asyncio.get_running_loop()
        job = partial(self._download, symbol, interval, range_)
        try:
            df = await asyncio.wait_for(
                loop.run_in_executor(_executor, job), timeout=self._timeout
            )
        except asyncio.TimeoutError as exc:
            raise ProviderError(f"Yahoo timed out for {symbol}") from exc
        closes = closes_from_history(df)
        logger.debug("Yahoo %s %s/%s → %d closes", symbol, interval, range_, len(closes))
        return closes

    # ── private helpers ───────────────────────────────────────────────────

    def _download(self, symbol: str, interval: str, range_: str) -> pd.DataFrame:
        """Blocking download; runs inside the thread pool."""
        try:
            return yf.Ticker(symbol).history(
                interval=interval,
                period=range_,
                timeout=self._timeout,
                auto_adjust=False,
                raise_errors=True,
            )
        except Exception as exc:
            raise ProviderError(f"yfinance fetch failed for {symbol}: {exc}") from exc
