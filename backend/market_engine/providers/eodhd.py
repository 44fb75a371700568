"""
market_engine/providers/eodhd.py
────────────────────────────────
EODHD client: real-time quotes (commodity ETFs, US equities) and the
top gainers / losers screener.
"""

import logging
from typing import Any, Dict, List, Optional

import httpx

from market_engine.providers.base import ProviderError, Quote, get_json, to_float
from market_engine.rate_limit import IntervalGate

logger = logging.getLogger(__name__)

_BASE_URL = "https://eodhd.com/api"


class EodhdClient:
    """
    Async EODHD client.

    Args:
        http:    Shared ``httpx.AsyncClient``.
        api_key: EODHD token; empty means "not configured".
        gate:    Pacing gate owned by this client instance.
    """

    def __init__(
        self,
        http: httpx.AsyncClient,
        api_key: str,
        gate: Optional[IntervalGate] = None,
    ) -> None:
        self._http = http
        self._api_key = api_key
        self._gate = gate

    @property
    def configured(self) -> bool:
        return bool(self._api_key)

    async def fetch_quote(self, symbol: str) -> Quote:
        """
        Return the real-time ``(close, previousClose)`` for ``symbol``.

        Values that are not numeric come back as ``NaN``; validation is
        left to the change calculator.

        Raises:
            ProviderError: Missing key, failed request or empty body.
        """
        self._require_key()
        payload = await get_json(
            self._http,
            f"{_BASE_URL}/real-time/{symbol}",
            params={"api_token": self._api_key, "fmt": "json"},
            gate=self._gate,
        )
        if not isinstance(payload, dict) or not payload:
            raise ProviderError(f"No data for {symbol}")
        return Quote(
            close=to_float(payload.get("close")),
            previous_close=to_float(payload.get("previousClose")),
        )

    async def fetch_top(self, screener: str, limit: int) -> List[Dict[str, Any]]:
        """
        Return screener rows (``code``, ``name``, ``change_percent`` …).

        A body that is not a list yields an empty list.

        Raises:
            ProviderError: Missing key or failed request.
        """
        self._require_key()
        payload = await get_json(
            self._http,
            f"{_BASE_URL}/top",
            params={
                "api_token": self._api_key,
                "screener": screener,
                "limit": limit,
                "fmt": "json",
            },
            gate=self._gate,
        )
        if not isinstance(payload, list):
            logger.warning("EODHD screener %s returned %s", screener, type(payload).__name__)
            return []
        return [row for row in payload if isinstance(row, dict)]

    def _require_key(self) -> None:
        if not self._api_key:
            raise ProviderError("EODHD API key not configured")
