"""
market_engine/providers/twelvedata.py
─────────────────────────────────────
Twelve Data client — batch forex quotes in a single request.
"""

from typing import Any, Dict, Optional, Sequence

import httpx

from market_engine.providers.base import ProviderError, get_json
from market_engine.rate_limit import IntervalGate

_QUOTE_URL = "https://api.twelvedata.com/quote"


class TwelveDataClient:
    """Async Twelve Data client bound to one API key."""

    def __init__(
        self,
        http: httpx.AsyncClient,
        api_key: str,
        gate: Optional[IntervalGate] = None,
    ) -> None:
        self._http = http
        self._api_key = api_key
        self._gate = gate

    async def fetch_quotes(self, pairs: Sequence[str]) -> Dict[str, Any]:
        """
        Fetch quotes for several pairs at once.

        Args:
            pairs: Pair symbols such as ``"EUR/USD"``.

        Returns:
            Mapping of pair → raw quote object (``percent_change`` …).

        Raises:
            ProviderError: Missing key, failed request or a non-object body.
        """
        if not self._api_key:
            raise ProviderError("Twelve Data API key not configured")
        payload = await get_json(
            self._http,
            _QUOTE_URL,
            params={"symbol": ",".join(pairs), "apikey": self._api_key},
            gate=self._gate,
        )
        if not isinstance(payload, dict):
            raise ProviderError("Twelve Data returned a non-object body")
        return payload
