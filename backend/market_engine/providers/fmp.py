"""
market_engine/providers/fmp.py
──────────────────────────────
Financial Modeling Prep client — economic calendar.
"""

import logging
from datetime import date
from typing import Any, Dict, List

import httpx

from market_engine.providers.base import ProviderError, get_json

logger = logging.getLogger(__name__)

_CALENDAR_URL = "https://financialmodelingprep.com/api/v3/economic_calendar"


class FmpClient:
    """Async FMP client bound to one API key."""

    def __init__(self, http: httpx.AsyncClient, api_key: str) -> None:
        self._http = http
        self._api_key = api_key

    async def fetch_economic_calendar(self, start: date, end: date) -> List[Dict[str, Any]]:
        """
        Return raw calendar rows between ``start`` and ``end`` inclusive.

        A body that is not a list yields an empty list.

        Raises:
            ProviderError: Missing key or failed request.
        """
        if not self._api_key:
            raise ProviderError("FMP API key not configured")
        logger.info("Fetching economic calendar %s → %s", start, end)
        payload = await get_json(
            self._http,
            _CALENDAR_URL,
            params={
                "from": start.isoformat(),
                "to": end.isoformat(),
                "apikey": self._api_key,
            },
        )
        if not isinstance(payload, list):
            return []
        return payload
