"""
market_engine/providers/finnhub.py
──────────────────────────────────
Finnhub client — general market news, passed through untouched.
"""

from typing import Any

import httpx

from market_engine.providers.base import ProviderError, get_json

_NEWS_URL = "https://finnhub.io/api/v1/news"


class FinnhubClient:
    """Async Finnhub client bound to one API key."""

    def __init__(self, http: httpx.AsyncClient, api_key: str) -> None:
        self._http = http
        self._api_key = api_key

    async def fetch_news(self, category: str = "general") -> Any:
        """
        Return Finnhub's news feed for ``category`` as decoded JSON.

        Raises:
            ProviderError: Missing key or failed request.
        """
        if not self._api_key:
            raise ProviderError("Finnhub API key not configured")
        return await get_json(
            self._http,
            _NEWS_URL,
            params={"category": category, "token": self._api_key},
        )
