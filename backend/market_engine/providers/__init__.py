"""
market_engine.providers — one adapter per upstream data source.

Public API
----------
    from market_engine.providers import YahooChartAdapter, EodhdClient
"""

from market_engine.providers.base import ProviderError, Quote
from market_engine.providers.eodhd import EodhdClient
from market_engine.providers.finnhub import FinnhubClient
from market_engine.providers.fmp import FmpClient
from market_engine.providers.twelvedata import TwelveDataClient
from market_engine.providers.yahoo import YahooChartAdapter

__all__ = [
    "ProviderError",
    "Quote",
    "EodhdClient",
    "FinnhubClient",
    "FmpClient",
    "TwelveDataClient",
    "YahooChartAdapter",
]
