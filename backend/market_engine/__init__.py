"""
market_engine — Market data fetching, aggregation and caching layer.

Public API
----------
    from market_engine import MarketCoordinator, build_coordinator
"""

from market_engine.coordinator import MarketCoordinator
from market_engine.factory import build_coordinator

__all__ = ["MarketCoordinator", "build_coordinator"]
