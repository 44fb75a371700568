"""
Pydantic schemas for response serialization.

Separate from the engine (data layer) and routes (HTTP layer).
"""

from schemas.markets import (
    CommodityQuote,
    CryptoQuote,
    EconomicEvent,
    ErrorResponse,
    ForexQuote,
    IndexQuote,
    MoverRecord,
    RegionalStockQuote,
    SaMarketsResponse,
)

__all__ = [
    "CommodityQuote",
    "CryptoQuote",
    "EconomicEvent",
    "ErrorResponse",
    "ForexQuote",
    "IndexQuote",
    "MoverRecord",
    "RegionalStockQuote",
    "SaMarketsResponse",
]
