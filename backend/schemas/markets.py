"""
schemas/markets.py
──────────────────
Pydantic schemas for every market endpoint.

Field names are snake_case in Python; the JSON wire format keeps the
camelCase keys the dashboard consumes (``rawChange``, ``priceZAR``,
``nextEvent``).  FastAPI serialises ``response_model`` by alias, and
``populate_by_name`` lets the engine build records with Python names.

  GET /api/all-movers          → ``List[MoverRecord]``
  GET /api/indices             → ``List[IndexQuote]``
  GET /api/forex               → ``List[ForexQuote]``
  GET /api/crypto              → ``List[CryptoQuote]``
  GET /api/commodities         → ``List[CommodityQuote]``
  GET /api/jse-stocks|us-stocks→ ``List[RegionalStockQuote]``
  GET /api/economic-calendar   → ``List[EconomicEvent]``
  GET /api/sa-markets          → ``SaMarketsResponse``
"""

from typing import Any, Dict, List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field

AssetType = Literal["Stock", "Crypto", "Forex", "Commodity", "Index"]
Trend = Literal["positive", "negative"]
Strength = Literal["Strong", "Weak", "Neutral"]
Importance = Literal["High", "Medium", "Low"]

# label → timeframe → percent (None when not computable)
Heatmap = Dict[str, Dict[str, Optional[float]]]


# ── Shared base ───────────────────────────────────────────────────────────────


class _WireModel(BaseModel):
    """Accept Python field names as well as the camelCase aliases."""

    model_config = ConfigDict(populate_by_name=True)


# ── Movers ────────────────────────────────────────────────────────────────────


class MoverRecord(_WireModel):
    """
    One entry of the cross-asset movers feed.

    Attributes:
        name:        Display name (``"Bitcoin"``, ``"EUR/USD"`` …).
        symbol:      Deduplication key across asset classes.
        performance: Signed two-decimal string, e.g. ``"+1.23%"``.
        raw_change:  Unrounded percent change used for ranking.
        type:        Asset class tag.
        trend:       ``positive`` iff ``raw_change >= 0``.
    """

    name: str
    symbol: str
    performance: str
    raw_change: float = Field(alias="rawChange")
    type: AssetType
    trend: Trend


# ── Per-class snapshots ───────────────────────────────────────────────────────


class IndexQuote(_WireModel):
    name: str
    symbol: str
    change: str
    latest: str
    raw_change: float = Field(alias="rawChange")


class ForexQuote(_WireModel):
    pair: str
    name: str
    change: str
    trend: Trend
    price: float
    raw_change: float = Field(alias="rawChange")


class CryptoQuote(_WireModel):
    name: str
    symbol: str
    price: str
    change: str
    trend: Trend
    raw_change: float = Field(alias="rawChange")


class CommodityQuote(_WireModel):
    """Commodity snapshot; ``price`` is the ETF close scaled toward spot."""

    name: str
    symbol: str
    change: str
    trend: Trend
    price: str
    raw_change: float = Field(alias="rawChange")


class RegionalStockQuote(_WireModel):
    """Equity snapshot with a currency-prefixed price (``"R 123.45"``, ``"$12.00"``)."""

    name: str
    symbol: str
    price: str
    change: str
    trend: Trend
    raw_change: float = Field(alias="rawChange")
    currency: str


# ── Economic calendar ─────────────────────────────────────────────────────────


class EconomicEvent(BaseModel):
    """
    One upcoming macro release.

    ``actual`` / ``forecast`` / ``previous`` are passed through as the
    provider sends them (numbers, strings or ``None``).
    """

    date: str
    time: str
    country: str
    event: str
    actual: Optional[Any] = None
    forecast: Optional[Any] = None
    previous: Optional[Any] = None
    importance: Importance
    currency: str


# ── South Africa composite ────────────────────────────────────────────────────


class SaCommodity(_WireModel):
    name: str
    price_zar: str = Field(alias="priceZAR")
    change: str
    raw_change: float = Field(alias="rawChange")


class SaNextEvent(BaseModel):
    name: str
    date: str


class SaMarketsResponse(_WireModel):
    indices: List[IndexQuote]
    forex: List[ForexQuote]
    commodities: List[SaCommodity]
    next_event: SaNextEvent = Field(alias="nextEvent")


# ── Errors ────────────────────────────────────────────────────────────────────


class ErrorResponse(BaseModel):
    """Body of every HTTP 500 returned by the API."""

    error: str
