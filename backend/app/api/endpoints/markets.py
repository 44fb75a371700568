"""
app/api/endpoints/markets.py
────────────────────────────
Per-asset-class snapshot endpoints.

Routes
------
GET /api/indices          Major indices, day-over-day change.
GET /api/forex            Forex pairs, day-over-day change.
GET /api/forex-strength   Currency → Strong | Weak | Neutral.
GET /api/crypto           Crypto pairs, day-over-day change.
GET /api/commodities      Commodity ETFs, ranked by |change|.

Snapshots are cached for ``GENERIC_TTL_SECONDS``.  A symbol that fails
upstream is simply missing from the list; only an unexpected error
turns into HTTP 500.
"""

import logging
from typing import Dict, List

from fastapi import APIRouter, Depends, HTTPException

from app.api.dependencies import get_coordinator
from market_engine.coordinator import MarketCoordinator
from schemas.markets import CommodityQuote, CryptoQuote, ForexQuote, IndexQuote, Strength

logger = logging.getLogger(__name__)
router = APIRouter()


@router.get("/indices", response_model=List[IndexQuote], summary="Index snapshot")
async def get_indices(
    coordinator: MarketCoordinator = Depends(get_coordinator),
) -> List[IndexQuote]:
    try:
        return await coordinator.indices()
    except Exception as exc:
        logger.exception("/api/indices failed")
        raise HTTPException(status_code=500, detail="Failed to fetch indices") from exc


@router.get("/forex", response_model=List[ForexQuote], summary="Forex snapshot")
async def get_forex(
    coordinator: MarketCoordinator = Depends(get_coordinator),
) -> List[ForexQuote]:
    try:
        return await coordinator.forex()
    except Exception as exc:
        logger.exception("/api/forex failed")
        raise HTTPException(status_code=500, detail="Failed to fetch forex") from exc


@router.get(
    "/forex-strength",
    response_model=Dict[str, Strength],
    summary="Relative currency strength",
)
async def get_forex_strength(
    coordinator: MarketCoordinator = Depends(get_coordinator),
) -> Dict[str, Strength]:
    """
    Classify each currency from the forex snapshot.

    A pair's change counts for its base currency and against its quote
    currency; the per-currency average is ``Strong`` at ≥ +0.3 %,
    ``Weak`` at ≤ -0.3 %, otherwise ``Neutral``.
    """
    try:
        return await coordinator.forex_strength()
    except Exception as exc:
        logger.exception("/api/forex-strength failed")
        raise HTTPException(status_code=500, detail="Failed to compute strength") from exc


@router.get("/crypto", response_model=List[CryptoQuote], summary="Crypto snapshot")
async def get_crypto(
    coordinator: MarketCoordinator = Depends(get_coordinator),
) -> List[CryptoQuote]:
    try:
        return await coordinator.crypto()
    except Exception as exc:
        logger.exception("/api/crypto failed")
        raise HTTPException(status_code=500, detail="Failed to fetch crypto") from exc


@router.get(
    "/commodities",
    response_model=List[CommodityQuote],
    summary="Commodity snapshot (ETF-based)",
)
async def get_commodities(
    coordinator: MarketCoordinator = Depends(get_coordinator),
) -> List[CommodityQuote]:
    """Gold, silver, platinum and crude, largest movers first."""
    try:
        return await coordinator.commodities()
    except Exception as exc:
        logger.exception("/api/commodities failed")
        raise HTTPException(status_code=500, detail="Failed to fetch commodities") from exc
