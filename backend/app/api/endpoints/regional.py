"""
app/api/endpoints/regional.py
─────────────────────────────
Regional equity snapshots and the South Africa composite.

Routes
------
GET /api/jse-stocks   15 JSE large caps, priced in rand.
GET /api/us-stocks    15 US large caps, priced in dollars.
GET /api/sa-markets   JSE indices, ZAR pairs, commodities in rand and
                      the next SARB event.
"""

import logging
from typing import List

from fastapi import APIRouter, Depends, HTTPException

from app.api.dependencies import get_coordinator
from market_engine.coordinator import MarketCoordinator
from market_engine.providers.base import ProviderError
from schemas.markets import RegionalStockQuote, SaMarketsResponse

logger = logging.getLogger(__name__)
router = APIRouter()


@router.get("/jse-stocks", response_model=List[RegionalStockQuote], summary="JSE stocks")
async def get_jse_stocks(
    coordinator: MarketCoordinator = Depends(get_coordinator),
) -> List[RegionalStockQuote]:
    try:
        return await coordinator.jse_stocks()
    except Exception as exc:
        logger.exception("/api/jse-stocks failed")
        raise HTTPException(status_code=500, detail="Failed to fetch JSE stocks") from exc


@router.get("/us-stocks", response_model=List[RegionalStockQuote], summary="US stocks")
async def get_us_stocks(
    coordinator: MarketCoordinator = Depends(get_coordinator),
) -> List[RegionalStockQuote]:
    """
    Raises:
        HTTPException 500: EODHD key missing, or an unexpected failure.
    """
    try:
        return await coordinator.us_stocks()
    except ProviderError as exc:
        logger.error("/api/us-stocks unavailable: %s", exc)
        raise HTTPException(status_code=500, detail=str(exc)) from exc
    except Exception as exc:
        logger.exception("/api/us-stocks failed")
        raise HTTPException(status_code=500, detail="Failed to fetch US stocks") from exc


@router.get("/sa-markets", response_model=SaMarketsResponse, summary="South Africa overview")
async def get_sa_markets(
    coordinator: MarketCoordinator = Depends(get_coordinator),
) -> SaMarketsResponse:
    try:
        return await coordinator.sa_markets()
    except Exception as exc:
        logger.exception("/api/sa-markets failed")
        raise HTTPException(
            status_code=500, detail="Failed to fetch SA markets data"
        ) from exc
