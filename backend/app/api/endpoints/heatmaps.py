"""
app/api/endpoints/heatmaps.py
─────────────────────────────
Multi-timeframe heatmaps.

Routes
------
GET /api/forex-heatmap    Forex pairs + gold/silver/crude × {1h,4h,1d,1w}.
GET /api/crypto-heatmap   Crypto pairs × {1h,4h,1d,1w}.

Cells are percent changes, or ``null`` when the series is too short.
Timeframes are sample-count approximations of the wall-clock window.
"""

import logging

from fastapi import APIRouter, Depends, HTTPException

from app.api.dependencies import get_coordinator
from market_engine.coordinator import MarketCoordinator
from schemas.markets import Heatmap

logger = logging.getLogger(__name__)
router = APIRouter()


@router.get("/forex-heatmap", response_model=Heatmap, summary="Forex heatmap")
async def get_forex_heatmap(
    coordinator: MarketCoordinator = Depends(get_coordinator),
) -> Heatmap:
    try:
        return await coordinator.forex_heatmap()
    except Exception as exc:
        logger.exception("/api/forex-heatmap failed")
        raise HTTPException(status_code=500, detail="Failed to load heatmap") from exc


@router.get("/crypto-heatmap", response_model=Heatmap, summary="Crypto heatmap")
async def get_crypto_heatmap(
    coordinator: MarketCoordinator = Depends(get_coordinator),
) -> Heatmap:
    try:
        return await coordinator.crypto_heatmap()
    except Exception as exc:
        logger.exception("/api/crypto-heatmap failed")
        raise HTTPException(status_code=500, detail="Failed to load crypto heatmap") from exc
