"""
app/api/endpoints/news.py
─────────────────────────
News pass-through.

Routes
------
GET /api/news   Finnhub general news, uncached and unmodified.
"""

import logging
from typing import Any

from fastapi import APIRouter, Depends, HTTPException

from app.api.dependencies import get_coordinator
from market_engine.coordinator import MarketCoordinator

logger = logging.getLogger(__name__)
router = APIRouter()


@router.get("/news", summary="General market news")
async def get_news(coordinator: MarketCoordinator = Depends(get_coordinator)) -> Any:
    """Return the upstream news feed as-is."""
    try:
        return await coordinator.news()
    except Exception as exc:
        logger.exception("/api/news failed")
        raise HTTPException(status_code=500, detail="Failed to fetch news") from exc
