"""
app/api/endpoints/calendar.py
─────────────────────────────
Economic calendar.

Routes
------
GET /api/economic-calendar   Next 30 days of major-economy releases,
                             earliest first, at most 100 (cached 6 h).
"""

import logging
from typing import List

from fastapi import APIRouter, Depends, HTTPException

from app.api.dependencies import get_coordinator
from market_engine.coordinator import MarketCoordinator
from schemas.markets import EconomicEvent

logger = logging.getLogger(__name__)
router = APIRouter()


@router.get(
    "/economic-calendar",
    response_model=List[EconomicEvent],
    summary="Upcoming economic events",
)
async def get_economic_calendar(
    coordinator: MarketCoordinator = Depends(get_coordinator),
) -> List[EconomicEvent]:
    """
    Return upcoming events with an importance of High, Medium or Low.

    Importance comes from the provider's impact rating when present,
    otherwise from keywords in the event title.
    """
    try:
        return await coordinator.economic_calendar()
    except Exception as exc:
        logger.exception("/api/economic-calendar failed")
        raise HTTPException(
            status_code=500, detail="Failed to fetch economic calendar"
        ) from exc
