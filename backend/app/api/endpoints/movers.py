"""
app/api/endpoints/movers.py
───────────────────────────
Cross-asset movers.

Routes
------
GET /api/all-movers   Top 10 movers across stocks, crypto, forex,
                      commodities and indices (cached 2 min).
"""

import logging
from typing import List

from fastapi import APIRouter, Depends, HTTPException

from app.api.dependencies import get_coordinator
from market_engine.coordinator import MarketCoordinator
from schemas.markets import MoverRecord

logger = logging.getLogger(__name__)
router = APIRouter()


@router.get("/all-movers", response_model=List[MoverRecord], summary="Top cross-asset movers")
async def get_all_movers(
    coordinator: MarketCoordinator = Depends(get_coordinator),
) -> List[MoverRecord]:
    """
    Return the biggest movers ranked by absolute percent change.

    Duplicated symbols keep their larger move.  A provider outage only
    shrinks the candidate pool; it never fails the request.

    Returns:
        At most ``MOVERS_LIMIT`` records, largest ``|rawChange|`` first.
    """
    try:
        return await coordinator.all_movers()
    except Exception as exc:
        logger.exception("/api/all-movers failed")
        raise HTTPException(status_code=500, detail="Failed to fetch movers") from exc
