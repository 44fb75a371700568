"""
app/api/router.py
─────────────────
Aggregate every endpoint router; mounted under ``/api`` by ``app.main``.
"""

from fastapi import APIRouter

from app.api.endpoints import calendar, heatmaps, markets, movers, news, regional
from schemas.markets import ErrorResponse

api_router = APIRouter(
    responses={500: {"model": ErrorResponse, "description": "Upstream failure"}},
)
api_router.include_router(news.router, tags=["news"])
api_router.include_router(markets.router, tags=["markets"])
api_router.include_router(movers.router, tags=["movers"])
api_router.include_router(heatmaps.router, tags=["heatmaps"])
api_router.include_router(calendar.router, tags=["calendar"])
api_router.include_router(regional.router, tags=["regional"])
