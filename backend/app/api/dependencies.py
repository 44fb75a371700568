"""
app/api/dependencies.py
───────────────────────
FastAPI dependency functions shared across all endpoints.

Usage
-----
    from app.api.dependencies import get_coordinator

    @router.get("/foo")
    async def my_route(coordinator = Depends(get_coordinator)):
        ...
"""

from fastapi import Request

from market_engine.coordinator import MarketCoordinator


def get_coordinator(request: Request) -> MarketCoordinator:
    """
    FastAPI dependency that returns the process-wide coordinator.

    The instance is built once in ``app.main.lifespan`` and stored on
    ``app.state``; tests override this dependency instead.

    Returns:
        The shared :class:`MarketCoordinator`.
    """
    return request.app.state.coordinator
