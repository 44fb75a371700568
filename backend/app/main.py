"""
app/main.py
────────────
FastAPI application factory.

All business logic lives in ``market_engine/``; the handlers in
``app/api/endpoints/`` only translate coordinator calls into HTTP.
This file wires together middleware, routers, and lifecycle events.

API Layout
----------
GET  /                         Health check
GET  /api/news                 General market news (pass-through)
GET  /api/indices              Index snapshot              (cached 60 s)
GET  /api/forex                Forex snapshot              (cached 60 s)
GET  /api/forex-strength       Currency strength
GET  /api/crypto               Crypto snapshot             (cached 60 s)
GET  /api/commodities          Commodity snapshot          (cached 60 s)
GET  /api/all-movers           Top 10 cross-asset movers   (cached 2 min)
GET  /api/forex-heatmap        Forex heatmap               (cached 5 min)
GET  /api/crypto-heatmap       Crypto heatmap              (cached 5 min)
GET  /api/economic-calendar    Economic calendar           (cached 6 h)
GET  /api/jse-stocks           JSE large caps
GET  /api/us-stocks            US large caps
GET  /api/sa-markets           South Africa overview

Every failure is answered with HTTP 500 and ``{"error": "<message>"}``.

OpenAPI docs
------------
- Swagger UI:  http://localhost:8000/docs
- ReDoc:       http://localhost:8000/redoc
"""

import logging
from contextlib import asynccontextmanager
from typing import AsyncGenerator

import httpx
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from app.api.router import api_router
from core.config import get_settings
from core.logging_config import configure_logging
from market_engine import build_coordinator

logger = logging.getLogger(__name__)

settings = get_settings()
configure_logging(settings)


# ── Lifespan ──────────────────────────────────────────────────────────────────


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """
    Application startup and shutdown logic.

    Startup:  Open the shared outbound HTTP client and build the market
              coordinator (cache + fetchers) on top of it.
    Shutdown: Close the HTTP client.
    """
    logger.info(
        "Starting %s v%s (debug=%s)",
        settings.APP_TITLE,
        settings.APP_VERSION,
        settings.DEBUG,
    )
    async with httpx.AsyncClient(
        timeout=settings.HTTP_TIMEOUT_SECONDS,
        headers={"User-Agent": settings.USER_AGENT},
    ) as http:
        app.state.coordinator = build_coordinator(settings, http)
        yield  # ← application runs here

    logger.info("Shutting down %s", settings.APP_TITLE)


# ── App factory ───────────────────────────────────────────────────────────────

app = FastAPI(
    title=settings.APP_TITLE,
    version=settings.APP_VERSION,
    description=settings.APP_DESCRIPTION,
    docs_url="/docs",
    redoc_url="/redoc",
    lifespan=lifespan,
)

# ── Middleware ────────────────────────────────────────────────────────────────

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# ── Error body ────────────────────────────────────────────────────────────────


@app.exception_handler(StarletteHTTPException)
async def http_error_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    """Render every HTTP error as ``{"error": detail}``."""
    return JSONResponse(status_code=exc.status_code, content={"error": exc.detail})


# ── Routers ───────────────────────────────────────────────────────────────────

app.include_router(api_router, prefix="/api")

# ── Root health-check ─────────────────────────────────────────────────────────


@app.get("/", tags=["health"], summary="Health check")
def health_check() -> dict:
    """
    Lightweight liveness check.

    Returns:
        Status and current API version.
    """
    return {"status": "ok", "version": settings.APP_VERSION}
