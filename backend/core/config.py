"""
core/config.py
──────────────
Centralised application settings via ``pydantic-settings``.

All configuration is driven by environment variables (or a ``.env`` file
in the ``backend/`` directory).  Provider API keys are optional: a missing
key makes the affected provider report "no data" instead of failing the
whole process at startup.

Usage
-----
    from core.config import get_settings

    settings = get_settings()
    print(settings.GENERIC_TTL_SECONDS)
"""

from functools import lru_cache
from pathlib import Path
from typing import Dict, List

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

# Resolve the backend/ directory so relative .env paths work from any cwd.
_BACKEND_DIR = Path(__file__).resolve().parent.parent


class Settings(BaseSettings):
    """
    Application settings loaded from environment variables / ``.env`` file.

    Attributes:
        APP_TITLE:            Human-readable API name shown in OpenAPI docs.
        APP_VERSION:          Semantic version string.
        DEBUG:                Enable verbose logging.
        LOG_LEVEL:            Root log level when ``DEBUG`` is off.
        EODHD_API_KEY:        EODHD key (commodity ETFs, US stocks, screener).
        TWELVEDATA_API_KEY:   Twelve Data key (forex movers).
        FINNHUB_API_KEY:      Finnhub key (news).
        FMP_API_KEY:          Financial Modeling Prep key (economic calendar).
        FRONTEND_URL:         Optional deployed frontend origin for CORS.
        HTTP_TIMEOUT_SECONDS: Upper bound for any single outbound call.
    """

    model_config = SettingsConfigDict(
        env_file=str(_BACKEND_DIR / ".env"),
        env_file_encoding="utf-8",
        case_sensitive=True,
        # Extra env vars are ignored — don't raise on unexpected keys.
        extra="ignore",
    )

    # ── API metadata ──────────────────────────────────────────────────────
    APP_TITLE: str = "Market Movers API"
    APP_VERSION: str = "1.0.0"
    APP_DESCRIPTION: str = (
        "Aggregated market snapshots, cross-asset top movers, heatmaps "
        "and the economic calendar."
    )

    # ── Feature flags / logging ───────────────────────────────────────────
    DEBUG: bool = False
    LOG_LEVEL: str = "INFO"

    # ── Provider keys (optional) ──────────────────────────────────────────
    EODHD_API_KEY: str = ""
    TWELVEDATA_API_KEY: str = ""
    FINNHUB_API_KEY: str = ""
    FMP_API_KEY: str = ""

    # ── Outbound HTTP ─────────────────────────────────────────────────────
    HTTP_TIMEOUT_SECONDS: float = Field(default=10.0, gt=0)
    USER_AGENT: str = "MarketMoversBot/1.0"

    # ── Cache TTLs (seconds) ──────────────────────────────────────────────
    GENERIC_TTL_SECONDS: float = 60
    MOVERS_TTL_SECONDS: float = 2 * 60
    HEATMAP_TTL_SECONDS: float = 5 * 60
    CALENDAR_TTL_SECONDS: float = 6 * 60 * 60

    # ── Upstream pacing between sequential calls (seconds) ────────────────
    INDEX_PACING_SECONDS: float = 0.12
    FOREX_PACING_SECONDS: float = 0.10
    CRYPTO_PACING_SECONDS: float = 0.15
    COMMODITY_PACING_SECONDS: float = 0.20
    HEATMAP_PACING_SECONDS: float = 0.10
    JSE_PACING_SECONDS: float = 0.15
    US_STOCK_PACING_SECONDS: float = 0.10

    # ── Aggregation knobs ─────────────────────────────────────────────────
    MOVERS_LIMIT: int = Field(default=10, ge=1)
    STOCK_SCREENER_LIMIT: int = Field(default=6, ge=1)
    CALENDAR_LOOKAHEAD_DAYS: int = Field(default=30, ge=1)
    CALENDAR_MAX_EVENTS: int = Field(default=100, ge=1)

    # ── South Africa composite ────────────────────────────────────────────
    USD_ZAR_FALLBACK_RATE: float = 18.75
    SA_NEXT_EVENT_NAME: str = "SARB Interest Rate Decision"
    SA_NEXT_EVENT_DATE: str = "March 27, 2026"

    # ── CORS ──────────────────────────────────────────────────────────────
    FRONTEND_URL: str = ""

    @property
    def CORS_ORIGINS(self) -> List[str]:
        """
        Build the full CORS allow-list.

        Hard-coded dev origins plus the optional ``FRONTEND_URL`` env var.
        """
        origins: List[str] = [
            "http://localhost:5500",   # static dev server
            "http://127.0.0.1:5500",
            "http://localhost:5173",   # Vite dev server
            "http://127.0.0.1:5173",
        ]
        if self.FRONTEND_URL:
            origins.append(self.FRONTEND_URL)
        return origins

    @property
    def CACHE_TTLS(self) -> Dict[str, float]:
        """Per-endpoint cache lifetimes keyed by cache key."""
        return {
            "indices": self.GENERIC_TTL_SECONDS,
            "forex": self.GENERIC_TTL_SECONDS,
            "crypto": self.GENERIC_TTL_SECONDS,
            "commodities": self.GENERIC_TTL_SECONDS,
            "all-movers": self.MOVERS_TTL_SECONDS,
            "forex-heatmap": self.HEATMAP_TTL_SECONDS,
            "crypto-heatmap": self.HEATMAP_TTL_SECONDS,
            "economic-calendar": self.CALENDAR_TTL_SECONDS,
        }

    @field_validator("LOG_LEVEL")
    @classmethod
    def _normalise_level(cls, v: str) -> str:
        """Accept ``info`` as well as ``INFO``."""
        v = v.strip().upper()
        if v not in {"CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG"}:
            raise ValueError(f"Unknown LOG_LEVEL '{v}'")
        return v


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """
    Return a cached ``Settings`` singleton.

    The instance is created (and the ``.env`` file parsed) only once per
    process lifetime, courtesy of ``functools.lru_cache``.

    Returns:
        Settings: Validated application configuration.
    """
    return Settings()
