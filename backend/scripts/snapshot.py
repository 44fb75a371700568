"""
Print one market view as JSON, straight from the providers.

Handy for checking API keys and symbol lists without starting the API:

    cd backend
    python scripts/snapshot.py all-movers
    python scripts/snapshot.py forex-heatmap
"""
import asyncio
import json
import logging
import os
import sys

# Add the parent directory to sys.path so we can import backend modules
sys.path.append(os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

import httpx
from pydantic import BaseModel

from core.config import get_settings
from core.logging_config import configure_logging
from market_engine import build_coordinator

logger = logging.getLogger(__name__)

VIEWS = {
    "indices": "indices",
    "forex": "forex",
    "forex-strength": "forex_strength",
    "crypto": "crypto",
    "commodities": "commodities",
    "all-movers": "all_movers",
    "forex-heatmap": "forex_heatmap",
    "crypto-heatmap": "crypto_heatmap",
    "economic-calendar": "economic_calendar",
    "jse-stocks": "jse_stocks",
    "us-stocks": "us_stocks",
    "sa-markets": "sa_markets",
}


def _plain(value):
    if isinstance(value, BaseModel):
        return value.model_dump(by_alias=True)
    if isinstance(value, list):
        return [_plain(item) for item in value]
    return value


async def snapshot(view: str):
    settings = get_settings()
    async with httpx.AsyncClient(
        timeout=settings.HTTP_TIMEOUT_SECONDS,
        headers={"User-Agent": settings.USER_AGENT},
    ) as http:
        coordinator = build_coordinator(settings, http)
        return await getattr(coordinator, VIEWS[view])()


def main(argv):
    configure_logging(get_settings())
    view = argv[1] if len(argv) > 1 else "all-movers"
    if view not in VIEWS:
        logger.error("Unknown view %r; choose one of: %s", view, ", ".join(VIEWS))
        return 2
    result = asyncio.run(snapshot(view))
    print(json.dumps(_plain(result), indent=2, default=str))
    return 0


if __name__ == "__main__":
    sys.exit(main(sys.argv))
