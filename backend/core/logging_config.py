"""
core/logging_config.py
──────────────────────
One-shot logging setup for the API process.

Every module logs through ``logging.getLogger(__name__)``; this file only
decides the root level and format once, at import time of ``app.main``.
"""

import logging

from core.config import Settings

_FORMAT = "%(asctime)s %(levelname)-8s %(name)s: %(message)s"


def configure_logging(settings: Settings) -> None:
    """
    Configure the root logger from settings.

    ``DEBUG=true`` wins over ``LOG_LEVEL``.  Noisy third-party loggers
    (``httpx``, ``yfinance``) are capped at WARNING so per-request lines
    don't drown the fetch summaries.

    Args:
        settings: Validated application settings.
    """
    level = logging.DEBUG if settings.DEBUG else getattr(logging, settings.LOG_LEVEL)
    logging.basicConfig(level=level, format=_FORMAT)
    for noisy in ("httpx", "httpcore", "yfinance"):
        logging.getLogger(noisy).setLevel(max(level, logging.WARNING))
