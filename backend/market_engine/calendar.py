"""
market_engine/calendar.py
─────────────────────────
Normalise the FMP economic calendar into :class:`EconomicEvent` rows.

Steps: drop incomplete or past events → assign importance → keep major
economies only → sort by time → cap.

Importance comes from the provider's ``impact`` field when it is one of
high / medium / low; otherwise it is inferred from keywords in the event
title, defaulting to ``Low``.
"""

import logging
from datetime import date
from typing import Any, Dict, Iterable, List, Optional

import pandas as pd

from schemas.markets import EconomicEvent, Importance

logger = logging.getLogger(__name__)

MAX_EVENTS = 100

HIGH_IMPACT_KEYWORDS = (
    "gdp", "interest rate", "nfp", "non-farm", "payroll", "cpi",
    "unemployment", "inflation", "fed", "fomc", "central bank",
    "rate decision", "ppi", "retail sales",
)
MEDIUM_IMPACT_KEYWORDS = (
    "pmi", "trade balance", "consumer confidence", "manufacturing",
    "industrial production", "sentiment",
)

MAJOR_COUNTRIES = (
    "US", "GB", "UK", "EU", "JP", "CN", "CA", "AU", "NZ", "CH", "ZA",
    "DE", "FR", "IT", "ES", "BR", "MX", "IN",
    "United States", "United Kingdom", "Euro Area", "Germany",
    "France", "Japan", "China", "Canada", "Australia", "South Africa",
)


def classify_importance(impact: Optional[str], title: str) -> Importance:
    """
    Importance from the provider impact, else from title keywords.

    Example:
        >>> classify_importance(None, "Non-Farm Payrolls")
        'High'
        >>> classify_importance("medium", "Anything")
        'Medium'
    """
    level = str(impact or "").strip().lower()
    if level in ("high", "medium", "low"):
        return level.capitalize()
    name = title.lower()
    if any(keyword in name for keyword in HIGH_IMPACT_KEYWORDS):
        return "High"
    if any(keyword in name for keyword in MEDIUM_IMPACT_KEYWORDS):
        return "Medium"
    return "Low"


def is_major_country(country: str) -> bool:
    """Two-way, case-insensitive substring match against :data:`MAJOR_COUNTRIES`."""
    upper = country.upper()
    return any(code.upper() in upper or upper in code.upper() for code in MAJOR_COUNTRIES)


def normalize_calendar(
    raw_events: Iterable[Dict[str, Any]],
    today: date,
    limit: int = MAX_EVENTS,
) -> List[EconomicEvent]:
    """
    Turn raw FMP rows into sorted, filtered, capped events.

    Args:
        raw_events: Rows as returned by FMP (``event``, ``country``,
                    ``date``, ``impact``, ``actual``, ``estimate`` …).
        today:      Events before this date's midnight (UTC) are dropped.
        limit:      Maximum number of events returned.

    Returns:
        Events ordered by timestamp, earliest first.
    """
    rows = [
        row for row in raw_events
        if isinstance(row, dict) and row.get("event") and row.get("country") and row.get("date")
    ]
    if not rows:
        return []

    # The frame only orders rows; values are read back from the untouched dicts.
    frame = pd.DataFrame(
        {
            "country": [str(row["country"]) for row in rows],
            "when": pd.to_datetime(
                pd.Series([row["date"] for row in rows], dtype=object),
                errors="coerce",
                utc=True,
                format="mixed",
            ),
        }
    )
    cutoff = pd.Timestamp(today).tz_localize("UTC")
    frame = frame[frame["when"].notna() & (frame["when"] >= cutoff)]
    frame = frame[frame["country"].map(is_major_country)]
    frame = frame.sort_values("when", kind="stable").head(limit)

    events = [_to_event(rows[i], when) for i, when in frame["when"].items()]
    logger.info("Normalised %d economic events (from %d raw)", len(events), len(rows))
    return events


def _to_event(row: Dict[str, Any], when: pd.Timestamp) -> EconomicEvent:
    country = str(row["country"])
    title = str(row["event"])
    return EconomicEvent(
        date=when.strftime("%Y-%m-%d"),
        time=when.strftime("%H:%M"),
        country=country,
        event=title,
        actual=row.get("actual"),
        forecast=row.get("estimate"),
        previous=row.get("previous"),
        importance=classify_importance(row.get("impact"), title),
        currency=row.get("currency") or country,
    )

