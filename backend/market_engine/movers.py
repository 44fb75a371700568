"""
market_engine/movers.py
───────────────────────
Mover formatting, deduplication and ranking.

The raw percent is kept on every record; the signed two-decimal string is
display-only and never used for comparisons.
"""

from typing import Dict, Iterable, List, TypeVar

from schemas.markets import AssetType, MoverRecord, Trend

T = TypeVar("T")


def format_percent(pct: float) -> str:
    """
    Signed, two-decimal, ``%``-suffixed display string.

    Example:
        >>> format_percent(0)
        '+0.00%'
        >>> format_percent(-3.456)
        '-3.46%'
    """
    return f"{'+' if pct >= 0 else ''}{pct:.2f}%"


def trend_of(pct: float) -> Trend:
    """``positive`` for a change ≥ 0, ``negative`` otherwise."""
    return "positive" if pct >= 0 else "negative"


def format_mover(name: str, symbol: str, pct: float, asset_type: AssetType) -> MoverRecord:
    """Build the canonical mover record for one symbol."""
    return MoverRecord(
        name=name,
        symbol=symbol,
        performance=format_percent(pct),
        raw_change=pct,
        type=asset_type,
        trend=trend_of(pct),
    )


def by_magnitude(records: Iterable[T]) -> List[T]:
    """Return ``records`` ordered by ``|raw_change|`` descending (stable)."""
    return sorted(records, key=lambda r: abs(r.raw_change), reverse=True)


def dedupe_by_symbol(records: Iterable[MoverRecord]) -> List[MoverRecord]:
    """
    Keep one record per symbol: the one with the larger ``|raw_change|``.

    On equal magnitude the record seen first is kept.  Output order follows
    first appearance of each symbol.
    """
    kept: Dict[str, MoverRecord] = {}
    for record in records:
        current = kept.get(record.symbol)
        if current is None or abs(record.raw_change) > abs(current.raw_change):
            kept[record.symbol] = record
    return list(kept.values())


def rank_movers(records: Iterable[MoverRecord], limit: int) -> List[MoverRecord]:
    """Sort by ``|raw_change|`` descending and keep the first ``limit``."""
    return by_magnitude(records)[:limit]
