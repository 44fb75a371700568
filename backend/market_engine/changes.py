"""
market_engine/changes.py
────────────────────────
Percent-change arithmetic shared by every fetcher and the heatmap.

Nothing here raises: an impossible change comes back as ``NaN`` and
callers skip the symbol (see :func:`is_valid_change`).  Values are never
rounded here; rounding happens only when a display string is built, so
ranking compares unrounded numbers.
"""

import math
from numbers import Real
from typing import Sequence

INVALID = math.nan


def percent_change(current: float, previous: float) -> float:
    """
    Return ``(current - previous) / previous * 100``.

    Args:
        current:  Latest price.
        previous: Baseline price.

    Returns:
        Percent change, or ``NaN`` when ``previous`` is zero, either input
        is not a finite number, or the result is not finite.

    Example:
        >>> percent_change(110.0, 100.0)
        10.0
        >>> percent_change(1.0, 0.0)
        nan
    """
    if not _finite(current) or not _finite(previous) or previous == 0:
        return INVALID
    pct = (current - previous) / previous * 100
    return pct if math.isfinite(pct) else INVALID


def is_valid_change(value: float) -> bool:
    """True when ``value`` is a usable (finite) percent change."""
    return _finite(value)


def series_change(closes: Sequence[float], offset: int = 2) -> float:
    """
    Percent change of the last close against ``closes[-offset]``.

    ``offset=2`` compares with the second-to-last sample.  Too-short
    series yield ``NaN``.
    """
    if offset < 2 or len(closes) < offset:
        return INVALID
    return percent_change(closes[-1], closes[-offset])


def _finite(value: object) -> bool:
    return isinstance(value, Real) and not isinstance(value, bool) and math.isfinite(value)
