"""
market_engine/strength.py
─────────────────────────
Per-currency strength derived from forex pair changes.

A pair ``BASE/QUOTE`` moving ``+p%`` counts ``+p`` for BASE and ``-p`` for
QUOTE.  Each currency's average over the pairs it appears in is then
classified against a ±0.3 band.
"""

from typing import Dict, Iterable, Mapping, Sequence, Tuple

from schemas.markets import ForexQuote, Strength

DEFAULT_CURRENCIES: Tuple[str, ...] = ("USD", "EUR", "GBP", "JPY", "AUD", "CHF", "ZAR")
STRONG_THRESHOLD = 0.3
WEAK_THRESHOLD = -0.3


def strength_scores(
    changes: Mapping[str, float],
    currencies: Sequence[str] = DEFAULT_CURRENCIES,
) -> Dict[str, float]:
    """
    Average signed contribution per currency.

    Args:
        changes:    Pair (``"EUR/USD"``) → percent change.
        currencies: Currencies always reported, even if absent from every
                    pair (they score ``0.0``).

    Returns:
        Currency → average contribution.  Currencies that only appear in
        ``changes`` are appended after the defaults.
    """
    totals: Dict[str, float] = {code: 0.0 for code in currencies}
    counts: Dict[str, int] = {code: 0 for code in currencies}
    for pair, pct in changes.items():
        base, _, quote = pair.partition("/")
        if not base or not quote:
            continue
        for code, signed in ((base, pct), (quote, -pct)):
            totals[code] = totals.get(code, 0.0) + signed
            counts[code] = counts.get(code, 0) + 1
    return {
        code: (totals[code] / counts[code]) if counts[code] else 0.0
        for code in totals
    }


def classify_strength(average: float) -> Strength:
    """``Strong`` at ≥ +0.3, ``Weak`` at ≤ -0.3, ``Neutral`` in between."""
    if average >= STRONG_THRESHOLD:
        return "Strong"
    if average <= WEAK_THRESHOLD:
        return "Weak"
    return "Neutral"


def derive_currency_strength(
    changes: Mapping[str, float],
    currencies: Sequence[str] = DEFAULT_CURRENCIES,
) -> Dict[str, Strength]:
    """
    Classify every currency from pair changes.

    Example:
        >>> derive_currency_strength({"EUR/USD": 1.0, "GBP/USD": -1.0})["USD"]
        'Neutral'
    """
    scores = strength_scores(changes, currencies)
    return {code: classify_strength(avg) for code, avg in scores.items()}


def strength_from_quotes(quotes: Iterable[ForexQuote]) -> Dict[str, Strength]:
    """Classify currencies straight from forex endpoint records."""
    return derive_currency_strength({quote.pair: quote.raw_change for quote in quotes})
