"""
market_engine/heatmap.py
────────────────────────
Symbol × timeframe grid of percent changes.

Each timeframe maps to a Yahoo query (bar interval + range) and to a
look-back offset into the returned close series.  The offsets count
samples, not hours: with 5-minute bars, 13 samples back is roughly one
hour; with 15-minute bars, 17 samples back is roughly four hours of
trading; with daily bars, 8 samples back is about one calendar week.
They are approximations; no timestamp arithmetic is done.

Every configured symbol gets a row with all four timeframe keys; a cell
that cannot be computed is ``None``.
"""

import logging
from dataclasses import dataclass
from typing import Dict, Mapping, Optional, Sequence, Tuple

from market_engine.changes import is_valid_change, series_change
from market_engine.fetchers import SeriesSource
from market_engine.providers.base import ProviderError
from schemas.markets import Heatmap

logger = logging.getLogger(__name__)

DEFAULT_OFFSET = 2


@dataclass(frozen=True)
class Timeframe:
    """
    One heatmap column.

    Attributes:
        label:       Column key in the response (``"1h"`` …).
        interval:    Yahoo bar size.
        range_:      Yahoo look-back period.
        deep_offset: Samples back from the end used when the series is
                     long enough; ``None`` means always the default.
    """

    label: str
    interval: str
    range_: str
    deep_offset: Optional[int] = None


TIMEFRAMES: Tuple[Timeframe, ...] = (
    Timeframe("1h", "5m", "1d", deep_offset=13),
    Timeframe("4h", "15m", "5d", deep_offset=17),
    Timeframe("1d", "1d", "5d"),
    Timeframe("1w", "1d", "1mo", deep_offset=8),
)


def lookback_offset(timeframe: Timeframe, length: int) -> Optional[int]:
    """
    Pick the baseline offset (counted from the end) for a series.

    Args:
        timeframe: Column being computed.
        length:    Number of usable closes.

    Returns:
        ``deep_offset`` when the series has at least that many samples,
        otherwise ``DEFAULT_OFFSET``; ``None`` when fewer than two closes.

    Example:
        >>> lookback_offset(TIMEFRAMES[0], 20)
        13
        >>> lookback_offset(TIMEFRAMES[0], 5)
        2
    """
    if length < DEFAULT_OFFSET:
        return None
    if timeframe.deep_offset is not None and length >= timeframe.deep_offset:
        return timeframe.deep_offset
    return DEFAULT_OFFSET


def heatmap_cell(closes: Sequence[float], timeframe: Timeframe) -> Optional[float]:
    """Percent change for one cell, or ``None`` when it cannot be computed."""
    offset = lookback_offset(timeframe, len(closes))
    if offset is None:
        return None
    pct = series_change(closes, offset)
    return pct if is_valid_change(pct) else None


class HeatmapBuilder:
    """
    Build a full heatmap for a fixed symbol set.

    Calls are strictly sequential (symbol by symbol, timeframe by
    timeframe) and paced by the adapter's gate, one call per cell.

    Args:
        symbols:    Ordered mapping of row label → Yahoo symbol.
        adapter:    Close-series source.
        timeframes: Columns to compute (defaults to :data:`TIMEFRAMES`).
        label:      Name used in log lines.
    """

    def __init__(
        self,
        symbols: Mapping[str, str],
        adapter: SeriesSource,
        timeframes: Sequence[Timeframe] = TIMEFRAMES,
        label: str = "heatmap",
    ) -> None:
        self.symbols = dict(symbols)
        self._adapter = adapter
        self._timeframes = tuple(timeframes)
        self.label = label

    async def build(self) -> Heatmap:
        """
        Compute every (symbol, timeframe) cell.

        Returns:
            ``{row_label: {timeframe_label: percent | None}}`` with every
            row and every column present.
        """
        grid: Heatmap = {}
        for row_label, symbol in self.symbols.items():
            grid[row_label] = await self._build_row(symbol)
            logger.debug("%s row %s: %s", self.label, row_label, grid[row_label])

        filled = sum(cell is not None for row in grid.values() for cell in row.values())
        logger.info(
            "Built %s: %d rows, %d/%d cells filled",
            self.label,
            len(grid),
            filled,
            len(grid) * len(self._timeframes),
        )
        return grid

    async def _build_row(self, symbol: str) -> Dict[str, Optional[float]]:
        row: Dict[str, Optional[float]] = {}
        for timeframe in self._timeframes:
            try:
                closes = await self._adapter.fetch_closes(
                    symbol, timeframe.interval, timeframe.range_
                )
            except ProviderError as exc:
                logger.warning("%s error %s (%s): %s", self.label, symbol, timeframe.label, exc)
                row[timeframe.label] = None
                continue
            except Exception:
                logger.exception("%s failed for %s (%s)", self.label, symbol, timeframe.label)
                row[timeframe.label] = None
                continue
            row[timeframe.label] = heatmap_cell(closes, timeframe)
        return row
