"""
market_engine/results.py
────────────────────────
Per-symbol outcome of a fetch cycle.

Fetchers never raise for a single bad symbol; they record a
:class:`Skipped` entry instead and keep going.  A :class:`BatchResult`
carries both the good records and the structured skip list so callers
can log (or expose) why a symbol is missing from a response.
"""

from dataclasses import dataclass, field
from typing import Callable, Generic, List, TypeVar

T = TypeVar("T")
U = TypeVar("U")


@dataclass(frozen=True)
class Skipped:
    """A symbol that produced no record this cycle, and why."""

    symbol: str
    reason: str


@dataclass
class BatchResult(Generic[T]):
    """Records produced by one fetch cycle plus the symbols that were skipped."""

    records: List[T] = field(default_factory=list)
    skipped: List[Skipped] = field(default_factory=list)

    def __len__(self) -> int:
        return len(self.records)

    def add(self, record: T) -> None:
        self.records.append(record)

    def skip(self, symbol: str, reason: str) -> None:
        self.skipped.append(Skipped(symbol, reason))

    def map(self, fn: Callable[[T], U]) -> "BatchResult[U]":
        """Transform every record, keeping the skip list."""
        return BatchResult([fn(record) for record in self.records], list(self.skipped))

    def extend(self, other: "BatchResult[T]") -> None:
        self.records.extend(other.records)
        self.skipped.extend(other.skipped)
