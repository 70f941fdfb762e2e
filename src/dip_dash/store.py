"""In-memory store of per-symbol price series."""

from __future__ import annotations

import logging
from collections.abc import Iterable

from .domain import Sample, SymbolRecord

logger = logging.getLogger(__name__)


class SeriesStore:
    """Holds one SymbolRecord per symbol, keyed case-insensitively, in insertion order."""

    def __init__(self) -> None:
        self._records: dict[str, SymbolRecord] = {}

    def upsert(self, symbol: str, series: Iterable[Sample]) -> SymbolRecord:
        """Add or replace a symbol, recomputing current price and 52-week high.

        Raises EmptySeriesError (and leaves the store untouched) when no valid
        samples remain.
        """
        record = SymbolRecord.from_samples(symbol, series)
        replaced = record.symbol in self._records
        self._records[record.symbol] = record
        logger.debug(
            "%s %s: %d samples, current %.2f, 52w high %.2f",
            "Replaced" if replaced else "Added",
            record.symbol,
            len(record.series),
            record.current_price,
            record.high52,
        )
        return record

    def get(self, symbol: str) -> SymbolRecord | None:
        return self._records.get(symbol.strip().upper())

    def all(self) -> list[SymbolRecord]:
        return list(self._records.values())

    def symbols(self) -> list[str]:
        return list(self._records)

    def __contains__(self, symbol: object) -> bool:
        return isinstance(symbol, str) and symbol.strip().upper() in self._records

    def __len__(self) -> int:
        return len(self._records)
