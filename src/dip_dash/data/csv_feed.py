"""CSV-backed bulk feed (e.g. a published spreadsheet)."""

from __future__ import annotations

import logging

import pandas as pd

from ..domain import SymbolRecord
from ..utils import FeedUnavailableError
from .normalization import frame_to_records, normalize_csv_frame
from .providers import FeedLoader

logger = logging.getLogger(__name__)


class CsvFeedLoader(FeedLoader):
    """Reads ``symbol, date, price, high`` rows from a URL or local path."""

    def __init__(self, url: str) -> None:
        self.url = url

    def load_all(self) -> list[SymbolRecord]:
        logger.info("Loading CSV feed from %s", self.url)
        try:
            raw = pd.read_csv(self.url, dtype=str, keep_default_na=False, skipinitialspace=True)
        except Exception as err:  # pragma: no cover - network and parser failures vary by source
            raise FeedUnavailableError(f"CSV feed unavailable: {err}") from err

        if raw.shape[1] < 4:
            raise FeedUnavailableError(f"CSV feed has {raw.shape[1]} columns, expected symbol, date, price, high")

        records = frame_to_records(normalize_csv_frame(raw))
        logger.info("CSV feed returned %d symbols", len(records))
        return records
