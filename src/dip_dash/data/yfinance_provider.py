"""yfinance-backed loaders."""

from __future__ import annotations

import logging
from collections.abc import Iterable

import yfinance as yf
import yfinance.data

from ..domain import SymbolRecord
from ..utils import FeedUnavailableError, SymbolNotFoundError
from .normalization import frame_to_records, normalize_history_frame, normalize_yfinance_frame
from .providers import FeedLoader, SymbolLoader

logger = logging.getLogger(__name__)


def patch_cookie_check() -> None:
    """Bypass yfinance's fc.yahoo.com cookie check on networks that block it."""
    logger.warning("Patching yfinance to skip fc.yahoo.com cookie check")

    def _get_cookie_basic_patched(self, timeout=30):
        return True

    yfinance.data.YfData._get_cookie_basic = _get_cookie_basic_patched


class YFinanceSymbolLoader(SymbolLoader):
    """Loads one symbol's daily close and high via ``Ticker.history``."""

    def __init__(self, lookback: str = "1y", interval: str = "1d") -> None:
        self.lookback = lookback
        self.interval = interval

    def load_one(self, symbol: str) -> SymbolRecord:
        symbol = symbol.strip().upper()
        if not symbol:
            raise SymbolNotFoundError("Empty symbol")

        logger.info("Fetching %s (%s, %s)", symbol, self.lookback, self.interval)
        try:
            raw = yf.Ticker(symbol).history(period=self.lookback, interval=self.interval, auto_adjust=False)
        except Exception as err:  # pragma: no cover - defensive against network issues
            raise FeedUnavailableError(f"yfinance request for {symbol} failed: {err}") from err

        records = frame_to_records(normalize_history_frame(raw, symbol))
        if not records:
            raise SymbolNotFoundError(f"No price data for {symbol}")
        return records[0]


class YFinanceFeedLoader(FeedLoader):
    """Bulk feed downloading a fixed symbol list in one request."""

    def __init__(self, symbols: Iterable[str], lookback: str = "1y") -> None:
        self.symbols = list(dict.fromkeys(symbol.strip().upper() for symbol in symbols if symbol.strip()))
        self.lookback = lookback

    def load_all(self) -> list[SymbolRecord]:
        if not self.symbols:
            return []

        logger.info("Downloading %d symbols (%s)", len(self.symbols), self.lookback)
        try:
            raw = yf.download(
                tickers=" ".join(self.symbols),
                period=self.lookback,
                interval="1d",
                auto_adjust=False,
                group_by="ticker",
                progress=False,
                threads=True,
            )
        except Exception as err:  # pragma: no cover - defensive against network issues
            raise FeedUnavailableError(f"yfinance download failed: {err}") from err

        if isinstance(raw, tuple):
            raw = raw[0]

        records = frame_to_records(normalize_yfinance_frame(raw, self.symbols))
        if not records:
            raise FeedUnavailableError("yfinance returned no usable data")

        missing = set(self.symbols) - {record.symbol for record in records}
        if missing:
            logger.warning("No data returned for: %s", ", ".join(sorted(missing)))
        return records
