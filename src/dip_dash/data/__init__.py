"""Data access layer."""

from .csv_feed import CsvFeedLoader
from .providers import FeedLoader, SymbolLoader
from .yfinance_provider import YFinanceFeedLoader, YFinanceSymbolLoader, patch_cookie_check

__all__ = [
    "CsvFeedLoader",
    "FeedLoader",
    "SymbolLoader",
    "YFinanceFeedLoader",
    "YFinanceSymbolLoader",
    "patch_cookie_check",
]
