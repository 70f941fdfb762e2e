"""Utility helpers."""

from .errors import DataRetrievalError, EmptySeriesError, FeedUnavailableError, SymbolNotFoundError
from .logging import get_logger

__all__ = [
    "DataRetrievalError",
    "EmptySeriesError",
    "FeedUnavailableError",
    "SymbolNotFoundError",
    "get_logger",
]
