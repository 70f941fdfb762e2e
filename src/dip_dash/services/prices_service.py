"""Service helpers that wrap loader calls in the dashboard's error taxonomy."""

from __future__ import annotations

from ..data.providers import FeedLoader, SymbolLoader
from ..domain import SymbolRecord
from ..utils import DataRetrievalError, FeedUnavailableError


def fetch_all(loader: FeedLoader) -> list[SymbolRecord]:
    """Fetch every record from a bulk feed."""
    try:
        return list(loader.load_all())
    except DataRetrievalError:
        raise
    except Exception as err:
        raise FeedUnavailableError(f"Failed to load feed: {err}") from err


def fetch_one(loader: SymbolLoader, symbol: str) -> SymbolRecord:
    """Fetch a single symbol's record."""
    try:
        return loader.load_one(symbol)
    except DataRetrievalError:
        raise
    except Exception as err:
        raise FeedUnavailableError(f"Failed to load {symbol}: {err}") from err
