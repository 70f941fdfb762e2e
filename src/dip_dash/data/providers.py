"""Loader protocols the dashboard consumes."""

from __future__ import annotations

from typing import Protocol

from ..domain import SymbolRecord


class FeedLoader(Protocol):
    """Bulk source used once at startup."""

    def load_all(self) -> list[SymbolRecord]:
        """Return every record in the feed; raise FeedUnavailableError on failure."""
        raise NotImplementedError


class SymbolLoader(Protocol):
    """Source for symbols added by the user."""

    def load_one(self, symbol: str) -> SymbolRecord:
        """Return one record; raise SymbolNotFoundError or FeedUnavailableError."""
        raise NotImplementedError
