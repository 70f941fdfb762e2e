"""Tests for the cached loaders used by the Streamlit page."""

from __future__ import annotations

import pytest

import main
from dip_dash import DashboardSettings
from dip_dash.utils import SymbolNotFoundError

from conftest import D1, D2, make_record


@pytest.fixture(autouse=True)
def clear_caches():
    main.load_feed_cached.clear()
    main.load_symbol_cached.clear()
    yield
    main.load_feed_cached.clear()
    main.load_symbol_cached.clear()


class CountingSymbolLoader:
    calls: list[tuple[str, str]] = []

    def __init__(self, lookback: str = "1y") -> None:
        self.lookback = lookback

    def load_one(self, symbol: str):
        self.calls.append((symbol, self.lookback))
        if symbol == "NOPE":
            raise SymbolNotFoundError(symbol)
        return make_record(symbol, [(D1, 1.0, 2.0), (D2, 1.5, 2.0)])


@pytest.fixture
def counting_loader(monkeypatch: pytest.MonkeyPatch) -> type[CountingSymbolLoader]:
    monkeypatch.setattr(CountingSymbolLoader, "calls", [])
    monkeypatch.setattr(main, "YFinanceSymbolLoader", CountingSymbolLoader)
    return CountingSymbolLoader


def test_symbol_fetch_is_shared_between_sessions(counting_loader) -> None:
    first = main.CachedSymbolLoader("1y").load_one(" nvda ")
    second = main.CachedSymbolLoader("1y").load_one("NVDA")

    assert counting_loader.calls == [("NVDA", "1y")]
    assert first == second

    main.CachedSymbolLoader("6mo").load_one("NVDA")
    assert counting_loader.calls[-1] == ("NVDA", "6mo")


def test_symbol_failures_are_not_cached(counting_loader) -> None:
    loader = main.CachedSymbolLoader("1y")
    for _ in range(2):
        with pytest.raises(SymbolNotFoundError):
            loader.load_one("NOPE")

    assert len(counting_loader.calls) == 2


def test_feed_is_read_once_per_settings(tmp_path) -> None:
    path = tmp_path / "feed.csv"
    path.write_text("Symbol,Date,Price,High\nACME,2024-01-02,10,11\n", encoding="utf-8")
    settings = DashboardSettings(feed_url=str(path))

    (first,) = main.CachedFeed(settings).load_all()
    path.write_text("Symbol,Date,Price,High\nACME,2024-01-02,20,21\n", encoding="utf-8")
    (cached,) = main.CachedFeed(settings).load_all()

    assert first.current_price == cached.current_price == 10.0

    main.load_feed_cached.clear()
    (fresh,) = main.CachedFeed(settings).load_all()
    assert fresh.current_price == 20.0
