"""Shared fixtures for the dashboard tests."""

from __future__ import annotations

import sys
from datetime import date
from pathlib import Path

import pytest

SRC = Path(__file__).resolve().parents[1] / "src"
if str(SRC) not in sys.path:
    sys.path.insert(0, str(SRC))

from dip_dash.domain import Sample, SymbolRecord
from dip_dash.utils import FeedUnavailableError, SymbolNotFoundError

D1 = date(2024, 1, 2)
D2 = date(2024, 1, 3)
D3 = date(2024, 1, 4)


def make_record(symbol: str, rows: list[tuple[date, float, float]]) -> SymbolRecord:
    return SymbolRecord.from_samples(symbol, [Sample(d, price, high) for d, price, high in rows])


@pytest.fixture
def scenario_rows() -> list[tuple[date, float, float]]:
    return [(D1, 100.0, 110.0), (D2, 90.0, 105.0), (D3, 95.0, 108.0)]


@pytest.fixture
def scenario_record(scenario_rows) -> SymbolRecord:
    return make_record("ACME", scenario_rows)


@pytest.fixture
def other_record() -> SymbolRecord:
    return make_record("BETA", [(D1, 50.0, 51.0), (D2, 50.5, 51.0), (D3, 50.0, 50.5)])


class FakeFeed:
    def __init__(self, records=None, error: Exception | None = None) -> None:
        self.records = list(records or [])
        self.error = error
        self.calls = 0

    def load_all(self):
        self.calls += 1
        if self.error is not None:
            raise self.error
        return list(self.records)


class FakeSymbolLoader:
    def __init__(self, records=None, error: Exception | None = None) -> None:
        self.records = {record.symbol: record for record in (records or [])}
        self.error = error
        self.requested: list[str] = []

    def load_one(self, symbol: str):
        self.requested.append(symbol)
        if self.error is not None:
            raise self.error
        if symbol not in self.records:
            raise SymbolNotFoundError(f"No price data for {symbol}")
        return self.records[symbol]


@pytest.fixture
def fake_feed(scenario_record, other_record) -> FakeFeed:
    return FakeFeed([scenario_record, other_record])


@pytest.fixture
def failing_feed() -> FakeFeed:
    return FakeFeed(error=FeedUnavailableError("unreachable"))
