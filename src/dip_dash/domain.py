from __future__ import annotations

"""Domain models and configuration types."""

import math
import os
from collections.abc import Iterable
from dataclasses import dataclass, field
from datetime import date

from .utils.errors import EmptySeriesError

DEFAULT_THRESHOLD_PERCENT = 20.0
DEFAULT_SYMBOLS = ["AAPL", "MSFT", "SPY"]

VisibleRange = tuple[date, date]


@dataclass(frozen=True, slots=True)
class Sample:
    date: date
    price: float
    high: float

    def is_valid(self) -> bool:
        return math.isfinite(self.price) and math.isfinite(self.high) and self.high >= 0


Series = tuple[Sample, ...]


@dataclass(frozen=True, slots=True)
class SymbolRecord:
    symbol: str
    series: Series
    current_price: float
    high52: float

    @classmethod
    def from_samples(cls, symbol: str, samples: Iterable[Sample]) -> SymbolRecord:
        """Build a record from raw samples, dropping invalid ones.

        Samples are stable-sorted by date so ties keep their source order.
        """
        valid = [sample for sample in samples if sample.is_valid()]
        if not valid:
            raise EmptySeriesError(f"No valid samples for {symbol.upper()}")
        series = tuple(sorted(valid, key=lambda sample: sample.date))
        return cls(
            symbol=symbol.strip().upper(),
            series=series,
            current_price=series[-1].price,
            high52=max(sample.high for sample in series),
        )


@dataclass(slots=True)
class DashboardState:
    active_symbol: str | None = None
    threshold_percent: float = DEFAULT_THRESHOLD_PERCENT
    visible_range: VisibleRange | None = None


@dataclass(slots=True)
class DashboardSettings:
    feed_url: str = ""
    symbols: list[str] = field(default_factory=lambda: list(DEFAULT_SYMBOLS))
    lookback: str = "1y"
    threshold_percent: float = DEFAULT_THRESHOLD_PERCENT
    chart_width: int = 800
    skip_cookie_check: bool = False

    @classmethod
    def from_env(cls) -> DashboardSettings:
        # Local import keeps domain free of analytics at module load.
        from .analytics.threshold import parse_threshold

        raw_symbols = os.getenv("DIP_DASH_SYMBOLS", "")
        symbols = [part.strip().upper() for part in raw_symbols.replace(";", ",").split(",")]
        symbols = list(dict.fromkeys(part for part in symbols if part)) or list(DEFAULT_SYMBOLS)

        try:
            chart_width = int(os.getenv("DIP_DASH_CHART_WIDTH", "800"))
        except ValueError:
            chart_width = 800

        return cls(
            feed_url=os.getenv("DIP_DASH_FEED_URL", "").strip(),
            symbols=symbols,
            lookback=os.getenv("DIP_DASH_LOOKBACK", "1y").strip() or "1y",
            threshold_percent=parse_threshold(os.getenv("DIP_DASH_THRESHOLD", str(DEFAULT_THRESHOLD_PERCENT))),
            chart_width=chart_width if chart_width > 0 else 800,
            skip_cookie_check=os.getenv("YFINANCE_SKIP_COOKIE_CHECK", "0").lower() in ("1", "true", "yes"),
        )
