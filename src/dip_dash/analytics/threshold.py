"""Percent-below-high classification driven by the threshold control."""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Any

from ..domain import SymbolRecord


@dataclass(frozen=True, slots=True)
class Classification:
    pct_below_high: float
    # None when there is no threshold or no usable 52-week high.
    is_above_threshold: bool | None


def pct_below_high(price: float, high52: float) -> float:
    """Unrounded percentage of ``price`` below ``high52``; NaN when high52 is 0."""
    if high52 == 0:
        return math.nan
    return (1 - price / high52) * 100


def parse_threshold(raw: Any) -> float:
    """Parse the threshold control's value; anything non-numeric becomes NaN."""
    if raw is None:
        return math.nan
    if isinstance(raw, str):
        raw = raw.strip()
        if not raw:
            return math.nan
    try:
        value = float(raw)
    except (TypeError, ValueError):
        return math.nan
    return value if math.isfinite(value) else math.nan


def has_threshold(threshold_percent: float) -> bool:
    return not math.isnan(threshold_percent)


def support_level(max_price: float, threshold_percent: float) -> float | None:
    """Price sitting ``threshold_percent`` below ``max_price``, or None without a threshold."""
    if not has_threshold(threshold_percent):
        return None
    return max_price * (1 - threshold_percent / 100)


def classify(record: SymbolRecord, threshold_percent: float) -> Classification:
    pct = pct_below_high(record.current_price, record.high52)
    if math.isnan(pct) or not has_threshold(threshold_percent):
        return Classification(pct_below_high=pct, is_above_threshold=None)
    return Classification(pct_below_high=pct, is_above_threshold=pct > threshold_percent)
