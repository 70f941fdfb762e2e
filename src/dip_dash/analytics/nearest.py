"""Nearest-sample lookup over a date-ordered series."""

from __future__ import annotations

from bisect import bisect_left
from collections.abc import Sequence
from datetime import date, datetime

from ..domain import Sample
from ..utils import EmptySeriesError

SECONDS_PER_DAY = 86_400


def day_number(value: date | datetime | float) -> float:
    """Express a date or datetime as a fractional proleptic ordinal."""
    if isinstance(value, datetime):
        seconds = value.hour * 3600 + value.minute * 60 + value.second + value.microsecond / 1e6
        return value.toordinal() + seconds / SECONDS_PER_DAY
    if isinstance(value, date):
        return float(value.toordinal())
    return float(value)


def nearest(series: Sequence[Sample], target: date | datetime | float) -> Sample:
    """Return the sample whose date is closest to ``target``.

    Exact ties resolve to the later sample. Runs in O(log n).
    """
    if not series:
        raise EmptySeriesError("Cannot look up a point in an empty series")

    when = day_number(target)
    index = bisect_left(series, when, key=lambda sample: day_number(sample.date))
    before = series[index - 1] if index > 0 else None
    after = series[index] if index < len(series) else None

    if before is None:
        return after  # type: ignore[return-value]
    if after is None:
        return before
    if when - day_number(before.date) >= day_number(after.date) - when:
        return after
    return before
