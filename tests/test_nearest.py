"""Tests for the nearest-sample lookup."""

from __future__ import annotations

from datetime import date, datetime, timedelta

import pytest

from dip_dash.analytics.nearest import day_number, nearest
from dip_dash.domain import Sample
from dip_dash.utils import EmptySeriesError


def _series(days: list[int]) -> tuple[Sample, ...]:
    base = date(2024, 1, 1)
    return tuple(Sample(base + timedelta(days=offset), float(offset), float(offset) + 1) for offset in days)


def test_exact_match_returns_that_sample() -> None:
    series = _series([0, 3, 7])
    assert nearest(series, date(2024, 1, 4)) is series[1]


def test_before_first_and_after_last_clamp_to_ends() -> None:
    series = _series([0, 3, 7])
    assert nearest(series, date(2023, 12, 1)) is series[0]
    assert nearest(series, date(2024, 3, 1)) is series[-1]


def test_exact_tie_prefers_later_sample() -> None:
    series = _series([0, 2])
    assert nearest(series, date(2024, 1, 2)) is series[1]


def test_datetime_targets_use_time_of_day() -> None:
    series = _series([0, 1])
    assert nearest(series, datetime(2024, 1, 1, 6)) is series[0]
    assert nearest(series, datetime(2024, 1, 1, 18)) is series[1]


def test_single_sample_is_always_returned() -> None:
    series = _series([5])
    assert nearest(series, date(2020, 1, 1)) is series[0]
    assert nearest(series, date(2030, 1, 1)) is series[0]


def test_empty_series_raises() -> None:
    with pytest.raises(EmptySeriesError):
        nearest((), date(2024, 1, 1))


def test_result_minimizes_distance_with_ties_to_later() -> None:
    series = _series([0, 1, 4, 5, 9, 16, 17, 30])
    start = datetime(2023, 12, 25)
    for step in range(0, 45 * 4):
        target = start + timedelta(hours=6 * step)
        when = day_number(target)
        distances = [abs(day_number(sample.date) - when) for sample in series]
        best = min(distances)
        expected = max(i for i, distance in enumerate(distances) if distance == best)

        assert nearest(series, target) is series[expected], target
