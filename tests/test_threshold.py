"""Tests for threshold parsing and classification."""

from __future__ import annotations

import math

import pytest

from dip_dash.analytics.threshold import classify, parse_threshold, pct_below_high, support_level

from conftest import D1, make_record


def test_scenario_threshold_20_is_not_above(scenario_record) -> None:
    result = classify(scenario_record, 20)

    assert scenario_record.high52 == 110
    assert scenario_record.current_price == 95
    assert f"{result.pct_below_high:.1f}" == "13.6"
    assert result.is_above_threshold is False


def test_scenario_threshold_10_is_above(scenario_record) -> None:
    assert classify(scenario_record, 10).is_above_threshold is True


def test_nan_threshold_leaves_classification_undefined(scenario_record) -> None:
    result = classify(scenario_record, math.nan)

    assert result.is_above_threshold is None
    assert result.pct_below_high == pytest.approx((1 - 95 / 110) * 100)


@pytest.mark.parametrize("threshold", [-5.0, 0.0, 13.0, 13.6, 13.7, 50.0])
def test_comparison_uses_unrounded_value(scenario_record, threshold) -> None:
    result = classify(scenario_record, threshold)
    assert result.is_above_threshold == (result.pct_below_high > threshold)


def test_comparison_is_not_fooled_by_display_rounding() -> None:
    # 13.64% below displays as "13.6" but is above a 13.62 threshold.
    record = make_record("EDGE", [(D1, 86.36, 100.0)])
    assert classify(record, 13.62).is_above_threshold is True


def test_zero_high_is_treated_as_nan() -> None:
    record = make_record("ZERO", [(D1, 1.0, 0.0)])
    result = classify(record, 20)

    assert math.isnan(result.pct_below_high)
    assert result.is_above_threshold is None
    assert math.isnan(pct_below_high(5.0, 0.0))


def test_price_above_high_gives_negative_percent() -> None:
    record = make_record("UP", [(D1, 120.0, 100.0)])
    result = classify(record, 0)

    assert result.pct_below_high == pytest.approx(-20.0)
    assert result.is_above_threshold is False


@pytest.mark.parametrize(
    ("raw", "expected"),
    [("20", 20.0), (" 12.5 ", 12.5), (7, 7.0), (3.5, 3.5), ("-4", -4.0)],
)
def test_parse_threshold_numbers(raw, expected) -> None:
    assert parse_threshold(raw) == expected


@pytest.mark.parametrize("raw", ["", "   ", "abc", None, "inf", "nan", math.nan, [1]])
def test_parse_threshold_invalid_is_nan(raw) -> None:
    assert math.isnan(parse_threshold(raw))


def test_support_level() -> None:
    assert support_level(100.0, 20.0) == pytest.approx(80.0)
    assert support_level(100.0, math.nan) is None
