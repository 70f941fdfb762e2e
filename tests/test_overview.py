"""Tests for the overview timeline and its brush."""

from __future__ import annotations

from datetime import date, timedelta

import pytest

from dip_dash.viz.overview import OverviewTimeline

from conftest import D1, D2, D3


@pytest.fixture
def emitted() -> list:
    return []


@pytest.fixture
def timeline(emitted, scenario_record) -> OverviewTimeline:
    tl = OverviewTimeline(on_brush=emitted.append)
    tl.set_data(scenario_record.series)
    return tl


def test_set_data_draws_whole_series(timeline) -> None:
    scene = timeline.scene

    assert (timeline.width, timeline.height) == (620, 100)
    assert scene.x_domain == (D1, D3)
    assert scene.y_domain == (0.0, 100.0)
    assert scene.area[0] == pytest.approx((0.0, 0.0))
    assert scene.area[-1][0] == pytest.approx(620.0)
    assert len(scene.axis.ticks) == 4


def test_pixel_brush_emits_inverse_mapped_range(timeline, emitted) -> None:
    result = timeline.brush(0, 310)

    assert len(emitted) == 1
    start, end = emitted[0]
    assert (start.date(), end.date()) == (D1, D2)
    assert result == emitted[0]
    assert timeline.selection == (0.0, 310.0)


def test_every_brush_call_emits(timeline, emitted) -> None:
    timeline.brush(0, 100)
    timeline.brush(0, 200)
    timeline.brush(0, 310)

    assert len(emitted) == 3


def test_brush_is_ordered_and_clamped(timeline, emitted) -> None:
    timeline.brush(900, -50)

    start, end = emitted[-1]
    assert (start.date(), end.date()) == (D1, D3)
    assert timeline.selection == (0.0, 620.0)


def test_brush_dates_clamp_to_extent(timeline, emitted) -> None:
    timeline.brush_dates(D1 - timedelta(days=10), D3 + timedelta(days=10))
    assert emitted[-1] == (D1, D3)

    timeline.brush_dates(D2, D1)
    assert emitted[-1] == (D1, D2)

    timeline.brush_dates(date(2020, 1, 1), date(2020, 2, 1))
    assert emitted[-1] == (D1, D1)


def test_set_data_resets_selection(timeline, other_record) -> None:
    timeline.brush(0, 310)
    revision = timeline.revision

    timeline.set_data(other_record.series)

    assert timeline.selection is None
    assert timeline.selected_range is None
    assert timeline.scene.selected_range is None
    assert timeline.revision == revision + 1
    assert timeline.scene.y_domain == (0.0, 50.5)


def test_clear_brush_does_not_emit(timeline, emitted) -> None:
    timeline.brush(0, 310)
    timeline.clear_brush()

    assert len(emitted) == 1
    assert timeline.selection is None
    assert timeline.scene.selection is None


def test_brush_without_data_is_noop(emitted) -> None:
    timeline = OverviewTimeline(on_brush=emitted.append)

    assert timeline.brush(0, 100) is None
    assert timeline.brush_dates(D1, D2) is None
    assert emitted == []
