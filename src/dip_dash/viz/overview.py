"""Overview timeline: compressed area chart of a whole series with a brush."""

from __future__ import annotations

import logging
from collections.abc import Callable, Sequence
from datetime import date, datetime

from ..analytics.nearest import day_number
from ..domain import Sample, VisibleRange
from .scales import LinearScale, Margin, TimeScale
from .scene import Axis, OverviewScene

logger = logging.getLogger(__name__)

OVERVIEW_MARGIN = Margin(top=0, right=100, bottom=30, left=80)
OVERVIEW_TICKS = 4

BrushHandler = Callable[[VisibleRange], None]


class OverviewTimeline:
    """Stateful timeline built once per dashboard; ``set_data`` swaps the series."""

    def __init__(
        self,
        on_brush: BrushHandler | None = None,
        outer_width: int = 800,
        outer_height: int = 130,
        margin: Margin = OVERVIEW_MARGIN,
    ) -> None:
        self.on_brush = on_brush
        self.margin = margin
        self.width = outer_width - margin.left - margin.right
        self.height = outer_height - margin.top - margin.bottom
        self.data: tuple[Sample, ...] = ()
        self.y_field = "price"
        self.revision = 0
        self.selection: tuple[float, float] | None = None
        self.selected_range: VisibleRange | None = None
        self.scene: OverviewScene | None = None
        self._x: TimeScale | None = None
        self._y: LinearScale | None = None

    def set_data(self, series: Sequence[Sample], y_field: str = "price") -> OverviewScene | None:
        """Replace the backing series, redraw, and drop any brush selection."""
        self.data = tuple(series)
        self.y_field = y_field
        self.selection = None
        self.selected_range = None
        self.revision += 1

        if not self.data:
            self.scene = None
            self._x = self._y = None
            return None

        values = tuple(float(getattr(sample, y_field)) for sample in self.data)
        dates = tuple(sample.date for sample in self.data)
        self._x = TimeScale((dates[0], dates[-1]), (0, self.width))
        self._y = LinearScale((0.0, max(values)), (self.height, 0))
        self.scene = self._build_scene(dates, values)
        return self.scene

    def _build_scene(self, dates: tuple[date, ...], values: tuple[float, ...]) -> OverviewScene:
        x, y = self._x, self._y
        return OverviewScene(
            width=self.width,
            height=self.height,
            margin=self.margin,
            x_domain=x.domain,
            y_domain=y.domain,
            y_field=self.y_field,
            dates=dates,
            values=values,
            area=tuple((x(d), y(v)) for d, v in zip(dates, values)),
            axis=Axis("bottom", x.domain, self.height, tuple(x.ticks(OVERVIEW_TICKS))),
            selection=self.selection,
            selected_range=self.selected_range,
        )

    def brush(self, x0: float, x1: float) -> VisibleRange | None:
        """Apply a pixel selection and emit the matching date range.

        Called on every drag step and on release; each call emits.
        """
        if self._x is None:
            return None
        lo, hi = sorted((x0, x1))
        lo = min(max(lo, 0.0), float(self.width))
        hi = min(max(hi, 0.0), float(self.width))
        return self._apply((lo, hi), (self._x.invert(lo), self._x.invert(hi)))

    def brush_dates(self, start: date | datetime, end: date | datetime) -> VisibleRange | None:
        """Apply a selection expressed in dates, clamped to the series extent."""
        if self._x is None:
            return None
        if day_number(end) < day_number(start):
            start, end = end, start
        first, last = self._x.domain
        if day_number(start) < day_number(first):
            start = first
        if day_number(end) > day_number(last):
            end = last
        if day_number(start) > day_number(end):
            # Entirely outside the extent.
            start, end = (first, first) if day_number(end) <= day_number(first) else (last, last)
        return self._apply((self._x(start), self._x(end)), (start, end))

    def _apply(self, pixels: tuple[float, float], selected: VisibleRange) -> VisibleRange:
        self.selection = pixels
        self.selected_range = selected
        if self.scene is not None:
            self.scene = self._build_scene(self.scene.dates, self.scene.values)
        logger.debug("Brushed %s to %s", selected[0], selected[1])
        if self.on_brush is not None:
            self.on_brush(selected)
        return selected

    def clear_brush(self) -> None:
        """Drop the selection; the detail chart keeps its last range."""
        self.selection = None
        self.selected_range = None
        if self.scene is not None:
            self.scene = self._build_scene(self.scene.dates, self.scene.values)
