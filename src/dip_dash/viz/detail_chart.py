"""Detail chart: price line, reference lines, axes and hover tooltip for one symbol."""

from __future__ import annotations

import math
from datetime import date, datetime

from ..analytics.nearest import nearest
from ..analytics.threshold import pct_below_high, support_level
from ..domain import SymbolRecord, VisibleRange
from .scales import LinearScale, Margin, TimeScale
from .scene import Axis, DetailScene, HoverState, LineKind, Marker, PricePath, ReferenceLine, Tooltip

DETAIL_MARGIN = Margin(top=20, right=30, bottom=30, left=50)
TOOLTIP_OFFSET = (150, 60)


def y_bounds(
    prices: list[float], threshold_percent: float, high52: float | None = None
) -> tuple[float, float, float | None]:
    """Return ``(y_min, y_max, support)`` keeping both reference lines inside the viewport."""
    max_price = max(prices)
    min_price = min(prices)
    support = support_level(max_price, threshold_percent)
    y_max = max_price * 1.05
    y_min = min_price * 0.95
    if high52 is not None:
        y_max = max(y_max, high52)
    if support is not None:
        y_min = min(y_min, support)
        y_max = max(y_max, support)
    return y_min, y_max, support


def _format_percent(value: float) -> str:
    return f"{value:g}"


class DetailChart:
    def __init__(self, width: int = 800, height: int = 400, margin: Margin = DETAIL_MARGIN) -> None:
        self.width = width
        self.height = height
        self.margin = margin
        self.record: SymbolRecord | None = None
        self.scene: DetailScene | None = None
        self.hover_state: HoverState | None = None
        self._x: TimeScale | None = None
        self._y: LinearScale | None = None

    def clear(self) -> None:
        self.record = None
        self.scene = None
        self.hover_state = None
        self._x = None
        self._y = None

    def render(
        self, record: SymbolRecord | None, visible_range: VisibleRange | None, threshold_percent: float
    ) -> DetailScene | None:
        """Redraw from scratch; returns None (and draws nothing) without a record."""
        self.clear()
        if record is None or not record.series:
            return None

        series = record.series
        prices = [sample.price for sample in series]
        x_domain = visible_range if visible_range is not None else (series[0].date, series[-1].date)
        y_min, y_max, support = y_bounds(prices, threshold_percent, record.high52)

        m = self.margin
        x = TimeScale(x_domain, (m.left, self.width - m.right))
        y = LinearScale((y_min, y_max), (self.height - m.bottom, m.top))

        lines = [self._reference_line(y, "high52", record.high52, f"52W High: ${record.high52:.2f}")]
        if support is not None:
            label = f"{_format_percent(threshold_percent)}% Below 52W High: ${support:.2f}"
            lines.append(self._reference_line(y, "support", support, label))

        path = PricePath(
            dates=tuple(sample.date for sample in series),
            prices=tuple(prices),
            points=tuple((x(sample.date), y(sample.price)) for sample in series),
        )
        axes = (
            Axis("bottom", x_domain, self.height - m.bottom, tuple(x.ticks())),
            Axis("left", (y_min, y_max), m.left, tuple(y.ticks())),
        )

        self.record = record
        self._x = x
        self._y = y
        self.scene = DetailScene(
            symbol=record.symbol,
            width=self.width,
            height=self.height,
            margin=m,
            x_domain=x_domain,
            y_domain=(y_min, y_max),
            high52=record.high52,
            support_level=support,
            price_path=path,
            reference_lines=tuple(lines),
            axes=axes,
        )
        return self.scene

    def _reference_line(self, y: LinearScale, kind: LineKind, value: float, label: str) -> ReferenceLine:
        m = self.margin
        y_px = y(value)
        return ReferenceLine(
            kind=kind,
            value=value,
            x0=m.left,
            x1=self.width - m.right,
            y=y_px,
            label=label,
            label_x=self.width - m.right,
            label_y=y_px - 5,
        )

    def hover(self, pointer_x: float) -> HoverState | None:
        """Highlight the sample nearest to a pointer x-position on the canvas."""
        if self._x is None:
            return None
        return self.hover_date(self._x.invert(pointer_x))

    def hover_date(self, target: date | datetime) -> HoverState | None:
        if self.record is None or self._x is None or self._y is None:
            return None
        sample = nearest(self.record.series, target)
        cx, cy = self._x(sample.date), self._y(sample.price)
        pct = pct_below_high(sample.price, self.record.high52)
        tooltip = Tooltip(
            date_text=sample.date.isoformat()[:10],
            price_text=f"{sample.price:.2f}",
            pct_text="n/a" if math.isnan(pct) else f"{pct:.2f}",
            left=cx - TOOLTIP_OFFSET[0],
            top=cy - TOOLTIP_OFFSET[1],
        )
        # Replaces any previous marker.
        self.hover_state = HoverState(marker=Marker(sample=sample, x=cx, y=cy), tooltip=tooltip)
        return self.hover_state

    def leave(self) -> None:
        self.hover_state = None

