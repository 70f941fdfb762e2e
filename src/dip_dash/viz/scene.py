"""Declarative scene descriptions produced by the chart components.

Components never draw. Each render returns one of these immutable
descriptions; a backend (see ``price_charts``) turns it into a figure.
Pixel coordinates refer to the component's own canvas, data values are kept
alongside so backends that work in data space can use them directly.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import Literal

from ..analytics.threshold import Classification
from ..domain import Sample
from .scales import Margin

ButtonStyle = Literal["active", "opportunity", "neutral"]
LineKind = Literal["high52", "support"]
AxisOrient = Literal["bottom", "left"]

Point = tuple[float, float]


@dataclass(frozen=True, slots=True)
class SummaryButton:
    symbol: str
    label: str
    style: ButtonStyle
    classification: Classification


@dataclass(frozen=True, slots=True)
class ReferenceLine:
    kind: LineKind
    value: float
    x0: float
    x1: float
    y: float
    label: str
    label_x: float
    label_y: float


@dataclass(frozen=True, slots=True)
class PricePath:
    dates: tuple[date, ...]
    prices: tuple[float, ...]
    points: tuple[Point, ...]
    reveal_ms: int = 1000


@dataclass(frozen=True, slots=True)
class Axis:
    orient: AxisOrient
    domain: tuple
    position: float
    ticks: tuple


@dataclass(frozen=True, slots=True)
class Marker:
    sample: Sample
    x: float
    y: float
    radius: float = 6


@dataclass(frozen=True, slots=True)
class Tooltip:
    date_text: str
    price_text: str
    pct_text: str
    left: float
    top: float

    @property
    def lines(self) -> tuple[str, str, str]:
        return (self.date_text, f"Price: ${self.price_text}", f"↓ {self.pct_text}% from 52W High")


@dataclass(frozen=True, slots=True)
class HoverState:
    marker: Marker
    tooltip: Tooltip


@dataclass(frozen=True, slots=True)
class DetailScene:
    symbol: str
    width: int
    height: int
    margin: Margin
    x_domain: tuple[date, date]
    y_domain: tuple[float, float]
    high52: float
    support_level: float | None
    price_path: PricePath
    reference_lines: tuple[ReferenceLine, ...]
    axes: tuple[Axis, ...]

    def line(self, kind: LineKind) -> ReferenceLine | None:
        for ref in self.reference_lines:
            if ref.kind == kind:
                return ref
        return None


@dataclass(frozen=True, slots=True)
class OverviewScene:
    width: int
    height: int
    margin: Margin
    x_domain: tuple[date, date]
    y_domain: tuple[float, float]
    y_field: str
    dates: tuple[date, ...]
    values: tuple[float, ...]
    area: tuple[Point, ...]
    axis: Axis
    selection: tuple[float, float] | None = None
    selected_range: tuple[date, date] | None = None
