"""Linear and time scales mapping data values to canvas pixels."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime, timedelta

from ..analytics.nearest import SECONDS_PER_DAY, day_number


@dataclass(frozen=True, slots=True)
class Margin:
    top: int
    right: int
    bottom: int
    left: int


@dataclass(frozen=True, slots=True)
class LinearScale:
    domain: tuple[float, float]
    range: tuple[float, float]

    def __call__(self, value: float) -> float:
        d0, d1 = self.domain
        r0, r1 = self.range
        if d1 == d0:
            return (r0 + r1) / 2
        return r0 + (value - d0) / (d1 - d0) * (r1 - r0)

    def invert(self, pixel: float) -> float:
        d0, d1 = self.domain
        r0, r1 = self.range
        if r1 == r0:
            return d0
        return d0 + (pixel - r0) / (r1 - r0) * (d1 - d0)

    def ticks(self, count: int = 5) -> list[float]:
        d0, d1 = sorted(self.domain)
        if count < 2 or d1 == d0:
            return [d0]
        step = (d1 - d0) / (count - 1)
        return [d0 + step * i for i in range(count)]


class TimeScale:
    """Maps dates (or datetimes) to pixels; inverts to datetimes."""

    def __init__(self, domain: tuple[date, date], range: tuple[float, float]) -> None:
        self.domain = domain
        self.range = range
        self._linear = LinearScale((day_number(domain[0]), day_number(domain[1])), range)

    def __call__(self, value: date | datetime) -> float:
        return self._linear(day_number(value))

    def invert(self, pixel: float) -> datetime:
        return from_day_number(self._linear.invert(pixel))

    def ticks(self, count: int = 5) -> list[datetime]:
        return [from_day_number(value) for value in self._linear.ticks(count)]


def from_day_number(value: float) -> datetime:
    whole = int(value // 1)
    base = datetime.combine(date.fromordinal(whole), datetime.min.time())
    return base + timedelta(seconds=round((value - whole) * SECONDS_PER_DAY))
