"""dip_dash package with UI-agnostic logic for the 52-week-high dashboard."""

from .domain import DashboardSettings, DashboardState, Sample, SymbolRecord
from .store import SeriesStore

__all__ = ["DashboardSettings", "DashboardState", "Sample", "SeriesStore", "SymbolRecord"]
