"""Dashboard controller: owns the dashboard state and wires panel events to redraws."""

from __future__ import annotations

import logging
from collections.abc import Sequence
from datetime import date

from ..analytics.threshold import parse_threshold
from ..data.providers import FeedLoader, SymbolLoader
from ..domain import DEFAULT_THRESHOLD_PERCENT, DashboardState, SymbolRecord, VisibleRange
from ..store import SeriesStore
from ..utils import DataRetrievalError, EmptySeriesError
from ..viz.detail_chart import DetailChart
from ..viz.overview import OverviewTimeline
from ..viz.scene import DetailScene, SummaryButton
from ..viz.summary_panel import SummaryPanel
from .prices_service import fetch_all, fetch_one

logger = logging.getLogger(__name__)


class DashboardController:
    """Single writer of ``DashboardState``.

    Panels report user actions through the callbacks wired here
    (``SummaryPanel.on_select`` and ``OverviewTimeline.on_brush``); the host
    calls ``set_threshold_percent`` and ``add_symbol`` directly. Every
    transition updates state first, then re-renders the affected panels.
    """

    def __init__(
        self,
        store: SeriesStore | None = None,
        symbol_loader: SymbolLoader | None = None,
        *,
        threshold_percent: float = DEFAULT_THRESHOLD_PERCENT,
        chart_width: int = 800,
    ) -> None:
        self.store = store if store is not None else SeriesStore()
        self.symbol_loader = symbol_loader
        self.state = DashboardState(threshold_percent=parse_threshold(threshold_percent))
        self.summary_panel = SummaryPanel(on_select=self.select_symbol)
        self.detail_chart = DetailChart(width=chart_width)
        self.timeline = OverviewTimeline(on_brush=self.set_visible_range, outer_width=chart_width)
        self.summary_buttons: list[SummaryButton] = []
        self.detail_scene: DetailScene | None = None
        self.notices: list[str] = []
        self.ready = False

    @property
    def active_record(self) -> SymbolRecord | None:
        if self.state.active_symbol is None:
            return None
        return self.store.get(self.state.active_symbol)

    def load_initial(self, feed_loader: FeedLoader) -> list[SymbolRecord]:
        """Register everything from the bulk feed; a failed feed leaves an empty dashboard."""
        try:
            records = fetch_all(feed_loader)
        except DataRetrievalError as err:
            logger.warning("Initial feed failed: %s", err)
            self.notices.append("Could not load the price feed.")
            records = []

        for record in records:
            self.register(record)
        self._render_summary()
        return records

    def register(self, record: SymbolRecord) -> SymbolRecord:
        """Store a loaded record; the first one becomes the active symbol."""
        stored = self.store.upsert(record.symbol, record.series)
        if self.state.active_symbol is None:
            self.ready = True
            logger.info("Dashboard ready, active symbol %s", stored.symbol)
            self.select_symbol(stored.symbol)
        else:
            self._render_summary()
        return stored

    def add_symbol(self, raw_symbol: str) -> SymbolRecord | None:
        """Load a user-requested symbol and make it active.

        Failures are logged and recorded in ``notices``; state is left unchanged.
        """
        symbol = raw_symbol.strip().upper()
        if not symbol:
            return None

        existing = self.store.get(symbol)
        if existing is not None:
            self.select_symbol(existing.symbol)
            return existing

        if self.symbol_loader is None:
            logger.warning("No symbol loader configured, cannot add %s", symbol)
            self.notices.append(f'Could not add symbol "{symbol}".')
            return None

        try:
            record = fetch_one(self.symbol_loader, symbol)
            stored = self.register(record)
        except (DataRetrievalError, EmptySeriesError) as err:
            logger.warning("Could not add %s: %s", symbol, err)
            self.notices.append(f'Could not add symbol "{symbol}".')
            return None

        self.select_symbol(stored.symbol)
        return stored

    def select_symbol(self, symbol: str) -> None:
        record = self.store.get(symbol)
        if record is None:
            logger.debug("Ignoring selection of unknown symbol %s", symbol)
            return

        self.state.active_symbol = record.symbol
        self.state.visible_range = None
        logger.info("Active symbol %s", record.symbol)
        self._render_summary()
        self._render_detail()
        self.timeline.set_data(record.series)

    def set_visible_range(self, visible_range: Sequence[date] | None) -> None:
        if self.state.active_symbol is None:
            return
        self.state.visible_range = self._as_range(visible_range)
        self._render_detail()

    def set_threshold_percent(self, raw) -> float:
        self.state.threshold_percent = parse_threshold(raw)
        self._render_summary()
        self._render_detail()
        return self.state.threshold_percent

    def pop_notices(self) -> list[str]:
        notices, self.notices = self.notices, []
        return notices

    @staticmethod
    def _as_range(visible_range: Sequence[date] | None) -> VisibleRange | None:
        if visible_range is None:
            return None
        start, end = visible_range
        return (start, end)

    def _render_summary(self) -> None:
        self.summary_buttons = self.summary_panel.render(
            self.store.all(), self.state.active_symbol, self.state.threshold_percent
        )

    def _render_detail(self) -> None:
        self.detail_scene = self.detail_chart.render(
            self.active_record, self.state.visible_range, self.state.threshold_percent
        )
