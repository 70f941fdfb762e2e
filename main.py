"""Streamlit entrypoint for the 52-week-high dashboard."""

from __future__ import annotations

import math
import sys
from datetime import datetime
from pathlib import Path
from typing import Any

# --- Ensure src is on path for local imports ---
ROOT = Path(__file__).resolve().parent
SRC = ROOT / "src"
if str(SRC) not in sys.path:
    sys.path.append(str(SRC))

import pandas as pd  # noqa: E402
import streamlit as st  # noqa: E402

from dip_dash import DashboardSettings, SymbolRecord  # noqa: E402
from dip_dash.data import CsvFeedLoader, YFinanceFeedLoader, YFinanceSymbolLoader, patch_cookie_check  # noqa: E402
from dip_dash.services import DashboardController, fetch_all, fetch_one  # noqa: E402
from dip_dash.utils import get_logger  # noqa: E402
from dip_dash.viz import make_detail_figure, make_overview_figure  # noqa: E402

logger = get_logger(__name__)

OPPORTUNITY_MARK = "🟢 "
CACHE_TTL_SECONDS = 15 * 60


def format_threshold(value: float) -> str:
    return "" if math.isnan(value) else f"{value:g}"


@st.cache_data(ttl=CACHE_TTL_SECONDS, show_spinner=False)
def load_feed_cached(feed_url: str, symbols: tuple[str, ...], lookback: str) -> list[SymbolRecord]:
    if feed_url:
        feed = CsvFeedLoader(feed_url)
    else:
        feed = YFinanceFeedLoader(list(symbols), lookback=lookback)
    logger.info("Fetching price feed with %s", type(feed).__name__)
    return fetch_all(feed)


@st.cache_data(ttl=CACHE_TTL_SECONDS, show_spinner=False)
def load_symbol_cached(symbol: str, lookback: str) -> SymbolRecord:
    return fetch_one(YFinanceSymbolLoader(lookback=lookback), symbol)


class CachedFeed:
    """Feed loader backed by the shared Streamlit data cache."""

    def __init__(self, settings: DashboardSettings) -> None:
        self.settings = settings

    def load_all(self) -> list[SymbolRecord]:
        settings = self.settings
        return load_feed_cached(settings.feed_url, tuple(settings.symbols), settings.lookback)


class CachedSymbolLoader:
    def __init__(self, lookback: str) -> None:
        self.lookback = lookback

    def load_one(self, symbol: str) -> SymbolRecord:
        return load_symbol_cached(symbol.strip().upper(), self.lookback)


def build_controller(settings: DashboardSettings) -> DashboardController:
    if settings.skip_cookie_check:
        patch_cookie_check()

    controller = DashboardController(
        symbol_loader=CachedSymbolLoader(settings.lookback),
        threshold_percent=settings.threshold_percent,
        chart_width=settings.chart_width,
    )
    feed = CachedFeed(settings)
    logger.info("Starting dashboard session for %d symbols", len(settings.symbols))

    with st.spinner("Loading price feed..."):
        controller.load_initial(feed)
    return controller


def get_controller() -> DashboardController:
    """One controller per browser session, built on first run."""
    if "controller" not in st.session_state:
        settings = DashboardSettings.from_env()
        st.session_state.controller = build_controller(settings)
        st.session_state.threshold_input = format_threshold(settings.threshold_percent)
        st.session_state.new_symbol = ""
    return st.session_state.controller


def on_threshold_change() -> None:
    get_controller().set_threshold_percent(st.session_state.threshold_input)


def on_add_symbol() -> None:
    raw = st.session_state.new_symbol
    if not raw.strip():
        return
    if get_controller().add_symbol(raw) is not None:
        st.session_state.new_symbol = ""


def _selection(event: Any, kind: str) -> list:
    if not event:
        return []
    selection = event.get("selection", {}) if isinstance(event, dict) else getattr(event, "selection", {})
    if isinstance(selection, dict):
        return list(selection.get(kind, []) or [])
    return list(getattr(selection, kind, []) or [])


def _to_datetime(value: Any) -> datetime:
    return pd.Timestamp(value).to_pydatetime()


def render_sidebar() -> None:
    st.sidebar.header("Dashboard Controls")
    st.sidebar.text_input(
        "Percent below 52W high",
        key="threshold_input",
        on_change=on_threshold_change,
        help="Symbols further below their 52-week high than this are highlighted. Leave empty to disable.",
    )
    st.sidebar.divider()
    st.sidebar.text_input("Add symbol", key="new_symbol", placeholder="e.g. NVDA", on_change=on_add_symbol)
    st.sidebar.button("Add", on_click=on_add_symbol, use_container_width=True)


def render_summary(controller: DashboardController) -> None:
    buttons = controller.summary_buttons
    if not buttons:
        return
    columns = st.columns(min(len(buttons), 6))
    for index, button in enumerate(buttons):
        label = button.label
        if button.style == "opportunity":
            label = OPPORTUNITY_MARK + label
        columns[index % len(columns)].button(
            label,
            key=f"summary_{button.symbol}",
            type="primary" if button.style == "active" else "secondary",
            on_click=controller.summary_panel.select,
            args=(button.symbol,),
            use_container_width=True,
        )


def render_charts(controller: DashboardController) -> None:
    symbol = controller.state.active_symbol
    overview_key = f"overview_{symbol}_{controller.timeline.revision}"
    detail_key = f"detail_{symbol}"

    # Widget selections from the previous run drive the brush and the pinned hover.
    boxes = _selection(st.session_state.get(overview_key), "box")
    if boxes and len(boxes[0].get("x", [])) == 2:
        x0, x1 = boxes[0]["x"]
        controller.timeline.brush_dates(_to_datetime(x0), _to_datetime(x1))

    points = _selection(st.session_state.get(detail_key), "points")
    if points and points[0].get("x") is not None:
        controller.detail_chart.hover_date(_to_datetime(points[0]["x"]))
    else:
        controller.detail_chart.leave()

    hover = controller.detail_chart.hover_state
    st.plotly_chart(
        make_detail_figure(controller.detail_scene, hover),
        use_container_width=True,
        key=detail_key,
        on_select="rerun",
        selection_mode="points",
    )
    if hover is not None:
        st.caption(" · ".join(hover.tooltip.lines))

    st.plotly_chart(
        make_overview_figure(controller.timeline.scene),
        use_container_width=True,
        key=overview_key,
        on_select="rerun",
        selection_mode="box",
    )
    st.caption("Drag across the timeline to zoom the chart above.")


def main() -> None:
    st.set_page_config(page_title="52W High Dashboard", layout="wide")
    st.title("Distance from 52-Week High")
    st.caption("Streamlit + yfinance + Plotly")

    controller = get_controller()
    render_sidebar()

    for notice in controller.pop_notices():
        st.error(notice)

    if not controller.ready:
        st.info("No symbols loaded yet. Add one from the sidebar.")
        return

    render_summary(controller)
    st.divider()
    render_charts(controller)


if __name__ == "__main__":
    main()
