"""Plotly figure builders for detail and overview scenes."""

from __future__ import annotations

import plotly.graph_objects as go

from .scene import DetailScene, HoverState, OverviewScene

PRICE_COLOR = "#4F46E5"
AREA_COLOR = "#CCCCCC"
LINE_COLORS = {"high52": "red", "support": "green"}


def _empty_figure(height: int, message: str = "No data to display") -> go.Figure:
    fig = go.Figure()
    fig.add_annotation(text=message, showarrow=False, x=0.5, y=0.5, xref="paper", yref="paper")
    fig.update_layout(template="plotly_white", height=height)
    return fig


def make_detail_figure(scene: DetailScene | None, hover: HoverState | None = None, height: int = 400) -> go.Figure:
    """Build the detail chart from its scene, with an optional pinned hover marker."""
    if scene is None:
        return _empty_figure(height)

    path = scene.price_path
    pct_below = [(1 - price / scene.high52) * 100 if scene.high52 else float("nan") for price in path.prices]

    fig = go.Figure()
    fig.add_trace(
        go.Scatter(
            x=list(path.dates),
            y=list(path.prices),
            customdata=pct_below,
            mode="lines+markers",
            name=scene.symbol,
            line=dict(color=PRICE_COLOR, width=2),
            # Invisible markers make the line clickable for point selection.
            marker=dict(size=6, opacity=0),
            hovertemplate="<b>%{x|%Y-%m-%d}</b><br>Price: $%{y:.2f}<br>↓ %{customdata:.2f}% from 52W High<extra></extra>",
        )
    )

    for ref in scene.reference_lines:
        color = LINE_COLORS.get(ref.kind, "gray")
        fig.add_hline(
            y=ref.value,
            line_dash="dash",
            line_color=color,
            annotation_text=ref.label,
            annotation_position="top right",
            annotation_font_color=color,
        )

    if hover is not None:
        marker = hover.marker
        fig.add_trace(
            go.Scatter(
                x=[marker.sample.date],
                y=[marker.sample.price],
                mode="markers",
                name="highlighted",
                marker=dict(size=marker.radius * 2, color=PRICE_COLOR, line=dict(color="#333", width=1)),
                hovertext="<br>".join(hover.tooltip.lines),
                hoverinfo="text",
                showlegend=False,
            )
        )

    fig.update_layout(
        height=scene.height,
        margin=dict(t=scene.margin.top, r=scene.margin.right, b=scene.margin.bottom, l=scene.margin.left),
        hovermode="x",
        template="plotly_white",
        showlegend=False,
    )
    fig.update_xaxes(range=list(scene.x_domain))
    fig.update_yaxes(range=list(scene.y_domain), tickprefix="$")
    return fig


def make_overview_figure(scene: OverviewScene | None, height: int = 130) -> go.Figure:
    """Build the overview area chart; box-selecting on it acts as the brush."""
    if scene is None:
        return _empty_figure(height)

    fig = go.Figure()
    fig.add_trace(
        go.Scatter(
            x=list(scene.dates),
            y=list(scene.values),
            mode="lines",
            fill="tozeroy",
            line=dict(color=AREA_COLOR, width=1),
            fillcolor=AREA_COLOR,
            hoverinfo="skip",
        )
    )

    if scene.selected_range is not None:
        start, end = scene.selected_range
        fig.add_vrect(x0=start, x1=end, fillcolor="gray", opacity=0.25, line_width=0)

    fig.update_layout(
        height=scene.height + scene.margin.top + scene.margin.bottom,
        margin=dict(t=scene.margin.top, r=scene.margin.right, b=scene.margin.bottom, l=scene.margin.left),
        dragmode="select",
        selectdirection="h",
        template="plotly_white",
        showlegend=False,
    )
    fig.update_xaxes(range=list(scene.x_domain), nticks=len(scene.axis.ticks))
    fig.update_yaxes(range=list(scene.y_domain), showticklabels=False, fixedrange=True)
    return fig
