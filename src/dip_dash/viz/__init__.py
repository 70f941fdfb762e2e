"""Chart components, scene model and plotly backend."""

from .detail_chart import DetailChart
from .overview import OverviewTimeline
from .price_charts import make_detail_figure, make_overview_figure
from .summary_panel import SummaryPanel

__all__ = ["DetailChart", "OverviewTimeline", "SummaryPanel", "make_detail_figure", "make_overview_figure"]
