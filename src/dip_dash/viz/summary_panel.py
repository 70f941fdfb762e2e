"""Summary strip: one button per tracked symbol."""

from __future__ import annotations

import logging
import math
from collections.abc import Callable, Iterable

from ..analytics.threshold import Classification, classify
from ..domain import SymbolRecord
from .scene import ButtonStyle, SummaryButton

logger = logging.getLogger(__name__)


def button_label(symbol: str, classification: Classification) -> str:
    if math.isnan(classification.pct_below_high):
        return f"{symbol}: n/a"
    return f"{symbol}: {classification.pct_below_high:.1f}% below"


def button_style(symbol: str, active_symbol: str | None, classification: Classification) -> ButtonStyle:
    if symbol == active_symbol:
        return "active"
    if classification.is_above_threshold:
        return "opportunity"
    return "neutral"


class SummaryPanel:
    def __init__(self, on_select: Callable[[str], None] | None = None) -> None:
        self.on_select = on_select
        self.buttons: list[SummaryButton] = []

    def render(
        self, records: Iterable[SymbolRecord], active_symbol: str | None, threshold_percent: float
    ) -> list[SummaryButton]:
        """Replace every rendered button with a fresh set for ``records``."""
        buttons = []
        for record in records:
            classification = classify(record, threshold_percent)
            buttons.append(
                SummaryButton(
                    symbol=record.symbol,
                    label=button_label(record.symbol, classification),
                    style=button_style(record.symbol, active_symbol, classification),
                    classification=classification,
                )
            )
        self.buttons = buttons
        return buttons

    def select(self, symbol: str) -> None:
        """Handle a click on the button for ``symbol``."""
        if not any(button.symbol == symbol for button in self.buttons):
            logger.debug("Ignoring click on unrendered symbol %s", symbol)
            return
        if self.on_select is not None:
            self.on_select(symbol)
