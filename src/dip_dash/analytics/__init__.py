"""Lookup and classification helpers used by the chart components."""

from .nearest import nearest
from .threshold import Classification, classify, parse_threshold, pct_below_high, support_level

__all__ = ["Classification", "classify", "nearest", "parse_threshold", "pct_below_high", "support_level"]
