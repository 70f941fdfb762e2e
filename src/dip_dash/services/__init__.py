"""Service layer entry points."""

from .controller import DashboardController
from .prices_service import fetch_all, fetch_one

__all__ = ["DashboardController", "fetch_all", "fetch_one"]
