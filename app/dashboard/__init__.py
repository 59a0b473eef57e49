"""Owner portal pages."""

from .renderer import DashboardRenderer

__all__ = ["DashboardRenderer"]
