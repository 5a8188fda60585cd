"""Dashboard controller."""

from emuconsole.controllers.dashboard.controller import DashboardController

__all__ = ["DashboardController"]
