"""App-level keyboard bindings.

This module contains Textual Binding objects for app-level bindings
that work from any screen.
"""

from textual.binding import Binding

# ============================================================================
# Textual Binding objects for app-level bindings
# ============================================================================

APP_BINDINGS: list[Binding] = [
    Binding("d", "nav_dashboard", "Dashboard"),
    Binding("u", "nav_queues", "Queues"),
    Binding("p", "nav_pubsub", "Pub/Sub"),
    Binding("?", "show_help", "Help"),
    Binding("r", "refresh", "Refresh"),
    Binding("q", "app.quit", "Quit"),
]

__all__ = [
    "APP_BINDINGS",
]
