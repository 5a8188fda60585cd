"""Controllers module for the console.

This module provides per-service controllers for fetching snapshots from and
sending actions to the admin console backend.
"""

from __future__ import annotations

# Base classes
from emuconsole.controllers.base import (
    BaseController,
)

# Service controllers
from emuconsole.controllers.dashboard import DashboardController
from emuconsole.controllers.pubsub import PubSubController
from emuconsole.controllers.queues import QueuesController

__all__ = [
    # Base
    "BaseController",
    # Service controllers
    "DashboardController",
    "PubSubController",
    "QueuesController",
]
