"""Live state reconciliation and streaming synchronization.

- reconciler.py: pure keyed diff of snapshots against rendered rows
- overlay.py: expansion, edit mode and caches per natural key
- banners.py: per-entity status banners with auto-hide timers
- stream_controller.py: the single server-push subscription
- edit_session.py: inline queue attribute editing
- view_controller.py: view switching and snapshot application
"""

from emuconsole.sync.banners import BannerStatus, StatusBannerManager
from emuconsole.sync.overlay import OverlayEntry, OverlayStore
from emuconsole.sync.reconciler import (
    ContainerState,
    RenderedRow,
    RenderOp,
    RenderPlan,
    reconcile,
)
from emuconsole.sync.session import Alert, ConsoleSession, StalenessToken
from emuconsole.sync.stream_controller import StreamingSubscriptionController
from emuconsole.sync.view_controller import ViewController

__all__ = [
    "Alert",
    "BannerStatus",
    "ConsoleSession",
    "ContainerState",
    "OverlayEntry",
    "OverlayStore",
    "RenderOp",
    "RenderPlan",
    "RenderedRow",
    "StalenessToken",
    "StatusBannerManager",
    "StreamingSubscriptionController",
    "ViewController",
    "reconcile",
]
