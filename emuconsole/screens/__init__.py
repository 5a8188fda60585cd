"""Console screens.

Domain Structure:
    - console/ - The single console screen hosting dashboard, queue and pub/sub views
    - mixins/  - Reusable screen mixins
"""

from __future__ import annotations

from emuconsole.keyboard import CONSOLE_SCREEN_BINDINGS
from emuconsole.screens.console import ConsoleScreen
from emuconsole.screens.mixins import WorkerMixin

__all__ = [
    "CONSOLE_SCREEN_BINDINGS",
    "ConsoleScreen",
    "WorkerMixin",
]
