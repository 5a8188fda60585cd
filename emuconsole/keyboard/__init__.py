"""Keyboard bindings module.

Bindings are organized into two categories:

- app: App-level bindings (APP_BINDINGS)
- navigation: Screen and dialog bindings (*_BINDINGS)
"""

from emuconsole.keyboard.app import APP_BINDINGS
from emuconsole.keyboard.navigation import (
    CONSOLE_SCREEN_BINDINGS,
    DIALOG_BINDINGS,
)

__all__ = [
    "APP_BINDINGS",
    "CONSOLE_SCREEN_BINDINGS",
    "DIALOG_BINDINGS",
]
