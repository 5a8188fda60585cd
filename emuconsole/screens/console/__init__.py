"""Console screen package."""

from emuconsole.screens.console.config import HELP_LINES
from emuconsole.screens.console.console_screen import ConsoleScreen

__all__ = [
    "HELP_LINES",
    "ConsoleScreen",
]
