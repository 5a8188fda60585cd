"""Main application class for the emulator admin console."""

from __future__ import annotations

import logging
from pathlib import Path

from textual.app import App
from textual.binding import Binding
from textual.screen import ModalScreen

from emuconsole.constants import APP_TITLE, ViewName
from emuconsole.controllers.api import ConsoleApiClient, HttpxSseTransport
from emuconsole.controllers.dashboard import DashboardController
from emuconsole.controllers.pubsub import PubSubController
from emuconsole.controllers.queues import QueuesController
from emuconsole.keyboard.app import APP_BINDINGS
from emuconsole.models.state import (
    AppSettings,
    ConfigLoadError,
    ConfigManager,
)
from emuconsole.screens.console import HELP_LINES, ConsoleScreen
from emuconsole.widgets import HelpDialog

logger = logging.getLogger(__name__)


class EmuConsoleApp(App[None]):
    """Terminal admin console for the queue and pub/sub emulators."""

    TITLE = APP_TITLE
    BINDINGS: list[Binding] = APP_BINDINGS

    settings: AppSettings

    def __init__(
        self,
        base_url: str | None = None,
        view: ViewName | None = None,
        config_path: Path | None = None,
        client: ConsoleApiClient | None = None,
        *args,
        **kwargs,
    ) -> None:
        super().__init__(*args, **kwargs)
        self.base_url = base_url
        self.view = view
        self.config_path = config_path

        # Load settings on startup
        self._load_settings()

        self.client = client or ConsoleApiClient(
            self.settings.base_url,
            timeout=self.settings.request_timeout_seconds,
        )
        self.console_screen = ConsoleScreen(
            dashboard=DashboardController(self.client),
            queues=QueuesController(self.client),
            pubsub=PubSubController(self.client),
            transport=HttpxSseTransport(
                self.client,
                connect_timeout=self.settings.request_timeout_seconds,
            ),
            settings=self.settings,
        )

    def _load_settings(self) -> None:
        """Load application settings, then apply CLI overrides."""
        try:
            self.settings = ConfigManager.load(self.config_path)
        except ConfigLoadError as exc:
            # Use defaults if loading fails
            logger.warning("Using default settings: %s", exc)
            self.settings = AppSettings()

        if self.base_url:
            self.settings.base_url = self.base_url
        if self.view is not None:
            self.settings.initial_view = self.view.value

    def on_mount(self) -> None:
        self.sub_title = self.client.base_url
        self.push_screen(self.console_screen)

    async def on_unmount(self) -> None:
        await self.client.aclose()

    # =========================================================================
    # Actions
    # =========================================================================

    def _console_ready(self) -> bool:
        return self.screen is self.console_screen and not isinstance(self.screen, ModalScreen)

    def _navigate(self, view: ViewName) -> None:
        if self._console_ready():
            self.console_screen.switch_to(view)

    def action_nav_dashboard(self) -> None:
        self._navigate(ViewName.DASHBOARD)

    def action_nav_queues(self) -> None:
        self._navigate(ViewName.QUEUES)

    def action_nav_pubsub(self) -> None:
        self._navigate(ViewName.PUBSUB)

    def action_refresh(self) -> None:
        if self._console_ready():
            self.console_screen.refresh_view()

    def action_show_help(self) -> None:
        if self._console_ready():
            self.push_screen(HelpDialog(HELP_LINES))


__all__ = [
    "EmuConsoleApp",
]
