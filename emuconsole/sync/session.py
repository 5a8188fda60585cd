"""Session context: active view, staleness tokens and per-view state.

Every asynchronous operation captures a ``StalenessToken`` when it starts and
checks ``ConsoleSession.is_current`` before applying its result. Switching
views bumps the generation, so results of an abandoned view are ignored.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass, field

from emuconsole.constants.enums import AlertTone, ViewName
from emuconsole.constants.timeouts import BANNER_AUTO_HIDE_SECONDS
from emuconsole.models.entities import SnapshotEntity
from emuconsole.sync.banners import BannerListener, Scheduler, StatusBannerManager
from emuconsole.sync.overlay import OverlayStore
from emuconsole.sync.reconciler import ContainerState

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class StalenessToken:
    view: ViewName
    generation: int


@dataclass(frozen=True)
class Alert:
    """Global alert bar content."""

    message: str
    tone: AlertTone = AlertTone.ERROR


@dataclass
class ViewState:
    """Session-scoped state of one view; survives switching away and back."""

    view: ViewName
    overlays: OverlayStore
    containers: dict[str, ContainerState] = field(default_factory=dict)
    entities: dict[str, SnapshotEntity] = field(default_factory=dict)
    snapshot: object | None = None

    @property
    def banners(self) -> StatusBannerManager:
        return self.overlays.banners

    def container(self, name: str) -> ContainerState:
        return self.containers.get(name, ContainerState())


class ConsoleSession:
    """Holds everything that used to be page-global state."""

    def __init__(
        self,
        *,
        scheduler: Scheduler | None = None,
        banner_hide_seconds: float = BANNER_AUTO_HIDE_SECONDS,
        on_expand: Callable[[ViewName, str], None] | None = None,
        on_banner: Callable[[ViewName], BannerListener] | None = None,
    ) -> None:
        self._scheduler = scheduler
        self._banner_hide_seconds = banner_hide_seconds
        self._on_expand = on_expand
        self._on_banner = on_banner
        self._views: dict[ViewName, ViewState] = {}
        self.active_view: ViewName | None = None
        self.generation = 0
        self.alert: Alert | None = None

    def activate(self, view: ViewName) -> StalenessToken:
        """Make ``view`` active and start a new generation."""
        self.active_view = view
        self.generation += 1
        logger.debug("Active view %s (generation %d)", view.value, self.generation)
        return StalenessToken(view, self.generation)

    def token(self) -> StalenessToken:
        if self.active_view is None:
            raise RuntimeError("No active view")
        return StalenessToken(self.active_view, self.generation)

    def is_current(self, token: StalenessToken) -> bool:
        return token.view is self.active_view and token.generation == self.generation

    def is_active(self, view: ViewName) -> bool:
        return view is self.active_view

    def view_state(self, view: ViewName) -> ViewState:
        state = self._views.get(view)
        if state is None:
            banners = StatusBannerManager(
                self._scheduler,
                hide_delay=self._banner_hide_seconds,
                on_change=self._on_banner(view) if self._on_banner is not None else None,
            )
            on_expand = None
            if self._on_expand is not None:
                hook = self._on_expand

                def on_expand(key: str, _view: ViewName = view) -> None:
                    hook(_view, key)

            state = ViewState(view=view, overlays=OverlayStore(banners, on_expand))
            self._views[view] = state
        return state

    def set_alert(self, message: str, tone: AlertTone = AlertTone.ERROR) -> Alert:
        self.alert = Alert(message, tone)
        return self.alert

    def clear_alert(self) -> None:
        self.alert = None

    def end(self) -> None:
        """Discard all overlay state (session end)."""
        for state in self._views.values():
            state.overlays.clear()
        self._views.clear()
        self.active_view = None
        self.generation += 1


__all__ = [
    "Alert",
    "ConsoleSession",
    "StalenessToken",
    "ViewState",
]
