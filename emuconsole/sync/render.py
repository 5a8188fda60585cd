"""Presentation seam driven by the sync engine."""

from __future__ import annotations

from typing import Any, Protocol

from emuconsole.constants.enums import BannerChannel, ViewName
from emuconsole.models.entities import PeekMessage
from emuconsole.sync.banners import BannerStatus
from emuconsole.sync.overlay import OverlayEntry
from emuconsole.sync.reconciler import RenderPlan
from emuconsole.sync.session import Alert


class RenderTarget(Protocol):
    """Anything that can show the console: the Textual screen or a recorder."""

    def apply_plan(self, view: ViewName, container: str, plan: RenderPlan) -> None: ...

    def show_summary(self, view: ViewName, snapshot: Any) -> None: ...

    def show_banner(
        self,
        view: ViewName,
        key: str,
        channel: BannerChannel,
        status: BannerStatus,
    ) -> None: ...

    def show_attributes(self, view: ViewName, key: str, entry: OverlayEntry) -> None: ...

    def show_peek(self, view: ViewName, key: str, messages: list[PeekMessage]) -> None: ...

    def show_alert(self, alert: Alert | None) -> None: ...

    def show_stream_status(self, label: str) -> None: ...


__all__ = ["RenderTarget"]
