"""Status surfaces: global alert bar, stream label and entity banners."""

from __future__ import annotations

from textual.widgets import Static

from emuconsole.constants.enums import AlertTone, BannerState
from emuconsole.sync.banners import BannerStatus
from emuconsole.sync.session import Alert


class AlertBar(Static):
    """One-line global alert; hidden when empty."""

    DEFAULT_CSS = """
    AlertBar {
        height: auto;
        padding: 0 1;
        display: none;
    }
    AlertBar.error {
        background: $error 30%;
        color: $text;
    }
    AlertBar.info {
        background: $success 30%;
        color: $text;
    }
    """

    def show_alert(self, alert: Alert | None) -> None:
        self.remove_class("error", "info")
        if alert is None:
            self.update("")
            self.display = False
            return
        self.add_class("info" if alert.tone is AlertTone.INFO else "error")
        self.update(alert.message)
        self.display = True


class StreamStatusLabel(Static):
    """Shows ``Stream: <state> (<view>)``."""

    DEFAULT_CSS = """
    StreamStatusLabel {
        width: auto;
        padding: 0 1;
        color: $text-muted;
    }
    """

    def __init__(self, *, id: str | None = None) -> None:
        super().__init__("Stream: disconnected", id=id)


class BannerLine(Static):
    """Per-entity banner for one channel."""

    DEFAULT_CSS = """
    BannerLine {
        height: auto;
        padding: 0 1;
        display: none;
    }
    BannerLine.loading {
        background: $panel;
    }
    BannerLine.success {
        background: $success 30%;
    }
    BannerLine.error {
        background: $error 30%;
    }
    """

    def show_status(self, status: BannerStatus) -> None:
        self.remove_class(*(state.value for state in BannerState))
        if not status.visible:
            self.update("")
            self.display = False
            return
        self.add_class(status.state.value)
        self.update(status.message)
        self.display = True


__all__ = [
    "AlertBar",
    "BannerLine",
    "StreamStatusLabel",
]
