"""Detail panel for the expanded queue: attributes, edit form and peek."""

from __future__ import annotations

from contextlib import suppress

from rich.markup import escape
from textual.app import ComposeResult
from textual.containers import Horizontal, Vertical
from textual.css.query import NoMatches
from textual.widgets import Button, Input, Label, Static

from emuconsole.constants.enums import BannerChannel
from emuconsole.constants.limits import (
    EDITABLE_QUEUE_ATTRIBUTE_KEYS,
    VISIBLE_QUEUE_ATTRIBUTE_KEYS,
)
from emuconsole.models.entities import PeekMessage
from emuconsole.sync.banners import BannerStatus
from emuconsole.sync.overlay import OverlayEntry
from emuconsole.widgets.status import BannerLine

_BANNER_IDS: dict[BannerChannel, str] = {
    BannerChannel.ATTRIBUTES: "attr-banner",
    BannerChannel.PEEK: "peek-banner",
}


def input_id(attribute: str) -> str:
    return f"draft-{attribute}"


def render_attributes(attributes: dict[str, str] | None) -> str:
    if attributes is None:
        return "Loading..."
    if not attributes:
        return "No queue attributes found."
    ordered = [name for name in VISIBLE_QUEUE_ATTRIBUTE_KEYS if name in attributes]
    ordered += sorted(name for name in attributes if name not in VISIBLE_QUEUE_ATTRIBUTE_KEYS)
    return "\n".join(f"{name}: {escape(attributes[name])}" for name in ordered)


def render_peek(messages: list[PeekMessage] | None) -> str:
    if messages is None:
        return "Loading..."
    if not messages:
        return "No messages available."
    return "\n".join(
        f"{escape(message.message_id)}  (received {message.receive_count}x)\n  {escape(message.body)}"
        for message in messages
    )


class QueueDetailPanel(Vertical):
    """Shows one queue's overlay state.

    Inputs post ``Input.Changed``; the owning screen forwards them to the
    edit session as draft values.
    """

    DEFAULT_CSS = """
    QueueDetailPanel {
        height: auto;
        max-height: 24;
        border: round $primary;
        padding: 0 1;
        display: none;
    }
    QueueDetailPanel .edit-row {
        height: auto;
    }
    QueueDetailPanel .edit-row Label {
        width: 32;
        padding: 1 0 0 0;
    }
    QueueDetailPanel .edit-row Input {
        width: 24;
    }
    QueueDetailPanel #attr-editor {
        height: auto;
        display: none;
    }
    QueueDetailPanel .buttons {
        height: auto;
    }
    """

    def __init__(self, *, id: str | None = None) -> None:
        super().__init__(id=id)
        self.queue_key: str | None = None

    def compose(self) -> ComposeResult:
        yield Static("", id="detail-title")
        yield BannerLine(id=_BANNER_IDS[BannerChannel.ATTRIBUTES])
        yield Static("", id="attr-preview")
        with Vertical(id="attr-editor"):
            for name in EDITABLE_QUEUE_ATTRIBUTE_KEYS:
                with Horizontal(classes="edit-row"):
                    yield Label(name)
                    yield Input(id=input_id(name))
        with Horizontal(classes="buttons"):
            yield Button("Edit Attributes", id="edit-attributes")
            yield Button("Save", id="save-attributes", variant="primary")
            yield Button("Cancel", id="cancel-edit")
        yield BannerLine(id=_BANNER_IDS[BannerChannel.PEEK])
        yield Static("", id="peek-preview")

    def show_queue(self, key: str | None, title: str = "") -> None:
        self.queue_key = key
        self.display = key is not None
        with suppress(NoMatches):
            self.query_one("#detail-title", Static).update(escape(title or (key or "")))

    def show_banner(self, channel: BannerChannel, status: BannerStatus) -> None:
        with suppress(NoMatches):
            self.query_one(f"#{_BANNER_IDS[channel]}", BannerLine).show_status(status)

    def show_entry(self, entry: OverlayEntry) -> None:
        """Reflect cache, edit mode and drafts of ``entry``."""
        with suppress(NoMatches):
            self.query_one("#attr-preview", Static).update(render_attributes(entry.attribute_cache))
            editor = self.query_one("#attr-editor", Vertical)
            editor.display = entry.edit_mode
            if entry.edit_mode:
                for name in EDITABLE_QUEUE_ATTRIBUTE_KEYS:
                    field = self.query_one(f"#{input_id(name)}", Input)
                    draft = entry.drafts.get(name, "")
                    if field.value != draft:
                        with field.prevent(Input.Changed):
                            field.value = draft
            self.query_one("#edit-attributes", Button).display = not entry.edit_mode
            self.query_one("#save-attributes", Button).display = entry.edit_mode
            self.query_one("#save-attributes", Button).disabled = entry.submit_in_flight
            self.query_one("#cancel-edit", Button).display = entry.edit_mode

    def show_peek(self, messages: list[PeekMessage] | None) -> None:
        with suppress(NoMatches):
            self.query_one("#peek-preview", Static).update(render_peek(messages))


__all__ = [
    "QueueDetailPanel",
    "input_id",
    "render_attributes",
    "render_peek",
]
