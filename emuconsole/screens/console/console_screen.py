"""Console screen: the single screen hosting all three views.

The screen is the render target of the sync engine. It never diffs or
caches entity data itself; it only applies render plans and shows the
banners, alerts and overlay state the engine hands it.
"""

from __future__ import annotations

import logging
from collections.abc import Awaitable, Callable
from contextlib import suppress
from typing import Any

from textual import on
from textual.app import ComposeResult
from textual.containers import Horizontal, Vertical
from textual.css.query import NoMatches
from textual.screen import Screen
from textual.widgets import (
    Button,
    ContentSwitcher,
    DataTable,
    Footer,
    Header,
    Input,
    LoadingIndicator,
    Static,
)

from emuconsole.constants.defaults import (
    DEFAULT_CREATE_QUEUE_ATTRIBUTES,
    DLQ_MAX_RECEIVE_COUNT_DEFAULT,
)
from emuconsole.constants.enums import BannerChannel, ViewName
from emuconsole.constants.limits import EDITABLE_QUEUE_ATTRIBUTE_KEYS
from emuconsole.constants.values import (
    EXPORTABLE_SERVICES,
    SUBSCRIPTION_PROTOCOLS,
    VIEW_TITLES,
)
from emuconsole.controllers.dashboard import DashboardController
from emuconsole.controllers.pubsub import PubSubController
from emuconsole.controllers.queues import QueuesController
from emuconsole.keyboard import CONSOLE_SCREEN_BINDINGS
from emuconsole.models.entities import PeekMessage, QueueSummary, TopicSummary
from emuconsole.models.state.app_settings import AppSettings
from emuconsole.screens.console.config import (
    NAV_BUTTON_PREFIX,
    SUMMARY_IDS,
    TABLE_IDS,
    TABLE_LAYOUTS,
    VIEW_PANE_IDS,
    summary_text,
)
from emuconsole.screens.mixins.worker_mixin import WorkerMixin
from emuconsole.sync.banners import BannerStatus, Scheduler
from emuconsole.sync.overlay import OverlayEntry
from emuconsole.sync.reconciler import RenderPlan
from emuconsole.sync.session import Alert
from emuconsole.sync.stream_controller import StreamTransport
from emuconsole.sync.view_controller import ViewController
from emuconsole.widgets import (
    AlertBar,
    ConfirmDialog,
    EntityTable,
    FieldSpec,
    FormDialog,
    QueueDetailPanel,
    StreamStatusLabel,
)
from emuconsole.widgets.queue_detail import input_id

logger = logging.getLogger(__name__)

_DRAFT_PREFIX = input_id("")


class ConsoleScreen(WorkerMixin, Screen):
    """Dashboard, queue and pub/sub views over one live session."""

    BINDINGS = CONSOLE_SCREEN_BINDINGS

    DEFAULT_CSS = """
    ConsoleScreen #menu {
        height: 3;
    }
    ConsoleScreen #menu Button {
        min-width: 16;
        margin-right: 1;
    }
    ConsoleScreen #menu Button.active {
        text-style: bold reverse;
    }
    ConsoleScreen #view-title {
        padding: 0 1;
        text-style: bold;
    }
    ConsoleScreen .summary {
        padding: 0 1;
        color: $text-muted;
    }
    ConsoleScreen #loading-indicator {
        height: 1;
        display: none;
    }
    ConsoleScreen .pane-label {
        padding: 1 1 0 1;
        text-style: bold;
    }
    """

    def __init__(
        self,
        *,
        dashboard: DashboardController,
        queues: QueuesController,
        pubsub: PubSubController,
        transport: StreamTransport,
        settings: AppSettings | None = None,
        scheduler: Scheduler | None = None,
    ) -> None:
        super().__init__()
        self.settings = settings or AppSettings()
        self.controller = ViewController(
            self,
            dashboard=dashboard,
            queues=queues,
            pubsub=pubsub,
            transport=transport,
            settings=self.settings,
            scheduler=scheduler,
        )

    def compose(self) -> ComposeResult:
        yield Header()
        with Horizontal(id="menu"):
            for view in ViewName:
                yield Button(VIEW_TITLES[view.value][0], id=f"{NAV_BUTTON_PREFIX}{view.name.lower()}")
            yield StreamStatusLabel(id="stream-status")
        yield Static("", id="view-title")
        yield AlertBar(id="alert-bar")
        yield LoadingIndicator(id="loading-indicator")
        with ContentSwitcher(initial=VIEW_PANE_IDS[self.settings.view], id="views"):
            with Vertical(id=VIEW_PANE_IDS[ViewName.DASHBOARD]):
                yield Static("", id=SUMMARY_IDS[ViewName.DASHBOARD], classes="summary")
                yield self._table(ViewName.DASHBOARD, "services")
            with Vertical(id=VIEW_PANE_IDS[ViewName.QUEUES]):
                yield Static("", id=SUMMARY_IDS[ViewName.QUEUES], classes="summary")
                yield self._table(ViewName.QUEUES, "queues")
                yield QueueDetailPanel(id="queue-detail")
            with Vertical(id=VIEW_PANE_IDS[ViewName.PUBSUB]):
                yield Static("", id=SUMMARY_IDS[ViewName.PUBSUB], classes="summary")
                yield Static("Topics", classes="pane-label")
                yield self._table(ViewName.PUBSUB, "topics")
                yield Static("Subscriptions", classes="pane-label")
                yield self._table(ViewName.PUBSUB, "subscriptions")
        yield Footer()

    @staticmethod
    def _table(view: ViewName, container: str) -> EntityTable:
        columns, key_label = TABLE_LAYOUTS[(view, container)]
        return EntityTable(columns, key_label=key_label, id=TABLE_IDS[(view, container)])

    def on_mount(self) -> None:
        self.switch_to(self.settings.view)

    async def on_unmount(self) -> None:
        self.cancel_workers()
        await self.controller.close()

    # =========================================================================
    # Navigation
    # =========================================================================

    def switch_to(self, view: ViewName) -> None:
        """Show ``view`` and start its full fetch and stream."""
        with suppress(NoMatches):
            self.query_one("#views", ContentSwitcher).current = VIEW_PANE_IDS[view]
            title, subtitle = VIEW_TITLES[view.value]
            self.query_one("#view-title", Static).update(f"{title}  {subtitle}")
            for button in self.query("#menu Button").results(Button):
                button.set_class(button.id == f"{NAV_BUTTON_PREFIX}{view.name.lower()}", "active")
        self.start_worker(self.controller.switch_view(view), name=f"switch-{view.value}")

    def refresh_view(self) -> None:
        if self.controller.active_view is not None:
            self.start_worker(self.controller.refresh, name="refresh")

    @on(Button.Pressed, "#menu Button")
    def _on_nav_pressed(self, event: Button.Pressed) -> None:
        event.stop()
        name = (event.button.id or "").removeprefix(NAV_BUTTON_PREFIX)
        with suppress(KeyError):
            self.switch_to(ViewName[name.upper()])

    # =========================================================================
    # RenderTarget
    # =========================================================================

    def apply_plan(self, view: ViewName, container: str, plan: RenderPlan) -> None:
        table_id = TABLE_IDS.get((view, container))
        if table_id is None:
            return
        with suppress(NoMatches):
            self.query_one(f"#{table_id}", EntityTable).apply_plan(plan)
        if view is ViewName.QUEUES:
            self._follow_detail(plan)

    def show_summary(self, view: ViewName, snapshot: Any) -> None:
        with suppress(NoMatches):
            self.query_one(f"#{SUMMARY_IDS[view]}", Static).update(summary_text(view, snapshot))

    def show_banner(self, view: ViewName, key: str, channel: BannerChannel, status: BannerStatus) -> None:
        panel = self._detail_for(view, key)
        if panel is not None:
            panel.show_banner(channel, status)

    def show_attributes(self, view: ViewName, key: str, entry: OverlayEntry) -> None:
        panel = self._detail_for(view, key)
        if panel is not None:
            panel.show_entry(entry)

    def show_peek(self, view: ViewName, key: str, messages: list[PeekMessage]) -> None:
        panel = self._detail_for(view, key)
        if panel is not None:
            panel.show_peek(messages)

    def show_alert(self, alert: Alert | None) -> None:
        with suppress(NoMatches):
            self.query_one("#alert-bar", AlertBar).show_alert(alert)

    def show_stream_status(self, label: str) -> None:
        with suppress(NoMatches):
            self.query_one("#stream-status", StreamStatusLabel).update(label)

    def show_error_state(self, message: str) -> None:
        self.controller.alert(message)

    # =========================================================================
    # Queue detail panel
    # =========================================================================

    def _detail_panel(self) -> QueueDetailPanel | None:
        try:
            return self.query_one("#queue-detail", QueueDetailPanel)
        except NoMatches:
            return None

    def _detail_for(self, view: ViewName, key: str) -> QueueDetailPanel | None:
        panel = self._detail_panel()
        if view is not ViewName.QUEUES or panel is None or panel.queue_key != key:
            return None
        return panel

    def _follow_detail(self, plan: RenderPlan) -> None:
        """Point the detail panel at the last expanded queue."""
        panel = self._detail_panel()
        if panel is None:
            return
        for op in plan.ops:
            if op.expanded and op.key != panel.queue_key:
                self._show_detail(op.key)
            elif not op.expanded and op.key == panel.queue_key:
                panel.show_queue(None)
        if panel.queue_key is not None and panel.queue_key not in plan.next_state.rows:
            panel.show_queue(None)

    def _show_detail(self, key: str) -> None:
        panel = self._detail_panel()
        if panel is None:
            return
        state = self.controller.session.view_state(ViewName.QUEUES)
        entity = state.entities.get(key)
        title = entity.queue_name if isinstance(entity, QueueSummary) else key
        panel.show_queue(key, title)
        entry = state.overlays.get(key)
        panel.show_entry(entry)
        panel.show_peek(entry.peek_messages)
        for channel in BannerChannel:
            panel.show_banner(channel, state.overlays.banner(key, channel))

    @on(Input.Changed)
    def _on_draft_changed(self, event: Input.Changed) -> None:
        input_name = event.input.id or ""
        panel = self._detail_panel()
        if not input_name.startswith(_DRAFT_PREFIX) or panel is None or panel.queue_key is None:
            return
        event.stop()
        self.controller.editor.set_draft(panel.queue_key, input_name.removeprefix(_DRAFT_PREFIX), event.value)

    @on(Button.Pressed, "#queue-detail Button")
    def _on_detail_button(self, event: Button.Pressed) -> None:
        event.stop()
        actions: dict[str, Callable[[], None]] = {
            "edit-attributes": self.action_edit_attributes,
            "save-attributes": self.action_save_attributes,
            "cancel-edit": self.action_cancel_edit,
        }
        handler = actions.get(event.button.id or "")
        if handler is not None:
            handler()

    # =========================================================================
    # Selection
    # =========================================================================

    @on(DataTable.RowSelected)
    def _on_row_selected(self, event: DataTable.RowSelected) -> None:
        event.stop()
        if event.row_key.value is not None:
            self.controller.toggle(str(event.row_key.value))

    def _selected(self, view: ViewName, container: str) -> str | None:
        try:
            return self.query_one(f"#{TABLE_IDS[(view, container)]}", EntityTable).selected_key()
        except NoMatches:
            return None

    def _selected_queue(self) -> str | None:
        if self.controller.active_view is not ViewName.QUEUES:
            return None
        panel = self._detail_panel()
        if panel is not None and panel.queue_key is not None and self._focus_in(panel):
            return panel.queue_key
        return self._selected(ViewName.QUEUES, "queues")

    def _focus_in(self, widget: Any) -> bool:
        focused = self.focused
        return focused is not None and widget in focused.ancestors_with_self

    def _focused_container(self) -> str:
        focused = self.focused
        if focused is not None and focused.id == TABLE_IDS[(ViewName.PUBSUB, "subscriptions")]:
            return "subscriptions"
        return "topics"

    def _require(self, key: str | None, what: str) -> str | None:
        if key is None:
            self.controller.alert(f"Select a {what} first")
        return key

    def _run(self, name: str, work: Awaitable[Any]) -> None:
        self.start_worker(work, name=name)

    def _confirm(self, message: str, name: str, operation: Callable[[], Awaitable[Any]]) -> None:
        def done(confirmed: bool | None) -> None:
            if confirmed:
                self._run(name, operation())

        self.app.push_screen(ConfirmDialog(message), done)

    def _form(
        self,
        title: str,
        fields: list[FieldSpec],
        name: str,
        submit: Callable[[dict[str, Any]], Awaitable[Any]],
    ) -> None:
        def done(values: dict[str, Any] | None) -> None:
            if values is not None:
                self._run(name, submit(values))

        self.app.push_screen(FormDialog(title, fields), done)

    # =========================================================================
    # Attribute editing
    # =========================================================================

    def action_edit_attributes(self) -> None:
        key = self._require(self._selected_queue(), "queue")
        if key is None:
            return
        entry = self.controller.session.view_state(ViewName.QUEUES).overlays.get(key)
        if not entry.expanded:
            self.controller.toggle(key)
        self._run(f"edit-{key}", self.controller.editor.enter_edit(key))

    def action_save_attributes(self) -> None:
        key = self._selected_queue()
        if key is not None:
            self._run(f"save-{key}", self.controller.editor.submit(key))

    def action_cancel_edit(self) -> None:
        key = self._selected_queue()
        if key is not None:
            self.controller.editor.cancel(key)

    # =========================================================================
    # Entity actions
    # =========================================================================

    def action_create(self) -> None:
        view = self.controller.active_view
        if view is ViewName.QUEUES:
            fields = [
                FieldSpec("queue_name", "Queue name"),
                FieldSpec("is_fifo", "FIFO queue", kind="bool", default=False),
                FieldSpec("create_dlq", "Create dead-letter queue", kind="bool", default=False),
                FieldSpec("dlq_max_receive_count", "DLQ max receive count", default=DLQ_MAX_RECEIVE_COUNT_DEFAULT),
            ]
            fields += [
                FieldSpec(attr, attr, default="", placeholder=str(DEFAULT_CREATE_QUEUE_ATTRIBUTES[attr]))
                for attr in EDITABLE_QUEUE_ATTRIBUTE_KEYS
            ]
            self._form("Create queue", fields, "create-queue", self._submit_create_queue)
        elif view is ViewName.PUBSUB:
            self._form(
                "Create topic",
                [FieldSpec("name", "Topic name")],
                "create-topic",
                lambda values: self.controller.pubsub_actions.create_topic(values["name"]),
            )

    async def _submit_create_queue(self, values: dict[str, Any]) -> bool:
        return await self.controller.queue_actions.create_queue(
            values["queue_name"],
            is_fifo=values["is_fifo"],
            create_dlq=values["create_dlq"],
            dlq_max_receive_count=values["dlq_max_receive_count"],
            attributes={attr: values[attr] for attr in EDITABLE_QUEUE_ATTRIBUTE_KEYS},
        )

    def action_send(self) -> None:
        view = self.controller.active_view
        if view is ViewName.QUEUES:
            key = self._require(self._selected_queue(), "queue")
            if key is None:
                return
            self._form(
                f"Send message to {key}",
                [
                    FieldSpec("body", "Message body"),
                    FieldSpec("group_id", "Message Group ID (FIFO)"),
                    FieldSpec("dedup_id", "Message Deduplication ID (FIFO, optional)"),
                ],
                "send-message",
                lambda values: self.controller.queue_actions.send_message(
                    key,
                    values["body"],
                    message_group_id=values["group_id"],
                    message_deduplication_id=values["dedup_id"],
                ),
            )
        elif view is ViewName.PUBSUB:
            topic = self._require(self._selected(ViewName.PUBSUB, "topics"), "topic")
            if topic is None:
                return
            self._form(
                f"Publish to {topic}",
                [FieldSpec("message", "Message"), FieldSpec("subject", "Subject (optional)")],
                "publish",
                lambda values: self.controller.pubsub_actions.publish(topic, values["message"], values["subject"]),
            )

    def action_subscribe(self) -> None:
        if self.controller.active_view is not ViewName.PUBSUB:
            return
        entities = self.controller.session.view_state(ViewName.PUBSUB).entities
        topics = tuple(key for key, entity in entities.items() if isinstance(entity, TopicSummary))
        self._form(
            "Create subscription",
            [
                FieldSpec(
                    "topic_arn",
                    "Topic",
                    kind="select",
                    default=self._selected(ViewName.PUBSUB, "topics") or "",
                    options=topics,
                ),
                FieldSpec("protocol", "Protocol", kind="select", default=SUBSCRIPTION_PROTOCOLS[0], options=SUBSCRIPTION_PROTOCOLS),
                FieldSpec("endpoint", "Endpoint", placeholder="http://... or queue ARN"),
            ],
            "create-subscription",
            lambda values: self.controller.pubsub_actions.create_subscription(
                values["topic_arn"], values["protocol"], values["endpoint"]
            ),
        )

    def action_delete(self) -> None:
        view = self.controller.active_view
        if view is ViewName.QUEUES:
            key = self._require(self._selected_queue(), "queue")
            if key is not None:
                self._confirm(
                    f"Delete queue {key}?",
                    "delete-queue",
                    lambda: self.controller.queue_actions.delete_queue(key),
                )
        elif view is ViewName.PUBSUB:
            container = self._focused_container()
            key = self._require(self._selected(ViewName.PUBSUB, container), container[:-1])
            if key is None:
                return
            if container == "subscriptions":
                self._confirm(
                    f"Delete subscription {key}?",
                    "delete-subscription",
                    lambda: self.controller.pubsub_actions.delete_subscription(key),
                )
            else:
                self._confirm(
                    f"Delete topic {key}?",
                    "delete-topic",
                    lambda: self.controller.pubsub_actions.delete_topic(key),
                )

    def action_purge(self) -> None:
        key = self._require(self._selected_queue(), "queue") if self.controller.active_view is ViewName.QUEUES else None
        if key is not None:
            self._confirm(
                f"Purge all messages from {key}?",
                "purge-queue",
                lambda: self.controller.queue_actions.purge_queue(key),
            )

    def action_redrive(self) -> None:
        key = self._require(self._selected_queue(), "queue") if self.controller.active_view is ViewName.QUEUES else None
        if key is None:
            return
        entry = self.controller.session.view_state(ViewName.QUEUES).overlays.get(key)
        if not entry.expanded:
            self.controller.toggle(key)
        self._run(f"redrive-{key}", self.controller.queue_actions.start_redrive(key))

    def action_export_config(self) -> None:
        if self.controller.active_view is not ViewName.DASHBOARD:
            return
        selected = self._selected(ViewName.DASHBOARD, "services")
        if selected in EXPORTABLE_SERVICES:
            self._run(f"export-{selected}", self.controller.export_config(selected))
            return
        self._form(
            "Export configuration",
            [FieldSpec("service", "Service", kind="select", default=EXPORTABLE_SERVICES[0], options=EXPORTABLE_SERVICES)],
            "export-config",
            lambda values: self.controller.export_config(values["service"]),
        )


__all__ = [
    "ConsoleScreen",
]
