"""View lifecycle: switching, full fetches, stream frames and rendering.

Switching to a view cancels the previous view's banner timers, clears the
global alert, performs one full fetch and then opens the view's stream.
Every snapshot, fetched or pushed, goes through ``apply_snapshot``, which is
synchronous so reconciliation passes never interleave.
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Callable, Coroutine, Iterable
from pathlib import Path
from typing import Any

from emuconsole.constants.enums import AlertTone, BannerChannel, StreamState, ViewName
from emuconsole.controllers.base import BaseController
from emuconsole.controllers.base.errors import ConsoleError
from emuconsole.controllers.dashboard import DashboardController
from emuconsole.controllers.pubsub import PubSubController
from emuconsole.controllers.queues import QueuesController
from emuconsole.models.entities import SnapshotEntity
from emuconsole.models.state.app_settings import AppSettings
from emuconsole.sync.actions import PubSubActions, QueueActions
from emuconsole.sync.banners import BannerListener, BannerStatus, Scheduler
from emuconsole.sync.details import DetailLoader
from emuconsole.sync.edit_session import AttributeEditSession
from emuconsole.sync.reconciler import reapply_overlay, reconcile
from emuconsole.sync.render import RenderTarget
from emuconsole.sync.session import ConsoleSession, StalenessToken
from emuconsole.sync.stream_controller import (
    StreamingSubscriptionController,
    StreamTransport,
    status_label,
)

logger = logging.getLogger(__name__)

# List containers per view and how to pull their entities from a snapshot
CONTAINERS: dict[ViewName, tuple[tuple[str, Callable[[Any], Iterable[SnapshotEntity]]], ...]] = {
    ViewName.DASHBOARD: (("services", lambda snapshot: snapshot.services),),
    ViewName.QUEUES: (("queues", lambda snapshot: snapshot.queues),),
    ViewName.PUBSUB: (
        ("topics", lambda snapshot: snapshot.topics),
        ("subscriptions", lambda snapshot: snapshot.subscriptions),
    ),
}


class ViewController:
    """Drives the console for one session."""

    def __init__(
        self,
        target: RenderTarget,
        *,
        dashboard: DashboardController,
        queues: QueuesController,
        pubsub: PubSubController,
        transport: StreamTransport,
        settings: AppSettings | None = None,
        scheduler: Scheduler | None = None,
        sleep: Callable[[float], Any] = asyncio.sleep,
    ) -> None:
        self.settings = settings or AppSettings()
        self._target = target
        self._dashboard = dashboard
        self._controllers: dict[ViewName, BaseController] = {
            ViewName.DASHBOARD: dashboard,
            ViewName.QUEUES: queues,
            ViewName.PUBSUB: pubsub,
        }
        self._tasks: set[asyncio.Task[Any]] = set()

        self.session = ConsoleSession(
            scheduler=scheduler,
            banner_hide_seconds=self.settings.banner_hide_seconds,
            on_expand=self._on_expand,
            on_banner=self._banner_listener,
        )
        self.stream = StreamingSubscriptionController(
            transport,
            on_frame=self.apply_snapshot,
            is_active=self.session.is_active,
            on_status=self._on_stream_status,
            on_parse_error=self.alert,
            retry_delay=self.settings.stream_retry_seconds,
            sleep=sleep,
        )
        self.details = DetailLoader(
            self.session, queues, target, peek_limit=self.settings.peek_limit
        )
        self.editor = AttributeEditSession(
            self.session,
            queues,
            self.details,
            target,
            on_mode_change=self._reapply_overlay,
        )
        self.queue_actions = QueueActions(
            self.session,
            queues,
            self.details,
            self.alert,
            self._full_fetch,
            redrive_max_messages_per_second=self.settings.redrive_max_messages_per_second,
        )
        self.pubsub_actions = PubSubActions(self.session, pubsub, self.alert, self._full_fetch)

    @property
    def active_view(self) -> ViewName | None:
        return self.session.active_view

    # =========================================================================
    # View lifecycle
    # =========================================================================

    async def switch_view(self, view: ViewName) -> bool:
        """Activate ``view``: one full fetch, then its stream.

        Returns:
            True if the full fetch succeeded and was applied
        """
        previous = self.session.active_view
        if previous is not None:
            self.session.view_state(previous).banners.cancel_all()
        self.session.clear_alert()
        self._target.show_alert(None)

        token = self.session.activate(view)
        logger.info("Switching to view %s", view.value)
        loaded = await self._full_fetch(token)
        if self.session.is_current(token):
            self.stream.open(view)
        return loaded

    async def refresh(self) -> bool:
        """Full fetch of the active view."""
        return await self._full_fetch(self.session.token())

    async def close(self) -> None:
        """Stop the stream and background tasks and end the session."""
        await self.stream.close()
        tasks = list(self._tasks)
        for task in tasks:
            task.cancel()
        if tasks:
            await asyncio.gather(*tasks, return_exceptions=True)
        self.session.end()

    async def _full_fetch(self, token: StalenessToken) -> bool:
        controller = self._controllers[token.view]
        try:
            snapshot = await controller.fetch_all()
        except ConsoleError as exc:
            logger.warning("Loading %s failed: %s", token.view.value, exc)
            if self.session.is_current(token):
                self.alert(str(exc))
            return False
        if not self.session.is_current(token):
            logger.debug("Ignoring stale %s snapshot", token.view.value)
            return False
        self.apply_snapshot(token.view, snapshot)
        return True

    def apply_snapshot(self, view: ViewName, snapshot: Any) -> None:
        """Reconcile every container of ``view`` against ``snapshot``."""
        if not self.session.is_active(view):
            return
        state = self.session.view_state(view)
        live: list[str] = []
        entities: dict[str, SnapshotEntity] = {}

        for name, extract in CONTAINERS[view]:
            items = list(extract(snapshot))
            plan = reconcile(state.container(name), items, state.overlays)
            state.containers[name] = plan.next_state
            for entity in items:
                entities[entity.natural_key] = entity
            live.extend(plan.next_state.keys)
            if not plan.is_empty:
                self._target.apply_plan(view, name, plan)

        state.entities = entities
        state.snapshot = snapshot
        state.overlays.reap_orphans(live)
        state.overlays.ensure(live)
        self._target.show_summary(view, snapshot)

    # =========================================================================
    # Overlay interaction
    # =========================================================================

    def toggle(self, key: str) -> bool:
        """Expand or collapse ``key`` in the active view."""
        view = self.session.active_view
        if view is None:
            return False
        expanded = self.session.view_state(view).overlays.toggle(key)
        self._reapply_overlay(view, key)
        return expanded

    def _reapply_overlay(self, view: ViewName, key: str) -> None:
        state = self.session.view_state(view)
        for name in list(state.containers):
            plan = reapply_overlay(state.containers[name], key, state.overlays)
            state.containers[name] = plan.next_state
            if not plan.is_empty and self.session.is_active(view):
                self._target.apply_plan(view, name, plan)

    def _on_expand(self, view: ViewName, key: str) -> None:
        if view is not ViewName.QUEUES or not self.session.is_active(view):
            return
        token = self.session.token()
        self.spawn(self.details.refresh(key, token), name=f"details-{key}")

    # =========================================================================
    # Feedback surfaces
    # =========================================================================

    def alert(self, message: str, tone: AlertTone = AlertTone.ERROR) -> None:
        self._target.show_alert(self.session.set_alert(message, tone))

    def _banner_listener(self, view: ViewName) -> BannerListener:
        def listener(key: str, channel: BannerChannel, status: BannerStatus) -> None:
            if self.session.is_active(view):
                self._target.show_banner(view, key, channel, status)

        return listener

    def _on_stream_status(self, state: StreamState, view: ViewName | None) -> None:
        self._target.show_stream_status(status_label(state, view))

    # =========================================================================
    # Dashboard
    # =========================================================================

    async def export_config(self, service: str) -> Path | None:
        """Write a service's configuration export under ``export_path``."""
        try:
            path = await self._dashboard.export_config(service, self.settings.export_path)
        except (ConsoleError, OSError) as exc:
            self.alert(f"Export failed for {service}: {exc}")
            return None
        self.alert(f"Exported {service} configuration to {path}", AlertTone.INFO)
        return path

    # =========================================================================
    # Background tasks
    # =========================================================================

    def spawn(self, coro: Coroutine[Any, Any, Any], *, name: str | None = None) -> asyncio.Task[Any]:
        """Run ``coro`` fire-and-forget, keeping a reference until done."""
        task = asyncio.get_running_loop().create_task(coro, name=name)
        self._tasks.add(task)
        task.add_done_callback(self._task_done)
        return task

    async def wait_idle(self) -> None:
        """Wait for background tasks started so far."""
        while self._tasks:
            await asyncio.gather(*list(self._tasks), return_exceptions=True)

    def _task_done(self, task: asyncio.Task[Any]) -> None:
        self._tasks.discard(task)
        if task.cancelled():
            return
        exc = task.exception()
        if exc is not None:
            logger.error("Background task %s failed", task.get_name(), exc_info=exc)


__all__ = [
    "CONTAINERS",
    "ViewController",
]
