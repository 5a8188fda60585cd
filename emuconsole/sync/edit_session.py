"""Inline editing of queue attributes.

Phases per key: ``viewing -> editing -> validating -> viewing | editing``.
Draft values live on the overlay entry and are set explicitly through
``set_draft``; nothing is read back from widgets.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from typing import Any

from emuconsole.constants.enums import BannerChannel, BannerState, EditPhase, ViewName
from emuconsole.constants.limits import EDITABLE_QUEUE_ATTRIBUTE_KEYS
from emuconsole.constants.values import MSG_ATTRIBUTES_SAVED
from emuconsole.controllers.base.errors import ConsoleError, ValidationFailed
from emuconsole.controllers.queues import QueuesController
from emuconsole.sync.details import DetailLoader
from emuconsole.sync.overlay import OverlayEntry
from emuconsole.sync.render import RenderTarget
from emuconsole.sync.session import ConsoleSession
from emuconsole.utils.validators import validate_queue_attributes

logger = logging.getLogger(__name__)


class AttributeEditSession:
    """Edit, validate and submit the five editable queue attributes."""

    def __init__(
        self,
        session: ConsoleSession,
        queues: QueuesController,
        details: DetailLoader,
        target: RenderTarget,
        *,
        on_mode_change: Callable[[ViewName, str], None] | None = None,
    ) -> None:
        self._session = session
        self._queues = queues
        self._details = details
        self._target = target
        self._on_mode_change = on_mode_change

    def phase(self, key: str) -> EditPhase:
        entry = self._entry(key)
        return entry.phase if entry is not None else EditPhase.VIEWING

    def drafts(self, key: str) -> dict[str, str]:
        entry = self._entry(key)
        return dict(entry.drafts) if entry is not None else {}

    async def enter_edit(self, key: str) -> bool:
        """Switch ``key`` to editing, fetching attributes first if uncached.

        Returns:
            True if the key is now in edit mode
        """
        token = self._session.token()
        overlays = self._session.view_state(token.view).overlays
        entry = overlays.get(key)
        if entry.edit_mode:
            return True

        if entry.attribute_cache is None:
            loaded = await self._details.load_attributes(key, token)
            if not loaded or not self._session.is_current(token):
                return False
            entry = overlays.peek(key)
            if entry is None or entry.attribute_cache is None:
                return False
            if entry.edit_mode:
                return True

        cache = entry.attribute_cache or {}
        entry.drafts = {name: cache.get(name, "") for name in EDITABLE_QUEUE_ATTRIBUTE_KEYS}
        entry.parked_attributes = None
        entry.phase = EditPhase.EDITING
        self._changed(token.view, key, entry)
        return True

    def set_draft(self, key: str, name: str, value: Any) -> bool:
        """Record a draft value; ignored unless ``key`` is editing."""
        if name not in EDITABLE_QUEUE_ATTRIBUTE_KEYS:
            raise KeyError(name)
        entry = self._entry(key)
        if entry is None or entry.phase is not EditPhase.EDITING:
            return False
        entry.drafts[name] = "" if value is None else str(value)
        return True

    async def submit(self, key: str) -> bool:
        """Validate drafts and save them.

        A second submit while one is in flight is a no-op. On success the
        cache is written optimistically, edit mode ends and a confirming
        re-fetch replaces the cache.

        Returns:
            True if the backend accepted the new attributes
        """
        token = self._session.token()
        state = self._session.view_state(token.view)
        entry = state.overlays.peek(key)
        if entry is None or not entry.edit_mode:
            return False
        if entry.submit_in_flight:
            logger.debug("Submit already in flight for %s", key)
            return False

        entry.submit_in_flight = True
        entry.phase = EditPhase.VALIDATING
        try:
            try:
                values = validate_queue_attributes(entry.drafts)
            except ValidationFailed as exc:
                entry.phase = EditPhase.EDITING
                state.banners.set_status(key, BannerState.ERROR, exc.message, channel=BannerChannel.ATTRIBUTES)
                return False

            try:
                await self._queues.update_attributes(key, values)
            except ConsoleError as exc:
                entry.phase = EditPhase.EDITING
                if self._session.is_current(token) and state.overlays.peek(key) is entry:
                    state.banners.set_status(key, BannerState.ERROR, str(exc), channel=BannerChannel.ATTRIBUTES)
                return False

            if not self._session.is_current(token) or state.overlays.peek(key) is not entry:
                # The view was abandoned mid-flight; keep the drafts for later
                entry.phase = EditPhase.EDITING
                logger.debug("Attribute save for %s completed after view switch", key)
                return True

            cache = dict(entry.attribute_cache or {})
            cache.update({name: str(value) for name, value in values.items()})
            entry.attribute_cache = cache
            entry.parked_attributes = None
            entry.drafts = {}
            entry.phase = EditPhase.VIEWING
        finally:
            entry.submit_in_flight = False

        self._changed(token.view, key, entry)
        state.banners.set_status(key, BannerState.SUCCESS, MSG_ATTRIBUTES_SAVED, channel=BannerChannel.ATTRIBUTES)
        await self._details.load_attributes(key, token, quiet=True)
        return True

    def cancel(self, key: str) -> bool:
        """Leave edit mode without saving, applying any parked refresh."""
        entry = self._entry(key)
        if entry is None or entry.phase is not EditPhase.EDITING:
            return False
        if entry.parked_attributes is not None:
            entry.attribute_cache = entry.parked_attributes
            entry.parked_attributes = None
        entry.drafts = {}
        entry.phase = EditPhase.VIEWING
        view = self._session.active_view
        if view is not None:
            self._changed(view, key, entry)
        return True

    def _entry(self, key: str) -> OverlayEntry | None:
        view = self._session.active_view
        if view is None:
            return None
        return self._session.view_state(view).overlays.peek(key)

    def _changed(self, view: ViewName, key: str, entry: OverlayEntry) -> None:
        self._target.show_attributes(view, key, entry)
        if self._on_mode_change is not None:
            self._on_mode_change(view, key)


__all__ = ["AttributeEditSession"]
