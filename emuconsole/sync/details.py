"""Background loading of queue detail panels (attributes and peek)."""

from __future__ import annotations

import asyncio
import logging

from emuconsole.constants.defaults import PEEK_LIMIT_DEFAULT
from emuconsole.constants.enums import BannerChannel, BannerState
from emuconsole.controllers.base.errors import ConsoleError
from emuconsole.controllers.queues import QueuesController
from emuconsole.models.entities import QueueSummary
from emuconsole.sync.render import RenderTarget
from emuconsole.sync.session import ConsoleSession, StalenessToken

logger = logging.getLogger(__name__)


class DetailLoader:
    """Fetches attribute and peek details for expanded queues.

    Failures land in the key's status banner; nothing is raised.
    """

    def __init__(
        self,
        session: ConsoleSession,
        queues: QueuesController,
        target: RenderTarget,
        *,
        peek_limit: int = PEEK_LIMIT_DEFAULT,
    ) -> None:
        self._session = session
        self._queues = queues
        self._target = target
        self._peek_limit = peek_limit

    def queue(self, token: StalenessToken, key: str) -> QueueSummary | None:
        entity = self._session.view_state(token.view).entities.get(key)
        return entity if isinstance(entity, QueueSummary) else None

    async def load_attributes(self, key: str, token: StalenessToken, *, quiet: bool = False) -> bool:
        """Fetch attributes for ``key`` into its overlay cache.

        When the key is in edit mode the result is parked instead of written.
        ``quiet`` skips the loading and success banners.

        Returns:
            True if the result was applied (cached or parked)
        """
        queue = self.queue(token, key)
        if queue is None:
            return False
        state = self._session.view_state(token.view)
        banners = state.banners
        if not quiet:
            banners.set_status(key, BannerState.LOADING, channel=BannerChannel.ATTRIBUTES)

        try:
            result = await self._queues.fetch_attributes(queue.resolved_queue_id)
        except ConsoleError as exc:
            if self._session.is_current(token) and key in state.overlays:
                banners.set_status(key, BannerState.ERROR, str(exc), channel=BannerChannel.ATTRIBUTES)
            return False

        if not self._session.is_current(token):
            logger.debug("Ignoring stale attributes for %s", key)
            return False
        entry = state.overlays.peek(key)
        if entry is None:
            return False

        if entry.edit_mode:
            entry.parked_attributes = dict(result.attributes)
            if not quiet:
                banners.set_status(key, BannerState.IDLE, channel=BannerChannel.ATTRIBUTES)
            return True

        entry.attribute_cache = dict(result.attributes)
        self._target.show_attributes(token.view, key, entry)
        if not quiet:
            banners.set_status(key, BannerState.SUCCESS, channel=BannerChannel.ATTRIBUTES)
        return True

    async def load_peek(self, key: str, token: StalenessToken) -> bool:
        """Fetch the peek preview for ``key``."""
        queue = self.queue(token, key)
        if queue is None:
            return False
        state = self._session.view_state(token.view)
        banners = state.banners
        banners.set_status(key, BannerState.LOADING, channel=BannerChannel.PEEK)

        try:
            result = await self._queues.peek_messages(queue.resolved_queue_id, self._peek_limit)
        except ConsoleError as exc:
            if self._session.is_current(token) and key in state.overlays:
                banners.set_status(key, BannerState.ERROR, str(exc), channel=BannerChannel.PEEK)
            return False

        if not self._session.is_current(token):
            logger.debug("Ignoring stale peek for %s", key)
            return False
        entry = state.overlays.peek(key)
        if entry is None:
            return False

        entry.peek_messages = list(result.messages)
        self._target.show_peek(token.view, key, entry.peek_messages)
        banners.set_status(key, BannerState.SUCCESS, channel=BannerChannel.PEEK)
        return True

    async def refresh(self, key: str, token: StalenessToken, *, quiet_attributes: bool = False) -> None:
        """Load attributes and peek messages concurrently."""
        await asyncio.gather(
            self.load_attributes(key, token, quiet=quiet_attributes),
            self.load_peek(key, token),
        )


__all__ = ["DetailLoader"]
