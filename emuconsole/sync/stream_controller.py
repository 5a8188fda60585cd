"""Single active server-push subscription with automatic reconnection.

State machine::

    disconnected -> connecting -> connected
    connecting | connected --(transport error or end of stream)--> retrying
    retrying --(after the reconnection delay)--> connecting

The reconnection delay starts at the event-stream default and follows the
server's ``retry:`` field when one arrives.
"""

from __future__ import annotations

import asyncio
import json
import logging
from collections.abc import AsyncIterator, Awaitable, Callable
from contextlib import AbstractAsyncContextManager, suppress
from typing import Any, Protocol

from emuconsole.constants.enums import StreamState, ViewName
from emuconsole.constants.timeouts import STREAM_RETRY_DELAY
from emuconsole.constants.values import MSG_STREAM_PARSE_FAILED, STREAM_EVENT_NAME
from emuconsole.controllers.api.stream import SseEvent
from emuconsole.controllers.base.errors import StreamError
from emuconsole.models.entities import parse_snapshot

logger = logging.getLogger(__name__)


class StreamTransport(Protocol):
    def connect(self, view: str) -> AbstractAsyncContextManager[AsyncIterator[SseEvent]]: ...


FrameHandler = Callable[[ViewName, Any], None]
StatusHandler = Callable[[StreamState, "ViewName | None"], None]


def status_label(state: StreamState, view: ViewName | None) -> str:
    """Human readable stream status, e.g. ``Stream: connected (dashboard)``."""
    if view is None:
        return f"Stream: {state.value}"
    return f"Stream: {state.value} ({view.value})"


class StreamingSubscriptionController:
    """Owns the one live event stream subscription."""

    def __init__(
        self,
        transport: StreamTransport,
        *,
        on_frame: FrameHandler,
        is_active: Callable[[ViewName], bool],
        on_status: StatusHandler | None = None,
        on_parse_error: Callable[[str], None] | None = None,
        retry_delay: float = STREAM_RETRY_DELAY,
        sleep: Callable[[float], Awaitable[Any]] = asyncio.sleep,
    ) -> None:
        self._transport = transport
        self._on_frame = on_frame
        self._is_active = is_active
        self._on_status = on_status
        self._on_parse_error = on_parse_error
        self._default_retry_delay = retry_delay
        self._sleep = sleep
        self._task: asyncio.Task[None] | None = None
        self._serial = 0
        self.state = StreamState.DISCONNECTED
        self.view: ViewName | None = None
        self.retry_delay = retry_delay

    @property
    def label(self) -> str:
        return status_label(self.state, self.view)

    @property
    def is_running(self) -> bool:
        return self._task is not None and not self._task.done()

    def open(self, view: ViewName) -> None:
        """Subscribe to ``view``, closing any previous subscription first."""
        self._cancel_task()
        self._serial += 1
        self.view = view
        self.retry_delay = self._default_retry_delay
        self._task = asyncio.get_running_loop().create_task(
            self._run(view, self._serial),
            name=f"stream-{view.value}",
        )

    async def close(self) -> None:
        """Stop the subscription and wait for its task to finish."""
        task = self._task
        self._cancel_task()
        self._serial += 1
        if task is not None:
            with suppress(asyncio.CancelledError):
                await task
        self._set_state(StreamState.DISCONNECTED, self.view, self._serial)

    def _cancel_task(self) -> None:
        if self._task is not None and not self._task.done():
            self._task.cancel()
        self._task = None

    async def _run(self, view: ViewName, serial: int) -> None:
        while serial == self._serial:
            self._set_state(StreamState.CONNECTING, view, serial)
            try:
                async with self._transport.connect(view.value) as events:
                    self._set_state(StreamState.CONNECTED, view, serial)
                    async for event in events:
                        if serial != self._serial:
                            return
                        self._handle_event(view, serial, event)
                logger.info("Stream for %s ended by server", view.value)
            except StreamError as exc:
                logger.warning("Stream for %s failed: %s", view.value, exc)
            self._set_state(StreamState.RETRYING, view, serial)
            await self._sleep(self.retry_delay)

    def _handle_event(self, view: ViewName, serial: int, event: SseEvent) -> None:
        if event.retry_ms is not None:
            self.retry_delay = event.retry_ms / 1000
        if event.event != STREAM_EVENT_NAME:
            return
        if serial != self._serial or not self._is_active(view):
            logger.debug("Discarding %s frame for inactive view", view.value)
            return
        try:
            snapshot = parse_snapshot(view, json.loads(event.data))
        except ValueError as exc:
            # json.JSONDecodeError and pydantic.ValidationError are ValueErrors
            logger.warning("Unparseable %s frame: %s", view.value, exc)
            if self._on_parse_error is not None:
                self._on_parse_error(MSG_STREAM_PARSE_FAILED.format(error=exc))
            return
        try:
            self._on_frame(view, snapshot)
        except Exception:
            logger.exception("Applying %s frame failed", view.value)

    def _set_state(self, state: StreamState, view: ViewName | None, serial: int) -> None:
        if serial != self._serial:
            return
        self.state = state
        if self._on_status is not None:
            self._on_status(state, view)


__all__ = [
    "StreamTransport",
    "StreamingSubscriptionController",
    "status_label",
]
