"""Event stream transport for ``GET /api/events``.

Decodes the text/event-stream wire format line by line. The decoder tracks
``event``, ``data``, ``id`` and ``retry`` fields and dispatches on a blank
line; comment lines (leading ``:``) are ignored.
"""

from __future__ import annotations

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from dataclasses import dataclass

import httpx

from emuconsole.constants.timeouts import STREAM_CONNECT_TIMEOUT
from emuconsole.controllers.api.client import ConsoleApiClient, error_message
from emuconsole.controllers.base.errors import StreamError

logger = logging.getLogger(__name__)

EVENTS_PATH = "/api/events"


@dataclass(frozen=True)
class SseEvent:
    """One dispatched server-sent event."""

    event: str = "message"
    data: str = ""
    id: str | None = None
    retry_ms: int | None = None


class SseDecoder:
    """Incremental server-sent events decoder."""

    def __init__(self) -> None:
        self._event = ""
        self._data: list[str] = []
        self._id: str | None = None
        self._retry_ms: int | None = None

    def feed(self, line: str) -> SseEvent | None:
        """Consume one line (without terminator); return an event on dispatch."""
        line = line.rstrip("\r\n")
        if not line:
            return self._dispatch()
        if line.startswith(":"):
            return None

        name, sep, value = line.partition(":")
        if sep and value.startswith(" "):
            value = value[1:]

        if name == "event":
            self._event = value
        elif name == "data":
            self._data.append(value)
        elif name == "id":
            if "\0" not in value:
                self._id = value
        elif name == "retry":
            if value.isdigit():
                self._retry_ms = int(value)
        return None

    def _dispatch(self) -> SseEvent | None:
        retry_ms = self._retry_ms
        self._retry_ms = None
        if not self._data:
            self._event = ""
            # A retry-only block still updates the reconnection delay
            if retry_ms is not None:
                return SseEvent(event="", data="", id=self._id, retry_ms=retry_ms)
            return None
        event = SseEvent(
            event=self._event or "message",
            data="\n".join(self._data),
            id=self._id,
            retry_ms=retry_ms,
        )
        self._event = ""
        self._data = []
        return event


async def iter_events(lines: AsyncIterator[str]) -> AsyncIterator[SseEvent]:
    """Decode an async stream of lines into events."""
    decoder = SseDecoder()
    async for line in lines:
        event = decoder.feed(line)
        if event is not None:
            yield event


class HttpxSseTransport:
    """Opens the admin console event stream over httpx."""

    def __init__(self, client: ConsoleApiClient, *, connect_timeout: float = STREAM_CONNECT_TIMEOUT) -> None:
        self._client = client
        # Frames may be far apart; only the connect phase is bounded
        self._timeout = httpx.Timeout(connect_timeout, read=None)

    @asynccontextmanager
    async def connect(self, view: str) -> AsyncIterator[AsyncIterator[SseEvent]]:
        """Open the stream for ``view`` and yield its event iterator.

        Entering the context means the server accepted the subscription.
        Transport failures, before or during iteration, surface as
        ``StreamError``.
        """
        try:
            async with self._client.http.stream(
                "GET",
                EVENTS_PATH,
                params={"view": view},
                headers={"Accept": "text/event-stream", "Cache-Control": "no-cache"},
                timeout=self._timeout,
            ) as response:
                if response.is_error:
                    await response.aread()
                    raise StreamError(error_message(response))
                yield iter_events(response.aiter_lines())
        except httpx.HTTPError as exc:
            raise StreamError(str(exc) or exc.__class__.__name__) from exc


__all__ = [
    "EVENTS_PATH",
    "HttpxSseTransport",
    "SseDecoder",
    "SseEvent",
    "iter_events",
]
