"""Tests for the event stream decoder and httpx transport."""

from __future__ import annotations

import httpx
import pytest

from emuconsole.controllers.api.client import ConsoleApiClient
from emuconsole.controllers.api.stream import (
    EVENTS_PATH,
    HttpxSseTransport,
    SseDecoder,
    SseEvent,
)
from emuconsole.controllers.base.errors import StreamError
from emuconsole.tests.fakes import BASE_URL


def decode(*lines: str) -> list[SseEvent]:
    decoder = SseDecoder()
    events = []
    for line in lines:
        event = decoder.feed(line)
        if event is not None:
            events.append(event)
    return events


class TestSseDecoder:
    """Tests for SseDecoder."""

    def test_named_event(self) -> None:
        events = decode("event: state", 'data: {"queues": []}', "")
        assert events == [SseEvent(event="state", data='{"queues": []}')]

    def test_multiline_data_joined(self) -> None:
        events = decode("data: first", "data:second", "")
        assert events[0].data == "first\nsecond"
        assert events[0].event == "message"

    def test_comments_and_blank_blocks_ignored(self) -> None:
        assert decode(": keep-alive", "", "") == []

    def test_retry_only_block(self) -> None:
        events = decode("retry: 2500", "")
        assert events == [SseEvent(event="", data="", retry_ms=2500)]

    def test_invalid_retry_ignored(self) -> None:
        events = decode("retry: soon", "data: x", "")
        assert events[0].retry_ms is None

    def test_id_persists_and_event_resets(self) -> None:
        events = decode("id: 7", "event: state", "data: a", "", "data: b", "")
        assert [(e.id, e.event) for e in events] == [("7", "state"), ("7", "message")]

    def test_crlf_terminators(self) -> None:
        events = decode("data: x\r\n", "\r\n")
        assert events[0].data == "x"


class TestHttpxSseTransport:
    """Tests for HttpxSseTransport over a mock transport."""

    @pytest.mark.asyncio
    async def test_yields_events_for_view(self) -> None:
        seen: list[httpx.Request] = []

        def handler(request: httpx.Request) -> httpx.Response:
            seen.append(request)
            body = b'event: state\ndata: {"services": []}\n\n: ping\n\n'
            return httpx.Response(200, content=body, headers={"Content-Type": "text/event-stream"})

        client = ConsoleApiClient(BASE_URL, transport=httpx.MockTransport(handler))
        transport = HttpxSseTransport(client, connect_timeout=1.0)
        try:
            async with transport.connect("dashboard") as events:
                received = [event async for event in events]
        finally:
            await client.aclose()

        assert received == [SseEvent(event="state", data='{"services": []}')]
        assert seen[0].url.path == EVENTS_PATH
        assert seen[0].url.params["view"] == "dashboard"
        assert seen[0].headers["accept"] == "text/event-stream"

    @pytest.mark.asyncio
    async def test_error_status_raises_stream_error(self) -> None:
        client = ConsoleApiClient(
            BASE_URL,
            transport=httpx.MockTransport(lambda _r: httpx.Response(404, json={"error": "unknown view"})),
        )
        transport = HttpxSseTransport(client)
        try:
            with pytest.raises(StreamError, match="unknown view"):
                async with transport.connect("nope"):
                    pass
        finally:
            await client.aclose()

    @pytest.mark.asyncio
    async def test_connect_failure_raises_stream_error(self) -> None:
        def refuse(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("refused", request=request)

        client = ConsoleApiClient(BASE_URL, transport=httpx.MockTransport(refuse))
        try:
            with pytest.raises(StreamError, match="refused"):
                async with HttpxSseTransport(client).connect("dashboard"):
                    pass
        finally:
            await client.aclose()
