"""Fixtures shared by the console test suite."""

from __future__ import annotations

from collections.abc import AsyncIterator

import httpx
import pytest
import pytest_asyncio

from emuconsole.controllers.api.client import ConsoleApiClient
from emuconsole.sync.view_controller import ViewController
from emuconsole.tests.fakes import (
    BASE_URL,
    FakeBackend,
    FakeScheduler,
    FakeStreamTransport,
    RecordingTarget,
    build_console,
)


@pytest.fixture
def scheduler() -> FakeScheduler:
    return FakeScheduler()


@pytest.fixture
def target() -> RecordingTarget:
    return RecordingTarget()


@pytest.fixture
def backend() -> FakeBackend:
    return FakeBackend()


@pytest_asyncio.fixture
async def api_client(backend: FakeBackend) -> AsyncIterator[ConsoleApiClient]:
    client = ConsoleApiClient(BASE_URL, timeout=1.0, transport=httpx.MockTransport(backend.handler))
    yield client
    await client.aclose()


@pytest.fixture
def stream_transport() -> FakeStreamTransport:
    return FakeStreamTransport()


@pytest_asyncio.fixture
async def console(
    target: RecordingTarget,
    api_client: ConsoleApiClient,
    stream_transport: FakeStreamTransport,
    scheduler: FakeScheduler,
    tmp_path,
) -> AsyncIterator[ViewController]:
    controller = build_console(target, api_client, stream_transport, scheduler, export_path=str(tmp_path))
    yield controller
    await controller.close()
