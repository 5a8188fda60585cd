"""Smoke tests for the console app running headless."""

from __future__ import annotations

from collections.abc import AsyncIterator, Callable
from pathlib import Path

import httpx
import pytest
import pytest_asyncio
from textual.pilot import Pilot

from emuconsole.app import EmuConsoleApp
from emuconsole.constants.enums import ViewName
from emuconsole.controllers.api.client import ConsoleApiClient
from emuconsole.controllers.api.stream import EVENTS_PATH
from emuconsole.models.state.config_manager import BASE_URL_ENV, CONFIG_PATH_ENV
from emuconsole.screens import ConsoleScreen
from emuconsole.tests.fakes import (
    BASE_URL,
    FakeBackend,
    queue_payload,
    serve_dashboard,
    serve_pubsub,
    serve_queues,
)
from emuconsole.widgets import AlertBar, EntityTable, FormDialog, HelpDialog


async def wait_until(pilot: Pilot, condition: Callable[[], bool], attempts: int = 100) -> None:
    for _ in range(attempts):
        if condition():
            return
        await pilot.pause(0.02)
    raise AssertionError("condition not reached")


@pytest.fixture
def smoke_backend(monkeypatch: pytest.MonkeyPatch) -> FakeBackend:
    monkeypatch.delenv(BASE_URL_ENV, raising=False)
    monkeypatch.delenv(CONFIG_PATH_ENV, raising=False)
    backend = FakeBackend()
    serve_dashboard(backend)
    serve_queues(backend, queue_payload("alpha"), queue_payload("orders.fifo"))
    serve_pubsub(backend, [{"topic_arn": "arn:aws:sns:us-east-1:000000000000:alerts"}])
    # No live stream in smoke runs; the console keeps retrying quietly
    backend.on("GET", EVENTS_PATH, {"error": "streaming disabled"}, status=503)
    return backend


@pytest_asyncio.fixture
async def app(smoke_backend: FakeBackend, tmp_path: Path) -> AsyncIterator[EmuConsoleApp]:
    client = ConsoleApiClient(BASE_URL, transport=httpx.MockTransport(smoke_backend.handler))
    yield EmuConsoleApp(config_path=tmp_path / "settings.yaml", client=client)
    await client.aclose()


def table(app: EmuConsoleApp, table_id: str) -> EntityTable:
    return app.screen.query_one(f"#{table_id}", EntityTable)


@pytest.mark.smoke
class TestConsoleApp:
    """Navigation and rendering against a mocked backend."""

    @pytest.mark.asyncio
    async def test_dashboard_loads_services(self, app: EmuConsoleApp) -> None:
        async with app.run_test() as pilot:
            await wait_until(pilot, lambda: table(app, "services-table").row_count == 2)
            assert isinstance(app.screen, ConsoleScreen)
            assert app.screen is app.console_screen
            assert table(app, "services-table").row_keys == ["ess-queue-ess", "ess-enn-ess"]
            assert app.sub_title == BASE_URL

    @pytest.mark.asyncio
    async def test_navigate_to_queues_and_pubsub(self, app: EmuConsoleApp) -> None:
        async with app.run_test() as pilot:
            await pilot.pause()
            await pilot.press("u")
            await wait_until(pilot, lambda: table(app, "queues-table").row_count == 2)
            assert app.console_screen.controller.active_view is ViewName.QUEUES

            await pilot.press("p")
            await wait_until(pilot, lambda: table(app, "topics-table").row_count == 1)
            assert app.console_screen.controller.active_view is ViewName.PUBSUB

    @pytest.mark.asyncio
    async def test_expand_queue_shows_detail(self, app: EmuConsoleApp, smoke_backend: FakeBackend) -> None:
        smoke_backend.on(
            "GET",
            "/api/services/ess-queue-ess/queues/alpha/attributes",
            {"attributes": {"VisibilityTimeout": "30"}},
        )
        smoke_backend.on(
            "GET", "/api/services/ess-queue-ess/queues/alpha/messages/peek", {"messages": []}
        )
        async with app.run_test() as pilot:
            await pilot.pause()
            await pilot.press("u")
            queues = table(app, "queues-table")
            await wait_until(pilot, lambda: queues.row_count == 2)
            queues.focus()
            queues.move_cursor(row=0)
            await pilot.press("enter")

            panel = app.screen.query_one("#queue-detail")
            await wait_until(pilot, lambda: panel.display)
            key = queue_payload("alpha")["queue_url"]
            entry = app.console_screen.controller.session.view_state(ViewName.QUEUES).overlays.get(key)
            await wait_until(pilot, lambda: entry.attribute_cache == {"VisibilityTimeout": "30"})
            assert entry.expanded

    @pytest.mark.asyncio
    async def test_help_and_create_dialogs(self, app: EmuConsoleApp) -> None:
        async with app.run_test() as pilot:
            await pilot.pause()
            app.action_show_help()
            await pilot.pause()
            assert isinstance(app.screen, HelpDialog)
            await pilot.press("escape")
            await pilot.pause()
            assert isinstance(app.screen, ConsoleScreen)
            assert app.screen is app.console_screen

            await pilot.press("u")
            await wait_until(pilot, lambda: table(app, "queues-table").row_count == 2)
            await pilot.press("c")
            await pilot.pause()
            assert isinstance(app.screen, FormDialog)
            await pilot.press("escape")
            await pilot.pause()
            assert isinstance(app.screen, ConsoleScreen)
            assert app.screen is app.console_screen

    @pytest.mark.asyncio
    async def test_backend_error_shows_alert(self, app: EmuConsoleApp, smoke_backend: FakeBackend) -> None:
        smoke_backend.on("GET", "/api/services/ess-enn-ess/state", {"error": "pub/sub offline"}, status=500)
        async with app.run_test() as pilot:
            await pilot.pause()
            await pilot.press("p")
            alert = app.screen.query_one("#alert-bar", AlertBar)
            session = app.console_screen.controller.session
            await wait_until(pilot, lambda: session.alert is not None)
            assert session.alert.message == "pub/sub offline"
            assert alert.display
            assert alert.has_class("error")
