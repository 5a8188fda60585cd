"""Tests for console widgets and their text helpers."""

from __future__ import annotations

import pytest
from textual.app import App, ComposeResult

from emuconsole.models.entities import PeekMessage
from emuconsole.screens.console.config import QUEUE_TABLE_COLUMNS
from emuconsole.sync.banners import StatusBannerManager
from emuconsole.sync.overlay import OverlayStore
from emuconsole.sync.reconciler import ContainerState, reconcile
from emuconsole.tests.fakes import FakeScheduler, make_queue
from emuconsole.widgets import EntityTable, format_cell, mode_marker
from emuconsole.widgets.queue_detail import render_attributes, render_peek


class TestCellText:
    """Tests for format_cell and mode_marker."""

    @pytest.mark.parametrize(
        ("value", "expected"),
        [
            (True, "yes"),
            (False, "-"),
            (None, "-"),
            ("", "-"),
            (0, "0"),
            (12, "12"),
            ((("Queues", 2), ("Messages", 5)), "Queues: 2, Messages: 5"),
            ((), "-"),
        ],
    )
    def test_format_cell(self, value: object, expected: str) -> None:
        assert format_cell(value) == expected

    def test_mode_marker(self) -> None:
        assert mode_marker(False, False) == "▸"
        assert mode_marker(True, False) == "▾"
        assert mode_marker(True, True) == "▾✎"


class TestDetailText:
    """Tests for the queue detail renderers."""

    def test_attributes_states(self) -> None:
        assert render_attributes(None) == "Loading..."
        assert render_attributes({}) == "No queue attributes found."

    def test_attributes_known_keys_first(self) -> None:
        text = render_attributes({"Zeta": "1", "DelaySeconds": "0", "VisibilityTimeout": "30"})
        assert text.splitlines() == ["VisibilityTimeout: 30", "DelaySeconds: 0", "Zeta: 1"]

    def test_attribute_values_escaped(self) -> None:
        assert render_attributes({"RedrivePolicy": "[bold]x"}) == "RedrivePolicy: \\[bold]x"

    def test_peek(self) -> None:
        assert render_peek([]) == "No messages available."
        text = render_peek([PeekMessage(message_id="m-1", body="hello", receive_count=2)])
        assert text == "m-1  (received 2x)\n  hello"


class TableApp(App[None]):
    def compose(self) -> ComposeResult:
        yield EntityTable(QUEUE_TABLE_COLUMNS, id="table")


class TestEntityTable:
    """Tests for EntityTable plan application."""

    @pytest.mark.asyncio
    async def test_apply_plans_keeps_rows_keyed(self) -> None:
        overlays = OverlayStore(StatusBannerManager(FakeScheduler()))
        app = TableApp()
        async with app.run_test() as pilot:
            table = app.query_one("#table", EntityTable)
            first = reconcile(ContainerState(), [make_queue("alpha"), make_queue("beta")], overlays)
            table.apply_plan(first)
            await pilot.pause()
            assert table.row_keys == [make_queue("alpha").queue_url, make_queue("beta").queue_url]

            overlays.get(make_queue("beta").queue_url).expanded = True
            second = reconcile(first.next_state, [make_queue("beta", visible_count=4)], overlays)
            table.apply_plan(second)
            await pilot.pause()

            key = make_queue("beta").queue_url
            assert table.row_keys == [key]
            assert table.get_cell(key, "visible_count") == "4"
            assert table.get_cell(key, "_mode") == "▾"
