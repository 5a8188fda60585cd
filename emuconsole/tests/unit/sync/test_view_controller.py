"""Unit tests for ViewController - view lifecycle and snapshot application."""

from __future__ import annotations

import asyncio

import httpx
import pytest

from emuconsole.constants.enums import AlertTone, BannerChannel, BannerState, OperationKind, ViewName
from emuconsole.sync.view_controller import ViewController
from emuconsole.tests.fakes import (
    QUEUES_PATH,
    FakeBackend,
    FakeStreamTransport,
    RecordingTarget,
    make_queue,
    queue_payload,
    serve_dashboard,
    serve_details,
    serve_pubsub,
    serve_queues,
    settle,
)

# =============================================================================
# View switching
# =============================================================================


class TestSwitchView:
    """Full fetch first, then the stream."""

    @pytest.mark.asyncio
    @pytest.mark.unit
    async def test_full_fetch_then_stream(
        self,
        console: ViewController,
        backend: FakeBackend,
        target: RecordingTarget,
        stream_transport: FakeStreamTransport,
    ) -> None:
        serve_queues(backend, queue_payload("alpha"), queue_payload("beta"))
        assert await console.switch_view(ViewName.QUEUES) is True
        await stream_transport.wait_connected()

        inserts = target.plans_for("queues")[0].of_kind(OperationKind.INSERT)
        assert [op.fields["queue_name"] for op in inserts] == ["alpha", "beta"]
        assert stream_transport.attempts == ["ess-queue-ess"]
        assert "Stream: connected (ess-queue-ess)" in target.stream_labels
        assert target.summaries[-1][0] is ViewName.QUEUES

    @pytest.mark.asyncio
    @pytest.mark.unit
    async def test_dashboard_services_keyed_by_name(
        self, console: ViewController, backend: FakeBackend, target: RecordingTarget
    ) -> None:
        serve_dashboard(backend)
        await console.switch_view(ViewName.DASHBOARD)
        plan = target.plans_for("services")[0]
        assert plan.next_state.keys == ("ess-queue-ess", "ess-enn-ess")
        assert plan.ops[0].fields["stats"] == (("Queues", 1),)

    @pytest.mark.asyncio
    @pytest.mark.unit
    async def test_pubsub_reconciles_two_containers(
        self, console: ViewController, backend: FakeBackend, target: RecordingTarget
    ) -> None:
        serve_pubsub(backend, [{"topic_arn": "arn:aws:sns:us-east-1:000000000000:alerts"}])
        await console.switch_view(ViewName.PUBSUB)
        assert [name for _, name, _ in target.plans] == ["topics"]
        assert console.session.view_state(ViewName.PUBSUB).snapshot.stats.topics == 1

    @pytest.mark.asyncio
    @pytest.mark.unit
    async def test_fetch_error_alerts_and_stream_still_opens(
        self,
        console: ViewController,
        backend: FakeBackend,
        target: RecordingTarget,
        stream_transport: FakeStreamTransport,
    ) -> None:
        backend.on("GET", QUEUES_PATH, {"error": "backend down"}, status=500)
        assert await console.switch_view(ViewName.QUEUES) is False
        await stream_transport.wait_connected()
        assert target.last_alert.message == "backend down"
        assert target.last_alert.tone is AlertTone.ERROR

    @pytest.mark.asyncio
    @pytest.mark.unit
    async def test_switch_clears_alert_and_previous_banners(
        self, console: ViewController, backend: FakeBackend, target: RecordingTarget
    ) -> None:
        serve_queues(backend, queue_payload("alpha"))
        serve_dashboard(backend)
        await console.switch_view(ViewName.QUEUES)
        key = make_queue("alpha").queue_url
        banners = console.session.view_state(ViewName.QUEUES).banners
        banners.set_status(key, BannerState.SUCCESS, "done")
        console.alert("something broke")

        await console.switch_view(ViewName.DASHBOARD)

        assert banners.pending_timers() == 0
        assert None in target.alerts
        assert console.session.alert is None

    @pytest.mark.asyncio
    @pytest.mark.unit
    async def test_stale_fetch_is_discarded(
        self, console: ViewController, backend: FakeBackend, target: RecordingTarget
    ) -> None:
        gate = asyncio.Event()

        async def slow_queues(_request: httpx.Request) -> httpx.Response:
            await gate.wait()
            return httpx.Response(200, json={"queues": [queue_payload("late")]})

        backend.on("GET", QUEUES_PATH, slow_queues)
        serve_dashboard(backend)

        pending = asyncio.create_task(console.switch_view(ViewName.QUEUES))
        await settle()
        await console.switch_view(ViewName.DASHBOARD)
        gate.set()

        assert await pending is False
        assert target.plans_for("queues") == []
        assert console.active_view is ViewName.DASHBOARD


# =============================================================================
# Stream frames and overlays
# =============================================================================


class TestSnapshots:
    """Pushed frames go through the same reconciliation."""

    @pytest.mark.asyncio
    @pytest.mark.unit
    async def test_pushed_counter_change_updates_one_field(
        self,
        console: ViewController,
        backend: FakeBackend,
        target: RecordingTarget,
        stream_transport: FakeStreamTransport,
    ) -> None:
        serve_queues(backend, queue_payload("alpha"))
        await console.switch_view(ViewName.QUEUES)
        await stream_transport.wait_connected()

        stream_transport.send({"queues": [queue_payload("alpha", visible_count=3)]})
        stream_transport.send({"queues": [queue_payload("alpha", visible_count=3)]})
        await settle()

        plans = target.plans_for("queues")
        assert len(plans) == 2
        assert [dict(op.fields) for op in plans[1].ops] == [{"visible_count": 3}]

    @pytest.mark.asyncio
    @pytest.mark.unit
    async def test_expanded_row_survives_snapshot(
        self, console: ViewController, backend: FakeBackend, stream_transport: FakeStreamTransport
    ) -> None:
        serve_queues(backend, queue_payload("alpha"))
        serve_details(backend, "alpha", messages=[{"message_id": "m-1", "body": "hi", "receive_count": 1}])
        await console.switch_view(ViewName.QUEUES)
        key = make_queue("alpha").queue_url
        assert console.toggle(key) is True
        await console.wait_idle()
        await stream_transport.wait_connected()

        stream_transport.send({"queues": [queue_payload("alpha", delayed_count=2)]})
        await settle()

        entry = console.session.view_state(ViewName.QUEUES).overlays.get(key)
        assert entry.expanded
        assert entry.attribute_cache is not None
        assert [message.message_id for message in entry.peek_messages] == ["m-1"]

    @pytest.mark.asyncio
    @pytest.mark.unit
    async def test_removed_entity_reaps_overlay(
        self, console: ViewController, backend: FakeBackend, stream_transport: FakeStreamTransport
    ) -> None:
        serve_queues(backend, queue_payload("alpha"), queue_payload("beta"))
        await console.switch_view(ViewName.QUEUES)
        await stream_transport.wait_connected()
        key = make_queue("alpha").queue_url
        state = console.session.view_state(ViewName.QUEUES)
        state.banners.set_status(key, BannerState.ERROR, "boom")

        stream_transport.send({"queues": [queue_payload("beta")]})
        await settle()

        assert key not in state.overlays
        assert state.banners.pending_timers(key) == 0

    @pytest.mark.asyncio
    @pytest.mark.unit
    async def test_expand_loads_details_with_banners(
        self, console: ViewController, backend: FakeBackend, target: RecordingTarget
    ) -> None:
        serve_queues(backend, queue_payload("alpha"))
        serve_details(backend, "alpha")
        await console.switch_view(ViewName.QUEUES)
        key = make_queue("alpha").queue_url
        console.toggle(key)
        await console.wait_idle()

        states = [(channel.value, status.state) for _, k, channel, status in target.banners if k == key]
        assert ("attributes", BannerState.LOADING) in states
        assert ("attributes", BannerState.SUCCESS) in states
        assert ("peek", BannerState.SUCCESS) in states
        assert target.attributes[-1][2]["VisibilityTimeout"] == "30"

    @pytest.mark.asyncio
    @pytest.mark.unit
    async def test_switching_away_hides_detail_banners(
        self, console: ViewController, backend: FakeBackend, target: RecordingTarget
    ) -> None:
        serve_queues(backend, queue_payload("alpha"))
        serve_details(backend, "alpha")
        serve_dashboard(backend)
        await console.switch_view(ViewName.QUEUES)
        key = make_queue("alpha").queue_url
        console.toggle(key)
        await console.wait_idle()
        shown = [status for _, k, channel, status in target.banners if (k, channel) == (key, BannerChannel.ATTRIBUTES)]
        assert shown[-1].state is BannerState.SUCCESS

        await console.switch_view(ViewName.DASHBOARD)
        await console.switch_view(ViewName.QUEUES)

        shown = [
            (view, status)
            for view, k, channel, status in target.banners
            if (k, channel) == (key, BannerChannel.ATTRIBUTES)
        ]
        assert shown[-1][0] is ViewName.QUEUES
        assert shown[-1][1].state is BannerState.IDLE
        assert not shown[-1][1].visible
        assert console.session.view_state(ViewName.QUEUES).banners.pending_timers() == 0

    @pytest.mark.asyncio
    @pytest.mark.unit
    async def test_detail_failure_shows_error_banner(
        self, console: ViewController, backend: FakeBackend
    ) -> None:
        serve_queues(backend, queue_payload("alpha"))
        serve_details(backend, "alpha")
        backend.on("GET", f"{QUEUES_PATH}/alpha/messages/peek", {"error": "peek unavailable"}, status=503)
        await console.switch_view(ViewName.QUEUES)
        key = make_queue("alpha").queue_url
        console.toggle(key)
        await console.wait_idle()

        banner = console.session.view_state(ViewName.QUEUES).banners.get(key, BannerChannel.PEEK)
        assert banner.state is BannerState.ERROR
        assert banner.message == "peek unavailable"


# =============================================================================
# Config export
# =============================================================================


class TestExport:
    """Dashboard configuration export."""

    @pytest.mark.asyncio
    @pytest.mark.unit
    async def test_export_writes_file_and_reports(
        self, console: ViewController, backend: FakeBackend, target: RecordingTarget, tmp_path
    ) -> None:
        serve_dashboard(backend)
        backend.on(
            "GET",
            "/api/services/ess-queue-ess/config/export",
            lambda _request: httpx.Response(
                200,
                content=b"queues: []\n",
                headers={"Content-Disposition": 'attachment; filename="../queues.yaml"'},
            ),
        )
        await console.switch_view(ViewName.DASHBOARD)

        path = await console.export_config("ess-queue-ess")

        assert path == tmp_path / "queues.yaml"
        assert path.read_bytes() == b"queues: []\n"
        assert target.last_alert.tone is AlertTone.INFO
        assert target.last_alert.message == f"Exported ess-queue-ess configuration to {path}"

    @pytest.mark.asyncio
    @pytest.mark.unit
    async def test_export_failure_alerts(
        self, console: ViewController, backend: FakeBackend, target: RecordingTarget
    ) -> None:
        serve_dashboard(backend)
        await console.switch_view(ViewName.DASHBOARD)
        assert await console.export_config("ess-enn-ess") is None
        assert target.last_alert.message.startswith("Export failed for ess-enn-ess: ")
