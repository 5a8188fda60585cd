"""Unit tests for StatusBannerManager - states, timers and listeners."""

from __future__ import annotations

import pytest

from emuconsole.constants.enums import BannerChannel, BannerState
from emuconsole.sync.banners import DEFAULT_BANNER_MESSAGES, HIDDEN, StatusBannerManager
from emuconsole.tests.fakes import FakeScheduler


def _manager(scheduler: FakeScheduler, changes: list | None = None) -> StatusBannerManager:
    def record(key, channel, status) -> None:
        if changes is not None:
            changes.append((key, channel, status))

    return StatusBannerManager(scheduler, hide_delay=3.0, on_change=record, clock=lambda: 100.0)


@pytest.mark.unit
class TestBannerStates:
    """Banner text and visibility per state."""

    def test_unknown_slot_is_hidden(self, scheduler: FakeScheduler) -> None:
        assert _manager(scheduler).get("q1") is HIDDEN
        assert not HIDDEN.visible

    def test_loading_has_no_timer(self, scheduler: FakeScheduler) -> None:
        banners = _manager(scheduler)
        status = banners.set_status("q1", BannerState.LOADING)
        assert status.visible
        assert status.message == DEFAULT_BANNER_MESSAGES[BannerChannel.ATTRIBUTES][BannerState.LOADING]
        assert status.expires_at is None
        assert scheduler.timers == []

    @pytest.mark.parametrize("state", [BannerState.SUCCESS, BannerState.ERROR])
    def test_terminal_states_auto_hide(self, scheduler: FakeScheduler, state: BannerState) -> None:
        changes: list = []
        banners = _manager(scheduler, changes)
        status = banners.set_status("q1", state, "done")
        assert status.expires_at == 103.0
        assert [timer.delay for timer in scheduler.timers] == [3.0]

        scheduler.fire_all()
        assert banners.get("q1") is HIDDEN
        assert changes[-1] == ("q1", BannerChannel.ATTRIBUTES, HIDDEN)

    def test_idle_hides_immediately(self, scheduler: FakeScheduler) -> None:
        banners = _manager(scheduler)
        banners.set_status("q1", BannerState.SUCCESS)
        banners.set_status("q1", BannerState.IDLE)
        assert banners.get("q1") is HIDDEN
        assert banners.pending_timers() == 0

    def test_channels_are_independent(self, scheduler: FakeScheduler) -> None:
        banners = _manager(scheduler)
        banners.set_status("q1", BannerState.LOADING, channel=BannerChannel.ATTRIBUTES)
        banners.set_status("q1", BannerState.ERROR, "peek failed", channel=BannerChannel.PEEK)
        assert banners.get("q1", BannerChannel.ATTRIBUTES).state is BannerState.LOADING
        assert banners.get("q1", BannerChannel.PEEK).message == "peek failed"


@pytest.mark.unit
class TestSingleTimer:
    """At most one pending hide timer per slot."""

    def test_rapid_transitions_keep_one_timer(self, scheduler: FakeScheduler) -> None:
        banners = _manager(scheduler)
        banners.set_status("q1", BannerState.LOADING)
        banners.set_status("q1", BannerState.SUCCESS)
        banners.set_status("q1", BannerState.ERROR, "boom")
        banners.set_status("q1", BannerState.SUCCESS)
        assert banners.pending_timers("q1") == 1
        assert len(scheduler.active) == 1

    def test_cancelled_timer_cannot_hide_newer_banner(self, scheduler: FakeScheduler) -> None:
        banners = _manager(scheduler)
        banners.set_status("q1", BannerState.SUCCESS, "first")
        stale = scheduler.timers[0]
        banners.set_status("q1", BannerState.LOADING)
        # A timer that fires despite cancellation must not clear the slot
        stale.callback()
        assert banners.get("q1").state is BannerState.LOADING

    def test_cancel_key_hides_shown_banners(self, scheduler: FakeScheduler) -> None:
        changes: list = []
        banners = _manager(scheduler, changes)
        banners.set_status("q1", BannerState.SUCCESS)
        banners.set_status("q2", BannerState.SUCCESS)
        changes.clear()
        banners.cancel_key("q1")
        assert banners.pending_timers("q1") == 0
        assert banners.pending_timers("q2") == 1
        assert banners.get("q1") is HIDDEN
        assert changes == [("q1", BannerChannel.ATTRIBUTES, HIDDEN)]

    def test_cancel_key_without_banners_is_quiet(self, scheduler: FakeScheduler) -> None:
        changes: list = []
        banners = _manager(scheduler, changes)
        banners.set_status("q1", BannerState.LOADING)
        changes.clear()
        banners.cancel_key("q2")
        assert changes == []

    def test_cancel_all(self, scheduler: FakeScheduler) -> None:
        changes: list = []
        banners = _manager(scheduler, changes)
        banners.set_status("q1", BannerState.SUCCESS)
        banners.set_status("q2", BannerState.ERROR, "x", channel=BannerChannel.PEEK)
        banners.set_status("q3", BannerState.LOADING)
        changes.clear()
        banners.cancel_all()
        assert banners.pending_timers() == 0
        assert all(timer.cancelled for timer in scheduler.timers)
        assert all(status is HIDDEN for _, _, status in changes)
        assert {(key, channel) for key, channel, _ in changes} == {
            ("q1", BannerChannel.ATTRIBUTES),
            ("q2", BannerChannel.PEEK),
            ("q3", BannerChannel.ATTRIBUTES),
        }
        assert len(changes) == 3


@pytest.mark.unit
class TestListener:
    """Listener failures are contained."""

    def test_listener_exception_is_logged(self, scheduler: FakeScheduler, caplog: pytest.LogCaptureFixture) -> None:
        def explode(*_args) -> None:
            raise RuntimeError("render failed")

        banners = StatusBannerManager(scheduler, on_change=explode)
        status = banners.set_status("q1", BannerState.LOADING)
        assert status.state is BannerState.LOADING
        assert "Banner listener failed" in caplog.text
