"""Per-entity status banners with auto-expiring timers.

A banner lives on a (key, channel) slot. ``loading`` stays until replaced;
``success`` and ``error`` hide themselves after ``hide_delay`` seconds;
``idle`` hides immediately. Every state change cancels the slot's pending
timer first, so a slot never has more than one timer.
"""

from __future__ import annotations

import asyncio
import itertools
import logging
import time
from collections.abc import Callable
from dataclasses import dataclass
from functools import partial
from typing import Protocol

from emuconsole.constants.enums import BannerChannel, BannerState
from emuconsole.constants.timeouts import BANNER_AUTO_HIDE_SECONDS

logger = logging.getLogger(__name__)


class TimerHandle(Protocol):
    def cancel(self) -> None: ...


Scheduler = Callable[[float, Callable[[], None]], TimerHandle]

DEFAULT_BANNER_MESSAGES: dict[BannerChannel, dict[BannerState, str]] = {
    BannerChannel.ATTRIBUTES: {
        BannerState.LOADING: "Loading queue attributes...",
        BannerState.SUCCESS: "Attributes updated.",
        BannerState.ERROR: "Failed to load attributes.",
    },
    BannerChannel.PEEK: {
        BannerState.LOADING: "Loading latest peek messages...",
        BannerState.SUCCESS: "Peek messages updated.",
        BannerState.ERROR: "Failed to load peek messages.",
    },
}


@dataclass(frozen=True)
class BannerStatus:
    """Displayed banner for one slot."""

    state: BannerState = BannerState.IDLE
    message: str = ""
    expires_at: float | None = None

    @property
    def visible(self) -> bool:
        return self.state is not BannerState.IDLE


HIDDEN = BannerStatus()

BannerListener = Callable[[str, BannerChannel, BannerStatus], None]


def loop_scheduler(delay: float, callback: Callable[[], None]) -> TimerHandle:
    """Schedule on the running asyncio loop."""
    return asyncio.get_running_loop().call_later(delay, callback)


class StatusBannerManager:
    """Tracks banner state and hide timers for one view."""

    def __init__(
        self,
        scheduler: Scheduler | None = None,
        *,
        hide_delay: float = BANNER_AUTO_HIDE_SECONDS,
        on_change: BannerListener | None = None,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self._scheduler = scheduler or loop_scheduler
        self._hide_delay = hide_delay
        self._clock = clock
        self.on_change = on_change
        self._banners: dict[tuple[str, BannerChannel], BannerStatus] = {}
        self._timers: dict[tuple[str, BannerChannel], tuple[int, TimerHandle]] = {}
        self._serials = itertools.count(1)

    @property
    def hide_delay(self) -> float:
        return self._hide_delay

    def get(self, key: str, channel: BannerChannel = BannerChannel.ATTRIBUTES) -> BannerStatus:
        return self._banners.get((key, channel), HIDDEN)

    def set_status(
        self,
        key: str,
        state: BannerState,
        message: str | None = None,
        *,
        channel: BannerChannel = BannerChannel.ATTRIBUTES,
    ) -> BannerStatus:
        """Show ``state`` on the (key, channel) slot.

        ``message`` defaults to the channel's standard text for the state.
        """
        slot = (key, channel)
        self._cancel_timer(slot)

        if state is BannerState.IDLE:
            self._banners.pop(slot, None)
            self._notify(slot, HIDDEN)
            return HIDDEN

        text = message or DEFAULT_BANNER_MESSAGES[channel].get(state, "")
        expires_at: float | None = None
        if state in (BannerState.SUCCESS, BannerState.ERROR):
            serial = next(self._serials)
            handle = self._scheduler(self._hide_delay, partial(self._expire, slot, serial))
            self._timers[slot] = (serial, handle)
            expires_at = self._clock() + self._hide_delay

        status = BannerStatus(state=state, message=text, expires_at=expires_at)
        self._banners[slot] = status
        self._notify(slot, status)
        return status

    def cancel_key(self, key: str) -> None:
        """Drop every banner and timer for ``key``; shown banners are notified hidden."""
        self._drop([slot for slot in self._banners.keys() | self._timers.keys() if slot[0] == key])

    def cancel_all(self) -> None:
        """Drop every banner and timer; shown banners are notified hidden."""
        self._drop(list(self._banners.keys() | self._timers.keys()))

    def _drop(self, slots: list[tuple[str, BannerChannel]]) -> None:
        for slot in slots:
            self._cancel_timer(slot)
            if self._banners.pop(slot, None) is not None:
                self._notify(slot, HIDDEN)

    def pending_timers(self, key: str | None = None) -> int:
        """Number of armed hide timers, optionally for one key."""
        if key is None:
            return len(self._timers)
        return sum(1 for slot in self._timers if slot[0] == key)

    def _cancel_timer(self, slot: tuple[str, BannerChannel]) -> None:
        pending = self._timers.pop(slot, None)
        if pending is not None:
            pending[1].cancel()

    def _expire(self, slot: tuple[str, BannerChannel], serial: int) -> None:
        pending = self._timers.get(slot)
        if pending is None or pending[0] != serial:
            return
        del self._timers[slot]
        self._banners.pop(slot, None)
        self._notify(slot, HIDDEN)

    def _notify(self, slot: tuple[str, BannerChannel], status: BannerStatus) -> None:
        if self.on_change is None:
            return
        try:
            self.on_change(slot[0], slot[1], status)
        except Exception:
            logger.exception("Banner listener failed for %s/%s", slot[0], slot[1].value)


__all__ = [
    "DEFAULT_BANNER_MESSAGES",
    "HIDDEN",
    "BannerListener",
    "BannerStatus",
    "Scheduler",
    "StatusBannerManager",
    "TimerHandle",
    "loop_scheduler",
]
