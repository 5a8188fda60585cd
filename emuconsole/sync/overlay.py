"""Ephemeral per-entity UI state that outlives individual snapshots."""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterable, Iterator
from dataclasses import dataclass, field

from emuconsole.constants.enums import BannerChannel, EditPhase
from emuconsole.models.entities import PeekMessage
from emuconsole.sync.banners import BannerStatus, StatusBannerManager

logger = logging.getLogger(__name__)


@dataclass
class OverlayEntry:
    """UI state for one natural key.

    While ``edit_mode`` is true no automated refresh may replace
    ``attribute_cache`` or ``drafts``; such a refresh is parked in
    ``parked_attributes`` and applied on cancel.
    """

    key: str
    expanded: bool = False
    phase: EditPhase = EditPhase.VIEWING
    submit_in_flight: bool = False
    attribute_cache: dict[str, str] | None = None
    drafts: dict[str, str] = field(default_factory=dict)
    parked_attributes: dict[str, str] | None = None
    peek_messages: list[PeekMessage] | None = None

    @property
    def edit_mode(self) -> bool:
        return self.phase is not EditPhase.VIEWING


class OverlayStore:
    """Overlay entries for one view, keyed by natural key."""

    def __init__(
        self,
        banners: StatusBannerManager,
        on_expand: Callable[[str], None] | None = None,
    ) -> None:
        self.banners = banners
        self.on_expand = on_expand
        self._entries: dict[str, OverlayEntry] = {}

    def __contains__(self, key: object) -> bool:
        return key in self._entries

    def __iter__(self) -> Iterator[str]:
        return iter(list(self._entries))

    def __len__(self) -> int:
        return len(self._entries)

    def get(self, key: str) -> OverlayEntry:
        """Return the entry for ``key``, creating it on first reference."""
        entry = self._entries.get(key)
        if entry is None:
            entry = OverlayEntry(key=key)
            self._entries[key] = entry
        return entry

    def peek(self, key: str) -> OverlayEntry | None:
        """Return the entry for ``key`` without creating one."""
        return self._entries.get(key)

    def ensure(self, keys: Iterable[str]) -> None:
        for key in keys:
            self.get(key)

    def banner(self, key: str, channel: BannerChannel = BannerChannel.ATTRIBUTES) -> BannerStatus:
        return self.banners.get(key, channel)

    def toggle(self, key: str) -> bool:
        """Flip ``expanded`` and return the new value.

        Expanding fires the ``on_expand`` hook, which starts the detail
        refreshes in the background. Hook failures are logged, not raised.
        """
        entry = self.get(key)
        entry.expanded = not entry.expanded
        if entry.expanded and self.on_expand is not None:
            try:
                self.on_expand(key)
            except Exception:
                logger.exception("Expand hook failed for %s", key)
        return entry.expanded

    def reap_orphans(self, live_keys: Iterable[str]) -> list[str]:
        """Delete entries whose key is not live, cancelling their timers first."""
        live = set(live_keys)
        reaped = [key for key in self._entries if key not in live]
        for key in reaped:
            self.banners.cancel_key(key)
            del self._entries[key]
        if reaped:
            logger.debug("Reaped overlay entries: %s", reaped)
        return reaped

    def clear(self) -> None:
        """Drop every entry and banner (session end)."""
        self.banners.cancel_all()
        self._entries.clear()


__all__ = [
    "OverlayEntry",
    "OverlayStore",
]
