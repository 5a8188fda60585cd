"""WorkerMixin - async worker bookkeeping for console screens.

Every network-bound action of a screen runs as a Textual worker:
- Workers run in the event loop (``thread=False``) since all I/O is async
- Workers never crash the app (``exit_on_error=False``); failures are
  logged and reported through ``show_error_state``
- ``is_loading`` stays True while any tracked worker is running
"""

from __future__ import annotations

import logging
import time
from collections.abc import Awaitable, Callable
from contextlib import suppress
from typing import Any

from textual._context import NoActiveAppError
from textual.css.query import NoMatches, WrongType
from textual.reactive import reactive
from textual.widgets import LoadingIndicator
from textual.worker import Worker, WorkerState

logger = logging.getLogger(__name__)

_FINISHED = (WorkerState.SUCCESS, WorkerState.CANCELLED, WorkerState.ERROR)


class WorkerMixin:
    """Tracks the async workers a screen starts.

    The host screen composes a ``#loading-indicator`` LoadingIndicator and
    may override ``show_error_state``.
    """

    is_loading = reactive(False)
    loading_duration_ms = reactive(0.0, init=False)

    def __init__(self, *args: Any, **kwargs: Any) -> None:
        super().__init__(*args, **kwargs)
        self._worker_started: dict[str, float] = {}

    def watch_is_loading(self, loading: bool) -> None:
        self._set_indicator(loading)

    def start_worker(
        self,
        work: Callable[[], Awaitable[Any]] | Awaitable[Any],
        *,
        exclusive: bool = False,
        name: str | None = None,
        group: str = "default",
    ) -> Worker[Any]:
        """Run ``work`` as an event-loop worker.

        Args:
            work: Coroutine, or async function taking no arguments
            exclusive: Cancel running workers of ``group`` first. Console
                actions leave this off so concurrent requests all finish.
            name: Worker name used in logs
            group: Worker group
        """
        worker = self.run_worker(  # type: ignore[attr-defined]
            work,
            exclusive=exclusive,
            thread=False,
            name=name,
            group=group,
            exit_on_error=False,
        )
        self._worker_started[str(id(worker))] = time.monotonic()
        self.is_loading = True
        return worker

    def cancel_workers(self) -> None:
        """Cancel every worker of this screen and forget their start times."""
        with suppress(NoActiveAppError):
            self.workers.cancel_all()  # type: ignore[attr-defined]
        self._worker_started.clear()
        self.is_loading = False

    def on_worker_state_changed(self, event: Worker.StateChanged) -> None:
        if event.state not in _FINISHED:
            return
        started = self._worker_started.pop(str(id(event.worker)), None)
        elapsed = 0.0 if started is None else (time.monotonic() - started) * 1000
        self.loading_duration_ms = elapsed
        name = event.worker.name

        if event.state == WorkerState.ERROR:
            logger.error(f"Worker '{name}' failed after {elapsed:.1f}ms: {event.worker.error}")
            self.show_error_state(str(event.worker.error))
        elif event.state == WorkerState.CANCELLED:
            logger.debug(f"Worker '{name}' cancelled after {elapsed:.1f}ms")
        else:
            logger.debug(f"Worker '{name}' finished in {elapsed:.1f}ms")
        self.is_loading = bool(self._worker_started)

    # =========================================================================
    # Loading indicator and error surface
    # =========================================================================

    def _set_indicator(self, visible: bool) -> None:
        with suppress(NoMatches, WrongType):
            self.query_one("#loading-indicator", LoadingIndicator).display = visible  # type: ignore[attr-defined]

    def show_error_state(self, message: str) -> None:
        """Surface an unexpected worker failure; screens override this."""
        logger.debug("Unhandled worker failure: %s", message)


__all__ = [
    "WorkerMixin",
]
