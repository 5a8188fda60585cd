"""Screen mixins package for the console."""

from emuconsole.screens.mixins.worker_mixin import WorkerMixin

__all__ = [
    "WorkerMixin",
]
