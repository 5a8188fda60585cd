"""Queue service controller."""

from emuconsole.controllers.queues.controller import QueuesController

__all__ = ["QueuesController"]
