"""Pub/sub service controller."""

from emuconsole.controllers.pubsub.controller import PubSubController

__all__ = ["PubSubController"]
