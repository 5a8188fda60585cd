"""Pub/sub service controller for the ess-enn-ess admin endpoints."""

from __future__ import annotations

import logging
from typing import Any

from emuconsole.constants.values import PUBSUB_SERVICE
from emuconsole.controllers.base import BaseController
from emuconsole.models.entities import PubSubSnapshot

logger = logging.getLogger(__name__)


class PubSubController(BaseController):
    """Topic and subscription state plus actions."""

    SERVICE_PATH = f"/api/services/{PUBSUB_SERVICE}"

    async def fetch_all(self) -> PubSubSnapshot:
        payload = await self._client.get_json(f"{self.SERVICE_PATH}/state")
        return PubSubSnapshot.model_validate(payload)

    async def create_topic(self, name: str) -> dict[str, Any]:
        return await self._action("create-topic", {"name": name})

    async def delete_topic(self, topic_arn: str) -> dict[str, Any]:
        return await self._action("delete-topic", {"topic_arn": topic_arn})

    async def create_subscription(
        self,
        topic_arn: str,
        protocol: str,
        endpoint: str,
        *,
        auto_confirm: bool = True,
    ) -> dict[str, Any]:
        return await self._action(
            "create-subscription",
            {
                "topic_arn": topic_arn,
                "protocol": protocol,
                "endpoint": endpoint,
                "auto_confirm": auto_confirm,
            },
        )

    async def delete_subscription(self, subscription_arn: str) -> dict[str, Any]:
        return await self._action("delete-subscription", {"subscription_arn": subscription_arn})

    async def publish(self, topic_arn: str, message: str, subject: str = "") -> dict[str, Any]:
        return await self._action(
            "publish",
            {"topic_arn": topic_arn, "subject": subject, "message": message},
        )

    async def _action(self, action: str, body: dict[str, Any]) -> dict[str, Any]:
        logger.info("Pub/sub action %s", action)
        result = await self._client.post_json(f"{self.SERVICE_PATH}/actions/{action}", body)
        return result if isinstance(result, dict) else {}


__all__ = ["PubSubController"]
