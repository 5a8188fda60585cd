"""Queue service controller for the ess-queue-ess admin endpoints."""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any
from urllib.parse import quote

from emuconsole.constants.defaults import (
    DLQ_MAX_RECEIVE_COUNT_DEFAULT,
    PEEK_LIMIT_DEFAULT,
    REDRIVE_MAX_MESSAGES_PER_SECOND_DEFAULT,
)
from emuconsole.constants.limits import PEEK_LIMIT_MAX, PEEK_LIMIT_MIN
from emuconsole.constants.values import QUEUE_SERVICE
from emuconsole.controllers.base import BaseController
from emuconsole.models.entities import PeekResponse, QueueAttributes, QueueListSnapshot

logger = logging.getLogger(__name__)

# Request body field for each editable attribute
ATTRIBUTE_PAYLOAD_FIELDS: dict[str, str] = {
    "VisibilityTimeout": "visibility_timeout",
    "MessageRetentionPeriod": "message_retention_period",
    "MaximumMessageSize": "maximum_message_size",
    "DelaySeconds": "delay_seconds",
    "ReceiveMessageWaitTimeSeconds": "receive_message_wait_time_seconds",
}


class QueuesController(BaseController):
    """Queue list, detail and action requests."""

    SERVICE_PATH = f"/api/services/{QUEUE_SERVICE}"

    async def fetch_all(self) -> QueueListSnapshot:
        payload = await self._client.get_json(f"{self.SERVICE_PATH}/queues")
        return QueueListSnapshot.model_validate(payload)

    async def fetch_attributes(self, queue_id: str) -> QueueAttributes:
        payload = await self._client.get_json(
            f"{self.SERVICE_PATH}/queues/{quote(queue_id, safe='')}/attributes"
        )
        return QueueAttributes.model_validate(payload)

    async def peek_messages(self, queue_id: str, limit: int = PEEK_LIMIT_DEFAULT) -> PeekResponse:
        """Preview up to ``limit`` messages without receiving them."""
        limit = max(PEEK_LIMIT_MIN, min(PEEK_LIMIT_MAX, int(limit)))
        payload = await self._client.get_json(
            f"{self.SERVICE_PATH}/queues/{quote(queue_id, safe='')}/messages/peek",
            params={"limit": limit},
        )
        return PeekResponse.model_validate(payload)

    async def create_queue(
        self,
        queue_name: str,
        attributes: Mapping[str, int],
        *,
        is_fifo: bool = False,
        create_dlq: bool = False,
        dlq_max_receive_count: int = DLQ_MAX_RECEIVE_COUNT_DEFAULT,
    ) -> dict[str, Any]:
        body: dict[str, Any] = {
            "queue_name": queue_name,
            "is_fifo": is_fifo,
            "content_based_deduplication": is_fifo,
            "create_dlq": create_dlq,
            "dlq_max_receive_count": dlq_max_receive_count,
        }
        body.update(self._attribute_fields(attributes))
        return await self._action("create-queue", body)

    async def send_message(
        self,
        queue_url: str,
        message_body: str,
        *,
        message_group_id: str = "",
        message_deduplication_id: str = "",
    ) -> dict[str, Any]:
        return await self._action(
            "send-message",
            {
                "queue_url": queue_url,
                "message_body": message_body,
                "message_group_id": message_group_id,
                "message_deduplication_id": message_deduplication_id,
                "delay_seconds": 0,
            },
        )

    async def update_attributes(self, queue_url: str, attributes: Mapping[str, int]) -> dict[str, Any]:
        body: dict[str, Any] = {"queue_url": queue_url}
        body.update(self._attribute_fields(attributes))
        return await self._action("update-attributes", body)

    async def purge_queue(self, queue_url: str) -> dict[str, Any]:
        return await self._action("purge-queue", {"queue_url": queue_url})

    async def delete_queue(self, queue_url: str) -> dict[str, Any]:
        return await self._action("delete-queue", {"queue_url": queue_url})

    async def start_redrive(
        self,
        queue_url: str,
        max_messages_per_second: int = REDRIVE_MAX_MESSAGES_PER_SECOND_DEFAULT,
    ) -> dict[str, Any]:
        """Move messages from a dead-letter queue back to its source."""
        return await self._action(
            "start-redrive",
            {"queue_url": queue_url, "max_messages_per_second": max_messages_per_second},
        )

    @staticmethod
    def _attribute_fields(attributes: Mapping[str, int]) -> dict[str, int]:
        return {
            field: int(attributes[name])
            for name, field in ATTRIBUTE_PAYLOAD_FIELDS.items()
            if name in attributes
        }

    async def _action(self, action: str, body: dict[str, Any]) -> dict[str, Any]:
        logger.info("Queue action %s", action)
        result = await self._client.post_json(f"{self.SERVICE_PATH}/actions/{action}", body)
        return result if isinstance(result, dict) else {}


__all__ = [
    "ATTRIBUTE_PAYLOAD_FIELDS",
    "QueuesController",
]
