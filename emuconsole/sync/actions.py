"""User-initiated mutations with local validation and alert feedback.

Each action validates locally first; a local failure shows the global alert
and sends nothing. Successful actions report in the alert bar and reload the
owning view.
"""

from __future__ import annotations

import logging
from collections.abc import Awaitable, Callable, Mapping
from typing import Any

from emuconsole.constants.defaults import (
    DEFAULT_CREATE_QUEUE_ATTRIBUTES,
    DLQ_MAX_RECEIVE_COUNT_DEFAULT,
    REDRIVE_MAX_MESSAGES_PER_SECOND_DEFAULT,
)
from emuconsole.constants.enums import AlertTone, BannerChannel, BannerState, ViewName
from emuconsole.constants.limits import EDITABLE_QUEUE_ATTRIBUTE_KEYS
from emuconsole.constants.values import MSG_REDRIVE_STARTED, SUBSCRIPTION_PROTOCOLS
from emuconsole.controllers.base.errors import ConsoleError, ValidationFailed
from emuconsole.controllers.pubsub import PubSubController
from emuconsole.controllers.queues import QueuesController
from emuconsole.models.entities import QueueSummary
from emuconsole.sync.details import DetailLoader
from emuconsole.sync.session import ConsoleSession, StalenessToken
from emuconsole.utils.validators import (
    is_whole_number,
    parse_dlq_max_receive_count,
    validate_queue_attributes,
)

logger = logging.getLogger(__name__)

AlertSink = Callable[[str, AlertTone], None]
Reloader = Callable[[StalenessToken], Awaitable[bool]]


class _ActionBase:
    view: ViewName

    def __init__(self, session: ConsoleSession, alert: AlertSink, reload: Reloader) -> None:
        self._session = session
        self._alert = alert
        self._reload = reload

    def _token(self) -> StalenessToken:
        return self._session.token()

    def _fail(self, message: str, token: StalenessToken | None = None) -> bool:
        if token is None or self._session.is_current(token):
            self._alert(message, AlertTone.ERROR)
        return False

    async def _run(
        self,
        operation: Callable[[], Awaitable[Any]],
        success_message: str,
    ) -> bool:
        token = self._token()
        try:
            await operation()
        except ConsoleError as exc:
            logger.warning("Action failed: %s", exc)
            return self._fail(str(exc), token)
        if not self._session.is_current(token):
            return True
        self._alert(success_message, AlertTone.INFO)
        if token.view is self.view:
            await self._reload(token)
        return True


class QueueActions(_ActionBase):
    """Queue create, send, purge, delete and redrive."""

    view = ViewName.QUEUES

    def __init__(
        self,
        session: ConsoleSession,
        queues: QueuesController,
        details: DetailLoader,
        alert: AlertSink,
        reload: Reloader,
        *,
        redrive_max_messages_per_second: int = REDRIVE_MAX_MESSAGES_PER_SECOND_DEFAULT,
    ) -> None:
        super().__init__(session, alert, reload)
        self._queues = queues
        self._details = details
        self._redrive_rate = redrive_max_messages_per_second

    def _queue(self, queue_url: str) -> QueueSummary | None:
        entity = self._session.view_state(ViewName.QUEUES).entities.get(queue_url)
        return entity if isinstance(entity, QueueSummary) else None

    async def create_queue(
        self,
        queue_name: str,
        *,
        is_fifo: bool = False,
        create_dlq: bool = False,
        dlq_max_receive_count: Any = DLQ_MAX_RECEIVE_COUNT_DEFAULT,
        attributes: Mapping[str, Any] | None = None,
    ) -> bool:
        name = (queue_name or "").strip()
        if not name:
            return self._fail("Queue name is required")

        merged: dict[str, Any] = dict(DEFAULT_CREATE_QUEUE_ATTRIBUTES)
        for attr, raw in (attributes or {}).items():
            # Blank fields fall back to the defaults
            if raw is not None and str(raw).strip() != "":
                merged[attr] = raw

        if not all(is_whole_number(merged[attr]) for attr in EDITABLE_QUEUE_ATTRIBUTE_KEYS):
            return self._fail("Advanced attributes must be numeric values")

        try:
            dlq_count = (
                parse_dlq_max_receive_count(dlq_max_receive_count)
                if create_dlq
                else DLQ_MAX_RECEIVE_COUNT_DEFAULT
            )
            values = validate_queue_attributes(merged)
        except ValidationFailed as exc:
            return self._fail(exc.message)

        suffix = " (with DLQ)" if create_dlq else ""
        return await self._run(
            lambda: self._queues.create_queue(
                name,
                values,
                is_fifo=is_fifo,
                create_dlq=create_dlq,
                dlq_max_receive_count=dlq_count,
            ),
            f"Queue created: {name}{suffix}",
        )

    async def send_message(
        self,
        queue_url: str,
        message_body: str,
        *,
        message_group_id: str = "",
        message_deduplication_id: str = "",
    ) -> bool:
        body = (message_body or "").strip()
        group_id = (message_group_id or "").strip()
        dedup_id = (message_deduplication_id or "").strip()
        if not body:
            return self._fail("Message body is required")

        queue = self._queue(queue_url)
        is_fifo = queue.is_fifo if queue is not None else queue_url.endswith(".fifo")
        if is_fifo and not group_id:
            return self._fail("Message Group ID is required for FIFO queues")

        return await self._run(
            lambda: self._queues.send_message(
                queue_url,
                body,
                message_group_id=group_id,
                message_deduplication_id=dedup_id,
            ),
            "Message sent",
        )

    async def purge_queue(self, queue_url: str) -> bool:
        return await self._run(
            lambda: self._queues.purge_queue(queue_url),
            f"Queue purged: {queue_url}",
        )

    async def delete_queue(self, queue_url: str) -> bool:
        return await self._run(
            lambda: self._queues.delete_queue(queue_url),
            f"Queue deleted: {queue_url}",
        )

    async def start_redrive(self, queue_url: str) -> bool:
        """Start moving messages out of a dead-letter queue.

        Feedback goes to the queue's attribute banner, then its peek and
        attribute panels refresh.
        """
        token = self._token()
        banners = self._session.view_state(ViewName.QUEUES).banners
        queue = self._queue(queue_url)
        if queue is not None and not queue.is_dlq:
            banners.set_status(
                queue_url,
                BannerState.ERROR,
                "Redrive is only available for dead-letter queues",
                channel=BannerChannel.ATTRIBUTES,
            )
            return False

        try:
            await self._queues.start_redrive(queue_url, self._redrive_rate)
        except ConsoleError as exc:
            if self._session.is_current(token):
                banners.set_status(queue_url, BannerState.ERROR, str(exc), channel=BannerChannel.ATTRIBUTES)
            return False

        if not self._session.is_current(token):
            return True
        banners.set_status(queue_url, BannerState.SUCCESS, MSG_REDRIVE_STARTED, channel=BannerChannel.ATTRIBUTES)
        await self._details.refresh(queue_url, token, quiet_attributes=True)
        return True


class PubSubActions(_ActionBase):
    """Topic, subscription and publish actions."""

    view = ViewName.PUBSUB

    def __init__(
        self,
        session: ConsoleSession,
        pubsub: PubSubController,
        alert: AlertSink,
        reload: Reloader,
    ) -> None:
        super().__init__(session, alert, reload)
        self._pubsub = pubsub

    async def create_topic(self, name: str) -> bool:
        topic_name = (name or "").strip()
        if not topic_name:
            return self._fail("Topic name is required")
        return await self._run(
            lambda: self._pubsub.create_topic(topic_name),
            f"Topic created: {topic_name}",
        )

    async def delete_topic(self, topic_arn: str) -> bool:
        return await self._run(
            lambda: self._pubsub.delete_topic(topic_arn),
            f"Topic deleted: {topic_arn}",
        )

    async def create_subscription(
        self,
        topic_arn: str,
        protocol: str,
        endpoint: str,
        *,
        auto_confirm: bool = True,
    ) -> bool:
        topic_arn = (topic_arn or "").strip()
        protocol = (protocol or "").strip()
        endpoint = (endpoint or "").strip()
        if not topic_arn:
            return self._fail("Topic is required")
        if protocol not in SUBSCRIPTION_PROTOCOLS:
            return self._fail("Protocol must be http or ess-queue-ess")
        if not endpoint:
            return self._fail("Endpoint is required")
        return await self._run(
            lambda: self._pubsub.create_subscription(
                topic_arn, protocol, endpoint, auto_confirm=auto_confirm
            ),
            f"Subscription created: {endpoint}",
        )

    async def delete_subscription(self, subscription_arn: str) -> bool:
        return await self._run(
            lambda: self._pubsub.delete_subscription(subscription_arn),
            f"Subscription deleted: {subscription_arn}",
        )

    async def publish(self, topic_arn: str, message: str, subject: str = "") -> bool:
        topic_arn = (topic_arn or "").strip()
        if not topic_arn:
            return self._fail("Topic is required")
        if not (message or "").strip():
            return self._fail("Message is required")
        return await self._run(
            lambda: self._pubsub.publish(topic_arn, message, (subject or "").strip()),
            "Message published",
        )


__all__ = [
    "PubSubActions",
    "QueueActions",
]
