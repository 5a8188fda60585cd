"""Snapshot entity models pushed or returned by the admin console backend.

Every entity is an immutable value identified by a stable natural key. Unknown
payload keys are kept as opaque extras so newer backends stay readable.
"""

from __future__ import annotations

import base64
from abc import ABC, abstractmethod
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator

from emuconsole.constants.enums import ViewName


class SnapshotEntity(BaseModel, ABC):
    """Base for all snapshot entities."""

    model_config = ConfigDict(frozen=True, extra="allow", populate_by_name=True)

    @property
    @abstractmethod
    def natural_key(self) -> str:
        """Stable identifier correlating the entity across snapshots."""

    @abstractmethod
    def render_fields(self) -> dict[str, Any]:
        """Field values the presentation shows for this entity."""


def _none_as_empty_list(value: Any) -> Any:
    # The backend serializes empty collections as null
    return [] if value is None else value


# =============================================================================
# Queue service
# =============================================================================


class QueueSummary(SnapshotEntity):
    """One queue row from the queue service snapshot."""

    queue_name: str
    queue_url: str
    queue_id: str = ""
    visible_count: int = 0
    not_visible_count: int = 0
    delayed_count: int = 0
    is_fifo: bool = False
    has_dlq: bool = False
    is_dlq: bool = False
    messages: list[dict[str, Any]] = Field(default_factory=list)

    @field_validator("messages", mode="before")
    @classmethod
    def normalize_messages(cls, value: Any) -> Any:
        return _none_as_empty_list(value)

    @property
    def natural_key(self) -> str:
        return self.queue_url

    @property
    def resolved_queue_id(self) -> str:
        """Backend queue id: base64 of the queue URL when not supplied."""
        return self.queue_id or base64.b64encode(self.queue_url.encode("utf-8")).decode("ascii")

    def render_fields(self) -> dict[str, Any]:
        return {
            "queue_name": self.queue_name,
            "visible_count": self.visible_count,
            "not_visible_count": self.not_visible_count,
            "delayed_count": self.delayed_count,
            "is_fifo": self.is_fifo,
            "has_dlq": self.has_dlq,
            "is_dlq": self.is_dlq,
        }


class QueueListSnapshot(BaseModel):
    """Full-state snapshot for the queue view."""

    model_config = ConfigDict(frozen=True, extra="allow")

    service: str = ""
    queues: list[QueueSummary] = Field(default_factory=list)

    @field_validator("queues", mode="before")
    @classmethod
    def normalize_queues(cls, value: Any) -> Any:
        return _none_as_empty_list(value)


class QueueAttributes(BaseModel):
    """Attribute detail response for one queue."""

    model_config = ConfigDict(frozen=True, extra="allow")

    queue_id: str = ""
    queue_name: str = ""
    queue_url: str = ""
    attributes: dict[str, str] = Field(default_factory=dict)
    fetched_at: str = ""
    is_fifo: bool = False
    has_dlq: bool = False
    is_dlq: bool = False

    @field_validator("attributes", mode="before")
    @classmethod
    def stringify_attributes(cls, value: Any) -> Any:
        if value is None:
            return {}
        if isinstance(value, dict):
            return {str(k): "" if v is None else str(v) for k, v in value.items()}
        return value


class PeekMessage(BaseModel):
    """A message shown in the non-mutating peek preview."""

    model_config = ConfigDict(frozen=True, extra="allow")

    message_id: str = "-"
    body: str = ""
    receive_count: int = 0

    @field_validator("message_id", mode="before")
    @classmethod
    def default_message_id(cls, value: Any) -> Any:
        return value or "-"

    @field_validator("receive_count", mode="before")
    @classmethod
    def default_receive_count(cls, value: Any) -> Any:
        return 0 if value is None else value


class PeekResponse(BaseModel):
    """Peek endpoint response."""

    model_config = ConfigDict(frozen=True, extra="allow")

    queue_id: str = ""
    queue_name: str = ""
    queue_url: str = ""
    messages: list[PeekMessage] = Field(default_factory=list)

    @field_validator("messages", mode="before")
    @classmethod
    def normalize_messages(cls, value: Any) -> Any:
        return _none_as_empty_list(value)


# =============================================================================
# Pub/sub service
# =============================================================================


class TopicSummary(SnapshotEntity):
    """One topic row from the pub/sub snapshot."""

    topic_arn: str
    display_name: str = ""
    fifo_topic: bool = False
    subscription_count: int = 0
    created_at: str = ""

    @property
    def natural_key(self) -> str:
        return self.topic_arn

    @property
    def topic_name(self) -> str:
        """Topic name derived from the last ARN segment."""
        return self.display_name or self.topic_arn.rsplit(":", 1)[-1]

    def render_fields(self) -> dict[str, Any]:
        return {
            "topic_name": self.topic_name,
            "fifo_topic": self.fifo_topic,
            "subscription_count": self.subscription_count,
        }


class SubscriptionSummary(SnapshotEntity):
    """One subscription row from the pub/sub snapshot."""

    subscription_arn: str
    topic_arn: str = ""
    protocol: str = ""
    endpoint: str = ""
    status: str = ""
    created_at: str = ""

    @property
    def natural_key(self) -> str:
        return self.subscription_arn

    def render_fields(self) -> dict[str, Any]:
        return {
            "topic_arn": self.topic_arn,
            "protocol": self.protocol,
            "endpoint": self.endpoint,
            "status": self.status,
        }


class PubSubStats(BaseModel):
    """Aggregate counters for the pub/sub snapshot."""

    model_config = ConfigDict(frozen=True, extra="allow")

    topics: int = 0
    subscriptions: int = 0


class PubSubSnapshot(BaseModel):
    """Full-state snapshot for the pub/sub view."""

    model_config = ConfigDict(frozen=True, extra="allow")

    service: str = ""
    topics: list[TopicSummary] = Field(default_factory=list)
    subscriptions: list[SubscriptionSummary] = Field(default_factory=list)
    stats: PubSubStats = Field(default_factory=PubSubStats)

    @field_validator("topics", "subscriptions", mode="before")
    @classmethod
    def normalize_lists(cls, value: Any) -> Any:
        return _none_as_empty_list(value)


# =============================================================================
# Dashboard
# =============================================================================


class DashboardStat(BaseModel):
    """A labelled counter for a service."""

    model_config = ConfigDict(frozen=True, extra="allow")

    label: str
    value: int = 0


class ServiceSummary(SnapshotEntity):
    """One backend service in the dashboard summary."""

    name: str
    status: str = "offline"
    stats: list[DashboardStat] = Field(default_factory=list)

    @field_validator("stats", mode="before")
    @classmethod
    def normalize_stats(cls, value: Any) -> Any:
        return _none_as_empty_list(value)

    @property
    def natural_key(self) -> str:
        return self.name

    @property
    def is_online(self) -> bool:
        return self.status == "online"

    def render_fields(self) -> dict[str, Any]:
        return {
            "status": self.status,
            "stats": tuple((stat.label, stat.value) for stat in self.stats),
        }


class DashboardSnapshot(BaseModel):
    """Full-state snapshot for the dashboard view."""

    model_config = ConfigDict(frozen=True, extra="allow")

    services: list[ServiceSummary] = Field(default_factory=list)
    updated_at: str = ""

    @field_validator("services", mode="before")
    @classmethod
    def normalize_services(cls, value: Any) -> Any:
        return _none_as_empty_list(value)


# =============================================================================
# Storage and edge entities
# =============================================================================


class BucketSummary(SnapshotEntity):
    """Object storage bucket summary."""

    name: str
    object_count: int = 0
    size_bytes: int = 0
    versioning: bool = False

    @property
    def natural_key(self) -> str:
        return self.name

    def render_fields(self) -> dict[str, Any]:
        return {
            "object_count": self.object_count,
            "size_bytes": self.size_bytes,
            "versioning": self.versioning,
        }


class OriginSummary(SnapshotEntity):
    """Edge origin summary."""

    origin_id: str
    domain_name: str = ""
    signature_required: bool = False
    status: str = ""

    @property
    def natural_key(self) -> str:
        return self.origin_id

    def render_fields(self) -> dict[str, Any]:
        return {
            "domain_name": self.domain_name,
            "signature_required": self.signature_required,
            "status": self.status,
        }


# =============================================================================
# Snapshot model per view
# =============================================================================

SNAPSHOT_MODELS: dict[ViewName, type[BaseModel]] = {
    ViewName.DASHBOARD: DashboardSnapshot,
    ViewName.QUEUES: QueueListSnapshot,
    ViewName.PUBSUB: PubSubSnapshot,
}


def parse_snapshot(view: ViewName, payload: Any) -> BaseModel:
    """Validate a decoded payload as the full-state snapshot of ``view``.

    Raises:
        pydantic.ValidationError: if the payload does not match (a ValueError).
    """
    return SNAPSHOT_MODELS[view].model_validate(payload)


__all__ = [
    "SNAPSHOT_MODELS",
    "BucketSummary",
    "DashboardSnapshot",
    "DashboardStat",
    "OriginSummary",
    "PeekMessage",
    "PeekResponse",
    "PubSubSnapshot",
    "PubSubStats",
    "QueueAttributes",
    "QueueListSnapshot",
    "QueueSummary",
    "ServiceSummary",
    "SnapshotEntity",
    "SubscriptionSummary",
    "TopicSummary",
    "parse_snapshot",
]
