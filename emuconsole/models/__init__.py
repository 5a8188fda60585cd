"""Data models for the console."""

from emuconsole.models.entities import (
    BucketSummary,
    DashboardSnapshot,
    DashboardStat,
    OriginSummary,
    PeekMessage,
    PeekResponse,
    PubSubSnapshot,
    PubSubStats,
    QueueAttributes,
    QueueListSnapshot,
    QueueSummary,
    ServiceSummary,
    SnapshotEntity,
    SubscriptionSummary,
    TopicSummary,
)

__all__ = [
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
]
