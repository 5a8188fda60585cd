"""Limit and range constants for the console.

All limit values, thresholds, and validation ranges.
"""

from typing import Final

# ============================================================================
# Queue attribute validation ranges (inclusive)
# ============================================================================

EDITABLE_QUEUE_ATTRIBUTE_KEYS: Final = (
    "VisibilityTimeout",
    "MessageRetentionPeriod",
    "MaximumMessageSize",
    "DelaySeconds",
    "ReceiveMessageWaitTimeSeconds",
)

QUEUE_ATTRIBUTE_RANGES: Final[dict[str, tuple[int, int]]] = {
    "VisibilityTimeout": (0, 43200),
    "MessageRetentionPeriod": (60, 1209600),
    "MaximumMessageSize": (1024, 262144),
    "DelaySeconds": (0, 900),
    "ReceiveMessageWaitTimeSeconds": (0, 20),
}

# Attributes shown in the detail panel, in display order
VISIBLE_QUEUE_ATTRIBUTE_KEYS: Final = (
    *EDITABLE_QUEUE_ATTRIBUTE_KEYS,
    "FifoQueue",
    "ContentBasedDeduplication",
    "RedrivePolicy",
    "RedriveAllowPolicy",
    "ApproximateNumberOfMessages",
    "ApproximateNumberOfMessagesNotVisible",
    "ApproximateNumberOfMessagesDelayed",
)

# ============================================================================
# Peek limits
# ============================================================================

PEEK_LIMIT_MIN: Final = 1
PEEK_LIMIT_MAX: Final = 100

# ============================================================================
# Queue creation limits
# ============================================================================

DLQ_MAX_RECEIVE_COUNT_MIN: Final = 1

__all__ = [
    "DLQ_MAX_RECEIVE_COUNT_MIN",
    "EDITABLE_QUEUE_ATTRIBUTE_KEYS",
    "PEEK_LIMIT_MAX",
    "PEEK_LIMIT_MIN",
    "QUEUE_ATTRIBUTE_RANGES",
    "VISIBLE_QUEUE_ATTRIBUTE_KEYS",
]
