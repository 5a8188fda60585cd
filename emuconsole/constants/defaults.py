"""Default values for settings and forms.

All default values used in the AppSettings model and the create-queue form.
"""

from typing import Final

# ============================================================================
# Connection defaults
# ============================================================================

BASE_URL_DEFAULT: Final = "http://localhost:9340"
EXPORT_PATH_DEFAULT: Final = "./exports"
INITIAL_VIEW_DEFAULT: Final = "dashboard"

# ============================================================================
# Queue defaults
# ============================================================================

DEFAULT_CREATE_QUEUE_ATTRIBUTES: Final[dict[str, int]] = {
    "VisibilityTimeout": 30,
    "MessageRetentionPeriod": 345600,
    "MaximumMessageSize": 262144,
    "DelaySeconds": 0,
    "ReceiveMessageWaitTimeSeconds": 0,
}
DLQ_MAX_RECEIVE_COUNT_DEFAULT: Final = 3
PEEK_LIMIT_DEFAULT: Final = 10
REDRIVE_MAX_MESSAGES_PER_SECOND_DEFAULT: Final = 100

__all__ = [
    "BASE_URL_DEFAULT",
    "DEFAULT_CREATE_QUEUE_ATTRIBUTES",
    "DLQ_MAX_RECEIVE_COUNT_DEFAULT",
    "EXPORT_PATH_DEFAULT",
    "INITIAL_VIEW_DEFAULT",
    "PEEK_LIMIT_DEFAULT",
    "REDRIVE_MAX_MESSAGES_PER_SECOND_DEFAULT",
]
