"""Scalar constants for the console.

All application-level constants with proper type hints using Final.
"""

from typing import Final

# ============================================================================
# Application
# ============================================================================

APP_TITLE: Final = "EmuConsole"

# ============================================================================
# Backend services
# ============================================================================

QUEUE_SERVICE: Final = "ess-queue-ess"
PUBSUB_SERVICE: Final = "ess-enn-ess"
EXPORTABLE_SERVICES: Final = (QUEUE_SERVICE, PUBSUB_SERVICE)

STREAM_EVENT_NAME: Final = "state"

SUBSCRIPTION_PROTOCOLS: Final = ("http", QUEUE_SERVICE)

# ============================================================================
# View titles
# ============================================================================

VIEW_TITLES: Final[dict[str, tuple[str, str]]] = {
    "dashboard": ("Dashboard", "Live status of active emulator surface"),
    QUEUE_SERVICE: (QUEUE_SERVICE, "Queue operations and non-mutating message inspection"),
    PUBSUB_SERVICE: (PUBSUB_SERVICE, "Topics, subscriptions and publishing"),
}

# ============================================================================
# Messages
# ============================================================================

MSG_STREAM_PARSE_FAILED: Final = "Failed to parse stream data: {error}"
MSG_ATTRIBUTES_SAVED: Final = "Queue attributes saved."
MSG_REDRIVE_STARTED: Final = "Redrive task started."

__all__ = [
    "APP_TITLE",
    "EXPORTABLE_SERVICES",
    "MSG_ATTRIBUTES_SAVED",
    "MSG_REDRIVE_STARTED",
    "MSG_STREAM_PARSE_FAILED",
    "PUBSUB_SERVICE",
    "QUEUE_SERVICE",
    "STREAM_EVENT_NAME",
    "SUBSCRIPTION_PROTOCOLS",
    "VIEW_TITLES",
]
