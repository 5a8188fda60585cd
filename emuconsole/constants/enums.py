"""All enum definitions for the console.

This module consolidates all enumerations used throughout the application.
"""

from enum import Enum

# =============================================================================
# View Enums
# =============================================================================


class ViewName(str, Enum):
    """Views exposed by the admin console, named after their stream scope."""

    DASHBOARD = "dashboard"
    QUEUES = "ess-queue-ess"
    PUBSUB = "ess-enn-ess"


# =============================================================================
# Status Enums
# =============================================================================


class BannerState(Enum):
    """Per-entity status banner states."""

    IDLE = "idle"
    LOADING = "loading"
    SUCCESS = "success"
    ERROR = "error"


class BannerChannel(Enum):
    """Independent banner surfaces inside a queue detail panel."""

    ATTRIBUTES = "attributes"
    PEEK = "peek"


class StreamState(Enum):
    """Streaming subscription connection states."""

    DISCONNECTED = "disconnected"
    CONNECTING = "connecting"
    CONNECTED = "connected"
    RETRYING = "retrying"


class EditPhase(Enum):
    """Attribute edit session phases."""

    VIEWING = "viewing"
    EDITING = "editing"
    VALIDATING = "validating"


class AlertTone(Enum):
    """Tone of the global alert bar."""

    ERROR = "error"
    INFO = "info"


# =============================================================================
# Render Plan Enums
# =============================================================================


class OperationKind(Enum):
    """Render plan operation kinds."""

    INSERT = "insert"
    UPDATE = "update"
    REMOVE = "remove"
    OVERLAY = "overlay"


class ServiceStatus(Enum):
    """Service health as reported by the dashboard summary."""

    ONLINE = "online"
    OFFLINE = "offline"


__all__ = [
    "AlertTone",
    "BannerChannel",
    "BannerState",
    "EditPhase",
    "OperationKind",
    "ServiceStatus",
    "StreamState",
    "ViewName",
]
