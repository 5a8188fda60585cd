"""Console screen configuration - view pane IDs, column definitions and summary text."""

from __future__ import annotations

from typing import Any

from emuconsole.constants.enums import ViewName

# =============================================================================
# Pane and widget IDs
# =============================================================================

VIEW_PANE_IDS: dict[ViewName, str] = {
    ViewName.DASHBOARD: "pane-dashboard",
    ViewName.QUEUES: "pane-queues",
    ViewName.PUBSUB: "pane-pubsub",
}

NAV_BUTTON_PREFIX = "nav-"

TABLE_IDS: dict[tuple[ViewName, str], str] = {
    (ViewName.DASHBOARD, "services"): "services-table",
    (ViewName.QUEUES, "queues"): "queues-table",
    (ViewName.PUBSUB, "topics"): "topics-table",
    (ViewName.PUBSUB, "subscriptions"): "subscriptions-table",
}

SUMMARY_IDS: dict[ViewName, str] = {
    ViewName.DASHBOARD: "dashboard-summary",
    ViewName.QUEUES: "queues-summary",
    ViewName.PUBSUB: "pubsub-summary",
}

# =============================================================================
# Table Column Definitions: [(label, field, width), ...]
# =============================================================================

SERVICE_TABLE_COLUMNS: list[tuple[str, str, int]] = [
    ("Status", "status", 10),
    ("Stats", "stats", 60),
]

QUEUE_TABLE_COLUMNS: list[tuple[str, str, int]] = [
    ("Queue", "queue_name", 32),
    ("Visible", "visible_count", 9),
    ("In Flight", "not_visible_count", 10),
    ("Delayed", "delayed_count", 9),
    ("FIFO", "is_fifo", 6),
    ("Has DLQ", "has_dlq", 8),
    ("Is DLQ", "is_dlq", 7),
]

TOPIC_TABLE_COLUMNS: list[tuple[str, str, int]] = [
    ("Topic", "topic_name", 32),
    ("FIFO", "fifo_topic", 6),
    ("Subscriptions", "subscription_count", 14),
]

SUBSCRIPTION_TABLE_COLUMNS: list[tuple[str, str, int]] = [
    ("Topic ARN", "topic_arn", 36),
    ("Protocol", "protocol", 14),
    ("Endpoint", "endpoint", 40),
    ("Status", "status", 12),
]

# (column definitions, key column label)
TABLE_LAYOUTS: dict[tuple[ViewName, str], tuple[list[tuple[str, str, int]], str | None]] = {
    (ViewName.DASHBOARD, "services"): (SERVICE_TABLE_COLUMNS, "Service"),
    (ViewName.QUEUES, "queues"): (QUEUE_TABLE_COLUMNS, None),
    (ViewName.PUBSUB, "topics"): (TOPIC_TABLE_COLUMNS, None),
    (ViewName.PUBSUB, "subscriptions"): (SUBSCRIPTION_TABLE_COLUMNS, None),
}

# =============================================================================
# Help
# =============================================================================

HELP_LINES: list[tuple[str, str]] = [
    ("d", "Dashboard"),
    ("u", "ess-queue-ess"),
    ("p", "ess-enn-ess"),
    ("r", "Full refresh of the active view"),
    ("enter", "Expand or collapse the selected row"),
    ("e", "Edit queue attributes"),
    ("s", "Save attribute edits"),
    ("escape", "Cancel attribute edits"),
    ("c", "Create queue or topic"),
    ("m", "Send message or publish"),
    ("b", "Create subscription"),
    ("x", "Delete selected entity"),
    ("g", "Purge selected queue"),
    ("v", "Start redrive from a dead-letter queue"),
    ("o", "Export service configuration"),
    ("q", "Quit"),
]

# =============================================================================
# Summary lines
# =============================================================================


def summary_text(view: ViewName, snapshot: Any) -> str:
    """One-line summary shown above a view's tables."""
    if view is ViewName.DASHBOARD:
        online = sum(1 for service in snapshot.services if service.is_online)
        text = f"{online}/{len(snapshot.services)} services online"
        return f"{text}  (updated {snapshot.updated_at})" if snapshot.updated_at else text
    if view is ViewName.QUEUES:
        visible = sum(queue.visible_count for queue in snapshot.queues)
        return f"{len(snapshot.queues)} queues, {visible} visible messages"
    return f"Topics: {snapshot.stats.topics}  Subscriptions: {snapshot.stats.subscriptions}"


__all__ = [
    "HELP_LINES",
    "NAV_BUTTON_PREFIX",
    "QUEUE_TABLE_COLUMNS",
    "SERVICE_TABLE_COLUMNS",
    "SUBSCRIPTION_TABLE_COLUMNS",
    "SUMMARY_IDS",
    "TABLE_IDS",
    "TABLE_LAYOUTS",
    "TOPIC_TABLE_COLUMNS",
    "VIEW_PANE_IDS",
    "summary_text",
]
