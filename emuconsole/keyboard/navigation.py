"""Screen-specific keyboard bindings."""

from textual.binding import Binding

# ============================================================================
# Console screen
# ============================================================================

CONSOLE_SCREEN_BINDINGS: list[Binding] = [
    Binding("e", "edit_attributes", "Edit"),
    Binding("s", "save_attributes", "Save"),
    Binding("escape", "cancel_edit", "Cancel", show=False),
    Binding("c", "create", "Create"),
    Binding("m", "send", "Send/Publish"),
    Binding("x", "delete", "Delete"),
    Binding("g", "purge", "Purge"),
    Binding("v", "redrive", "Redrive"),
    Binding("o", "export_config", "Export"),
    Binding("b", "subscribe", "Subscribe"),
]

# ============================================================================
# Dialogs
# ============================================================================

DIALOG_BINDINGS: list[Binding] = [
    Binding("escape", "cancel", "Cancel", show=False),
]

__all__ = [
    "CONSOLE_SCREEN_BINDINGS",
    "DIALOG_BINDINGS",
]
