"""Console widgets.

- entity_table.py: keyed DataTable driven by render plans
- queue_detail.py: expanded queue panel (attributes, edit form, peek)
- status.py: alert bar, stream label and banner lines
- dialogs.py: modal form, confirm and help dialogs
"""

from emuconsole.widgets.dialogs import ConfirmDialog, FieldSpec, FormDialog, HelpDialog
from emuconsole.widgets.entity_table import EntityTable, format_cell, mode_marker
from emuconsole.widgets.queue_detail import QueueDetailPanel
from emuconsole.widgets.status import AlertBar, BannerLine, StreamStatusLabel

__all__ = [
    "AlertBar",
    "BannerLine",
    "ConfirmDialog",
    "EntityTable",
    "FieldSpec",
    "FormDialog",
    "HelpDialog",
    "QueueDetailPanel",
    "StreamStatusLabel",
    "format_cell",
    "mode_marker",
]
