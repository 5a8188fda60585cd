"""EntityTable widget - a DataTable driven by render plans.

Rows are keyed by the entity's natural key, so every plan operation maps to
one keyed DataTable call: ``add_row``, ``update_cell`` or ``remove_row``.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from typing import Any

from textual.widgets import DataTable
from textual.widgets.data_table import CellDoesNotExist, RowDoesNotExist

from emuconsole.constants.enums import OperationKind
from emuconsole.sync.reconciler import RenderOp, RenderPlan

logger = logging.getLogger(__name__)

MODE_COLUMN = "_mode"


def format_cell(value: Any) -> str:
    """Render a field value as table text."""
    if isinstance(value, bool):
        return "yes" if value else "-"
    if isinstance(value, tuple):
        return ", ".join(f"{label}: {count}" for label, count in value) or "-"
    if value is None or value == "":
        return "-"
    return str(value)


def mode_marker(expanded: bool, editing: bool) -> str:
    marker = "▾" if expanded else "▸"
    return f"{marker}✎" if editing else marker


class EntityTable(DataTable):
    """Keyed table of snapshot entities.

    Args:
        columns: ``(label, field, width)`` per visible column
        key_label: Label of the leading natural-key column, or None to hide it
    """

    DEFAULT_CSS = """
    EntityTable {
        height: 1fr;
        min-height: 5;
    }
    """

    def __init__(
        self,
        columns: Sequence[tuple[str, str, int]],
        *,
        key_label: str | None = None,
        id: str | None = None,
        classes: str = "",
    ) -> None:
        super().__init__(id=id, classes=classes, cursor_type="row", zebra_stripes=True)
        self._column_defs = list(columns)
        self._key_label = key_label

    def on_mount(self) -> None:
        self._ensure_columns()

    def _ensure_columns(self) -> None:
        if self.columns:
            return
        self.add_column("", key=MODE_COLUMN, width=2)
        if self._key_label is not None:
            self.add_column(self._key_label, key="_key", width=48)
        for label, field, width in self._column_defs:
            self.add_column(label, key=field, width=width)

    @property
    def row_keys(self) -> list[str]:
        return [str(row.key.value) for row in self.ordered_rows]

    def apply_plan(self, plan: RenderPlan) -> None:
        """Apply plan operations in order."""
        self._ensure_columns()
        for op in plan.ops:
            try:
                self._apply_op(op)
            except (RowDoesNotExist, CellDoesNotExist):
                logger.debug("Skipping %s for missing row %s", op.kind.value, op.key)

    def _apply_op(self, op: RenderOp) -> None:
        if op.kind is OperationKind.INSERT:
            cells: list[str] = [mode_marker(False, False)]
            if self._key_label is not None:
                cells.append(op.key)
            cells.extend(format_cell(op.fields.get(field)) for _, field, _ in self._column_defs)
            self.add_row(*cells, key=op.key)
        elif op.kind is OperationKind.UPDATE:
            known = {field for _, field, _ in self._column_defs}
            for field, value in op.fields.items():
                if field in known:
                    self.update_cell(op.key, field, format_cell(value))
        elif op.kind is OperationKind.REMOVE:
            self.remove_row(op.key)
        elif op.kind is OperationKind.OVERLAY:
            self.update_cell(op.key, MODE_COLUMN, mode_marker(op.expanded, op.editing))

    def selected_key(self) -> str | None:
        """Natural key of the row under the cursor."""
        if self.row_count == 0:
            return None
        try:
            row_key, _ = self.coordinate_to_cell_key(self.cursor_coordinate)
        except CellDoesNotExist:
            return None
        return None if row_key.value is None else str(row_key.value)


__all__ = [
    "EntityTable",
    "format_cell",
    "mode_marker",
]
