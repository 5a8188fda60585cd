"""Keyed reconciliation of full-state snapshots against rendered rows.

``reconcile`` is a pure function. It compares the rows a container last
rendered with an incoming ordered snapshot and returns a ``RenderPlan``:
the minimal insert/update/remove operations plus overlay re-application,
and the container state to hold after the plan is applied.

Ordering rules:
- removals come first, in rendered order;
- existing rows keep their position, new rows are appended in incoming order;
- when a key repeats in the snapshot, the last occurrence's data is used at
  the first occurrence's position.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, Protocol

from emuconsole.constants.enums import OperationKind
from emuconsole.models.entities import SnapshotEntity
from emuconsole.sync.overlay import OverlayEntry

class OverlayLookup(Protocol):
    def peek(self, key: str) -> OverlayEntry | None: ...


@dataclass(frozen=True)
class RenderedRow:
    """What the container currently shows for one key."""

    fields: Mapping[str, Any]
    expanded: bool = False
    editing: bool = False


@dataclass(frozen=True)
class ContainerState:
    """Ordered rendered rows of one list container."""

    rows: Mapping[str, RenderedRow] = field(default_factory=dict)

    @property
    def keys(self) -> tuple[str, ...]:
        return tuple(self.rows)

    def __len__(self) -> int:
        return len(self.rows)


@dataclass(frozen=True)
class RenderOp:
    """One key-addressed presentation change."""

    kind: OperationKind
    key: str
    fields: Mapping[str, Any] = field(default_factory=dict)
    entity: SnapshotEntity | None = None
    expanded: bool = False
    editing: bool = False


@dataclass(frozen=True)
class RenderPlan:
    ops: tuple[RenderOp, ...]
    next_state: ContainerState

    @property
    def is_empty(self) -> bool:
        return not self.ops

    def of_kind(self, kind: OperationKind) -> tuple[RenderOp, ...]:
        return tuple(op for op in self.ops if op.kind is kind)


def _mode(overlay: OverlayLookup | None, key: str) -> tuple[bool, bool]:
    entry = overlay.peek(key) if overlay is not None else None
    if entry is None:
        return False, False
    return entry.expanded, entry.edit_mode


def reconcile(
    container_state: ContainerState,
    incoming: Iterable[SnapshotEntity],
    overlay: OverlayLookup | None = None,
) -> RenderPlan:
    """Diff ``incoming`` against ``container_state``.

    Args:
        container_state: Rows as last rendered
        incoming: Snapshot entities in backend order; duplicates tolerated
        overlay: Source of expanded/editing modes, read only

    Returns:
        The plan to apply and the resulting container state. Reconciling
        the same snapshot against ``plan.next_state`` yields an empty plan.
    """
    latest: dict[str, SnapshotEntity] = {}
    for entity in incoming:
        # dict keeps the first insertion position; assignment replaces data
        latest[entity.natural_key] = entity

    current = container_state.rows
    structural: list[RenderOp] = []
    overlay_ops: list[RenderOp] = []
    next_rows: dict[str, RenderedRow] = {}

    for key in current:
        if key not in latest:
            structural.append(RenderOp(OperationKind.REMOVE, key))

    # Surviving rows in rendered order, then new rows in incoming order
    ordered = [key for key in current if key in latest]
    ordered += [key for key in latest if key not in current]

    for key in ordered:
        entity = latest[key]
        fields = entity.render_fields()
        expanded, editing = _mode(overlay, key)
        previous = current.get(key)

        if previous is None:
            structural.append(
                RenderOp(OperationKind.INSERT, key, MappingProxyType(dict(fields)), entity)
            )
            overlay_ops.append(
                RenderOp(OperationKind.OVERLAY, key, entity=entity, expanded=expanded, editing=editing)
            )
        else:
            changed = {
                name: value
                for name, value in fields.items()
                if name not in previous.fields or previous.fields[name] != value
            }
            if changed:
                structural.append(
                    RenderOp(OperationKind.UPDATE, key, MappingProxyType(changed), entity)
                )
            if (previous.expanded, previous.editing) != (expanded, editing):
                overlay_ops.append(
                    RenderOp(OperationKind.OVERLAY, key, entity=entity, expanded=expanded, editing=editing)
                )

        next_rows[key] = RenderedRow(
            fields=MappingProxyType(dict(fields)),
            expanded=expanded,
            editing=editing,
        )

    return RenderPlan(
        ops=tuple(structural + overlay_ops),
        next_state=ContainerState(rows=MappingProxyType(next_rows)),
    )


def reapply_overlay(container_state: ContainerState, key: str, overlay: OverlayLookup) -> RenderPlan:
    """Plan for a mode change of one already rendered key (toggle, edit)."""
    previous = container_state.rows.get(key)
    if previous is None:
        return RenderPlan(ops=(), next_state=container_state)
    expanded, editing = _mode(overlay, key)
    if (previous.expanded, previous.editing) == (expanded, editing):
        return RenderPlan(ops=(), next_state=container_state)
    rows = dict(container_state.rows)
    rows[key] = RenderedRow(fields=previous.fields, expanded=expanded, editing=editing)
    return RenderPlan(
        ops=(RenderOp(OperationKind.OVERLAY, key, expanded=expanded, editing=editing),),
        next_state=ContainerState(rows=MappingProxyType(rows)),
    )


__all__ = [
    "ContainerState",
    "OverlayLookup",
    "RenderOp",
    "RenderPlan",
    "RenderedRow",
    "reapply_overlay",
    "reconcile",
]
