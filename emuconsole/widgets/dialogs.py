"""Modal dialogs for create, send and confirm flows.

Standard pattern:
- Dialogs are modal screens returning their result via ``dismiss``
- Form dialogs return the raw field values; validation happens in the
  action layer so errors surface in the global alert bar
"""

from __future__ import annotations

from collections.abc import Sequence
from contextlib import suppress
from dataclasses import dataclass
from typing import Any

from textual.app import ComposeResult
from textual.containers import Horizontal, Vertical, VerticalScroll
from textual.css.query import NoMatches
from textual.screen import ModalScreen
from textual.widgets import Button, Checkbox, Input, Label, Select, Static

from emuconsole.keyboard.navigation import DIALOG_BINDINGS

_DIALOG_CSS = """
{name} {{
    align: center middle;
}}
{name} .dialog-container {{
    width: 64;
    max-width: 90%;
    height: auto;
    max-height: 90%;
    border: thick $primary;
    background: $surface;
    padding: 1 2;
}}
{name} .dialog-title {{
    text-style: bold;
    padding-bottom: 1;
}}
{name} .dialog-field {{
    height: auto;
}}
{name} .dialog-buttons {{
    height: auto;
    align-horizontal: right;
    padding-top: 1;
}}
{name} .dialog-buttons Button {{
    margin-left: 1;
}}
"""


@dataclass(frozen=True)
class FieldSpec:
    """One form field.

    ``kind`` is ``text``, ``bool`` or ``select``; ``options`` applies to
    ``select`` only.
    """

    name: str
    label: str
    kind: str = "text"
    default: Any = ""
    placeholder: str = ""
    options: tuple[str, ...] = ()


def _field_id(name: str) -> str:
    return f"field-{name}"


class FormDialog(ModalScreen[dict[str, Any] | None]):
    """Generic form; dismisses with ``{field name: value}`` or None."""

    DEFAULT_CSS = _DIALOG_CSS.format(name="FormDialog")
    BINDINGS = DIALOG_BINDINGS

    def __init__(self, title: str, fields: Sequence[FieldSpec], submit_label: str = "Submit") -> None:
        super().__init__()
        self._title = title
        self._fields = tuple(fields)
        self._submit_label = submit_label

    def compose(self) -> ComposeResult:
        with VerticalScroll(classes="dialog-container"):
            yield Static(self._title, classes="dialog-title")
            for spec in self._fields:
                with Vertical(classes="dialog-field"):
                    if spec.kind == "bool":
                        yield Checkbox(spec.label, bool(spec.default), id=_field_id(spec.name))
                        continue
                    yield Label(spec.label)
                    if spec.kind == "select":
                        yield Select(
                            [(option, option) for option in spec.options],
                            value=spec.default if spec.default in spec.options else Select.BLANK,
                            allow_blank=spec.default not in spec.options,
                            id=_field_id(spec.name),
                        )
                    else:
                        yield Input(
                            value=str(spec.default),
                            placeholder=spec.placeholder,
                            id=_field_id(spec.name),
                        )
            with Horizontal(classes="dialog-buttons"):
                yield Button(self._submit_label, id="submit-btn", variant="primary")
                yield Button("Cancel", id="cancel-btn")

    def on_mount(self) -> None:
        with suppress(NoMatches):
            self.query(Input).first().focus()

    def values(self) -> dict[str, Any]:
        result: dict[str, Any] = {}
        for spec in self._fields:
            widget = self.query_one(f"#{_field_id(spec.name)}")
            if isinstance(widget, Checkbox):
                result[spec.name] = widget.value
            elif isinstance(widget, Select):
                result[spec.name] = "" if widget.value is Select.BLANK else str(widget.value)
            elif isinstance(widget, Input):
                result[spec.name] = widget.value
        return result

    def on_input_submitted(self, event: Input.Submitted) -> None:
        event.stop()
        self.dismiss(self.values())

    def on_button_pressed(self, event: Button.Pressed) -> None:
        event.stop()
        if event.button.id == "submit-btn":
            self.dismiss(self.values())
        else:
            self.dismiss(None)

    def action_cancel(self) -> None:
        self.dismiss(None)


class ConfirmDialog(ModalScreen[bool]):
    """Confirmation dialog with OK/Cancel buttons."""

    DEFAULT_CSS = _DIALOG_CSS.format(name="ConfirmDialog")
    BINDINGS = DIALOG_BINDINGS

    def __init__(self, message: str, title: str = "Confirm") -> None:
        super().__init__()
        self._message = message
        self._title = title

    def compose(self) -> ComposeResult:
        with Vertical(classes="dialog-container"):
            if self._title:
                yield Static(self._title, classes="dialog-title")
            yield Static(self._message, classes="dialog-message")
            with Horizontal(classes="dialog-buttons"):
                yield Button("OK", id="confirm-btn", variant="error")
                yield Button("Cancel", id="cancel-btn")

    def on_button_pressed(self, event: Button.Pressed) -> None:
        event.stop()
        self.dismiss(event.button.id == "confirm-btn")

    def action_cancel(self) -> None:
        self.dismiss(False)


class HelpDialog(ModalScreen[None]):
    """Lists key bindings."""

    DEFAULT_CSS = _DIALOG_CSS.format(name="HelpDialog")
    BINDINGS = DIALOG_BINDINGS

    def __init__(self, lines: Sequence[tuple[str, str]]) -> None:
        super().__init__()
        self._lines = tuple(lines)

    def compose(self) -> ComposeResult:
        with VerticalScroll(classes="dialog-container"):
            yield Static("Keys", classes="dialog-title")
            yield Static("\n".join(f"{key:>8}  {text}" for key, text in self._lines))
            with Horizontal(classes="dialog-buttons"):
                yield Button("Close", id="close-btn")

    def on_button_pressed(self, event: Button.Pressed) -> None:
        event.stop()
        self.dismiss(None)

    def action_cancel(self) -> None:
        self.dismiss(None)


__all__ = [
    "ConfirmDialog",
    "FieldSpec",
    "FormDialog",
    "HelpDialog",
]
