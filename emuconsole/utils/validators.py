"""Input validation for queue attribute forms.

Provides functions to turn raw form input into integer attribute values:
- parse_attribute_value: one field, numeric check then range check
- validate_queue_attributes: the five editable attributes, first failure wins
"""

from __future__ import annotations

import math
from collections.abc import Mapping
from typing import Any

from emuconsole.constants.limits import (
    DLQ_MAX_RECEIVE_COUNT_MIN,
    EDITABLE_QUEUE_ATTRIBUTE_KEYS,
    QUEUE_ATTRIBUTE_RANGES,
)
from emuconsole.controllers.base.errors import ValidationFailed


def _to_number(raw: Any) -> float | None:
    """Parse raw input to a finite number, or None."""
    if isinstance(raw, bool):
        return None
    if isinstance(raw, (int, float)):
        value = float(raw)
    else:
        text = str(raw if raw is not None else "").strip()
        if not text:
            return None
        try:
            value = float(text)
        except ValueError:
            return None
    if not math.isfinite(value):
        return None
    return value


def is_whole_number(raw: Any) -> bool:
    """Return True when ``raw`` parses to a finite whole number."""
    value = _to_number(raw)
    return value is not None and value.is_integer()


def parse_attribute_value(name: str, raw: Any) -> int:
    """Parse and range-check one queue attribute.

    Args:
        name: Attribute name (e.g., "VisibilityTimeout")
        raw: Draft value as typed, or a number

    Returns:
        The attribute as an int.

    Raises:
        ValidationFailed: "<name> must be a number" when the input is empty
            or not numeric; "<name> must be a whole number" when it has a
            fraction; "<name> must be between <min> and <max>" when outside
            the inclusive range.
    """
    value = _to_number(raw)
    if value is None:
        raise ValidationFailed(f"{name} must be a number", field=name)
    if not value.is_integer():
        raise ValidationFailed(f"{name} must be a whole number", field=name)

    bounds = QUEUE_ATTRIBUTE_RANGES.get(name)
    if bounds is not None:
        low, high = bounds
        if value < low or value > high:
            raise ValidationFailed(f"{name} must be between {low} and {high}", field=name)
    return int(value)


def validate_queue_attributes(values: Mapping[str, Any]) -> dict[str, int]:
    """Validate the editable queue attributes in display order.

    Missing keys count as empty input. The first failing field raises.
    """
    return {
        name: parse_attribute_value(name, values.get(name))
        for name in EDITABLE_QUEUE_ATTRIBUTE_KEYS
    }


def parse_dlq_max_receive_count(raw: Any) -> int:
    """Parse the dead-letter max receive count (integer, at least 1)."""
    value = _to_number(raw)
    if value is None or not value.is_integer() or value < DLQ_MAX_RECEIVE_COUNT_MIN:
        raise ValidationFailed(
            "DLQ max receive count must be 1 or greater",
            field="dlq_max_receive_count",
        )
    return int(value)


__all__ = [
    "is_whole_number",
    "parse_attribute_value",
    "parse_dlq_max_receive_count",
    "validate_queue_attributes",
]
