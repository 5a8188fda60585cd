"""Utility helpers for the console."""

from emuconsole.utils.validators import (
    is_whole_number,
    parse_attribute_value,
    parse_dlq_max_receive_count,
    validate_queue_attributes,
)

__all__ = [
    "is_whole_number",
    "parse_attribute_value",
    "parse_dlq_max_receive_count",
    "validate_queue_attributes",
]
