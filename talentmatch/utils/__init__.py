"""Utility functions for value coercion and time handling."""

from .coercion import to_number, to_string_list, to_text, unique
from .timestamps import (
    coerce_datetime,
    ensure_utc,
    format_timestamp,
    parse_iso_datetime,
    utc_now,
)

__all__ = [
    # Coercion
    "to_text",
    "to_string_list",
    "to_number",
    "unique",
    # Timestamps
    "utc_now",
    "ensure_utc",
    "parse_iso_datetime",
    "coerce_datetime",
    "format_timestamp",
]
