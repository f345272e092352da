"""Lenient coercion of loosely-typed upstream values.

Filter payloads and resume documents arrive from JavaScript clients and
extraction jobs, so the same field can be a list, a comma-separated string,
a number-as-string or missing altogether. These helpers never raise.
"""

import math
from typing import Any, Iterable, List

SEQUENCE_TYPES = (list, tuple, set, frozenset)


def to_text(value: Any) -> str:
    """Return a stripped string, or "" for None and non-scalar values."""
    if value is None or isinstance(value, (dict,) + SEQUENCE_TYPES):
        return ""
    if isinstance(value, bool):
        return str(value).lower()
    return str(value).strip()


def to_string_list(value: Any, split_commas: bool = False) -> List[str]:
    """Coerce a scalar or sequence into a list of non-empty stripped strings.

    Nested sequences are flattened one level; mappings and None items are
    skipped. Order is preserved and duplicates are kept (see unique()).

    Args:
        value: Raw value (None, string, number, or sequence)
        split_commas: Treat a bare string as a comma-separated list

    Example:
        >>> to_string_list("Python, Go", split_commas=True)
        ['Python', 'Go']
        >>> to_string_list(["react", None, ["node"]])
        ['react', 'node']
    """
    if value is None:
        return []

    if isinstance(value, str):
        parts = value.split(",") if split_commas else [value]
        return [p.strip() for p in parts if p.strip()]

    if isinstance(value, SEQUENCE_TYPES):
        items: List[str] = []
        for item in value:
            if isinstance(item, SEQUENCE_TYPES):
                items.extend(to_text(inner) for inner in item)
            else:
                items.append(to_text(item))
        return [item for item in items if item]

    text = to_text(value)
    return [text] if text else []


def to_number(value: Any, default: float = 0.0) -> float:
    """Coerce to a finite float, falling back to default.

    Numeric strings such as "50,000" or " 3.5 " are accepted.
    """
    if value is None or isinstance(value, bool):
        return default

    if isinstance(value, (int, float)):
        number = float(value)
    elif isinstance(value, str):
        cleaned = value.strip().replace(",", "").replace("_", "")
        if not cleaned:
            return default
        try:
            number = float(cleaned)
        except ValueError:
            return default
    else:
        return default

    if math.isnan(number) or math.isinf(number):
        return default
    return number


def unique(items: Iterable[str]) -> List[str]:
    """Drop duplicates while keeping first-seen order."""
    seen = set()
    result = []
    for item in items:
        if item not in seen:
            seen.add(item)
            result.append(item)
    return result
