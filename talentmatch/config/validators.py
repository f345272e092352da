"""Non-fatal configuration checks."""

import warnings
from typing import Any, Dict, List

from .models import ScoringWeights

DEFAULT_WEIGHT_TOTAL = 100


def check_for_warnings(config_dict: Dict[str, Any]) -> List[str]:
    """
    Inspect a raw configuration dictionary for settings that are legal but suspicious.

    Args:
        config_dict: Raw configuration dictionary (before validation)

    Returns:
        List of warning messages
    """
    warning_messages = []

    scoring = config_dict.get("scoring", {})
    if not isinstance(scoring, dict):
        return warning_messages

    weights = scoring.get("weights")
    if isinstance(weights, dict) and weights:
        unknown = sorted(str(k) for k in weights if k not in ScoringWeights.model_fields)
        if unknown:
            warning_messages.append(
                f"Unknown scoring dimensions will be ignored: {', '.join(unknown)}"
            )

        # Overridden weights replace defaults; the rest keep their default value
        effective = {
            name: field.default for name, field in ScoringWeights.model_fields.items()
        }
        for name, value in weights.items():
            if name in effective and isinstance(value, int) and not isinstance(value, bool):
                effective[name] = value
        total = sum(effective.values())
        if total != DEFAULT_WEIGHT_TOTAL:
            warning_messages.append(
                f"Scoring weights sum to {total}, not {DEFAULT_WEIGHT_TOTAL}; "
                "scores are still normalized to 0-100"
            )

    max_workers = scoring.get("max_workers", 1)
    if isinstance(max_workers, int) and max_workers > 8:
        warning_messages.append(
            f"max_workers={max_workers}: scoring is CPU-bound and gains little from many threads"
        )

    return warning_messages


def emit_warnings(warning_messages: List[str]) -> None:
    """Emit each message through the warnings module."""
    for message in warning_messages:
        warnings.warn(message, UserWarning, stacklevel=2)
