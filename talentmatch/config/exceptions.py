"""Exceptions raised while loading configuration."""

from typing import Iterable, List, Optional


def _render(headline: str, errors: List[str], suggestions: List[str]) -> str:
    lines = [headline]
    if errors:
        lines.append("\nValidation Errors:")
        lines.extend(f"  {number}. {error}" for number, error in enumerate(errors, 1))
    if suggestions:
        lines.append("\nSuggestions:")
        lines.extend(f"  - {suggestion}" for suggestion in suggestions)
    return "\n".join(lines)


class ConfigurationError(Exception):
    """
    A config file, environment variable or CLI filter payload is unusable.

    ``str(error)`` lists every problem found in one pass (numbered) followed
    by fix hints, so the CLI can print it as-is and exit 1.
    """

    def __init__(
        self,
        message: str,
        errors: Optional[Iterable[str]] = None,
        suggestions: Optional[Iterable[str]] = None,
    ):
        self.message = message
        self.errors = list(errors or [])
        self.suggestions = list(suggestions or [])
        super().__init__(_render(message, self.errors, self.suggestions))
