"""Exceptions raised by candidate repositories."""

from typing import Optional


class RepositoryError(Exception):
    """Raised when a candidate source cannot be read.

    Attributes:
        source: Human-readable name of the source (file path, store name)
    """

    def __init__(self, message: str, source: Optional[str] = None):
        self.message = message
        self.source = source
        if source:
            super().__init__(f"{message} (source: {source})")
        else:
            super().__init__(message)
