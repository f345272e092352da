"""Structured logging helpers shared by the scoring engine and search service."""

import logging
from typing import Optional


class ComponentLoggerAdapter(logging.LoggerAdapter):
    """LoggerAdapter that tags every record with a component name.

    Fields passed through ``extra`` at the call site win over the adapter's
    own fields.
    """

    def process(self, msg, kwargs):
        """Merge the adapter's extra fields into the call's extra fields."""
        call_extra = kwargs.get("extra", {})
        kwargs["extra"] = {**self.extra, **call_extra}
        return msg, kwargs


def get_logger(name: str, component: Optional[str] = None):
    """Return a module logger, optionally bound to a component label.

    Args:
        name: Logger name (typically __name__)
        component: Component identifier added to every record (e.g. "matching")

    Returns:
        Logger or ComponentLoggerAdapter instance

    Example:
        >>> logger = get_logger(__name__, component="search")
        >>> logger.info("Search completed", extra={"event": "search.completed"})
    """
    logger = logging.getLogger(name)

    if component:
        return ComponentLoggerAdapter(logger, {"component": component})

    return logger
