"""Scoped logging context backed by contextvars.

Fields bound with ``log_context`` (search_id, candidate_id, ...) are attached
by ``ContextualFilter`` to every record emitted inside the block. Each thread
starts from an empty context; the scoring pool copies the caller's context
into its tasks explicitly.
"""

from contextlib import contextmanager
from contextvars import ContextVar
from typing import Any, Dict, Iterator

_fields: ContextVar[Dict[str, Any]] = ContextVar("talentmatch_log_context", default={})


def get_log_context() -> Dict[str, Any]:
    """Return a copy of the fields currently bound."""
    return dict(_fields.get())


@contextmanager
def log_context(**fields: Any) -> Iterator[Dict[str, Any]]:
    """Bind fields to log records for the duration of the block.

    Nested blocks layer over the outer fields (same keys are shadowed) and
    the outer fields come back on exit, including when the block raises.

    Example:
        >>> with log_context(search_id="3f2a"):
        ...     logger.info("Scoring candidates")
    """
    token = _fields.set({**_fields.get(), **fields})
    try:
        yield get_log_context()
    finally:
        _fields.reset(token)
