"""Context propagation for structured logging.

Fields pushed here (run_id, row_number, profile_url, ...) are added to every
log record emitted inside the scope by ContextualFilter.
"""

from contextvars import ContextVar, Token
from typing import Any, Dict, Optional

LogContextVar: ContextVar[Dict[str, Any]] = ContextVar("rolecheck_log_context", default={})


def get_log_context() -> Dict[str, Any]:
    """Return a copy of the active logging context."""
    return LogContextVar.get().copy()


def push_log_context(**fields: Any) -> Token:
    """Merge fields into the active context.

    Returns:
        Token for pop_log_context() to restore the previous state
    """
    return LogContextVar.set({**LogContextVar.get(), **fields})


def pop_log_context(token: Token) -> None:
    """Restore the context captured by push_log_context()."""
    LogContextVar.reset(token)


def clear_log_context() -> None:
    """Drop all context fields. Used by tests."""
    LogContextVar.set({})


class log_context:
    """Context manager for scoped logging fields.

    Example:
        >>> with log_context(run_id="abc123", row_number=4):
        ...     logger.info("Checking row")  # record carries run_id and row_number
    """

    def __init__(self, **fields: Any):
        self.fields = fields
        self.token: Optional[Token] = None

    def __enter__(self):
        self.token = push_log_context(**self.fields)
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        if self.token is not None:
            pop_log_context(self.token)
            self.token = None
        return False
