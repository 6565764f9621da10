"""Per-call logging context.

Every public SDK call runs inside log_context(operation=...), so each record
it emits can be traced back to the operation and PlayFab title involved.
"""

from contextlib import contextmanager
from contextvars import ContextVar, Token
from typing import Any, Dict, Iterator, Optional


_call_context: ContextVar[Dict[str, Any]] = ContextVar("aptoplay_call_context", default={})


def get_log_context() -> Dict[str, Any]:
    """Return a copy of the fields of the call in flight."""
    return dict(_call_context.get())


def push_log_context(**fields: Any) -> Token:
    """Add fields for the call in flight; fields set to None are skipped."""
    merged = {**_call_context.get(), **{k: v for k, v in fields.items() if v is not None}}
    return _call_context.set(merged)


def pop_log_context(token: Token) -> None:
    _call_context.reset(token)


def clear_log_context() -> None:
    _call_context.set({})


@contextmanager
def log_context(
    operation: Optional[str] = None,
    title_id: Optional[str] = None,
    **fields: Any,
) -> Iterator[Dict[str, Any]]:
    """Tag records emitted inside the block with the SDK call they belong to.

    Args:
        operation: ErrorKind label of the public operation
        title_id: PlayFab title the call targets
        **fields: Any further fields to attach

    Yields:
        The active context after merging

    Example:
        >>> with log_context(operation="PLAYFAB_LOGIN_WITH_EMAIL_ERROR", title_id="A1B2C"):
        ...     logger.info("Calling PlayFab")
    """
    token = push_log_context(operation=operation, title_id=title_id, **fields)
    try:
        yield get_log_context()
    finally:
        pop_log_context(token)
