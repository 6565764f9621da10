"""Structured logging helpers for the AptoPlay SDK."""

import logging
from typing import Optional

from .config import configure_logging
from .context import clear_log_context, get_log_context, log_context


class SDKLoggerAdapter(logging.LoggerAdapter):
    """Adds the SDK component and the active call context to every record.

    Precedence, lowest first: component, call context, the call's own extra.
    Records therefore carry ``operation`` even when the host application
    never calls configure_logging().
    """

    def process(self, msg, kwargs):
        kwargs["extra"] = {**self.extra, **get_log_context(), **kwargs.get("extra", {})}
        return msg, kwargs


def get_logger(name: str, component: Optional[str] = None) -> SDKLoggerAdapter:
    """Return the SDK logger for ``name``.

    Args:
        name: Logger name (typically __name__)
        component: SDK component tag such as "playfab" or "transport"

    Example:
        >>> logger = get_logger(__name__, component="playfab")
        >>> logger.info("Login succeeded", extra={"event": "playfab.login.succeeded"})
    """
    extra = {"component": component} if component else {}
    return SDKLoggerAdapter(logging.getLogger(name), extra)


__all__ = [
    "SDKLoggerAdapter",
    "get_logger",
    "configure_logging",
    "log_context",
    "get_log_context",
    "clear_log_context",
]
