"""HTTP transport shared by the SDK clients."""

from .base import BaseClient
from .exceptions import ResponseParseError, TransportError, TransportTimeoutError

__all__ = [
    "BaseClient",
    "TransportError",
    "TransportTimeoutError",
    "ResponseParseError",
]
