"""Exceptions raised at the SDK's HTTP boundary.

These never leave the SDK directly: public client methods pass them through
normalize_error() so callers only ever see AptoPlayError.
"""

from typing import Any, Optional


class TransportError(Exception):
    """HTTP request failed at the transport layer.

    Covers 4xx/5xx responses and connection failures. For connection
    failures there is no response and ``status_code`` is 0.
    """

    def __init__(
        self,
        message: str,
        status_code: int,
        url: str,
        response: Optional[Any] = None,
    ) -> None:
        """Initialize transport error.

        Args:
            message: Human-readable error message
            status_code: HTTP status code, 0 when no response was received
            url: URL that failed
            response: Decoded response body (JSON value or text), if any
        """
        super().__init__(message)
        self.message = message
        self.status_code = status_code
        self.url = url
        self.response = response


class TransportTimeoutError(TransportError):
    """HTTP request did not complete within the configured timeout."""

    def __init__(self, message: str, url: str) -> None:
        super().__init__(message, status_code=0, url=url)


class ResponseParseError(TransportError):
    """A successful response carried a body that is not valid JSON."""
