"""Base HTTP client shared by the PlayFab, Google and Aptos clients.

Owns the requests session, the User-Agent header and the request timeout,
and turns every transport failure into a TransportError subclass.
"""

import logging
from typing import Any, Dict, Optional

import requests

from aptoplay.config.models import ClientConfig
from aptoplay.logging import get_logger

from .exceptions import ResponseParseError, TransportError, TransportTimeoutError

logger = get_logger(__name__, component="transport")


def _decode_body(response: requests.Response) -> Any:
    try:
        return response.json()
    except ValueError:
        return response.text or None


class BaseClient:
    """Base class for clients of a JSON-over-HTTP service.

    Attributes:
        config: Transport and endpoint settings
        timeout: HTTP request timeout in seconds
        user_agent: User-Agent header sent with every request
    """

    def __init__(
        self,
        config: Optional[ClientConfig] = None,
        session: Optional[requests.Session] = None,
    ) -> None:
        """Initialize client with configuration.

        Args:
            config: Client configuration (defaults to ClientConfig())
            session: Session to reuse; a new one is created when omitted
        """
        self.config = config or ClientConfig()
        self.timeout = self.config.http_request_timeout
        self.user_agent = self.config.user_agent

        self._session = session or requests.Session()
        self._session.headers.update({"User-Agent": self.user_agent})

    def close(self) -> None:
        """Close the underlying HTTP session."""
        self._session.close()

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()
        return False

    def _make_request(
        self,
        url: str,
        method: str = "GET",
        headers: Optional[Dict[str, str]] = None,
        params: Optional[Dict[str, Any]] = None,
        json_data: Optional[Dict[str, Any]] = None,
    ) -> Any:
        """Make HTTP request with error handling.

        Args:
            url: URL to request
            method: HTTP method (default "GET")
            headers: Additional headers merged over the session defaults
            params: Query parameters
            json_data: JSON body

        Returns:
            Decoded JSON response body

        Raises:
            TransportError: On 4xx/5xx status or connection failure
            TransportTimeoutError: On request timeout
            ResponseParseError: On a successful response with invalid JSON
        """
        request_headers = self._session.headers.copy()
        if headers:
            request_headers.update(headers)

        logger.debug(
            f"HTTP {method} request to {url}",
            extra={
                "event": "transport.request",
                "method": method,
                "url": url,
                "timeout": self.timeout,
            },
        )

        try:
            response = self._session.request(
                method=method,
                url=url,
                headers=request_headers,
                params=params,
                json=json_data,
                timeout=self.timeout,
            )
        except requests.exceptions.Timeout as e:
            logger.warning(
                f"Request to {url} timed out after {self.timeout} seconds",
                extra={
                    "event": "transport.timeout",
                    "url": url,
                    "timeout": self.timeout,
                },
            )
            raise TransportTimeoutError(
                f"Request to {url} timed out after {self.timeout} seconds",
                url=url,
            ) from e
        except requests.exceptions.RequestException as e:
            logger.error(
                f"Request to {url} failed: {e}",
                extra={
                    "event": "transport.error",
                    "error_type": type(e).__name__,
                    "url": url,
                },
            )
            raise TransportError(
                f"Request to {url} failed: {e}",
                status_code=0,
                url=url,
            ) from e

        if response.status_code >= 400:
            # 5xx is worth a retry by the caller, 4xx is not
            log_level = logging.WARNING if response.status_code >= 500 else logging.ERROR
            logger.log(
                log_level,
                f"HTTP {response.status_code} error from {url}",
                extra={
                    "event": "transport.http_error",
                    "status_code": response.status_code,
                    "url": url,
                },
            )
            raise TransportError(
                f"HTTP {response.status_code}: {response.reason}",
                status_code=response.status_code,
                url=url,
                response=_decode_body(response),
            )

        try:
            data = response.json()
        except ValueError as e:
            logger.error(
                f"Failed to parse JSON response from {url}",
                extra={
                    "event": "transport.error",
                    "error_type": "JSONDecodeError",
                    "url": url,
                },
            )
            raise ResponseParseError(
                f"Failed to parse JSON response from {url}: {e}",
                status_code=response.status_code,
                url=url,
                response=response.text,
            ) from e

        logger.debug(
            "HTTP request succeeded",
            extra={
                "event": "transport.succeeded",
                "status_code": response.status_code,
                "url": url,
            },
        )
        return data
