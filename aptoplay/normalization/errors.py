"""Failure normalization.

Every failure leaving a public SDK method goes through normalize_error(),
so callers receive one exception type with a stable ``kind`` label.
"""

from typing import Any, Mapping, Optional

import requests

from aptoplay.logging import get_logger
from aptoplay.transport.exceptions import TransportError

from .models import AptoPlayError, Fault, OpaqueCause, TransportFault

logger = get_logger(__name__, component="errors")

# Keys that mark a mapping as a serialized HTTP failure envelope
_ENVELOPE_KEYS = ("request", "response")


def _response_body(response: Optional[requests.Response]) -> Any:
    if response is None:
        return None
    try:
        return response.json()
    except ValueError:
        return response.text


def _message_of(cause: Any) -> str:
    if cause is None:
        return ""
    if isinstance(cause, Mapping):
        message = cause.get("message")
    else:
        message = getattr(cause, "message", None)
        if message is None and isinstance(cause, BaseException):
            message = str(cause)
    return message if isinstance(message, str) else ""


def classify_cause(cause: Any) -> Optional[Fault]:
    """Classify a failure cause as a TransportFault or an OpaqueCause.

    Recognized transport faults:
    - TransportError raised by BaseClient._make_request
    - requests.RequestException (with or without a response)
    - mappings carrying a request/response envelope

    Args:
        cause: The original failure value, or None

    Returns:
        TransportFault, OpaqueCause, or None when there is no cause
    """
    if cause is None:
        return None

    if isinstance(cause, TransportError):
        return TransportFault(
            code=cause.status_code,
            response=cause.response,
            message=cause.message,
            url=cause.url,
        )

    if isinstance(cause, requests.RequestException):
        response = cause.response
        return TransportFault(
            code=response.status_code if response is not None else 0,
            response=_response_body(response),
            message=str(cause),
            url=cause.request.url if cause.request is not None else None,
        )

    if isinstance(cause, Mapping) and any(key in cause for key in _ENVELOPE_KEYS):
        code = cause.get("code")
        return TransportFault(
            code=code if isinstance(code, int) else 0,
            response=cause.get("response"),
            message=_message_of(cause),
        )

    return OpaqueCause(cause)


def normalize_error(kind: str, cause: Any = None) -> AptoPlayError:
    """Convert any failure into an AptoPlayError labelled ``kind``.

    The returned error keeps ``cause`` unmodified. Its message comes from the
    cause when one is available, otherwise it is empty. This function does
    not raise.

    Args:
        kind: Label naming the failed operation, used verbatim
        cause: Original failure (exception, mapping or any value), optional

    Returns:
        AptoPlayError ready to be raised
    """
    fault = classify_cause(cause)
    error = AptoPlayError(kind=kind, message=_message_of(cause), cause=cause, fault=fault)

    logger.debug(
        "Normalized failure",
        extra={
            "event": "error.normalized",
            "kind": kind,
            "cause_type": type(cause).__name__ if cause is not None else None,
            "transport_fault": error.is_transport_error,
            "status_code": error.code,
        },
    )

    return error
