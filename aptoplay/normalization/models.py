"""Data models for normalized responses and errors.

This module defines:
- JSONValue: the shape of decoded response bodies
- TransportFault / OpaqueCause: the two variants a failure cause is classified into
- AptoPlayError: the single exception type surfaced by public SDK methods
"""

from dataclasses import dataclass
from typing import Any, Dict, List, Optional, Union

JSONValue = Union[None, bool, int, float, str, List["JSONValue"], Dict[str, "JSONValue"]]


@dataclass(frozen=True)
class TransportFault:
    """A failure that came from the HTTP layer.

    Attributes:
        code: HTTP status code, 0 when no response was received
        response: Decoded response body, if any
        message: Transport error message
        url: Requested URL, when known
    """

    code: int
    response: Any
    message: str
    url: Optional[str] = None


@dataclass(frozen=True)
class OpaqueCause:
    """Any other failure cause, kept as-is."""

    value: Any


Fault = Union[TransportFault, OpaqueCause]


class AptoPlayError(Exception):
    """Normalized failure raised by every public SDK method.

    ``kind`` names the operation that failed and is always the label the
    caller supplied. ``cause`` is the original failure, untouched. When the
    cause is a transport fault, its ``code`` and ``response`` are copied
    onto the error as well.
    """

    def __init__(
        self,
        kind: str,
        message: str = "",
        cause: Any = None,
        fault: Optional[Fault] = None,
    ) -> None:
        super().__init__(f"{kind}: {message}" if message else kind)
        self.kind = kind
        self.message = message
        self.cause = cause
        self.fault = fault

    @property
    def code(self) -> Optional[int]:
        """HTTP status code of a transport fault, else None."""
        if isinstance(self.fault, TransportFault):
            return self.fault.code
        return None

    @property
    def response(self) -> Any:
        """Decoded response body of a transport fault, else None."""
        if isinstance(self.fault, TransportFault):
            return self.fault.response
        return None

    @property
    def is_transport_error(self) -> bool:
        return isinstance(self.fault, TransportFault)

    def to_dict(self) -> Dict[str, Any]:
        """Plain-dict view, convenient for logging and API responses."""
        data: Dict[str, Any] = {
            "kind": self.kind,
            "message": self.message,
            "cause": self.cause,
        }
        if isinstance(self.fault, TransportFault):
            data["code"] = self.fault.code
            data["response"] = self.fault.response
        return data

    def __repr__(self) -> str:
        return f"AptoPlayError(kind={self.kind!r}, message={self.message!r}, code={self.code!r})"
