"""Response and failure normalization.

This module provides:
- normalize_keys: PascalCase -> camelCase recursive key transform
- normalize_error: failure -> AptoPlayError
- AptoPlayError, TransportFault, OpaqueCause: normalized error models
"""

from .errors import classify_cause, normalize_error
from .keys import normalize_keys, pascal_to_camel
from .models import AptoPlayError, JSONValue, OpaqueCause, TransportFault

__all__ = [
    "normalize_keys",
    "pascal_to_camel",
    "normalize_error",
    "classify_cause",
    "AptoPlayError",
    "TransportFault",
    "OpaqueCause",
    "JSONValue",
]
