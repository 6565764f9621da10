"""PascalCase to camelCase key normalization for API response bodies.

PlayFab returns PascalCase keys (``PlayFabId``, ``SessionTicket``). The SDK
hands callers camelCase keys instead. Only the first character of each key
is lower-cased, so ``"ID"`` becomes ``"iD"``, not ``"id"``.

Cyclic structures are not supported: they recurse until RecursionError.
"""

from typing import Any, Mapping

from .models import JSONValue


def pascal_to_camel(key: Any) -> Any:
    """Lower-case the first character of a string key.

    Non-string keys and the empty string are returned unchanged.

    Examples:
        >>> pascal_to_camel("PlayFabId")
        'playFabId'
        >>> pascal_to_camel("ID")
        'iD'
    """
    if not isinstance(key, str) or not key:
        return key
    return key[0].lower() + key[1:]


def normalize_keys(value: JSONValue) -> JSONValue:
    """Recursively convert mapping keys from PascalCase to camelCase.

    Mappings produce new dicts, sequences (lists and tuples) produce new
    lists with order and length preserved, and scalars including None are
    returned as-is. The input is never mutated.

    Args:
        value: JSON-like value decoded from a response body

    Returns:
        New structure with every mapping key normalized
    """
    if isinstance(value, Mapping):
        return {pascal_to_camel(k): normalize_keys(v) for k, v in value.items()}
    if isinstance(value, (list, tuple)):
        return [normalize_keys(item) for item in value]
    return value
