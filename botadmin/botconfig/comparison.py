"""Structural comparison of field values.

Used by the full reset to count only fields whose current value actually
differs from the factory value. Never used to block an update.
"""

from collections.abc import Mapping, Sequence
from typing import Any

from botadmin.botconfig.projection import plain_value


def value_kind(value: Any) -> str:
    """Runtime type category of a JSON-like value.

    bool is checked before int since it subclasses int but is its own kind.
    """
    if isinstance(value, bool):
        return "boolean"
    if isinstance(value, int | float):
        return "number"
    if isinstance(value, str):
        return "string"
    if isinstance(value, Mapping):
        return "object"
    if isinstance(value, Sequence):
        return "array"
    return type(value).__name__


def values_differ(current: Any, factory: Any) -> bool:
    """Deep-compare two values, returning True when they differ.

    Objects are compared over the union of their key sets, so two objects
    with the same number of keys but different key names are different.
    """
    current = plain_value(current)
    factory = plain_value(factory)

    if current is factory:
        return False
    if current is None or factory is None:
        return True

    kind = value_kind(current)
    if kind != value_kind(factory):
        return True

    if kind == "array":
        if len(current) != len(factory):
            return True
        return any(values_differ(a, b) for a, b in zip(current, factory, strict=True))

    if kind == "object":
        if len(current) != len(factory):
            return True
        for key in current.keys() | factory.keys():
            if key not in current or key not in factory:
                return True
            if values_differ(current[key], factory[key]):
                return True
        return False

    return bool(current != factory)
