"""Flat key -> value projection of a configuration document.

The "minimal config" served to chat widgets ignores section structure and
exposes each field's current value under its key.
"""

from typing import Any

from pydantic import BaseModel

from botadmin.botconfig.models import BotConfigDocument


def plain_value(value: Any) -> Any:
    """Convert a field value to its JSON-compatible form."""
    if isinstance(value, BaseModel):
        return value.model_dump(mode="json", exclude_none=True)
    if isinstance(value, list):
        return [plain_value(item) for item in value]
    return value


def flatten(document: BotConfigDocument) -> dict[str, Any]:
    """Build the flat key -> current value mapping.

    Fields whose current value is None are omitted rather than emitted as
    null. When two sections define the same key, the section iterated last
    wins; callers should not depend on which one that is.
    """
    flat: dict[str, Any] = {}
    for _, field in document.iter_fields():
        if field.current_value is None:
            continue
        flat[field.key] = plain_value(field.current_value)
    return flat
