"""Update engine: apply flat key -> value updates to a document.

Input is expected to have passed field validation already; this module
only matches keys and assigns values.
"""

from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any

from botadmin.botconfig.errors import NoValidFieldsError
from botadmin.botconfig.models import Actor, BotConfigDocument
from botadmin.observability.logging import get_logger

logger = get_logger(__name__)


@dataclass(frozen=True)
class UpdateResult:
    """Outcome of an update call."""

    update_count: int
    document: BotConfigDocument


def apply_updates(
    document: BotConfigDocument,
    updates: Mapping[str, Any],
    actor: Actor,
) -> UpdateResult:
    """Set current values for every field whose key appears in `updates`.

    Keys without a matching field are ignored. Every matched field counts,
    even when the new value equals the old one. The audit block is stamped
    once per call.

    Raises:
        NoValidFieldsError: If no key matched; the document is left untouched
    """
    matched = [
        field for _, field in document.iter_fields() if field.key in updates
    ]
    if not matched:
        logger.info(
            "update_no_matching_fields",
            merchant_id=document.id,
            requested_keys=sorted(updates),
        )
        raise NoValidFieldsError("No valid fields to update")

    for field in matched:
        field.current_value = updates[field.key]

    document.audit.record_change(actor=actor)

    ignored = sorted(set(updates) - {field.key for field in matched})
    logger.info(
        "config_fields_updated",
        merchant_id=document.id,
        update_count=len(matched),
        ignored_keys=ignored,
        change_count=document.audit.change_count,
    )

    return UpdateResult(update_count=len(matched), document=document)
