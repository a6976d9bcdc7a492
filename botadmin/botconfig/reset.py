"""Reset engine: restore fields to their factory values.

Selected resets count every named field; full resets count only fields
that actually changed.
"""

import copy
from collections.abc import Iterable
from dataclasses import dataclass

from botadmin.botconfig.errors import EmptyFieldListError, NoValidFieldsError
from botadmin.botconfig.comparison import values_differ
from botadmin.botconfig.models import Actor, AnyField, BotConfigDocument
from botadmin.observability.logging import get_logger

logger = get_logger(__name__)

EMPTY_FIELDS_MESSAGE = "fields array is required (e.g., ['chatbot_name', 'theme'])"


@dataclass(frozen=True)
class ResetResult:
    """Outcome of a reset call."""

    reset_count: int
    document: BotConfigDocument


def _restore(field: AnyField) -> None:
    field.current_value = copy.deepcopy(field.factory_value)


def reset_selected(
    document: BotConfigDocument,
    keys: Iterable[str],
    actor: Actor | None = None,
) -> ResetResult:
    """Reset the named fields to factory values.

    Every matching field is counted, including ones already at their
    factory value.

    Raises:
        EmptyFieldListError: If `keys` is empty
        NoValidFieldsError: If no key matched a field
    """
    wanted = set(keys)
    if not wanted:
        raise EmptyFieldListError(EMPTY_FIELDS_MESSAGE)

    reset_count = 0
    for _, field in document.iter_fields():
        if field.key in wanted:
            _restore(field)
            reset_count += 1

    if reset_count == 0:
        raise NoValidFieldsError("No valid fields to reset")

    document.audit.record_change(
        actor=actor,
        summary=f"Reset {reset_count} field(s) to factory values",
    )

    logger.info(
        "config_fields_reset",
        merchant_id=document.id,
        reset_count=reset_count,
        mode="selected",
    )

    return ResetResult(reset_count=reset_count, document=document)


def reset_all(document: BotConfigDocument, actor: Actor) -> ResetResult:
    """Reset every field that differs from its factory value.

    Running it twice in a row yields a zero count the second time. The audit
    block is stamped even when nothing changed.
    """
    reset_count = 0
    for _, field in document.iter_fields():
        if values_differ(field.current_value, field.factory_value):
            _restore(field)
            reset_count += 1

    document.audit.record_change(
        actor=actor,
        summary=f"Reset {reset_count} field(s) to factory values (full reset)",
    )

    logger.info(
        "config_fields_reset",
        merchant_id=document.id,
        reset_count=reset_count,
        mode="full",
    )

    return ResetResult(reset_count=reset_count, document=document)
