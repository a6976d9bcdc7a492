"""Configuration service: load, validate, mutate, persist, project.

Each public method is one unit of work against a merchant's document. The
engines mutate a loaded copy; nothing reaches the store unless the whole
operation succeeds, and saves are revision-checked so concurrent writers
cannot silently overwrite each other.
"""

import copy
from collections.abc import Iterable, Mapping
from dataclasses import dataclass
from pathlib import Path
from typing import Any

from botadmin.botconfig.errors import (
    ActorRequiredError,
    ConcurrentModificationError,
    ConfigAlreadyExistsError,
    ConfigNotFoundError,
    ConfigValidationError,
    EmptyFieldListError,
)
from botadmin.botconfig.models import Actor, AuditActor, AuditBlock, BotConfigDocument
from botadmin.botconfig.projection import flatten
from botadmin.botconfig.reset import EMPTY_FIELDS_MESSAGE, reset_all, reset_selected
from botadmin.botconfig.seed import build_default_document
from botadmin.botconfig.store import BotConfigStore
from botadmin.botconfig.stores.errors import DuplicateDocumentError, RevisionConflictError
from botadmin.botconfig.updater import apply_updates
from botadmin.botconfig.validation import validate_updates
from botadmin.observability.logging import get_logger
from botadmin.observability.metrics import (
    STORE_CONFLICTS,
    VALIDATION_FAILURES,
    record_mutation,
)

logger = get_logger(__name__)


@dataclass(frozen=True)
class MutationOutcome:
    """Count of affected fields plus the flat config after the change."""

    count: int
    config: dict[str, Any]


def _require_actor(actor: Actor | None) -> Actor:
    if actor is None:
        raise ActorRequiredError()
    return actor


def _as_new(document: BotConfigDocument, actor: Actor) -> BotConfigDocument:
    """Put a posted document into its freshly created state."""
    for _, config_field in document.iter_fields():
        config_field.current_value = copy.deepcopy(config_field.factory_value)
    document.revision = 0
    document.meta.audit = AuditBlock(created_by=AuditActor.from_actor(actor))
    return document


class BotConfigService:
    """Operations on merchant configuration documents."""

    def __init__(self, store: BotConfigStore) -> None:
        self._store = store

    async def _load(self, merchant_id: str) -> BotConfigDocument:
        document = await self._store.get(merchant_id)
        if document is None:
            logger.info("config_not_found", merchant_id=merchant_id)
            raise ConfigNotFoundError(merchant_id)
        return document

    async def _persist(self, document: BotConfigDocument, expected_revision: int) -> BotConfigDocument:
        try:
            return await self._store.save(document, expected_revision=expected_revision)
        except RevisionConflictError as e:
            STORE_CONFLICTS.labels(merchant_id=document.id).inc()
            logger.warning(
                "config_revision_conflict",
                merchant_id=document.id,
                expected=e.expected,
                actual=e.actual,
            )
            raise ConcurrentModificationError(document.id) from e

    async def get_full(self, merchant_id: str) -> BotConfigDocument:
        """Return the complete document."""
        return await self._load(merchant_id)

    async def get_minimal(self, merchant_id: str) -> dict[str, Any]:
        """Return the flat key -> current value projection."""
        return flatten(await self._load(merchant_id))

    async def update_minimal(
        self,
        merchant_id: str,
        updates: Mapping[str, Any],
        actor: Actor | None,
    ) -> MutationOutcome:
        """Validate and apply a flat update batch.

        The batch is applied all-or-nothing: any field failure rejects it.

        Raises:
            ActorRequiredError: If there is no actor
            ConfigNotFoundError: If the merchant has no document
            EmptyFieldListError: If the batch is empty
            ConfigValidationError: If any field fails validation
            NoValidFieldsError: If no key matched a field
            ConcurrentModificationError: If the document changed meanwhile
        """
        actor = _require_actor(actor)
        document = await self._load(merchant_id)

        failures = validate_updates(document, updates)
        if failures:
            VALIDATION_FAILURES.labels(merchant_id=merchant_id).inc()
            raise ConfigValidationError(failures)

        expected_revision = document.revision
        result = apply_updates(document, updates, actor)
        saved = await self._persist(result.document, expected_revision)

        record_mutation(merchant_id, "update", result.update_count)
        return MutationOutcome(count=result.update_count, config=flatten(saved))

    async def reset_selected(
        self,
        merchant_id: str,
        keys: Iterable[str],
        actor: Actor | None = None,
    ) -> int:
        """Reset the named fields to factory values, returning how many matched."""
        keys = list(keys)
        if not keys:
            raise EmptyFieldListError(EMPTY_FIELDS_MESSAGE)

        document = await self._load(merchant_id)
        expected_revision = document.revision
        result = reset_selected(document, keys, actor)
        await self._persist(result.document, expected_revision)

        record_mutation(merchant_id, "reset_selected", result.reset_count)
        return result.reset_count

    async def reset_all(self, merchant_id: str, actor: Actor | None) -> MutationOutcome:
        """Reset every changed field to its factory value."""
        actor = _require_actor(actor)
        document = await self._load(merchant_id)

        expected_revision = document.revision
        result = reset_all(document, actor)
        saved = await self._persist(result.document, expected_revision)

        record_mutation(merchant_id, "reset_all", result.reset_count)
        return MutationOutcome(count=result.reset_count, config=flatten(saved))

    async def delete_config(self, merchant_id: str, actor: Actor | None) -> str:
        """Delete a merchant's document, returning the merchant id."""
        actor = _require_actor(actor)
        deleted = await self._store.delete(merchant_id)
        if deleted is None:
            raise ConfigNotFoundError(merchant_id)

        logger.info("config_deleted", merchant_id=merchant_id, user_id=actor.id)
        record_mutation(merchant_id, "delete", 0)
        return merchant_id

    async def create_config(
        self,
        document: BotConfigDocument,
        actor: Actor | None,
    ) -> BotConfigDocument:
        """Store a new document for a merchant that has none yet.

        Current values start at their factory values and the revision and
        audit counters start at zero, whatever the posted body carried.
        """
        actor = _require_actor(actor)
        document = _as_new(document, actor)

        try:
            created = await self._store.create(document)
        except DuplicateDocumentError as e:
            raise ConfigAlreadyExistsError(document.id) from e

        logger.info("config_created", merchant_id=created.id, user_id=actor.id)
        record_mutation(created.id, "create", 0)
        return created

    async def list_configs(
        self,
        *,
        search: str | None = None,
        limit: int = 10,
        offset: int = 0,
    ) -> tuple[list[BotConfigDocument], int]:
        """List documents, newest first."""
        return await self._store.list(search=search, limit=limit, offset=offset)

    async def seed_default(
        self,
        merchant_id: str,
        *,
        source: Path | None = None,
    ) -> BotConfigDocument | None:
        """Create the factory document for a merchant unless one exists.

        Returns the created document, or None when the merchant already had one.
        """
        if await self._store.get(merchant_id) is not None:
            logger.info("seed_skipped_existing", merchant_id=merchant_id)
            return None

        try:
            created = await self._store.create(build_default_document(merchant_id, source))
        except DuplicateDocumentError:
            logger.info("seed_skipped_existing", merchant_id=merchant_id)
            return None

        logger.info("config_seeded", merchant_id=merchant_id)
        return created
