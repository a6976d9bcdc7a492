"""In-memory implementation of BotConfigStore."""

import asyncio

from botadmin.botconfig.models import BotConfigDocument, utc_now
from botadmin.botconfig.store import BotConfigStore
from botadmin.botconfig.stores.errors import DuplicateDocumentError, RevisionConflictError


class InMemoryBotConfigStore(BotConfigStore):
    """In-memory implementation of BotConfigStore for testing and development.

    Uses simple dict storage with linear scan for listing. The lock makes
    the revision check and the write a single step for concurrent callers.
    Not suitable for production use.
    """

    def __init__(self) -> None:
        self._documents: dict[str, BotConfigDocument] = {}
        self._lock = asyncio.Lock()

    async def get(self, merchant_id: str) -> BotConfigDocument | None:
        document = self._documents.get(merchant_id)
        return document.model_copy(deep=True) if document else None

    async def create(self, document: BotConfigDocument) -> BotConfigDocument:
        async with self._lock:
            if document.id in self._documents:
                raise DuplicateDocumentError(document.id)
            stored = document.model_copy(deep=True)
            self._documents[stored.id] = stored
            return stored.model_copy(deep=True)

    async def save(
        self,
        document: BotConfigDocument,
        *,
        expected_revision: int | None = None,
    ) -> BotConfigDocument:
        async with self._lock:
            current = self._documents.get(document.id)
            if expected_revision is not None:
                actual = current.revision if current else None
                if actual != expected_revision:
                    raise RevisionConflictError(document.id, expected_revision, actual)

            stored = document.model_copy(deep=True)
            stored.revision = (current.revision + 1) if current else 0
            stored.updated_at = utc_now()
            self._documents[stored.id] = stored
            return stored.model_copy(deep=True)

    async def delete(self, merchant_id: str) -> BotConfigDocument | None:
        async with self._lock:
            return self._documents.pop(merchant_id, None)

    async def list(
        self,
        *,
        search: str | None = None,
        limit: int = 10,
        offset: int = 0,
    ) -> tuple[list[BotConfigDocument], int]:
        needle = search.lower() if search else None
        matches = [
            document
            for document in self._documents.values()
            if needle is None or needle in document.id.lower()
        ]
        matches.sort(key=lambda d: d.created_at, reverse=True)
        page = matches[offset : offset + limit]
        return [document.model_copy(deep=True) for document in page], len(matches)
