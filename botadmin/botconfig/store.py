"""BotConfigStore abstract interface."""

from abc import ABC, abstractmethod

from botadmin.botconfig.models import BotConfigDocument


class BotConfigStore(ABC):
    """Abstract interface for configuration document storage.

    Documents are keyed by merchant id. Implementations hand out copies, so
    mutating a loaded document has no effect until it is saved.

    Saves are guarded by the document's `revision`: when `expected_revision`
    is given and the stored revision differs, the save fails with
    `RevisionConflictError`. A successful save stores the document with its
    revision incremented by one.
    """

    @abstractmethod
    async def get(self, merchant_id: str) -> BotConfigDocument | None:
        """Get a document by merchant id."""
        pass

    @abstractmethod
    async def create(self, document: BotConfigDocument) -> BotConfigDocument:
        """Insert a new document.

        Raises:
            DuplicateDocumentError: If the merchant already has one
        """
        pass

    @abstractmethod
    async def save(
        self,
        document: BotConfigDocument,
        *,
        expected_revision: int | None = None,
    ) -> BotConfigDocument:
        """Replace a stored document, returning what was stored.

        Raises:
            RevisionConflictError: If the stored revision is not `expected_revision`
        """
        pass

    @abstractmethod
    async def delete(self, merchant_id: str) -> BotConfigDocument | None:
        """Delete a document, returning it (None if absent)."""
        pass

    @abstractmethod
    async def list(
        self,
        *,
        search: str | None = None,
        limit: int = 10,
        offset: int = 0,
    ) -> tuple[list[BotConfigDocument], int]:
        """List documents, newest first, with the total match count.

        `search` is a case-insensitive substring match on the merchant id.
        """
        pass
