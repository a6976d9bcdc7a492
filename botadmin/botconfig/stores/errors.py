"""Store error hierarchy for configuration backends.

Backends wrap driver-specific failures in these so the service layer can
handle them uniformly.
"""


class StoreError(Exception):
    """Base exception for all store errors."""

    def __init__(self, message: str, cause: Exception | None = None) -> None:
        super().__init__(message)
        self.cause = cause


class StoreConnectionError(StoreError):
    """Raised when the backend cannot be reached."""


class DuplicateDocumentError(StoreError):
    """Raised when inserting a document whose merchant id is taken."""

    def __init__(self, merchant_id: str) -> None:
        super().__init__(f"Document already exists: {merchant_id}")
        self.merchant_id = merchant_id


class RevisionConflictError(StoreError):
    """Raised when a save loses an optimistic concurrency race."""

    def __init__(self, merchant_id: str, expected: int | None, actual: int | None) -> None:
        super().__init__(
            f"Revision conflict for {merchant_id}: expected {expected}, found {actual}"
        )
        self.merchant_id = merchant_id
        self.expected = expected
        self.actual = actual
