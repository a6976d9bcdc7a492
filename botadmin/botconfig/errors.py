"""Error hierarchy for configuration operations.

The domain layer raises these; the API layer maps them to HTTP responses.
"""

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from botadmin.botconfig.validation import FieldValidationError


class BotConfigError(Exception):
    """Base exception for all configuration operation errors."""

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class ConfigNotFoundError(BotConfigError):
    """Raised when no document exists for the merchant."""

    def __init__(self, merchant_id: str) -> None:
        super().__init__(f"Configuration for merchant_id {merchant_id} not found")
        self.merchant_id = merchant_id


class ConfigAlreadyExistsError(BotConfigError):
    """Raised when creating a document for a merchant that already has one."""

    def __init__(self, merchant_id: str) -> None:
        super().__init__(f"Configuration for merchant_id {merchant_id} already exists")
        self.merchant_id = merchant_id


class ActorRequiredError(BotConfigError):
    """Raised when a mutating operation is called without a caller identity."""

    def __init__(
        self,
        message: str = "Authentication required - user details not found in token",
    ) -> None:
        super().__init__(message)


class ConfigValidationError(BotConfigError):
    """Raised when an update batch fails field validation.

    Carries every field-level failure so they can be reported together.
    """

    def __init__(
        self,
        failures: "list[FieldValidationError]",
        message: str = "Validation failed",
    ) -> None:
        super().__init__(message)
        self.failures = failures


class NoValidFieldsError(BotConfigError):
    """Raised when none of the requested keys match a field."""


class EmptyFieldListError(BotConfigError):
    """Raised when a request names no fields at all."""


class ConcurrentModificationError(BotConfigError):
    """Raised when the stored document changed since it was loaded."""

    def __init__(self, merchant_id: str) -> None:
        super().__init__(
            f"Configuration for merchant_id {merchant_id} was modified concurrently; reload and retry"
        )
        self.merchant_id = merchant_id
