"""API exception hierarchy for consistent error handling.

All API exceptions inherit from BotAdminAPIError, which provides
status_code and error_code attributes used by the global exception
handler to generate consistent error responses. Errors raised by the
configuration domain are translated with `from_domain_error`.
"""

from botadmin.api.models.errors import ErrorCode, ErrorDetail
from botadmin.botconfig import errors as domain
from botadmin.botconfig.validation import FieldValidationError


class BotAdminAPIError(Exception):
    """Base exception for all API errors.

    Subclasses set status_code and error_code to define the HTTP response.
    """

    status_code: int = 500
    error_code: ErrorCode = ErrorCode.INTERNAL_ERROR

    def __init__(self, message: str, details: list[ErrorDetail] | None = None) -> None:
        self.message = message
        self._details = details
        super().__init__(message)

    @property
    def details(self) -> list[ErrorDetail] | None:
        return self._details


class ConfigNotFoundError(BotAdminAPIError):
    status_code = 404
    error_code = ErrorCode.CONFIG_NOT_FOUND


class ConfigAlreadyExistsError(BotAdminAPIError):
    status_code = 409
    error_code = ErrorCode.CONFIG_EXISTS


class AuthenticationRequiredError(BotAdminAPIError):
    """Raised when a mutating call has no valid caller identity."""

    status_code = 401
    error_code = ErrorCode.AUTHENTICATION_REQUIRED

    def __init__(
        self,
        message: str = "Authentication required - user details not found in token",
    ) -> None:
        super().__init__(message)


class ConfigValidationError(BotAdminAPIError):
    status_code = 400
    error_code = ErrorCode.VALIDATION_FAILED


class NoValidFieldsError(BotAdminAPIError):
    status_code = 400
    error_code = ErrorCode.NO_VALID_FIELDS


class EmptyFieldListError(BotAdminAPIError):
    status_code = 400
    error_code = ErrorCode.EMPTY_FIELD_LIST


class ConcurrentModificationError(BotAdminAPIError):
    status_code = 409
    error_code = ErrorCode.CONCURRENT_MODIFICATION


class InternalError(BotAdminAPIError):
    """Raised when persistence or another collaborator fails unexpectedly."""

    status_code = 500
    error_code = ErrorCode.INTERNAL_ERROR


_DOMAIN_ERROR_MAP: dict[type[domain.BotConfigError], type[BotAdminAPIError]] = {
    domain.ConfigNotFoundError: ConfigNotFoundError,
    domain.ConfigAlreadyExistsError: ConfigAlreadyExistsError,
    domain.ActorRequiredError: AuthenticationRequiredError,
    domain.ConfigValidationError: ConfigValidationError,
    domain.NoValidFieldsError: NoValidFieldsError,
    domain.EmptyFieldListError: EmptyFieldListError,
    domain.ConcurrentModificationError: ConcurrentModificationError,
}


def _to_detail(failure: FieldValidationError) -> ErrorDetail:
    return ErrorDetail(
        field=failure.field_name,
        message=failure.message,
        label=failure.label,
        section=failure.section,
        errors=failure.errors or None,
    )


def from_domain_error(exc: domain.BotConfigError) -> BotAdminAPIError:
    """Translate a domain error into the API error that describes it."""
    if isinstance(exc, domain.ConfigValidationError):
        return ConfigValidationError(
            exc.message, details=[_to_detail(f) for f in exc.failures]
        )
    if isinstance(exc, domain.ActorRequiredError):
        return AuthenticationRequiredError(exc.message)

    api_error_cls = _DOMAIN_ERROR_MAP.get(type(exc), InternalError)
    return api_error_cls(exc.message)
