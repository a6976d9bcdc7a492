"""Error response models for consistent API error handling."""

from enum import Enum
from typing import Any, Literal

from pydantic import BaseModel


class ErrorCode(str, Enum):
    """Standardized error codes for API responses."""

    INVALID_REQUEST = "INVALID_REQUEST"
    """Request validation failed (malformed JSON, missing fields, etc.)."""

    CONFIG_NOT_FOUND = "CONFIG_NOT_FOUND"
    """No configuration document exists for the merchant."""

    CONFIG_EXISTS = "CONFIG_EXISTS"
    """A configuration document already exists for the merchant."""

    AUTHENTICATION_REQUIRED = "AUTHENTICATION_REQUIRED"
    """The operation needs an authenticated caller."""

    VALIDATION_FAILED = "VALIDATION_FAILED"
    """One or more fields in an update batch failed validation."""

    NO_VALID_FIELDS = "NO_VALID_FIELDS"
    """None of the requested keys matched a field."""

    EMPTY_FIELD_LIST = "EMPTY_FIELD_LIST"
    """The request named no fields at all."""

    CONCURRENT_MODIFICATION = "CONCURRENT_MODIFICATION"
    """The document changed between load and save."""

    INTERNAL_ERROR = "INTERNAL_ERROR"
    """An unexpected internal error occurred."""


class ErrorDetail(BaseModel):
    """Field-level error information."""

    field: str | None = None
    """The field that caused the error, if applicable."""

    message: str
    """Human-readable error description."""

    label: str | None = None
    """Display label of the field, when it exists in the document."""

    section: str | None = None
    """Section holding the field, when it exists in the document."""

    errors: list[str] | None = None
    """Individual rule failures behind the message."""


class ErrorResponse(BaseModel):
    """Standard error body for all API errors.

    Example:
        {
            "success": false,
            "code": "CONFIG_NOT_FOUND",
            "message": "Configuration for merchant_id m1 not found"
        }
    """

    success: Literal[False] = False
    code: ErrorCode
    message: str
    errors: list[ErrorDetail] | None = None

    def to_content(self) -> dict[str, Any]:
        return self.model_dump(mode="json", exclude_none=True)
