"""
Custom Exception Classes

This module defines the error taxonomy of the template registry,
providing clear, specific error types with standardized error codes
and detailed error information.
"""

from enum import Enum
from typing import Any, Dict, Optional


class ErrorCode(str, Enum):
    """
    Standardized error codes for callers.

    Format: CATEGORY_SPECIFIC_ERROR
    Categories: RESOURCE, VALIDATION, TEMPLATE, SERVICE, INTERNAL
    """
    # Resource errors (2xxx)
    RESOURCE_NOT_FOUND = "RESOURCE_001"
    RESOURCE_CONFLICT = "RESOURCE_002"
    RESOURCE_ALREADY_EXISTS = "RESOURCE_003"

    # Validation errors (3xxx)
    VALIDATION_FAILED = "VALIDATION_001"
    VALIDATION_FIELD_REQUIRED = "VALIDATION_002"
    VALIDATION_FIELD_INVALID = "VALIDATION_003"

    # Template content errors (35xx)
    TEMPLATE_MALFORMED = "TEMPLATE_001"

    # Service errors (4xxx)
    SERVICE_DATABASE_ERROR = "SERVICE_003"
    SERVICE_STORAGE_ERROR = "SERVICE_005"

    # Internal errors (9xxx)
    INTERNAL_ERROR = "INTERNAL_001"


class AppException(Exception):
    """
    Base application exception

    All custom exceptions inherit from this class so callers can catch
    every registry error in one place.

    Attributes:
        message: Human-readable error message
        error_code: Standardized error code
        details: Additional error details as a dictionary
    """
    def __init__(
        self,
        message: str,
        error_code: ErrorCode = ErrorCode.INTERNAL_ERROR,
        details: Optional[Dict[str, Any]] = None,
    ):
        self.message = message
        self.error_code = error_code
        self.details = details or {}
        super().__init__(self.message)

    def to_dict(self) -> Dict[str, Any]:
        """Convert exception to a serializable dictionary"""
        return {
            "error_code": self.error_code.value,
            "message": self.message,
            "details": self.details,
        }


class InvalidArgumentError(AppException, ValueError):
    """
    Invalid argument error

    Raised when a required input to a public operation is missing or
    syntactically invalid. Always raised before any I/O happens.

    Example:
        raise InvalidArgumentError.missing("template")
    """
    def __init__(
        self,
        message: str,
        argument: Optional[str] = None,
        error_code: ErrorCode = ErrorCode.VALIDATION_FIELD_INVALID,
    ):
        details = {"argument": argument} if argument else {}
        super().__init__(message, error_code=error_code, details=details)

    @classmethod
    def missing(cls, argument: str) -> "InvalidArgumentError":
        return cls(
            f"{argument} cannot be null",
            argument=argument,
            error_code=ErrorCode.VALIDATION_FIELD_REQUIRED,
        )


def require(value: Any, argument: str) -> Any:
    """Return ``value`` or raise InvalidArgumentError naming ``argument`` if it is None"""
    if value is None:
        raise InvalidArgumentError.missing(argument)
    return value


class MalformedTemplateError(AppException):
    """
    Malformed template error

    Raised when a submitted document lacks the charset declaration or
    cannot be parsed as markup at all.

    Example:
        raise MalformedTemplateError("Template does not have meta element with charset attribute")
    """
    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        super().__init__(
            message,
            error_code=ErrorCode.TEMPLATE_MALFORMED,
            details=details,
        )


class DuplicateTemplateError(AppException):
    """
    Duplicate template error

    Raised when a template with the same identifier is already stored, or
    when saving a template that already carries a surrogate id.

    Example:
        raise DuplicateTemplateError(identifier="1.3.6.1.4.1.21367.13.199.1015")
    """
    def __init__(
        self,
        message: str = "Template already exist in the system.",
        identifier: Optional[str] = None,
    ):
        details = {"identifier": identifier} if identifier else {}
        super().__init__(
            message,
            error_code=ErrorCode.RESOURCE_ALREADY_EXISTS,
            details=details,
        )


class StorageError(AppException):
    """
    Storage failure

    Raised when the database or the template file store fails unexpectedly
    (disk full, permission denied, missing backing file, ...).

    Example:
        raise StorageError("Failed to write template file", details={"path": "/tmp/x.html"})
    """
    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        super().__init__(
            message,
            error_code=ErrorCode.SERVICE_STORAGE_ERROR,
            details=details,
        )


class NotFoundError(AppException):
    """
    Resource not found error

    Raised by operations that must act on an existing record.

    Example:
        raise NotFoundError("RadiologyStudy", "1.2.826.0.1.3680043.8.2186.1")
    """
    def __init__(self, resource: str, identifier: str):
        super().__init__(
            f"{resource} with id {identifier} not found",
            error_code=ErrorCode.RESOURCE_NOT_FOUND,
            details={"resource": resource, "identifier": identifier},
        )
