"""Domain exceptions for the product service.

Defines domain-level exceptions that represent business rule violations
and failures of the store or cache collaborators. Presentation layer maps
them to HTTP responses in exception handlers.
"""

from typing import Any


class ProductServiceException(Exception):
    """Base exception for all product service errors.

    All custom exceptions should inherit from this class to allow
    consistent error handling and logging. Presentation layer maps
    these to HTTP responses using message, error_code, and details.

    Attributes:
        message: Human-readable error description.
        error_code: Machine-readable error code.
        details: Additional error context (e.g. field, resource_id).
    """

    def __init__(
        self,
        message: str,
        error_code: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """Initialize the exception.

        Args:
            message: Human-readable error description.
            error_code: Optional machine-readable code; defaults to class name.
            details: Optional dict of extra context.
        """
        self.message = message
        self.error_code = error_code or self.__class__.__name__
        self.details = details or {}
        super().__init__(self.message)

    def to_dict(self) -> dict[str, Any]:
        """Return the JSON error envelope used in HTTP responses."""
        return {
            "error": self.error_code,
            "message": self.message,
            "details": self.details,
        }


class ValidationException(ProductServiceException):
    """Raised when input validation fails (e.g. blank name, non-positive price)."""

    def __init__(self, message: str, field: str | None = None) -> None:
        """Initialize with message and optional field name.

        Args:
            message: Description of the validation failure.
            field: Optional field or attribute that failed validation.
        """
        details = {"field": field} if field else {}
        super().__init__(message, "VALIDATION_ERROR", details)


class ResourceNotFoundException(ProductServiceException):
    """Raised when a requested resource has no record in the store."""

    def __init__(self, resource_type: str, resource_id: str | int) -> None:
        """Initialize with resource type and id.

        Args:
            resource_type: Type of resource (e.g. 'product').
            resource_id: The ID that was not found.
        """
        super().__init__(
            f"no {resource_type} with id {resource_id}",
            "RESOURCE_NOT_FOUND",
            {"resource_type": resource_type, "resource_id": resource_id},
        )


class StoreException(ProductServiceException):
    """Raised when a backing-store operation fails (connection, constraint, driver error)."""

    def __init__(self, operation: str, reason: str) -> None:
        super().__init__(
            f"Store operation '{operation}' failed",
            "STORE_ERROR",
            {"operation": operation, "reason": reason},
        )


class CacheException(ProductServiceException):
    """Raised when a cache operation that must not fail silently did fail.

    Population failures are logged and swallowed by the product service;
    this is raised for evictions, where silence would leave stale entries.
    """

    def __init__(self, operation: str, key: str) -> None:
        super().__init__(
            f"Cache operation '{operation}' failed for key {key}",
            "CACHE_ERROR",
            {"operation": operation, "key": key},
        )
