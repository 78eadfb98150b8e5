"""
Common exception classes for the application
"""

from __future__ import annotations

from typing import Any


class CreatorOpsError(Exception):
    """Base exception class for creatorops errors"""

    def __init__(
        self, message: str, code: str = "UNKNOWN_ERROR", details: dict[str, Any] | None = None
    ) -> None:
        super().__init__(message)
        self.code = code
        self.details = details or {}

    def to_dict(self) -> dict[str, Any]:
        """Convert exception to standard error format"""
        return {
            "code": self.code,
            "message": str(self),
            "details": self.details,
        }


class ConfigurationError(CreatorOpsError):
    """Raised when there's an error in configuration or environment variables"""

    def __init__(self, message: str, details: dict[str, Any] | None = None) -> None:
        super().__init__(message, code="CONFIGURATION_ERROR", details=details)


class ValidationError(CreatorOpsError):
    """Raised when a request is well-formed JSON but semantically invalid"""

    def __init__(self, message: str, details: dict[str, Any] | None = None) -> None:
        super().__init__(message, code="VALIDATION_ERROR", details=details)


class ResourceNotFoundError(CreatorOpsError):
    """Raised when a requested resource is not found"""

    def __init__(
        self, resource_type: str, resource_id: str, details: dict[str, Any] | None = None
    ) -> None:
        super().__init__(
            f"{resource_type} not found",
            code="RESOURCE_NOT_FOUND",
            details={"id": resource_id, **(details or {})},
        )
        self.resource_type = resource_type
        self.resource_id = resource_id


class InvalidTransition(CreatorOpsError):
    """Raised when a workflow step does not apply to the record's current status"""

    def __init__(self, current: str, requested: str) -> None:
        super().__init__(
            f"Cannot apply '{requested}' while status is '{current}'",
            code="INVALID_TRANSITION",
            details={"status": current, "requested": requested},
        )


class StaleRecordError(CreatorOpsError):
    """Raised when a record changed between read and write"""

    def __init__(self, resource_type: str, resource_id: str, expected: int, actual: int) -> None:
        super().__init__(
            f"{resource_type} '{resource_id}' was modified concurrently",
            code="STALE_RECORD",
            details={"expectedVersion": expected, "actualVersion": actual},
        )
