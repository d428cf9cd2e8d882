"""Error taxonomy shared by the store, the domain layers, and the API.

Every error carries an HTTP status and a stable error_code so the single
handler in main.py can render it without knowing the concrete type.

Errors are local to a single operation. Nothing in this package retries a
failed store call; StoreUnavailableError is the caller's signal that a retry
with backoff may succeed.
"""

from typing import Any


class AppException(Exception):
    """Root of the taxonomy.

    Attributes:
        message: Human-readable description
        error_code: Stable machine-readable code, e.g. "VALIDATION_ERROR"
        status_code: HTTP status the API answers with
        details: Structured context such as the offending field
    """

    def __init__(
        self,
        message: str,
        error_code: str,
        status_code: int = 500,
        details: dict[str, Any] | None = None,
    ):
        self.message = message
        self.error_code = error_code
        self.status_code = status_code
        self.details = details or {}
        super().__init__(message)

    def to_dict(self) -> dict[str, Any]:
        """Body of the JSON error response."""
        return {
            "error_code": self.error_code,
            "message": self.message,
            "details": self.details,
        }


class ValidationError(AppException):
    """Malformed or out-of-range input (unknown namespace, oversized string,
    missing required field, forbidden status transition)."""

    def __init__(self, message: str, field: str | None = None):
        super().__init__(
            message,
            "VALIDATION_ERROR",
            422,
            {"field": field} if field else {},
        )


class NotFoundError(AppException):
    """No matching translation entry or glossary term in scope."""

    def __init__(self, resource: str, identifier: str | None = None):
        msg = f"{resource} not found"
        if identifier:
            msg = f"{resource} not found: {identifier}"
        super().__init__(
            msg,
            f"{resource.upper().replace(' ', '_')}_NOT_FOUND",
            404,
            {"resource": resource, "id": identifier}
            if identifier
            else {"resource": resource},
        )


class ConflictError(AppException):
    """Unique-key violation on create."""

    def __init__(self, resource: str, field: str | None = None):
        msg = f"{resource} already exists"
        if field:
            msg = f"{resource} with this {field} already exists"
        super().__init__(
            msg,
            f"{resource.upper().replace(' ', '_')}_EXISTS",
            409,
            {"resource": resource, "field": field} if field else {"resource": resource},
        )


class StoreUnavailableError(AppException):
    """The entity store could not be reached or dropped the connection."""

    def __init__(self, message: str | None = None):
        msg = "Entity store is unavailable"
        if message:
            msg = f"Entity store is unavailable: {message}"
        super().__init__(
            msg,
            "STORE_UNAVAILABLE",
            503,
            {"retryable": True},
        )
