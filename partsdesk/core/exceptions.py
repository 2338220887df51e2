"""Exception hierarchy for PartsDesk.

Every error a route can produce is one of these. The API layer converts them
to the JSON envelope ``{"error": ..., "message": ...}`` in one place
(``partsdesk.core.errors``), so services raise and never build responses.

- 400: validation, conflict (duplicate key), dependency conflict (blocked delete)
- 401: unauthenticated (uniform, no reason given)
- 404: a referenced id does not resolve
- 500: upstream backend or file store failure
"""

from __future__ import annotations

from typing import Any


class PartsDeskException(Exception):
    """Base exception for all PartsDesk application errors."""

    def __init__(
        self,
        error: str,
        status_code: int = 400,
        message: str | None = None,
        details: Any = None,
    ):
        """
        Args:
            error: Short human-readable error, returned as ``error``
            status_code: HTTP status code
            message: Optional longer explanation, returned as ``message``
            details: Optional structured context (validation errors)
        """
        super().__init__(error)
        self.error = error
        self.status_code = status_code
        self.message = message
        self.details = details

    def to_dict(self) -> dict[str, Any]:
        """Convert exception to API response format."""
        body: dict[str, Any] = {"error": self.error}
        if self.message:
            body["message"] = self.message
        if self.details is not None:
            body["details"] = self.details
        return body


class UnauthorizedError(PartsDeskException):
    """Missing, malformed, forged or expired bearer token."""

    def __init__(self):
        super().__init__("Unauthorized", status_code=401)


class RequestValidationFailed(PartsDeskException):
    """Missing required field or malformed body."""

    def __init__(self, error: str = "Validation error", message: str | None = None, details: Any = None):
        super().__init__(error, status_code=400, message=message, details=details)


class ConflictError(PartsDeskException):
    """A unique key (name, code, number) is already taken."""

    def __init__(self, error: str, message: str | None = None):
        super().__init__(error, status_code=400, message=message)


class NotFoundError(PartsDeskException):
    """Referenced entity does not exist."""

    def __init__(self, entity: str, entity_id: str | None = None):
        message = f'{entity} with ID "{entity_id}" does not exist' if entity_id else None
        super().__init__(f"{entity} not found", status_code=404, message=message)


class DependencyConflictError(PartsDeskException):
    """Delete refused because other rows still reference the entity."""

    def __init__(self, entity: str, blocker: str, count: int):
        super().__init__(
            f"Cannot delete {entity}. It is used by {count} {blocker}(s).",
            status_code=400,
        )
        self.count = count


class UpstreamError(PartsDeskException):
    """The upstream backend could not be reached or returned unreadable data."""

    def __init__(self, error: str = "Failed to reach backend service", message: str | None = None):
        super().__init__(error, status_code=500, message=message)


class TransferStoreError(PartsDeskException):
    """The stock transfer file could not be read or written."""

    def __init__(self, error: str, message: str | None = None):
        super().__init__(error, status_code=500, message=message)
