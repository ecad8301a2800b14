"""Error Hierarchy - typed exceptions for every user API failure mode.

Invariants:
    - Every error has a machine code (str), a human message and an HTTP status
    - to_response() always produces {"error": code, "message": message}
    - 400-level errors describe the request; 500-level errors never leak driver details

Design Decisions:
    - Single hierarchy with SimpleApiError base: one FastAPI handler catches all
      (ADR: uniform error shape across routes)
    - Flat envelope over nested {"error": {...}}: clients key on the `error` string
"""

from typing import Any


class SimpleApiError(Exception):
    """Base exception for all user API errors."""

    def __init__(
        self,
        message: str,
        code: str,
        http_status: int = 500,
        field: str | None = None,
        details: list[dict[str, Any]] | None = None,
    ):
        super().__init__(message)
        self.message = message
        self.code = code
        self.http_status = http_status
        self.field = field
        self.details = details

    def to_response(self) -> dict:
        """Convert to the REST error envelope."""
        response: dict[str, Any] = {"error": self.code, "message": self.message}
        if self.details:
            response["details"] = self.details
        return response


# ─── Domain Errors (400-level) ──────────────────────────────────

class ValidationError(SimpleApiError):
    """A required user field is missing or empty."""
    def __init__(self, message: str, field: str):
        super().__init__(message, "validation_error", 400, field=field)


class InvalidIdFormatError(SimpleApiError):
    """Identifier does not parse as an ObjectId."""
    def __init__(self, raw_id: str):
        super().__init__("Invalid user ID format", "invalid_id", 400)
        self.raw_id = raw_id


class ResourceNotFoundError(SimpleApiError):
    """Well-formed identifier, no matching record."""
    def __init__(self, resource_type: str = "User", resource_id: str | None = None):
        super().__init__(f"{resource_type} not found", "not_found", 404)
        self.resource_type = resource_type
        self.resource_id = resource_id


class MalformedRequestError(SimpleApiError):
    """Request body is not valid JSON or does not match the expected shape."""
    def __init__(
        self,
        message: str = "Invalid JSON format",
        details: list[dict[str, Any]] | None = None,
    ):
        super().__init__(message, "malformed_request", 400, details=details)


# ─── Infrastructure Errors (500-level) ──────────────────────────

class StorageUnavailableError(SimpleApiError):
    """Database unreachable or the operation failed at the driver."""
    def __init__(self, operation: str):
        super().__init__(
            "Storage is temporarily unavailable", "storage_unavailable", 503,
        )
        self.operation = operation
