"""Error Hierarchy — typed exceptions for every roster failure mode.

Invariants:
    - Every error has http_status, code (E\\d{3}), error_type (ErrorType), message
    - Field-level details are ordered and only present when the failure is field-specific
    - ValidationFailedError always carries a non-empty detail list
    - to_response() produces the one ErrorResponse shape; internal details never leak

Design Decisions:
    - Single hierarchy with RosterError base: FastAPI global handler catches all (ADR: uniform error shape)
    - EMPTY_OBJECT and MISSING_PARAMETER share E003 but keep distinct error types,
      so clients can tell "sent {}" from "sent nothing"
"""

from roster.core.error_response import (
    ErrorResponse, ErrorType, FieldErrorDetail, build_error_response,
)


class RosterError(Exception):
    """Base exception for all roster errors."""

    def __init__(
        self,
        message: str,
        code: str,
        error_type: ErrorType,
        http_status: int = 500,
        details: list[FieldErrorDetail] | None = None,
    ):
        super().__init__(message)
        self.message = message
        self.code = code
        self.error_type = error_type
        self.http_status = http_status
        self.details = list(details or [])

    def to_response(self) -> ErrorResponse:
        """Convert to the standardized error response."""
        return build_error_response(
            self.http_status, self.error_type, self.code,
            self.message, self.details,
        )


# ─── Request Errors (400-level) ─────────────────────────────────

class ValidationFailedError(RosterError):
    """One or more field rules violated."""
    def __init__(
        self, details: list[FieldErrorDetail],
        message: str = "Input validation failed",
    ):
        if not details:
            raise ValueError("ValidationFailedError requires at least one field error")
        super().__init__(
            message, "E001", ErrorType.VALIDATION_FAILED, 400, details,
        )


class InvalidJsonError(RosterError):
    """Request body is not well-formed JSON."""
    def __init__(
        self, message: str = "Request body is not valid JSON. Check its structure.",
    ):
        super().__init__(message, "E002", ErrorType.INVALID_JSON, 400)


class MissingParameterError(RosterError):
    """Required body or parameter absent."""
    def __init__(self, message: str = "Request body is required"):
        super().__init__(message, "E003", ErrorType.MISSING_PARAMETER, 400)


class EmptyObjectError(RosterError):
    """Body present but carries nothing to act on (e.g. {})."""
    def __init__(self, message: str = "No fields to update"):
        super().__init__(message, "E003", ErrorType.EMPTY_OBJECT, 400)


class TypeMismatchError(RosterError):
    """Query/path parameter could not be converted to its declared type."""
    def __init__(self, details: list[FieldErrorDetail], message: str | None = None):
        names = ", ".join(d.field for d in details)
        super().__init__(
            message or f"Request parameter '{names}' has an invalid type",
            "E004", ErrorType.TYPE_MISMATCH, 400, details,
        )


class InvalidRequestError(RosterError):
    """Request is structurally unusable for reasons not covered elsewhere."""
    def __init__(
        self, message: str = "Request is malformed",
        http_status: int = 400, details: list[FieldErrorDetail] | None = None,
    ):
        super().__init__(
            message, "E006", ErrorType.INVALID_REQUEST, http_status, details,
        )


class InvalidIdentifierFormatError(InvalidRequestError):
    """Identifier is null, malformed, or not 16 bytes."""
    def __init__(self, message: str, field: str = "studentId"):
        super().__init__(message, details=[FieldErrorDetail(field, message)])
        self.field = field


# ─── Access Control (401/403) ───────────────────────────────────

class UnauthorizedError(RosterError):
    """No or invalid credentials."""
    def __init__(self, message: str = "Authentication failed. Login is required."):
        super().__init__(message, "E401", ErrorType.UNAUTHORIZED, 401)


class ForbiddenError(RosterError):
    """Authenticated but lacking the required role."""
    def __init__(
        self, message: str = "Access denied. Administrator role is required.",
    ):
        super().__init__(message, "E403", ErrorType.FORBIDDEN, 403)


# ─── Resource Errors ────────────────────────────────────────────

class ResourceNotFoundError(RosterError):
    """Requested resource does not exist."""
    def __init__(self, resource_type: str, resource_id: str | None):
        super().__init__(
            f"{resource_type} '{resource_id}' not found",
            "E404", ErrorType.NOT_FOUND, 404,
        )
        self.resource_type = resource_type
        self.resource_id = resource_id


class ConflictError(RosterError):
    """Write rejected by a uniqueness or integrity constraint."""
    def __init__(self, message: str = "Request conflicts with existing data"):
        super().__init__(message, "E409", ErrorType.CONFLICT, 409)


# ─── Infrastructure Errors (500-level) ──────────────────────────

class DatabaseError(RosterError):
    """Database operation failed."""
    def __init__(self, message: str, operation: str):
        super().__init__(
            f"Database {operation} failed: {message}",
            "E999", ErrorType.INTERNAL_SERVER_ERROR, 503,
        )
        self.operation = operation
