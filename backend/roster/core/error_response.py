"""Error Response — the one structured error shape every failure path returns.

Invariants:
    - code always matches E\\d{3}; error is always an ErrorType member
    - errors omitted from the wire form when empty (never serialized as null or [])
    - Constructed fresh per failed request, never persisted

Design Decisions:
    - Frozen dataclasses, not pydantic: core stays free of IO/framework types
      (ADR: ExMA impureim sandwich), the API layer only calls to_dict()
    - build_error_response() rejects swapped error/code arguments: both are strings,
      and a swapped pair would silently break client branching
"""

import re
from dataclasses import dataclass, field
from enum import Enum

_ERROR_CODE_PATTERN = re.compile(r"^E\d{3}$")


class ErrorType(str, Enum):
    """Symbolic error categories clients branch on."""
    EMPTY_OBJECT = "EMPTY_OBJECT"
    MISSING_PARAMETER = "MISSING_PARAMETER"
    TYPE_MISMATCH = "TYPE_MISMATCH"
    INVALID_JSON = "INVALID_JSON"
    INVALID_REQUEST = "INVALID_REQUEST"
    VALIDATION_FAILED = "VALIDATION_FAILED"
    NOT_FOUND = "NOT_FOUND"
    FORBIDDEN = "FORBIDDEN"
    UNAUTHORIZED = "UNAUTHORIZED"
    CONFLICT = "CONFLICT"
    INTERNAL_SERVER_ERROR = "INTERNAL_SERVER_ERROR"


@dataclass(frozen=True)
class FieldErrorDetail:
    """One field-level failure: dotted/indexed path plus message."""
    field: str
    message: str

    def to_dict(self) -> dict:
        return {"field": self.field, "message": self.message}


@dataclass(frozen=True)
class ErrorResponse:
    """Canonical error body: {status, code, error, message, errors?}."""
    status: int
    code: str
    error: ErrorType
    message: str
    errors: tuple[FieldErrorDetail, ...] = field(default_factory=tuple)

    def to_dict(self) -> dict:
        body = {
            "status": self.status,
            "code": self.code,
            "error": self.error.value,
            "message": self.message,
        }
        if self.errors:
            body["errors"] = [e.to_dict() for e in self.errors]
        return body


def is_error_code(value: object) -> bool:
    return isinstance(value, str) and bool(_ERROR_CODE_PATTERN.match(value))


def build_error_response(
    status: int,
    error: ErrorType | str,
    code: str,
    message: str,
    errors: list[FieldErrorDetail] | tuple[FieldErrorDetail, ...] | None = None,
) -> ErrorResponse:
    """Build an ErrorResponse, refusing malformed or swapped arguments."""
    if is_error_code(error) or not is_error_code(code):
        raise ValueError(
            f"error/code arguments out of order: error={error!r}, code={code!r}",
        )
    return ErrorResponse(
        status=status,
        code=code,
        error=ErrorType(error),
        message=message,
        errors=tuple(errors or ()),
    )
