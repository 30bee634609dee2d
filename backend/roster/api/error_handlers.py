"""Error Handlers — global exception handlers for the roster API.

Invariants:
    - Every failure leaves as the one ErrorResponse shape {status, code, error, message, errors?}
    - RosterError → its own status/code/type; RequestValidationError → E001/E002/E003/E004
    - Unknown routes → 404 NOT_FOUND; other framework HTTP errors → INVALID_REQUEST with their status
    - Exception (catch-all) → 500 E999, never leaks internal details
    - Content-Type is application/json; charset=utf-8 on every error

Design Decisions:
    - Three-layer handler: domain (RosterError), validation (Pydantic), catch-all (Exception),
      plus the framework's HTTPException so routing errors share the shape
    - Extracted from main.py (ADR: ExMA import fan-out < 10)
"""

import logging

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from roster.core.error_response import (
    ErrorResponse, ErrorType, FieldErrorDetail, build_error_response,
)
from roster.core.errors import (
    InvalidJsonError, RosterError, TypeMismatchError, UnauthorizedError,
    ValidationFailedError,
)
from roster.core.field_path import format_field_path

logger = logging.getLogger(__name__)

_PARAMETER_SOURCES = ("query", "path", "header", "cookie")


class ErrorJSONResponse(JSONResponse):
    media_type = "application/json; charset=utf-8"


def error_json(body: ErrorResponse, headers: dict | None = None) -> ErrorJSONResponse:
    return ErrorJSONResponse(
        status_code=body.status, content=body.to_dict(), headers=headers,
    )


def register_error_handlers(app: FastAPI) -> None:
    """Register all global error handlers on the FastAPI app."""
    _register_roster_error_handler(app)
    _register_validation_error_handler(app)
    _register_http_error_handler(app)
    _register_generic_error_handler(app)


def _register_roster_error_handler(app: FastAPI) -> None:
    """Register roster domain/infrastructure error handler."""

    @app.exception_handler(RosterError)
    async def roster_error_handler(request: Request, exc: RosterError):
        """Handle all roster domain/infrastructure errors."""
        log = logger.error if exc.http_status >= 500 else logger.warning
        log(
            f"RosterError: {exc.message}",
            extra={
                "error_code": exc.code,
                "error_type": exc.error_type.value,
                "path": request.url.path,
            },
        )
        headers = None
        if exc.http_status == status.HTTP_401_UNAUTHORIZED:
            headers = {"WWW-Authenticate": "Basic"}
        return error_json(exc.to_response(), headers)


def _register_validation_error_handler(app: FastAPI) -> None:
    """Register Pydantic validation error handler."""

    @app.exception_handler(RequestValidationError)
    async def validation_error_handler(
        request: Request, exc: RequestValidationError,
    ):
        """Handle Pydantic validation errors."""
        body = _build_validation_error_response(exc)
        logger.warning(
            f"Validation error on {request.url.path}: {exc.errors()}",
            extra={"error_code": body.code, "path": request.url.path},
        )
        return error_json(body)


def _register_http_error_handler(app: FastAPI) -> None:
    """Register framework HTTP error handler (unknown route, wrong method)."""

    @app.exception_handler(StarletteHTTPException)
    async def http_error_handler(request: Request, exc: StarletteHTTPException):
        if exc.status_code == status.HTTP_404_NOT_FOUND:
            body = build_error_response(
                404, ErrorType.NOT_FOUND, "E404", "The requested URL does not exist",
            )
        elif exc.status_code == status.HTTP_401_UNAUTHORIZED:
            # malformed Authorization header, rejected by HTTPBasic itself
            body = UnauthorizedError().to_response()
        else:
            body = build_error_response(
                exc.status_code, ErrorType.INVALID_REQUEST, "E006", str(exc.detail),
            )
        logger.warning(
            f"HTTP {exc.status_code} on {request.url.path}",
            extra={"error_code": body.code, "path": request.url.path},
        )
        return error_json(body, getattr(exc, "headers", None))


def _register_generic_error_handler(app: FastAPI) -> None:
    """Register catch-all error handler."""

    @app.exception_handler(Exception)
    async def generic_error_handler(request: Request, exc: Exception):
        """Catch-all — never leaks internal details."""
        logger.error(
            f"Unhandled exception on {request.url.path}: {exc}",
            exc_info=True,
            extra={"error_code": "E999", "path": request.url.path},
        )
        return error_json(build_error_response(
            500, ErrorType.INTERNAL_SERVER_ERROR, "E999",
            "An unexpected error occurred",
        ))


def _build_validation_error_response(exc: RequestValidationError) -> ErrorResponse:
    """Map framework validation errors onto the roster error categories."""
    errors = exc.errors()
    details = [
        FieldErrorDetail(format_field_path(e["loc"][1:]) or str(e["loc"][0]), e["msg"])
        for e in errors
    ]
    first = errors[0] if errors else {"loc": ("body",), "type": ""}
    source = first["loc"][0] if first["loc"] else "body"

    if first["type"] == "json_invalid":
        return InvalidJsonError().to_response()
    if first["type"] == "missing":
        return build_error_response(
            400, ErrorType.MISSING_PARAMETER, "E003",
            f"Required parameter '{details[0].field}' is missing", details,
        )
    if source in _PARAMETER_SOURCES:
        return TypeMismatchError(details).to_response()
    return ValidationFailedError(details).to_response()
