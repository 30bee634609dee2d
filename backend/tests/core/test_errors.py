"""Error Model — verifies the ErrorResponse shape and the error hierarchy mapping.

Invariants:
    - errors key omitted when there are no field details
    - Swapped error/code arguments are refused
    - Each RosterError subclass carries its fixed status/code/type
"""

import pytest

from roster.core.error_response import (
    ErrorType, FieldErrorDetail, build_error_response, is_error_code,
)
from roster.core.errors import (
    ConflictError, DatabaseError, EmptyObjectError, ForbiddenError, InvalidJsonError,
    InvalidRequestError, MissingParameterError, ResourceNotFoundError, TypeMismatchError,
    UnauthorizedError, ValidationFailedError,
)


def test_response_without_details_omits_errors_key():
    body = build_error_response(404, ErrorType.NOT_FOUND, "E404", "gone").to_dict()
    assert body == {"status": 404, "code": "E404", "error": "NOT_FOUND", "message": "gone"}


def test_response_with_details_lists_them_in_order():
    details = [FieldErrorDetail("student.email", "bad"), FieldErrorDetail("courses[0].courseName", "req")]
    body = build_error_response(
        400, ErrorType.VALIDATION_FAILED, "E001", "Input validation failed", details,
    ).to_dict()
    assert body["errors"] == [
        {"field": "student.email", "message": "bad"},
        {"field": "courses[0].courseName", "message": "req"},
    ]


def test_swapped_error_and_code_refused():
    with pytest.raises(ValueError):
        build_error_response(400, "E001", "VALIDATION_FAILED", "oops")


def test_unknown_error_type_refused():
    with pytest.raises(ValueError):
        build_error_response(400, "SOMETHING_ELSE", "E001", "oops")


@pytest.mark.parametrize("value, expected", [
    ("E001", True), ("E999", True), ("E01", False), ("e001", False), (1, False),
])
def test_is_error_code(value, expected):
    assert is_error_code(value) is expected


@pytest.mark.parametrize("exc, status, code, error", [
    (ValidationFailedError([FieldErrorDetail("f", "m")]), 400, "E001", ErrorType.VALIDATION_FAILED),
    (InvalidJsonError(), 400, "E002", ErrorType.INVALID_JSON),
    (MissingParameterError(), 400, "E003", ErrorType.MISSING_PARAMETER),
    (EmptyObjectError(), 400, "E003", ErrorType.EMPTY_OBJECT),
    (TypeMismatchError([FieldErrorDetail("includeDeleted", "m")]), 400, "E004", ErrorType.TYPE_MISMATCH),
    (InvalidRequestError(), 400, "E006", ErrorType.INVALID_REQUEST),
    (UnauthorizedError(), 401, "E401", ErrorType.UNAUTHORIZED),
    (ForbiddenError(), 403, "E403", ErrorType.FORBIDDEN),
    (ResourceNotFoundError("Student", "abc"), 404, "E404", ErrorType.NOT_FOUND),
    (ConflictError(), 409, "E409", ErrorType.CONFLICT),
    (DatabaseError("down", "query"), 503, "E999", ErrorType.INTERNAL_SERVER_ERROR),
])
def test_error_hierarchy_mapping(exc, status, code, error):
    response = exc.to_response()
    assert (response.status, response.code, response.error) == (status, code, error)


def test_validation_failed_requires_details():
    with pytest.raises(ValueError):
        ValidationFailedError([])


def test_not_found_message_names_resource():
    assert ResourceNotFoundError("Student", "abc").message == "Student 'abc' not found"


def test_type_mismatch_message_names_parameter():
    exc = TypeMismatchError([FieldErrorDetail("includeDeleted", "bad bool")])
    assert "includeDeleted" in exc.message
    assert exc.to_response().to_dict()["errors"][0]["field"] == "includeDeleted"
