"""Aggregate Validator — field rules for a student-plus-courses submission.

Invariants:
    - Returns a flat, ordered list of FieldErrorDetail (empty list = valid)
    - Order: student fields in declaration order, then courses by index
    - Paths identify the failing element (courses[2].startDate), never "a course is invalid"
    - Never mutates its input

Design Decisions:
    - Explicit walker over the nested structure instead of schema-level constraints:
      the schema only decides types, this module decides presence and format
    - Protocol inputs (structural): the API schema satisfies them without core importing it
    - Embedded ids validated with identity_codec so a bad id is a field error, not a 500
"""

import re
from collections.abc import Sequence
from datetime import date
from typing import Protocol

from roster.core.error_response import FieldErrorDetail
from roster.core.errors import InvalidIdentifierFormatError
from roster.core.identity_codec import decode_to_bytes

FULL_NAME_MAX_LENGTH = 100
COURSE_NAME_MAX_LENGTH = 255

EMAIL_PATTERN = re.compile(
    r"^[A-Za-z0-9._%+\-]+@[A-Za-z0-9](?:[A-Za-z0-9\-]*[A-Za-z0-9])?"
    r"(?:\.[A-Za-z0-9](?:[A-Za-z0-9\-]*[A-Za-z0-9])?)*\.[A-Za-z]{2,}$",
)

# (attribute, wire name, label, required, column width) in declaration order
_TEXT_FIELDS = (
    ("full_name", "fullName", "Full name", True, FULL_NAME_MAX_LENGTH),
    ("furigana", "furigana", "Furigana", True, 100),
    ("nickname", "nickname", "Nickname", True, 50),
    ("email", "email", "Email", True, 255),
    ("location", "location", "Location", False, 100),
    ("gender", "gender", "Gender", True, 20),
)


class StudentInput(Protocol):
    student_id: str | None
    full_name: str | None
    furigana: str | None
    nickname: str | None
    email: str | None
    location: str | None
    age: int | None
    gender: str | None
    remarks: str | None
    deleted: bool | None


class CourseInput(Protocol):
    course_id: str | None
    course_name: str | None
    start_date: str | None
    end_date: str | None


class RegistrationInput(Protocol):
    student: StudentInput | None
    courses: Sequence[CourseInput] | None
    deleted: bool
    append_courses: bool
    model_fields_set: set[str]


def validate_registration(request: RegistrationInput) -> list[FieldErrorDetail]:
    """Full validation: every required student field must be present."""
    errors: list[FieldErrorDetail] = []
    if request.student is None:
        errors.append(FieldErrorDetail("student", "student is required"))
    else:
        errors.extend(_check_student(request.student, partial=False))
    errors.extend(_check_courses(request.courses or []))
    return errors


def validate_partial_update(request: RegistrationInput) -> list[FieldErrorDetail]:
    """Partial validation: only supplied student fields are checked."""
    errors: list[FieldErrorDetail] = []
    if request.student is None:
        if "student" in request.model_fields_set:
            errors.append(FieldErrorDetail("student", "student is required"))
    else:
        errors.extend(_check_student(request.student, partial=True))
    errors.extend(_check_courses(request.courses or []))
    return errors


def is_patch_empty(request: RegistrationInput) -> bool:
    """True when a partial update carries nothing to apply."""
    no_student = request.student is None or not _has_any_student_field(request.student)
    no_courses = not request.courses
    no_flag = "deleted" not in request.model_fields_set
    return no_student and no_courses and no_flag and not request.append_courses


def parse_iso_date(value: str | None) -> date | None:
    if value is None:
        return None
    return date.fromisoformat(value)


# ─── Student ─────────────────────────────────────────────────────

def _check_student(student: StudentInput, partial: bool) -> list[FieldErrorDetail]:
    errors: list[FieldErrorDetail] = []
    if not _is_blank(student.student_id):
        errors.extend(_check_identifier(student.student_id, "student.studentId"))

    for attr, wire, label, required, max_length in _TEXT_FIELDS:
        value = getattr(student, attr)
        if value is None and (partial or not required):
            continue
        if required and _is_blank(value):
            errors.append(FieldErrorDetail(f"student.{wire}", f"{label} is required"))
            continue
        if len(value) > max_length:
            errors.append(FieldErrorDetail(
                f"student.{wire}", f"{label} must be at most {max_length} characters",
            ))
        if attr == "email" and not EMAIL_PATTERN.match(value.strip()):
            errors.append(FieldErrorDetail(
                "student.email", "Email address format is invalid",
            ))

    if student.age is not None and student.age < 0:
        errors.append(FieldErrorDetail("student.age", "Age must be 0 or greater"))
    return errors


def _has_any_student_field(student: StudentInput) -> bool:
    return any(
        getattr(student, attr) is not None
        for attr in (
            "full_name", "furigana", "nickname", "email", "location",
            "age", "gender", "remarks", "deleted",
        )
    )


# ─── Courses ─────────────────────────────────────────────────────

def _check_courses(courses: Sequence[CourseInput]) -> list[FieldErrorDetail]:
    errors: list[FieldErrorDetail] = []
    for index, course in enumerate(courses):
        prefix = f"courses[{index}]"
        if not _is_blank(course.course_id):
            errors.extend(_check_identifier(course.course_id, f"{prefix}.courseId"))
        if _is_blank(course.course_name):
            errors.append(FieldErrorDetail(
                f"{prefix}.courseName", "Course name is required",
            ))
        elif len(course.course_name) > COURSE_NAME_MAX_LENGTH:
            errors.append(FieldErrorDetail(
                f"{prefix}.courseName",
                f"Course name must be at most {COURSE_NAME_MAX_LENGTH} characters",
            ))
        if _is_blank(course.start_date):
            errors.append(FieldErrorDetail(
                f"{prefix}.startDate", "Start date is required",
            ))
        elif not _is_date(course.start_date):
            errors.append(FieldErrorDetail(
                f"{prefix}.startDate", "Start date must be a date (YYYY-MM-DD)",
            ))
        if course.end_date is not None and not _is_date(course.end_date):
            errors.append(FieldErrorDetail(
                f"{prefix}.endDate", "End date must be a date (YYYY-MM-DD)",
            ))
    return errors


# ─── Helpers ─────────────────────────────────────────────────────

def _is_blank(value: str | None) -> bool:
    return value is None or not value.strip()


def _is_date(value: str) -> bool:
    try:
        parse_iso_date(value)
    except ValueError:
        return False
    return True


def _check_identifier(value: str, path: str) -> list[FieldErrorDetail]:
    try:
        decode_to_bytes(value, path)
    except InvalidIdentifierFormatError as e:
        return [FieldErrorDetail(path, e.message)]
    return []
