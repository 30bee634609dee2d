"""Student Converter — request payloads -> core entities.

Invariants:
    - Registration always mints a fresh student id; a supplied studentId is ignored
    - A course keeps its supplied courseId when non-blank, otherwise gets a fresh one
    - Overwrite/merge never touch student_id, created_at, or the deletion state
      (deletion goes through entities.apply_deletion_flag)

Design Decisions:
    - Pure functions, no I/O: service orchestrates, converter shapes
    - Payloads arrive already validated, so date parsing here cannot fail
"""

from dataclasses import replace
from datetime import datetime

from roster.core.aggregate_validator import CourseInput, StudentInput, parse_iso_date
from roster.core.domain_types import CourseId, StudentId
from roster.core.entities import Student, StudentCourse
from roster.core.identity_codec import decode_to_bytes, generate_id_bytes

# Fields a PATCH may change (wire-level deletion handled separately)
_MERGEABLE_FIELDS = (
    "full_name", "furigana", "nickname", "email",
    "location", "age", "gender", "remarks",
)


def new_student(payload: StudentInput, now: datetime) -> Student:
    return Student(
        student_id=StudentId(generate_id_bytes()),
        full_name=payload.full_name,
        furigana=payload.furigana,
        nickname=payload.nickname,
        email=payload.email,
        location=payload.location,
        age=payload.age,
        gender=payload.gender,
        remarks=payload.remarks,
        created_at=now,
    )


def new_courses(
    student_id: StudentId, payloads: list[CourseInput], now: datetime,
) -> list[StudentCourse]:
    return [_new_course(student_id, p, now) for p in payloads]


def overwrite_student(existing: Student, payload: StudentInput) -> Student:
    """PUT semantics: every mutable field replaced, absent ones become None."""
    return replace(
        existing, **{name: getattr(payload, name) for name in _MERGEABLE_FIELDS},
    )


def merge_student(existing: Student, payload: StudentInput | None) -> Student:
    """PATCH semantics: only supplied (non-null) fields replace stored ones."""
    if payload is None:
        return existing
    changes = {
        name: getattr(payload, name)
        for name in _MERGEABLE_FIELDS
        if getattr(payload, name) is not None
    }
    return replace(existing, **changes) if changes else existing


def first_per_course_name(courses: list[StudentCourse]) -> list[StudentCourse]:
    """Keep the first course of each name, preserving request order."""
    seen: set[str] = set()
    unique = []
    for course in courses:
        if course.course_name in seen:
            continue
        seen.add(course.course_name)
        unique.append(course)
    return unique


def _new_course(
    student_id: StudentId, payload: CourseInput, now: datetime,
) -> StudentCourse:
    if payload.course_id and payload.course_id.strip():
        course_id = decode_to_bytes(payload.course_id, "courseId")
    else:
        course_id = generate_id_bytes()
    return StudentCourse(
        course_id=CourseId(course_id),
        student_id=student_id,
        course_name=payload.course_name,
        start_date=parse_iso_date(payload.start_date),
        end_date=parse_iso_date(payload.end_date),
        created_at=now,
    )
