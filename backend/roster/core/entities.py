"""Entities — Student, StudentCourse, and the StudentDetail aggregate.

Invariants:
    - is_deleted is True iff deleted_at is not None (checked on construction)
    - A course belongs to exactly one student (student_id)
    - Transitions are pure: soft_delete / restore / apply_deletion_flag return new values

Design Decisions:
    - Frozen dataclasses, mapped to/from ORM rows explicitly in the repositories
      (ADR: persistence models never leak into core)
    - Soft delete of an already-deleted student keeps the original deleted_at (idempotent)
"""

from dataclasses import dataclass, field, replace
from datetime import date, datetime

from roster.core.domain_types import CourseId, StudentId, StudentStatus


@dataclass(frozen=True)
class Student:
    """Student entity — one row of `students`."""
    student_id: StudentId
    full_name: str
    furigana: str
    nickname: str | None
    email: str
    location: str | None
    age: int | None
    gender: str
    remarks: str | None
    created_at: datetime | None = None
    deleted_at: datetime | None = None
    is_deleted: bool = False

    def __post_init__(self):
        if self.is_deleted != (self.deleted_at is not None):
            raise ValueError(
                "is_deleted must be True exactly when deleted_at is set",
            )

    @property
    def status(self) -> StudentStatus:
        return StudentStatus.SOFT_DELETED if self.is_deleted else StudentStatus.ACTIVE


@dataclass(frozen=True)
class StudentCourse:
    """Course enrollment entity — one row of `student_courses`."""
    course_id: CourseId
    student_id: StudentId
    course_name: str
    start_date: date
    end_date: date | None = None
    created_at: datetime | None = None


@dataclass(frozen=True)
class StudentDetail:
    """Aggregate: a student together with its course enrollments."""
    student: Student
    courses: list[StudentCourse] = field(default_factory=list)


# ─── State transitions ──────────────────────────────────────────

def soft_delete(student: Student, now: datetime) -> Student:
    """active -> soft-deleted. No-op when already deleted."""
    if student.is_deleted:
        return student
    return replace(student, is_deleted=True, deleted_at=now)


def restore(student: Student) -> Student:
    """soft-deleted -> active. No-op when already active."""
    if not student.is_deleted:
        return student
    return replace(student, is_deleted=False, deleted_at=None)


def apply_deletion_flag(student: Student, deleted: bool, now: datetime) -> Student:
    """Drive the student to the requested deletion state."""
    return soft_delete(student, now) if deleted else restore(student)
