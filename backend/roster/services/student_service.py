"""Student Service — register, read, update, and delete student aggregates.

Invariants:
    - Every write is one transaction: student and courses land together or not at all
    - Validation runs before the first query; invalid input never touches the database
    - Soft delete / restore are idempotent; force delete is irreversible
    - Ids enter as canonical UUID strings and are decoded once, at the top of each operation

Design Decisions:
    - One StudentService per request session (constructed by the route dependency):
      repositories share the request's AsyncSession, transactional() owns commits
    - State transitions delegate to pure functions in core/entities.py
    - Updates are last-writer-wins; there is no version column
"""

import logging
from collections import defaultdict
from datetime import datetime, timezone

from sqlalchemy.ext.asyncio import AsyncSession

from roster.core.aggregate_validator import (
    RegistrationInput, is_patch_empty, validate_partial_update, validate_registration,
)
from roster.core.domain_types import StudentId, StudentStatus
from roster.core import entities
from roster.core.entities import Student, StudentCourse, StudentDetail
from roster.core.errors import (
    EmptyObjectError, ResourceNotFoundError, ValidationFailedError,
)
from roster.core.identity_codec import decode_to_bytes, encode_id
from roster.core.repository_protocols import CourseRepository, StudentRepository
from roster.infrastructure.course_repository import SqlCourseRepository
from roster.infrastructure.database import transactional
from roster.infrastructure.student_repository import SqlStudentRepository
from roster.services.student_converter import (
    first_per_course_name, merge_student, new_courses, new_student, overwrite_student,
)

logger = logging.getLogger(__name__)


def _now() -> datetime:
    return datetime.now(timezone.utc)


class StudentService:
    """Student aggregate operations over one AsyncSession."""

    def __init__(
        self,
        db: AsyncSession,
        students: StudentRepository | None = None,
        courses: CourseRepository | None = None,
    ):
        self._db = db
        self._students = students or SqlStudentRepository(db)
        self._courses = courses or SqlCourseRepository(db)

    # ─── Create ─────────────────────────────────────────────────

    async def register(self, request: RegistrationInput) -> StudentDetail:
        """Validate and persist a new student with its courses."""
        errors = validate_registration(request)
        if errors:
            raise ValidationFailedError(errors)

        now = _now()
        student = new_student(request.student, now)
        courses = new_courses(student.student_id, request.courses or [], now)
        async with transactional(self._db):
            await self._students.insert_student(student)
            await self._courses.insert_courses(courses)

        logger.info(
            f"Student registered with {len(courses)} course(s)",
            extra={"student_id": _hex(student.student_id), "course_count": len(courses)},
        )
        return StudentDetail(
            student=student,
            courses=sorted(courses, key=lambda c: (c.start_date, c.course_name)),
        )

    # ─── Read ───────────────────────────────────────────────────

    async def find_by_id(self, student_id: str) -> StudentDetail:
        """Student with its courses. Soft-deleted students are still found."""
        return await self._detail(StudentId(decode_to_bytes(student_id)))

    async def list_courses_for_student(self, student_id: str) -> list[StudentCourse]:
        student = await self._require(decode_to_bytes(student_id))
        return await self._courses.find_courses_by_student_id(student.student_id)

    async def search(
        self,
        furigana: str | None = None,
        include_deleted: bool = False,
        deleted_only: bool = False,
    ) -> list[StudentDetail]:
        """Filtered listing, newest first, each student with its courses."""
        logger.debug(
            f"Searching students: furigana={furigana!r} "
            f"include_deleted={include_deleted} deleted_only={deleted_only}",
        )
        students = await self._students.search_students(
            furigana, include_deleted, deleted_only,
        )
        if not students:
            return []
        by_student: dict[bytes, list[StudentCourse]] = defaultdict(list)
        for course in await self._courses.find_all_courses():
            by_student[course.student_id].append(course)
        return [
            StudentDetail(student=s, courses=by_student.get(s.student_id, []))
            for s in students
        ]

    # ─── Update ─────────────────────────────────────────────────

    async def update(self, student_id: str, request: RegistrationInput) -> StudentDetail:
        """Full update: all fields replaced, courses replaced or appended."""
        sid = StudentId(decode_to_bytes(student_id))
        errors = validate_registration(request)
        if errors:
            raise ValidationFailedError(errors)

        existing = await self._require(sid)
        updated = entities.apply_deletion_flag(
            overwrite_student(existing, request.student), request.deleted, _now(),
        )
        async with transactional(self._db):
            await self._students.update_student(updated)
            await self._write_courses(sid, request, replace_when_empty=True)

        logger.info("Student updated", extra={"student_id": _hex(sid)})
        return await self._detail(sid)

    async def partial_update(
        self, student_id: str, request: RegistrationInput,
    ) -> StudentDetail:
        """PATCH: only supplied fields change; courses only when a list is given."""
        sid = StudentId(decode_to_bytes(student_id))
        if is_patch_empty(request):
            raise EmptyObjectError()
        errors = validate_partial_update(request)
        if errors:
            raise ValidationFailedError(errors)

        existing = await self._require(sid)
        updated = merge_student(existing, request.student)
        deleted = _requested_deletion(request)
        if deleted is not None:
            updated = entities.apply_deletion_flag(updated, deleted, _now())
        async with transactional(self._db):
            if updated != existing:
                await self._students.update_student(updated)
            await self._write_courses(sid, request, replace_when_empty=False)

        logger.info("Student partially updated", extra={"student_id": _hex(sid)})
        return await self._detail(sid)

    # ─── Delete / restore ───────────────────────────────────────

    async def soft_delete(self, student_id: str) -> None:
        sid = StudentId(decode_to_bytes(student_id))
        existing = await self._require(sid)
        deleted = entities.soft_delete(existing, _now())
        if deleted is existing:
            logger.debug("Student already deleted", extra=_status_extra(existing))
            return
        async with transactional(self._db):
            await self._students.update_student(deleted)
        logger.info("Student soft-deleted", extra=_status_extra(deleted))

    async def restore(self, student_id: str) -> None:
        sid = StudentId(decode_to_bytes(student_id))
        existing = await self._require(sid)
        restored = entities.restore(existing)
        if restored is existing:
            logger.debug("Student already active", extra=_status_extra(existing))
            return
        async with transactional(self._db):
            await self._students.update_student(restored)
        logger.info("Student restored", extra=_status_extra(restored))

    async def force_delete(self, student_id: str) -> None:
        """Physically remove the student and its courses."""
        sid = StudentId(decode_to_bytes(student_id))
        async with transactional(self._db):
            removed_courses = await self._courses.delete_courses_by_student_id(sid)
            if await self._students.force_delete_student(sid) == 0:
                raise ResourceNotFoundError("Student", student_id)
        logger.info(
            "Student permanently deleted",
            extra={
                "student_id": _hex(sid), "course_count": removed_courses,
                "student_status": StudentStatus.REMOVED.value,
            },
        )

    # ─── Helpers ────────────────────────────────────────────────

    async def _require(self, student_id: bytes) -> Student:
        student = await self._students.find_by_id(StudentId(student_id))
        if student is None:
            raise ResourceNotFoundError("Student", _hex(student_id))
        return student

    async def _detail(self, student_id: StudentId) -> StudentDetail:
        student = await self._require(student_id)
        courses = await self._courses.find_courses_by_student_id(student_id)
        return StudentDetail(student=student, courses=courses)

    async def _write_courses(
        self, student_id: StudentId, request: RegistrationInput,
        replace_when_empty: bool,
    ) -> None:
        payloads = request.courses or []
        if not payloads and not (replace_when_empty and not request.append_courses):
            return
        courses = new_courses(student_id, payloads, _now())
        logger.debug(
            f"{'Appending' if request.append_courses else 'Replacing'} courses",
            extra={"student_id": _hex(student_id), "course_count": len(courses)},
        )
        if request.append_courses:
            for course in first_per_course_name(courses):
                await self._courses.insert_course_if_not_exists(course)
            return
        await self._courses.delete_courses_by_student_id(student_id)
        await self._courses.insert_courses(courses)


def _requested_deletion(request: RegistrationInput) -> bool | None:
    """Deletion flag for PATCH: student.deleted wins, then an explicit top-level flag."""
    if request.student is not None and request.student.deleted is not None:
        return request.student.deleted
    if "deleted" in request.model_fields_set:
        return request.deleted
    return None


def _hex(student_id: bytes) -> str:
    return encode_id(bytes(student_id))


def _status_extra(student: Student) -> dict:
    return {
        "student_id": _hex(student.student_id),
        "student_status": student.status.value,
    }
