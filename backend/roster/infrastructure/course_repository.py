"""Course Repository — SQLAlchemy implementation of the CourseRepository protocol.

Invariants:
    - Every inserted course carries the owning student's 16-byte id
    - insert_course_if_not_exists dedups on (student_id, course_name) within the caller's transaction
    - Course listings ordered by start_date, then course_name

Design Decisions:
    - Batch insert as one executemany: one round-trip for the whole course list
    - Never commits: the caller's transactional() scope owns the unit of work
"""

import logging
from datetime import datetime, timezone

from sqlalchemy import delete, insert, select
from sqlalchemy.engine import Row
from sqlalchemy.ext.asyncio import AsyncSession

from roster.core.domain_types import CourseId, StudentId
from roster.core.entities import StudentCourse
from roster.models.student_course import StudentCourseRow

logger = logging.getLogger(__name__)

_courses = StudentCourseRow.__table__


class SqlCourseRepository:
    """Course enrollment persistence over an AsyncSession."""

    def __init__(self, db: AsyncSession):
        self._db = db

    async def insert_courses(self, courses: list[StudentCourse]) -> None:
        if not courses:
            return
        await self._db.execute(
            insert(_courses), [_course_values(c) for c in courses],
        )

    async def insert_course_if_not_exists(self, course: StudentCourse) -> bool:
        result = await self._db.execute(
            select(_courses.c.course_id).where(
                _courses.c.student_id == course.student_id,
                _courses.c.course_name == course.course_name,
            ).limit(1),
        )
        if result.first() is not None:
            logger.debug(
                f"Course '{course.course_name}' already enrolled, skipping",
            )
            return False
        await self._db.execute(insert(_courses).values(**_course_values(course)))
        return True

    async def delete_courses_by_student_id(self, student_id: StudentId) -> int:
        result = await self._db.execute(
            delete(_courses).where(_courses.c.student_id == student_id),
        )
        return result.rowcount

    async def find_courses_by_student_id(
        self, student_id: StudentId,
    ) -> list[StudentCourse]:
        result = await self._db.execute(
            select(_courses)
            .where(_courses.c.student_id == student_id)
            .order_by(_courses.c.start_date, _courses.c.course_name),
        )
        return [_to_course(row) for row in result.all()]

    async def find_all_courses(self) -> list[StudentCourse]:
        result = await self._db.execute(
            select(_courses).order_by(_courses.c.start_date, _courses.c.course_name),
        )
        return [_to_course(row) for row in result.all()]


# ─── Row <-> entity mapping ─────────────────────────────────────

def _course_values(course: StudentCourse) -> dict:
    return {
        "course_id": course.course_id,
        "student_id": course.student_id,
        "course_name": course.course_name,
        "start_date": course.start_date,
        "end_date": course.end_date,
        "created_at": course.created_at or datetime.now(timezone.utc),
    }


def _to_course(row: Row) -> StudentCourse:
    return StudentCourse(
        course_id=CourseId(bytes(row.course_id)),
        student_id=StudentId(bytes(row.student_id)),
        course_name=row.course_name,
        start_date=row.start_date,
        end_date=row.end_date,
        created_at=row.created_at,
    )
