"""Student Repository — SQLAlchemy implementation of the StudentRepository protocol.

Invariants:
    - Ids in and out are 16-byte binary (StudentId); no string ids below the service
    - Never commits: the caller's transactional() scope owns the unit of work
    - Rows are mapped to core entities explicitly (_to_student / _student_values)

Design Decisions:
    - Statements target the Core Table, not ORM instances: no identity-map caching,
      so a read after an update in the same session always sees the new row
    - search_students is the single filtered query (furigana / include_deleted / deleted_only)
"""

import logging

from sqlalchemy import delete, insert, select, update
from sqlalchemy.engine import Row
from sqlalchemy.ext.asyncio import AsyncSession

from roster.core.domain_types import StudentId
from roster.core.entities import Student
from roster.models.student import StudentRow

logger = logging.getLogger(__name__)

_students = StudentRow.__table__


class SqlStudentRepository:
    """Student persistence over an AsyncSession."""

    def __init__(self, db: AsyncSession):
        self._db = db

    async def insert_student(self, student: Student) -> None:
        values = _student_values(student)
        values["student_id"] = student.student_id
        if student.created_at is not None:
            values["created_at"] = student.created_at
        await self._db.execute(insert(_students).values(**values))

    async def update_student(self, student: Student) -> int:
        result = await self._db.execute(
            update(_students)
            .where(_students.c.student_id == student.student_id)
            .values(**_student_values(student)),
        )
        return result.rowcount

    async def find_by_id(self, student_id: StudentId) -> Student | None:
        result = await self._db.execute(
            select(_students).where(_students.c.student_id == student_id),
        )
        row = result.one_or_none()
        return _to_student(row) if row else None

    async def search_students(
        self, furigana: str | None, include_deleted: bool, deleted_only: bool,
    ) -> list[Student]:
        query = select(_students)
        if deleted_only:
            query = query.where(_students.c.is_deleted.is_(True))
        elif not include_deleted:
            query = query.where(_students.c.is_deleted.is_(False))
        if furigana and furigana.strip():
            query = query.where(
                _students.c.furigana.contains(furigana, autoescape=True),
            )
        query = query.order_by(_students.c.created_at.desc())
        result = await self._db.execute(query)
        return [_to_student(row) for row in result.all()]

    async def force_delete_student(self, student_id: StudentId) -> int:
        result = await self._db.execute(
            delete(_students).where(_students.c.student_id == student_id),
        )
        return result.rowcount


# ─── Row <-> entity mapping ─────────────────────────────────────

def _student_values(student: Student) -> dict:
    """Mutable columns written by insert and update."""
    return {
        "full_name": student.full_name,
        "furigana": student.furigana,
        "nickname": student.nickname,
        "email": student.email,
        "location": student.location,
        "age": student.age,
        "gender": student.gender,
        "remarks": student.remarks,
        "deleted_at": student.deleted_at,
        "is_deleted": student.is_deleted,
    }


def _to_student(row: Row) -> Student:
    return Student(
        student_id=StudentId(bytes(row.student_id)),
        full_name=row.full_name,
        furigana=row.furigana,
        nickname=row.nickname,
        email=row.email,
        location=row.location,
        age=row.age,
        gender=row.gender,
        remarks=row.remarks,
        created_at=row.created_at,
        deleted_at=row.deleted_at,
        is_deleted=bool(row.is_deleted),
    )
