"""Student ORM — persists the aggregate root of a student and its enrollments.

Invariants:
    - student_id is a BINARY(16) primary key (big-endian UUID bytes), assigned by the service
    - email is unique; age is non-negative (CHECK constraint)
    - is_deleted and deleted_at move together (enforced by the entity transitions)

Design Decisions:
    - LargeBinary(16) over a native UUID column: the storage contract is the binary form on every backend
    - No relationship() to courses: repositories query explicitly and map rows to entities
"""

from datetime import datetime, timezone

from sqlalchemy import (
    Boolean, CheckConstraint, DateTime, Integer, LargeBinary, String, Text,
)
from sqlalchemy.orm import Mapped, mapped_column

from roster.db.base import Base


class StudentRow(Base):
    """`students` table row."""
    __tablename__ = "students"
    __table_args__ = (
        CheckConstraint("age >= 0", name="students_age_non_negative"),
    )

    student_id: Mapped[bytes] = mapped_column(
        LargeBinary(16), primary_key=True,
    )
    full_name: Mapped[str] = mapped_column(String(100), nullable=False)
    furigana: Mapped[str] = mapped_column(String(100), nullable=False)
    nickname: Mapped[str | None] = mapped_column(String(50), nullable=True)
    email: Mapped[str] = mapped_column(
        String(255), nullable=False, unique=True,
    )
    location: Mapped[str | None] = mapped_column(String(100), nullable=True)
    age: Mapped[int | None] = mapped_column(Integer, nullable=True)
    gender: Mapped[str] = mapped_column(String(20), nullable=False)
    remarks: Mapped[str | None] = mapped_column(Text, nullable=True)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
    )
    deleted_at: Mapped[datetime | None] = mapped_column(
        DateTime(timezone=True), nullable=True,
    )
    is_deleted: Mapped[bool] = mapped_column(
        Boolean, nullable=False, default=False,
    )
