"""StudentCourse ORM — persists one course enrollment owned by a student.

Invariants:
    - Always belongs to a Student (student_id FK, ON DELETE CASCADE)
    - course_name and start_date are non-nullable; end_date NULL means ongoing

Design Decisions:
    - Indexed (student_id, course_name): the append path looks enrollments up by that pair
"""

from datetime import date, datetime, timezone

from sqlalchemy import Date, DateTime, ForeignKey, Index, LargeBinary, String
from sqlalchemy.orm import Mapped, mapped_column

from roster.db.base import Base


class StudentCourseRow(Base):
    """`student_courses` table row."""
    __tablename__ = "student_courses"
    __table_args__ = (
        Index("ix_student_courses_student_id_course_name", "student_id", "course_name"),
    )

    course_id: Mapped[bytes] = mapped_column(
        LargeBinary(16), primary_key=True,
    )
    student_id: Mapped[bytes] = mapped_column(
        LargeBinary(16),
        ForeignKey("students.student_id", ondelete="CASCADE"),
        nullable=False,
    )
    course_name: Mapped[str] = mapped_column(String(255), nullable=False)
    start_date: Mapped[date] = mapped_column(Date, nullable=False)
    end_date: Mapped[date | None] = mapped_column(Date, nullable=True)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
    )
