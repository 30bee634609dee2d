"""Initial schema — students, student_courses.

Revision ID: 001_initial
Revises: None
Create Date: 2026-10-18

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa

revision: str = "001_initial"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.create_table(
        "students",
        sa.Column("student_id", sa.LargeBinary(16), primary_key=True),
        sa.Column("full_name", sa.String(100), nullable=False),
        sa.Column("furigana", sa.String(100), nullable=False),
        sa.Column("nickname", sa.String(50), nullable=True),
        sa.Column("email", sa.String(255), nullable=False, unique=True),
        sa.Column("location", sa.String(100), nullable=True),
        sa.Column("age", sa.Integer, nullable=True),
        sa.Column("gender", sa.String(20), nullable=False),
        sa.Column("remarks", sa.Text, nullable=True),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
        sa.Column("deleted_at", sa.DateTime(timezone=True), nullable=True),
        sa.Column("is_deleted", sa.Boolean, nullable=False, server_default=sa.false()),
        sa.CheckConstraint("age >= 0", name="students_age_non_negative"),
    )

    op.create_table(
        "student_courses",
        sa.Column("course_id", sa.LargeBinary(16), primary_key=True),
        sa.Column(
            "student_id", sa.LargeBinary(16),
            sa.ForeignKey("students.student_id", ondelete="CASCADE"),
            nullable=False,
        ),
        sa.Column("course_name", sa.String(255), nullable=False),
        sa.Column("start_date", sa.Date, nullable=False),
        sa.Column("end_date", sa.Date, nullable=True),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
    )
    op.create_index(
        "ix_student_courses_student_id_course_name",
        "student_courses", ["student_id", "course_name"],
    )


def downgrade() -> None:
    op.drop_index("ix_student_courses_student_id_course_name", table_name="student_courses")
    op.drop_table("student_courses")
    op.drop_table("students")
