"""ORM Models — SQLAlchemy declarative models for the roster tables.

Invariants:
    - All models inherit from Base (db/base.py)
    - Models are persistence-only; core entities are mapped explicitly in the repositories

Design Decisions:
    - One file per table for locality
    - All models imported here so Base.metadata is complete before create_all/autogenerate
"""

from roster.models.student import StudentRow  # noqa: F401
from roster.models.student_course import StudentCourseRow  # noqa: F401
