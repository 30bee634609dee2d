"""Boundary Protocols — contracts between core and the storage shell.

Invariants:
    - Core NEVER imports from shell; dependency arrows point inward only
    - Every identifier crosses this boundary as the 16-byte binary form, never a string
    - Mutations report affected row counts so callers can detect "no such student"

Design Decisions:
    - Protocol over ABC: structural subtyping, no inheritance hierarchy
    - Async in Protocol: implementations do IO; transaction scope is owned by the caller,
      repositories never commit
"""

from typing import Protocol

from roster.core.domain_types import StudentId
from roster.core.entities import Student, StudentCourse


class StudentRepository(Protocol):
    """Contract for student persistence — implemented by shell."""
    async def insert_student(self, student: Student) -> None: ...
    async def update_student(self, student: Student) -> int: ...
    async def find_by_id(self, student_id: StudentId) -> Student | None: ...
    async def search_students(
        self, furigana: str | None, include_deleted: bool, deleted_only: bool,
    ) -> list[Student]: ...
    async def force_delete_student(self, student_id: StudentId) -> int: ...


class CourseRepository(Protocol):
    """Contract for course enrollment persistence — implemented by shell."""
    async def insert_courses(self, courses: list[StudentCourse]) -> None: ...
    async def insert_course_if_not_exists(self, course: StudentCourse) -> bool: ...
    async def delete_courses_by_student_id(self, student_id: StudentId) -> int: ...
    async def find_courses_by_student_id(
        self, student_id: StudentId,
    ) -> list[StudentCourse]: ...
    async def find_all_courses(self) -> list[StudentCourse]: ...
