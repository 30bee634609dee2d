"""Student Routes — register, search, read, update, soft-delete, and restore students.

Invariants:
    - Routes hold no business logic: parse -> StudentService -> response schema
    - Path ids are passed through as strings; the service decodes them (bad id -> E006)
    - Mutating bodies go through read_registration_request (NONE/EMPTY_OBJECT/JSON checks)

Design Decisions:
    - Registration answers 200 with the stored aggregate, not 201
    - DELETE is a soft delete; the physical delete lives under /admin (admin_students.py)
"""

import logging

from fastapi import APIRouter, Depends, Query, Response, status

from roster.api.dependencies import get_student_service, read_registration_request
from roster.schemas.student import (
    CourseResponse, RegistrationRequest, StudentDetailResponse,
)
from roster.services.student_service import StudentService

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/students", tags=["students"])


@router.post("", response_model=StudentDetailResponse)
async def register_student(
    body: RegistrationRequest = Depends(read_registration_request),
    service: StudentService = Depends(get_student_service),
):
    """Register a student together with its courses."""
    detail = await service.register(body)
    return StudentDetailResponse.from_domain(detail)


@router.get("", response_model=list[StudentDetailResponse])
async def search_students(
    furigana: str | None = Query(None),
    include_deleted: bool = Query(False, alias="includeDeleted"),
    deleted_only: bool = Query(False, alias="deletedOnly"),
    service: StudentService = Depends(get_student_service),
):
    """List students, newest first. deletedOnly wins over includeDeleted."""
    details = await service.search(furigana, include_deleted, deleted_only)
    return [StudentDetailResponse.from_domain(d) for d in details]


@router.get("/{student_id}", response_model=StudentDetailResponse)
async def get_student(
    student_id: str, service: StudentService = Depends(get_student_service),
):
    detail = await service.find_by_id(student_id)
    return StudentDetailResponse.from_domain(detail)


@router.get("/{student_id}/courses", response_model=list[CourseResponse])
async def list_student_courses(
    student_id: str, service: StudentService = Depends(get_student_service),
):
    courses = await service.list_courses_for_student(student_id)
    return [CourseResponse.from_entity(c) for c in courses]


@router.put("/{student_id}", response_model=StudentDetailResponse)
async def update_student(
    student_id: str,
    body: RegistrationRequest = Depends(read_registration_request),
    service: StudentService = Depends(get_student_service),
):
    """Replace the student's fields; courses replaced, or appended with appendCourses."""
    detail = await service.update(student_id, body)
    return StudentDetailResponse.from_domain(detail)


@router.patch("/{student_id}", response_model=StudentDetailResponse)
async def patch_student(
    student_id: str,
    body: RegistrationRequest = Depends(read_registration_request),
    service: StudentService = Depends(get_student_service),
):
    """Apply only the supplied fields."""
    detail = await service.partial_update(student_id, body)
    return StudentDetailResponse.from_domain(detail)


@router.delete("/{student_id}", status_code=status.HTTP_204_NO_CONTENT)
async def soft_delete_student(
    student_id: str, service: StudentService = Depends(get_student_service),
):
    await service.soft_delete(student_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.patch("/{student_id}/restore", status_code=status.HTTP_204_NO_CONTENT)
async def restore_student(
    student_id: str, service: StudentService = Depends(get_student_service),
):
    await service.restore(student_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
