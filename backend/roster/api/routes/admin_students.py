"""Admin Student Routes — irreversible operations behind HTTP Basic + ADMIN role.

Invariants:
    - Every route depends on require_admin: 401 without valid credentials, 403 for non-admins
    - Force delete removes courses and student in one transaction
"""

import logging

from fastapi import APIRouter, Depends, Response, status

from roster.api.dependencies import get_student_service, require_admin
from roster.services.student_service import StudentService

logger = logging.getLogger(__name__)
router = APIRouter(
    prefix="/admin/students", tags=["admin"], dependencies=[Depends(require_admin)],
)


@router.delete("/{student_id}", status_code=status.HTTP_204_NO_CONTENT)
async def force_delete_student(
    student_id: str, service: StudentService = Depends(get_student_service),
):
    """Physically delete a student and all its courses."""
    await service.force_delete(student_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
