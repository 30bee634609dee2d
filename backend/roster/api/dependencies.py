"""Route Dependencies — request body reading, service construction, admin auth.

Invariants:
    - read_registration_request never lets a raw framework error escape: every
      body failure becomes a RosterError (E001/E002/E003/E006)
    - Body state comes from RawBodyCaptureMiddleware; without it the body is classified here
    - Credentials compared in constant time (secrets.compare_digest)

Design Decisions:
    - Body parsed by hand instead of a typed route parameter: "{}" and "nothing"
      must be told apart before pydantic fills in defaults
    - Two-step auth (get_current_account -> require_admin): 401 for who, 403 for what
"""

import json
import logging
import secrets

from fastapi import Depends, Request
from fastapi.security import HTTPBasic, HTTPBasicCredentials
from pydantic import ValidationError
from sqlalchemy.ext.asyncio import AsyncSession

from roster.config import get_settings
from roster.core.domain_types import BodyState
from roster.core.error_response import FieldErrorDetail
from roster.core.errors import (
    EmptyObjectError, ForbiddenError, InvalidJsonError, InvalidRequestError,
    MissingParameterError, UnauthorizedError, ValidationFailedError,
)
from roster.core.field_path import format_field_path
from roster.core.request_body import classify_body
from roster.infrastructure.database import get_db
from roster.schemas.student import RegistrationRequest
from roster.services.student_service import StudentService

logger = logging.getLogger(__name__)

ROLE_ADMIN = "ADMIN"
ROLE_USER = "USER"

basic_scheme = HTTPBasic(auto_error=False)


# ─── Service ────────────────────────────────────────────────────

async def get_student_service(db: AsyncSession = Depends(get_db)) -> StudentService:
    return StudentService(db)


# ─── Request body ───────────────────────────────────────────────

async def read_registration_request(request: Request) -> RegistrationRequest:
    """Classify, parse, and type-check the student/courses body."""
    body = await request.body()
    body_state = getattr(request.state, "raw_body_state", None) or classify_body(body)
    if body_state is BodyState.NONE:
        raise MissingParameterError()
    if body_state is BodyState.EMPTY_OBJECT:
        raise EmptyObjectError()

    try:
        payload = json.loads(body)
    except (UnicodeDecodeError, json.JSONDecodeError) as e:
        logger.debug(f"Body is not JSON: {e}", extra={"path": request.url.path})
        raise InvalidJsonError()
    if not isinstance(payload, dict):
        raise InvalidRequestError("Request body must be a JSON object")

    try:
        return RegistrationRequest.model_validate(payload)
    except ValidationError as e:
        raise ValidationFailedError([
            FieldErrorDetail(format_field_path(err["loc"]), err["msg"])
            for err in e.errors()
        ])


# ─── Admin auth ─────────────────────────────────────────────────

async def get_current_account(
    credentials: HTTPBasicCredentials | None = Depends(basic_scheme),
) -> dict:
    """Resolve HTTP Basic credentials to a configured account."""
    if credentials is None:
        raise UnauthorizedError()
    settings = get_settings()
    accounts = (
        (settings.admin_username, settings.admin_password, ROLE_ADMIN),
        (settings.viewer_username, settings.viewer_password, ROLE_USER),
    )
    for username, password, role in accounts:
        if _matches(credentials.username, username) and _matches(
            credentials.password, password,
        ):
            return {"username": username, "role": role}
    logger.warning("Rejected Basic credentials")
    raise UnauthorizedError()


async def require_admin(account: dict = Depends(get_current_account)) -> dict:
    """Dependency - Require the ADMIN role."""
    if account["role"] != ROLE_ADMIN:
        raise ForbiddenError()
    return account


def _matches(given: str, expected: str) -> bool:
    return secrets.compare_digest(given.encode("utf-8"), expected.encode("utf-8"))
