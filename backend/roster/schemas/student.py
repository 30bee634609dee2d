"""Student Schemas — wire contracts for the student/course API.

Invariants:
    - Wire names are camelCase (fullName, appendCourses); Python names are snake_case
    - Request payloads are lenient about presence: every field optional, types enforced;
      presence and format rules live in core/aggregate_validator.py
    - Response ids are canonical UUID strings produced by identity_codec.encode_id

Design Decisions:
    - Dates travel as strings on the request side so a bad date is reported by the
      validator with its element path, like every other field rule
    - RegistrationRequest satisfies aggregate_validator.RegistrationInput structurally
"""

from datetime import date, datetime

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from roster.core.entities import Student, StudentCourse, StudentDetail
from roster.core.identity_codec import encode_id


class _CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


# --- Requests -----------------------------------------------------------------

class StudentPayload(_CamelModel):
    """Student part of a registration/update request."""
    student_id: str | None = None
    full_name: str | None = None
    furigana: str | None = None
    nickname: str | None = None
    email: str | None = None
    location: str | None = None
    age: int | None = None
    gender: str | None = None
    remarks: str | None = None
    deleted: bool | None = None


class CoursePayload(_CamelModel):
    """One course enrollment in a request."""
    course_id: str | None = None
    course_name: str | None = None
    start_date: str | None = None
    end_date: str | None = None


class RegistrationRequest(_CamelModel):
    """Student plus courses, with deletion and append flags."""
    student: StudentPayload | None = None
    courses: list[CoursePayload] | None = None
    deleted: bool = False
    append_courses: bool = False


# --- Responses ----------------------------------------------------------------

class CourseResponse(_CamelModel):
    course_id: str
    course_name: str
    start_date: date
    end_date: date | None = None
    created_at: datetime | None = None

    @classmethod
    def from_entity(cls, course: StudentCourse) -> "CourseResponse":
        return cls(
            course_id=encode_id(course.course_id),
            course_name=course.course_name,
            start_date=course.start_date,
            end_date=course.end_date,
            created_at=course.created_at,
        )


class StudentResponse(_CamelModel):
    student_id: str
    full_name: str
    furigana: str
    nickname: str | None = None
    email: str
    location: str | None = None
    age: int | None = None
    gender: str
    remarks: str | None = None
    created_at: datetime | None = None
    deleted_at: datetime | None = None
    is_deleted: bool = False

    @classmethod
    def from_entity(cls, student: Student) -> "StudentResponse":
        return cls(
            student_id=encode_id(student.student_id),
            full_name=student.full_name,
            furigana=student.furigana,
            nickname=student.nickname,
            email=student.email,
            location=student.location,
            age=student.age,
            gender=student.gender,
            remarks=student.remarks,
            created_at=student.created_at,
            deleted_at=student.deleted_at,
            is_deleted=student.is_deleted,
        )


class StudentDetailResponse(_CamelModel):
    """Aggregate response: student plus its courses."""
    student: StudentResponse
    courses: list[CourseResponse] = Field(default_factory=list)

    @classmethod
    def from_domain(cls, detail: StudentDetail) -> "StudentDetailResponse":
        return cls(
            student=StudentResponse.from_entity(detail.student),
            courses=[CourseResponse.from_entity(c) for c in detail.courses],
        )
