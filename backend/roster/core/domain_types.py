"""Domain Types — rich types that replace bare primitives across the codebase.

Invariants:
    - StudentId, CourseId wrap the 16-byte binary form, the only form that crosses the storage boundary
    - External (wire) identifiers are UUID strings; conversion lives in identity_codec only
    - All valid states encoded as Enums; no raw string matching

Design Decisions:
    - NewType over dataclass wrappers: zero runtime cost, full type-checker support
    - str Enums: serialize to JSON without custom encoders
"""

from enum import Enum
from typing import NewType


# ─── Identity Types ──────────────────────────────────────────────

StudentId = NewType("StudentId", bytes)   # 16 bytes, big-endian UUID
CourseId = NewType("CourseId", bytes)     # 16 bytes, big-endian UUID

ID_LENGTH = 16


# ─── Enums ───────────────────────────────────────────────────────

class BodyState(str, Enum):
    """Raw request body classification, decided before any deserialization."""
    NONE = "none"
    EMPTY_OBJECT = "empty_object"
    NON_EMPTY = "non_empty"


class StudentStatus(str, Enum):
    """Student lifecycle states. REMOVED is terminal (row physically gone)."""
    ACTIVE = "active"
    SOFT_DELETED = "soft_deleted"
    REMOVED = "removed"
