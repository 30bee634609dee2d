"""Identity Codec — UUID string <-> 16-byte binary identifier conversion.

Invariants:
    - encode_id(None) is None; any non-16-byte input raises InvalidIdentifierFormatError
    - decode_* accept only the canonical 8-4-4-4-12 hex form (either case), never braces/urn/bare hex
    - Binary form is big-endian: most-significant 8 bytes, then least-significant 8 bytes
    - generate_id_bytes() always returns exactly 16 bytes

Design Decisions:
    - Single module for all conversions: no call site re-implements the encoding
      (ADR: one encoding across API, service, and storage)
    - Strict regex before uuid.UUID(): the stdlib parser accepts forms the API must reject
"""

import re
import uuid

from roster.core.domain_types import ID_LENGTH
from roster.core.errors import InvalidIdentifierFormatError

WRONG_LENGTH_MESSAGE = "Identifier must be exactly 16 bytes (got {length})"
NULL_MESSAGE = "Identifier must not be null"
MALFORMED_MESSAGE = "Identifier '{value}' is not a valid UUID"

_UUID_PATTERN = re.compile(
    r"[0-9a-fA-F]{8}-[0-9a-fA-F]{4}-[0-9a-fA-F]{4}-[0-9a-fA-F]{4}-[0-9a-fA-F]{12}",
)


def encode_id(raw: bytes | None) -> str | None:
    """16 bytes -> canonical lowercase hyphenated UUID string."""
    if raw is None:
        return None
    if not isinstance(raw, (bytes, bytearray)) or len(raw) != ID_LENGTH:
        length = len(raw) if isinstance(raw, (bytes, bytearray)) else "non-bytes"
        raise InvalidIdentifierFormatError(
            WRONG_LENGTH_MESSAGE.format(length=length),
        )
    return str(uuid.UUID(bytes=bytes(raw)))


def decode_to_uuid(value: str | None, field: str = "studentId") -> uuid.UUID:
    """UUID string -> uuid.UUID, rejecting null and malformed input."""
    if value is None:
        raise InvalidIdentifierFormatError(NULL_MESSAGE, field)
    if not isinstance(value, str) or not _UUID_PATTERN.fullmatch(value):
        raise InvalidIdentifierFormatError(
            MALFORMED_MESSAGE.format(value=value), field,
        )
    return uuid.UUID(value)


def decode_to_bytes(value: str | None, field: str = "studentId") -> bytes:
    """UUID string -> 16-byte big-endian identifier."""
    return decode_to_uuid(value, field).bytes


def generate_id_bytes() -> bytes:
    """Fresh random (v4) identifier in binary form."""
    return uuid.uuid4().bytes
