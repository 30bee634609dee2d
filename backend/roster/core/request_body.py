"""Request Body Inspector — classifies the raw payload before deserialization.

Invariants:
    - Zero-length or whitespace-only -> NONE
    - Trimmed body exactly "{}" -> EMPTY_OBJECT ("{ }" is NON_EMPTY and left to the parser)
    - Pure: never consumes or mutates the bytes it inspects

Design Decisions:
    - Runs on bytes, not parsed JSON: a deserializer that defaults missing fields
      cannot tell "{}" from "nothing sent"
    - errors="replace" decode: undecodable bytes are a parse problem, not a classification one
"""

from roster.core.domain_types import BodyState

EMPTY_OBJECT_LITERAL = "{}"


def classify_body(raw: bytes | None) -> BodyState:
    if not raw:
        return BodyState.NONE
    text = raw.decode("utf-8", errors="replace").strip()
    if not text:
        return BodyState.NONE
    if text == EMPTY_OBJECT_LITERAL:
        return BodyState.EMPTY_OBJECT
    return BodyState.NON_EMPTY
