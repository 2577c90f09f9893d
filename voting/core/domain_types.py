"""Domain Types — identity types and UUID helpers shared by entities and adapters.

Invariants:
    - UserId, SessionId wrap UUIDs; QuestionId, ChoiceId wrap store-assigned ints
    - The nil UUID is never a valid identity
    - parse_uuid raises InvalidIdentifierError, never returns a default

Design Decisions:
    - NewType over dataclass wrappers: zero runtime cost, full type-checker support
"""

import uuid
from typing import NewType
from uuid import UUID

from voting.core.errors import InvalidIdentifierError


# ─── Identity Types ──────────────────────────────────────────────

UserId = NewType("UserId", UUID)
SessionId = NewType("SessionId", UUID)
QuestionId = NewType("QuestionId", int)
ChoiceId = NewType("ChoiceId", int)

NIL_UUID: UUID = UUID(int=0)


# ─── UUID Helpers ────────────────────────────────────────────────

def new_uuid() -> UUID:
    """Fresh random identity."""
    return uuid.uuid4()


def is_nil(value: UUID) -> bool:
    return value == NIL_UUID


def parse_uuid(value: object, field: str = "id") -> UUID:
    """Decode the canonical text form of a UUID read from the store."""
    if not isinstance(value, str):
        raise InvalidIdentifierError(value, field)
    try:
        return UUID(value)
    except ValueError as e:
        raise InvalidIdentifierError(value, field) from e


def ensure_uuid(value: UUID | str, field: str = "id") -> UUID:
    """Accept either a UUID or its text form (caller-supplied ids)."""
    if isinstance(value, UUID):
        return value
    return parse_uuid(value, field)
