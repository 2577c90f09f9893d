"""User Entity — a person who can be invited to vote sessions.

Invariants:
    - id is assigned once (uuid4 on create) and never changes; nil UUID rejected
    - name is never blank
    - email matches EMAIL_PATTERN on create and on every update
    - created_at is set once, never mutated
    - Email uniqueness is enforced by the store, not here

Design Decisions:
    - rehydrate() trusts the stored email format (rows were validated on write)
      but still re-checks identity and name
    - The password hash is a separate persisted aggregate (user_password table),
      so it is not an attribute of User
"""

import re
from datetime import datetime
from uuid import UUID

from voting.core.domain_types import UserId, is_nil, new_uuid
from voting.core.errors import ValidationError
from voting.core.timestamps import ensure_utc, utc_now


EMAIL_PATTERN = re.compile(r"^[a-zA-Z0-9._%+-]+@[a-zA-Z0-9.-]+\.[a-zA-Z]{2,}$")


def _check_name(name: str) -> None:
    if not name or not name.strip():
        raise ValidationError("user name cannot be empty", "name", "EMPTY_NAME")


def _check_email(email: str) -> None:
    if not email or not EMAIL_PATTERN.match(email):
        raise ValidationError(
            f"invalid email format: {email}", "email", "INVALID_EMAIL",
        )


class User:
    """User aggregate root."""

    __slots__ = ("_id", "_name", "_email", "_created_at")

    def __init__(self, id: UUID, name: str, email: str, created_at: datetime):
        self._id = UserId(id)
        self._name = name
        self._email = email
        self._created_at = ensure_utc(created_at)

    @classmethod
    def create(cls, name: str, email: str) -> "User":
        _check_name(name)
        _check_email(email)
        return cls(new_uuid(), name, email, utc_now())

    @classmethod
    def rehydrate(
        cls, id: UUID, name: str, email: str, created_at: datetime,
    ) -> "User":
        if is_nil(id):
            raise ValidationError("invalid user id", "id", "INVALID_ID")
        _check_name(name)
        if created_at is None:
            raise ValidationError(
                "creation timestamp is required", "created_at", "MISSING_CREATED_AT",
            )
        return cls(id, name, email, created_at)

    @property
    def id(self) -> UserId:
        return self._id

    @property
    def name(self) -> str:
        return self._name

    @property
    def email(self) -> str:
        return self._email

    @property
    def created_at(self) -> datetime:
        return self._created_at

    def update_name(self, new_name: str) -> None:
        _check_name(new_name)
        self._name = new_name

    def update_email(self, new_email: str) -> None:
        _check_email(new_email)
        self._email = new_email

    def __repr__(self) -> str:
        return f"User(id={self._id}, name={self._name!r}, email={self._email!r})"
