"""VoteSession Entity — a titled voting window that owns questions and participants.

Invariants:
    - id is a non-nil UUID, assigned once
    - title is never blank
    - created_at is set at construction and never mutated
    - ends_at is optional (None = no defined end); when present, ends_at >= created_at
    - A rehydrated session with an empty description takes its title as description

Design Decisions:
    - ends_at is `datetime | None` and exposed through has_end/ends_at, so absence
      is an explicit checked state
    - Questions and participants are not held in memory: ownership is expressed by
      ON DELETE CASCADE at the store boundary
"""

from datetime import datetime
from uuid import UUID

from voting.core.domain_types import SessionId, is_nil, new_uuid
from voting.core.errors import ValidationError
from voting.core.timestamps import ensure_utc, utc_now


def _check_title(title: str) -> None:
    if not title or not title.strip():
        raise ValidationError(
            "session title cannot be empty", "title", "EMPTY_TITLE",
        )


def _check_end(created_at: datetime | None, ends_at: datetime | None) -> None:
    if ends_at is None or created_at is None:
        return
    if ends_at < created_at:
        raise ValidationError(
            "end date cannot be before creation date",
            "ends_at", "END_BEFORE_CREATION",
        )


class VoteSession:
    """Vote session aggregate root."""

    __slots__ = ("_id", "_title", "_description", "_created_at", "_ends_at")

    def __init__(
        self,
        id: UUID,
        title: str,
        description: str,
        created_at: datetime,
        ends_at: datetime | None = None,
    ):
        self._id = SessionId(id)
        self._title = title
        self._description = description
        self._created_at = ensure_utc(created_at)
        self._ends_at = ensure_utc(ends_at) if ends_at is not None else None

    @classmethod
    def create(
        cls, title: str, description: str = "", ends_at: datetime | None = None,
    ) -> "VoteSession":
        _check_title(title)
        created_at = utc_now()
        if ends_at is not None:
            ends_at = ensure_utc(ends_at)
        _check_end(created_at, ends_at)
        return cls(new_uuid(), title, description, created_at, ends_at)

    @classmethod
    def create_with_end(
        cls, title: str, description: str, ends_at: datetime,
    ) -> "VoteSession":
        return cls.create(title, description, ends_at)

    @classmethod
    def rehydrate(
        cls,
        id: UUID,
        title: str,
        description: str,
        created_at: datetime,
        ends_at: datetime | None = None,
    ) -> "VoteSession":
        if is_nil(id):
            raise ValidationError("invalid session id", "id", "INVALID_ID")
        _check_title(title)
        if created_at is None:
            raise ValidationError(
                "creation timestamp is required", "created_at", "MISSING_CREATED_AT",
            )
        created_at = ensure_utc(created_at)
        if ends_at is not None:
            ends_at = ensure_utc(ends_at)
        _check_end(created_at, ends_at)
        if not description:
            description = title
        return cls(id, title, description, created_at, ends_at)

    @property
    def id(self) -> SessionId:
        return self._id

    @property
    def title(self) -> str:
        return self._title

    @property
    def description(self) -> str:
        return self._description

    @property
    def created_at(self) -> datetime:
        return self._created_at

    @property
    def ends_at(self) -> datetime | None:
        return self._ends_at

    @property
    def has_end(self) -> bool:
        return self._ends_at is not None

    def is_closed(self, now: datetime | None = None) -> bool:
        """True once the end date has been reached."""
        if self._ends_at is None:
            return False
        moment = ensure_utc(now) if now is not None else utc_now()
        return self._ends_at <= moment

    # ─── Mutators ────────────────────────────────────────────────

    def update_title(self, new_title: str) -> None:
        _check_title(new_title)
        self._title = new_title

    def update_description(self, new_description: str) -> None:
        self._description = new_description

    def set_end_date(self, ends_at: datetime) -> None:
        ends_at = ensure_utc(ends_at)
        _check_end(self._created_at, ends_at)
        self._ends_at = ends_at

    def remove_end_date(self) -> None:
        self._ends_at = None

    def close(self, at: datetime | None = None) -> None:
        """End the session now (or at the given moment)."""
        self.set_end_date(at if at is not None else utc_now())

    def __repr__(self) -> str:
        return (
            f"VoteSession(id={self._id}, title={self._title!r}, "
            f"ends_at={self._ends_at})"
        )
