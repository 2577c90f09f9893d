"""Question Entity — one ordered question inside a vote session.

Invariants:
    - text is never blank
    - order_num >= 1 (uniqueness per session is a store constraint)
    - max_choices >= 1
    - id and created_at are None until the store assigns them;
      a rehydrated question always has id > 0
    - session existence is checked by QuestionService, not here
"""

from datetime import datetime
from uuid import UUID

from voting.core.domain_types import QuestionId, SessionId
from voting.core.errors import ValidationError
from voting.core.timestamps import ensure_utc


def _check_text(text: str) -> None:
    if not text or not text.strip():
        raise ValidationError(
            "question text cannot be empty", "text", "EMPTY_TEXT",
        )


def _check_order_num(order_num: int) -> None:
    if order_num < 1:
        raise ValidationError(
            "order_num must be >= 1", "order_num", "INVALID_ORDER_NUM",
        )


def _check_max_choices(max_choices: int) -> None:
    if max_choices < 1:
        raise ValidationError(
            "max_choices must be >= 1", "max_choices", "INVALID_MAX_CHOICES",
        )


class Question:
    """Question owned by a VoteSession."""

    __slots__ = (
        "_id", "_session_id", "_text", "_order_num",
        "_allow_multiple", "_max_choices", "_created_at",
    )

    def __init__(
        self,
        id: int | None,
        session_id: UUID,
        text: str,
        order_num: int,
        allow_multiple: bool,
        max_choices: int,
        created_at: datetime | None,
    ):
        self._id = QuestionId(id) if id is not None else None
        self._session_id = SessionId(session_id)
        self._text = text
        self._order_num = order_num
        self._allow_multiple = allow_multiple
        self._max_choices = max_choices
        self._created_at = ensure_utc(created_at) if created_at is not None else None

    @classmethod
    def create(
        cls,
        session_id: UUID,
        text: str,
        order_num: int,
        max_choices: int = 1,
        allow_multiple: bool = False,
    ) -> "Question":
        _check_text(text)
        _check_order_num(order_num)
        _check_max_choices(max_choices)
        return cls(None, session_id, text, order_num, allow_multiple, max_choices, None)

    @classmethod
    def rehydrate(
        cls,
        id: int,
        session_id: UUID,
        text: str,
        order_num: int,
        allow_multiple: bool,
        max_choices: int,
        created_at: datetime | None,
    ) -> "Question":
        if id is None or id <= 0:
            raise ValidationError("invalid question id", "id", "INVALID_ID")
        _check_text(text)
        return cls(id, session_id, text, order_num, allow_multiple, max_choices, created_at)

    @property
    def id(self) -> QuestionId | None:
        return self._id

    @property
    def session_id(self) -> SessionId:
        return self._session_id

    @property
    def text(self) -> str:
        return self._text

    @property
    def order_num(self) -> int:
        return self._order_num

    @property
    def allow_multiple(self) -> bool:
        return self._allow_multiple

    @property
    def max_choices(self) -> int:
        return self._max_choices

    @property
    def created_at(self) -> datetime | None:
        return self._created_at

    def update_text(self, new_text: str) -> None:
        _check_text(new_text)
        self._text = new_text

    def change_order_num(self, new_order_num: int) -> None:
        _check_order_num(new_order_num)
        self._order_num = new_order_num

    def change_max_choices(self, new_max_choices: int) -> None:
        _check_max_choices(new_max_choices)
        self._max_choices = new_max_choices

    def toggle_allow_multiple(self) -> None:
        self._allow_multiple = not self._allow_multiple

    def __repr__(self) -> str:
        return (
            f"Question(id={self._id}, session_id={self._session_id}, "
            f"order_num={self._order_num}, text={self._text!r})"
        )
