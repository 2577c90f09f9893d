"""Choice Entity — one ordered answer option of a question."""

from datetime import datetime

from voting.core.domain_types import ChoiceId, QuestionId
from voting.core.errors import ValidationError
from voting.core.timestamps import ensure_utc


def _check_text(text: str) -> None:
    if not text or not text.strip():
        raise ValidationError(
            "choice text cannot be empty", "text", "EMPTY_TEXT",
        )


def _check_order_num(order_num: int) -> None:
    if order_num < 1:
        raise ValidationError(
            "choice order_num must be >= 1", "order_num", "INVALID_ORDER_NUM",
        )


class Choice:
    """Choice owned by a Question. id/created_at are store-assigned."""

    __slots__ = ("_id", "_question_id", "_text", "_order_num", "_created_at")

    def __init__(
        self,
        id: int | None,
        question_id: int,
        text: str,
        order_num: int,
        created_at: datetime | None,
    ):
        self._id = ChoiceId(id) if id is not None else None
        self._question_id = QuestionId(question_id)
        self._text = text
        self._order_num = order_num
        self._created_at = ensure_utc(created_at) if created_at is not None else None

    @classmethod
    def create(cls, question_id: int, text: str, order_num: int) -> "Choice":
        if question_id is None or question_id <= 0:
            raise ValidationError(
                "invalid question id", "question_id", "INVALID_QUESTION_ID",
            )
        _check_text(text)
        _check_order_num(order_num)
        return cls(None, question_id, text, order_num, None)

    @classmethod
    def rehydrate(
        cls,
        id: int,
        question_id: int,
        text: str,
        order_num: int,
        created_at: datetime | None,
    ) -> "Choice":
        if id is None or id <= 0:
            raise ValidationError("invalid choice id", "id", "INVALID_ID")
        _check_text(text)
        return cls(id, question_id, text, order_num, created_at)

    @property
    def id(self) -> ChoiceId | None:
        return self._id

    @property
    def question_id(self) -> QuestionId:
        return self._question_id

    @property
    def text(self) -> str:
        return self._text

    @property
    def order_num(self) -> int:
        return self._order_num

    @property
    def created_at(self) -> datetime | None:
        return self._created_at

    def update_text(self, new_text: str) -> None:
        _check_text(new_text)
        self._text = new_text

    def change_order_num(self, new_order_num: int) -> None:
        _check_order_num(new_order_num)
        self._order_num = new_order_num

    def __repr__(self) -> str:
        return (
            f"Choice(id={self._id}, question_id={self._question_id}, "
            f"order_num={self._order_num}, text={self._text!r})"
        )
