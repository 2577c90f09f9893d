"""SQL Question Repository — question rows ordered within a session.

Invariants:
    - id and created_at are assigned by the store (AUTOINCREMENT, CURRENT_TIMESTAMP)
    - allow_multiple is written as 0/1 and read back as bool
    - A duplicate (session_id, order_num) or unknown session_id is a
      ConstraintViolationError raised by the store
    - list_by_session returns questions by order_num ascending
"""

from uuid import UUID

from sqlalchemy import delete, insert, select, update

from voting.core.domain_types import QuestionId, parse_uuid
from voting.core.errors import NotFoundError
from voting.core.question import Question
from voting.core.timestamps import decode_timestamp
from voting.models.question import QuestionRow
from voting.repositories.base import SqlRepository, decoding_row, get_rowcount


def to_question(row: QuestionRow) -> Question:
    with decoding_row("question", row.id):
        return Question.rehydrate(
            row.id,
            parse_uuid(row.session_id, "session_id"),
            row.text,
            row.order_num,
            bool(row.allow_multiple),
            row.max_choices,
            decode_timestamp(row.created_at),
        )


class SqlQuestionRepository(SqlRepository):
    """SQLite-backed QuestionRepository."""

    async def create(self, question: Question) -> QuestionId:
        async with self._db.session("create_question") as db:
            result = await db.execute(
                insert(QuestionRow)
                .values(
                    session_id=str(question.session_id),
                    text=question.text,
                    order_num=question.order_num,
                    allow_multiple=int(question.allow_multiple),
                    max_choices=question.max_choices,
                )
                .returning(QuestionRow.id),
            )
            question_id = result.scalar_one()
            await db.commit()
        self._log_write("create_question", "question", question_id)
        return QuestionId(question_id)

    async def get_by_id(self, question_id: int) -> Question:
        async with self._db.session("get_question", question_id) as db:
            result = await db.execute(
                select(QuestionRow).where(QuestionRow.id == question_id),
            )
            row = result.scalar_one_or_none()
        if row is None:
            raise NotFoundError("Question", question_id)
        return to_question(row)

    async def list_by_session(self, session_id: UUID) -> list[Question]:
        async with self._db.session("list_questions", session_id) as db:
            result = await db.execute(
                select(QuestionRow)
                .where(QuestionRow.session_id == str(session_id))
                .order_by(QuestionRow.order_num),
            )
            rows = result.scalars().all()
        return [to_question(row) for row in rows]

    async def update(self, question: Question) -> None:
        if question.id is None:
            raise NotFoundError("Question", None)
        async with self._db.session("update_question", question.id) as db:
            result = await db.execute(
                update(QuestionRow)
                .where(QuestionRow.id == question.id)
                .values(
                    text=question.text,
                    order_num=question.order_num,
                    allow_multiple=int(question.allow_multiple),
                    max_choices=question.max_choices,
                ),
            )
            await db.commit()
        if get_rowcount(result) == 0:
            raise NotFoundError("Question", question.id)
        self._log_write("update_question", "question", question.id)

    async def delete(self, question_id: int) -> None:
        async with self._db.session("delete_question", question_id) as db:
            await db.execute(delete(QuestionRow).where(QuestionRow.id == question_id))
            await db.commit()
        self._log_write("delete_question", "question", question_id)
