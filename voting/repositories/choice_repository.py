"""SQL Choice Repository — choice rows ordered within a question."""

from sqlalchemy import delete, insert, select, update

from voting.core.choice import Choice
from voting.core.domain_types import ChoiceId
from voting.core.errors import NotFoundError
from voting.core.timestamps import decode_timestamp
from voting.models.choice import ChoiceRow
from voting.repositories.base import SqlRepository, decoding_row, get_rowcount


def to_choice(row: ChoiceRow) -> Choice:
    with decoding_row("choice", row.id):
        return Choice.rehydrate(
            row.id,
            row.question_id,
            row.text,
            row.order_num,
            decode_timestamp(row.created_at),
        )


class SqlChoiceRepository(SqlRepository):
    """SQLite-backed ChoiceRepository."""

    async def create(self, choice: Choice) -> ChoiceId:
        async with self._db.session("create_choice") as db:
            result = await db.execute(
                insert(ChoiceRow)
                .values(
                    question_id=choice.question_id,
                    text=choice.text,
                    order_num=choice.order_num,
                )
                .returning(ChoiceRow.id),
            )
            choice_id = result.scalar_one()
            await db.commit()
        self._log_write("create_choice", "choice", choice_id)
        return ChoiceId(choice_id)

    async def get_by_id(self, choice_id: int) -> Choice:
        async with self._db.session("get_choice", choice_id) as db:
            result = await db.execute(
                select(ChoiceRow).where(ChoiceRow.id == choice_id),
            )
            row = result.scalar_one_or_none()
        if row is None:
            raise NotFoundError("Choice", choice_id)
        return to_choice(row)

    async def list_by_question(self, question_id: int) -> list[Choice]:
        async with self._db.session("list_choices", question_id) as db:
            result = await db.execute(
                select(ChoiceRow)
                .where(ChoiceRow.question_id == question_id)
                .order_by(ChoiceRow.order_num),
            )
            rows = result.scalars().all()
        return [to_choice(row) for row in rows]

    async def update(self, choice: Choice) -> None:
        if choice.id is None:
            raise NotFoundError("Choice", None)
        async with self._db.session("update_choice", choice.id) as db:
            result = await db.execute(
                update(ChoiceRow)
                .where(ChoiceRow.id == choice.id)
                .values(text=choice.text, order_num=choice.order_num),
            )
            await db.commit()
        if get_rowcount(result) == 0:
            raise NotFoundError("Choice", choice.id)
        self._log_write("update_choice", "choice", choice.id)

    async def delete(self, choice_id: int) -> None:
        async with self._db.session("delete_choice", choice_id) as db:
            await db.execute(delete(ChoiceRow).where(ChoiceRow.id == choice_id))
            await db.commit()
        self._log_write("delete_choice", "choice", choice_id)
