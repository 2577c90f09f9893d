"""SQL VoteSession Repository — vote_session rows and participant membership.

Invariants:
    - ends_at is written as NULL when the session has no end, and NULL reads
      back as "no end"
    - delete() removes the session row only; questions, choices and participant
      rows go with it through ON DELETE CASCADE
    - close() stamps ends_at with the current UTC second, and is rejected with
      ValidationError when that would precede created_at
    - Participants are returned in invitation order (invited_at ascending)
    - Adding the same participant twice is a ConstraintViolationError (primary key)
"""

from uuid import UUID

from sqlalchemy import delete, func, insert, select, update

from voting.core.domain_types import parse_uuid
from voting.core.errors import NotFoundError
from voting.core.timestamps import decode_timestamp, encode_timestamp, utc_now
from voting.core.user import User
from voting.core.vote_session import VoteSession
from voting.models.user import UserRow
from voting.models.vote_session import ParticipantRow, VoteSessionRow
from voting.repositories.base import SqlRepository, check_page, decoding_row, get_rowcount
from voting.repositories.user_repository import to_user


def to_vote_session(row: VoteSessionRow) -> VoteSession:
    with decoding_row("vote_session", row.id):
        return VoteSession.rehydrate(
            parse_uuid(row.id),
            row.title,
            row.description,
            decode_timestamp(row.created_at),
            decode_timestamp(row.ends_at),
        )


class SqlVoteSessionRepository(SqlRepository):
    """SQLite-backed VoteSessionRepository."""

    async def create(self, session: VoteSession) -> None:
        async with self._db.session("create_session", session.id) as db:
            await db.execute(
                insert(VoteSessionRow).values(
                    id=str(session.id),
                    title=session.title,
                    description=session.description,
                    created_at=encode_timestamp(session.created_at),
                    ends_at=encode_timestamp(session.ends_at),
                ),
            )
            await db.commit()
        self._log_write("create_session", "vote_session", session.id)

    async def get_by_id(self, session_id: UUID) -> VoteSession:
        async with self._db.session("get_session", session_id) as db:
            result = await db.execute(
                select(VoteSessionRow).where(VoteSessionRow.id == str(session_id)),
            )
            row = result.scalar_one_or_none()
        if row is None:
            raise NotFoundError("VoteSession", session_id)
        return to_vote_session(row)

    async def exists(self, session_id: UUID) -> bool:
        async with self._db.session("session_exists", session_id) as db:
            result = await db.execute(
                select(func.count())
                .select_from(VoteSessionRow)
                .where(VoteSessionRow.id == str(session_id)),
            )
            count = result.scalar_one()
        return count > 0

    async def get_sessions_for_user(self, user_id: UUID) -> list[VoteSession]:
        async with self._db.session("get_sessions_for_user", user_id) as db:
            result = await db.execute(
                select(VoteSessionRow)
                .join(ParticipantRow, ParticipantRow.session_id == VoteSessionRow.id)
                .where(ParticipantRow.user_id == str(user_id))
                .order_by(VoteSessionRow.created_at.desc(), VoteSessionRow.id),
            )
            rows = result.scalars().all()
        return [to_vote_session(row) for row in rows]

    async def update(self, session: VoteSession) -> None:
        async with self._db.session("update_session", session.id) as db:
            result = await db.execute(
                update(VoteSessionRow)
                .where(VoteSessionRow.id == str(session.id))
                .values(
                    title=session.title,
                    description=session.description,
                    ends_at=encode_timestamp(session.ends_at),
                ),
            )
            await db.commit()
        if get_rowcount(result) == 0:
            raise NotFoundError("VoteSession", session.id)
        self._log_write("update_session", "vote_session", session.id)

    async def delete(self, session_id: UUID) -> None:
        async with self._db.session("delete_session", session_id) as db:
            await db.execute(
                delete(VoteSessionRow).where(VoteSessionRow.id == str(session_id)),
            )
            await db.commit()
        self._log_write("delete_session", "vote_session", session_id)

    async def close(self, session_id: UUID) -> None:
        """End the session now. The entity checks the end against created_at."""
        async with self._db.session("close_session", session_id) as db:
            result = await db.execute(
                select(VoteSessionRow).where(VoteSessionRow.id == str(session_id)),
            )
            row = result.scalar_one_or_none()
            if row is not None:
                session = to_vote_session(row)
                session.close()
                await db.execute(
                    update(VoteSessionRow)
                    .where(VoteSessionRow.id == row.id)
                    .values(ends_at=encode_timestamp(session.ends_at)),
                )
                await db.commit()
        if row is None:
            raise NotFoundError("VoteSession", session_id)
        self._log_write("close_session", "vote_session", session_id)

    async def list_sessions(
        self, limit: int | None = None, offset: int = 0,
    ) -> list[VoteSession]:
        limit = self._page_size if limit is None else limit
        check_page(limit, offset)
        async with self._db.session("list_sessions") as db:
            result = await db.execute(
                select(VoteSessionRow)
                .order_by(VoteSessionRow.created_at.desc(), VoteSessionRow.id)
                .limit(limit)
                .offset(offset),
            )
            rows = result.scalars().all()
        return [to_vote_session(row) for row in rows]

    # ─── Participants ────────────────────────────────────────────

    async def add_participant(self, session_id: UUID, user_id: UUID) -> None:
        async with self._db.session("add_participant", session_id) as db:
            await db.execute(
                insert(ParticipantRow).values(
                    session_id=str(session_id),
                    user_id=str(user_id),
                    invited_at=encode_timestamp(utc_now()),
                ),
            )
            await db.commit()
        self._log_write("add_participant", "session_and_participant", session_id)

    async def remove_participant(self, session_id: UUID, user_id: UUID) -> None:
        async with self._db.session("remove_participant", session_id) as db:
            await db.execute(
                delete(ParticipantRow).where(
                    ParticipantRow.session_id == str(session_id),
                    ParticipantRow.user_id == str(user_id),
                ),
            )
            await db.commit()
        self._log_write("remove_participant", "session_and_participant", session_id)

    async def get_participants(self, session_id: UUID) -> list[User]:
        async with self._db.session("get_participants", session_id) as db:
            result = await db.execute(
                select(UserRow)
                .join(ParticipantRow, ParticipantRow.user_id == UserRow.id)
                .where(ParticipantRow.session_id == str(session_id))
                .order_by(ParticipantRow.invited_at, UserRow.id),
            )
            rows = result.scalars().all()
        return [to_user(row) for row in rows]

    async def is_participant(self, session_id: UUID, user_id: UUID) -> bool:
        async with self._db.session("is_participant", session_id) as db:
            result = await db.execute(
                select(func.count())
                .select_from(ParticipantRow)
                .where(
                    ParticipantRow.session_id == str(session_id),
                    ParticipantRow.user_id == str(user_id),
                ),
            )
            count = result.scalar_one()
        return count > 0
