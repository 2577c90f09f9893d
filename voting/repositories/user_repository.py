"""SQL User Repository — user rows and the password-hash sub-aggregate.

Invariants:
    - Email uniqueness is left to the UNIQUE constraint (ConstraintViolationError)
    - create(user, password_hash) writes both rows in ONE transaction:
      a failure on either insert rolls back both
    - delete() removes the user row only; user_password and participant rows
      go with it through ON DELETE CASCADE
    - Users are listed most recent first
"""

from uuid import UUID

from sqlalchemy import delete, insert, select, update
from sqlalchemy.dialects.sqlite import insert as sqlite_insert

from voting.core.domain_types import parse_uuid
from voting.core.errors import NotFoundError, ValidationError
from voting.core.timestamps import decode_timestamp, encode_timestamp, utc_now
from voting.core.user import User
from voting.models.user import UserRow, UserPasswordRow
from voting.repositories.base import SqlRepository, check_page, decoding_row, get_rowcount


def user_values(user: User) -> dict:
    """Entity → row values."""
    return {
        "id": str(user.id),
        "name": user.name,
        "email": user.email,
        "created_at": encode_timestamp(user.created_at),
    }


def to_user(row: UserRow) -> User:
    """Row → entity."""
    with decoding_row("user", row.id):
        return User.rehydrate(
            parse_uuid(row.id),
            row.name,
            row.email,
            decode_timestamp(row.created_at),
        )


def _check_hash(password_hash: str) -> None:
    if not password_hash:
        raise ValidationError(
            "password hash cannot be empty", "password_hash", "EMPTY_PASSWORD_HASH",
        )


class SqlUserRepository(SqlRepository):
    """SQLite-backed UserRepository."""

    async def create(self, user: User, password_hash: str | None = None) -> None:
        if password_hash is not None:
            _check_hash(password_hash)
        values = user_values(user)
        async with self._db.session("create_user", user.id) as db:
            await db.execute(insert(UserRow).values(**values))
            if password_hash is not None:
                now = encode_timestamp(utc_now())
                await db.execute(
                    insert(UserPasswordRow).values(
                        user_id=values["id"],
                        password_hash=password_hash,
                        created_at=now,
                        updated_at=now,
                    ),
                )
            await db.commit()
        self._log_write("create_user", "user", user.id)

    async def get_by_id(self, user_id: UUID) -> User:
        async with self._db.session("get_user", user_id) as db:
            result = await db.execute(
                select(UserRow).where(UserRow.id == str(user_id)),
            )
            row = result.scalar_one_or_none()
        if row is None:
            raise NotFoundError("User", user_id)
        return to_user(row)

    async def get_by_email(self, email: str) -> User:
        async with self._db.session("get_user_by_email") as db:
            result = await db.execute(
                select(UserRow).where(UserRow.email == email),
            )
            row = result.scalar_one_or_none()
        if row is None:
            raise NotFoundError("User", email)
        return to_user(row)

    async def update(self, user: User) -> None:
        values = user_values(user)
        async with self._db.session("update_user", user.id) as db:
            result = await db.execute(
                update(UserRow)
                .where(UserRow.id == values["id"])
                .values(name=values["name"], email=values["email"]),
            )
            await db.commit()
        if get_rowcount(result) == 0:
            raise NotFoundError("User", user.id)
        self._log_write("update_user", "user", user.id)

    async def delete(self, user_id: UUID) -> None:
        async with self._db.session("delete_user", user_id) as db:
            await db.execute(delete(UserRow).where(UserRow.id == str(user_id)))
            await db.commit()
        self._log_write("delete_user", "user", user_id)

    async def list_users(
        self, limit: int | None = None, offset: int = 0,
    ) -> list[User]:
        limit = self._page_size if limit is None else limit
        check_page(limit, offset)
        async with self._db.session("list_users") as db:
            result = await db.execute(
                select(UserRow)
                .order_by(UserRow.created_at.desc(), UserRow.id)
                .limit(limit)
                .offset(offset),
            )
            rows = result.scalars().all()
        return [to_user(row) for row in rows]

    # ─── Password hash ───────────────────────────────────────────

    async def set_password(self, user_id: UUID, password_hash: str) -> None:
        """Insert or replace the hash; created_at is kept on replace."""
        _check_hash(password_hash)
        now = encode_timestamp(utc_now())
        stmt = sqlite_insert(UserPasswordRow).values(
            user_id=str(user_id),
            password_hash=password_hash,
            created_at=now,
            updated_at=now,
        )
        stmt = stmt.on_conflict_do_update(
            index_elements=[UserPasswordRow.user_id],
            set_={
                "password_hash": stmt.excluded.password_hash,
                "updated_at": stmt.excluded.updated_at,
            },
        )
        async with self._db.session("set_password", user_id) as db:
            await db.execute(stmt)
            await db.commit()
        self._log_write("set_password", "user_password", user_id)

    async def get_password_hash(self, user_id: UUID) -> str:
        async with self._db.session("get_password_hash", user_id) as db:
            result = await db.execute(
                select(UserPasswordRow.password_hash)
                .where(UserPasswordRow.user_id == str(user_id)),
            )
            password_hash = result.scalar_one_or_none()
        if password_hash is None:
            raise NotFoundError("Password", user_id)
        return password_hash

    async def delete_password(self, user_id: UUID) -> None:
        async with self._db.session("delete_password", user_id) as db:
            await db.execute(
                delete(UserPasswordRow).where(UserPasswordRow.user_id == str(user_id)),
            )
            await db.commit()
        self._log_write("delete_password", "user_password", user_id)
