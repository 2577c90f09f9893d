"""SQL VoteSession Repository — optional end date, close, participants and cascades.

Tests:
    - ends_at NULL <-> None; present ends_at round-trips
    - close() stamps an end date; closing a missing session is NotFound, and
      a close that would end before creation is rejected without writing
    - Participants: add/check/list/remove, duplicates violate the primary key
    - Deleting a session cascades to questions, their choices and participants
    - A malformed stored id surfaces as InvalidIdentifierError
"""

from datetime import datetime, timedelta, timezone
from uuid import uuid4

import pytest
from sqlalchemy import insert, text

from voting.core.choice import Choice
from voting.core.errors import (
    ConstraintViolationError, CorruptRowError, ErrorKind,
    InvalidIdentifierError, NotFoundError, ValidationError,
)
from voting.core.question import Question
from voting.core.user import User
from voting.core.vote_session import VoteSession
from voting.models.vote_session import VoteSessionRow


async def test_create_without_end_round_trips(session_repo):
    session = VoteSession.create("AG 2025", "Annual general meeting")
    await session_repo.create(session)

    loaded = await session_repo.get_by_id(session.id)
    assert loaded.title == "AG 2025"
    assert loaded.description == "Annual general meeting"
    assert loaded.created_at == session.created_at
    assert loaded.ends_at is None
    assert not loaded.has_end


async def test_create_with_end_round_trips(session_repo):
    ends_at = datetime.now(timezone.utc) + timedelta(days=7)
    session = VoteSession.create_with_end("AG 2025", "D", ends_at)
    await session_repo.create(session)

    loaded = await session_repo.get_by_id(session.id)
    assert loaded.ends_at == ends_at.replace(microsecond=0)


async def test_empty_description_reads_back_as_title(session_repo):
    session = VoteSession.create("AG 2025")
    await session_repo.create(session)
    assert (await session_repo.get_by_id(session.id)).description == "AG 2025"


async def test_description_column_has_store_default(session_repo, db_manager):
    sid = uuid4()
    async with db_manager.session("seed_without_description") as db:
        await db.execute(
            text(
                "INSERT INTO vote_session (id, title, created_at) "
                "VALUES (:id, 'AG 2025', '2025-01-01T00:00:00Z')",
            ),
            {"id": str(sid)},
        )
        await db.commit()

    assert (await session_repo.get_by_id(sid)).description == "AG 2025"


async def test_get_missing_session_raises_not_found(session_repo):
    with pytest.raises(NotFoundError):
        await session_repo.get_by_id(uuid4())


async def test_exists(session_repo, seed_session):
    assert await session_repo.exists(seed_session.id)
    assert not await session_repo.exists(uuid4())


async def test_update_persists_title_and_end(session_repo, seed_session):
    seed_session.update_title("AG 2026")
    seed_session.set_end_date(seed_session.created_at + timedelta(days=1))
    await session_repo.update(seed_session)

    loaded = await session_repo.get_by_id(seed_session.id)
    assert loaded.title == "AG 2026"
    assert loaded.ends_at == seed_session.created_at + timedelta(days=1)


async def test_update_can_clear_end_date(session_repo):
    session = VoteSession.create_with_end(
        "T", "D", datetime.now(timezone.utc) + timedelta(days=1),
    )
    await session_repo.create(session)
    session.remove_end_date()
    await session_repo.update(session)
    assert (await session_repo.get_by_id(session.id)).ends_at is None


async def test_update_missing_session_raises_not_found(session_repo):
    with pytest.raises(NotFoundError):
        await session_repo.update(VoteSession.create("Ghost"))


async def test_close_sets_end_date(session_repo, seed_session):
    await session_repo.close(seed_session.id)
    loaded = await session_repo.get_by_id(seed_session.id)
    assert loaded.has_end
    assert loaded.is_closed()


async def test_close_missing_session_raises_not_found(session_repo):
    with pytest.raises(NotFoundError):
        await session_repo.close(uuid4())


async def test_close_rejects_end_before_creation(session_repo):
    future = datetime.now(timezone.utc) + timedelta(hours=1)
    session = VoteSession.rehydrate(uuid4(), "Scheduled", "D", future)
    await session_repo.create(session)

    with pytest.raises(ValidationError) as exc:
        await session_repo.close(session.id)
    assert exc.value.code == "END_BEFORE_CREATION"

    # the stored row is untouched and still readable
    loaded = await session_repo.get_by_id(session.id)
    assert loaded.ends_at is None


async def test_list_sessions_most_recent_first(session_repo):
    base = datetime(2025, 1, 1, tzinfo=timezone.utc)
    for i in range(3):
        await session_repo.create(
            VoteSession.rehydrate(uuid4(), f"S{i}", "", base + timedelta(hours=i)),
        )
    listed = await session_repo.list_sessions(limit=10)
    assert [s.title for s in listed] == ["S2", "S1", "S0"]


async def test_list_sessions_empty(session_repo):
    assert await session_repo.list_sessions(limit=5) == []


# ─── Participants ────────────────────────────────────────────────

async def test_add_and_check_participant(session_repo, seed_session, seed_user):
    assert not await session_repo.is_participant(seed_session.id, seed_user.id)
    await session_repo.add_participant(seed_session.id, seed_user.id)
    assert await session_repo.is_participant(seed_session.id, seed_user.id)


async def test_get_participants_returns_users(session_repo, user_repo, seed_session):
    users = [User.create(f"P{i}", f"p{i}@example.com") for i in range(3)]
    for user in users:
        await user_repo.create(user)
        await session_repo.add_participant(seed_session.id, user.id)

    participants = await session_repo.get_participants(seed_session.id)
    assert {p.id for p in participants} == {u.id for u in users}
    assert all(isinstance(p, User) for p in participants)


async def test_duplicate_participant_is_constraint_violation(
    session_repo, seed_session, seed_user,
):
    await session_repo.add_participant(seed_session.id, seed_user.id)
    with pytest.raises(ConstraintViolationError) as exc:
        await session_repo.add_participant(seed_session.id, seed_user.id)
    assert exc.value.rule == "unique"


async def test_participant_for_unknown_user_violates_foreign_key(session_repo, seed_session):
    with pytest.raises(ConstraintViolationError) as exc:
        await session_repo.add_participant(seed_session.id, uuid4())
    assert exc.value.rule == "foreign_key"


async def test_remove_participant(session_repo, seed_session, seed_user):
    await session_repo.add_participant(seed_session.id, seed_user.id)
    await session_repo.remove_participant(seed_session.id, seed_user.id)
    assert not await session_repo.is_participant(seed_session.id, seed_user.id)
    assert await session_repo.get_participants(seed_session.id) == []


async def test_get_sessions_for_user(session_repo, seed_session, seed_user):
    other = VoteSession.create("Other")
    await session_repo.create(other)
    await session_repo.add_participant(seed_session.id, seed_user.id)

    sessions = await session_repo.get_sessions_for_user(seed_user.id)
    assert [s.id for s in sessions] == [seed_session.id]


async def test_deleting_user_removes_membership(
    session_repo, user_repo, seed_session, seed_user,
):
    await session_repo.add_participant(seed_session.id, seed_user.id)
    await user_repo.delete(seed_user.id)
    assert await session_repo.get_participants(seed_session.id) == []
    assert await session_repo.exists(seed_session.id)


# ─── Cascades ────────────────────────────────────────────────────

async def test_delete_session_cascades(
    session_repo, question_repo, choice_repo, seed_session, seed_user, user_repo,
):
    qid = await question_repo.create(Question.create(seed_session.id, "Budget?", 1))
    await choice_repo.create(Choice.create(qid, "Yes", 1))
    await session_repo.add_participant(seed_session.id, seed_user.id)

    await session_repo.delete(seed_session.id)

    assert await question_repo.list_by_session(seed_session.id) == []
    assert await choice_repo.list_by_question(qid) == []
    assert await session_repo.get_participants(seed_session.id) == []
    assert not await session_repo.is_participant(seed_session.id, seed_user.id)
    # the user is an independent aggregate
    assert (await user_repo.get_by_id(seed_user.id)).id == seed_user.id


# ─── Corrupt rows ────────────────────────────────────────────────

async def _seed_raw_session(db_manager, **values):
    row = {"title": "T", "description": "D", "created_at": "2025-01-01T00:00:00Z"}
    row.update(values)
    async with db_manager.session("seed_raw_session") as db:
        await db.execute(insert(VoteSessionRow).values(**row))
        await db.commit()


async def test_malformed_stored_id_is_invalid_identifier(session_repo, db_manager):
    await _seed_raw_session(db_manager, id="not-a-uuid")
    with pytest.raises(InvalidIdentifierError) as exc:
        await session_repo.list_sessions(limit=10)
    assert exc.value.context.entity == "vote_session"
    assert exc.value.context.entity_id == "not-a-uuid"


async def test_stored_end_before_creation_is_corrupt_row(session_repo, db_manager):
    sid = uuid4()
    await _seed_raw_session(db_manager, id=str(sid), ends_at="2024-01-01T00:00:00Z")
    with pytest.raises(CorruptRowError) as exc:
        await session_repo.get_by_id(sid)
    assert exc.value.kind is ErrorKind.CORRUPT_ROW
    assert exc.value.table == "vote_session"
    assert exc.value.__cause__ is not None
