"""VoteSession Entity — optional end date, rehydration defaults, validated mutators.

Tests:
    - Rehydrate then read back every field unchanged (with and without end)
    - End before creation is rejected by create, create_with_end and rehydrate
    - Empty description defaults to the title on rehydrate
    - close() / set_end_date() / remove_end_date() keep the end >= creation rule
"""

from datetime import datetime, timedelta, timezone
from uuid import uuid4

import pytest

from voting.core.domain_types import NIL_UUID
from voting.core.errors import ValidationError
from voting.core.vote_session import VoteSession


CREATED = datetime(2025, 1, 1, 12, 0, tzinfo=timezone.utc)


@pytest.mark.parametrize("ends_at", [None, CREATED, CREATED + timedelta(days=3)])
def test_rehydrate_round_trips_fields(ends_at):
    sid = uuid4()
    session = VoteSession.rehydrate(sid, "AG 2025", "Annual meeting", CREATED, ends_at)
    assert session.id == sid
    assert session.title == "AG 2025"
    assert session.description == "Annual meeting"
    assert session.created_at == CREATED
    assert session.ends_at == ends_at
    assert session.has_end is (ends_at is not None)


def test_rehydrate_rejects_end_before_creation():
    with pytest.raises(ValidationError) as exc:
        VoteSession.rehydrate(uuid4(), "T", "D", CREATED, CREATED - timedelta(seconds=1))
    assert exc.value.code == "END_BEFORE_CREATION"


def test_create_with_end_rejects_past_end():
    with pytest.raises(ValidationError) as exc:
        VoteSession.create_with_end("T", "D", datetime(2000, 1, 1, tzinfo=timezone.utc))
    assert exc.value.code == "END_BEFORE_CREATION"


def test_create_without_end():
    session = VoteSession.create("AG 2025")
    assert not session.has_end
    assert session.ends_at is None
    assert not session.is_closed()


def test_create_rejects_blank_title():
    with pytest.raises(ValidationError) as exc:
        VoteSession.create("  ")
    assert exc.value.code == "EMPTY_TITLE"


def test_rehydrate_defaults_description_to_title():
    session = VoteSession.rehydrate(uuid4(), "AG 2025", "", CREATED)
    assert session.description == "AG 2025"


def test_rehydrate_rejects_nil_id():
    with pytest.raises(ValidationError) as exc:
        VoteSession.rehydrate(NIL_UUID, "T", "D", CREATED)
    assert exc.value.code == "INVALID_ID"


def test_set_end_date_revalidates():
    session = VoteSession.rehydrate(uuid4(), "T", "D", CREATED)
    with pytest.raises(ValidationError):
        session.set_end_date(CREATED - timedelta(days=1))
    assert session.ends_at is None
    session.set_end_date(CREATED + timedelta(hours=1))
    assert session.ends_at == CREATED + timedelta(hours=1)


def test_remove_end_date():
    session = VoteSession.rehydrate(uuid4(), "T", "D", CREATED, CREATED + timedelta(days=1))
    session.remove_end_date()
    assert not session.has_end


def test_close_marks_session_closed():
    session = VoteSession.create("T")
    session.close()
    assert session.has_end
    assert session.is_closed()


def test_is_closed_compares_against_given_moment():
    session = VoteSession.rehydrate(uuid4(), "T", "D", CREATED, CREATED + timedelta(days=1))
    assert not session.is_closed(now=CREATED)
    assert session.is_closed(now=CREATED + timedelta(days=2))


def test_update_title_rejects_empty():
    session = VoteSession.create("T")
    with pytest.raises(ValidationError):
        session.update_title("")
    session.update_title("New")
    assert session.title == "New"
