"""Root conftest — shared test configuration and store fixtures.

Invariants:
    - Every store test gets a fresh in-memory database with the full schema
    - Foreign keys are ON (same engine factory as production)
    - Repositories share one DatabaseSessionManager, as in voting.main
"""

import logging
import os

# Ensure tests never touch a developer's real database file
os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///:memory:")
os.environ.setdefault("LOG_FORMAT", "text")

import pytest  # noqa: E402

from voting.core.user import User  # noqa: E402
from voting.core.vote_session import VoteSession  # noqa: E402
from voting.infrastructure.database import DatabaseSessionManager  # noqa: E402
from voting.repositories import (  # noqa: E402
    InProcessSessionChecker,
    SqlChoiceRepository,
    SqlQuestionRepository,
    SqlUserRepository,
    SqlVoteSessionRepository,
)

TEST_LOGGER = logging.getLogger("voting.tests")


@pytest.fixture
async def db_manager():
    manager = DatabaseSessionManager(
        "sqlite+aiosqlite:///:memory:", statement_timeout=5.0, logger=TEST_LOGGER,
    )
    await manager.create_schema()
    yield manager
    await manager.dispose()


@pytest.fixture
def user_repo(db_manager):
    return SqlUserRepository(db_manager, TEST_LOGGER)


@pytest.fixture
def session_repo(db_manager):
    return SqlVoteSessionRepository(db_manager, TEST_LOGGER)


@pytest.fixture
def question_repo(db_manager):
    return SqlQuestionRepository(db_manager, TEST_LOGGER)


@pytest.fixture
def choice_repo(db_manager):
    return SqlChoiceRepository(db_manager, TEST_LOGGER)


@pytest.fixture
def session_checker(session_repo):
    return InProcessSessionChecker(session_repo, TEST_LOGGER)


@pytest.fixture
async def seed_user(user_repo):
    user = User.create("Alice", "alice@example.com")
    await user_repo.create(user)
    return user


@pytest.fixture
async def seed_session(session_repo):
    session = VoteSession.create("AG 2025", "Annual general meeting")
    await session_repo.create(session)
    return session
