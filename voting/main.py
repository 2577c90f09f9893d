"""Composition Root — builds the store, repositories and services for one process.

Invariants:
    - Logging is installed on enter and removed on exit (no import-time side effects)
    - One DatabaseSessionManager per lifespan; the engine is disposed on exit
    - Every component receives its logger explicitly

Design Decisions:
    - Async context manager as the lifecycle boundary, so any host (HTTP app,
      CLI, test) can run `async with lifespan() as app:` around its work
    - AppContainer is a plain dataclass: wiring is explicit, no DI framework
"""

import logging
from contextlib import asynccontextmanager
from dataclasses import dataclass
from typing import AsyncIterator

from voting.config import Settings, get_settings
from voting.infrastructure.database import DatabaseSessionManager
from voting.infrastructure.observability import setup_logging, teardown_logging
from voting.repositories import (
    InProcessSessionChecker,
    SqlChoiceRepository,
    SqlQuestionRepository,
    SqlUserRepository,
    SqlVoteSessionRepository,
)
from voting.services.question_service import QuestionService


@dataclass
class AppContainer:
    """Wired components for one process lifetime."""
    settings: Settings
    db: DatabaseSessionManager
    users: SqlUserRepository
    sessions: SqlVoteSessionRepository
    questions: SqlQuestionRepository
    choices: SqlChoiceRepository
    question_service: QuestionService


def build_container(settings: Settings) -> AppContainer:
    db = DatabaseSessionManager(
        settings.database_url,
        pool_size=settings.database_pool_size,
        max_overflow=settings.database_max_overflow,
        statement_timeout=settings.database_statement_timeout_seconds,
        echo=settings.database_echo,
        logger=logging.getLogger("voting.db"),
    )
    repo_logger = logging.getLogger("voting.repositories")
    page_size = settings.default_page_size
    users = SqlUserRepository(db, repo_logger, page_size)
    sessions = SqlVoteSessionRepository(db, repo_logger, page_size)
    questions = SqlQuestionRepository(db, repo_logger)
    choices = SqlChoiceRepository(db, repo_logger)
    checker = InProcessSessionChecker(sessions, repo_logger)
    service = QuestionService(
        questions, choices, checker, logger=logging.getLogger("voting.services"),
    )
    return AppContainer(
        settings=settings,
        db=db,
        users=users,
        sessions=sessions,
        questions=questions,
        choices=choices,
        question_service=service,
    )


@asynccontextmanager
async def lifespan(
    settings: Settings | None = None, create_schema: bool = False,
) -> AsyncIterator[AppContainer]:
    """Startup/shutdown lifecycle."""
    settings = settings or get_settings()
    handler = setup_logging(settings.log_level, settings.log_format)
    logger = logging.getLogger("voting")
    container = build_container(settings)
    try:
        if create_schema:
            await container.db.create_schema()
        logger.info("Voting store started")
        yield container
    finally:
        logger.info("Voting store shutting down")
        await container.db.dispose()
        teardown_logging(handler)
