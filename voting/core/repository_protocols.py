"""Boundary Protocols — persistence contracts between the core and the relational adapter.

Invariants:
    - Core NEVER imports from repositories/, infrastructure/ or models/
    - One Protocol per aggregate root; each has exactly one SQL implementation
    - get_* raise NotFoundError for a missing row, never return None
    - list_* return a list (empty when nothing matches), never None
    - Store errors pass through as VotingError subclasses; NotFoundError and
      ConstraintViolationError stay distinguishable by kind

Design Decisions:
    - Protocol over ABC: structural subtyping, adapters need no inheritance
    - Async in Protocol: every method is awaitable, so callers can cancel it or
      bound it with asyncio.timeout
"""

from typing import Protocol
from uuid import UUID

from voting.core.choice import Choice
from voting.core.domain_types import ChoiceId, QuestionId
from voting.core.question import Question
from voting.core.user import User
from voting.core.vote_session import VoteSession


class PasswordStore(Protocol):
    """Contract for the password-hash sub-aggregate, keyed by user id."""
    async def set_password(self, user_id: UUID, password_hash: str) -> None: ...
    async def get_password_hash(self, user_id: UUID) -> str: ...
    async def delete_password(self, user_id: UUID) -> None: ...


class UserRepository(PasswordStore, Protocol):
    """Contract for user persistence."""
    async def create(self, user: User, password_hash: str | None = None) -> None: ...
    async def get_by_id(self, user_id: UUID) -> User: ...
    async def get_by_email(self, email: str) -> User: ...
    async def update(self, user: User) -> None: ...
    async def delete(self, user_id: UUID) -> None: ...
    async def list_users(self, limit: int | None = None, offset: int = 0) -> list[User]: ...


class VoteSessionRepository(Protocol):
    """Contract for vote session persistence and participant membership."""
    async def create(self, session: VoteSession) -> None: ...
    async def get_by_id(self, session_id: UUID) -> VoteSession: ...
    async def exists(self, session_id: UUID) -> bool: ...
    async def get_sessions_for_user(self, user_id: UUID) -> list[VoteSession]: ...
    async def update(self, session: VoteSession) -> None: ...
    async def delete(self, session_id: UUID) -> None: ...
    async def close(self, session_id: UUID) -> None: ...
    async def list_sessions(self, limit: int | None = None, offset: int = 0) -> list[VoteSession]: ...
    async def add_participant(self, session_id: UUID, user_id: UUID) -> None: ...
    async def remove_participant(self, session_id: UUID, user_id: UUID) -> None: ...
    async def get_participants(self, session_id: UUID) -> list[User]: ...
    async def is_participant(self, session_id: UUID, user_id: UUID) -> bool: ...


class QuestionRepository(Protocol):
    """Contract for question persistence, ordered by order_num within a session."""
    async def create(self, question: Question) -> QuestionId: ...
    async def get_by_id(self, question_id: int) -> Question: ...
    async def list_by_session(self, session_id: UUID) -> list[Question]: ...
    async def update(self, question: Question) -> None: ...
    async def delete(self, question_id: int) -> None: ...


class ChoiceRepository(Protocol):
    """Contract for choice persistence, ordered by order_num within a question."""
    async def create(self, choice: Choice) -> ChoiceId: ...
    async def get_by_id(self, choice_id: int) -> Choice: ...
    async def list_by_question(self, question_id: int) -> list[Choice]: ...
    async def update(self, choice: Choice) -> None: ...
    async def delete(self, choice_id: int) -> None: ...


class SessionChecker(Protocol):
    """Cross-aggregate capability: does a vote session exist?

    Satisfied in-process by InProcessSessionChecker; a remote implementation
    only has to provide the same coroutine.
    """
    async def exists(self, session_id: UUID) -> bool: ...
