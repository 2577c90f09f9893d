"""Question Service — orchestrates question/choice use cases across aggregates.

Invariants:
    - A question is only created under a vote session that exists
      (asked through SessionChecker, never by reading session rows directly)
    - Entity validation runs before any store round-trip
    - Store errors pass through unchanged (NotFound / ConstraintViolation stay distinguishable)

Design Decisions:
    - Depends on Protocols only: any adapter (SQL, in-memory fake) can be injected
    - update_* reload the entity, apply mutators, then persist, so partial input
      leaves untouched fields as stored
"""

import logging
from uuid import UUID

from voting.core.choice import Choice
from voting.core.domain_types import ChoiceId, QuestionId
from voting.core.errors import NotFoundError
from voting.core.question import Question
from voting.core.repository_protocols import (
    ChoiceRepository, QuestionRepository, SessionChecker,
)


class QuestionService:
    """Use cases for questions and their choices."""

    def __init__(
        self,
        questions: QuestionRepository,
        choices: ChoiceRepository,
        sessions: SessionChecker,
        logger: logging.Logger | None = None,
    ):
        self._questions = questions
        self._choices = choices
        self._sessions = sessions
        self._logger = logger or logging.getLogger(__name__)

    # ─── Questions ───────────────────────────────────────────────

    async def create_question(
        self,
        session_id: UUID,
        text: str,
        order_num: int,
        max_choices: int = 1,
        allow_multiple: bool = False,
    ) -> Question:
        """Validate, check the parent session, persist. Returns the stored question."""
        question = Question.create(
            session_id, text, order_num,
            max_choices=max_choices, allow_multiple=allow_multiple,
        )
        if not await self._sessions.exists(session_id):
            raise NotFoundError("VoteSession", session_id)

        question_id = await self._questions.create(question)
        self._logger.info(
            f"Created question {question_id} in session {session_id}",
            extra={"operation": "create_question", "entity": "question",
                   "entity_id": str(question_id)},
        )
        return await self._questions.get_by_id(question_id)

    async def get_question(self, question_id: QuestionId) -> Question:
        return await self._questions.get_by_id(question_id)

    async def list_questions(self, session_id: UUID) -> list[Question]:
        return await self._questions.list_by_session(session_id)

    async def update_question(
        self,
        question_id: QuestionId,
        text: str | None = None,
        order_num: int | None = None,
        max_choices: int | None = None,
        allow_multiple: bool | None = None,
    ) -> Question:
        question = await self._questions.get_by_id(question_id)
        if text is not None:
            question.update_text(text)
        if order_num is not None:
            question.change_order_num(order_num)
        if max_choices is not None:
            question.change_max_choices(max_choices)
        if allow_multiple is not None and allow_multiple != question.allow_multiple:
            question.toggle_allow_multiple()
        await self._questions.update(question)
        return question

    async def delete_question(self, question_id: QuestionId) -> None:
        await self._questions.delete(question_id)
        self._logger.info(
            f"Deleted question {question_id}",
            extra={"operation": "delete_question", "entity": "question",
                   "entity_id": str(question_id)},
        )

    # ─── Choices ─────────────────────────────────────────────────

    async def create_choice(
        self, question_id: QuestionId, text: str, order_num: int,
    ) -> Choice:
        choice = Choice.create(question_id, text, order_num)
        choice_id = await self._choices.create(choice)
        return await self._choices.get_by_id(choice_id)

    async def get_choice(self, choice_id: ChoiceId) -> Choice:
        return await self._choices.get_by_id(choice_id)

    async def list_choices(self, question_id: QuestionId) -> list[Choice]:
        return await self._choices.list_by_question(question_id)

    async def update_choice(
        self,
        choice_id: ChoiceId,
        text: str | None = None,
        order_num: int | None = None,
    ) -> Choice:
        choice = await self._choices.get_by_id(choice_id)
        if text is not None:
            choice.update_text(text)
        if order_num is not None:
            choice.change_order_num(order_num)
        await self._choices.update(choice)
        return choice

    async def delete_choice(self, choice_id: ChoiceId) -> None:
        await self._choices.delete(choice_id)
