"""Repositories — relational adapters implementing the core persistence protocols.

Invariants:
    - Exactly one SQL adapter per protocol in core/repository_protocols.py
    - All values travel as bound parameters; no SQL text is built from input
    - Rows are read into models/ DTOs, then rehydrated into core entities
    - Cascades are left to the store: each delete touches only the root row
"""

from voting.repositories.user_repository import SqlUserRepository  # noqa: F401
from voting.repositories.vote_session_repository import SqlVoteSessionRepository  # noqa: F401
from voting.repositories.question_repository import SqlQuestionRepository  # noqa: F401
from voting.repositories.choice_repository import SqlChoiceRepository  # noqa: F401
from voting.repositories.session_checker import InProcessSessionChecker  # noqa: F401
