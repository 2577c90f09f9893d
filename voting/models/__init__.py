"""Row Models — SQLAlchemy declarative rows, the flat DTO shape of each aggregate.

Invariants:
    - All rows inherit from Base (db/base.py)
    - Rows hold storage encodings only: UUID text, timestamp text, 0/1 integers
    - Domain entities never see a row; repositories translate in both directions

Design Decisions:
    - One file per aggregate for locality
    - All rows imported here so Base.metadata is complete before create_all
"""

from voting.models.user import UserRow, UserPasswordRow  # noqa: F401
from voting.models.vote_session import VoteSessionRow, ParticipantRow  # noqa: F401
from voting.models.question import QuestionRow  # noqa: F401
from voting.models.choice import ChoiceRow  # noqa: F401
