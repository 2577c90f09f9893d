"""Question rows — ordered questions of a vote session.

Invariants:
    - id is INTEGER AUTOINCREMENT, assigned by the store
    - (session_id, order_num) is UNIQUE
    - allow_multiple is stored as INTEGER 0/1
    - created_at defaults to CURRENT_TIMESTAMP ("YYYY-MM-DD HH:MM:SS")
    - session_id references vote_session.id ON DELETE CASCADE
"""

from sqlalchemy import Integer, Text, ForeignKey, UniqueConstraint
from sqlalchemy import text as sql_text
from sqlalchemy.orm import Mapped, mapped_column

from voting.db.base import Base


class QuestionRow(Base):
    """Row of the `question` table."""
    __tablename__ = "question"
    __table_args__ = (
        UniqueConstraint("session_id", "order_num", name="uq_question_session_order"),
        {"sqlite_autoincrement": True},
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    session_id: Mapped[str] = mapped_column(
        Text, ForeignKey("vote_session.id", ondelete="CASCADE"),
        nullable=False, index=True,
    )
    text: Mapped[str] = mapped_column(Text, nullable=False)
    order_num: Mapped[int] = mapped_column(Integer, nullable=False)
    allow_multiple: Mapped[int] = mapped_column(
        Integer, nullable=False, server_default=sql_text("0"),
    )
    max_choices: Mapped[int] = mapped_column(
        Integer, nullable=False, server_default=sql_text("1"),
    )
    created_at: Mapped[str] = mapped_column(
        Text, nullable=False, server_default=sql_text("CURRENT_TIMESTAMP"),
    )
