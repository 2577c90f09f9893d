"""Choice rows — ordered answer options of a question.

Invariants:
    - (question_id, order_num) is UNIQUE
    - question_id references question.id ON DELETE CASCADE
"""

from sqlalchemy import Integer, Text, ForeignKey, UniqueConstraint
from sqlalchemy import text as sql_text
from sqlalchemy.orm import Mapped, mapped_column

from voting.db.base import Base


class ChoiceRow(Base):
    """Row of the `choice` table."""
    __tablename__ = "choice"
    __table_args__ = (
        UniqueConstraint("question_id", "order_num", name="uq_choice_question_order"),
        {"sqlite_autoincrement": True},
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    question_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("question.id", ondelete="CASCADE"),
        nullable=False, index=True,
    )
    text: Mapped[str] = mapped_column(Text, nullable=False)
    order_num: Mapped[int] = mapped_column(Integer, nullable=False)
    created_at: Mapped[str] = mapped_column(
        Text, nullable=False, server_default=sql_text("CURRENT_TIMESTAMP"),
    )
