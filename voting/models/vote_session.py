"""VoteSession rows — vote_session and the session_and_participant association.

Invariants:
    - ends_at is NULL when the session has no defined end
    - Participant rows cascade with both the session and the user
    - (user_id, session_id) is the participant primary key: presence = membership
"""

from sqlalchemy import Text, ForeignKey
from sqlalchemy.orm import Mapped, mapped_column

from voting.db.base import Base


class VoteSessionRow(Base):
    """Row of the `vote_session` table."""
    __tablename__ = "vote_session"

    id: Mapped[str] = mapped_column(Text, primary_key=True)
    title: Mapped[str] = mapped_column(Text, nullable=False)
    description: Mapped[str] = mapped_column(
        Text, nullable=False, default="", server_default="",
    )
    created_at: Mapped[str] = mapped_column(Text, nullable=False)
    ends_at: Mapped[str | None] = mapped_column(Text, nullable=True)


class ParticipantRow(Base):
    """Row of the `session_and_participant` association table."""
    __tablename__ = "session_and_participant"

    user_id: Mapped[str] = mapped_column(
        Text, ForeignKey("user.id", ondelete="CASCADE"), primary_key=True,
    )
    session_id: Mapped[str] = mapped_column(
        Text, ForeignKey("vote_session.id", ondelete="CASCADE"),
        primary_key=True, index=True,
    )
    invited_at: Mapped[str] = mapped_column(Text, nullable=False)
