"""Initial schema — users, passwords, vote sessions, participants, questions, choices.

Revision ID: 001_initial
Revises: None
Create Date: 2026-10-17

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa

revision: str = "001_initial"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.create_table(
        "user",
        sa.Column("id", sa.Text, primary_key=True),
        sa.Column("name", sa.Text, nullable=False),
        sa.Column("email", sa.Text, nullable=False, unique=True),
        sa.Column("created_at", sa.Text, nullable=False),
    )

    op.create_table(
        "user_password",
        sa.Column(
            "user_id", sa.Text,
            sa.ForeignKey("user.id", ondelete="CASCADE"), primary_key=True,
        ),
        sa.Column("password_hash", sa.Text, nullable=False),
        sa.Column("created_at", sa.Text, nullable=False),
        sa.Column("updated_at", sa.Text, nullable=False),
    )

    op.create_table(
        "vote_session",
        sa.Column("id", sa.Text, primary_key=True),
        sa.Column("title", sa.Text, nullable=False),
        sa.Column("description", sa.Text, nullable=False, server_default=""),
        sa.Column("created_at", sa.Text, nullable=False),
        sa.Column("ends_at", sa.Text, nullable=True),
    )

    op.create_table(
        "session_and_participant",
        sa.Column(
            "user_id", sa.Text,
            sa.ForeignKey("user.id", ondelete="CASCADE"), primary_key=True,
        ),
        sa.Column(
            "session_id", sa.Text,
            sa.ForeignKey("vote_session.id", ondelete="CASCADE"), primary_key=True,
        ),
        sa.Column("invited_at", sa.Text, nullable=False),
    )

    op.create_table(
        "question",
        sa.Column("id", sa.Integer, primary_key=True, autoincrement=True),
        sa.Column(
            "session_id", sa.Text,
            sa.ForeignKey("vote_session.id", ondelete="CASCADE"), nullable=False,
        ),
        sa.Column("text", sa.Text, nullable=False),
        sa.Column("order_num", sa.Integer, nullable=False),
        sa.Column("allow_multiple", sa.Integer, nullable=False, server_default="0"),
        sa.Column("max_choices", sa.Integer, nullable=False, server_default="1"),
        sa.Column(
            "created_at", sa.Text, nullable=False,
            server_default=sa.text("CURRENT_TIMESTAMP"),
        ),
        sa.UniqueConstraint("session_id", "order_num", name="uq_question_session_order"),
        sqlite_autoincrement=True,
    )

    op.create_table(
        "choice",
        sa.Column("id", sa.Integer, primary_key=True, autoincrement=True),
        sa.Column(
            "question_id", sa.Integer,
            sa.ForeignKey("question.id", ondelete="CASCADE"), nullable=False,
        ),
        sa.Column("text", sa.Text, nullable=False),
        sa.Column("order_num", sa.Integer, nullable=False),
        sa.Column(
            "created_at", sa.Text, nullable=False,
            server_default=sa.text("CURRENT_TIMESTAMP"),
        ),
        sa.UniqueConstraint("question_id", "order_num", name="uq_choice_question_order"),
        sqlite_autoincrement=True,
    )

    op.create_index("ix_question_session_id", "question", ["session_id"])
    op.create_index("ix_choice_question_id", "choice", ["question_id"])
    op.create_index(
        "ix_session_and_participant_session_id",
        "session_and_participant", ["session_id"],
    )


def downgrade() -> None:
    op.drop_index("ix_session_and_participant_session_id", "session_and_participant")
    op.drop_index("ix_choice_question_id", "choice")
    op.drop_index("ix_question_session_id", "question")
    op.drop_table("choice")
    op.drop_table("question")
    op.drop_table("session_and_participant")
    op.drop_table("vote_session")
    op.drop_table("user_password")
    op.drop_table("user")
