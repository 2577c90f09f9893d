"""User rows — flat storage shape of the User aggregate and its password hash.

Invariants:
    - id is the canonical UUID text; email is UNIQUE (store-enforced)
    - created_at is canonical timestamp text written by the adapter
    - user_password.user_id references user.id ON DELETE CASCADE

Design Decisions:
    - No relationship(): cascades are referential actions in the store,
      the adapter never walks an object graph
"""

from sqlalchemy import Text, ForeignKey
from sqlalchemy.orm import Mapped, mapped_column

from voting.db.base import Base


class UserRow(Base):
    """Row of the `user` table."""
    __tablename__ = "user"

    id: Mapped[str] = mapped_column(Text, primary_key=True)
    name: Mapped[str] = mapped_column(Text, nullable=False)
    email: Mapped[str] = mapped_column(Text, nullable=False, unique=True)
    created_at: Mapped[str] = mapped_column(Text, nullable=False)


class UserPasswordRow(Base):
    """Row of the `user_password` table (one per user)."""
    __tablename__ = "user_password"

    user_id: Mapped[str] = mapped_column(
        Text, ForeignKey("user.id", ondelete="CASCADE"), primary_key=True,
    )
    password_hash: Mapped[str] = mapped_column(Text, nullable=False)
    created_at: Mapped[str] = mapped_column(Text, nullable=False)
    updated_at: Mapped[str] = mapped_column(Text, nullable=False)
