"""SQLAlchemy Declarative Base — shared base class for all row models.

Invariants:
    - All row models inherit from Base
    - Base.metadata is the single source of truth for the table set
"""

from sqlalchemy.orm import DeclarativeBase


class Base(DeclarativeBase):
    """Base class for all voting row models."""
    pass
