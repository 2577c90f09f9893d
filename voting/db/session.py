"""Async Session Factory — provides async DB sessions outside the repositories.

Invariants:
    - Uses the same engine options as DatabaseSessionManager (foreign keys on)
    - Meant for scripts, migrations, and test fixtures
"""

from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from voting.infrastructure.database import create_engine


def create_session_factory(
    database_url: str,
) -> async_sessionmaker[AsyncSession]:
    """Create an async session factory for the given database URL."""
    engine = create_engine(database_url)
    return async_sessionmaker(
        engine, class_=AsyncSession, expire_on_commit=False,
    )
