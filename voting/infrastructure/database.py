"""Database Session Manager — async connection pool with rollback, deadlines and error mapping.

Invariants:
    - Every session auto-rolls-back on exception (no partial commits leak)
    - Every session runs under asyncio.timeout(statement_timeout) when one is set
    - SQLAlchemy exceptions are mapped once, here:
        IntegrityError -> ConstraintViolationError
        OperationalError / DBAPIError / SQLAlchemyError -> StoreError
        TimeoutError (deadline) -> StoreTimeoutError
    - asyncio.CancelledError is never caught: cancellation propagates to the caller
    - SQLite connections run with PRAGMA foreign_keys=ON so ON DELETE CASCADE applies

Design Decisions:
    - No module-level manager: the composition root (voting.main) owns the instance
      and passes it, together with a logger, to each repository
    - expire_on_commit=False: rows stay readable after commit in async context
    - In-memory SQLite uses StaticPool so every session sees the same database
"""

import asyncio
import logging
from contextlib import asynccontextmanager
from typing import AsyncGenerator

from sqlalchemy import event, text
from sqlalchemy.engine import make_url
from sqlalchemy.ext.asyncio import (
    AsyncEngine, AsyncSession, create_async_engine, async_sessionmaker,
)
from sqlalchemy.exc import (
    IntegrityError, OperationalError, DBAPIError, SQLAlchemyError,
)
from sqlalchemy.pool import StaticPool

from voting.core.errors import (
    ConstraintViolationError, ErrorContext, StoreError, StoreTimeoutError,
)
from voting.db.base import Base
import voting.models  # noqa: F401


def _is_memory_sqlite(database_url: str) -> bool:
    url = make_url(database_url)
    return url.get_backend_name() == "sqlite" and url.database in (None, "", ":memory:")


def create_engine(
    database_url: str,
    echo: bool = False,
    pool_size: int | None = None,
    max_overflow: int | None = None,
) -> AsyncEngine:
    """Create the async engine; SQLite connections get foreign keys enabled."""
    options: dict = {"echo": echo}
    if _is_memory_sqlite(database_url):
        options["poolclass"] = StaticPool
    else:
        options["pool_pre_ping"] = True
        options["pool_recycle"] = 3600
        if pool_size is not None:
            options["pool_size"] = pool_size
        if max_overflow is not None:
            options["max_overflow"] = max_overflow

    engine = create_async_engine(database_url, **options)

    if engine.dialect.name == "sqlite":
        @event.listens_for(engine.sync_engine, "connect")
        def _enable_foreign_keys(dbapi_connection, connection_record):
            cursor = dbapi_connection.cursor()
            cursor.execute("PRAGMA foreign_keys=ON")
            cursor.close()

    return engine


def constraint_rule(exc: IntegrityError) -> str:
    """Classify an integrity failure from the driver message."""
    message = str(exc.orig if exc.orig is not None else exc).lower()
    if "unique" in message or "duplicate" in message:
        return "unique"
    if "foreign key" in message:
        return "foreign_key"
    if "not null" in message:
        return "not_null"
    if "check" in message:
        return "check"
    return "unknown"


class DatabaseSessionManager:
    """Manages async database sessions with pooling, rollback, deadlines and health checks."""

    def __init__(
        self,
        database_url: str,
        pool_size: int | None = None,
        max_overflow: int | None = None,
        statement_timeout: float | None = None,
        echo: bool = False,
        logger: logging.Logger | None = None,
    ):
        self.engine = create_engine(
            database_url, echo=echo,
            pool_size=pool_size, max_overflow=max_overflow,
        )
        self.statement_timeout = statement_timeout
        self._logger = logger or logging.getLogger(__name__)
        self._session_factory = async_sessionmaker(
            self.engine,
            class_=AsyncSession,
            expire_on_commit=False,
        )

    @asynccontextmanager
    async def session(
        self, operation: str = "unknown", entity_id: object = None,
    ) -> AsyncGenerator[AsyncSession, None]:
        """Provide a session bound to one operation, with auto-rollback and error mapping."""
        session = self._session_factory()
        context = ErrorContext(
            operation=operation,
            entity_id=str(entity_id) if entity_id is not None else None,
        )
        try:
            async with asyncio.timeout(self.statement_timeout):
                yield session
        except IntegrityError as e:
            await session.rollback()
            rule = constraint_rule(e)
            self._log_failure("integrity error", operation, "CONSTRAINT_VIOLATION", e)
            raise ConstraintViolationError(
                str(e.orig), operation, rule, context,
            ) from e
        except TimeoutError as e:
            await session.rollback()
            self._log_failure("deadline exceeded", operation, "STORE_TIMEOUT", e)
            raise StoreTimeoutError(operation, self.statement_timeout, context) from e
        except OperationalError as e:
            await session.rollback()
            self._log_failure("operational error", operation, "STORE_ERROR", e)
            raise StoreError(
                "Connection or operational error", operation, context=context,
            ) from e
        except DBAPIError as e:
            await session.rollback()
            self._log_failure("driver error", operation, "STORE_ERROR", e)
            raise StoreError(
                "Database driver error", operation, context=context,
            ) from e
        except SQLAlchemyError as e:
            await session.rollback()
            self._log_failure("SQLAlchemy error", operation, "STORE_ERROR", e)
            raise StoreError(
                "Database operation failed", operation, context=context,
            ) from e
        finally:
            await session.close()

    def _log_failure(
        self, label: str, operation: str, error_code: str, exc: BaseException,
    ) -> None:
        self._logger.error(
            f"DB {label} during {operation}: {exc}",
            extra={"operation": operation, "error_code": error_code},
        )

    async def create_schema(self) -> None:
        """Create every table known to Base.metadata (tests and local tooling)."""
        async with self.engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)

    async def health_check(self) -> bool:
        """Check database connectivity (for readiness probes)."""
        try:
            async with self.session(operation="health_check") as db:
                await db.execute(text("SELECT 1"))
            return True
        except Exception as e:
            self._logger.error(f"DB health check failed: {e}")
            return False

    async def dispose(self) -> None:
        await self.engine.dispose()
