"""Database Sessions — engine, per-request AsyncSession, readiness ping.

Invariants:
    - A session that raises is rolled back before it is closed
    - pool_pre_ping on every engine; pool sizing only for server databases
    - SQLAlchemy exceptions escaping a session block are mapped to DatabaseError
      (core/errors.py) whose message is the driver's text, unchanged

Design Decisions:
    - Singleton db_manager initialized on startup by the FastAPI lifespan
    - expire_on_commit=False: ORM objects stay readable after commit in async code
"""

import logging
from contextlib import asynccontextmanager
from typing import AsyncGenerator

from sqlalchemy.ext.asyncio import (
    AsyncSession, create_async_engine, async_sessionmaker,
)
from sqlalchemy.exc import (
    IntegrityError, OperationalError, DBAPIError, SQLAlchemyError,
)
from sqlalchemy import text

from employee_api.core.errors import DatabaseError

logger = logging.getLogger(__name__)

# Checked in order; IntegrityError and OperationalError are DBAPIError subclasses
_OPERATION_BY_ERROR = (
    (IntegrityError, "commit"),
    (OperationalError, "execute"),
    (DBAPIError, "query"),
)


class DatabaseSessionManager:
    """Manages async database sessions with pooling, rollback, and health checks."""

    def __init__(
        self,
        database_url: str,
        pool_size: int = 20,
        max_overflow: int = 10,
        echo: bool = False,
    ):
        engine_kwargs: dict = {"echo": echo, "pool_pre_ping": True}
        if not database_url.startswith("sqlite"):
            engine_kwargs.update(
                pool_size=pool_size, max_overflow=max_overflow, pool_recycle=3600,
            )
        self.engine = create_async_engine(database_url, **engine_kwargs)
        self._session_factory = async_sessionmaker(
            self.engine,
            class_=AsyncSession,
            expire_on_commit=False,
        )

    @asynccontextmanager
    async def session(self) -> AsyncGenerator[AsyncSession, None]:
        """Yield a session. SQLAlchemy failures roll back and surface as DatabaseError."""
        session = self._session_factory()
        try:
            yield session
        except SQLAlchemyError as e:
            await session.rollback()
            operation = _failed_operation(e)
            logger.error(
                f"Database {operation} failed: {e}", extra={"operation": operation},
            )
            raise DatabaseError(str(getattr(e, "orig", None) or e), operation) from e
        finally:
            await session.close()

    async def health_check(self) -> bool:
        """SELECT 1 through a fresh session; False on any failure."""
        try:
            async with self.session() as db:
                await db.execute(text("SELECT 1"))
            return True
        except Exception as e:
            logger.error(f"Readiness check could not reach the database: {e}")
            return False

    async def dispose(self) -> None:
        await self.engine.dispose()


def _failed_operation(exc: SQLAlchemyError) -> str:
    for exc_type, operation in _OPERATION_BY_ERROR:
        if isinstance(exc, exc_type):
            return operation
    return "operation"


# Set by init_db() from the FastAPI lifespan
db_manager: DatabaseSessionManager | None = None


def init_db(database_url: str, **kwargs) -> DatabaseSessionManager:
    global db_manager
    db_manager = DatabaseSessionManager(database_url, **kwargs)
    return db_manager


async def close_db() -> None:
    global db_manager
    if db_manager:
        await db_manager.dispose()
        db_manager = None


async def get_db() -> AsyncGenerator[AsyncSession, None]:
    """FastAPI dependency for database sessions."""
    if not db_manager:
        raise RuntimeError("Database not initialized")
    async with db_manager.session() as session:
        yield session
