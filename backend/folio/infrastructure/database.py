"""Database Session Manager — async connection pool with automatic rollback and health checks.

Invariants:
    - Every session auto-rolls-back on exception (no partial commits leak)
    - Connection pool uses pool_pre_ping for stale connection detection
    - All SQLAlchemy exceptions mapped to StoreError (core/errors.py), tagged with
      the entity the session was opened for
    - Each session() call is independent: concurrent fan-out fetches never share one

Design Decisions:
    - Owned by the Services container built in the FastAPI lifespan, not a module global
    - expire_on_commit=False: prevents lazy-load issues in async context
    - from_engine(): tests wrap an in-memory SQLite engine without pool arguments
"""

import logging
from contextlib import asynccontextmanager
from typing import AsyncGenerator

from sqlalchemy.ext.asyncio import (
    AsyncEngine, AsyncSession, create_async_engine, async_sessionmaker,
)
from sqlalchemy.exc import (
    IntegrityError, OperationalError, DBAPIError, SQLAlchemyError,
)
from sqlalchemy import text

from folio.core.errors import StoreError, ErrorContext

logger = logging.getLogger(__name__)


class DatabaseSessionManager:
    """Manages async database sessions with pooling, rollback, and health checks."""

    def __init__(
        self, database_url: str, pool_size: int = 20, max_overflow: int = 10,
    ):
        self.engine = create_async_engine(
            database_url,
            pool_size=pool_size,
            max_overflow=max_overflow,
            pool_pre_ping=True,
            pool_recycle=3600,
        )
        self._session_factory = async_sessionmaker(
            self.engine,
            class_=AsyncSession,
            expire_on_commit=False,
        )

    @classmethod
    def from_engine(cls, engine: AsyncEngine) -> "DatabaseSessionManager":
        manager = cls.__new__(cls)
        manager.engine = engine
        manager._session_factory = async_sessionmaker(
            engine, class_=AsyncSession, expire_on_commit=False,
        )
        return manager

    @asynccontextmanager
    async def session(
        self, entity_type: str | None = None, entity_id: str | None = None,
    ) -> AsyncGenerator[AsyncSession, None]:
        """Provide session with auto-rollback on exception.

        entity_type and entity_id, when given, are carried into any StoreError context.
        """
        session = self._session_factory()
        try:
            yield session
        except IntegrityError as e:
            await session.rollback()
            logger.error(f"DB integrity error: {e}")
            raise StoreError(
                "Integrity constraint violated", "commit",
                _cause(e, entity_type, entity_id),
            ) from e
        except OperationalError as e:
            await session.rollback()
            logger.error(f"DB operational error: {e}")
            raise StoreError(
                "Connection or operational error", "execute",
                _cause(e, entity_type, entity_id),
            ) from e
        except DBAPIError as e:
            await session.rollback()
            logger.error(f"DB driver error: {e}")
            raise StoreError(
                "Database driver error", "query", _cause(e, entity_type, entity_id),
            ) from e
        except SQLAlchemyError as e:
            await session.rollback()
            logger.error(f"SQLAlchemy error: {e}")
            raise StoreError(
                "Database operation failed", "unknown", _cause(e, entity_type, entity_id),
            ) from e
        finally:
            await session.close()

    async def health_check(self) -> bool:
        """Check database connectivity (for readiness probes)."""
        try:
            async with self.session() as db:
                await db.execute(text("SELECT 1"))
            return True
        except Exception as e:
            logger.error(f"DB health check failed: {e}")
            return False

    async def dispose(self) -> None:
        await self.engine.dispose()


def _cause(
    exc: Exception, entity_type: str | None, entity_id: str | None,
) -> ErrorContext:
    return ErrorContext(
        entity_type=entity_type,
        entity_id=entity_id,
        debug_info={"cause": str(exc)},
    )
