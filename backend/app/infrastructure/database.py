"""Preferences Store — async SQLAlchemy persistence for the user preferences column.

Invariants:
    - One engine per store, created at startup and disposed on shutdown (app lifespan)
    - save_preferences is a single parameterized UPDATE: preferences + updated_at, keyed by id
    - Every write runs in its own transaction; rolled back on exception
    - All SQLAlchemy exceptions mapped to DatabaseError (core/errors.py)

Design Decisions:
    - Core table() construct over ORM models: the users table belongs to the
      user-data service, this layer only touches two columns (ADR: schema not owned here)
    - Table name follows the dialect: PostgreSQL deployments use "users" (JSONB),
      MySQL deployments use "user" (JSON); overridable via settings
    - pool_pre_ping for stale connection detection, pool_recycle=3600 for MySQL wait_timeout
"""

import logging
from collections.abc import Mapping
from typing import Any

from sqlalchemy import JSON, DateTime, column, func, table, text
from sqlalchemy.dialects.postgresql import JSONB
from sqlalchemy.exc import (
    IntegrityError, OperationalError, DBAPIError, SQLAlchemyError,
)
from sqlalchemy.ext.asyncio import AsyncEngine, create_async_engine

from app.core.domain_types import UserId
from app.core.errors import DatabaseError

logger = logging.getLogger(__name__)

_TABLE_BY_DIALECT: dict[str, str] = {
    "postgresql": "users",
    "mysql": "user",
}
_DEFAULT_TABLE = "users"

_PREFERENCES_TYPE = JSON().with_variant(JSONB(), "postgresql")


def default_table_name(dialect_name: str) -> str:
    return _TABLE_BY_DIALECT.get(dialect_name, _DEFAULT_TABLE)


class SqlPreferencesStore:
    """Writes the merged preferences object back to the users table."""

    def __init__(self, engine: AsyncEngine, table_name: str | None = None):
        self.engine = engine
        self.table_name = table_name or default_table_name(engine.dialect.name)
        self._table = table(
            self.table_name,
            column("id"),
            column("preferences", _PREFERENCES_TYPE),
            column("updated_at", DateTime(timezone=True)),
        )

    @property
    def dialect(self) -> str:
        return self.engine.dialect.name

    async def save_preferences(
        self, user_id: UserId, preferences: Mapping[str, Any],
    ) -> None:
        """UPDATE preferences and updated_at for one user."""
        stmt = (
            self._table.update()
            .where(self._table.c.id == user_id)
            .values(preferences=dict(preferences), updated_at=func.now())
        )
        try:
            async with self.engine.begin() as conn:
                await conn.execute(stmt)
        except IntegrityError as e:
            logger.error(f"DB integrity error: {e}")
            raise DatabaseError("Integrity constraint violated", "commit")
        except OperationalError as e:
            logger.error(f"DB operational error: {e}")
            raise DatabaseError("Connection or operational error", "execute")
        except DBAPIError as e:
            logger.error(f"DB driver error: {e}")
            raise DatabaseError("Database driver error", "query")
        except SQLAlchemyError as e:
            logger.error(f"SQLAlchemy error: {e}")
            raise DatabaseError("Database operation failed", "unknown")

    async def health_check(self) -> bool:
        """Check database connectivity (for readiness probes)."""
        try:
            async with self.engine.connect() as conn:
                await conn.execute(text("SELECT 1"))
            return True
        except Exception as e:
            logger.error(f"DB health check failed: {e}")
            return False

    async def dispose(self) -> None:
        await self.engine.dispose()


def create_preferences_store(
    database_url: str | None,
    *,
    pool_size: int = 20,
    max_overflow: int = 10,
    table_name: str | None = None,
) -> SqlPreferencesStore | None:
    """Build a store from a URL. Returns None when no database is configured."""
    if not database_url:
        return None
    engine_kwargs: dict[str, Any] = {"pool_pre_ping": True, "pool_recycle": 3600}
    if not database_url.startswith("sqlite"):
        engine_kwargs.update(pool_size=pool_size, max_overflow=max_overflow)
    engine = create_async_engine(database_url, **engine_kwargs)
    store = SqlPreferencesStore(engine, table_name)
    logger.info(
        f"Preferences store ready ({store.dialect}, table={store.table_name})",
    )
    return store
