"""
Catalog API — Persistence Handle
==================================

What:  Async SQLAlchemy engine wrapper that executes parameterized SQL and
       returns plain dict rows, plus the declarative bases for both schemas.
How:   `Database` owns one AsyncEngine (and therefore one connection pool).
       Every fetch checks out its own pooled connection, so independent
       fetches issued by the relation aggregator can run concurrently.
Who:   Created by the application factory (one per server), read by
       repositories through the `get_database` FastAPI dependency.
When:  Engine is created with the app; connections are opened per statement.

Parameter style:
    Statements use SQLAlchemy named binds (`:p1`, `:limit`), so the same SQL
    text runs on aiosqlite and asyncpg. Only the query builder produces
    placeholders; no caller interpolates values into SQL text.

Failure contract:
    Any SQLAlchemyError or OSError raised while connecting or executing, and
    an OverflowError from a driver that cannot bind an oversized integer, is
    wrapped in DatabaseError with the original text in `details`. No retries.
"""

import logging
from typing import Any, Dict, List, Mapping, Optional, Type

from fastapi import Request
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncEngine, create_async_engine
from sqlalchemy.orm import DeclarativeBase

from catalog_api.exceptions import DatabaseError

logger = logging.getLogger(__name__)

Row = Dict[str, Any]


# ── Declarative Bases ─────────────────────────────────────────────────────
# Two separate bases so each database only receives its own tables.
class LoreBase(DeclarativeBase):
    """Base class for the Star Wars lore tables (episodes, characters, appearances)."""
    pass


class CatalogBase(DeclarativeBase):
    """Base class for the e-commerce catalog tables."""
    pass


class Database:
    """
    Single shared persistence handle for one server.

    The handle is effectively read-only from the request path: it executes
    SELECT statements only. There is no locking; the pool hands each
    concurrent caller its own connection.

    Attributes:
        url:     The async SQLAlchemy URL this handle connects to
        engine:  The AsyncEngine managing the connection pool
    """

    def __init__(self, url: str, *, echo: bool = False, pool_pre_ping: bool = True):
        self.url = url
        self.engine: AsyncEngine = create_async_engine(
            url,
            pool_pre_ping=pool_pre_ping,
            pool_recycle=3600,  # Recycle after 1 hour to prevent stale connections
            echo=echo,
        )

    async def fetch_all(self, sql: str, params: Optional[Mapping[str, Any]] = None) -> List[Row]:
        """Runs a query and returns every row as a dict (empty list on no match)."""
        try:
            async with self.engine.connect() as conn:
                result = await conn.execute(text(sql), dict(params or {}))
                return [dict(row) for row in result.mappings().all()]
        except (SQLAlchemyError, OSError, OverflowError) as exc:
            raise self._wrap(exc, sql) from exc

    async def fetch_one(self, sql: str, params: Optional[Mapping[str, Any]] = None) -> Optional[Row]:
        """Runs a query and returns the first row as a dict, or None."""
        try:
            async with self.engine.connect() as conn:
                result = await conn.execute(text(sql), dict(params or {}))
                row = result.mappings().first()
                return dict(row) if row is not None else None
        except (SQLAlchemyError, OSError, OverflowError) as exc:
            raise self._wrap(exc, sql) from exc

    async def fetch_value(self, sql: str, params: Optional[Mapping[str, Any]] = None) -> Any:
        """Runs a query and returns the first column of the first row (COUNT, AVG, ...)."""
        try:
            async with self.engine.connect() as conn:
                result = await conn.execute(text(sql), dict(params or {}))
                return result.scalar()
        except (SQLAlchemyError, OSError, OverflowError) as exc:
            raise self._wrap(exc, sql) from exc

    async def dispose(self) -> None:
        """Closes all pooled connections. Called from the lifespan shutdown."""
        await self.engine.dispose()

    @staticmethod
    def _wrap(exc: Exception, sql: str) -> DatabaseError:
        # SQLAlchemy prefixes DBAPI errors with "(sqlite3.OperationalError) ..." and
        # appends the statement; `orig` holds the driver message alone.
        original = getattr(exc, "orig", None) or exc
        logger.error("Query failed: %s", original, extra={"sql": " ".join(sql.split())})
        return DatabaseError(
            details=str(original),
            context={"error_type": type(exc).__name__},
        )


async def create_schema(database: Database, base: Type[DeclarativeBase]) -> None:
    """
    Creates every table registered on `base` that does not exist yet.

    Used by the init script and the test suite; the servers never call it.
    """
    async with database.engine.begin() as conn:
        await conn.run_sync(base.metadata.create_all)


# ── Dependency ────────────────────────────────────────────────────────────
def get_database(request: Request) -> Database:
    """
    FastAPI dependency returning the persistence handle of the serving app.

    Example usage in a route:
        @router.get("/episodes")
        async def list_episodes(db: Database = Depends(get_database)):
            ...
    """
    return request.app.state.database
