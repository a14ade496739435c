"""
Catalog API — Repository Base
===============================

What:  Shared plumbing for the query facades: run SQL through the
       persistence handle and validate rows into response models.
How:   Subclasses own their SQL text and expose one method per query shape.

Contract for every facade method:
    - by-ID lookup with no matching row   → None (never an exception)
    - list query with no matching rows    → [] / an empty page
    - persistence failure                 → DatabaseError, unchanged
    - no input validation; route handlers validate before calling
"""

import logging
from typing import Any, List, Mapping, Optional, Type, TypeVar

from pydantic import BaseModel

from catalog_api.database import Database
from catalog_api.schemas.common import Page
from catalog_api.services.pagination import PagedQuery, paginate
from catalog_api.services.query_builder import PageRequest

logger = logging.getLogger(__name__)

M = TypeVar("M", bound=BaseModel)


class Repository:
    """Base class holding the persistence handle of one server."""

    def __init__(self, database: Database):
        self.db = database

    async def _one(
        self, model: Type[M], sql: str, params: Optional[Mapping[str, Any]] = None
    ) -> Optional[M]:
        row = await self.db.fetch_one(sql, params)
        return model.model_validate(row) if row is not None else None

    async def _all(
        self, model: Type[M], sql: str, params: Optional[Mapping[str, Any]] = None
    ) -> List[M]:
        rows = await self.db.fetch_all(sql, params)
        return [model.model_validate(row) for row in rows]

    async def _count(self, sql: str, params: Optional[Mapping[str, Any]] = None) -> int:
        return int(await self.db.fetch_value(sql, params) or 0)

    async def _page(self, model: Type[M], query: PagedQuery, page_request: PageRequest) -> Page[M]:
        rows, pagination = await paginate(self.db, query, page_request)
        logger.debug(
            "Page %d/%d of %s (%d rows, %d total)",
            pagination.page,
            pagination.total_pages,
            model.__name__,
            len(rows),
            pagination.total,
        )
        return Page[model](data=[model.model_validate(row) for row in rows], pagination=pagination)

    async def _exists(self, table: str, row_id: int) -> bool:
        # `table` always comes from repository code, never from a request
        return await self.db.fetch_value(
            f"SELECT 1 FROM {table} WHERE id = :id AND is_active = TRUE", {"id": row_id}
        ) is not None
