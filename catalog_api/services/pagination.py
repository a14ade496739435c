"""
Catalog API — Pagination Envelope
===================================

What:  Offset pagination for every paginated list: one COUNT query and one
       page query, plus the envelope computed from the count.
How:   PagedQuery renders both statements from the same FROM fragment and the
       same WhereClause object, so the count and the page can never disagree
       about which rows match. `paginate()` runs the two statements
       concurrently on separate pooled connections.

Consistency property (checked by the test suite):
    For total > 0, the last page holds exactly total - limit * (totalPages - 1)
    rows.

A page whose offset exceeds the largest SQL integer is answered with no rows
and the real total, without running the page query.
"""

import math
from dataclasses import dataclass
from typing import Any, Dict, List, Tuple

from catalog_api.database import Database, Row
from catalog_api.schemas.common import Pagination
from catalog_api.services.aggregator import gather_relations
from catalog_api.services.query_builder import MAX_SQL_INTEGER, PageRequest, WhereClause


def build_pagination(total: int, page_request: PageRequest) -> Pagination:
    """Computes the envelope for `total` matching rows."""
    total = max(int(total or 0), 0)
    total_pages = math.ceil(total / page_request.limit)
    return Pagination(
        page=page_request.page,
        limit=page_request.limit,
        total=total,
        total_pages=total_pages,
        has_next=page_request.page < total_pages,
        has_prev=page_request.page > 1,
    )


@dataclass(frozen=True)
class PagedQuery:
    """
    A SELECT split into the parts pagination needs.

    Attributes:
        columns:      select list, e.g. "p.*, b.name AS brand_name"
        from_clause:  tables and joins, e.g. "products p LEFT JOIN brands b ON ..."
        where:        output of FilterBuilder.build()
        order_by:     output of SortSpec.order_by() or a fixed ORDER BY
    """

    columns: str
    from_clause: str
    where: WhereClause
    order_by: str = ""

    def count_sql(self) -> str:
        return f"SELECT COUNT(*) FROM {self.from_clause} {self.where.sql}".strip()

    def page_sql(self) -> str:
        parts = [f"SELECT {self.columns} FROM {self.from_clause}", self.where.sql, self.order_by]
        return " ".join(part for part in parts if part) + " LIMIT :limit OFFSET :offset"

    def page_params(self, page_request: PageRequest) -> Dict[str, Any]:
        params = self.where.bind()
        params.update(limit=page_request.limit, offset=page_request.offset)
        return params


async def paginate(
    database: Database, query: PagedQuery, page_request: PageRequest
) -> Tuple[List[Row], Pagination]:
    """
    Fetches one page of rows and the envelope describing it.

    Raises:
        DatabaseError: either statement failed (the other is cancelled)
    """
    if page_request.offset > MAX_SQL_INTEGER:
        # No table can hold that many rows, so the page is empty; only count
        total = await database.fetch_value(query.count_sql(), query.where.bind())
        return [], build_pagination(total, page_request)

    results = await gather_relations(
        total=database.fetch_value(query.count_sql(), query.where.bind()),
        rows=database.fetch_all(query.page_sql(), query.page_params(page_request)),
    )
    return results["rows"], build_pagination(results["total"], page_request)
