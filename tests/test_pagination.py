"""
Catalog API — Pagination Tests
================================

What:  Tests for the pagination envelope, PagedQuery SQL rendering and
       paginate() against a mocked persistence handle.

What we test:
    ✅ totalPages / hasNext / hasPrev arithmetic, including zero rows
    ✅ Count and page statements share the same WHERE text and binds
    ✅ The envelope serializes with camelCase keys
    ✅ A failing statement propagates DatabaseError
    ✅ Offsets past the SQL integer range give an empty page without a page query
"""

import pytest

from catalog_api.exceptions import DatabaseError
from catalog_api.services.pagination import PagedQuery, build_pagination, paginate
from catalog_api.services.query_builder import MAX_SQL_INTEGER, FilterBuilder, PageRequest, WhereClause


class TestBuildPagination:

    def test_zero_total(self):
        pagination = build_pagination(0, PageRequest(page=1, limit=10))
        assert pagination.total_pages == 0
        assert pagination.has_next is False
        assert pagination.has_prev is False

    def test_first_of_several_pages(self):
        pagination = build_pagination(25, PageRequest(page=1, limit=10))
        assert pagination.total_pages == 3
        assert pagination.has_next is True
        assert pagination.has_prev is False

    def test_last_page(self):
        pagination = build_pagination(25, PageRequest(page=3, limit=10))
        assert pagination.has_next is False
        assert pagination.has_prev is True

    def test_page_past_the_end(self):
        pagination = build_pagination(25, PageRequest(page=9, limit=10))
        assert pagination.total_pages == 3
        assert pagination.has_next is False
        assert pagination.has_prev is True

    def test_exact_multiple(self):
        assert build_pagination(20, PageRequest(page=2, limit=10)).total_pages == 2

    def test_wire_keys_are_camel_case(self):
        body = build_pagination(5, PageRequest(page=1, limit=2)).model_dump(by_alias=True)
        assert body == {
            "page": 1,
            "limit": 2,
            "total": 5,
            "totalPages": 3,
            "hasNext": True,
            "hasPrev": False,
        }


class TestPagedQuery:

    def setup_method(self):
        self.query = PagedQuery(
            columns="p.id, p.name",
            from_clause="products p",
            where=WhereClause(sql="WHERE p.brand_id = :p1", params=[3]),
            order_by="ORDER BY p.id",
        )

    def test_count_sql(self):
        assert self.query.count_sql() == "SELECT COUNT(*) FROM products p WHERE p.brand_id = :p1"

    def test_page_sql(self):
        assert self.query.page_sql() == (
            "SELECT p.id, p.name FROM products p WHERE p.brand_id = :p1 "
            "ORDER BY p.id LIMIT :limit OFFSET :offset"
        )

    def test_page_params(self):
        assert self.query.page_params(PageRequest(page=2, limit=5)) == {
            "p1": 3,
            "limit": 5,
            "offset": 5,
        }

    def test_without_where(self):
        query = PagedQuery(columns="u.id", from_clause="users u", where=FilterBuilder().build())
        assert query.count_sql() == "SELECT COUNT(*) FROM users u"
        assert query.page_sql() == "SELECT u.id FROM users u LIMIT :limit OFFSET :offset"


class TestPaginate:

    @pytest.mark.asyncio
    async def test_returns_rows_and_envelope(self, mock_database):
        mock_database.fetch_value.return_value = 12
        mock_database.fetch_all.return_value = [{"id": 11}, {"id": 12}]
        query = PagedQuery(
            columns="id",
            from_clause="users",
            where=WhereClause(sql="WHERE id > :p1", params=[0]),
        )

        rows, pagination = await paginate(mock_database, query, PageRequest(page=2, limit=10))

        assert rows == [{"id": 11}, {"id": 12}]
        assert pagination.total == 12
        assert pagination.total_pages == 2
        assert pagination.has_prev is True
        mock_database.fetch_value.assert_awaited_once_with(query.count_sql(), {"p1": 0})
        mock_database.fetch_all.assert_awaited_once_with(
            query.page_sql(), {"p1": 0, "limit": 10, "offset": 10}
        )

    @pytest.mark.asyncio
    async def test_count_failure_propagates(self, mock_database):
        mock_database.fetch_value.side_effect = DatabaseError(details="no such table: users")
        query = PagedQuery(columns="id", from_clause="users", where=WhereClause())

        with pytest.raises(DatabaseError) as exc_info:
            await paginate(mock_database, query, PageRequest())
        assert exc_info.value.details == "no such table: users"

    @pytest.mark.asyncio
    async def test_offset_beyond_integer_range_skips_page_query(self, mock_database):
        mock_database.fetch_value.return_value = 12
        query = PagedQuery(columns="id", from_clause="users", where=WhereClause())
        page_request = PageRequest(page=MAX_SQL_INTEGER, limit=10)

        rows, pagination = await paginate(mock_database, query, page_request)

        assert rows == []
        assert pagination.total == 12
        assert pagination.has_next is False
        mock_database.fetch_all.assert_not_awaited()
