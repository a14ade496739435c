"""
Catalog API — Filter / Sort / Page Composer Unit Tests
========================================================

What:  Tests for FilterBuilder, SortSpec, PageRequest and escape_like.
How:   Pure string and list assertions; no database involved.

What we test:
    ✅ Unset filters add nothing; set filters add one predicate and one bind each
    ✅ Placeholders are numbered in the order their values were appended
    ✅ Contains-match escapes LIKE wildcards and lowercases the term
    ✅ Sort fields and directions outside the allow-list are rejected
"""

import re

import pytest

from catalog_api.exceptions import ValidationError
from catalog_api.services.query_builder import (
    FilterBuilder,
    PageRequest,
    SortSpec,
    WhereClause,
    escape_like,
)

PLACEHOLDER = re.compile(r":p(\d+)")


def placeholder_numbers(sql: str):
    return [int(n) for n in PLACEHOLDER.findall(sql)]


class TestFilterBuilder:
    """WHERE fragment composition."""

    def test_price_range_example(self):
        where = (
            FilterBuilder("p.is_active = TRUE")
            .at_least("p.price", 10)
            .at_most("p.price", 50)
            .equals("p.brand_id", None)
            .build()
        )
        assert where.sql == "WHERE p.is_active = TRUE AND p.price >= :p1 AND p.price <= :p2"
        assert where.params == [10, 50]
        assert where.bind() == {"p1": 10, "p2": 50}

    def test_no_predicates_renders_empty_clause(self):
        where = FilterBuilder().equals("a", None).flag("b", None).contains(["c"], None).build()
        assert where == WhereClause()
        assert where.sql == ""
        assert where.bind() == {}

    def test_base_predicate_only(self):
        where = FilterBuilder("c.is_active = TRUE").build()
        assert where.sql == "WHERE c.is_active = TRUE"
        assert where.params == []

    def test_placeholder_order_matches_param_order(self):
        where = (
            FilterBuilder("p.is_active = TRUE")
            .raw("EXISTS (SELECT 1 FROM pc WHERE pc.category_id = {})", 7)
            .equals("p.brand_id", 2)
            .at_least("p.price", 10.0)
            .in_stock("p.stock_quantity", True)
            .flag("p.is_featured", False)
            .contains(["p.name", "p.sku"], "Lamp")
            .build()
        )
        numbers = placeholder_numbers(where.sql)
        assert numbers == list(range(1, len(where.params) + 1))
        assert where.params == [7, 2, 10.0, 0, False, "%lamp%", "%lamp%"]

    def test_contains_groups_columns_with_or(self):
        where = FilterBuilder().contains(["c.name", "c.species"], "  Sky ").build()
        assert where.sql == (
            "WHERE (LOWER(c.name) LIKE :p1 ESCAPE '\\' OR LOWER(c.species) LIKE :p2 ESCAPE '\\')"
        )
        assert where.params == ["%sky%", "%sky%"]

    def test_contains_single_column_has_no_parentheses(self):
        where = FilterBuilder().contains(["c.affiliation"], "rebel").build()
        assert where.sql == "WHERE LOWER(c.affiliation) LIKE :p1 ESCAPE '\\'"

    def test_contains_blank_term_adds_nothing(self):
        where = FilterBuilder("x = 1").contains(["c.name"], "   ").build()
        assert where.sql == "WHERE x = 1"

    def test_contains_escapes_wildcards(self):
        where = FilterBuilder().contains(["p.name"], "50%_off").build()
        assert where.params == ["%50\\%\\_off%"]

    def test_in_stock_false_selects_sold_out(self):
        where = FilterBuilder().in_stock("p.stock_quantity", False).build()
        assert where.sql == "WHERE p.stock_quantity <= :p1"
        assert where.params == [0]

    def test_flag_binds_real_bool(self):
        where = FilterBuilder().flag("p.is_featured", 1).build()
        assert where.params == [True]
        assert isinstance(where.params[0], bool)

    def test_raw_skips_when_value_missing(self):
        where = FilterBuilder().raw("a = {}", None).build()
        assert where.sql == ""


class TestEscapeLike:

    def test_escapes_backslash_first(self):
        assert escape_like("a\\b%c_d") == "a\\\\b\\%c\\_d"

    def test_plain_text_unchanged(self):
        assert escape_like("skywalker") == "skywalker"


class TestSortSpec:
    """ORDER BY rendering against a fixed allow-list."""

    def setup_method(self):
        self.spec = SortSpec(
            {"name": "p.name", "price": "p.price", "created_at": "p.created_at"},
            default_field="created_at",
            tiebreak="p.id",
        )

    def test_defaults_to_newest_first(self):
        assert self.spec.order_by() == "ORDER BY p.created_at DESC, p.id DESC"

    def test_explicit_field_and_direction(self):
        assert self.spec.order_by("price", "asc") == "ORDER BY p.price ASC, p.id ASC"

    def test_direction_is_case_insensitive(self):
        assert self.spec.order_by("name", "ASC") == "ORDER BY p.name ASC, p.id ASC"

    def test_unknown_field_rejected(self):
        with pytest.raises(ValidationError) as exc_info:
            self.spec.order_by("password")
        assert "Invalid sort_by" in exc_info.value.message
        assert exc_info.value.field == "sort_by"

    def test_injection_attempt_rejected(self):
        with pytest.raises(ValidationError):
            self.spec.order_by("price; DROP TABLE products")

    def test_unknown_direction_rejected(self):
        with pytest.raises(ValidationError) as exc_info:
            self.spec.order_by("price", "sideways")
        assert exc_info.value.field == "sort_order"

    def test_no_duplicate_tiebreak(self):
        spec = SortSpec({"id": "p.id"}, default_field="id", tiebreak="p.id")
        assert spec.order_by() == "ORDER BY p.id DESC"

    def test_default_must_be_allowed(self):
        with pytest.raises(ValueError):
            SortSpec({"name": "p.name"}, default_field="price")

    def test_fields_sorted(self):
        assert self.spec.fields == ["created_at", "name", "price"]


class TestPageRequest:

    def test_defaults(self):
        page = PageRequest()
        assert (page.page, page.limit, page.offset) == (1, 10, 0)

    def test_offset(self):
        assert PageRequest(page=3, limit=10).offset == 20

    @pytest.mark.parametrize("page, limit", [(0, 10), (1, 0), (-1, 5)])
    def test_rejects_non_positive(self, page, limit):
        with pytest.raises(ValueError):
            PageRequest(page=page, limit=limit)
