"""
Catalog API — Catalog Endpoint Tests
======================================

What:  HTTP-level tests for products, categories, brands, suppliers, users
       and orders on the catalog server.

What we test:
    ✅ Paginated bodies are `{data, pagination}` with camelCase envelope keys
    ✅ Query parameter type and range failures are 400 in the error shape
    ✅ Filter echo on /api/products/search
    ✅ 404 for unknown or soft-deleted rows, 400 for malformed IDs
"""

import pytest


def ids(body):
    return [row["id"] for row in body["data"]]


class TestProductEndpoints:

    @pytest.mark.asyncio
    async def test_list_products_default_page(self, catalog_client):
        response = await catalog_client.get("/api/products")
        assert response.status_code == 200
        body = response.json()
        assert len(body["data"]) == 10
        assert body["pagination"] == {
            "page": 1,
            "limit": 10,
            "total": 10,
            "totalPages": 1,
            "hasNext": False,
            "hasPrev": False,
        }

    @pytest.mark.asyncio
    async def test_list_products_second_page(self, catalog_client):
        response = await catalog_client.get("/api/products", params={"page": 2, "limit": 4})
        body = response.json()
        assert ids(body) == [6, 5, 4, 3]
        assert body["pagination"]["hasNext"] is True
        assert body["pagination"]["hasPrev"] is True

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "params, field",
        [
            ({"limit": 101}, "limit"),
            ({"limit": 0}, "limit"),
            ({"page": 0}, "page"),
            ({"limit": "abc"}, "limit"),
        ],
    )
    async def test_bad_paging_params(self, catalog_client, params, field):
        response = await catalog_client.get("/api/products", params=params)
        assert response.status_code == 400
        body = response.json()
        assert body["error"] == f"Invalid value for '{field}'"
        assert body["details"]

    @pytest.mark.asyncio
    async def test_search_price_range_sorted(self, catalog_client):
        response = await catalog_client.get(
            "/api/products/search",
            params={"min_price": 10, "max_price": 50, "sort_by": "price", "sort_order": "asc"},
        )
        assert response.status_code == 200
        body = response.json()
        assert ids(body) == [9, 8, 7, 6]
        assert body["filters"]["min_price"] == 10
        assert body["filters"]["sort_by"] == "price"
        assert body["pagination"]["total"] == 4

    @pytest.mark.asyncio
    async def test_search_text(self, catalog_client):
        response = await catalog_client.get("/api/products/search", params={"search": "ski"})
        assert ids(response.json()) == [2, 1]

    @pytest.mark.asyncio
    async def test_search_sold_out(self, catalog_client):
        response = await catalog_client.get("/api/products/search", params={"in_stock": "false"})
        assert set(ids(response.json())) == {2, 6}

    @pytest.mark.asyncio
    async def test_search_without_filters_matches_list(self, catalog_client):
        listed = (await catalog_client.get("/api/products")).json()
        searched = (await catalog_client.get("/api/products/search")).json()
        assert ids(listed) == ids(searched)
        assert listed["pagination"] == searched["pagination"]

    @pytest.mark.asyncio
    async def test_search_min_above_max(self, catalog_client):
        response = await catalog_client.get(
            "/api/products/search", params={"min_price": 50, "max_price": 10}
        )
        assert response.status_code == 400
        assert response.json() == {"error": "min_price cannot be greater than max_price"}

    @pytest.mark.asyncio
    async def test_search_term_too_short(self, catalog_client):
        response = await catalog_client.get("/api/products/search", params={"search": " s "})
        assert response.status_code == 400
        assert response.json() == {"error": "Search query must be at least 2 characters long"}

    @pytest.mark.asyncio
    async def test_search_unknown_sort_field(self, catalog_client):
        response = await catalog_client.get("/api/products/search", params={"sort_by": "cost"})
        assert response.status_code == 400
        assert response.json()["error"].startswith("Invalid sort_by 'cost'")

    @pytest.mark.asyncio
    async def test_featured(self, catalog_client):
        response = await catalog_client.get("/api/products/featured")
        body = response.json()
        assert body["count"] == 4
        assert [p["id"] for p in body["products"]] == [7, 5, 3, 1]

        response = await catalog_client.get("/api/products/featured", params={"limit": 2})
        assert response.json()["count"] == 2

    @pytest.mark.asyncio
    async def test_get_product(self, catalog_client):
        response = await catalog_client.get("/api/products/5")
        assert response.status_code == 200
        body = response.json()
        assert body["sku"] == "NWA-HP-100"
        assert body["brand_name"] == "Northwind Audio"

    @pytest.mark.asyncio
    async def test_product_not_found(self, catalog_client):
        response = await catalog_client.get("/api/products/9999")
        assert response.status_code == 404
        assert response.json() == {"error": "Product not found"}

    @pytest.mark.asyncio
    async def test_invalid_product_id(self, catalog_client):
        response = await catalog_client.get("/api/products/abc")
        assert response.status_code == 400
        assert response.json() == {"error": "Invalid product ID"}

    @pytest.mark.asyncio
    async def test_product_full(self, catalog_client):
        response = await catalog_client.get("/api/products/1/full")
        assert response.status_code == 200
        body = response.json()
        assert body["brand"]["name"] == "Acme Outdoors"
        assert body["supplier"]["country"] == "United States"
        assert [c["slug"] for c in body["categories"]] == ["skiing", "outdoor"]
        assert body["images"][0]["is_primary"] is True
        assert body["review_summary"] == {"count": 2, "average_rating": 4.5}

    @pytest.mark.asyncio
    async def test_product_full_absent_relations_are_null(self, catalog_client):
        body = (await catalog_client.get("/api/products/11/full")).json()
        assert body["brand"] is None
        assert body["supplier"] is None
        assert body["images"] == []

    @pytest.mark.asyncio
    async def test_product_reviews(self, catalog_client):
        response = await catalog_client.get("/api/products/1/reviews")
        body = response.json()
        assert ids(body) == [2, 1]
        assert body["pagination"]["total"] == 2

    @pytest.mark.asyncio
    async def test_reviews_of_unknown_product(self, catalog_client):
        response = await catalog_client.get("/api/products/10/reviews")
        assert response.status_code == 404
        assert response.json() == {"error": "Product not found"}


class TestCategoryEndpoints:

    @pytest.mark.asyncio
    async def test_list(self, catalog_client):
        body = (await catalog_client.get("/api/categories")).json()
        assert body["count"] == 6

    @pytest.mark.asyncio
    async def test_get_category(self, catalog_client):
        body = (await catalog_client.get("/api/categories/4")).json()
        assert body["slug"] == "electronics"

    @pytest.mark.asyncio
    async def test_inactive_category(self, catalog_client):
        response = await catalog_client.get("/api/categories/7")
        assert response.status_code == 404
        assert response.json() == {"error": "Category not found"}

    @pytest.mark.asyncio
    async def test_children(self, catalog_client):
        body = (await catalog_client.get("/api/categories/1/children")).json()
        assert [c["slug"] for c in body["children"]] == ["skiing", "camping"]

    @pytest.mark.asyncio
    async def test_products_in_category(self, catalog_client):
        response = await catalog_client.get("/api/categories/2/products")
        assert response.status_code == 200
        assert ids(response.json()) == [2, 1]

    @pytest.mark.asyncio
    async def test_products_in_unknown_category(self, catalog_client):
        response = await catalog_client.get("/api/categories/999/products")
        assert response.status_code == 404


class TestBrandAndSupplierEndpoints:

    @pytest.mark.asyncio
    async def test_brands(self, catalog_client):
        body = (await catalog_client.get("/api/brands")).json()
        assert body["count"] == 3

    @pytest.mark.asyncio
    async def test_inactive_brand(self, catalog_client):
        response = await catalog_client.get("/api/brands/4")
        assert response.status_code == 404
        assert response.json() == {"error": "Brand not found"}

    @pytest.mark.asyncio
    async def test_suppliers(self, catalog_client):
        body = (await catalog_client.get("/api/suppliers")).json()
        assert [s["name"] for s in body["suppliers"]] == ["Global Supply Co", "Pacific Traders"]

    @pytest.mark.asyncio
    async def test_invalid_supplier_id(self, catalog_client):
        response = await catalog_client.get("/api/suppliers/x1")
        assert response.status_code == 400
        assert response.json() == {"error": "Invalid supplier ID"}


class TestUserAndOrderEndpoints:

    @pytest.mark.asyncio
    async def test_users_paginated(self, catalog_client):
        body = (await catalog_client.get("/api/users", params={"limit": 2})).json()
        assert ids(body) == [1, 2]
        assert body["pagination"]["total"] == 3
        assert body["pagination"]["hasNext"] is True

    @pytest.mark.asyncio
    async def test_inactive_user(self, catalog_client):
        response = await catalog_client.get("/api/users/4")
        assert response.status_code == 404
        assert response.json() == {"error": "User not found"}

    @pytest.mark.asyncio
    async def test_user_orders(self, catalog_client):
        body = (await catalog_client.get("/api/users/1/orders")).json()
        assert ids(body) == [2, 1]
        assert body["data"][0]["item_count"] == 2

    @pytest.mark.asyncio
    async def test_orders_of_unknown_user(self, catalog_client):
        response = await catalog_client.get("/api/users/999/orders")
        assert response.status_code == 404
        assert response.json() == {"error": "User not found"}

    @pytest.mark.asyncio
    async def test_order_detail(self, catalog_client):
        response = await catalog_client.get("/api/orders/1")
        assert response.status_code == 200
        body = response.json()
        assert body["order_number"] == "ORD-1001"
        assert body["user"]["email"] == "alice@example.com"
        assert [i["product_sku"] for i in body["items"]] == ["ACM-SKI-001", "ACM-SKI-002"]

    @pytest.mark.asyncio
    async def test_unknown_order(self, catalog_client):
        response = await catalog_client.get("/api/orders/999")
        assert response.status_code == 404
        assert response.json() == {"error": "Order not found"}

    @pytest.mark.asyncio
    async def test_invalid_order_id(self, catalog_client):
        response = await catalog_client.get("/api/orders/-")
        assert response.status_code == 400
        assert response.json() == {"error": "Invalid order ID"}


class TestOutOfRangeIntegers:
    """IDs and page numbers beyond the 64-bit range never reach the driver."""

    @pytest.mark.asyncio
    async def test_huge_product_id(self, catalog_client):
        response = await catalog_client.get("/api/products/99999999999999999999")
        assert response.status_code == 404
        assert response.json() == {"error": "Product not found"}

    @pytest.mark.asyncio
    async def test_huge_user_id_orders(self, catalog_client):
        response = await catalog_client.get("/api/users/99999999999999999999/orders")
        assert response.status_code == 404
        assert response.json() == {"error": "User not found"}

    @pytest.mark.asyncio
    async def test_page_beyond_integer_range(self, catalog_client):
        response = await catalog_client.get("/api/products", params={"page": "99999999999999999999"})
        assert response.status_code == 400
        assert response.json()["error"] == "Invalid value for 'page'"

    @pytest.mark.asyncio
    async def test_page_whose_offset_overflows_is_empty(self, catalog_client):
        response = await catalog_client.get(
            "/api/products", params={"page": 2**63 - 1, "limit": 10}
        )
        assert response.status_code == 200
        body = response.json()
        assert body["data"] == []
        assert body["pagination"]["total"] == 10
        assert body["pagination"]["hasNext"] is False
        assert body["pagination"]["hasPrev"] is True

    @pytest.mark.asyncio
    async def test_reviews_page_whose_offset_overflows_is_empty(self, catalog_client):
        response = await catalog_client.get(
            "/api/products/1/reviews", params={"page": 2**62, "limit": 100}
        )
        assert response.status_code == 200
        assert response.json()["data"] == []

    @pytest.mark.asyncio
    @pytest.mark.parametrize("field", ["category_id", "brand_id"])
    async def test_search_filter_beyond_integer_range(self, catalog_client, field):
        response = await catalog_client.get(
            "/api/products/search", params={field: "99999999999999999999"}
        )
        assert response.status_code == 400
        assert response.json()["error"] == f"Invalid value for '{field}'"

    @pytest.mark.asyncio
    async def test_search_filter_at_integer_limit_matches_nothing(self, catalog_client):
        response = await catalog_client.get(
            "/api/products/search", params={"brand_id": 2**63 - 1}
        )
        assert response.status_code == 200
        assert response.json()["data"] == []
