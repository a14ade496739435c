"""
Catalog API — E-commerce Catalog Repository
=============================================

What:  Query facade for products, categories, brands, suppliers, users,
       reviews and orders.
Who:   Route handlers in routes/products.py, categories.py, brands.py,
       users.py and orders.py.

Query plan notes:
    Product search
        One FilterBuilder conjunction shared by the COUNT and the page query:
        category (EXISTS on product_categories), brand, price range, stock,
        featured flag and a contains-search over name/description/SKU.
        Sort columns come from PRODUCT_SORT only; default newest first with
        the product id as tie-break so pages are stable.
    Product detail
        Brand, supplier, categories, images and the review summary are
        independent of each other and fetched concurrently once the product
        row is known. Brand/supplier are looked up by primary key without the
        soft-delete filter; a NULL foreign key resolves to null.
    Orders
        Order items are read from their own snapshot columns. They are never
        joined back to products.
"""

import logging
from typing import List, Optional

from catalog_api.schemas.catalog import (
    Brand,
    Category,
    CategoryWithChildren,
    Order,
    OrderDetail,
    OrderItem,
    OrderSummary,
    Product,
    ProductFilters,
    ProductFull,
    ProductImage,
    ProductSummary,
    Review,
    ReviewSummary,
    Supplier,
    User,
    UserSummary,
)
from catalog_api.schemas.common import Page
from catalog_api.services.aggregator import gather_relations, optional
from catalog_api.services.pagination import PagedQuery
from catalog_api.services.query_builder import FilterBuilder, PageRequest, SortSpec
from catalog_api.services.repository import Repository

logger = logging.getLogger(__name__)

PRODUCT_COLUMNS = (
    "p.id, p.sku, p.name, p.description, p.price, p.compare_at_price, p.stock_quantity, "
    "p.brand_id, p.supplier_id, p.is_featured, p.created_at, p.updated_at"
)
PRODUCT_SUMMARY_COLUMNS = PRODUCT_COLUMNS + ", b.name AS brand_name"
PRODUCT_FROM = "products p LEFT JOIN brands b ON b.id = p.brand_id"
PRODUCT_SEARCH_COLUMNS = ("p.name", "p.description", "p.sku")
IN_CATEGORY = (
    "EXISTS (SELECT 1 FROM product_categories pc "
    "WHERE pc.product_id = p.id AND pc.category_id = {})"
)

PRODUCT_SORT = SortSpec(
    {
        "name": "p.name",
        "price": "p.price",
        "created_at": "p.created_at",
        "stock_quantity": "p.stock_quantity",
    },
    default_field="created_at",
    default_direction="desc",
    tiebreak="p.id",
)

CATEGORY_COLUMNS = "c.id, c.name, c.slug, c.description, c.parent_id, c.sort_order, c.created_at"
BRAND_COLUMNS = "id, name, description, website, logo_url, created_at"
SUPPLIER_COLUMNS = "id, name, contact_email, phone, country, created_at"
USER_COLUMNS = "u.id, u.email, u.first_name, u.last_name, u.phone, u.created_at"
ORDER_COLUMNS = (
    "o.id, o.order_number, o.user_id, o.status, o.total_amount, o.shipping_address, o.created_at"
)


class CatalogRepository(Repository):
    """One method per catalog query shape."""

    # ══════════════════════════════════════════════════════════════════════
    # Products
    # ══════════════════════════════════════════════════════════════════════

    async def list_products(self, page: PageRequest) -> Page[ProductSummary]:
        """All active products, newest first. Same rows as a search with no filters."""
        return await self.search_products(ProductFilters(), page)

    async def search_products(
        self, filters: ProductFilters, page: PageRequest
    ) -> Page[ProductSummary]:
        # Sort is validated before any SQL text exists
        order_by = PRODUCT_SORT.order_by(filters.sort_by, filters.sort_order)
        where = (
            FilterBuilder("p.is_active = TRUE")
            .raw(IN_CATEGORY, filters.category_id)
            .equals("p.brand_id", filters.brand_id)
            .at_least("p.price", filters.min_price)
            .at_most("p.price", filters.max_price)
            .in_stock("p.stock_quantity", filters.in_stock)
            .flag("p.is_featured", filters.is_featured)
            .contains(PRODUCT_SEARCH_COLUMNS, filters.search)
            .build()
        )
        query = PagedQuery(
            columns=PRODUCT_SUMMARY_COLUMNS,
            from_clause=PRODUCT_FROM,
            where=where,
            order_by=order_by,
        )
        return await self._page(ProductSummary, query, page)

    async def featured_products(self, limit: int) -> List[ProductSummary]:
        return await self._all(
            ProductSummary,
            f"""
            SELECT {PRODUCT_SUMMARY_COLUMNS}
            FROM {PRODUCT_FROM}
            WHERE p.is_active = TRUE AND p.is_featured = TRUE
            ORDER BY p.created_at DESC, p.id DESC
            LIMIT :limit
            """,
            {"limit": limit},
        )

    async def get_product(self, product_id: int) -> Optional[ProductSummary]:
        return await self._one(
            ProductSummary,
            f"SELECT {PRODUCT_SUMMARY_COLUMNS} FROM {PRODUCT_FROM} "
            "WHERE p.id = :id AND p.is_active = TRUE",
            {"id": product_id},
        )

    async def get_product_full(self, product_id: int) -> Optional[ProductFull]:
        product = await self._one(
            Product,
            f"SELECT {PRODUCT_COLUMNS} FROM products p WHERE p.id = :id AND p.is_active = TRUE",
            {"id": product_id},
        )
        if product is None:
            return None
        relations = await gather_relations(
            brand=optional(product.brand_id, self._brand_by_pk),
            supplier=optional(product.supplier_id, self._supplier_by_pk),
            categories=self.product_categories(product.id),
            images=self.product_images(product.id),
            review_summary=self.review_summary(product.id),
        )
        return ProductFull(**product.model_dump(), **relations)

    async def product_categories(self, product_id: int) -> List[Category]:
        return await self._all(
            Category,
            f"""
            SELECT {CATEGORY_COLUMNS}
            FROM categories c
            INNER JOIN product_categories pc ON pc.category_id = c.id
            WHERE pc.product_id = :product_id AND c.is_active = TRUE
            ORDER BY pc.sort_order, c.sort_order, c.name
            """,
            {"product_id": product_id},
        )

    async def product_images(self, product_id: int) -> List[ProductImage]:
        return await self._all(
            ProductImage,
            """
            SELECT id, url, alt_text, is_primary, sort_order
            FROM product_images
            WHERE product_id = :product_id AND is_active = TRUE
            ORDER BY is_primary DESC, sort_order, id
            """,
            {"product_id": product_id},
        )

    async def review_summary(self, product_id: int) -> ReviewSummary:
        row = await self.db.fetch_one(
            """
            SELECT COUNT(*) AS count, AVG(rating) AS average_rating
            FROM reviews
            WHERE product_id = :product_id AND is_active = TRUE
            """,
            {"product_id": product_id},
        )
        row = row or {}
        average = row.get("average_rating")
        return ReviewSummary(
            count=int(row.get("count") or 0),
            average_rating=round(float(average), 2) if average is not None else None,
        )

    async def product_reviews(self, product_id: int, page: PageRequest) -> Page[Review]:
        where = (
            FilterBuilder("r.is_active = TRUE")
            .equals("r.product_id", product_id)
            .build()
        )
        query = PagedQuery(
            columns=(
                "r.id, r.product_id, r.user_id, r.rating, r.title, r.body, r.created_at, "
                "u.first_name AS reviewer_first_name, u.last_name AS reviewer_last_name"
            ),
            from_clause="reviews r INNER JOIN users u ON u.id = r.user_id",
            where=where,
            order_by="ORDER BY r.created_at DESC, r.id DESC",
        )
        return await self._page(Review, query, page)

    async def product_exists(self, product_id: int) -> bool:
        return await self._exists("products", product_id)

    async def count_products(self) -> int:
        return await self._count("SELECT COUNT(*) FROM products WHERE is_active = TRUE")

    # ══════════════════════════════════════════════════════════════════════
    # Categories
    # ══════════════════════════════════════════════════════════════════════

    async def list_categories(self) -> List[Category]:
        return await self._all(
            Category,
            f"SELECT {CATEGORY_COLUMNS} FROM categories c "
            "WHERE c.is_active = TRUE ORDER BY c.sort_order, c.name",
        )

    async def get_category(self, category_id: int) -> Optional[Category]:
        return await self._one(
            Category,
            f"SELECT {CATEGORY_COLUMNS} FROM categories c WHERE c.id = :id AND c.is_active = TRUE",
            {"id": category_id},
        )

    async def category_children(self, category_id: int) -> List[Category]:
        return await self._all(
            Category,
            f"""
            SELECT {CATEGORY_COLUMNS}
            FROM categories c
            WHERE c.parent_id = :parent_id AND c.is_active = TRUE
            ORDER BY c.sort_order, c.name
            """,
            {"parent_id": category_id},
        )

    async def get_category_with_children(self, category_id: int) -> Optional[CategoryWithChildren]:
        category = await self.get_category(category_id)
        if category is None:
            return None
        relations = await gather_relations(children=self.category_children(category_id))
        return CategoryWithChildren(**category.model_dump(), **relations)

    async def category_products(self, category_id: int, page: PageRequest) -> Page[ProductSummary]:
        return await self.search_products(ProductFilters(category_id=category_id), page)

    async def category_exists(self, category_id: int) -> bool:
        return await self._exists("categories", category_id)

    # ══════════════════════════════════════════════════════════════════════
    # Brands and suppliers
    # ══════════════════════════════════════════════════════════════════════

    async def list_brands(self) -> List[Brand]:
        return await self._all(
            Brand, f"SELECT {BRAND_COLUMNS} FROM brands WHERE is_active = TRUE ORDER BY name"
        )

    async def get_brand(self, brand_id: int) -> Optional[Brand]:
        return await self._one(
            Brand,
            f"SELECT {BRAND_COLUMNS} FROM brands WHERE id = :id AND is_active = TRUE",
            {"id": brand_id},
        )

    async def _brand_by_pk(self, brand_id: int) -> Optional[Brand]:
        return await self._one(
            Brand, f"SELECT {BRAND_COLUMNS} FROM brands WHERE id = :id", {"id": brand_id}
        )

    async def list_suppliers(self) -> List[Supplier]:
        return await self._all(
            Supplier,
            f"SELECT {SUPPLIER_COLUMNS} FROM suppliers WHERE is_active = TRUE ORDER BY name",
        )

    async def get_supplier(self, supplier_id: int) -> Optional[Supplier]:
        return await self._one(
            Supplier,
            f"SELECT {SUPPLIER_COLUMNS} FROM suppliers WHERE id = :id AND is_active = TRUE",
            {"id": supplier_id},
        )

    async def _supplier_by_pk(self, supplier_id: int) -> Optional[Supplier]:
        return await self._one(
            Supplier, f"SELECT {SUPPLIER_COLUMNS} FROM suppliers WHERE id = :id", {"id": supplier_id}
        )

    # ══════════════════════════════════════════════════════════════════════
    # Users and orders
    # ══════════════════════════════════════════════════════════════════════

    async def list_users(self, page: PageRequest) -> Page[User]:
        query = PagedQuery(
            columns=USER_COLUMNS,
            from_clause="users u",
            where=FilterBuilder("u.is_active = TRUE").build(),
            order_by="ORDER BY u.id",
        )
        return await self._page(User, query, page)

    async def get_user(self, user_id: int) -> Optional[User]:
        return await self._one(
            User,
            f"SELECT {USER_COLUMNS} FROM users u WHERE u.id = :id AND u.is_active = TRUE",
            {"id": user_id},
        )

    async def user_exists(self, user_id: int) -> bool:
        return await self._exists("users", user_id)

    async def user_orders(self, user_id: int, page: PageRequest) -> Page[OrderSummary]:
        query = PagedQuery(
            columns=(
                f"{ORDER_COLUMNS}, "
                "(SELECT COUNT(*) FROM order_items oi "
                "WHERE oi.order_id = o.id AND oi.is_active = TRUE) AS item_count"
            ),
            from_clause="orders o",
            where=FilterBuilder("o.is_active = TRUE").equals("o.user_id", user_id).build(),
            order_by="ORDER BY o.created_at DESC, o.id DESC",
        )
        return await self._page(OrderSummary, query, page)

    async def get_order(self, order_id: int) -> Optional[OrderDetail]:
        order = await self._one(
            Order,
            f"SELECT {ORDER_COLUMNS} FROM orders o WHERE o.id = :id AND o.is_active = TRUE",
            {"id": order_id},
        )
        if order is None:
            return None
        relations = await gather_relations(
            items=self.order_items(order.id),
            user=optional(order.user_id, self._user_summary_by_pk),
        )
        return OrderDetail(**order.model_dump(), **relations)

    async def order_items(self, order_id: int) -> List[OrderItem]:
        return await self._all(
            OrderItem,
            """
            SELECT id, product_id, product_name, product_sku, unit_price, quantity, line_total
            FROM order_items
            WHERE order_id = :order_id AND is_active = TRUE
            ORDER BY id
            """,
            {"order_id": order_id},
        )

    async def _user_summary_by_pk(self, user_id: int) -> Optional[UserSummary]:
        return await self._one(
            UserSummary,
            "SELECT id, email, first_name, last_name FROM users WHERE id = :id",
            {"id": user_id},
        )
