"""
Catalog API — E-commerce Catalog Schemas
==========================================

What:  Pydantic models for the catalog server's responses.
How:   Repositories validate raw dict rows into these models; paginated
       endpoints wrap them in `Page[...]` (`{data, pagination}`), unfiltered
       lists use `{<entities>, count}`.
"""

from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, Field

from catalog_api.schemas.common import Page


# ══════════════════════════════════════════════════════════════════════════
# Reference entities
# ══════════════════════════════════════════════════════════════════════════


class Brand(BaseModel):
    id: int
    name: str
    description: Optional[str] = None
    website: Optional[str] = None
    logo_url: Optional[str] = None
    created_at: Optional[datetime] = None


class Supplier(BaseModel):
    id: int
    name: str
    contact_email: Optional[str] = None
    phone: Optional[str] = None
    country: Optional[str] = None
    created_at: Optional[datetime] = None


class Category(BaseModel):
    id: int
    name: str
    slug: str
    description: Optional[str] = None
    parent_id: Optional[int] = None
    sort_order: int = 0
    created_at: Optional[datetime] = None


class CategoryWithChildren(Category):
    children: List[Category] = Field(default_factory=list)


class User(BaseModel):
    id: int
    email: str
    first_name: str
    last_name: str
    phone: Optional[str] = None
    created_at: Optional[datetime] = None


class UserSummary(BaseModel):
    id: int
    email: str
    first_name: str
    last_name: str


# ══════════════════════════════════════════════════════════════════════════
# Products
# ══════════════════════════════════════════════════════════════════════════


class Product(BaseModel):
    id: int
    sku: str
    name: str
    description: Optional[str] = None
    price: float
    compare_at_price: Optional[float] = None
    stock_quantity: int
    brand_id: Optional[int] = None
    supplier_id: Optional[int] = None
    is_featured: bool = False
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


class ProductSummary(Product):
    """Product row as listed: adds the brand name from a LEFT JOIN."""

    brand_name: Optional[str] = None


class ProductImage(BaseModel):
    id: int
    url: str
    alt_text: Optional[str] = None
    is_primary: bool = False
    sort_order: int = 0


class ReviewSummary(BaseModel):
    count: int = 0
    average_rating: Optional[float] = None


class ProductFull(Product):
    """
    Product with every relation resolved.

    `brand` and `supplier` are null when the product has none assigned.
    `categories` are ordered by the join table's sort order, then category
    sort order, then name; `images` put the primary image first, then follow
    sort order and id.
    """

    brand: Optional[Brand] = None
    supplier: Optional[Supplier] = None
    categories: List[Category] = Field(default_factory=list)
    images: List[ProductImage] = Field(default_factory=list)
    review_summary: ReviewSummary = Field(default_factory=ReviewSummary)


class ProductFilters(BaseModel):
    """Filters accepted by GET /api/products/search, echoed back in the response."""

    category_id: Optional[int] = None
    brand_id: Optional[int] = None
    min_price: Optional[float] = None
    max_price: Optional[float] = None
    in_stock: Optional[bool] = None
    is_featured: Optional[bool] = None
    search: Optional[str] = None
    sort_by: Optional[str] = None
    sort_order: Optional[str] = None


class ProductSearchPage(Page[ProductSummary]):
    filters: ProductFilters


# ══════════════════════════════════════════════════════════════════════════
# Reviews and orders
# ══════════════════════════════════════════════════════════════════════════


class Review(BaseModel):
    id: int
    product_id: int
    user_id: int
    rating: int
    title: Optional[str] = None
    body: Optional[str] = None
    reviewer_first_name: Optional[str] = None
    reviewer_last_name: Optional[str] = None
    created_at: Optional[datetime] = None


class Order(BaseModel):
    id: int
    order_number: str
    user_id: int
    status: str
    total_amount: float
    shipping_address: Optional[str] = None
    created_at: Optional[datetime] = None


class OrderSummary(Order):
    item_count: int = 0


class OrderItem(BaseModel):
    """Snapshot of the product at order time; never re-read from products."""

    id: int
    product_id: Optional[int] = None
    product_name: str
    product_sku: str
    unit_price: float
    quantity: int
    line_total: float


class OrderDetail(Order):
    items: List[OrderItem] = Field(default_factory=list)
    user: Optional[UserSummary] = None


# ══════════════════════════════════════════════════════════════════════════
# List bodies
# ══════════════════════════════════════════════════════════════════════════


class ProductList(BaseModel):
    products: List[ProductSummary]
    count: int


class CategoryList(BaseModel):
    categories: List[Category]
    count: int


class BrandList(BaseModel):
    brands: List[Brand]
    count: int


class SupplierList(BaseModel):
    suppliers: List[Supplier]
    count: int
