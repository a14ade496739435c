"""
Catalog API — Product Route Handlers (catalog server)
=======================================================

What:  Product listing, filtered search, featured list, detail, full detail
       with relations, and product reviews.
How:   Query parameters are declared with types and ranges; cross-field
       checks (min_price <= max_price, search length) happen here before the
       repository is called. The repository receives a ProductFilters object
       and a PageRequest and never sees the raw request.

Route order: `/products/search` and `/products/featured` are registered
before `/products/{product_id}`.

Example:
    GET /api/products/search?min_price=10&max_price=50&sort_by=price&sort_order=asc
    → active products priced in [10, 50], cheapest first, page 1 of size 10
"""

import logging
from typing import Optional

from fastapi import APIRouter, Depends, Query

from catalog_api.config import settings
from catalog_api.exceptions import NotFoundError, ValidationError
from catalog_api.routes.dependencies import get_catalog_repository
from catalog_api.routes.params import failure_message, pagination, parse_id, search_term
from catalog_api.schemas.catalog import (
    ProductFilters,
    ProductFull,
    ProductList,
    ProductSearchPage,
    ProductSummary,
    Review,
)
from catalog_api.schemas.common import ErrorResponse, Page
from catalog_api.services.catalog_repository import CatalogRepository
from catalog_api.services.query_builder import MAX_SQL_INTEGER, MIN_SQL_INTEGER, PageRequest

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["Products"])

ERRORS = {
    400: {"description": "Invalid parameter", "model": ErrorResponse},
    404: {"description": "Product not found", "model": ErrorResponse},
    500: {"description": "Database failure", "model": ErrorResponse},
}


@router.get(
    "/products",
    response_model=Page[ProductSummary],
    responses={400: ERRORS[400], 500: ERRORS[500]},
    summary="List active products (newest first, paginated)",
)
async def list_products(
    page: PageRequest = Depends(pagination),
    repo: CatalogRepository = Depends(get_catalog_repository),
) -> Page[ProductSummary]:
    with failure_message("Failed to fetch products"):
        return await repo.list_products(page)


@router.get(
    "/products/search",
    response_model=ProductSearchPage,
    responses={400: ERRORS[400], 500: ERRORS[500]},
    summary="Search products with filters, sorting and pagination",
)
async def search_products(
    page: PageRequest = Depends(pagination),
    category_id: Optional[int] = Query(
        default=None, ge=MIN_SQL_INTEGER, le=MAX_SQL_INTEGER, description="Only products in this category"
    ),
    brand_id: Optional[int] = Query(
        default=None, ge=MIN_SQL_INTEGER, le=MAX_SQL_INTEGER, description="Only products of this brand"
    ),
    min_price: Optional[float] = Query(default=None, ge=0, description="Lowest price (inclusive)"),
    max_price: Optional[float] = Query(default=None, ge=0, description="Highest price (inclusive)"),
    in_stock: Optional[bool] = Query(default=None, description="true: stock > 0, false: sold out"),
    is_featured: Optional[bool] = Query(default=None),
    search: Optional[str] = Query(default=None, description="Contains-match on name, description, SKU"),
    sort_by: Optional[str] = Query(
        default=None, description="name, price, created_at or stock_quantity (default created_at)"
    ),
    sort_order: Optional[str] = Query(default=None, description="asc or desc (default desc)"),
    repo: CatalogRepository = Depends(get_catalog_repository),
) -> ProductSearchPage:
    if min_price is not None and max_price is not None and min_price > max_price:
        raise ValidationError(
            message="min_price cannot be greater than max_price", field="min_price"
        )
    term = search_term(search) if search is not None and search.strip() else None

    filters = ProductFilters(
        category_id=category_id,
        brand_id=brand_id,
        min_price=min_price,
        max_price=max_price,
        in_stock=in_stock,
        is_featured=is_featured,
        search=term,
        sort_by=sort_by,
        sort_order=sort_order,
    )
    with failure_message("Failed to search products"):
        result = await repo.search_products(filters, page)
    return ProductSearchPage(data=result.data, pagination=result.pagination, filters=filters)


@router.get(
    "/products/featured",
    response_model=ProductList,
    responses={400: ERRORS[400], 500: ERRORS[500]},
)
async def featured_products(
    limit: int = Query(default=settings.featured_limit, ge=1, le=settings.max_page_size),
    repo: CatalogRepository = Depends(get_catalog_repository),
) -> ProductList:
    with failure_message("Failed to fetch featured products"):
        products = await repo.featured_products(limit)
    return ProductList(products=products, count=len(products))


@router.get("/products/{product_id}", response_model=ProductSummary, responses=ERRORS)
async def get_product(
    product_id: str, repo: CatalogRepository = Depends(get_catalog_repository)
) -> ProductSummary:
    pid = parse_id(product_id, "product")
    with failure_message("Failed to fetch product"):
        product = await repo.get_product(pid)
    if product is None:
        raise NotFoundError(resource="Product", resource_id=pid)
    return product


@router.get(
    "/products/{product_id}/full",
    response_model=ProductFull,
    responses=ERRORS,
    summary="Get a product with brand, supplier, categories, images and review summary",
)
async def get_product_full(
    product_id: str, repo: CatalogRepository = Depends(get_catalog_repository)
) -> ProductFull:
    pid = parse_id(product_id, "product")
    with failure_message("Failed to fetch product details"):
        product = await repo.get_product_full(pid)
    if product is None:
        raise NotFoundError(resource="Product", resource_id=pid)
    return product


@router.get(
    "/products/{product_id}/reviews",
    response_model=Page[Review],
    responses=ERRORS,
)
async def get_product_reviews(
    product_id: str,
    page: PageRequest = Depends(pagination),
    repo: CatalogRepository = Depends(get_catalog_repository),
) -> Page[Review]:
    pid = parse_id(product_id, "product")
    with failure_message("Failed to fetch product reviews"):
        if not await repo.product_exists(pid):
            raise NotFoundError(resource="Product", resource_id=pid)
        return await repo.product_reviews(pid, page)
