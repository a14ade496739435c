"""Category route handlers (catalog server): list, detail, children, products in a category."""

from fastapi import APIRouter, Depends

from catalog_api.exceptions import NotFoundError
from catalog_api.routes.dependencies import get_catalog_repository
from catalog_api.routes.params import failure_message, pagination, parse_id
from catalog_api.schemas.catalog import Category, CategoryList, CategoryWithChildren, ProductSummary
from catalog_api.schemas.common import ErrorResponse, Page
from catalog_api.services.catalog_repository import CatalogRepository
from catalog_api.services.query_builder import PageRequest

router = APIRouter(prefix="/api", tags=["Categories"])

ERRORS = {
    400: {"description": "Invalid category ID", "model": ErrorResponse},
    404: {"description": "Category not found", "model": ErrorResponse},
    500: {"description": "Database failure", "model": ErrorResponse},
}


@router.get("/categories", response_model=CategoryList, responses={500: ERRORS[500]})
async def list_categories(
    repo: CatalogRepository = Depends(get_catalog_repository),
) -> CategoryList:
    with failure_message("Failed to fetch categories"):
        categories = await repo.list_categories()
    return CategoryList(categories=categories, count=len(categories))


@router.get("/categories/{category_id}", response_model=Category, responses=ERRORS)
async def get_category(
    category_id: str, repo: CatalogRepository = Depends(get_catalog_repository)
) -> Category:
    cid = parse_id(category_id, "category")
    with failure_message("Failed to fetch category"):
        category = await repo.get_category(cid)
    if category is None:
        raise NotFoundError(resource="Category", resource_id=cid)
    return category


@router.get(
    "/categories/{category_id}/children",
    response_model=CategoryWithChildren,
    responses=ERRORS,
)
async def get_category_children(
    category_id: str, repo: CatalogRepository = Depends(get_catalog_repository)
) -> CategoryWithChildren:
    cid = parse_id(category_id, "category")
    with failure_message("Failed to fetch category children"):
        category = await repo.get_category_with_children(cid)
    if category is None:
        raise NotFoundError(resource="Category", resource_id=cid)
    return category


@router.get(
    "/categories/{category_id}/products",
    response_model=Page[ProductSummary],
    responses=ERRORS,
)
async def get_category_products(
    category_id: str,
    page: PageRequest = Depends(pagination),
    repo: CatalogRepository = Depends(get_catalog_repository),
) -> Page[ProductSummary]:
    cid = parse_id(category_id, "category")
    with failure_message("Failed to fetch category products"):
        if not await repo.category_exists(cid):
            raise NotFoundError(resource="Category", resource_id=cid)
        return await repo.category_products(cid, page)
