"""Brand and supplier route handlers (catalog server)."""

from fastapi import APIRouter, Depends

from catalog_api.exceptions import NotFoundError
from catalog_api.routes.dependencies import get_catalog_repository
from catalog_api.routes.params import failure_message, parse_id
from catalog_api.schemas.catalog import Brand, BrandList, Supplier, SupplierList
from catalog_api.schemas.common import ErrorResponse
from catalog_api.services.catalog_repository import CatalogRepository

router = APIRouter(prefix="/api", tags=["Brands & Suppliers"])

ERRORS = {
    400: {"description": "Invalid ID", "model": ErrorResponse},
    404: {"description": "Not found", "model": ErrorResponse},
    500: {"description": "Database failure", "model": ErrorResponse},
}


@router.get("/brands", response_model=BrandList, responses={500: ERRORS[500]})
async def list_brands(repo: CatalogRepository = Depends(get_catalog_repository)) -> BrandList:
    with failure_message("Failed to fetch brands"):
        brands = await repo.list_brands()
    return BrandList(brands=brands, count=len(brands))


@router.get("/brands/{brand_id}", response_model=Brand, responses=ERRORS)
async def get_brand(
    brand_id: str, repo: CatalogRepository = Depends(get_catalog_repository)
) -> Brand:
    bid = parse_id(brand_id, "brand")
    with failure_message("Failed to fetch brand"):
        brand = await repo.get_brand(bid)
    if brand is None:
        raise NotFoundError(resource="Brand", resource_id=bid)
    return brand


@router.get("/suppliers", response_model=SupplierList, responses={500: ERRORS[500]})
async def list_suppliers(
    repo: CatalogRepository = Depends(get_catalog_repository),
) -> SupplierList:
    with failure_message("Failed to fetch suppliers"):
        suppliers = await repo.list_suppliers()
    return SupplierList(suppliers=suppliers, count=len(suppliers))


@router.get("/suppliers/{supplier_id}", response_model=Supplier, responses=ERRORS)
async def get_supplier(
    supplier_id: str, repo: CatalogRepository = Depends(get_catalog_repository)
) -> Supplier:
    sid = parse_id(supplier_id, "supplier")
    with failure_message("Failed to fetch supplier"):
        supplier = await repo.get_supplier(sid)
    if supplier is None:
        raise NotFoundError(resource="Supplier", resource_id=sid)
    return supplier
