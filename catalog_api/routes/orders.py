"""
Catalog API — Order Route Handler (catalog server)
====================================================

What:  GET /api/orders/{id} → the order with its line items and ordering user.
How:   The repository loads the order row first, then its items (snapshot
       columns: name, SKU and unit price as ordered) and the user concurrently.
"""

from fastapi import APIRouter, Depends

from catalog_api.exceptions import NotFoundError
from catalog_api.routes.dependencies import get_catalog_repository
from catalog_api.routes.params import failure_message, parse_id
from catalog_api.schemas.catalog import OrderDetail
from catalog_api.schemas.common import ErrorResponse
from catalog_api.services.catalog_repository import CatalogRepository

router = APIRouter(prefix="/api", tags=["Orders"])


@router.get(
    "/orders/{order_id}",
    response_model=OrderDetail,
    responses={
        400: {"description": "Invalid order ID", "model": ErrorResponse},
        404: {"description": "Order not found", "model": ErrorResponse},
        500: {"description": "Database failure", "model": ErrorResponse},
    },
)
async def get_order(
    order_id: str, repo: CatalogRepository = Depends(get_catalog_repository)
) -> OrderDetail:
    oid = parse_id(order_id, "order")
    with failure_message("Failed to fetch order"):
        order = await repo.get_order(oid)
    if order is None:
        raise NotFoundError(resource="Order", resource_id=oid)
    return order
