"""
Catalog API — User Route Handlers (catalog server)
=====================================================

What:  GET /api/users, /api/users/{id}, /api/users/{id}/orders.
How:   The orders listing checks that the user exists first so an unknown
       user is a 404 rather than an empty page.
"""

from fastapi import APIRouter, Depends

from catalog_api.exceptions import NotFoundError
from catalog_api.routes.dependencies import get_catalog_repository
from catalog_api.routes.params import failure_message, pagination, parse_id
from catalog_api.schemas.catalog import OrderSummary, User
from catalog_api.schemas.common import ErrorResponse, Page
from catalog_api.services.catalog_repository import CatalogRepository
from catalog_api.services.query_builder import PageRequest

router = APIRouter(prefix="/api", tags=["Users"])

ERRORS = {
    400: {"description": "Invalid parameter", "model": ErrorResponse},
    404: {"description": "Not found", "model": ErrorResponse},
    500: {"description": "Database failure", "model": ErrorResponse},
}


@router.get("/users", response_model=Page[User], responses={400: ERRORS[400], 500: ERRORS[500]})
async def list_users(
    page: PageRequest = Depends(pagination),
    repo: CatalogRepository = Depends(get_catalog_repository),
) -> Page[User]:
    with failure_message("Failed to fetch users"):
        return await repo.list_users(page)


@router.get("/users/{user_id}", response_model=User, responses=ERRORS)
async def get_user(user_id: str, repo: CatalogRepository = Depends(get_catalog_repository)) -> User:
    uid = parse_id(user_id, "user")
    with failure_message("Failed to fetch user"):
        user = await repo.get_user(uid)
    if user is None:
        raise NotFoundError(resource="User", resource_id=uid)
    return user


@router.get("/users/{user_id}/orders", response_model=Page[OrderSummary], responses=ERRORS)
async def get_user_orders(
    user_id: str,
    page: PageRequest = Depends(pagination),
    repo: CatalogRepository = Depends(get_catalog_repository),
) -> Page[OrderSummary]:
    uid = parse_id(user_id, "user")
    with failure_message("Failed to fetch user orders"):
        if not await repo.user_exists(uid):
            raise NotFoundError(resource="User", resource_id=uid)
        return await repo.user_orders(uid, page)

