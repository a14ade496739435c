"""FastAPI dependencies that hand route handlers a repository bound to the app's database."""

from fastapi import Depends

from catalog_api.database import Database, get_database
from catalog_api.services.catalog_repository import CatalogRepository
from catalog_api.services.lore_repository import LoreRepository


def get_lore_repository(db: Database = Depends(get_database)) -> LoreRepository:
    return LoreRepository(db)


def get_catalog_repository(db: Database = Depends(get_database)) -> CatalogRepository:
    return CatalogRepository(db)
